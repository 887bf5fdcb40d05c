from blockc import Lexer, Parser, CodeGenerator

# lexer -> parser -> codegen


if __name__ == '__main__':
    code = r'''
    var score = 0
    list colors ["red" "green"]

    when flagClicked
        say "Hello!" 2
        repeat 4 {
            move 10
            wait 0.5
        }
        change score 1
        if (score) {
            say score
        }

    when keyPressedspace
        move -10
    '''
    lex = Lexer(code)
    par = Parser(lex.tokenize())
    program = par.parse()
    gen = CodeGenerator(program)
    print(gen.generate())
