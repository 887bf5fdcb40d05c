from enum import Enum


class ErrorCode(Enum):
    # LexerError
    INVALID_SOURCE = 'Invalid source'

    # ParserError
    INVALID_TOKEN = 'Invalid token'

    # CodeGeneratorError
    UNKNOWN_BLOCK = 'Unknown block'
    CYCLIC_CHAIN = 'Cyclic chain'

    # Compiler
    COMPILATION_FAILED = 'Compilation failed'


class WarningCode(Enum):
    # Lexer
    DROPPED_CHARACTER = 'Dropped character'
    UNTERMINATED_STRING = 'Unterminated string'

    # Parser
    SKIPPED_TOKEN = 'Skipped token'
    INCOMPLETE_DECLARATION = 'Incomplete declaration'
    UNTERMINATED_EXPRESSION = 'Unterminated expression'
    UNCLOSED_BODY = 'Unclosed body'

    # CodeGenerator
    UNSUPPORTED_BLOCK = 'Unsupported block'
    UNSUPPORTED_EVENT = 'Unsupported event'
    MISSING_ARGUMENT = 'Missing argument'


class CompileWarning:
    def __init__(self, warning_code: WarningCode, message: str = ''):
        self.code: WarningCode = warning_code
        self.message: str = message

    def __eq__(self, other):
        if not isinstance(other, CompileWarning):
            return NotImplemented
        return self.code == other.code and self.message == other.message

    def __str__(self):
        return f'{self.code.value}: {self.message}'

    def __repr__(self):
        return f'CompileWarning({self.code.name}, {self.message!r})'


class CompilerError(Exception):
    def __init__(self, error_code: ErrorCode, message: str = ''):
        # prefix the message with the exception class name
        super().__init__(f'{self.__class__.__name__}: {error_code.value}: {message}')
        self.code: ErrorCode = error_code


class LexerError(CompilerError):
    pass


class ParserError(CompilerError):
    pass


class CodeGeneratorError(CompilerError):
    pass
