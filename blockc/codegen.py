import json
import logging
from typing import List, Optional, Set

from .exceptions import CompileWarning, WarningCode
from .lexer import QUOTES
from .logs import resolve_logger
from .parser import BlockKind, BlockNode, Program, Value, NumberValue, T_Argument


INDENT = '    '

SPRITE = 'scratchRuntime.sprites[scratchRuntime.currentSprite]'

RUNTIME_PREAMBLE = '''\
// Generated Scratch-like JavaScript code
// Runtime support functions
const scratchRuntime = {
    sprites: {},
    stage: { width: 480, height: 360 },
    currentSprite: 'Sprite1',
    init: function() {
        this.sprites.Sprite1 = {
            x: 0,
            y: 0,
            direction: 90,
            costumes: ['default'],
            currentCostume: 0,
            visible: true,
            say: function(message, seconds) {
                console.log(`${scratchRuntime.currentSprite} says: ${message}`);
                if (seconds) {
                    setTimeout(() => console.log(`${scratchRuntime.currentSprite} stopped saying`), seconds * 1000);
                }
            },
            move: function(steps) {
                const radians = this.direction * Math.PI / 180;
                this.x += steps * Math.cos(radians);
                this.y += steps * Math.sin(radians);
                console.log(`${scratchRuntime.currentSprite} moved to (${this.x}, ${this.y})`);
            }
        };
    }
};

'''

RUNTIME_INIT = 'scratchRuntime.init();\n\n'


def format_number(value: float) -> str:
    # JavaScript prints integral numbers without a fractional part
    if value == int(value):
        return str(int(value))
    return repr(value)


def format_value(value: Value) -> str:
    if isinstance(value, NumberValue):
        return format_number(value.value)
    return json.dumps(value.value, ensure_ascii=False)


class CodeGenerator:
    def __init__(self, program: Program, logger: Optional[logging.Logger] = None):
        self.program: Program = program
        self.logger: logging.Logger = resolve_logger(logger)
        self.output: List[str] = list()
        self.indent: int = 0
        self.loop_depth: int = 0
        self.visited: Set[int] = set()
        self.warnings: List[CompileWarning] = list()

    def generate(self) -> str:
        self.output = [RUNTIME_PREAMBLE, RUNTIME_INIT]
        self.indent = 0
        self.loop_depth = 0
        self.visited = set()
        self.warnings = list()

        self.write('// Variables\n')
        for name, value in self.program.variables.items():
            self.write(f'let {name} = {format_value(value)};\n')
        self.write('\n')

        self.write('// Lists\n')
        for name, values in self.program.lists.items():
            self.write(f'let {name} = [{", ".join(map(format_value, values))}];\n')
        self.write('\n')

        self.write('// Scripts\n')
        for script in self.program.scripts:
            self.gen_chain(script.root)

        return ''.join(self.output)

    def write(self, code: str):
        self.output.append(INDENT * self.indent + code)

    def warn(self, warning_code: WarningCode, message: str):
        self.logger.debug('%s: %s', warning_code.value, message)
        self.warnings.append(CompileWarning(warning_code, message))

    def gen_chain(self, index: Optional[int]):
        for block in self.program.walk(index, self.visited):
            self.gen_block(block)

    def gen_body(self, block: BlockNode):
        # the body is emitted here only, never again as a following statement
        self.indent += 1
        self.gen_chain(block.body)
        self.indent -= 1

    def gen_block(self, block: BlockNode):
        if block.kind == BlockKind.EVENT and block.name == 'when':
            self.gen_event(block)
        elif block.kind == BlockKind.MOTION and block.name == 'move':
            self.write(f'{SPRITE}.move({self.argument(block, 0)});\n')
        elif block.kind == BlockKind.LOOKS and block.name == 'say':
            message = self.argument(block, 0)
            if len(block.args) > 1:
                self.write(f'{SPRITE}.say({message}, {self.format_arg(block.args[1])});\n')
            else:
                self.write(f'{SPRITE}.say({message});\n')
        elif block.kind == BlockKind.CONTROL and block.name in ('wait', 'repeat', 'if'):
            self.gen_control(block)
        elif block.kind == BlockKind.VARIABLES and block.name in ('set', 'change'):
            self.gen_variables(block)
        elif block.kind == BlockKind.OPERATORS and block.name == 'expression':
            self.write(f'{self.gen_expression(block)};\n')
        else:
            self.warn(WarningCode.UNSUPPORTED_BLOCK, f'{block.kind.value} {block.name!r}')
            self.write(f'// Unsupported block: {block.name}\n')

    def gen_event(self, block: BlockNode):
        event = block.args[0] if block.args else ''
        if event == 'flagClicked':
            self.write('// When green flag clicked\n')
            self.write("document.addEventListener('DOMContentLoaded', async function() {\n")
            self.gen_body(block)
            self.write('});\n\n')
        elif isinstance(event, str) and 'keyPressed' in event:
            key = event.replace('keyPressed', '')
            if not key and len(block.args) > 1:
                # `when keyPressed space`
                key = self.key_name(block.args[1])
            self.write(f'// When {key} key pressed\n')
            self.write("document.addEventListener('keydown', async function(event) {\n")
            self.indent += 1
            self.write(f'if (event.key.toLowerCase() === {json.dumps(key.lower(), ensure_ascii=False)}) {{\n')
            self.gen_body(block)
            self.write('}\n')
            self.indent -= 1
            self.write('});\n\n')
        else:
            self.warn(WarningCode.UNSUPPORTED_EVENT, repr(event))
            self.write(f'// Unsupported event: {self.format_arg(event)}\n')

    def gen_control(self, block: BlockNode):
        if block.name == 'wait':
            seconds = self.argument(block, 0)
            self.write(f'await new Promise(resolve => setTimeout(resolve, {seconds} * 1000));\n')
        elif block.name == 'repeat':
            count = self.argument(block, 0)
            # DSL identifiers start with a letter, so `_i0` never hides a user variable
            counter = f'_i{self.loop_depth}'
            self.write(f'for (let {counter} = 0; {counter} < {count}; {counter}++) {{\n')
            self.loop_depth += 1
            self.gen_body(block)
            self.loop_depth -= 1
            self.write('}\n')
        elif block.name == 'if':
            condition = self.argument(block, 0)
            self.write(f'if ({condition}) {{\n')
            self.gen_body(block)
            self.write('}\n')

    def gen_variables(self, block: BlockNode):
        if not block.args:
            self.warn(WarningCode.MISSING_ARGUMENT, f'{block.name!r} needs a variable name')
            self.write(f'// {block.name}: missing variable name\n')
            return
        name = self.key_name(block.args[0])
        value = self.argument(block, 1)
        operator = '=' if block.name == 'set' else '+='
        self.write(f'{name} {operator} {value};\n')

    def gen_expression(self, block: BlockNode) -> str:
        return '(' + ' '.join(map(self.format_arg, block.args)) + ')'

    def argument(self, block: BlockNode, index: int) -> str:
        if index < len(block.args):
            return self.format_arg(block.args[index])
        self.warn(WarningCode.MISSING_ARGUMENT, f'{block.name!r} argument {index + 1}')
        return 'undefined'

    def key_name(self, arg: T_Argument) -> str:
        # bare name with any quotes removed
        if isinstance(arg, str):
            return arg.strip(''.join(QUOTES))
        return self.format_arg(arg)

    def format_arg(self, arg: T_Argument) -> str:
        if isinstance(arg, (int, float)) and not isinstance(arg, bool):
            return format_number(arg)
        elif isinstance(arg, str):
            # quoted literals pass through, anything else is a variable or a raw fragment
            return arg
        elif isinstance(arg, BlockNode) and arg.kind == BlockKind.OPERATORS and arg.name == 'expression':
            return self.gen_expression(arg)
        return f'"{arg}"'
