import logging
import math
import re
from enum import Enum
from typing import Dict, Iterator, List, Optional, Set, Union

from .exceptions import CodeGeneratorError, ParserError, ErrorCode, CompileWarning, WarningCode
from .lexer import QUOTES
from .logs import resolve_logger



class BlockKind(Enum):
    EVENT = 'event'
    MOTION = 'motion'
    LOOKS = 'looks'
    CONTROL = 'control'
    VARIABLES = 'variables'
    OPERATORS = 'operators'
    CUSTOM = 'custom'


BLOCK_KINDS = {
    'when': BlockKind.EVENT,
    'move': BlockKind.MOTION,
    'say': BlockKind.LOOKS,
    'wait': BlockKind.CONTROL,
    'repeat': BlockKind.CONTROL,
    'if': BlockKind.CONTROL,
    'set': BlockKind.VARIABLES,
    'change': BlockKind.VARIABLES,
}

# blocks whose outgoing chain is a body rather than the following statement
SCOPE_BLOCKS = ('when', 'repeat', 'if')


def is_block_start(token: Optional[str]) -> bool:
    return token in BLOCK_KINDS


# longest leading float, the way parseFloat reads "1.2.3" as 1.2
NUMBER_PREFIX = re.compile(r'[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?')


def parse_number(token: str) -> Optional[float]:
    match = NUMBER_PREFIX.match(token.lstrip())
    if match is None:
        return None
    value = float(match.group())
    return value if math.isfinite(value) else None


def is_number(token: str) -> bool:
    return parse_number(token) is not None


def parse_literal(token: str) -> Union[float, str]:
    number = parse_number(token)
    return token if number is None else number


class Value:
    def __init__(self, value: Union[float, str]):
        self.value: Union[float, str] = value

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return self.value == other.value

    def __repr__(self):
        return f'{self.__class__.__name__}({self.value!r})'


class NumberValue(Value):
    def __init__(self, value: float):
        super().__init__(float(value))


class TextValue(Value):
    def __init__(self, value: str):
        super().__init__(value)


def parse_value(token: str) -> Value:
    number = parse_number(token)
    if number is not None:
        return NumberValue(number)
    return TextValue(token.strip(''.join(QUOTES)))


class BlockNode:
    def __init__(self, kind: BlockKind, name: str, args: List['T_Argument'] = None,
                 body: Optional[int] = None, next: Optional[int] = None):
        self.kind: BlockKind = kind
        self.name: str = name
        if args is None:
            args = list()
        self.args: List[T_Argument] = args
        self.body: Optional[int] = body
        self.next: Optional[int] = next

    def __eq__(self, other):
        if not isinstance(other, BlockNode):
            return NotImplemented
        return (self.kind, self.name, self.args, self.body, self.next) == \
               (other.kind, other.name, other.args, other.body, other.next)

    def __repr__(self):
        return f'BlockNode({self.kind.value}, {self.name!r}, {self.args!r}, body={self.body!r}, next={self.next!r})'


T_Argument = Union[float, str, BlockNode]


def expression_node(tokens: List[Union[float, str]]) -> BlockNode:
    return BlockNode(BlockKind.OPERATORS, 'expression', tokens)


class Script:
    def __init__(self, root: int):
        self.root: int = root

    def __eq__(self, other):
        if not isinstance(other, Script):
            return NotImplemented
        return self.root == other.root

    def __repr__(self):
        return f'Script({self.root!r})'


class Program:
    def __init__(self):
        self.blocks: List[BlockNode] = list()
        self.scripts: List[Script] = list()
        self.variables: Dict[str, Value] = dict()
        self.lists: Dict[str, List[Value]] = dict()

    def add_block(self, block: BlockNode) -> int:
        self.blocks.append(block)
        return len(self.blocks) - 1

    def get_block(self, index: int) -> BlockNode:
        if not isinstance(index, int) or not 0 <= index < len(self.blocks):
            raise CodeGeneratorError(error_code=ErrorCode.UNKNOWN_BLOCK,
                                     message=f'No block with id {index!r}')
        return self.blocks[index]

    def walk(self, index: Optional[int], visited: Set[int] = None) -> Iterator[BlockNode]:
        """Yield the blocks of the ``next`` chain starting at ``index``.

        ``visited`` may be shared between calls so that a block reachable
        twice, through any mix of body and next links, is reported.
        """
        if visited is None:
            visited = set()
        while index is not None:
            if index in visited:
                raise CodeGeneratorError(error_code=ErrorCode.CYCLIC_CHAIN,
                                         message=f'Block {index} is linked more than once')
            visited.add(index)
            block = self.get_block(index)
            yield block
            index = block.next

    def __eq__(self, other):
        if not isinstance(other, Program):
            return NotImplemented
        return self.blocks == other.blocks and self.scripts == other.scripts and \
            list(self.variables.items()) == list(other.variables.items()) and \
            list(self.lists.items()) == list(other.lists.items())

    def __repr__(self):
        return f'Program(scripts={self.scripts!r}, variables={self.variables!r}, lists={self.lists!r})'


class Parser:
    def __init__(self, tokens: List[str], logger: Optional[logging.Logger] = None):
        for token in tokens:
            if not isinstance(token, str) or not token:
                raise ParserError(error_code=ErrorCode.INVALID_TOKEN,
                                  message=f'Expect a non-empty str token, but {token!r} was given')
        self.tokens: List[str] = tokens
        self.logger: logging.Logger = resolve_logger(logger)
        self.position: int = 0
        self.brace_depth: int = 0
        self.program: Program = Program()
        self.warnings: List[CompileWarning] = list()

    @property
    def current_token(self) -> Optional[str]:
        if self.position < len(self.tokens):
            return self.tokens[self.position]
        return None

    def advance_token(self):
        self.position += 1

    def warn(self, warning_code: WarningCode, message: str):
        self.logger.debug('%s: %s', warning_code.value, message)
        self.warnings.append(CompileWarning(warning_code, message))

    def parse(self) -> Program:
        while self.current_token is not None:
            if self.current_token == 'when':
                self.program.scripts.append(self.parse_script())
            elif self.current_token == 'var':
                self.parse_variable_declaration()
            elif self.current_token == 'list':
                self.parse_list_declaration()
            else:
                self.warn(WarningCode.SKIPPED_TOKEN, repr(self.current_token))
                self.advance_token()
        return self.program

    def parse_script(self) -> Script:
        return Script(self.parse_chain(allow_event=True))

    def parse_chain(self, allow_event: bool = False) -> Optional[int]:
        # a chain never continues into another `when`, that starts a new script
        head = None
        previous = None
        while True:
            index = self.parse_block(allow_event=allow_event and head is None)
            if index is None:
                break
            if previous is None:
                head = index
            else:
                self.program.blocks[previous].next = index
            previous = index
        return head

    def parse_block(self, allow_event: bool = False) -> Optional[int]:
        name = self.current_token
        if not is_block_start(name) or (name == 'when' and not allow_event):
            return None
        self.advance_token()
        is_scope = name in SCOPE_BLOCKS
        block = BlockNode(BLOCK_KINDS[name], name, self.parse_arguments(is_scope))
        index = self.program.add_block(block)
        if is_scope:
            if self.current_token == '{':
                block.body = self.parse_braced_body(name)
            else:
                # without braces the rest of the chain is the body
                block.body = self.parse_chain()
        return index

    def parse_braced_body(self, name: str) -> Optional[int]:
        self.advance_token()
        self.brace_depth += 1
        body = self.parse_chain()
        self.brace_depth -= 1
        if self.current_token == '}':
            self.advance_token()
        else:
            self.warn(WarningCode.UNCLOSED_BODY, f'{name!r} body is missing "}}"')
        return body

    def parse_arguments(self, is_scope: bool) -> List[T_Argument]:
        args = list()
        while self.current_token is not None:
            token = self.current_token
            if is_block_start(token) or (is_scope and token == '{') or (self.brace_depth and token == '}'):
                break
            if token == '(':
                args.append(self.parse_expression())
            else:
                args.append(parse_literal(token))
                self.advance_token()
        return args

    def parse_expression(self) -> BlockNode:
        # one level only, an inner '(' is kept as a raw token
        self.advance_token()
        tokens = list()
        while self.current_token is not None and self.current_token != ')':
            token = self.current_token
            tokens.append(parse_literal(token))
            self.advance_token()
        if self.current_token is None:
            self.warn(WarningCode.UNTERMINATED_EXPRESSION, 'missing ")"')
        else:
            self.advance_token()
        return expression_node(tokens)

    def parse_variable_declaration(self):
        self.advance_token()
        if self.current_token is None:
            self.warn(WarningCode.INCOMPLETE_DECLARATION, "'var' without a name")
            return
        name = self.current_token
        self.advance_token()
        value = NumberValue(0)
        if self.current_token == '=':
            self.advance_token()
            if self.current_token is None:
                self.warn(WarningCode.INCOMPLETE_DECLARATION, f'{name!r} has no value after "="')
            else:
                value = parse_value(self.current_token)
                self.advance_token()
        elif self.current_token is not None and \
                (is_number(self.current_token) or self.current_token[0] in QUOTES):
            # the lexer drops '=', so `var x = 5` arrives as `var x 5`
            value = parse_value(self.current_token)
            self.advance_token()
        self.program.variables[name] = value

    def parse_list_declaration(self):
        self.advance_token()
        if self.current_token is None:
            self.warn(WarningCode.INCOMPLETE_DECLARATION, "'list' without a name")
            return
        name = self.current_token
        self.advance_token()
        values = list()
        if self.current_token == '[':
            self.advance_token()
            while self.current_token is not None and self.current_token != ']':
                values.append(parse_value(self.current_token))
                self.advance_token()
            if self.current_token is None:
                self.warn(WarningCode.INCOMPLETE_DECLARATION, f'{name!r} is missing "]"')
            else:
                self.advance_token()
        self.program.lists[name] = values


def parse(tokens: List[str], logger: Optional[logging.Logger] = None) -> Program:
    return Parser(tokens, logger).parse()
