import logging

from .lexer import Lexer, tokenize
from .parser import Parser, parse, Program, Script, BlockNode, BlockKind, NumberValue, TextValue
from .codegen import CodeGenerator
from .compiler import Compiler, CompileResult, compile_source, handle_request
from .dump import dump_program, load_program
from .exceptions import CompilerError, CompileWarning, ErrorCode, WarningCode

__version__ = '0.1.0'

logging.getLogger(__name__).addHandler(logging.NullHandler())
