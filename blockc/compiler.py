import logging
from typing import Any, Dict, List, Optional

from .codegen import CodeGenerator
from .exceptions import CompileWarning, ErrorCode
from .lexer import Lexer
from .logs import resolve_logger
from .parser import Parser

GENERIC_ERROR = f'{ErrorCode.COMPILATION_FAILED.value}.'


class CompileResult:
    def __init__(self, js: Optional[str] = None, error: Optional[str] = None,
                 warnings: List[CompileWarning] = None):
        if (js is None) == (error is None):
            raise ValueError('CompileResult takes exactly one of js or error')
        self.js: Optional[str] = js
        self.error: Optional[str] = error
        if warnings is None:
            warnings = list()
        self.warnings: List[CompileWarning] = warnings

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_response(self) -> Dict[str, str]:
        if self.ok:
            return {'js': self.js}
        return {'error': self.error}

    def __repr__(self):
        if self.ok:
            return f'CompileResult(js=<{len(self.js)} chars>, warnings={len(self.warnings)})'
        return f'CompileResult(error={self.error!r})'


class Compiler:
    """Source text -> JavaScript text: lexer, parser, code generator.

    Every call builds fresh stage objects, so one ``Compiler`` can be shared.
    Nothing is logged unless a ``logger`` is given.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger: logging.Logger = resolve_logger(logger)

    def compile(self, source: str) -> CompileResult:
        try:
            lexer = Lexer(source, self.logger)
            tokens = lexer.tokenize()
            self.logger.debug('tokenized %d tokens', len(tokens))

            parser = Parser(tokens, self.logger)
            program = parser.parse()
            self.logger.debug('parsed %d scripts, %d variables, %d lists',
                              len(program.scripts), len(program.variables), len(program.lists))

            generator = CodeGenerator(program, self.logger)
            js = generator.generate()
        except Exception:
            self.logger.exception('compilation failed')
            return CompileResult(error=GENERIC_ERROR)

        warnings = lexer.warnings + parser.warnings + generator.warnings
        for warning in warnings:
            self.logger.info('warning: %s', warning)
        return CompileResult(js=js, warnings=warnings)


def compile_source(source: str, logger: Optional[logging.Logger] = None) -> CompileResult:
    return Compiler(logger).compile(source)


def handle_request(payload: Any, logger: Optional[logging.Logger] = None) -> Dict[str, str]:
    if not isinstance(payload, dict) or not isinstance(payload.get('code'), str):
        return {'error': 'Request must carry a "code" string.'}
    return compile_source(payload['code'], logger).to_response()
