"""Shared pytest fixtures."""

import pytest

from blockc import Lexer, Parser, CodeGenerator


@pytest.fixture
def parse_source():
    """Lex and parse source text, returning the parser so warnings stay reachable."""
    def _parse(source):
        parser = Parser(Lexer(source).tokenize())
        parser.parse()
        return parser
    return _parse


@pytest.fixture
def generate():
    """Source text straight to JavaScript, without the facade."""
    def _generate(source):
        program = Parser(Lexer(source).tokenize()).parse()
        return CodeGenerator(program).generate()
    return _generate


@pytest.fixture
def scripts_section():
    """Only the part of the output below the `// Scripts` marker."""
    def _section(js):
        return js.split('// Scripts\n', 1)[1]
    return _section
