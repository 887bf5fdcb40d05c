"""Tests for the compiler facade and the request boundary."""

import logging

import pytest

from blockc import compiler as compiler_module
from blockc.compiler import Compiler, CompileResult, GENERIC_ERROR, compile_source, handle_request
from blockc.exceptions import WarningCode


class TestCompile:
    def test_success(self):
        result = compile_source('when flagClicked move 10')
        assert result.ok
        assert result.error is None
        assert 'move(10);' in result.js

    def test_empty_source_still_yields_runtime(self):
        result = compile_source('')
        assert result.ok
        assert result.js.startswith('// Generated Scratch-like JavaScript code')
        assert result.warnings == []

    def test_deterministic(self):
        source = 'var a = 1 list l [1 "x"] when flagClicked repeat 2 { move 1 wait 1 } say "hi" 2'
        assert compile_source(source).js == compile_source(source).js

    def test_compiler_instance_is_reusable(self):
        compiler = Compiler()
        first = compiler.compile('when flagClicked move 1')
        second = compiler.compile('when flagClicked move 1')
        assert first.js == second.js

    def test_stray_token_contributes_nothing(self):
        clean = compile_source('when flagClicked move 10')
        noisy = compile_source('stray when flagClicked move 10')
        assert noisy.ok
        assert noisy.js == clean.js
        assert [w.code for w in noisy.warnings] == [WarningCode.SKIPPED_TOKEN]

    def test_stray_symbol_contributes_nothing(self):
        clean = compile_source('when flagClicked move 10')
        noisy = compile_source('# when flagClicked move 10')
        assert noisy.js == clean.js
        assert [w.code for w in noisy.warnings] == [WarningCode.DROPPED_CHARACTER]

    def test_variable_declaration_and_assignment(self):
        js = compile_source('var score = 5\nwhen flagClicked\n    set score 10').js
        assert 'let score = 5;' in js
        assert js.index('let score = 5;') < js.index('    score = 10;')

    def test_list_declaration(self):
        assert 'let items = [1, 2, 3];' in compile_source('list items [1, 2, 3]').js

    def test_warnings_from_every_stage(self):
        result = compile_source('x when flagClicked move ; set')
        assert result.ok
        codes = [w.code for w in result.warnings]
        assert codes == [
            WarningCode.DROPPED_CHARACTER,
            WarningCode.SKIPPED_TOKEN,
            WarningCode.MISSING_ARGUMENT,
            WarningCode.MISSING_ARGUMENT,
        ]

    def test_non_text_source_is_an_error(self):
        result = Compiler().compile(123)
        assert not result.ok
        assert result.js is None
        assert result.error == GENERIC_ERROR
        assert result.to_response() == {'error': 'Compilation failed.'}

    def test_unexpected_failure_is_converted(self, monkeypatch):
        def broken(self):
            raise RuntimeError('boom')

        monkeypatch.setattr(compiler_module.CodeGenerator, 'generate', broken)
        result = compile_source('when flagClicked move 1')
        assert result.error == GENERIC_ERROR
        assert result.js is None


class TestLogging:
    def test_silent_by_default(self, caplog):
        with caplog.at_level(logging.DEBUG):
            compile_source(None)
        assert caplog.records == []

    def test_explicit_logger_receives_failures(self, caplog):
        logger = logging.getLogger('test.blockc')
        with caplog.at_level(logging.DEBUG, logger='test.blockc'):
            result = Compiler(logger).compile(None)
        assert not result.ok
        assert any(r.levelno == logging.ERROR and r.exc_info for r in caplog.records)

    def test_explicit_logger_receives_steps(self, caplog):
        logger = logging.getLogger('test.blockc')
        with caplog.at_level(logging.DEBUG, logger='test.blockc'):
            Compiler(logger).compile('when flagClicked move 1')
        messages = [r.getMessage() for r in caplog.records if r.name == 'test.blockc']
        assert 'tokenized 4 tokens' in messages
        assert 'parsed 1 scripts, 0 variables, 0 lists' in messages


class TestCompileResult:
    def test_exactly_one_outcome(self):
        with pytest.raises(ValueError):
            CompileResult()
        with pytest.raises(ValueError):
            CompileResult(js='x', error='y')

    def test_to_response(self):
        assert CompileResult(js='code').to_response() == {'js': 'code'}
        assert CompileResult(error='bad').to_response() == {'error': 'bad'}


class TestHandleRequest:
    def test_success(self):
        response = handle_request({'code': 'when flagClicked move 10'})
        assert list(response) == ['js']
        assert 'move(10);' in response['js']

    @pytest.mark.parametrize('payload', [None, {}, {'code': 5}, ['code']])
    def test_bad_request(self, payload):
        response = handle_request(payload)
        assert list(response) == ['error']


class TestStageLogging:
    def test_stage_warnings_are_silent_by_default(self, caplog):
        with caplog.at_level(logging.DEBUG):
            result = compile_source('x when flagClicked move ; set')
        assert len(result.warnings) == 4
        assert caplog.records == []

    def test_stage_warnings_reach_explicit_logger(self, caplog):
        logger = logging.getLogger('test.blockc.stages')
        with caplog.at_level(logging.DEBUG, logger='test.blockc.stages'):
            Compiler(logger).compile('x when flagClicked move ; set')
        messages = [r.getMessage() for r in caplog.records if r.name == 'test.blockc.stages']
        assert "Dropped character: ';'" in messages
        assert "Skipped token: 'x'" in messages
        assert "Missing argument: 'move' argument 1" in messages
