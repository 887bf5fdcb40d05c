import logging
from typing import List, Optional

from .exceptions import LexerError, ErrorCode, CompileWarning, WarningCode
from .logs import resolve_logger


WHITESPACE = (' ', '\t', '\r', '\n')
BRACKETS = ('(', ')', '[', ']', '{', '}')
QUOTES = ('"', "'")


def is_digit(char: Optional[str]) -> bool:
    return char is not None and '0' <= char <= '9'


def is_alpha(char: Optional[str]) -> bool:
    return char is not None and ('a' <= char <= 'z' or 'A' <= char <= 'Z')


class Lexer:
    def __init__(self, text: str, logger: Optional[logging.Logger] = None):
        if not isinstance(text, str):
            raise LexerError(error_code=ErrorCode.INVALID_SOURCE,
                             message=f'Expect str, but {type(text).__name__} was given')
        self.text: str = text.strip()
        self.position: int = 0
        self.current_char: Optional[str] = self.text[0] if self.text else None
        self.next_char: Optional[str] = self.text[1] if len(self.text) > 1 else None
        self.warnings: List[CompileWarning] = list()
        self.logger: logging.Logger = resolve_logger(logger)

    def advance_position(self):
        self.position += 1
        self.current_char = self.text[self.position] if self.position < len(self.text) else None
        self.next_char = self.text[self.position + 1] if self.position + 1 < len(self.text) else None

    def warn(self, warning_code: WarningCode, message: str):
        self.logger.debug('%s: %s', warning_code.value, message)
        self.warnings.append(CompileWarning(warning_code, message))

    def get_next_token(self) -> Optional[str]:
        while self.current_char is not None:
            if self.current_char in WHITESPACE:
                while self.current_char is not None and self.current_char in WHITESPACE:
                    self.advance_position()
                continue
            elif self.current_char in BRACKETS:
                value = self.current_char
                self.advance_position()
                return value
            elif self.current_char in QUOTES:
                # the token keeps both delimiters
                quote = self.current_char
                value = quote
                self.advance_position()
                while self.current_char is not None and self.current_char != quote:
                    value += self.current_char
                    self.advance_position()
                if self.current_char is None:
                    self.warn(WarningCode.UNTERMINATED_STRING, value)
                else:
                    value += quote
                    self.advance_position()
                return value
            elif is_digit(self.current_char) or (self.current_char == '-' and is_digit(self.next_char)):
                # digits and dots, no validation of the literal shape
                value = self.current_char
                self.advance_position()
                while is_digit(self.current_char) or self.current_char == '.':
                    value += self.current_char
                    self.advance_position()
                return value
            elif is_alpha(self.current_char):
                value = ''
                while is_alpha(self.current_char) or is_digit(self.current_char) or self.current_char == '_':
                    value += self.current_char
                    self.advance_position()
                return value
            else:
                self.warn(WarningCode.DROPPED_CHARACTER, repr(self.current_char))
                self.advance_position()
        return None

    def tokenize(self) -> List[str]:
        tokens = list()
        token = self.get_next_token()
        while token is not None:
            tokens.append(token)
            token = self.get_next_token()
        return tokens


def tokenize(text: str, logger: Optional[logging.Logger] = None) -> List[str]:
    return Lexer(text, logger).tokenize()
