"""Error types raised while reading and scanning structured text logs."""

from __future__ import annotations


class SlogParseError(ValueError):
    """Base class for malformed input."""


class CutError(SlogParseError):
    """A single key or value token could not be cut from the line."""


class LineTooLongError(SlogParseError):
    """The line reader hit its maximum line size before a newline."""


class LineSyntaxError(SlogParseError):
    """Structural failure while splitting one line into key/value pairs."""

    def __init__(self, cause: str, key_index: int) -> None:
        super().__init__(cause)
        self.cause = cause
        self.key_index = key_index


class ParseError(SlogParseError):
    """Structural failure tagged with the line number and raw line text."""

    def __init__(self, line_no: int, line: str, cause: str) -> None:
        super().__init__(f"line {line_no}: {cause}: {line}")
        self.line_no = line_no
        self.line = line
        self.cause = cause


class EndOfInput(EOFError):
    """The underlying stream has no more lines. Not a parse failure."""


def line_error(line_no: int, line: str, exc: LineSyntaxError) -> ParseError:
    """Wrap a scanner failure with its position in the stream."""
    return ParseError(line_no, line, exc.cause)
