"""Core parsing: token cutting, line scanning, records and the stream parser."""

from __future__ import annotations

from .cutter import Mode, cut, find_closing_quote, is_escaped, unescape
from .durations import parse_duration, parse_duration_ns
from .errors import (
    CutError,
    EndOfInput,
    LineSyntaxError,
    LineTooLongError,
    ParseError,
    SlogParseError,
    line_error,
)
from .models import LOG_TIME_KEY, ZERO_TIME, KeyValue, Record
from .parser import ParserConfig, TextParser, resolve_parser_config
from .reader import DEFAULT_MAX_LINE_BYTES, LineReader
from .scanner import scan_line

__all__ = [
    "DEFAULT_MAX_LINE_BYTES",
    "LOG_TIME_KEY",
    "ZERO_TIME",
    "CutError",
    "EndOfInput",
    "KeyValue",
    "LineReader",
    "LineSyntaxError",
    "LineTooLongError",
    "Mode",
    "ParseError",
    "ParserConfig",
    "Record",
    "SlogParseError",
    "TextParser",
    "cut",
    "find_closing_quote",
    "is_escaped",
    "line_error",
    "parse_duration",
    "parse_duration_ns",
    "resolve_parser_config",
    "scan_line",
    "unescape",
]
