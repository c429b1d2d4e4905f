"""Streaming parser for slog-style ``key=value`` text logs."""

from __future__ import annotations

from .core import (
    EndOfInput,
    KeyValue,
    ParseError,
    ParserConfig,
    Record,
    SlogParseError,
    TextParser,
    ZERO_TIME,
)
from .core.log_service import aiter_records, get_records, iter_records, open_parser

__all__ = [
    "ZERO_TIME",
    "EndOfInput",
    "KeyValue",
    "ParseError",
    "ParserConfig",
    "Record",
    "SlogParseError",
    "TextParser",
    "aiter_records",
    "get_records",
    "iter_records",
    "open_parser",
]
