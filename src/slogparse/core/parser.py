"""Pull-based parser for text logs written by ``slog.TextHandler``.

Typical use::

    with open("app.log", "rb") as fp:
        parser = TextParser(fp)
        for record in parser:
            print(record.get("level"), record.get("msg"))
"""

from __future__ import annotations

import os
from collections.abc import Callable, Iterator
from dataclasses import dataclass, replace
from typing import IO, AnyStr

from .errors import EndOfInput, LineSyntaxError, line_error
from .models import KeyValue, Record
from .reader import DEFAULT_MAX_LINE_BYTES, LineReader
from .scanner import scan_line

_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off")


@dataclass(frozen=True, slots=True)
class ParserConfig:
    # Share one backing list between successive records. A returned Record
    # is then only valid until the next call to TextParser.next().
    reuse_record: bool = False
    encoding: str = "utf-8"
    decode_errors: str = "replace"
    max_line_bytes: int = DEFAULT_MAX_LINE_BYTES


def resolve_parser_config(cfg: ParserConfig | None) -> ParserConfig:
    """Return config with optional env overrides applied.

    SLOGPARSE_REUSE_RECORD only applies when no config was passed; an
    explicit ParserConfig always decides whether records are shared.
    """
    explicit = cfg is not None
    if cfg is None:
        cfg = ParserConfig()

    env = os.getenv("SLOGPARSE_MAX_LINE_BYTES")
    if env:
        try:
            value = int(env)
        except ValueError as exc:
            raise ValueError("SLOGPARSE_MAX_LINE_BYTES must be an integer") from exc
        if value < 1:
            raise ValueError("SLOGPARSE_MAX_LINE_BYTES must be >= 1")
        cfg = replace(cfg, max_line_bytes=value)

    env = os.getenv("SLOGPARSE_REUSE_RECORD")
    if env and not explicit:
        flag = env.strip().lower()
        if flag in _TRUE:
            cfg = replace(cfg, reuse_record=True)
        elif flag in _FALSE:
            cfg = replace(cfg, reuse_record=False)
        else:
            raise ValueError("SLOGPARSE_REUSE_RECORD must be a boolean")

    return cfg


class TextParser:
    """Read one Record per line from a byte stream.

    End of input is signalled with EndOfInput and is sticky, as is any error
    raised by the stream. A malformed line raises ParseError; the line has
    been consumed, so a later call continues with the next one.
    """

    def __init__(
        self,
        stream: IO[AnyStr],
        config: ParserConfig | None = None,
        *,
        accept: Callable[[str], bool] | None = None,
    ) -> None:
        self._config = resolve_parser_config(config)
        # Lines rejected by accept are counted but never scanned.
        self._accept = accept
        self._reuse: list[KeyValue] | None = [] if self._config.reuse_record else None
        self._reader = self._new_reader(stream)
        self._line_number = 0
        self._last_record = Record()
        self._terminal: BaseException | None = None

    def _new_reader(self, stream: IO[AnyStr]) -> LineReader:
        return LineReader(
            stream,
            encoding=self._config.encoding,
            decode_errors=self._config.decode_errors,
            max_line_bytes=self._config.max_line_bytes,
        )

    @property
    def config(self) -> ParserConfig:
        return self._config

    @property
    def line_number(self) -> int:
        """Number of physical lines read since construction or reset."""
        return self._line_number

    @property
    def last_record(self) -> Record:
        return self._last_record

    def next(self) -> Record:
        """Parse and return the next line.

        Raises EndOfInput when the stream is exhausted and ParseError when the
        line is malformed.
        """
        if self._terminal is not None:
            raise self._terminal

        while True:
            try:
                line = self._reader.read_line()
            except Exception as exc:
                self._terminal = exc
                raise
            if line is None:
                self._terminal = EndOfInput("end of input")
                raise self._terminal

            self._line_number += 1
            if self._accept is None or self._accept(line):
                break

        try:
            items = scan_line(line, self._reuse)
        except LineSyntaxError as exc:
            raise line_error(self._line_number, line, exc) from exc

        self._last_record = Record(items)
        return self._last_record

    def reset(self, stream: IO[AnyStr]) -> None:
        """Discard buffered state and continue reading from ``stream``.

        The previous stream is left open.
        """
        self._reader = self._new_reader(stream)
        self._line_number = 0
        self._last_record = Record()
        self._terminal = None

    def __iter__(self) -> Iterator[Record]:
        return self

    def __next__(self) -> Record:
        try:
            return self.next()
        except EndOfInput:
            raise StopIteration from None
