"""Buffered line reader over a byte stream."""

from __future__ import annotations

from typing import IO, AnyStr

from .errors import LineTooLongError

DEFAULT_MAX_LINE_BYTES = 64 * 1024


class LineReader:
    """Return one physical line per read with its line terminator removed.

    Accepts binary streams (decoded with ``encoding``) and text streams
    (used as-is). I/O errors from the stream propagate unchanged.
    """

    def __init__(
        self,
        stream: IO[AnyStr],
        *,
        encoding: str = "utf-8",
        decode_errors: str = "replace",
        max_line_bytes: int = DEFAULT_MAX_LINE_BYTES,
    ) -> None:
        if max_line_bytes < 1:
            raise ValueError("max_line_bytes must be >= 1")
        self._stream = stream
        self._encoding = encoding
        self._decode_errors = decode_errors
        self._max_line_bytes = max_line_bytes

    def read_line(self) -> str | None:
        """Return the next line, or None once the stream is exhausted."""
        # One extra unit for the newline of a line exactly at the limit.
        raw = self._stream.readline(self._max_line_bytes + 1)
        if not raw:
            return None

        text = isinstance(raw, str)
        if raw.endswith("\n" if text else b"\n"):
            raw = raw[:-1]
        elif len(raw) > self._max_line_bytes:
            raise LineTooLongError(f"line exceeds {self._max_line_bytes} bytes")
        if raw.endswith("\r" if text else b"\r"):
            raw = raw[:-1]

        if text:
            return raw
        return raw.decode(self._encoding, errors=self._decode_errors)
