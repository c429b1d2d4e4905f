from __future__ import annotations

import gzip
from collections.abc import Callable, Sequence
from pathlib import Path

import pytest


def _needs_quote(s: str) -> bool:
    if not s:
        return True
    return any(c in ' ="' or not c.isprintable() for c in s)


def _quote(s: str) -> str:
    out = []
    for c in s:
        if c in ('"', "\\"):
            out.append("\\" + c)
        elif c == "\n":
            out.append("\\n")
        elif c == "\t":
            out.append("\\t")
        elif c == "\r":
            out.append("\\r")
        elif not c.isprintable():
            out.append(f"\\u{ord(c):04x}")
        else:
            out.append(c)
    return '"' + "".join(out) + '"'


def format_pairs(pairs: Sequence[tuple[str, str]]) -> str:
    """Render pairs the way slog.TextHandler does."""
    parts = []
    for key, value in pairs:
        k = _quote(key) if _needs_quote(key) else key
        v = _quote(value) if _needs_quote(value) else value
        parts.append(f"{k}={v}")
    return " ".join(parts)


@pytest.fixture
def format_line() -> Callable[[Sequence[tuple[str, str]]], str]:
    return format_pairs


@pytest.fixture
def write_slog() -> Callable[[Path], None]:
    def _write(path: Path) -> None:
        lines = [
            "time=2025-12-30T08:12:01.250+01:00 level=INFO msg=Hello name=World",
            "time=2025-12-30T08:12:03.000+01:00 level=WARN msg=\"retrying request\" attempt=2 backoff=250ms",
            "time=2025-12-30T08:12:04.500+01:00 level=ERROR msg=\"upstream timeout\" route=/api/v1/items",
        ]
        data = "\n".join(lines) + "\n"
        if path.suffix == ".gz":
            with gzip.open(path, "wt", encoding="utf-8") as f:
                f.write(data)
        else:
            path.write_text(data, encoding="utf-8")

    return _write


@pytest.fixture
def write_bytes() -> Callable[[Path, list[bytes]], None]:
    def _write(path: Path, lines: list[bytes]) -> None:
        path.write_bytes(b"".join(line + b"\n" for line in lines))

    return _write
