"""Token cutting for key=value text log lines.

A line is consumed one token at a time: a key up to ``=``, then a value up
to the next space. Either token may be a double-quoted string using Go
string literal escapes, which is what ``slog.TextHandler`` writes for keys
and values containing spaces, quotes, ``=`` or control characters.
"""

from __future__ import annotations

from enum import Enum

from .errors import CutError


class Mode(str, Enum):
    """Which side of a key=value pair is being cut."""

    KEY = "key"
    VALUE = "value"


_SEPARATORS = {Mode.KEY: "=", Mode.VALUE: " "}

_SIMPLE_ESCAPES = {
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
    "\\": "\\",
    '"': '"',
}
_HEX_WIDTHS = {"x": 2, "u": 4, "U": 8}
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
_OCT_DIGITS = frozenset("01234567")


def is_escaped(text: str, index: int) -> bool:
    """Return True if ``text[index]`` follows an odd run of backslashes."""
    count = 0
    i = index - 1
    while i >= 0 and text[i] == "\\":
        count += 1
        i -= 1
    return count % 2 == 1


def find_closing_quote(text: str) -> int:
    """Return the index of the quote closing the one at ``text[0]``, or -1."""
    idx = 1
    while True:
        idx = text.find('"', idx)
        if idx < 0:
            return -1
        if not is_escaped(text, idx):
            return idx
        idx += 1


def _read_digits(body: str, start: int, width: int, allowed: frozenset[str]) -> str:
    digits = body[start : start + width]
    if len(digits) != width or not all(d in allowed for d in digits):
        raise CutError(f"truncated escape sequence: {body}")
    return digits


def unescape(body: str) -> str:
    """Resolve Go-style escapes in the inside of a quoted token.

    ``\\x`` and octal escapes denote raw bytes; the result is assembled as
    UTF-8 and decoded with replacement for byte runs that are not valid.
    """
    if "\\" not in body:
        return body

    out = bytearray()
    i = 0
    n = len(body)
    while i < n:
        j = body.find("\\", i)
        if j < 0:
            out += body[i:].encode("utf-8", "surrogateescape")
            break
        out += body[i:j].encode("utf-8", "surrogateescape")
        if j + 1 >= n:
            raise CutError(f"invalid escape at end of string: {body}")

        c = body[j + 1]
        if c in _SIMPLE_ESCAPES:
            out += _SIMPLE_ESCAPES[c].encode("utf-8")
            i = j + 2
        elif c in _HEX_WIDTHS:
            width = _HEX_WIDTHS[c]
            value = int(_read_digits(body, j + 2, width, _HEX_DIGITS), 16)
            if c == "x":
                out.append(value)
            else:
                if value > 0x10FFFF or 0xD800 <= value <= 0xDFFF:
                    raise CutError(f"invalid code point \\{c}{value:X}: {body}")
                out += chr(value).encode("utf-8")
            i = j + 2 + width
        elif c in _OCT_DIGITS:
            value = int(_read_digits(body, j + 1, 3, _OCT_DIGITS), 8)
            if value > 0xFF:
                raise CutError(f"invalid octal escape \\{value:o}: {body}")
            out.append(value)
            i = j + 4
        else:
            raise CutError(f"invalid escape sequence \\{c}: {body}")

    return out.decode("utf-8", errors="replace")


def cut(text: str, mode: Mode) -> tuple[str, str]:
    """Cut the next token from ``text``.

    Returns ``(token, remainder)``. The remainder starts after the separator
    that ended the token (``=`` for keys, a space for values).
    """
    text = text.strip()
    if not text:
        return "", ""

    sep = _SEPARATORS[mode]
    if text[0] != '"':
        token, _, rest = text.partition(sep)
        return token, rest
    if text.startswith('""'):
        return "", text[2:]

    end = find_closing_quote(text)
    if end < 0:
        raise CutError(f"unterminated quoted string: {text}")
    # Skip the closing quote and the separator after it, if any.
    return unescape(text[1:end]), text[end + 2 :]
