"""Duration strings as written by Go's ``time.Duration.String``.

Examples: ``250ms``, ``1h30m``, ``1.5s``, ``-3us``, ``0``.
"""

from __future__ import annotations

import re
from datetime import timedelta

_GROUP_RE = re.compile(r"(?P<int>[0-9]*)(?:\.(?P<frac>[0-9]*))?(?P<unit>ns|us|µs|μs|ms|s|m|h)")

_UNIT_NS = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,  # U+00B5 micro sign
    "μs": 1_000,  # U+03BC greek mu
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}

_MAX_NS = (1 << 63) - 1


def parse_duration_ns(text: str) -> int:
    """Parse a duration string into signed nanoseconds."""
    orig = text
    neg = False
    if text[:1] in ("-", "+"):
        neg = text[0] == "-"
        text = text[1:]

    if text == "0":
        return 0
    if not text:
        raise ValueError(f"invalid duration {orig!r}")

    total = 0
    pos = 0
    while pos < len(text):
        m = _GROUP_RE.match(text, pos)
        if m is None:
            raise ValueError(f"invalid duration {orig!r}")
        whole, frac = m.group("int"), m.group("frac") or ""
        if not whole and not frac:
            raise ValueError(f"invalid duration {orig!r}")

        unit = _UNIT_NS[m.group("unit")]
        total += int(whole or "0") * unit
        if frac:
            total += int(frac) * unit // 10 ** len(frac)
        if total > _MAX_NS + (1 if neg else 0):
            raise ValueError(f"invalid duration {orig!r}: out of range")
        pos = m.end()

    return -total if neg else total


def parse_duration(text: str) -> timedelta:
    """Parse a duration string into a timedelta.

    Precision below one microsecond is truncated toward zero.
    """
    ns = parse_duration_ns(text)
    micros = abs(ns) // 1_000
    return timedelta(microseconds=-micros if ns < 0 else micros)
