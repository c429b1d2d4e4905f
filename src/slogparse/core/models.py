"""Parsed log line models."""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from .durations import parse_duration

# Returned by time lookups when the key is missing or the value does not parse.
ZERO_TIME = datetime(1, 1, 1, tzinfo=UTC)

LOG_TIME_KEY = "time"

# RFC 3339 with optional fractional seconds and a numeric ±HH:MM offset.
_LOG_TIME_RE = re.compile(
    r"(?P<base>[0-9]{4}-[0-9]{2}-[0-9]{2}T[0-9]{2}:[0-9]{2}:[0-9]{2})"
    r"(?:\.(?P<frac>[0-9]+))?"
    r"(?P<offset>[+-][0-9]{2}:[0-9]{2})"
)
_INT_RE = re.compile(r"[+-]?[0-9]+")
_INT_MIN = -(1 << 63)
_INT_MAX = (1 << 63) - 1


@dataclass(frozen=True, slots=True)
class KeyValue:
    """One attribute of a log line, decoded from its quoted form if needed."""

    key: str
    value: str


def _parse_int(value: str) -> int | None:
    if not _INT_RE.fullmatch(value):
        return None
    out = int(value)
    if out < _INT_MIN or out > _INT_MAX:
        return None
    return out


def _parse_log_time(value: str) -> datetime | None:
    m = _LOG_TIME_RE.fullmatch(value)
    if m is None:
        return None
    try:
        ts = datetime.strptime(m.group("base") + m.group("offset"), "%Y-%m-%dT%H:%M:%S%z")
    except ValueError:
        return None
    frac = m.group("frac") or ""
    # Digits past microseconds are dropped.
    return ts.replace(microsecond=int(frac[:6].ljust(6, "0")))


def _parse_time(value: str, fmt: str | None) -> datetime | None:
    try:
        if fmt is None:
            ts = datetime.fromisoformat(value.replace("Z", "+00:00"))
        else:
            ts = datetime.strptime(value, fmt)
    except ValueError:
        return None
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=UTC)
    return ts


class Record:
    """A single parsed log line: key/value pairs in the order they appeared.

    Duplicate keys are kept; lookups return the first match. Records built
    by a parser configured with ``reuse_record=True`` share their storage
    with the next record that parser returns.
    """

    __slots__ = ("_items",)

    def __init__(self, items: Sequence[KeyValue] = ()) -> None:
        self._items = items

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return self.items()

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.contains(key)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Record):
            return NotImplemented
        return list(self._items) == list(other._items)

    def __repr__(self) -> str:
        pairs = " ".join(f"{kv.key}={kv.value!r}" for kv in self._items)
        return f"Record({pairs})"

    def items(self) -> Iterator[tuple[str, str]]:
        """Yield ``(key, value)`` pairs in source order."""
        for kv in self._items:
            yield kv.key, kv.value

    def for_each(self, fn: Callable[[str, str], object]) -> None:
        for kv in self._items:
            fn(kv.key, kv.value)

    def to_dict(self) -> dict[str, str]:
        """Return a mapping of each key to its first value."""
        out: dict[str, str] = {}
        for kv in self._items:
            out.setdefault(kv.key, kv.value)
        return out

    def contains(self, key: str) -> bool:
        return any(kv.key == key for kv in self._items)

    def contains_kv(self, key: str, value: str) -> bool:
        return any(kv.key == key and kv.value == value for kv in self._items)

    def get(self, key: str, default: str = "") -> str:
        """Return the first value stored under ``key``."""
        for kv in self._items:
            if kv.key == key:
                return kv.value
        return default

    def get_int(self, key: str, default: int) -> int:
        """Return the first base-10 integer stored under ``key``, else ``default``."""
        for kv in self._items:
            if kv.key == key:
                out = _parse_int(kv.value)
                if out is not None:
                    return out
        return default

    def get_duration(self, key: str, default: timedelta) -> timedelta:
        """Return the first duration (e.g. ``250ms``, ``1h30m``) under ``key``."""
        for kv in self._items:
            if kv.key == key:
                try:
                    return parse_duration(kv.value)
                except ValueError:
                    continue
        return default

    def get_time(self, key: str, fmt: str | None = None) -> datetime:
        """Return the first timestamp under ``key``.

        ``fmt`` is a ``strptime`` format; ISO-8601 is used when it is None.
        Naive results are taken as UTC. Returns ``ZERO_TIME`` when nothing parses.
        """
        for kv in self._items:
            if kv.key == key:
                ts = _parse_time(kv.value, fmt)
                if ts is not None:
                    return ts
        return ZERO_TIME

    def log_time(self) -> datetime:
        """Return the ``time`` attribute.

        The value must look like ``2006-01-02T15:04:05.999-07:00``: fractional
        seconds are optional, the offset is required and must be ``±HH:MM``.
        """
        for kv in self._items:
            if kv.key == LOG_TIME_KEY:
                ts = _parse_log_time(kv.value)
                if ts is not None:
                    return ts
        return ZERO_TIME

    def find_value_containing(self, substr: str) -> tuple[str, str]:
        """Return the first pair whose value contains ``substr``, or ``("", "")``."""
        for kv in self._items:
            if substr in kv.value:
                return kv.key, kv.value
        return "", ""
