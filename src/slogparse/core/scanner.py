"""Split one raw log line into ordered key/value pairs."""

from __future__ import annotations

from .cutter import Mode, cut
from .errors import CutError, LineSyntaxError
from .models import KeyValue


def scan_line(line: str, items: list[KeyValue] | None = None) -> list[KeyValue]:
    """Return the key/value pairs of ``line`` in source order.

    When ``items`` is given it is cleared and filled in place. A blank line
    yields no pairs. Raises LineSyntaxError on malformed input.
    """
    if items is None:
        items = []
    else:
        items.clear()

    text = line
    key_no = 0
    while text:
        try:
            key, text = cut(text, Mode.KEY)
        except CutError as exc:
            raise LineSyntaxError(f"{exc} at key {key_no}", key_no) from exc

        if len(text) <= 1:
            raise LineSyntaxError(f"unterminated string key {key_no}", key_no)
        if not key:
            raise LineSyntaxError(f"malformed key {key_no}", key_no)

        try:
            value, text = cut(text, Mode.VALUE)
        except CutError as exc:
            raise LineSyntaxError(f"{exc} at value {key_no}", key_no) from exc

        if value.startswith(" "):
            raise LineSyntaxError(f"value {key_no} starts with forbidden char", key_no)

        items.append(KeyValue(key, value))
        key_no += 1

    return items
