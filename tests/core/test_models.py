from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

import pytest

from slogparse.core.models import ZERO_TIME, KeyValue, Record
from slogparse.core.scanner import scan_line


def _record(line: str) -> Record:
    return Record(scan_line(line))


def test_get_and_membership() -> None:
    record = _record("level=INFO msg=Hello name=World")
    assert record.get("msg") == "Hello"
    assert record.get("missing") == ""
    assert record.get("missing", "n/a") == "n/a"
    assert "level" in record
    assert "nope" not in record
    assert record.contains("name")
    assert record.contains_kv("name", "World")
    assert not record.contains_kv("name", "Welt")


def test_first_match_wins() -> None:
    record = _record("a=first a=second")
    assert record.get("a") == "first"
    assert record.to_dict() == {"a": "first"}


def test_get_int() -> None:
    record = _record("level=INFO msg=int+string name=32 xx=yy neg=-7")
    assert record.get_int("name", -1) == 32
    assert record.get_int("neg", 0) == -7
    assert record.get_int("xx", -1) == -1
    assert record.get_int("missing", 99) == 99


def test_get_int_rejects_non_decimal_forms() -> None:
    record = _record("a=1_000 b=0x10 c=99999999999999999999 d=+5x")
    assert record.get_int("a", -1) == -1
    assert record.get_int("b", -1) == -1
    assert record.get_int("c", -1) == -1
    assert record.get_int("d", -1) == -1


def test_get_int_uses_first_convertible_occurrence() -> None:
    record = _record("n=abc n=12")
    assert record.get_int("n", 0) == 12


def test_get_duration() -> None:
    record = _record("took=1h30m fast=250ms bad=soon")
    fallback = timedelta(seconds=-1)
    assert record.get_duration("took", fallback) == timedelta(hours=1, minutes=30)
    assert record.get_duration("fast", fallback) == timedelta(milliseconds=250)
    assert record.get_duration("bad", fallback) == fallback
    assert record.get_duration("missing", fallback) == fallback


def test_log_time() -> None:
    record = _record("time=2025-12-30T08:12:01.250+01:00 level=INFO msg=hi")
    expected = datetime(2025, 12, 30, 8, 12, 1, 250000, tzinfo=timezone(timedelta(hours=1)))
    assert record.log_time() == expected


def test_log_time_missing_or_invalid() -> None:
    assert _record("level=INFO msg=hi").log_time() == ZERO_TIME
    assert _record("time=yesterday msg=hi").log_time() == ZERO_TIME


def test_get_time_with_format() -> None:
    record = _record('at="30/12/2025 08:12" msg=hi')
    assert record.get_time("at", "%d/%m/%Y %H:%M") == datetime(2025, 12, 30, 8, 12, tzinfo=UTC)
    assert record.get_time("at", "%Y") == ZERO_TIME


def test_items_is_restartable_and_idempotent() -> None:
    record = _record("level=INFO msg=Hello name=World")
    first = list(record.items())
    second = list(record)
    assert first == second == [("level", "INFO"), ("msg", "Hello"), ("name", "World")]
    assert record.get("msg") == record.get("msg") == "Hello"
    assert len(record) == 3


def test_for_each_visits_in_order() -> None:
    seen: list[tuple[str, str]] = []
    _record("b=22 a=11").for_each(lambda k, v: seen.append((k, v)))
    assert seen == [("b", "22"), ("a", "11")]


def test_find_value_containing() -> None:
    record = _record('level=ERROR msg="disk full" path=/var/log')
    assert record.find_value_containing("full") == ("msg", "disk full")
    assert record.find_value_containing("absent") == ("", "")


def test_empty_record() -> None:
    record = Record()
    assert len(record) == 0
    assert list(record) == []
    assert record == Record([])
    assert record != Record([KeyValue("a", "b")])


def test_log_time_without_fraction_and_with_nanoseconds() -> None:
    plus_one = timezone(timedelta(hours=1))
    record = _record("time=2025-12-30T08:12:01+01:00 msg=hi")
    assert record.log_time() == datetime(2025, 12, 30, 8, 12, 1, tzinfo=plus_one)
    record = _record("time=2025-12-30T08:12:01.123456789-05:30 msg=hi")
    expected = datetime(2025, 12, 30, 8, 12, 1, 123456, tzinfo=timezone(-timedelta(hours=5, minutes=30)))
    assert record.log_time() == expected


@pytest.mark.parametrize(
    "value",
    [
        "2025-12-30",
        "2025-12-30T08:12:01.250Z",
        "2025-12-30T08:12:01.250",
        "2025-12-30T08:12:01.250+0100",
        "2025-12-30 08:12:01.250+01:00",
    ],
)
def test_log_time_requires_fixed_layout(value: str) -> None:
    record = Record([KeyValue("time", value)])
    assert record.log_time() == ZERO_TIME
