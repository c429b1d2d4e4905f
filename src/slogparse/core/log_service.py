"""Record iteration over log files.

Opens plain or gzip-compressed files and yields one Record per line.
Lines are always scanned in file order, one at a time.
"""

from __future__ import annotations

import gzip
import logging
from collections.abc import AsyncIterator, Iterator, Mapping
from contextlib import asynccontextmanager, contextmanager
from pathlib import Path
from typing import IO

import aiofiles
from aiofiles.threadpool import wrap

from .errors import LineSyntaxError, line_error
from .models import KeyValue, Record
from .parser import ParserConfig, TextParser, resolve_parser_config
from .scanner import scan_line

logger = logging.getLogger(__name__)


def _check_path(log_path: str | Path) -> Path:
    path = Path(log_path)
    if not path.is_file():
        raise FileNotFoundError(f"Log file not found: {path}")
    return path


def _open_binary(path: Path) -> IO[bytes]:
    if path.suffix.lower() == ".gz":
        return gzip.open(path, mode="rb")
    return path.open("rb")


@asynccontextmanager
async def _open_text(path: Path, *, encoding: str, decode_errors: str):
    """Open a log file for async text reading (plain or gzip)."""
    if path.suffix.lower() == ".gz":
        f = gzip.open(path, mode="rt", encoding=encoding, errors=decode_errors, newline="\n")
        af = wrap(f)
        try:
            yield af
        finally:
            await af.close()
    else:
        async with aiofiles.open(path, encoding=encoding, errors=decode_errors, newline="\n") as f:
            yield f


def _chomp(line: str) -> str:
    if line.endswith("\n"):
        line = line[:-1]
    if line.endswith("\r"):
        line = line[:-1]
    return line


def _scan(line_no: int, line: str, items: list[KeyValue] | None) -> Record:
    try:
        return Record(scan_line(line, items))
    except LineSyntaxError as exc:
        raise line_error(line_no, line, exc) from exc


def _matches(record: Record, match: Mapping[str, str] | None) -> bool:
    if not match:
        return True
    return all(record.contains_kv(k, v) for k, v in match.items())


@contextmanager
def open_parser(log_path: str | Path, config: ParserConfig | None = None) -> Iterator[TextParser]:
    """Open ``log_path`` and yield a TextParser reading from it."""
    path = _check_path(log_path)
    logger.debug("Opening %s", path)
    with _open_binary(path) as f:
        yield TextParser(f, config)


def iter_records(
    log_path: str | Path,
    *,
    contains: str | None = None,
    match: Mapping[str, str] | None = None,
    config: ParserConfig | None = None,
) -> Iterator[tuple[int, Record]]:
    """Yield ``(line_no, record)`` for each line passing the filters.

    ``contains`` is a substring test on the raw line, checked before the line
    is scanned, so malformed lines it rejects never raise. ``match`` requires
    every key/value pair to be present in the record.
    """
    path = _check_path(log_path)
    logger.debug("Reading records from %s", path)

    count = 0
    with _open_binary(path) as f:
        accept = None if contains is None else (lambda line: contains in line)
        parser = TextParser(f, config, accept=accept)
        for record in parser:
            if not _matches(record, match):
                continue
            count += 1
            yield parser.line_number, record

    logger.debug("Finished %s: %d records", path, count)


async def aiter_records(
    log_path: str | Path,
    *,
    contains: str | None = None,
    match: Mapping[str, str] | None = None,
    config: ParserConfig | None = None,
) -> AsyncIterator[tuple[int, Record]]:
    """Async variant of iter_records backed by aiofiles."""
    path = _check_path(log_path)
    cfg = resolve_parser_config(config)
    items: list[KeyValue] | None = [] if cfg.reuse_record else None
    logger.debug("Reading records from %s", path)

    count = 0
    async with _open_text(path, encoding=cfg.encoding, decode_errors=cfg.decode_errors) as f:
        async for line_no, line in _enumerate_async(f, start=1):
            line = _chomp(line)
            if contains is not None and contains not in line:
                continue
            record = _scan(line_no, line, items)
            if not _matches(record, match):
                continue
            count += 1
            yield line_no, record

    logger.debug("Finished %s: %d records", path, count)


async def get_records(
    log_path: str | Path,
    **iter_kwargs,
) -> list[Record]:
    """Collect aiter_records into a list.

    Records are copied, so they stay valid even with ``reuse_record``.
    """
    return [
        Record([KeyValue(k, v) for k, v in record.items()])
        async for _, record in aiter_records(log_path, **iter_kwargs)
    ]


async def _enumerate_async(iterable, start: int = 0):
    """Async enumerate helper for async iterators."""
    index = start
    async for item in iterable:
        yield index, item
        index += 1
