from __future__ import annotations

import csv
import io
import logging
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

from guidelines.errors import DatasetError, DatasetErrorKind

logger = logging.getLogger(__name__)

PLATFORM_NAME = "Platform Name"


@dataclass(frozen=True)
class PlatformRecord:
    """One publishing platform's row, column name -> trimmed text."""

    columns: Mapping[str, str]

    def __post_init__(self) -> None:
        object.__setattr__(self, "columns", MappingProxyType(dict(self.columns)))

    def __hash__(self) -> int:
        return hash(tuple(self.columns.items()))

    @property
    def name(self) -> str:
        return self.columns[PLATFORM_NAME]

    def value(self, column: str) -> str:
        return self.columns.get(column, "")

    def to_dict(self) -> dict[str, str]:
        return dict(self.columns)


def load_platforms(path: Path | str) -> tuple[PlatformRecord, ...]:
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        logger.error("Failed to read platform dataset %s: %s", path, exc)
        raise DatasetError(
            DatasetErrorKind.NOT_FOUND, f"Platform dataset is unreadable ({path.name})", str(exc)
        ) from exc

    records = parse_platforms(text)
    logger.info("Loaded %d platforms from %s", len(records), path)
    return records


def parse_platforms(text: str) -> tuple[PlatformRecord, ...]:
    reader = csv.reader(io.StringIO(text, newline=""), strict=True)
    try:
        rows = [(reader.line_num, row) for row in _rows(reader)]
    except csv.Error as exc:
        raise _malformed(f"line {reader.line_num}: {exc}") from exc

    if not rows:
        raise _malformed("the dataset has no header row")

    _, header_row = rows[0]
    headers = [_normalize(cell) for cell in header_row]
    _check_headers(headers)

    records: list[PlatformRecord] = []
    seen: set[str] = set()
    for line_num, row in rows[1:]:
        if len(row) != len(headers):
            raise _malformed(f"line {line_num}: expected {len(headers)} fields but found {len(row)}")
        columns = dict(zip(headers, (_normalize(cell) for cell in row)))
        name = columns[PLATFORM_NAME]
        if not name:
            raise _malformed(f"line {line_num}: '{PLATFORM_NAME}' is blank")
        if name in seen:
            raise _malformed(f"line {line_num}: duplicate platform '{name}'")
        seen.add(name)
        records.append(PlatformRecord(columns))
    return tuple(records)


def _rows(reader):
    for row in reader:
        if any(cell.strip() for cell in row):
            yield row


def _check_headers(headers: list[str]) -> None:
    if any(not h for h in headers):
        raise _malformed("the header row contains a blank column name")
    duplicates = sorted({h for h in headers if headers.count(h) > 1})
    if duplicates:
        raise _malformed(f"duplicate column names: {', '.join(duplicates)}")
    if PLATFORM_NAME not in headers:
        raise _malformed(f"missing required column '{PLATFORM_NAME}'")


def _normalize(value: str) -> str:
    return value.strip()


def _malformed(detail: str) -> DatasetError:
    logger.error("Platform dataset parse error: %s", detail)
    return DatasetError(DatasetErrorKind.MALFORMED, "Failed to parse platform dataset", detail)
