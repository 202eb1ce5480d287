from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Sequence

from guidelines.dataset import PLATFORM_NAME, PlatformRecord

PLATFORM_TYPE = "Platform Type"

GENERAL_COLUMNS = {
    PLATFORM_NAME,
    PLATFORM_TYPE,
    "Services Offered",
    "Important Notes / Unique Features",
    "Important Notes/Differences",
    "Print - ISBN Requirements",
    "Print - Proof Copies",
    "Print - Distribution Channels (General)",
}

SECTION_PREFIXES = (
    ("ebook -", "eBook Specifications"),
    ("paperback -", "Paperback Specifications"),
    ("hardcover -", "Hardcover Specifications"),
)
GENERAL_TITLE = "General Information"
OTHER_TITLE = "Other Details"

HIDDEN_VALUES = {"", "n/a", "no"}

_PREFIX_RE = re.compile(r"^(ebook|paperback|hardcover) - ", re.IGNORECASE)
_PARENS_RE = re.compile(r"\(.*?\)")


@dataclass(frozen=True)
class DetailSection:
    title: str
    entries: list[tuple[str, str]]


def find_platform(records: Sequence[PlatformRecord], name: str) -> PlatformRecord | None:
    for record in records:
        if record.name == name:
            return record
    return None


def format_display_key(column: str) -> str:
    return _PARENS_RE.sub("", _PREFIX_RE.sub("", column)).strip()


def platform_sections(record: PlatformRecord) -> list[DetailSection]:
    order = [GENERAL_TITLE, *(title for _, title in SECTION_PREFIXES), OTHER_TITLE]
    buckets: dict[str, list[tuple[str, str]]] = {title: [] for title in order}

    for column, value in record.columns.items():
        if value.strip().lower() in HIDDEN_VALUES:
            continue
        buckets[_section_for(column)].append((format_display_key(column), value))

    return [DetailSection(title=title, entries=buckets[title]) for title in order if buckets[title]]


def _section_for(column: str) -> str:
    lowered = column.lower()
    for prefix, title in SECTION_PREFIXES:
        if lowered.startswith(prefix):
            return title
    if column in GENERAL_COLUMNS:
        return GENERAL_TITLE
    return OTHER_TITLE
