from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Sequence

from guidelines.dataset import PlatformRecord
from guidelines.errors import ValidationError, ValidationErrorKind

logger = logging.getLogger(__name__)

NOT_SPECIFIED = "Not specified"
NO_NOTES = "None"
PAGE_COUNT_NEEDED = "Page count needed"
SPINE_WIDTH_SUFFIX = "inches (approx, varies by platform/paper)"

# Inches per page. Coarse print-on-demand approximations.
CREAM_PAPER_FACTOR = 0.0025
WHITE_PAPER_FACTOR = 0.002252

EBOOK_MANUSCRIPT_FORMAT = "eBook - Manuscript Format (EPUB, MOBI, DOCX etc.)"
EBOOK_COVER_DIMENSIONS = "eBook - Cover Image Dimensions (pixels)"
EBOOK_COVER_RESOLUTION = "eBook - Cover Image Resolution (DPI)"
NOTES = "Important Notes/Differences"

TRIM_SIZE = "Trim Size Options (inches)"
COVER_FILE_FORMAT = "Cover File Format (PDF, JPG, etc.)"
INTERIOR_FILE_FORMAT = "Interior File Format (PDF preferred)"
MARGINS = "Margins (Inside, Outside, Top, Bottom - inches)"
BLEED = "Bleed (inches or mm)"


class BookFormat(str, Enum):
    EBOOK = "eBook"
    PAPERBACK = "Paperback"
    HARDCOVER = "Hardcover"

    @classmethod
    def parse(cls, value: str) -> BookFormat | None:
        wanted = (value or "").strip().lower()
        for member in cls:
            if member.value.lower() == wanted:
                return member
        return None


class PaperType(str, Enum):
    CREAM = "Cream"
    WHITE = "White"

    @classmethod
    def parse(cls, value: str | None) -> PaperType:
        if str(value or "").strip().lower() == "cream":
            return cls.CREAM
        return cls.WHITE


PRINT_FORMATS = (BookFormat.PAPERBACK, BookFormat.HARDCOVER)


def print_column(prefix: BookFormat, attribute: str) -> str:
    return f"{prefix.value} - {attribute}"


@dataclass(frozen=True)
class SelectionInput:
    formats: frozenset[BookFormat]
    platforms: tuple[str, ...]
    page_count: int | None = None
    paper_type: PaperType = PaperType.WHITE
    book_title: str = ""
    author_name: str = ""
    book_type: str = ""
    book_size: str = ""
    cover_finish: str = ""
    bleed: str = "unsure"

    @property
    def wants_ebook(self) -> bool:
        return BookFormat.EBOOK in self.formats

    @property
    def wants_print(self) -> bool:
        return any(fmt in self.formats for fmt in PRINT_FORMATS)

    @property
    def print_prefix(self) -> BookFormat | None:
        # Paperback columns win when both print formats are requested.
        if BookFormat.PAPERBACK in self.formats:
            return BookFormat.PAPERBACK
        if BookFormat.HARDCOVER in self.formats:
            return BookFormat.HARDCOVER
        return None

    @property
    def print_label(self) -> str:
        return "/".join(fmt.value for fmt in PRINT_FORMATS if fmt in self.formats)


@dataclass(frozen=True)
class GeneratedGuideline:
    platform_name: str
    ebook_manuscript_format: str | None = None
    ebook_cover_dimensions: str | None = None
    ebook_cover_resolution: str | None = None
    print_trim_size: str | None = None
    print_spine_width: str | None = None
    print_cover_file_format: str | None = None
    print_interior_format: str | None = None
    print_margins: str | None = None
    print_bleed: str | None = None
    notes: str = field(default=NO_NOTES)

    @property
    def has_ebook(self) -> bool:
        return self.ebook_manuscript_format is not None

    @property
    def has_print(self) -> bool:
        return self.print_trim_size is not None

    @property
    def has_notes(self) -> bool:
        return self.notes != NO_NOTES


def build_selection(
    formats: Iterable[str],
    platforms: Iterable[str],
    page_count: str | int | float | None = None,
    paper_type: str | None = None,
    **details: str,
) -> SelectionInput:
    parsed_formats = frozenset(fmt for fmt in (BookFormat.parse(v) for v in formats) if fmt)
    names: list[str] = []
    for name in platforms:
        name = (name or "").strip()
        if name and name not in names:
            names.append(name)
    extras = {key: str(value).strip() for key, value in details.items() if value is not None}
    return SelectionInput(
        formats=parsed_formats,
        platforms=tuple(names),
        page_count=_to_page_count(page_count),
        paper_type=PaperType.parse(paper_type),
        **extras,
    )


def validate_selection(selection: SelectionInput) -> None:
    if not selection.formats:
        raise ValidationError(ValidationErrorKind.NO_FORMAT_SELECTED)
    if not selection.platforms:
        raise ValidationError(ValidationErrorKind.NO_PLATFORM_SELECTED)
    if selection.wants_print and not (selection.page_count and selection.page_count > 0):
        raise ValidationError(ValidationErrorKind.PAGE_COUNT_REQUIRED)


def estimate_spine_width(page_count: int | None, paper_type: PaperType = PaperType.WHITE) -> str:
    if not page_count or page_count <= 0:
        return PAGE_COUNT_NEEDED
    factor = CREAM_PAPER_FACTOR if paper_type == PaperType.CREAM else WHITE_PAPER_FACTOR
    return f"{page_count * factor:.3f} {SPINE_WIDTH_SUFFIX}"


def derive_guidelines(records: Sequence[PlatformRecord], selection: SelectionInput) -> list[GeneratedGuideline]:
    validate_selection(selection)

    wanted = set(selection.platforms)
    matched = [record for record in records if record.name in wanted]
    missing = wanted.difference(record.name for record in matched)
    if missing:
        logger.debug("Requested platforms not in dataset: %s", ", ".join(sorted(missing)))

    return [_guideline_for(record, selection) for record in matched]


def _guideline_for(record: PlatformRecord, selection: SelectionInput) -> GeneratedGuideline:
    values: dict[str, str] = {}

    if selection.wants_ebook:
        values["ebook_manuscript_format"] = _lookup(record, EBOOK_MANUSCRIPT_FORMAT)
        values["ebook_cover_dimensions"] = _lookup(record, EBOOK_COVER_DIMENSIONS)
        values["ebook_cover_resolution"] = _lookup(record, EBOOK_COVER_RESOLUTION)

    prefix = selection.print_prefix
    if prefix is not None:
        values["print_trim_size"] = _lookup(record, print_column(prefix, TRIM_SIZE))
        values["print_spine_width"] = estimate_spine_width(selection.page_count, selection.paper_type)
        values["print_cover_file_format"] = _lookup(record, print_column(prefix, COVER_FILE_FORMAT))
        values["print_interior_format"] = _lookup(record, print_column(prefix, INTERIOR_FILE_FORMAT))
        values["print_margins"] = _lookup(record, print_column(prefix, MARGINS))
        values["print_bleed"] = _lookup(record, print_column(prefix, BLEED))

    return GeneratedGuideline(
        platform_name=record.name,
        notes=_lookup(record, NOTES, fallback=NO_NOTES),
        **values,
    )


def _lookup(record: PlatformRecord, column: str, fallback: str = NOT_SPECIFIED) -> str:
    return record.value(column).strip() or fallback


def _to_page_count(value: str | int | float | None) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    try:
        return int(str(value).strip())
    except ValueError:
        return None
