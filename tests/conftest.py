"""Shared fixtures: a small platform dataset and a Flask test client."""

from __future__ import annotations

import csv
import io

import pytest

from guidelines.dataset import parse_platforms
from guidelines.deriver import (
    BLEED,
    COVER_FILE_FORMAT,
    EBOOK_COVER_DIMENSIONS,
    EBOOK_COVER_RESOLUTION,
    EBOOK_MANUSCRIPT_FORMAT,
    INTERIOR_FILE_FORMAT,
    MARGINS,
    NOTES,
    TRIM_SIZE,
    BookFormat,
    print_column,
)

PB = BookFormat.PAPERBACK
HC = BookFormat.HARDCOVER

HEADERS = [
    "Platform Name",
    "Platform Type",
    EBOOK_MANUSCRIPT_FORMAT,
    EBOOK_COVER_DIMENSIONS,
    EBOOK_COVER_RESOLUTION,
    print_column(PB, TRIM_SIZE),
    print_column(PB, COVER_FILE_FORMAT),
    print_column(PB, INTERIOR_FILE_FORMAT),
    print_column(PB, MARGINS),
    print_column(PB, BLEED),
    print_column(HC, TRIM_SIZE),
    print_column(HC, COVER_FILE_FORMAT),
    print_column(HC, INTERIOR_FILE_FORMAT),
    print_column(HC, MARGINS),
    print_column(HC, BLEED),
    NOTES,
]

ROWS = [
    {
        "Platform Name": "Acme Press",
        "Platform Type": "Print-on-demand",
        EBOOK_MANUSCRIPT_FORMAT: "EPUB, DOCX",
        EBOOK_COVER_DIMENSIONS: "1600 x 2560",
        EBOOK_COVER_RESOLUTION: "300",
        print_column(PB, TRIM_SIZE): "6 x 9",
        print_column(PB, COVER_FILE_FORMAT): "PDF",
        print_column(PB, INTERIOR_FILE_FORMAT): "PDF",
        print_column(PB, MARGINS): "0.5 all sides",
        print_column(PB, BLEED): "0.125 in",
        print_column(HC, TRIM_SIZE): "7 x 10",
        print_column(HC, COVER_FILE_FORMAT): "PDF/X-1a",
        print_column(HC, INTERIOR_FILE_FORMAT): "PDF/X-1a",
        print_column(HC, MARGINS): "0.75 inside",
        print_column(HC, BLEED): "0.25 in",
        NOTES: "Proof copies ship in 5 days.",
    },
    {
        "Platform Name": "Blank Books",
        "Platform Type": "Aggregator",
    },
    {
        "Platform Name": "Zephyr Digital",
        "Platform Type": "eBook retailer",
        EBOOK_MANUSCRIPT_FORMAT: "EPUB",
        EBOOK_COVER_DIMENSIONS: "1600 x 2400",
        EBOOK_COVER_RESOLUTION: "72",
        NOTES: "eBook only.",
    },
]


def to_csv(headers, rows) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(headers)
    for row in rows:
        writer.writerow([row.get(h, "") for h in headers])
    return buffer.getvalue()


SAMPLE_CSV = to_csv(HEADERS, ROWS)


@pytest.fixture()
def sample_csv_text():
    return SAMPLE_CSV


@pytest.fixture()
def sample_csv_path(tmp_path):
    path = tmp_path / "platforms.csv"
    path.write_text(SAMPLE_CSV, encoding="utf-8")
    return path


@pytest.fixture()
def records():
    return parse_platforms(SAMPLE_CSV)


@pytest.fixture()
def flask_app(sample_csv_path, monkeypatch):
    from app import _load_cached, app

    monkeypatch.setitem(app.config, "PLATFORM_DATA_PATH", str(sample_csv_path))
    monkeypatch.setitem(app.config, "TESTING", True)
    _load_cached.cache_clear()
    yield app
    _load_cached.cache_clear()


@pytest.fixture()
def client(flask_app):
    """Flask test client backed by the sample dataset."""
    return flask_app.test_client()
