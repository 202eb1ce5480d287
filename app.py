from __future__ import annotations

import logging
from functools import lru_cache
from io import BytesIO

from flask import Flask, abort, jsonify, render_template, request, send_file
from werkzeug.utils import secure_filename

from guidelines.config import Config
from guidelines.dataset import PlatformRecord, load_platforms
from guidelines.deriver import (
    BookFormat,
    GeneratedGuideline,
    PaperType,
    SelectionInput,
    build_selection,
    derive_guidelines,
)
from guidelines.errors import DatasetError
from guidelines.platform_details import PLATFORM_TYPE, find_platform, platform_sections
from guidelines.report import (
    EXPORT_FORMATS,
    export_guidelines_docx,
    export_guidelines_pdf,
    render_guidelines_report,
)
from guidelines.resources import RESOURCES

BOOK_TYPES = ["Fiction", "Non-Fiction", "Children's Book", "Cookbook", "Poetry", "Academic", "Other"]
BOOK_SIZES = [
    "5 x 8 inches (12.7 x 20.32 cm)",
    "5.5 x 8.5 inches (13.97 x 21.59 cm)",
    "6 x 9 inches (15.24 x 22.86 cm)",
    "8.5 x 11 inches (21.59 x 27.94 cm)",
    "Custom",
]
COVER_FINISHES = ["Glossy", "Matte"]
BLEED_OPTIONS = ["yes", "no", "unsure"]

app = Flask(__name__)
app.config.from_object(Config)

logging.basicConfig(level=app.config["LOG_LEVEL"], format="%(asctime)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)


@lru_cache(maxsize=4)
def _load_cached(path: str) -> tuple[PlatformRecord, ...]:
    return load_platforms(path)


def current_platforms() -> tuple[PlatformRecord, ...]:
    return _load_cached(app.config["PLATFORM_DATA_PATH"])


@app.get("/")
def index():
    try:
        platforms = current_platforms()
    except DatasetError as exc:
        return _render_form((), {}, error=str(exc)), 500
    return _render_form(platforms, {})


@app.post("/")
def generate_guidelines():
    try:
        platforms = current_platforms()
    except DatasetError as exc:
        return _render_form((), request.form, error=str(exc)), 500

    try:
        selection = _selection_from(request.form)
        guidelines = derive_guidelines(platforms, selection)
    except ValueError as exc:
        return _render_form(platforms, request.form, error=str(exc)), 400

    logger.info("Generated guidelines for %d of %d requested platforms", len(guidelines), len(selection.platforms))
    return _render_form(platforms, request.form, guidelines=guidelines, selection=selection)


@app.get("/api/get-platform-data")
def get_platform_data():
    try:
        platforms = current_platforms()
    except DatasetError as exc:
        logger.error("Failed to read or parse platform dataset: %s", exc)
        return jsonify({"message": "Error fetching platform data", "error": str(exc)}), 500
    return jsonify({"platformData": [record.to_dict() for record in platforms]})


@app.post("/api/guidelines")
def api_guidelines():
    try:
        platforms = current_platforms()
    except DatasetError as exc:
        return jsonify({"message": "Error fetching platform data", "error": str(exc)}), 500

    try:
        selection = _selection_from(_request_payload())
        guidelines = derive_guidelines(platforms, selection)
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400

    return jsonify({"guidelines": [_guideline_to_dict(g) for g in guidelines]})


@app.post("/api/guidelines/export")
def export_guidelines():
    payload = _request_payload()
    export_format = str(payload.get("exportFormat") or "pdf").strip().lower()
    if export_format not in EXPORT_FORMATS:
        return jsonify({"error": "Unsupported export format. Use PDF, DOCX, or TXT."}), 400

    try:
        platforms = current_platforms()
    except DatasetError as exc:
        return jsonify({"message": "Error fetching platform data", "error": str(exc)}), 500

    try:
        selection = _selection_from(payload)
        guidelines = derive_guidelines(platforms, selection)
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400

    try:
        buffer = BytesIO()
        if export_format == "pdf":
            export_guidelines_pdf(guidelines, selection, buffer)
        elif export_format == "docx":
            export_guidelines_docx(guidelines, selection, buffer)
        else:
            buffer.write(render_guidelines_report(guidelines, selection).encode("utf-8"))
        buffer.seek(0)
    except Exception as exc:
        logger.exception("Guideline export (%s) failed", export_format)
        return jsonify({"error": f"Export failed: {str(exc)}"}), 500

    mimetype, extension = EXPORT_FORMATS[export_format]
    download_name = f"{_safe_download_name(selection.book_title)}_publishing_guidelines{extension}"
    return send_file(buffer, mimetype=mimetype, as_attachment=True, download_name=download_name)


@app.get("/platforms/<platform_name>")
def platform_detail(platform_name: str):
    try:
        platforms = current_platforms()
    except DatasetError as exc:
        return render_template("platform.html", record=None, error=str(exc)), 500

    record = find_platform(platforms, platform_name)
    if record is None:
        return (
            render_template("platform.html", record=None, error=f'Details for platform "{platform_name}" not found.'),
            404,
        )
    return render_template(
        "platform.html",
        record=record,
        platform_type=record.value(PLATFORM_TYPE),
        sections=platform_sections(record),
        error=None,
    )


@app.get("/resources")
def resources():
    return render_template("resources.html", resources=RESOURCES.values())


@app.get("/resources/<key>")
def resource_detail(key: str):
    resource = RESOURCES.get(key)
    if resource is None:
        abort(404)
    return render_template("resource.html", resource=resource)


@app.get("/about")
def about():
    return render_template("about.html")


def _render_form(platforms, form, error: str | None = None, guidelines=None, selection=None) -> str:
    return render_template(
        "index.html",
        platform_names=[record.name for record in platforms],
        formats=[fmt.value for fmt in BookFormat],
        paper_types=[paper.value for paper in PaperType],
        book_types=BOOK_TYPES,
        book_sizes=BOOK_SIZES,
        cover_finishes=COVER_FINISHES,
        bleed_options=BLEED_OPTIONS,
        form=_form_state(form),
        error=error,
        guidelines=guidelines,
        selection=selection,
    )


def _form_state(form) -> dict:
    return {
        "bookTitle": form.get("bookTitle", ""),
        "authorName": form.get("authorName", ""),
        "bookType": form.get("bookType", ""),
        "formats": _list_field(form, "formats"),
        "bookSize": form.get("bookSize", ""),
        "pageCount": form.get("pageCount", ""),
        "paperType": form.get("paperType", ""),
        "bleed": form.get("bleed") or "unsure",
        "coverFinish": form.get("coverFinish", ""),
        "platforms": _list_field(form, "platforms"),
    }


def _request_payload():
    if request.is_json:
        data = request.get_json(silent=True)
        return data if isinstance(data, dict) else {}
    return request.form


def _list_field(data, key: str) -> list[str]:
    if hasattr(data, "getlist"):
        return data.getlist(key)
    value = data.get(key) or []
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value]
    return [str(value)]


def _selection_from(data) -> SelectionInput:
    return build_selection(
        formats=_list_field(data, "formats"),
        platforms=_list_field(data, "platforms"),
        page_count=data.get("pageCount"),
        paper_type=data.get("paperType"),
        book_title=data.get("bookTitle"),
        author_name=data.get("authorName"),
        book_type=data.get("bookType"),
        book_size=data.get("bookSize"),
        cover_finish=data.get("coverFinish"),
        bleed=data.get("bleed") or None,
    )


def _guideline_to_dict(guideline: GeneratedGuideline) -> dict:
    fields = {
        "platformName": guideline.platform_name,
        "ebookManuscriptFormat": guideline.ebook_manuscript_format,
        "ebookCoverDimensions": guideline.ebook_cover_dimensions,
        "ebookCoverResolution": guideline.ebook_cover_resolution,
        "printTrimSize": guideline.print_trim_size,
        "printSpineWidth": guideline.print_spine_width,
        "printCoverFileFormat": guideline.print_cover_file_format,
        "printInteriorFormat": guideline.print_interior_format,
        "printMargins": guideline.print_margins,
        "printBleed": guideline.print_bleed,
        "notes": guideline.notes,
    }
    return {key: value for key, value in fields.items() if value is not None}


def _safe_download_name(value: str) -> str:
    cleaned = secure_filename(value or "")
    return cleaned[:80] or "book"


if __name__ == "__main__":
    app.run(debug=True, port=5000)
