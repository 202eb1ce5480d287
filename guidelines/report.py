from __future__ import annotations

from html import escape
from pathlib import Path
from typing import BinaryIO, Sequence

from docx import Document
from docx.shared import Inches, Pt
from reportlab.lib.pagesizes import LETTER
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer

from guidelines.deriver import BookFormat, GeneratedGuideline, SelectionInput

REPORT_TITLE = "Your Custom Publishing Guidelines"
REPORT_FONT = "Helvetica"
REPORT_MARGIN_IN = 0.75

EXPORT_FORMATS = {
    "pdf": ("application/pdf", ".pdf"),
    "docx": ("application/vnd.openxmlformats-officedocument.wordprocessingml.document", ".docx"),
    "txt": ("text/plain", ".txt"),
}


def guideline_sections(
    guideline: GeneratedGuideline, selection: SelectionInput
) -> list[tuple[str, list[tuple[str, str]]]]:
    sections: list[tuple[str, list[tuple[str, str]]]] = []
    if guideline.has_ebook:
        sections.append(
            (
                "eBook Specifications",
                [
                    ("Manuscript Format", guideline.ebook_manuscript_format),
                    ("Cover Dimensions", guideline.ebook_cover_dimensions),
                    ("Cover Resolution", guideline.ebook_cover_resolution),
                ],
            )
        )
    if guideline.has_print:
        sections.append(
            (
                f"Print Specifications ({selection.print_label})",
                [
                    ("Trim Size", guideline.print_trim_size),
                    ("Approx. Spine Width", guideline.print_spine_width),
                    ("Cover File Format", guideline.print_cover_file_format),
                    ("Interior File Format", guideline.print_interior_format),
                    ("Margins", guideline.print_margins),
                    ("Bleed", guideline.print_bleed),
                ],
            )
        )
    if guideline.has_notes:
        sections.append(("Important Notes", [("Notes", guideline.notes)]))
    return sections


def selection_summary(selection: SelectionInput) -> list[tuple[str, str]]:
    rows = [
        ("Book title", selection.book_title or "(untitled)"),
        ("Author", selection.author_name or "(not provided)"),
        ("Formats", ", ".join(fmt.value for fmt in sorted(selection.formats, key=list(BookFormat).index))),
        ("Platforms", ", ".join(selection.platforms)),
    ]
    if selection.wants_print:
        rows.extend(
            [
                ("Page count", str(selection.page_count)),
                ("Paper type", selection.paper_type.value),
                ("Book size", selection.book_size or "(not selected)"),
                ("Cover finish", selection.cover_finish or "(not selected)"),
                ("Bleed", selection.bleed or "unsure"),
            ]
        )
    return rows


def render_guidelines_report(guidelines: Sequence[GeneratedGuideline], selection: SelectionInput) -> str:
    lines: list[str] = [REPORT_TITLE, ""]
    lines.extend(f"{label}: {value}" for label, value in selection_summary(selection))
    lines.append("")

    if not guidelines:
        lines.append("No matching platforms were found in the dataset.")

    for guideline in guidelines:
        lines.append(guideline.platform_name)
        lines.append("=" * len(guideline.platform_name))
        for title, entries in guideline_sections(guideline, selection):
            lines.append(f"{title}:")
            lines.extend(f"- {label}: {value}" for label, value in entries)
        lines.append("")
    return "\n".join(lines).rstrip() + "\n"


def export_guidelines_pdf(
    guidelines: Sequence[GeneratedGuideline],
    selection: SelectionInput,
    output: Path | BinaryIO,
) -> None:
    doc = SimpleDocTemplate(
        str(output) if isinstance(output, Path) else output,
        pagesize=LETTER,
        leftMargin=REPORT_MARGIN_IN * inch,
        rightMargin=REPORT_MARGIN_IN * inch,
        topMargin=REPORT_MARGIN_IN * inch,
        bottomMargin=REPORT_MARGIN_IN * inch,
        title=REPORT_TITLE,
    )

    styles = getSampleStyleSheet()
    body = ParagraphStyle(name="Body", parent=styles["BodyText"], fontName=REPORT_FONT, fontSize=10, leading=13)
    section_style = ParagraphStyle(name="Section", parent=styles["Heading3"], spaceBefore=6, spaceAfter=4)

    story = [Paragraph(escape(REPORT_TITLE), styles["Title"]), Spacer(1, 12)]
    for label, value in selection_summary(selection):
        story.append(Paragraph(f"<b>{escape(label)}:</b> {escape(value)}", body))

    if not guidelines:
        story.append(Spacer(1, 12))
        story.append(Paragraph("No matching platforms were found in the dataset.", body))

    for guideline in guidelines:
        story.append(Spacer(1, 12))
        story.append(Paragraph(escape(guideline.platform_name), styles["Heading2"]))
        for title, entries in guideline_sections(guideline, selection):
            story.append(Paragraph(escape(title), section_style))
            for label, value in entries:
                story.append(Paragraph(f"<b>{escape(label)}:</b> {escape(value)}", body))

    doc.build(story)


def export_guidelines_docx(
    guidelines: Sequence[GeneratedGuideline],
    selection: SelectionInput,
    output: Path | BinaryIO,
) -> None:
    doc = Document()
    section = doc.sections[0]
    section.left_margin = Inches(REPORT_MARGIN_IN)
    section.right_margin = Inches(REPORT_MARGIN_IN)
    section.top_margin = Inches(REPORT_MARGIN_IN)
    section.bottom_margin = Inches(REPORT_MARGIN_IN)

    normal = doc.styles["Normal"]
    normal.font.name = REPORT_FONT
    normal.font.size = Pt(10)

    doc.add_heading(REPORT_TITLE, level=0)
    for label, value in selection_summary(selection):
        _add_labelled(doc, label, value)

    if not guidelines:
        doc.add_paragraph("No matching platforms were found in the dataset.")

    for guideline in guidelines:
        doc.add_heading(guideline.platform_name, level=1)
        for title, entries in guideline_sections(guideline, selection):
            doc.add_heading(title, level=2)
            for label, value in entries:
                _add_labelled(doc, label, value, style="List Bullet")

    doc.save(str(output) if isinstance(output, Path) else output)


def _add_labelled(doc, label: str, value: str, style: str | None = None) -> None:
    paragraph = doc.add_paragraph(style=style)
    paragraph.add_run(f"{label}: ").bold = True
    paragraph.add_run(value)
