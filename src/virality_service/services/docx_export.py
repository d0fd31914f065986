"""Word (.docx) report rendering with python-docx."""

import io
import logging

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.shared import Pt, RGBColor

from .export import Report

logger = logging.getLogger(__name__)

BRAND = RGBColor(0x0E, 0xA5, 0xE9)
MUTED = RGBColor(0x64, 0x74, 0x8B)


def _label(doc, text: str) -> None:
    run = doc.add_paragraph().add_run(text)
    run.bold = True
    run.font.size = Pt(12)


def render_docx(report: Report) -> bytes:
    """Render a report as .docx bytes, one page per video."""
    doc = Document()

    title = doc.add_heading(report.title, 0)
    title.alignment = WD_ALIGN_PARAGRAPH.CENTER
    generated = doc.add_paragraph(f"Generated on {report.generated_on.isoformat()}")
    generated.alignment = WD_ALIGN_PARAGRAPH.CENTER

    for index, section in enumerate(report.sections):
        result = section.result
        doc.add_heading(section.heading, level=1)

        _label(doc, "Summary")
        doc.add_paragraph(result.summary)

        _label(doc, "Target Audience")
        doc.add_paragraph(result.audience_profile)

        _label(doc, "Keywords")
        doc.add_paragraph(", ".join(result.keywords))

        doc.add_heading("Generated Captions", level=2)
        for caption in section.captions:
            header = doc.add_paragraph().add_run(f"{caption.platform} ({caption.strategy})")
            header.bold = True
            header.font.color.rgb = BRAND

            if caption.title:
                title_run = doc.add_paragraph().add_run(caption.title)
                title_run.bold = True
                title_run.font.size = Pt(14)

            doc.add_paragraph(caption.body)

            tags = doc.add_paragraph().add_run(" ".join(caption.hashtags))
            tags.italic = True
            tags.font.color.rgb = MUTED

        if index < len(report.sections) - 1:
            doc.add_page_break()

    buffer = io.BytesIO()
    doc.save(buffer)
    logger.info(f"Rendered DOCX report with {len(report.sections)} videos")
    return buffer.getvalue()
