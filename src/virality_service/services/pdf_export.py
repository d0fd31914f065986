"""PDF report rendering with PyMuPDF."""

import logging

import fitz  # PyMuPDF

from .export import Report

logger = logging.getLogger(__name__)

PAGE_WIDTH, PAGE_HEIGHT = fitz.paper_size("a4")
MARGIN = 42.0
CONTENT_WIDTH = PAGE_WIDTH - 2 * MARGIN

BRAND = (14 / 255, 165 / 255, 233 / 255)
BLACK = (0.0, 0.0, 0.0)
DARK = (0.2, 0.2, 0.2)
MUTED = (0.4, 0.4, 0.4)
RULE = (0.78, 0.78, 0.78)

REGULAR = "helv"
BOLD = "hebo"


def wrap_text(text: str, width: float, fontname: str, fontsize: float) -> list[str]:
    """Greedy word wrap measured with the PDF font metrics."""
    lines: list[str] = []
    for paragraph in text.splitlines() or [""]:
        current = ""
        for word in paragraph.split():
            candidate = f"{current} {word}" if current else word
            if current and fitz.get_text_length(candidate, fontname=fontname, fontsize=fontsize) > width:
                lines.append(current)
                current = word
            else:
                current = candidate
        lines.append(current)
    return lines


class _PdfWriter:
    """Top-to-bottom text cursor that starts a new page when it runs out of room."""

    def __init__(self) -> None:
        self.doc = fitz.open()
        self.page = self.doc.new_page(width=PAGE_WIDTH, height=PAGE_HEIGHT)
        self.y = MARGIN

    def ensure_room(self, height: float) -> None:
        if self.y + height > PAGE_HEIGHT - MARGIN:
            self.page = self.doc.new_page(width=PAGE_WIDTH, height=PAGE_HEIGHT)
            self.y = MARGIN

    def text(
        self,
        text: str,
        fontsize: float = 10,
        fontname: str = REGULAR,
        color: tuple[float, ...] = BLACK,
        indent: float = 0,
        after: float = 4,
    ) -> None:
        leading = fontsize * 1.35
        for line in wrap_text(text, CONTENT_WIDTH - indent, fontname, fontsize):
            self.ensure_room(leading)
            self.y += leading
            self.page.insert_text(
                (MARGIN + indent, self.y),
                line,
                fontsize=fontsize,
                fontname=fontname,
                color=color,
            )
        self.y += after

    def rule(self) -> None:
        self.ensure_room(12)
        self.page.draw_line((MARGIN, self.y), (PAGE_WIDTH - MARGIN, self.y), color=RULE, width=0.5)
        self.y += 12

    def tobytes(self) -> bytes:
        try:
            return self.doc.tobytes()
        finally:
            self.doc.close()


def render_pdf(report: Report) -> bytes:
    """Render a report as PDF bytes."""
    writer = _PdfWriter()

    writer.text(report.title, fontsize=22, fontname=BOLD, color=BRAND, after=2)
    writer.text(f"Generated on {report.generated_on.isoformat()}", fontsize=10, color=MUTED, after=16)

    for section in report.sections:
        result = section.result

        writer.ensure_room(80)
        writer.rule()
        writer.text(section.heading, fontsize=16, fontname=BOLD, after=6)

        writer.text("Summary", fontsize=12, fontname=BOLD, color=DARK, after=2)
        writer.text(result.summary, color=DARK, after=8)

        writer.text("Target Audience & Keywords", fontsize=12, fontname=BOLD, color=DARK, after=2)
        writer.text(f"Audience: {result.audience_profile}", color=DARK)
        writer.text(f"Keywords: {', '.join(result.keywords)}", color=DARK, after=10)

        writer.text("Generated Captions", fontsize=12, fontname=BOLD, color=DARK, after=6)
        for caption in section.captions:
            writer.ensure_room(60)
            writer.text(f"{caption.platform} ({caption.strategy})", fontsize=11, fontname=BOLD, color=BRAND, after=2)
            if caption.title:
                writer.text(caption.title, fontsize=11, fontname=BOLD, indent=4, after=2)
            writer.text(caption.body, indent=4)
            writer.text(" ".join(caption.hashtags), fontsize=9, color=MUTED, indent=4, after=10)

        writer.y += 6

    logger.info(f"Rendered PDF report with {len(report.sections)} videos")
    return writer.tobytes()
