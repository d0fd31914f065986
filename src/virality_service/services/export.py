"""Report sections shared by the PDF and DOCX exports."""

from dataclasses import dataclass
from datetime import date
from typing import Sequence

from ..models.analysis import AnalysisResult, SocialCaption, order_captions
from ..models.queue import QueueItem, QueueStatus

PDF_FILENAME = "virality-report.pdf"
DOCX_FILENAME = "virality-report.docx"

NOTHING_TO_EXPORT = "No completed analyses to export."


class NothingToExportError(Exception):
    """Raised when no video has a completed analysis."""

    def __init__(self, message: str = NOTHING_TO_EXPORT):
        super().__init__(message)


@dataclass(frozen=True)
class ReportSection:
    """One completed video in a report."""

    heading: str
    result: AnalysisResult
    captions: list[SocialCaption]


@dataclass(frozen=True)
class Report:
    title: str
    generated_on: date
    sections: list[ReportSection]


def build_report(items: Sequence[QueueItem], title: str, generated_on: date | None = None) -> Report:
    """Collect completed videos, in queue order, into report sections.

    Raises:
        NothingToExportError: No item is complete
    """
    completed = [item for item in items if item.status == QueueStatus.COMPLETE and item.result is not None]
    if not completed:
        raise NothingToExportError()

    sections = [
        ReportSection(
            heading=f"Video {index}: {item.name}",
            result=item.result,
            captions=order_captions(item.result.captions),
        )
        for index, item in enumerate(completed, start=1)
    ]
    return Report(title=title, generated_on=generated_on or date.today(), sections=sections)
