"""Upload session tying together intake, the queue and exports."""

import logging
import tempfile
from functools import lru_cache
from pathlib import Path

from ..config import Settings, settings as default_settings
from ..models.queue import IntakeCandidate, IntakeFile, IntakeResult, QueueItem, ViewState
from .docx_export import render_docx
from .export import build_report
from .gemini_client import analyze_video
from .intake import admit_batch, screen_batch
from .pdf_export import render_pdf
from .previews import PreviewStore
from .queue_engine import Analyzer, QueueEngine
from .view_state import derive_view

logger = logging.getLogger(__name__)


class VideoWorkspace:
    """One user's video queue plus the selection cursor shown to them."""

    def __init__(self, engine: QueueEngine, previews: PreviewStore, settings: Settings):
        """Initialize the workspace.

        Args:
            engine: Queue engine owning the items
            previews: Store used to allocate previews at intake
            settings: Intake limits and report options
        """
        self.engine = engine
        self.previews = previews
        self.settings = settings
        self._selected_id: str | None = None

    @property
    def items(self) -> tuple[QueueItem, ...]:
        return self.engine.items

    @property
    def selected_id(self) -> str | None:
        return self._selected_id

    @property
    def caption_length(self) -> int | None:
        return self.engine.caption_length

    def set_caption_length(self, max_length: int | None) -> None:
        """Change the preference for analyses started from now on."""
        self.engine.caption_length = max_length
        logger.info(f"Caption length preference set to {max_length or 'auto'}")

    def screen_files(self, candidates: list[IntakeCandidate]) -> tuple[list[int], str | None]:
        """Check uploads against the limits before their content is read.

        Returns:
            Indices of the candidates worth reading, and the warning if any
        """
        accepted, warning = screen_batch(candidates, len(self.engine.items), self.settings)
        if warning:
            logger.warning(warning)
        return accepted, warning

    def add_files(self, files: list[IntakeFile]) -> IntakeResult:
        """Admit a batch of uploads and queue the accepted ones."""
        outcome = admit_batch(files, len(self.engine.items), self.previews, self.settings)
        if outcome.warning:
            logger.warning(outcome.warning)

        if outcome.items:
            self.engine.enqueue(outcome.items)
            if self._selected_id is None:
                self._selected_id = outcome.items[0].id

        return outcome

    def remove(self, item_id: str) -> QueueItem | None:
        """Remove a video, moving the selection to the first remaining one if needed."""
        removed = self.engine.remove(item_id)
        if removed is not None and self._selected_id == item_id:
            remaining = self.engine.items
            self._selected_id = remaining[0].id if remaining else None
        return removed

    def select(self, item_id: str) -> None:
        if self.engine.get(item_id) is None:
            raise KeyError(item_id)
        self._selected_id = item_id

    def view(self) -> ViewState:
        return derive_view(self.engine.items, self._selected_id, self.engine.reading_id)

    def export_pdf(self) -> bytes:
        """Render completed analyses as PDF.

        Raises:
            NothingToExportError: No video has finished analysis
        """
        return render_pdf(build_report(self.engine.items, self.settings.report_title))

    def export_docx(self) -> bytes:
        """Render completed analyses as DOCX.

        Raises:
            NothingToExportError: No video has finished analysis
        """
        return render_docx(build_report(self.engine.items, self.settings.report_title))

    async def wait_idle(self) -> None:
        await self.engine.wait_idle()

    async def close(self) -> None:
        await self.engine.close()
        self.previews.close()


def create_workspace(settings: Settings, previews: PreviewStore, analyzer: Analyzer = analyze_video) -> VideoWorkspace:
    """Build a workspace whose engine calls ``analyzer`` for each video."""
    engine = QueueEngine(
        analyzer=analyzer,
        previews=previews,
        caption_length=settings.default_caption_length,
        timeout=settings.analysis_timeout_seconds,
    )
    return VideoWorkspace(engine, previews, settings)


@lru_cache(maxsize=1)
def get_workspace() -> VideoWorkspace:
    """Get or create the process-wide workspace."""
    root = default_settings.preview_dir or Path(tempfile.mkdtemp(prefix="virality-previews-"))
    return create_workspace(default_settings, PreviewStore(root))
