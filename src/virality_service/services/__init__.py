"""Business logic services."""

from .export import NothingToExportError, build_report
from .gemini_client import AnalysisError, analyze_video
from .intake import admit_batch, screen_batch
from .previews import PreviewStore, preview_scope
from .queue_engine import QueueEngine
from .view_state import derive_view
from .workspace import VideoWorkspace, create_workspace, get_workspace

__all__ = [
    "admit_batch",
    "analyze_video",
    "build_report",
    "create_workspace",
    "derive_view",
    "get_workspace",
    "preview_scope",
    "screen_batch",
    "AnalysisError",
    "NothingToExportError",
    "PreviewStore",
    "QueueEngine",
    "VideoWorkspace",
]
