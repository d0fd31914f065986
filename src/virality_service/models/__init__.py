"""Pydantic models for queue state and request/response schemas."""

from .analysis import AnalysisResult, SocialCaption
from .queue import (
    IntakeCandidate,
    IntakeFile,
    IntakeResult,
    LoadingPhase,
    PreviewHandle,
    QueueItem,
    QueueStatus,
    ViewState,
)
from .video import (
    CaptionLengthRequest,
    CaptionLengthResponse,
    IntakeResponse,
    QueueItemResponse,
    SelectionRequest,
    ViewStateResponse,
)

__all__ = [
    "AnalysisResult",
    "SocialCaption",
    "IntakeCandidate",
    "IntakeFile",
    "IntakeResult",
    "LoadingPhase",
    "PreviewHandle",
    "QueueItem",
    "QueueStatus",
    "ViewState",
    "CaptionLengthRequest",
    "CaptionLengthResponse",
    "IntakeResponse",
    "QueueItemResponse",
    "SelectionRequest",
    "ViewStateResponse",
]
