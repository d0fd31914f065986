"""Queue models for the video analysis queue."""

from enum import Enum
from pathlib import Path
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .analysis import AnalysisResult


class QueueStatus(str, Enum):
    """Processing status of a queued video."""

    QUEUED = "queued"
    ANALYZING = "analyzing"
    COMPLETE = "complete"
    ERROR = "error"


class LoadingPhase(str, Enum):
    """Coarse phase shown for the selected video."""

    IDLE = "idle"
    READING = "reading"
    ANALYZING = "analyzing"
    COMPLETE = "complete"
    ERROR = "error"


class PreviewHandle(BaseModel):
    """Displayable copy of an uploaded video, released on removal."""

    model_config = ConfigDict(frozen=True)

    item_id: str
    path: Path
    content_type: str


class IntakeCandidate(BaseModel):
    """Name, type and declared size of a file offered for upload."""

    filename: str
    content_type: str
    size: int


class IntakeFile(IntakeCandidate):
    """A candidate file together with its content."""

    data: bytes
    size: int = -1  # Declared size; falls back to len(data)

    @model_validator(mode="after")
    def _default_size(self) -> "IntakeFile":
        if self.size < 0:
            self.size = len(self.data)
        return self


class QueueItem(BaseModel):
    """One uploaded video and its processing state.

    Items are treated as immutable snapshots: the queue engine replaces an item
    with an updated copy instead of patching it in place.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: uuid4().hex)
    name: str
    content_type: str
    size: int
    source: bytes = Field(repr=False)
    preview: PreviewHandle
    status: QueueStatus = QueueStatus.QUEUED
    result: AnalysisResult | None = None
    error: str | None = None
    error_detail: str | None = None  # Provider message, informational only

    @model_validator(mode="after")
    def _check_status_payload(self) -> "QueueItem":
        if (self.result is not None) != (self.status == QueueStatus.COMPLETE):
            raise ValueError("result must be present exactly when status is complete")
        if (self.error is not None) != (self.status == QueueStatus.ERROR):
            raise ValueError("error must be present exactly when status is error")
        return self


class IntakeResult(BaseModel):
    """Outcome of offering a batch of files."""

    items: list[QueueItem] = Field(default_factory=list)
    warning: str | None = None


class ViewState(BaseModel):
    """Presentation state derived from the queue and the selection cursor."""

    model_config = ConfigDict(frozen=True)

    selected: QueueItem | None = None
    phase: LoadingPhase = LoadingPhase.IDLE
    can_export: bool = False
