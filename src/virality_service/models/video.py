"""Request/response models for the video queue API."""

from pydantic import BaseModel, Field

from .analysis import AnalysisResult, order_captions
from .queue import LoadingPhase, QueueItem, QueueStatus, ViewState


class QueueItemResponse(BaseModel):
    """A queued video as exposed over the API (no raw bytes)."""

    id: str
    name: str
    content_type: str
    size: int
    status: QueueStatus
    preview_url: str
    result: AnalysisResult | None = None
    error: str | None = None

    @classmethod
    def from_item(cls, item: QueueItem) -> "QueueItemResponse":
        return cls(
            id=item.id,
            name=item.name,
            content_type=item.content_type,
            size=item.size,
            status=item.status,
            preview_url=f"/videos/{item.id}/preview",
            result=_broadcast_first(item.result),
            error=item.error,
        )


class IntakeResponse(BaseModel):
    """Response from uploading a batch of videos."""

    accepted: list[QueueItemResponse] = Field(default_factory=list)
    warning: str | None = None
    queue_size: int


class ViewStateResponse(BaseModel):
    """Derived view state for the presentation layer."""

    selected: QueueItemResponse | None = None
    phase: LoadingPhase
    can_export: bool

    @classmethod
    def from_view(cls, view: ViewState) -> "ViewStateResponse":
        return cls(
            selected=QueueItemResponse.from_item(view.selected) if view.selected else None,
            phase=view.phase,
            can_export=view.can_export,
        )


class SelectionRequest(BaseModel):
    """Request to move the selection cursor."""

    video_id: str = Field(..., min_length=1)


class CaptionLengthRequest(BaseModel):
    """Request to change the caption length preference."""

    max_length: int | None = Field(None, gt=0, le=5000, description="Target characters; null lets the model decide")


class CaptionLengthResponse(BaseModel):
    """Current caption length preference."""

    max_length: int | None = None


def _broadcast_first(result: AnalysisResult | None) -> AnalysisResult | None:
    if result is None:
        return None
    return result.model_copy(update={"captions": order_captions(result.captions)})
