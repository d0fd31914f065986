"""Selection and derived view state endpoints."""

from fastapi import APIRouter, Depends, HTTPException

from ..models.video import (
    CaptionLengthRequest,
    CaptionLengthResponse,
    SelectionRequest,
    ViewStateResponse,
)
from ..services.workspace import VideoWorkspace, get_workspace

router = APIRouter(tags=["view"])


@router.get("/view", response_model=ViewStateResponse)
async def get_view(workspace: VideoWorkspace = Depends(get_workspace)) -> ViewStateResponse:
    """Return the selected video, its loading phase and whether export is available."""
    return ViewStateResponse.from_view(workspace.view())


@router.put("/view/selection", response_model=ViewStateResponse)
async def select_video(
    request: SelectionRequest,
    workspace: VideoWorkspace = Depends(get_workspace),
) -> ViewStateResponse:
    """Move the selection cursor to a video."""
    try:
        workspace.select(request.video_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Video not found: {request.video_id}")
    return ViewStateResponse.from_view(workspace.view())


@router.get("/settings/caption-length", response_model=CaptionLengthResponse)
async def get_caption_length(workspace: VideoWorkspace = Depends(get_workspace)) -> CaptionLengthResponse:
    """Return the caption length preference (null = model decides)."""
    return CaptionLengthResponse(max_length=workspace.caption_length)


@router.put("/settings/caption-length", response_model=CaptionLengthResponse)
async def set_caption_length(
    request: CaptionLengthRequest,
    workspace: VideoWorkspace = Depends(get_workspace),
) -> CaptionLengthResponse:
    """
    Change the caption length preference.

    Applies to analyses started after the change; an analysis already in
    flight keeps the value it was started with.
    """
    workspace.set_caption_length(request.max_length)
    return CaptionLengthResponse(max_length=workspace.caption_length)
