"""Video upload and queue endpoints."""

import logging

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from fastapi.responses import FileResponse

from ..models.queue import IntakeCandidate, IntakeFile, IntakeResult
from ..models.video import IntakeResponse, QueueItemResponse
from ..services.workspace import VideoWorkspace, get_workspace

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/videos", tags=["videos"])


@router.post("", response_model=IntakeResponse)
async def upload_videos(
    files: list[UploadFile] = File(...),
    workspace: VideoWorkspace = Depends(get_workspace),
) -> IntakeResponse:
    """
    Upload a batch of videos for analysis.

    Accepted videos are queued and analyzed one at a time in upload order.
    Rejections are reported in `warning`, never as an error status:
    - The whole batch is rejected if it would take the queue over its limit
    - Non-video and oversized files are skipped individually

    Limits are checked against the declared sizes first; only files that pass
    are read.
    """
    declared = [
        IntakeCandidate(
            filename=upload.filename or "video",
            content_type=upload.content_type or "application/octet-stream",
            size=upload.size or 0,
        )
        for upload in files
    ]
    accepted, warning = workspace.screen_files(declared)

    candidates = []
    for index in accepted:
        data = await files[index].read()
        candidates.append(
            IntakeFile(
                filename=declared[index].filename,
                content_type=declared[index].content_type,
                data=data,
                size=len(data),
            )
        )

    outcome = workspace.add_files(candidates) if candidates else IntakeResult()

    return IntakeResponse(
        accepted=[QueueItemResponse.from_item(item) for item in outcome.items],
        warning=outcome.warning or warning,
        queue_size=len(workspace.items),
    )


@router.get("", response_model=list[QueueItemResponse])
async def list_videos(workspace: VideoWorkspace = Depends(get_workspace)) -> list[QueueItemResponse]:
    """List queued videos in upload order."""
    return [QueueItemResponse.from_item(item) for item in workspace.items]


@router.get("/{video_id}", response_model=QueueItemResponse)
async def get_video(video_id: str, workspace: VideoWorkspace = Depends(get_workspace)) -> QueueItemResponse:
    """Get one video with its status and analysis."""
    item = workspace.engine.get(video_id)
    if item is None:
        raise HTTPException(status_code=404, detail=f"Video not found: {video_id}")
    return QueueItemResponse.from_item(item)


@router.get("/{video_id}/preview")
async def get_preview(video_id: str, workspace: VideoWorkspace = Depends(get_workspace)) -> FileResponse:
    """Stream the preview copy of a video."""
    item = workspace.engine.get(video_id)
    if item is None:
        raise HTTPException(status_code=404, detail=f"Video not found: {video_id}")
    return FileResponse(item.preview.path, media_type=item.preview.content_type, filename=item.name)


@router.delete("/{video_id}", response_model=QueueItemResponse)
async def remove_video(video_id: str, workspace: VideoWorkspace = Depends(get_workspace)) -> QueueItemResponse:
    """
    Remove a video from the queue.

    A video that is being analyzed can be removed; its result is discarded
    when the analysis finishes.
    """
    removed = workspace.remove(video_id)
    if removed is None:
        raise HTTPException(status_code=404, detail=f"Video not found: {video_id}")
    return QueueItemResponse.from_item(removed)
