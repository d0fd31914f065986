"""Health check endpoint."""

from fastapi import APIRouter, Depends

from ..config import settings
from ..services.workspace import VideoWorkspace, get_workspace

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(workspace: VideoWorkspace = Depends(get_workspace)) -> dict[str, str | int]:
    """Return service health status and queue size."""
    return {
        "status": "healthy",
        "service": settings.service_name,
        "environment": settings.environment,
        "queue_size": len(workspace.items),
    }
