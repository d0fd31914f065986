"""Report export endpoints."""

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from ..services.export import DOCX_FILENAME, PDF_FILENAME, NothingToExportError
from ..services.workspace import VideoWorkspace, get_workspace

router = APIRouter(prefix="/exports", tags=["exports"])

DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


def _attachment(content: bytes, media_type: str, filename: str) -> Response:
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/pdf")
def export_pdf(workspace: VideoWorkspace = Depends(get_workspace)) -> Response:
    """Download completed analyses as a PDF report."""
    try:
        content = workspace.export_pdf()
    except NothingToExportError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _attachment(content, "application/pdf", PDF_FILENAME)


@router.get("/docx")
def export_docx(workspace: VideoWorkspace = Depends(get_workspace)) -> Response:
    """Download completed analyses as a Word report."""
    try:
        content = workspace.export_docx()
    except NothingToExportError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _attachment(content, DOCX_MEDIA_TYPE, DOCX_FILENAME)
