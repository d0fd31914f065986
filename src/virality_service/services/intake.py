"""Upload validation for the video queue."""

import logging
from typing import Sequence
from uuid import uuid4

from ..config import Settings, settings as default_settings
from ..models.queue import IntakeCandidate, IntakeFile, IntakeResult, QueueItem
from .previews import PreviewStore

logger = logging.getLogger(__name__)

NOT_VIDEO_WARNING = "Some files were skipped (not video)."
STORAGE_FAILED_WARNING = "Some files could not be stored."


def count_exceeded_warning(limit: int) -> str:
    return f"Maximum {limit} videos allowed."


def too_large_warning(limit_bytes: int) -> str:
    return f"Some files skipped (too large > {limit_bytes // (1024 * 1024)}MB)."


def screen_batch(
    candidates: Sequence[IntakeCandidate],
    current_count: int,
    settings: Settings = default_settings,
) -> tuple[list[int], str | None]:
    """Apply the batch and per-file rules to file metadata only.

    An over-limit batch is rejected in full. Otherwise each file is checked on
    its own; rejected files produce a warning, and only the last warning seen
    is reported.

    Args:
        candidates: Candidate files in selection order
        current_count: Number of items already in the queue
        settings: Limits to apply

    Returns:
        Indices of the accepted candidates, in order, and the warning if any
    """
    if current_count + len(candidates) > settings.max_queue_size:
        logger.info(f"Rejected batch of {len(candidates)}: queue holds {current_count}/{settings.max_queue_size}")
        return [], count_exceeded_warning(settings.max_queue_size)

    accepted: list[int] = []
    warning: str | None = None

    for index, candidate in enumerate(candidates):
        if not candidate.content_type.startswith("video/"):
            logger.info(f"Skipped {candidate.filename}: content type {candidate.content_type}")
            warning = NOT_VIDEO_WARNING
            continue

        if candidate.size > settings.max_file_size_bytes:
            logger.info(f"Skipped {candidate.filename}: {candidate.size} bytes")
            warning = too_large_warning(settings.max_file_size_bytes)
            continue

        accepted.append(index)

    return accepted, warning


def admit_batch(
    files: list[IntakeFile],
    current_count: int,
    previews: PreviewStore,
    settings: Settings = default_settings,
) -> IntakeResult:
    """Validate a batch of files and build queue items.

    Each accepted file gets a preview. If a preview cannot be written, the
    previews already written for this batch are released and nothing is
    admitted.

    Args:
        files: Candidate files in selection order
        current_count: Number of items already in the queue
        previews: Store that allocates a preview for each accepted file
        settings: Limits to apply

    Returns:
        IntakeResult with accepted items and an optional warning
    """
    accepted, warning = screen_batch(files, current_count, settings)
    items: list[QueueItem] = []

    try:
        for index in accepted:
            candidate = files[index]
            item_id = uuid4().hex
            preview = previews.acquire(item_id, candidate.data, candidate.content_type)
            items.append(
                QueueItem(
                    id=item_id,
                    name=candidate.filename,
                    content_type=candidate.content_type,
                    size=candidate.size,
                    source=candidate.data,
                    preview=preview,
                )
            )
    except OSError as e:
        logger.error(f"Could not store previews, batch dropped: {e}")
        for item in items:
            previews.release(item.preview)
        return IntakeResult(warning=STORAGE_FAILED_WARNING)

    return IntakeResult(items=items, warning=warning)
