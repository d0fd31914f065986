"""Presentation state derived from the queue."""

from typing import Sequence

from ..models.queue import LoadingPhase, QueueItem, QueueStatus, ViewState

STATUS_PHASES = {
    QueueStatus.QUEUED: LoadingPhase.IDLE,
    QueueStatus.ANALYZING: LoadingPhase.ANALYZING,
    QueueStatus.COMPLETE: LoadingPhase.COMPLETE,
    QueueStatus.ERROR: LoadingPhase.ERROR,
}


def derive_view(
    items: Sequence[QueueItem],
    selected_id: str | None,
    reading_id: str | None = None,
) -> ViewState:
    """Project the queue and selection cursor into a view state.

    Args:
        items: Queue snapshot in insertion order
        selected_id: Selection cursor, or None
        reading_id: Item being prepared for its remote call, if any

    Returns:
        ViewState with the selected item, its phase and export availability
    """
    selected = next((item for item in items if item.id == selected_id), None)

    if selected is None:
        phase = LoadingPhase.IDLE
    elif selected.status == QueueStatus.ANALYZING and selected.id == reading_id:
        phase = LoadingPhase.READING
    else:
        phase = STATUS_PHASES[selected.status]

    return ViewState(
        selected=selected,
        phase=phase,
        can_export=any(item.status == QueueStatus.COMPLETE for item in items),
    )
