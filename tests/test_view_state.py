"""Tests for the derived view state."""

from tests.conftest import make_result, make_video
from virality_service.models.queue import LoadingPhase, QueueItem, QueueStatus
from virality_service.services.intake import admit_batch
from virality_service.services.previews import PreviewStore
from virality_service.services.view_state import derive_view


def _items(previews: PreviewStore) -> list[QueueItem]:
    queued, analyzing, complete, failed = admit_batch(
        [make_video(name) for name in ("q.mp4", "a.mp4", "c.mp4", "e.mp4")], 0, previews
    ).items
    return [
        queued,
        analyzing.model_copy(update={"status": QueueStatus.ANALYZING}),
        complete.model_copy(update={"status": QueueStatus.COMPLETE, "result": make_result()}),
        failed.model_copy(update={"status": QueueStatus.ERROR, "error": "Analysis failed"}),
    ]


def test_no_selection_is_idle(previews: PreviewStore) -> None:
    """Test that an empty cursor yields the idle phase."""
    view = derive_view(_items(previews), None)

    assert view.selected is None
    assert view.phase == LoadingPhase.IDLE


def test_phase_mirrors_selected_status(previews: PreviewStore) -> None:
    """Test phase for each status of the selected item."""
    items = _items(previews)

    phases = [derive_view(items, item.id).phase for item in items]

    assert phases == [
        LoadingPhase.IDLE,
        LoadingPhase.ANALYZING,
        LoadingPhase.COMPLETE,
        LoadingPhase.ERROR,
    ]


def test_reading_sub_phase(previews: PreviewStore) -> None:
    """Test that the item being prepared reports reading instead of analyzing."""
    items = _items(previews)

    view = derive_view(items, items[1].id, reading_id=items[1].id)

    assert view.phase == LoadingPhase.READING


def test_unknown_selection_is_treated_as_empty(previews: PreviewStore) -> None:
    """Test that a cursor to a missing item selects nothing."""
    view = derive_view(_items(previews), "gone")

    assert view.selected is None
    assert view.phase == LoadingPhase.IDLE


def test_export_enabled_only_with_complete_item(previews: PreviewStore) -> None:
    """Test export availability."""
    items = _items(previews)

    assert derive_view(items, None).can_export is True
    assert derive_view([items[0], items[1], items[3]], None).can_export is False
    assert derive_view([], None).can_export is False


def test_projection_is_idempotent(previews: PreviewStore) -> None:
    """Test that re-deriving from the same inputs gives an equal view."""
    items = _items(previews)

    assert derive_view(items, items[2].id) == derive_view(items, items[2].id)
