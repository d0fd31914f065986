"""Tests for the workspace selection cursor and exports."""

import asyncio

import pytest

from tests.conftest import FakeAnalyzer, make_video
from virality_service.config import Settings
from virality_service.models.queue import LoadingPhase, QueueStatus
from virality_service.services.export import NothingToExportError
from virality_service.services.previews import PreviewStore
from virality_service.services.workspace import VideoWorkspace, create_workspace


def _run(workspace: VideoWorkspace, *steps):
    """Run workspace calls inside one event loop, returning the last value."""

    async def scenario():
        value = None
        for step in steps:
            value = step()
            if asyncio.iscoroutine(value):
                value = await value
        return value

    return asyncio.run(scenario())


def test_first_upload_is_selected(workspace: VideoWorkspace) -> None:
    """Test that the first admitted video becomes the selection."""
    outcome = _run(workspace, lambda: workspace.add_files([make_video("a.mp4"), make_video("b.mp4")]))

    assert workspace.selected_id == outcome.items[0].id


def test_later_uploads_keep_selection(workspace: VideoWorkspace) -> None:
    """Test that adding videos does not move an existing selection."""
    _run(
        workspace,
        lambda: workspace.add_files([make_video("a.mp4")]),
        lambda: workspace.add_files([make_video("b.mp4")]),
    )

    assert workspace.selected_id == workspace.items[0].id


def test_removing_selected_moves_to_first_remaining(workspace: VideoWorkspace) -> None:
    """Test that removing the selected video redirects the cursor."""
    _run(workspace, lambda: workspace.add_files([make_video(n) for n in ("a.mp4", "b.mp4", "c.mp4")]))
    first, second, third = workspace.items
    workspace.select(third.id)

    _run(workspace, lambda: workspace.remove(third.id))

    assert workspace.selected_id == first.id


def test_removing_last_video_clears_selection(workspace: VideoWorkspace) -> None:
    """Test that the cursor is cleared when the queue empties."""
    _run(
        workspace,
        lambda: workspace.add_files([make_video("a.mp4")]),
        workspace.wait_idle,
        lambda: workspace.remove(workspace.items[0].id),
    )

    assert workspace.selected_id is None
    assert workspace.view().selected is None


def test_removing_other_video_keeps_selection(workspace: VideoWorkspace) -> None:
    """Test that only removal of the selected video moves the cursor."""
    _run(workspace, lambda: workspace.add_files([make_video("a.mp4"), make_video("b.mp4")]))
    first, second = workspace.items

    _run(workspace, lambda: workspace.remove(second.id))

    assert workspace.selected_id == first.id


def test_select_unknown_video_raises(workspace: VideoWorkspace) -> None:
    """Test that the cursor cannot point at a missing video."""
    with pytest.raises(KeyError):
        workspace.select("missing")


def test_view_tracks_completion(workspace: VideoWorkspace) -> None:
    """Test that the view reports completion and enables export."""
    _run(workspace, lambda: workspace.add_files([make_video("a.mp4")]), workspace.wait_idle)

    view = workspace.view()

    assert view.phase == LoadingPhase.COMPLETE
    assert view.can_export is True


def test_caption_length_reaches_analyzer(
    test_settings: Settings, previews: PreviewStore, analyzer: FakeAnalyzer
) -> None:
    """Test that the preference is passed to new analyses."""
    workspace = create_workspace(test_settings, previews, analyzer=analyzer)
    workspace.set_caption_length(280)

    _run(workspace, lambda: workspace.add_files([make_video("a.mp4")]), workspace.wait_idle)

    assert analyzer.calls[0][1:] == ("video/mp4", 280)


def test_default_caption_length_from_settings(previews: PreviewStore, analyzer: FakeAnalyzer) -> None:
    """Test that the configured default seeds the preference."""
    workspace = create_workspace(Settings(default_caption_length=100), previews, analyzer=analyzer)

    assert workspace.caption_length == 100


def test_exports_require_completed_video(test_settings: Settings, previews: PreviewStore) -> None:
    """Test that export raises when every analysis failed."""
    workspace = create_workspace(test_settings, previews, analyzer=FakeAnalyzer(fail_markers=("a.mp4",)))
    _run(workspace, lambda: workspace.add_files([make_video("a.mp4")]), workspace.wait_idle)

    assert workspace.items[0].status == QueueStatus.ERROR
    with pytest.raises(NothingToExportError):
        workspace.export_pdf()
    with pytest.raises(NothingToExportError):
        workspace.export_docx()


def test_close_releases_previews(workspace: VideoWorkspace, previews: PreviewStore) -> None:
    """Test that closing the workspace deletes preview files."""
    _run(workspace, lambda: workspace.add_files([make_video("a.mp4")]), workspace.wait_idle, workspace.close)

    assert previews.held == 0
