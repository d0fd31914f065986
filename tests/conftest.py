"""Shared fixtures."""

import base64
from pathlib import Path
from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from virality_service.config import Settings
from virality_service.main import app
from virality_service.models.analysis import AnalysisResult, SocialCaption
from virality_service.models.queue import IntakeFile
from virality_service.services.previews import PreviewStore
from virality_service.services.workspace import VideoWorkspace, create_workspace, get_workspace


def make_result(summary: str = "A dog learns to skateboard.", platforms: tuple[str, ...] = ()) -> AnalysisResult:
    """Build an analysis result with one caption per platform."""
    platforms = platforms or ("TikTok/Reels", "Facebook/YouTube", "Instagram")
    return AnalysisResult(
        summary=summary,
        keywords=["dog", "skateboard"],
        audience_profile="Pet lovers aged 18-34",
        captions=[
            SocialCaption(
                platform=platform,
                title="Dog Rides Skateboard Like a Pro" if "YouTube" in platform else None,
                body=f"Caption for {platform}",
                hashtags=["#dog", "#skate"],
                strategy="Viral/Hook",
            )
            for platform in platforms
        ],
    )


def make_video(name: str = "clip.mp4", size: int | None = None, content_type: str = "video/mp4") -> IntakeFile:
    data = b"\x00\x00\x00\x18ftypmp42" + name.encode()
    return IntakeFile(
        filename=name,
        content_type=content_type,
        data=data,
        size=size if size is not None else len(data),
    )


class FakeAnalyzer:
    """Records calls and returns canned results, failing for selected names."""

    def __init__(self, fail_markers: tuple[str, ...] = ()):
        self.fail_markers = fail_markers
        self.calls: list[tuple[str, str, int | None]] = []

    async def __call__(self, encoded: str, mime_type: str, max_length: int | None) -> AnalysisResult:
        self.calls.append((encoded, mime_type, max_length))
        raw = base64.b64decode(encoded)
        if any(marker.encode() in raw for marker in self.fail_markers):
            raise RuntimeError("provider unavailable")
        return make_result()


@pytest.fixture
def test_settings() -> Settings:
    return Settings(gemini_api_key="test-key")


@pytest.fixture
def previews(tmp_path: Path) -> Iterator[PreviewStore]:
    store = PreviewStore(tmp_path / "previews")
    yield store
    store.close()


@pytest.fixture
def analyzer() -> FakeAnalyzer:
    return FakeAnalyzer()


@pytest.fixture
def workspace(test_settings: Settings, previews: PreviewStore, analyzer: FakeAnalyzer) -> VideoWorkspace:
    return create_workspace(test_settings, previews, analyzer=analyzer)


@pytest.fixture
def client(workspace: VideoWorkspace) -> Iterator[TestClient]:
    """Test client bound to a fresh workspace.

    Used as a context manager so background analyses run on one event loop
    for the whole test.
    """
    app.dependency_overrides[get_workspace] = lambda: workspace
    with TestClient(app) as test_client:
        yield test_client
        test_client.portal.call(workspace.engine.close)
    app.dependency_overrides.clear()
