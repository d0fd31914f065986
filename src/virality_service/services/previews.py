"""Preview files for uploaded videos."""

import logging
import mimetypes
import shutil
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from ..models.queue import PreviewHandle

logger = logging.getLogger(__name__)


class PreviewStore:
    """Holds a displayable copy of each uploaded video on disk.

    A handle is acquired when a video is admitted and released when the video
    is removed from the queue.
    """

    def __init__(self, root: Path):
        self.root = root
        self.root.mkdir(parents=True, exist_ok=True)
        self._handles: dict[str, PreviewHandle] = {}

    def acquire(self, item_id: str, data: bytes, content_type: str) -> PreviewHandle:
        """Write a preview file for an item and return its handle."""
        extension = mimetypes.guess_extension(content_type) or ".bin"
        path = self.root / f"{item_id}{extension}"
        try:
            path.write_bytes(data)
        except OSError:
            path.unlink(missing_ok=True)
            raise

        handle = PreviewHandle(item_id=item_id, path=path, content_type=content_type)
        self._handles[item_id] = handle
        logger.debug(f"Acquired preview {path}")
        return handle

    def release(self, handle: PreviewHandle) -> None:
        """Delete a preview file. Releasing twice is a no-op."""
        if self._handles.pop(handle.item_id, None) is None:
            return
        handle.path.unlink(missing_ok=True)
        logger.debug(f"Released preview {handle.path}")

    def get(self, item_id: str) -> PreviewHandle | None:
        return self._handles.get(item_id)

    @property
    def held(self) -> int:
        return len(self._handles)

    def close(self) -> None:
        """Release every handle still held."""
        for handle in list(self._handles.values()):
            self.release(handle)


@contextmanager
def preview_scope(root: Path | None = None) -> Iterator[PreviewStore]:
    """Yield a preview store, removing its files on exit.

    Without ``root`` the store lives in a temporary directory that is deleted
    afterwards.
    """
    if root is not None:
        store = PreviewStore(root)
        try:
            yield store
        finally:
            store.close()
        return

    tmp_dir = Path(tempfile.mkdtemp(prefix="virality-previews-"))
    store = PreviewStore(tmp_dir)
    try:
        yield store
    finally:
        store.close()
        shutil.rmtree(tmp_dir, ignore_errors=True)
