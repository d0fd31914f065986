"""Sequential single-flight analysis queue."""

import asyncio
import base64
import logging
from typing import Awaitable, Callable, Iterable

from ..models.analysis import AnalysisResult
from ..models.queue import QueueItem, QueueStatus
from .previews import PreviewStore

logger = logging.getLogger(__name__)

# (base64 payload, content type, caption length) -> result
Analyzer = Callable[[str, str, int | None], Awaitable[AnalysisResult]]

FAILURE_MARKER = "Analysis failed"


class QueueEngine:
    """Ordered queue of videos with at most one analysis in flight.

    Every mutation ends with a call to ``advance``, which starts the first
    queued item when nothing is in flight. A run finishing calls ``advance``
    again, so the queue drains in insertion order.

    Must be driven from inside a running event loop.
    """

    def __init__(
        self,
        analyzer: Analyzer,
        previews: PreviewStore,
        caption_length: int | None = None,
        timeout: float | None = None,
    ):
        """Initialize the queue engine.

        Args:
            analyzer: Coroutine function performing the remote analysis
            previews: Store that owns the preview files of queued items
            caption_length: Initial caption length preference
            timeout: Optional bound on a single analysis call, in seconds
        """
        self.analyzer = analyzer
        self.previews = previews
        self.caption_length = caption_length
        self.timeout = timeout
        self._items: list[QueueItem] = []
        self._in_flight_id: str | None = None
        self._reading_id: str | None = None
        self._task: asyncio.Task[None] | None = None

    @property
    def items(self) -> tuple[QueueItem, ...]:
        return tuple(self._items)

    @property
    def in_flight_id(self) -> str | None:
        """Id of the item whose analysis call is outstanding, even if removed."""
        return self._in_flight_id

    @property
    def reading_id(self) -> str | None:
        """Id of the item being prepared before its remote call is issued."""
        return self._reading_id

    @property
    def is_idle(self) -> bool:
        return self._in_flight_id is None and not any(i.status == QueueStatus.QUEUED for i in self._items)

    def get(self, item_id: str) -> QueueItem | None:
        for item in self._items:
            if item.id == item_id:
                return item
        return None

    def enqueue(self, items: Iterable[QueueItem]) -> None:
        """Append items behind everything already queued."""
        for item in items:
            if item.status != QueueStatus.QUEUED:
                raise ValueError(f"Only queued items can be enqueued, got {item.status.value}")
            self._items.append(item)
        self.advance()

    def remove(self, item_id: str) -> QueueItem | None:
        """Remove an item and release its preview.

        Removing the in-flight item does not cancel its call; the outcome is
        dropped when it arrives.
        """
        item = self.get(item_id)
        if item is None:
            return None

        self._items = [i for i in self._items if i.id != item_id]
        self.previews.release(item.preview)
        logger.info(f"Removed {item.name} ({item.status.value})")

        self.advance()
        return item

    def advance(self) -> QueueItem | None:
        """Start the next queued item if nothing is in flight.

        Returns:
            The item that was started, or None when busy or nothing is queued
        """
        if self._in_flight_id is not None:
            return None

        for index, item in enumerate(self._items):
            if item.status == QueueStatus.QUEUED:
                started = item.model_copy(update={"status": QueueStatus.ANALYZING})
                self._items[index] = started
                self._in_flight_id = started.id
                # Preference is captured here so later changes only affect later runs
                self._task = asyncio.get_running_loop().create_task(
                    self._run(started, self.caption_length),
                    name=f"analyze-{started.id}",
                )
                logger.info(f"Analyzing {started.name}")
                return started

        return None

    async def _run(self, item: QueueItem, caption_length: int | None) -> None:
        try:
            self._reading_id = item.id
            try:
                encoded = await asyncio.to_thread(_encode, item.source)
            finally:
                self._reading_id = None

            call = self.analyzer(encoded, item.content_type, caption_length)
            if self.timeout is not None:
                result = await asyncio.wait_for(call, timeout=self.timeout)
            else:
                result = await call
        except asyncio.CancelledError:
            # Shutdown; the item must not stay analyzing once its run is gone
            self._apply(item.id, status=QueueStatus.ERROR, result=None, error=FAILURE_MARKER, error_detail="cancelled")
            raise
        except Exception as e:
            logger.error(f"Analysis of {item.name} failed: {e}")
            self._apply(item.id, status=QueueStatus.ERROR, result=None, error=FAILURE_MARKER, error_detail=str(e))
        else:
            logger.info(f"Analysis of {item.name} complete")
            self._apply(item.id, status=QueueStatus.COMPLETE, result=result, error=None, error_detail=None)
        finally:
            self._in_flight_id = None
            self._task = None

        self.advance()

    def _apply(self, item_id: str, **update: object) -> None:
        for index, current in enumerate(self._items):
            if current.id == item_id:
                self._items[index] = current.model_copy(update=update)
                return
        logger.debug(f"Dropped outcome for removed item {item_id}")

    async def wait_idle(self) -> None:
        """Wait until nothing is in flight and nothing is queued."""
        while self._task is not None:
            await asyncio.shield(self._task)

    async def close(self) -> None:
        """Cancel the outstanding run; its item ends in the error status."""
        task = self._task
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        self._in_flight_id = None
        self._task = None
        for item in self._items:
            if item.status == QueueStatus.ANALYZING:
                self._apply(item.id, status=QueueStatus.ERROR, result=None, error=FAILURE_MARKER, error_detail="cancelled")


def _encode(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")
