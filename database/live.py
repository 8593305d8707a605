"""Push-based snapshot feeds for the tee_times and courses collections.

Each collection has one SnapshotFeed. Subscribers get the full current
snapshot as soon as they subscribe and again after every change. Changes
arrive from PostgreSQL LISTEN/NOTIFY (see the triggers in schema.sql) via a
dedicated connection held by SnapshotHub.

Usage:
    unsubscribe = await manager.live.tee_times.subscribe(on_snapshot)
    ...
    unsubscribe()
"""

import asyncio
import inspect
import itertools
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional, Set, Union

import asyncpg

logger = logging.getLogger(__name__)

SnapshotCallback = Callable[[List[Any]], Union[None, Awaitable[None]]]

# NOTIFY channel -> feed name
CHANNELS = {
    "tee_times_changed": "tee_times",
    "courses_changed": "courses",
}


class SnapshotFeed:
    """Publish/subscribe channel for one collection."""

    def __init__(self, name: str, fetch_snapshot: Callable[[], Awaitable[List[Any]]]):
        self.name = name
        self._fetch_snapshot = fetch_snapshot
        self._subscribers: Dict[int, SnapshotCallback] = {}
        self._tokens = itertools.count()
        # Serializes fetch + delivery so the newest snapshot is always delivered last.
        self._lock = asyncio.Lock()

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    async def subscribe(self, callback: SnapshotCallback) -> Callable[[], None]:
        """Register a callback and deliver the current snapshot to it.

        Returns an unsubscribe function. Calling it again after the first
        time does nothing.
        """
        token = next(self._tokens)

        def unsubscribe() -> None:
            if self._subscribers.pop(token, None) is not None:
                logger.debug("Unsubscribed %s from %s", token, self.name)

        async with self._lock:
            self._subscribers[token] = callback
            try:
                snapshot = await self._fetch_snapshot()
                await self._deliver(callback, snapshot)
            except Exception:
                unsubscribe()
                raise
        return unsubscribe

    async def refresh(self) -> None:
        """Re-read the collection and push it to every subscriber."""
        async with self._lock:
            if not self._subscribers:
                return
            snapshot = await self._fetch_snapshot()
            for token, callback in list(self._subscribers.items()):
                if token not in self._subscribers:
                    continue
                try:
                    await self._deliver(callback, snapshot)
                except Exception:
                    logger.exception("Subscriber %s to %s failed; dropping it", token, self.name)
                    self._subscribers.pop(token, None)

    @staticmethod
    async def _deliver(callback: SnapshotCallback, snapshot: List[Any]) -> None:
        result = callback(list(snapshot))
        if inspect.isawaitable(result):
            await result


class SnapshotHub:
    """Owns the LISTEN connection and routes change notifications to feeds."""

    def __init__(self, pool: asyncpg.Pool, app_id: str, feeds: Dict[str, SnapshotFeed]):
        self._pool = pool
        self._app_id = app_id
        self.feeds = feeds
        self._conn: Optional[asyncpg.Connection] = None
        self._tasks: Set[asyncio.Task] = set()

    @property
    def tee_times(self) -> SnapshotFeed:
        return self.feeds["tee_times"]

    @property
    def courses(self) -> SnapshotFeed:
        return self.feeds["courses"]

    async def start(self) -> None:
        """Acquire a dedicated connection and LISTEN on every channel."""
        if self._conn is not None:
            return
        self._conn = await self._pool.acquire()
        for channel in CHANNELS:
            await self._conn.add_listener(channel, self._on_notify)
        logger.info("Listening for changes on %s", ", ".join(CHANNELS))

    async def stop(self) -> None:
        """Stop listening and release the connection."""
        for task in list(self._tasks):
            task.cancel()
        self._tasks.clear()
        if self._conn is None:
            return
        conn, self._conn = self._conn, None
        try:
            for channel in CHANNELS:
                await conn.remove_listener(channel, self._on_notify)
        finally:
            await self._pool.release(conn)

    def _on_notify(self, connection, pid, channel: str, payload: str) -> None:
        if payload != self._app_id:
            return
        feed = self.feeds.get(CHANNELS.get(channel, ""))
        if feed is None:
            return
        task = asyncio.ensure_future(self._refresh(feed))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _refresh(self, feed: SnapshotFeed) -> None:
        try:
            await feed.refresh()
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.exception("Could not refresh the %s feed", feed.name)
