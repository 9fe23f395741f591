"""Bridge watchdog file-system events onto the engine's event loop.

watchdog delivers events on its observer thread; every event is handed
to the loop with ``call_soon_threadsafe`` so engine state is only ever
touched from the loop.
"""

from __future__ import annotations

import asyncio
import logging

from watchdog.events import (
    FileSystemEvent,
    FileSystemEventHandler,
    FileSystemMovedEvent,
)
from watchdog.observers import Observer

from waypoint_engine.engine import WaypointEngine
from waypoint_engine.vault.local import is_hidden
from waypoint_engine.vault.nodes import Document, Folder

logger = logging.getLogger(__name__)


class VaultEventHandler(FileSystemEventHandler):
    """Translate watchdog events into engine events."""

    def __init__(self, engine: WaypointEngine, loop: asyncio.AbstractEventLoop):
        self.engine = engine
        self.loop = loop
        self._tasks: set[asyncio.Task] = set()

    def _rel(self, path: str | bytes) -> str | None:
        if isinstance(path, bytes):
            path = path.decode()
        try:
            rel = self.engine.vault.relpath(path)
        except ValueError:
            return None
        if not rel or is_hidden(rel):
            return None
        return rel

    def _node(self, rel: str, is_directory: bool) -> Document | Folder:
        return Folder(rel) if is_directory else Document(rel)

    def on_created(self, event: FileSystemEvent) -> None:
        rel = self._rel(event.src_path)
        if rel is not None:
            node = self._node(rel, event.is_directory)
            self.loop.call_soon_threadsafe(self.engine.on_created, node)

    def on_deleted(self, event: FileSystemEvent) -> None:
        rel = self._rel(event.src_path)
        if rel is not None:
            self.loop.call_soon_threadsafe(self.engine.on_deleted, rel)

    def on_moved(self, event: FileSystemMovedEvent) -> None:
        old = self._rel(event.src_path)
        new = self._rel(event.dest_path)
        if new is None and old is None:
            return
        if new is None:
            self.loop.call_soon_threadsafe(self.engine.on_deleted, old)
        elif old is None:
            self.loop.call_soon_threadsafe(
                self.engine.on_created, self._node(new, event.is_directory),
            )
        else:
            self.loop.call_soon_threadsafe(
                self.engine.on_renamed, self._node(new, event.is_directory), old,
            )

    def on_modified(self, event: FileSystemEvent) -> None:
        if event.is_directory:
            return
        rel = self._rel(event.src_path)
        if rel is None:
            return
        doc = Document(rel)
        if doc.is_markdown:
            self.loop.call_soon_threadsafe(self._scan, doc)

    def _scan(self, doc: Document) -> None:
        task = self.loop.create_task(self.engine.on_modified(doc))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)


async def watch(engine: WaypointEngine, stop: asyncio.Event | None = None) -> None:
    """Watch the engine's vault until ``stop`` is set.

    The observer starts after the engine exists, so the initial scan of
    the vault produces no events.
    """
    stop = stop or asyncio.Event()
    handler = VaultEventHandler(engine, asyncio.get_running_loop())
    observer = Observer()
    observer.schedule(handler, str(engine.vault.root), recursive=True)
    observer.start()
    logger.info("Watching %s", engine.vault.root)
    try:
        await stop.wait()
    finally:
        observer.stop()
        await asyncio.to_thread(observer.join)
        await engine.aclose()
