"""Tests for translating watchdog events into engine events."""

from watchdog.events import (
    DirCreatedEvent,
    DirModifiedEvent,
    FileCreatedEvent,
    FileDeletedEvent,
    FileModifiedEvent,
    FileMovedEvent,
)

from waypoint_engine.vault.local import LocalVault
from waypoint_engine.vault.nodes import Document, Folder
from waypoint_engine.watcher import VaultEventHandler


class FakeLoop:
    def __init__(self):
        self.tasks = []

    def call_soon_threadsafe(self, callback, *args):
        callback(*args)

    def create_task(self, coro):
        self.tasks.append(coro)
        coro.close()
        return _DoneTask()


class _DoneTask:
    def add_done_callback(self, callback):
        pass


class RecordingEngine:
    def __init__(self, vault):
        self.vault = vault
        self.calls = []

    def on_created(self, node):
        self.calls.append(("created", node))

    def on_deleted(self, path):
        self.calls.append(("deleted", path))

    def on_renamed(self, node, old_path):
        self.calls.append(("renamed", node, old_path))

    async def on_modified(self, doc):
        self.calls.append(("modified", doc))


def make_handler(tmp_path):
    engine = RecordingEngine(LocalVault(tmp_path))
    loop = FakeLoop()
    return VaultEventHandler(engine, loop), engine, loop


class TestVaultEventHandler:
    def test_created_file_and_folder(self, tmp_path):
        handler, engine, _ = make_handler(tmp_path)
        root = engine.vault.root
        handler.on_created(FileCreatedEvent(str(root / "A" / "x.md")))
        handler.on_created(DirCreatedEvent(str(root / "A" / "Sub")))
        assert engine.calls == [
            ("created", Document("A/x.md")),
            ("created", Folder("A/Sub")),
        ]

    def test_deleted(self, tmp_path):
        handler, engine, _ = make_handler(tmp_path)
        handler.on_deleted(FileDeletedEvent(str(engine.vault.root / "A" / "x.md")))
        assert engine.calls == [("deleted", "A/x.md")]

    def test_moved_is_rename(self, tmp_path):
        handler, engine, _ = make_handler(tmp_path)
        root = engine.vault.root
        handler.on_moved(FileMovedEvent(str(root / "B" / "x.md"), str(root / "A" / "x.md")))
        assert engine.calls == [("renamed", Document("A/x.md"), "B/x.md")]

    def test_move_into_hidden_is_delete(self, tmp_path):
        handler, engine, _ = make_handler(tmp_path)
        root = engine.vault.root
        handler.on_moved(FileMovedEvent(str(root / "A" / "x.md"), str(root / ".trash" / "x.md")))
        assert engine.calls == [("deleted", "A/x.md")]

    def test_hidden_paths_ignored(self, tmp_path):
        handler, engine, _ = make_handler(tmp_path)
        root = engine.vault.root
        handler.on_created(FileCreatedEvent(str(root / ".waypoint" / "settings.json")))
        handler.on_modified(FileModifiedEvent(str(root / ".waypoint" / "settings.json")))
        assert engine.calls == []

    def test_modified_markdown_schedules_scan(self, tmp_path):
        handler, engine, loop = make_handler(tmp_path)
        root = engine.vault.root
        handler.on_modified(FileModifiedEvent(str(root / "A" / "A.md")))
        handler.on_modified(FileModifiedEvent(str(root / "A" / "pic.png")))
        handler.on_modified(DirModifiedEvent(str(root / "A")))
        assert len(loop.tasks) == 1
