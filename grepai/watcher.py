"""Debounced file system watcher reporting changes to indexable files."""

from __future__ import annotations

import logging
import os
import queue
import threading
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, Protocol

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from grepai.patterns import supported_extensions

log = logging.getLogger(__name__)

EVENT_QUEUE_SIZE = 100


class EventType(IntEnum):
    """The kind of change to a file."""

    CREATE = 0
    MODIFY = 1
    DELETE = 2
    RENAME = 3

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class FileEvent:
    """A change to a file, with its path relative to the watched root."""

    type: EventType
    path: str


class IgnoreMatcher(Protocol):
    def should_ignore(self, path: str) -> bool: ...


class _Handler(FileSystemEventHandler):
    def __init__(self, watcher: "Watcher") -> None:
        super().__init__()
        self._watcher = watcher

    def on_any_event(self, event: FileSystemEvent) -> None:
        self._watcher._dispatch(event)


_EVENT_TYPES = {
    "created": EventType.CREATE,
    "modified": EventType.MODIFY,
    "deleted": EventType.DELETE,
}


class Watcher:
    """Watches a directory tree and emits debounced :class:`FileEvent` objects.

    ``ignore`` is an object with ``should_ignore(relative_path)``, or None.
    ``extensions`` are the lowercased file extensions to report; by default
    those that symbol extraction supports.
    """

    def __init__(
        self,
        root: str | os.PathLike[str],
        ignore: IgnoreMatcher | None,
        debounce_ms: int,
        extensions: Iterable[str] | None = None,
    ) -> None:
        self._root = os.fspath(root)
        self._ignore = ignore
        self._debounce_ms = debounce_ms
        self._extensions = frozenset(
            supported_extensions() if extensions is None else extensions
        )
        self._events: queue.Queue[FileEvent] = queue.Queue(maxsize=EVENT_QUEUE_SIZE)
        self._observer = Observer()
        self._handler = _Handler(self)
        self._watched: set[str] = set()
        self._pending: dict[str, FileEvent] = {}
        self._pending_lock = threading.Lock()
        self._timer: threading.Timer | None = None
        self._closed = threading.Event()
        self._started = False

    def __enter__(self) -> "Watcher":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def start(self) -> None:
        """Watch the root and all its non-ignored subdirectories."""
        self._add_recursive(self._root)
        self._observer.start()
        self._started = True

    def events(self) -> "queue.Queue[FileEvent]":
        """Return the queue that debounced events are delivered to."""
        return self._events

    def close(self) -> None:
        """Stop watching and discard pending events."""
        self._closed.set()
        with self._pending_lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
        if self._started:
            self._observer.stop()
            self._observer.join()
            self._started = False

    def _ignored(self, rel_path: str) -> bool:
        return self._ignore is not None and self._ignore.should_ignore(rel_path)

    def _add_recursive(self, top: str) -> None:
        for dirpath, dirnames, _ in os.walk(top):
            try:
                rel = os.path.relpath(dirpath, self._root)
            except ValueError:
                dirnames.clear()
                continue
            if self._ignored(rel):
                dirnames.clear()
                continue
            if dirpath in self._watched:
                continue
            try:
                self._observer.schedule(self._handler, dirpath, recursive=False)
            except OSError as exc:
                log.warning("Failed to watch %s: %s", dirpath, exc)
                continue
            self._watched.add(dirpath)

    def _dispatch(self, event: FileSystemEvent) -> None:
        if self._closed.is_set():
            return
        src = os.fsdecode(event.src_path)
        if event.event_type == "moved":
            self._handle(src, EventType.RENAME)
            self._handle(os.fsdecode(event.dest_path), EventType.CREATE)
            return
        ev_type = _EVENT_TYPES.get(event.event_type)
        if ev_type is not None:
            self._handle(src, ev_type)

    def _handle(self, path: str, ev_type: EventType) -> None:
        try:
            rel = os.path.relpath(path, self._root)
        except ValueError:
            return
        if os.path.basename(rel).startswith("."):
            return
        if self._ignored(rel):
            return

        ext = os.path.splitext(path)[1].lower()
        if ext not in self._extensions:
            if not os.path.isdir(path):
                return
            if ev_type is EventType.CREATE:
                try:
                    self._add_recursive(path)
                except OSError as exc:
                    log.warning("Failed to add new directory %s: %s", path, exc)
            return

        self._debounce_event(FileEvent(type=ev_type, path=rel))

    def _debounce_event(self, event: FileEvent) -> None:
        with self._pending_lock:
            existing = self._pending.get(event.path)
            # A delete followed quickly by a recreation stays a delete.
            if not (
                existing is not None
                and existing.type is EventType.DELETE
                and event.type is not EventType.DELETE
            ):
                self._pending[event.path] = event
            if self._timer is not None:
                self._timer.cancel()
            self._timer = threading.Timer(self._debounce_ms / 1000.0, self._flush)
            self._timer.daemon = True
            self._timer.start()

    def _flush(self) -> None:
        with self._pending_lock:
            events = list(self._pending.values())
            self._pending = {}
        for event in events:
            try:
                self._events.put_nowait(event)
            except queue.Full:
                log.warning("Event queue full, dropping event for %s", event.path)