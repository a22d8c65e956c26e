"""Ordered, id-keyed registry of file ingestion entries."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable, Iterator
from enum import Enum
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, model_validator

from chat_file_ingest.files.classifier import DEFAULT_MIME_TYPE, FileKind

logger = logging.getLogger(__name__)

Snapshot = tuple["FileEntry", ...]
Listener = Callable[[Snapshot], None]


class FileStatus(str, Enum):
    """Lifecycle state of a single entry."""

    PENDING = "pending"
    COMPLETED = "completed"
    ERROR = "error"


def new_entry_id() -> str:
    """Generate a process-unique entry identifier."""
    return uuid4().hex


class FileEntry(BaseModel):
    """Immutable record of one file's ingestion lifecycle.

    An entry is admitted as ``PENDING`` and transitions exactly once, to
    ``COMPLETED`` via ``complete`` or to ``ERROR`` via ``fail``. Both
    transitions return a new entry; the original is never modified.

    Attributes:
        id: Unique identifier assigned at admission
        name: Original filename
        size: Size in bytes
        mime_type: Best-effort MIME type
        kind: Text or binary, fixed at admission
        status: Current lifecycle state
        content: Loaded content; only set on completed entries
        error: Failure message; set exactly when status is ``ERROR``
        language: Display label derived from the extension at admission
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_entry_id, min_length=1)
    name: str
    size: int = Field(ge=0)
    mime_type: str = DEFAULT_MIME_TYPE
    kind: FileKind
    status: FileStatus = FileStatus.PENDING
    content: str | None = None
    error: str | None = None
    language: str

    @model_validator(mode="after")
    def _check_status_fields(self) -> FileEntry:
        if self.content is not None and self.status is not FileStatus.COMPLETED:
            raise ValueError("content is only allowed on completed entries")
        if (self.error is not None) != (self.status is FileStatus.ERROR):
            raise ValueError("error must be set exactly when status is 'error'")
        return self

    def _transition(self, **changes: Any) -> FileEntry:
        if self.status is not FileStatus.PENDING:
            raise ValueError(
                f"Entry {self.id} already {self.status.value}; "
                "only pending entries can transition"
            )
        return FileEntry(**{**self.model_dump(), **changes})

    def complete(self, content: str | None) -> FileEntry:
        """Return a completed copy of this pending entry."""
        return self._transition(status=FileStatus.COMPLETED, content=content)

    def fail(self, message: str) -> FileEntry:
        """Return an errored copy of this pending entry."""
        return self._transition(status=FileStatus.ERROR, error=message)


class FileRegistry:
    """Ordered collection of ``FileEntry`` objects keyed by id.

    Iteration order is admission order. Every mutation runs under a lock and
    swaps in a fresh snapshot, so readers holding a snapshot never observe a
    partially applied change. Updates and removals for unknown ids are no-ops.
    """

    def __init__(self) -> None:
        self._entries: dict[str, FileEntry] = {}
        self._snapshot: Snapshot = ()
        self._lock = threading.Lock()
        self._listeners: list[Listener] = []

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def admit(self, entries: Iterable[FileEntry]) -> None:
        """Append a batch of pending entries atomically, preserving order.

        Raises:
            ValueError: If an entry is not pending or its id is already in use.
                Nothing is admitted in that case.
        """
        batch = list(entries)
        if not batch:
            return
        with self._lock:
            seen: set[str] = set()
            for entry in batch:
                if entry.status is not FileStatus.PENDING:
                    raise ValueError(f"Entry {entry.id} must be pending to be admitted")
                if entry.id in self._entries or entry.id in seen:
                    raise ValueError(f"Duplicate entry id: {entry.id}")
                seen.add(entry.id)
            for entry in batch:
                self._entries[entry.id] = entry
            snapshot = self._publish()
        logger.debug("Admitted %d entries", len(batch))
        self._notify(snapshot)

    def update_by_id(
        self, entry_id: str, transform: Callable[[FileEntry], FileEntry]
    ) -> bool:
        """Replace the entry with ``entry_id`` by ``transform(entry)``.

        Returns:
            True if an entry was updated, False if the id is unknown
        """
        with self._lock:
            current = self._entries.get(entry_id)
            if current is None:
                return False
            updated = transform(current)
            if updated.id != entry_id:
                raise ValueError("transform must not change the entry id")
            self._entries[entry_id] = updated
            snapshot = self._publish()
        self._notify(snapshot)
        return True

    def remove_by_id(self, entry_id: str) -> bool:
        """Remove the entry with ``entry_id``.

        Returns:
            True if an entry was removed, False if the id is unknown
        """
        with self._lock:
            if self._entries.pop(entry_id, None) is None:
                return False
            snapshot = self._publish()
        self._notify(snapshot)
        return True

    def clear(self) -> None:
        """Remove every entry regardless of status."""
        with self._lock:
            self._entries.clear()
            snapshot = self._publish()
        self._notify(snapshot)

    # ------------------------------------------------------------------
    # Observation
    # ------------------------------------------------------------------

    def snapshot(self) -> Snapshot:
        """Return an immutable point-in-time view in admission order."""
        return self._snapshot

    def get(self, entry_id: str) -> FileEntry | None:
        return self._entries.get(entry_id)

    @property
    def has_files(self) -> bool:
        return bool(self._snapshot)

    @property
    def completed_files(self) -> Snapshot:
        """Completed entries in admission order."""
        return tuple(e for e in self._snapshot if e.status is FileStatus.COMPLETED)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` to receive the snapshot after each mutation.

        Returns:
            A callable that unregisters the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def __len__(self) -> int:
        return len(self._snapshot)

    def __iter__(self) -> Iterator[FileEntry]:
        return iter(self._snapshot)

    def __contains__(self, entry_id: object) -> bool:
        return entry_id in self._entries

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _publish(self) -> Snapshot:
        # Caller holds the lock
        self._snapshot = tuple(self._entries.values())
        return self._snapshot

    def _notify(self, snapshot: Snapshot) -> None:
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Registry listener %r failed", listener)
