"""Ingestion orchestrator: validate, admit and load batches of files."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Iterable

from chat_file_ingest.exceptions import IngestionError
from chat_file_ingest.files.classifier import (
    classify_kind,
    classify_language,
    extension_of,
    guess_mime_type,
)
from chat_file_ingest.files.loader import FileDescriptor, load_content
from chat_file_ingest.files.registry import FileEntry, FileRegistry, Snapshot
from chat_file_ingest.files.validators import (
    validate_batch,
    validate_size,
    validate_type,
)
from chat_file_ingest.utils.config import IngestionConfig

logger = logging.getLogger(__name__)

ErrorSink = Callable[[str], None]


def _log_error(message: str) -> None:
    logger.warning(message)


class FileIngestor:
    """Coordinates validation, admission and content loading for file batches.

    ``add_files`` never raises for ingestion problems. Rejected batches,
    rejected files and read failures are reported as human-readable
    messages through ``on_error``, and the registry is always left in a
    well-defined state.

    Args:
        config: Limits and policies; defaults to ``IngestionConfig()``.
        on_error: Sink for error messages. Defaults to logging a warning.
        registry: Registry to populate; a new one is created if omitted.

    Example::

        ingestor = FileIngestor(on_error=print)
        await ingestor.add_files([LocalFile(Path("notes.md"))])
        for entry in ingestor.completed_files:
            print(entry.name, entry.language)
    """

    def __init__(
        self,
        config: IngestionConfig | None = None,
        on_error: ErrorSink | None = None,
        registry: FileRegistry | None = None,
    ) -> None:
        self.config = config or IngestionConfig()
        self.registry = registry if registry is not None else FileRegistry()
        self._on_error: ErrorSink = on_error or _log_error

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def add_files(self, files: Iterable[FileDescriptor]) -> list[str]:
        """Validate, admit and load a batch of files.

        Args:
            files: Raw file descriptors in submission order

        Returns:
            Ids of the admitted entries, in admission order. Empty when the
            whole batch was rejected.
        """
        batch = list(files)

        try:
            validate_batch(len(self.registry), len(batch), self.config.max_files)
        except IngestionError as e:
            self._report(e.message)
            return []

        admitted: list[tuple[FileEntry, FileDescriptor]] = []
        for file in batch:
            try:
                validate_size(file.name, file.size, self.config.max_file_size)
                validate_type(file.name, self.config.accepted_file_types)
            except IngestionError as e:
                self._report(e.message)
                continue
            admitted.append((self._build_entry(file), file))

        self.registry.admit(entry for entry, _ in admitted)
        logger.info(
            "Admitted %d of %d files (%d rejected)",
            len(admitted),
            len(batch),
            len(batch) - len(admitted),
        )

        if self.config.concurrent_loads:
            await asyncio.gather(*(self._load(e, f) for e, f in admitted))
        else:
            for entry, file in admitted:
                await self._load(entry, file)

        return [entry.id for entry, _ in admitted]

    def remove_file(self, entry_id: str) -> None:
        """Remove an entry; unknown ids are ignored."""
        if not self.registry.remove_by_id(entry_id):
            logger.debug("remove_file: no entry with id %s", entry_id)

    def clear_files(self) -> None:
        """Remove every entry."""
        self.registry.clear()

    def accept_filter(self) -> str:
        """Accepted extensions formatted for a file picker, e.g. ``.py,.md``."""
        return self.config.accept_filter()

    # ------------------------------------------------------------------
    # Observation
    # ------------------------------------------------------------------

    @property
    def files(self) -> Snapshot:
        return self.registry.snapshot()

    @property
    def has_files(self) -> bool:
        return self.registry.has_files

    @property
    def completed_files(self) -> Snapshot:
        return self.registry.completed_files

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _build_entry(self, file: FileDescriptor) -> FileEntry:
        return FileEntry(
            name=file.name,
            size=file.size,
            mime_type=guess_mime_type(file.name, file.mime_type),
            kind=classify_kind(extension_of(file.name)),
            language=classify_language(file.name),
        )

    async def _load(self, entry: FileEntry, file: FileDescriptor) -> None:
        result = await load_content(
            file,
            entry.kind,
            binary_policy=self.config.binary_policy,
            encoding=self.config.text_encoding,
        )

        if result.ok:
            applied = self.registry.update_by_id(
                entry.id, lambda current: current.complete(result.content)
            )
        else:
            message = result.error or f'Failed to read file "{entry.name}"'
            applied = self.registry.update_by_id(
                entry.id, lambda current: current.fail(message)
            )
            self._report(message)

        if not applied:
            logger.debug("Entry %s was removed before its load finished", entry.id)

    def _report(self, message: str) -> None:
        try:
            self._on_error(message)
        except Exception:
            logger.exception("Error sink failed while reporting: %s", message)
