"""File classification, validation, loading and ingestion."""

from .classifier import (
    FileKind,
    classify_kind,
    classify_language,
    extension_of,
    guess_mime_type,
)
from .loader import BinaryPolicy, FileDescriptor, InMemoryFile, LoadResult, LocalFile
from .registry import FileEntry, FileRegistry, FileStatus
from .validators import validate_batch, validate_size, validate_type
from .ingestion import FileIngestor  # isort: skip

__all__ = [
    "BinaryPolicy",
    "FileDescriptor",
    "FileEntry",
    "FileIngestor",
    "FileKind",
    "FileRegistry",
    "FileStatus",
    "InMemoryFile",
    "LoadResult",
    "LocalFile",
    "classify_kind",
    "classify_language",
    "extension_of",
    "guess_mime_type",
    "validate_batch",
    "validate_size",
    "validate_type",
]
