"""Chat File Ingest - validate, classify and load chat attachments."""

__version__ = "0.1.0"

# Custom exceptions
from .exceptions import (
    BatchTooLargeError,
    ChatIngestException,
    ConfigurationException,
    IngestionError,
    InvalidSizeError,
    ReadFailureError,
    SizeExceededError,
    UnsupportedTypeError,
)

# Core ingestion pipeline
from .files import (
    BinaryPolicy,
    FileDescriptor,
    FileEntry,
    FileIngestor,
    FileKind,
    FileRegistry,
    FileStatus,
    InMemoryFile,
    LocalFile,
)

# Compose helpers
from .compose import Attachment, enrich_messages, to_attachments

# Configuration utilities
from .utils import (
    IngestionConfig,
    format_file_size,
    get_default_config,
    load_environment,
    load_ingestion_config,
)

__all__ = [
    "__version__",
    "FileIngestor",
    "FileRegistry",
    "FileEntry",
    "FileStatus",
    "FileKind",
    "FileDescriptor",
    "InMemoryFile",
    "LocalFile",
    "BinaryPolicy",
    "Attachment",
    "enrich_messages",
    "to_attachments",
    "IngestionConfig",
    "load_environment",
    "load_ingestion_config",
    "get_default_config",
    "format_file_size",
    # Exceptions
    "ChatIngestException",
    "ConfigurationException",
    "IngestionError",
    "SizeExceededError",
    "InvalidSizeError",
    "UnsupportedTypeError",
    "BatchTooLargeError",
    "ReadFailureError",
]
