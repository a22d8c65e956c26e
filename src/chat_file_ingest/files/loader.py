"""File descriptors and asynchronous content loading.

A ``FileDescriptor`` is anything exposing a name, a size, a MIME type and an
async ``read_bytes`` coroutine. Two descriptors ship with the package:
``InMemoryFile`` for payloads already in memory (including browser-style
data URIs) and ``LocalFile`` for paths on disk.

``load_content`` turns a descriptor into a ``LoadResult``. Text files are
decoded in full; binary files follow the configured ``BinaryPolicy``.
"""

from __future__ import annotations

import asyncio
import base64
import binascii
import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Protocol, runtime_checkable

from chat_file_ingest.exceptions import ReadFailureError
from chat_file_ingest.files.classifier import FileKind

logger = logging.getLogger(__name__)


class BinaryPolicy(str, Enum):
    """How binary-kind files are materialized.

    ``ENCODE`` reads the bytes and stores them base64-encoded. ``SKIP`` never
    reads them and leaves the entry's content empty.
    """

    ENCODE = "encode"
    SKIP = "skip"


@runtime_checkable
class FileDescriptor(Protocol):
    """A raw file submitted for ingestion."""

    @property
    def name(self) -> str: ...

    @property
    def size(self) -> int: ...

    @property
    def mime_type(self) -> str: ...

    async def read_bytes(self) -> bytes: ...


def strip_data_uri_header(value: str) -> str:
    """Drop a ``data:<mime>;base64,`` prefix, returning the bare payload."""
    if value.startswith("data:"):
        _, comma, payload = value.partition(",")
        if comma:
            return payload
    return value


def encode_base64(data: bytes) -> str:
    """Encode raw bytes as padded standard base64 text."""
    return base64.b64encode(data).decode("ascii")


@dataclass(frozen=True)
class InMemoryFile:
    """File descriptor backed by bytes already held in memory.

    Args:
        name: Original filename including extension.
        data: Raw file contents.
        mime_type: MIME type reported by the source; empty when unknown.
    """

    name: str
    data: bytes = field(repr=False)
    mime_type: str = ""

    @property
    def size(self) -> int:
        return len(self.data)

    async def read_bytes(self) -> bytes:
        return self.data

    @classmethod
    def from_data_uri(cls, name: str, uri: str) -> InMemoryFile:
        """Build a descriptor from a ``data:<mime>;base64,<payload>`` URI.

        Raises:
            ValueError: If the payload is not valid base64
        """
        mime_type = ""
        if uri.startswith("data:"):
            header = uri[len("data:") :].partition(",")[0]
            mime_type = header.split(";")[0]
        try:
            data = base64.b64decode(strip_data_uri_header(uri), validate=True)
        except binascii.Error as e:
            raise ValueError(f"Invalid base64 payload for {name}: {e}") from e
        return cls(name=name, data=data, mime_type=mime_type)


@dataclass(frozen=True)
class LocalFile:
    """File descriptor for a path on the local filesystem.

    The size is taken from ``stat()`` when the descriptor is created; the
    contents are read off the event loop in ``read_bytes``.
    """

    path: Path
    mime_type: str = ""
    size: int = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "path", Path(self.path))
        object.__setattr__(self, "size", self.path.stat().st_size)

    @property
    def name(self) -> str:
        return self.path.name

    async def read_bytes(self) -> bytes:
        return await asyncio.to_thread(self.path.read_bytes)


@dataclass(frozen=True)
class LoadResult:
    """Outcome of loading one file: content on success, a message on failure."""

    ok: bool
    content: str | None = None
    error: str | None = None

    @classmethod
    def success(cls, content: str | None) -> LoadResult:
        return cls(ok=True, content=content)

    @classmethod
    def failure(cls, error: str) -> LoadResult:
        return cls(ok=False, error=error)


async def read_content(
    file: FileDescriptor,
    kind: FileKind,
    binary_policy: BinaryPolicy = BinaryPolicy.ENCODE,
    encoding: str = "utf-8",
) -> str | None:
    """Read and materialize a file's content according to its kind.

    Args:
        file: Descriptor to read from
        kind: Kind decided for the file at admission
        binary_policy: Strategy for binary-kind files
        encoding: Codec used to decode text-kind files

    Returns:
        Decoded text, base64 text, or ``None`` for skipped binary files

    Raises:
        ReadFailureError: If reading or decoding fails
    """
    if kind is FileKind.BINARY and binary_policy is BinaryPolicy.SKIP:
        return None

    try:
        data = await file.read_bytes()
        if kind is FileKind.BINARY:
            return encode_base64(data)
        return data.decode(encoding)
    except Exception as e:
        raise ReadFailureError(file.name, e) from e


async def load_content(
    file: FileDescriptor,
    kind: FileKind,
    binary_policy: BinaryPolicy = BinaryPolicy.ENCODE,
    encoding: str = "utf-8",
) -> LoadResult:
    """Load a file's content, folding read failures into a ``LoadResult``.

    No retries are attempted; a failure is terminal for the file.
    """
    try:
        content = await read_content(file, kind, binary_policy, encoding)
    except ReadFailureError as e:
        logger.debug("Read failed for %s: %s", file.name, e.original_error)
        return LoadResult.failure(e.message)
    return LoadResult.success(content)
