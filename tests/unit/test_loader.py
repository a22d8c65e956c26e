"""Unit tests for file descriptors and content loading."""

import base64
from pathlib import Path
from typing import Any

import pytest

from chat_file_ingest.exceptions import ReadFailureError
from chat_file_ingest.files.classifier import FileKind
from chat_file_ingest.files.loader import (
    BinaryPolicy,
    FileDescriptor,
    InMemoryFile,
    LocalFile,
    encode_base64,
    load_content,
    read_content,
    strip_data_uri_header,
)

PDF_BYTES = b"%PDF-1.4\n\x00\xff\xfe binary \x80\x81"


class TestDescriptors:
    """Test the bundled file descriptors."""

    @pytest.mark.unit
    def test_in_memory_file(self) -> None:
        """Test size is derived from the data and the protocol is satisfied."""
        file = InMemoryFile(name="a.txt", data=b"abc")

        assert file.size == 3
        assert isinstance(file, FileDescriptor)

    @pytest.mark.unit
    def test_from_data_uri_strips_header(self) -> None:
        """Test a browser-style data URI decodes to the original bytes."""
        uri = "data:application/pdf;base64," + base64.b64encode(PDF_BYTES).decode()

        file = InMemoryFile.from_data_uri("report.pdf", uri)

        assert file.data == PDF_BYTES
        assert file.mime_type == "application/pdf"

    @pytest.mark.unit
    def test_from_data_uri_invalid_payload(self) -> None:
        """Test an invalid base64 payload raises ValueError."""
        with pytest.raises(ValueError, match="Invalid base64"):
            InMemoryFile.from_data_uri("bad.pdf", "data:application/pdf;base64,@@@")

    @pytest.mark.unit
    def test_local_file(self, tmp_path: Path) -> None:
        """Test a local file reports its name and on-disk size."""
        path = tmp_path / "notes.md"
        path.write_bytes(b"# Title\n")

        file = LocalFile(path)

        assert file.name == "notes.md"
        assert file.size == 8

    @pytest.mark.unit
    def test_local_file_missing(self, tmp_path: Path) -> None:
        """Test a missing path fails at construction."""
        with pytest.raises(FileNotFoundError):
            LocalFile(tmp_path / "missing.md")


class TestBase64Helpers:
    """Test base64 helpers."""

    @pytest.mark.unit
    def test_encode_round_trip(self) -> None:
        """Test decoding the encoded bytes restores them exactly."""
        assert base64.b64decode(encode_base64(PDF_BYTES)) == PDF_BYTES

    @pytest.mark.unit
    def test_strip_data_uri_header(self) -> None:
        """Test the header is removed and plain payloads pass through."""
        assert strip_data_uri_header("data:text/plain;base64,aGk=") == "aGk="
        assert strip_data_uri_header("aGk=") == "aGk="


class TestLoadContent:
    """Test loading text and binary content."""

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_text_is_returned_verbatim(self) -> None:
        """Test text files decode to their exact contents."""
        text = "# Notes\n\nÜnïcödé line\r\n"
        file = InMemoryFile(name="notes.md", data=text.encode("utf-8"))

        result = await load_content(file, FileKind.TEXT)

        assert result.ok
        assert result.content == text
        assert result.error is None

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_binary_encode_policy(self) -> None:
        """Test binary files are base64 encoded under the encode policy."""
        file = InMemoryFile(name="report.pdf", data=PDF_BYTES)

        result = await load_content(file, FileKind.BINARY, BinaryPolicy.ENCODE)

        assert result.ok
        assert result.content is not None
        assert base64.b64decode(result.content) == PDF_BYTES

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_binary_skip_policy_never_reads(self, failing_file: Any) -> None:
        """Test the skip policy completes without touching the file."""
        file = failing_file("report.pdf", OSError("should not be read"))

        result = await load_content(file, FileKind.BINARY, BinaryPolicy.SKIP)

        assert result.ok
        assert result.content is None

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_decode_error_is_failure(self) -> None:
        """Test undecodable text yields a failure result, not an exception."""
        file = InMemoryFile(name="bad.txt", data=b"\xff\xfe\xfa")

        result = await load_content(file, FileKind.TEXT)

        assert not result.ok
        assert result.content is None
        assert result.error is not None
        assert result.error.startswith('Failed to read file "bad.txt"')

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_custom_encoding(self) -> None:
        """Test the configured encoding is used for text files."""
        file = InMemoryFile(name="legacy.txt", data="café".encode("latin-1"))

        result = await load_content(file, FileKind.TEXT, encoding="latin-1")

        assert result.content == "café"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_read_content_raises_read_failure(self, failing_file: Any) -> None:
        """Test I/O errors surface as ReadFailureError with the cause attached."""
        cause = OSError("disk gone")
        file = failing_file("notes.md", cause)

        with pytest.raises(ReadFailureError) as exc_info:
            await read_content(file, FileKind.TEXT)

        assert exc_info.value.file_name == "notes.md"
        assert exc_info.value.original_error is cause
        assert "disk gone" in str(exc_info.value)

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_local_file_read(self, tmp_path: Path) -> None:
        """Test local files are read through the event loop helper."""
        path = tmp_path / "main.py"
        path.write_text("print('hi')\n", encoding="utf-8")

        result = await load_content(LocalFile(path), FileKind.TEXT)

        assert result.content == "print('hi')\n"
