"""Shared pytest configuration and fixtures for the test suite."""

from collections.abc import Callable

import pytest

from chat_file_ingest.files.loader import InMemoryFile
from chat_file_ingest.utils.config import IngestionConfig


class ErrorCollector:
    """Error sink that records every reported message."""

    def __init__(self) -> None:
        self.messages: list[str] = []

    def __call__(self, message: str) -> None:
        self.messages.append(message)


class FailingFile:
    """File descriptor whose read always raises the given exception."""

    def __init__(self, name: str, error: Exception, size: int = 10) -> None:
        self.name = name
        self.size = size
        self.mime_type = ""
        self._error = error

    async def read_bytes(self) -> bytes:
        raise self._error


@pytest.fixture
def errors() -> ErrorCollector:
    """Collecting error sink."""
    return ErrorCollector()


@pytest.fixture
def make_file() -> Callable[..., InMemoryFile]:
    """Factory for in-memory files with text or byte content."""

    def _make(
        name: str, content: str | bytes = "hello", mime_type: str = ""
    ) -> InMemoryFile:
        data = content.encode("utf-8") if isinstance(content, str) else content
        return InMemoryFile(name=name, data=data, mime_type=mime_type)

    return _make


@pytest.fixture
def failing_file() -> type[FailingFile]:
    """Descriptor class whose reads raise."""
    return FailingFile


@pytest.fixture
def small_config() -> IngestionConfig:
    """Config with tight limits for boundary tests."""
    return IngestionConfig(max_file_size=1024, max_files=3)


# Pytest configuration
pytest_plugins: list[str] = []
