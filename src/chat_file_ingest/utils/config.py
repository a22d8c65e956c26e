"""Configuration utilities for environment-based setup."""

import codecs
import os
from typing import Any

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from chat_file_ingest.exceptions import ConfigurationException
from chat_file_ingest.files.loader import BinaryPolicy
from chat_file_ingest.files.validators import normalize_extensions

DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB
DEFAULT_MAX_FILES = 10

DEFAULT_ACCEPTED_FILE_TYPES: list[str] = [
    "js", "ts", "tsx", "jsx", "py", "java", "cpp", "c", "cs",
    "php", "rb", "go", "rs", "swift", "kt", "scala", "sh", "bash",
    "json", "xml", "yaml", "yml", "md", "txt", "html", "css", "scss",
    "sql", "graphql", "proto",
    "pdf", "xls", "xlsx", "csv",
]  # fmt: skip

ENV_PREFIX = "CHAT_INGEST_"


class IngestionConfig(BaseModel):
    """Immutable limits and policies for the ingestion pipeline.

    Attributes:
        max_file_size: Largest accepted file in bytes
        max_files: Most entries the registry may hold after a batch
        accepted_file_types: Accepted extensions, in display order
        binary_policy: Whether binary files are base64-encoded or skipped
        text_encoding: Codec used to decode text files
        concurrent_loads: Load a batch's files concurrently instead of in order
    """

    model_config = ConfigDict(frozen=True)

    max_file_size: int = Field(default=DEFAULT_MAX_FILE_SIZE, ge=0)
    max_files: int = Field(default=DEFAULT_MAX_FILES, ge=0)
    accepted_file_types: list[str] = Field(
        default_factory=lambda: list(DEFAULT_ACCEPTED_FILE_TYPES)
    )
    binary_policy: BinaryPolicy = BinaryPolicy.ENCODE
    text_encoding: str = "utf-8"
    concurrent_loads: bool = False

    @field_validator("accepted_file_types")
    @classmethod
    def _normalize_types(cls, value: list[str]) -> list[str]:
        return normalize_extensions(value)

    @field_validator("text_encoding")
    @classmethod
    def _check_encoding(cls, value: str) -> str:
        try:
            codecs.lookup(value)
        except LookupError as e:
            raise ValueError(f"Unknown text encoding: {value}") from e
        return value

    def accept_filter(self) -> str:
        """Render accepted types for a native file picker, e.g. ``.py,.md``."""
        return ",".join(f".{ext}" for ext in self.accepted_file_types)


def load_environment() -> None:
    """Load environment variables from .env file if it exists."""
    load_dotenv()


def get_default_config() -> IngestionConfig:
    """Get the default ingestion configuration without reading the environment."""
    return IngestionConfig()


def _parse_int(key: str, raw: str) -> int:
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigurationException(
            f"{key} must be an integer, got '{raw}'", config_key=key, config_value=raw
        ) from e


def _parse_bool(key: str, raw: str) -> bool:
    lowered = raw.strip().lower()
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("0", "false", "no", "off", ""):
        return False
    raise ConfigurationException(
        f"{key} must be a boolean, got '{raw}'", config_key=key, config_value=raw
    )


def load_ingestion_config(**overrides: Any) -> IngestionConfig:
    """Create an ingestion configuration from environment variables.

    Reads ``CHAT_INGEST_MAX_FILE_SIZE``, ``CHAT_INGEST_MAX_FILES``,
    ``CHAT_INGEST_ACCEPTED_TYPES`` (comma separated),
    ``CHAT_INGEST_BINARY_POLICY``, ``CHAT_INGEST_TEXT_ENCODING`` and
    ``CHAT_INGEST_CONCURRENT_LOADS``. Unset variables keep their defaults.

    Args:
        **overrides: Field values that take precedence over the environment

    Returns:
        Validated IngestionConfig

    Raises:
        ConfigurationException: If a value cannot be parsed or fails validation
    """
    load_environment()

    values: dict[str, Any] = {}

    raw = os.getenv(f"{ENV_PREFIX}MAX_FILE_SIZE")
    if raw is not None:
        values["max_file_size"] = _parse_int(f"{ENV_PREFIX}MAX_FILE_SIZE", raw)

    raw = os.getenv(f"{ENV_PREFIX}MAX_FILES")
    if raw is not None:
        values["max_files"] = _parse_int(f"{ENV_PREFIX}MAX_FILES", raw)

    raw = os.getenv(f"{ENV_PREFIX}ACCEPTED_TYPES")
    if raw is not None:
        values["accepted_file_types"] = raw.split(",")

    raw = os.getenv(f"{ENV_PREFIX}BINARY_POLICY")
    if raw is not None:
        values["binary_policy"] = raw.strip().lower()

    raw = os.getenv(f"{ENV_PREFIX}TEXT_ENCODING")
    if raw is not None:
        values["text_encoding"] = raw.strip()

    raw = os.getenv(f"{ENV_PREFIX}CONCURRENT_LOADS")
    if raw is not None:
        values["concurrent_loads"] = _parse_bool(f"{ENV_PREFIX}CONCURRENT_LOADS", raw)

    values.update(overrides)

    try:
        return IngestionConfig(**values)
    except ValidationError as e:
        first = e.errors()[0]
        key = str(first["loc"][0]) if first["loc"] else None
        value = values.get(key) if key else None
        raise ConfigurationException(
            f"Invalid ingestion configuration: {e}",
            config_key=key,
            config_value=None if value is None else str(value),
        ) from e
