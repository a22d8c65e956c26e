"""Utility functions for configuration and formatting."""

from .config import (
    IngestionConfig,
    get_default_config,
    load_environment,
    load_ingestion_config,
)
from .formatting import format_file_size

__all__ = [
    "IngestionConfig",
    "load_environment",
    "load_ingestion_config",
    "get_default_config",
    "format_file_size",
]
