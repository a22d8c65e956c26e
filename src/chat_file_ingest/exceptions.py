"""Custom exceptions for the chat file ingestion pipeline."""


def _format_megabytes(size: int) -> str:
    megabytes = f"{size / (1024 * 1024):.2f}".rstrip("0").rstrip(".")
    return f"{megabytes}MB"


class ChatIngestException(Exception):
    """Base exception for chat file ingestion.

    All custom exceptions in this package should inherit from this base class.
    """

    pass


class ConfigurationException(ChatIngestException):
    """Raised when configuration errors occur.

    This exception is raised when:
    - Invalid configuration values are provided
    - Environment variables cannot be parsed

    Attributes:
        config_key: The configuration key that caused the error
        config_value: The invalid configuration value
    """

    def __init__(
        self,
        message: str,
        config_key: str | None = None,
        config_value: str | None = None,
    ):
        super().__init__(message)
        self.config_key = config_key
        self.config_value = config_value


class IngestionError(ChatIngestException):
    """Base class for errors raised while ingesting a file or a batch.

    Every ingestion error is recoverable: the orchestrator reports its
    message through the configured error sink and carries on.

    Attributes:
        file_name: Name of the offending file, if the error concerns one file
    """

    def __init__(self, message: str, file_name: str | None = None):
        super().__init__(message)
        self.file_name = file_name

    @property
    def message(self) -> str:
        """Human-readable message suitable for the error sink."""
        return str(self)


class SizeExceededError(IngestionError):
    """Raised when a file is larger than the configured maximum size.

    Attributes:
        max_size: The size limit in bytes
    """

    def __init__(self, file_name: str, max_size: int):
        super().__init__(
            f'File "{file_name}" is too large. '
            f"Maximum size is {_format_megabytes(max_size)}.",
            file_name=file_name,
        )
        self.max_size = max_size


class InvalidSizeError(IngestionError):
    """Raised when a file reports a negative size.

    Attributes:
        size: The reported size in bytes
    """

    def __init__(self, file_name: str, size: int):
        super().__init__(
            f'File "{file_name}" has an invalid size: {size} bytes.',
            file_name=file_name,
        )
        self.size = size


class UnsupportedTypeError(IngestionError):
    """Raised when a file's extension is not in the accepted list.

    Attributes:
        allowed_extensions: The accepted extensions, in configured order
    """

    def __init__(self, file_name: str, allowed_extensions: list[str]):
        super().__init__(
            f'File type not supported for "{file_name}". '
            f"Supported types: {', '.join(allowed_extensions)}",
            file_name=file_name,
        )
        self.allowed_extensions = list(allowed_extensions)


class BatchTooLargeError(IngestionError):
    """Raised when a batch would push the registry past the file limit.

    Attributes:
        max_files: The maximum number of files the registry may hold
    """

    def __init__(self, max_files: int):
        super().__init__(f"Cannot upload more than {max_files} files at once.")
        self.max_files = max_files


class ReadFailureError(IngestionError):
    """Raised when a file's content cannot be read or decoded.

    Attributes:
        original_error: The underlying I/O or decoding exception
    """

    def __init__(self, file_name: str, original_error: Exception | None = None):
        message = f'Failed to read file "{file_name}"'
        if original_error is not None:
            message += f": {original_error}"
        super().__init__(message, file_name=file_name)
        self.original_error = original_error
