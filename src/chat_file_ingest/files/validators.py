"""Size, type and batch validation for incoming files.

Each validator returns ``None`` when the check passes and raises an
``IngestionError`` subclass describing the rejection otherwise.

Type matching compares the file's final extension against the accepted
list exactly and case-insensitively. It is not a suffix match:
``archive.tar.gz`` is rejected when only ``tar.gz`` is accepted.
"""

from collections.abc import Iterable

from chat_file_ingest.exceptions import (
    BatchTooLargeError,
    InvalidSizeError,
    SizeExceededError,
    UnsupportedTypeError,
)
from chat_file_ingest.files.classifier import extension_of


def normalize_extensions(extensions: Iterable[str]) -> list[str]:
    """Lowercase extensions and strip leading dots, dropping blanks and repeats.

    Args:
        extensions: Extensions such as ``"py"``, ``".MD"`` or ``" txt "``

    Returns:
        Normalized extensions in their first-seen order
    """
    normalized: list[str] = []
    for ext in extensions:
        clean = ext.strip().lstrip(".").lower()
        if clean and clean not in normalized:
            normalized.append(clean)
    return normalized


def validate_size(name: str, size: int, max_size: int) -> None:
    """Reject files strictly larger than ``max_size`` bytes.

    Raises:
        InvalidSizeError: If ``size`` is negative
        SizeExceededError: If ``size`` exceeds ``max_size``
    """
    if size < 0:
        raise InvalidSizeError(name, size)
    if size > max_size:
        raise SizeExceededError(name, max_size)


def validate_type(name: str, allowed_extensions: list[str]) -> None:
    """Reject files whose extension is not in ``allowed_extensions``.

    Raises:
        UnsupportedTypeError: If the extension does not exactly match an
            allowed one (ignoring case and a leading dot)
    """
    ext = extension_of(name).lower()
    if not ext or ext not in normalize_extensions(allowed_extensions):
        raise UnsupportedTypeError(name, allowed_extensions)


def validate_batch(existing_count: int, incoming_count: int, max_files: int) -> None:
    """Reject a batch that would take the registry past ``max_files`` entries.

    Raises:
        BatchTooLargeError: If ``existing_count + incoming_count > max_files``
    """
    if existing_count + incoming_count > max_files:
        raise BatchTooLargeError(max_files)
