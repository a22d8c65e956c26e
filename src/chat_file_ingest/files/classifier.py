"""Filename classification: extension, display language and content kind."""

import mimetypes
from enum import Enum

DEFAULT_MIME_TYPE = "application/octet-stream"
UNKNOWN_LANGUAGE = "Unknown"


class FileKind(str, Enum):
    """How a file's content is materialized by the content loader."""

    TEXT = "text"
    BINARY = "binary"


LANGUAGE_MAP: dict[str, str] = {
    "js": "JavaScript",
    "jsx": "JavaScript",
    "ts": "TypeScript",
    "tsx": "TypeScript",
    "py": "Python",
    "java": "Java",
    "cpp": "C++",
    "c": "C",
    "cs": "C#",
    "php": "PHP",
    "rb": "Ruby",
    "go": "Go",
    "rs": "Rust",
    "swift": "Swift",
    "kt": "Kotlin",
    "scala": "Scala",
    "sh": "Shell",
    "bash": "Shell",
    "json": "JSON",
    "xml": "XML",
    "yaml": "YAML",
    "yml": "YAML",
    "md": "Markdown",
    "txt": "Text",
    "html": "HTML",
    "css": "CSS",
    "scss": "SCSS",
    "sql": "SQL",
    "graphql": "GraphQL",
    "proto": "Protocol Buffers",
    "csv": "CSV",
}

# Document formats that cannot be inlined as text
BINARY_EXTENSIONS: frozenset[str] = frozenset(
    {"pdf", "doc", "docx", "xls", "xlsx", "ppt", "pptx", "odt", "ods"}
)


def extension_of(name: str) -> str:
    """Return the substring after the last dot of ``name``.

    Returns an empty string when there is no dot or the dot is the final
    character, e.g. ``"Makefile"`` and ``"notes."`` both yield ``""``.
    """
    _, dot, ext = name.rpartition(".")
    return ext if dot else ""


def classify_language(name: str) -> str:
    """Map a filename to a display language label, ``"Unknown"`` if unmapped."""
    return LANGUAGE_MAP.get(extension_of(name).lower(), UNKNOWN_LANGUAGE)


def classify_kind(ext: str) -> FileKind:
    """Decide whether an extension is loaded as text or as binary content."""
    if ext.lower().lstrip(".") in BINARY_EXTENSIONS:
        return FileKind.BINARY
    return FileKind.TEXT


def guess_mime_type(name: str, declared: str | None = None) -> str:
    """Best-effort MIME type for a file.

    Args:
        name: Filename used for extension-based guessing
        declared: MIME type reported by the file source, if any

    Returns:
        The declared type when non-empty, else a guess from the filename,
        else ``application/octet-stream``.
    """
    if declared:
        return declared
    guessed, _ = mimetypes.guess_type(name, strict=False)
    return guessed or DEFAULT_MIME_TYPE
