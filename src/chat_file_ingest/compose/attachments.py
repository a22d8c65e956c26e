"""Fold completed file entries into LiteLLM-style chat messages.

Text attachments are inlined into the last user message as fenced blocks.
Binary attachments are either carried as ``file`` content parts holding a
base64 data URI (``BinaryPolicy.ENCODE`` with content present) or
summarized by name and type in a system note placed right after the user
message.
"""

from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from chat_file_ingest.files.classifier import FileKind
from chat_file_ingest.files.loader import BinaryPolicy
from chat_file_ingest.files.registry import FileEntry, FileStatus

BINARY_SUMMARY_INSTRUCTION = (
    "Provide a brief summary of binary attachments and confirm receipt."
)


class Attachment(BaseModel):
    """Payload handed to compose logic for one completed file.

    Attributes:
        name: Original filename
        mime_type: Best-effort MIME type
        kind: Text or binary
        content: Text, base64 text, or None for skipped binary files
    """

    model_config = ConfigDict(frozen=True)

    name: str
    mime_type: str = Field(serialization_alias="type")
    kind: FileKind
    content: str | None = None

    @property
    def binary(self) -> bool:
        return self.kind is FileKind.BINARY

    @classmethod
    def from_entry(cls, entry: FileEntry) -> "Attachment":
        return cls(
            name=entry.name,
            mime_type=entry.mime_type,
            kind=entry.kind,
            content=entry.content,
        )


def to_attachments(entries: Iterable[FileEntry]) -> list[Attachment]:
    """Convert completed entries to attachments, preserving order."""
    return [
        Attachment.from_entry(entry)
        for entry in entries
        if entry.status is FileStatus.COMPLETED
    ]


def _text_block(attachment: Attachment) -> str:
    return f"\n\nAttached file ({attachment.name}):\n```\n{attachment.content}\n```\n"


def _file_part(attachment: Attachment) -> dict[str, Any]:
    return {
        "type": "file",
        "file": {
            "filename": attachment.name,
            "file_data": f"data:{attachment.mime_type};base64,{attachment.content}",
        },
    }


def _is_text_part(part: Any) -> bool:
    return isinstance(part, dict) and part.get("type") == "text"


def _split_content(content: Any) -> tuple[str, list[Any]]:
    # Returns the joined text and any non-text parts, in order
    if isinstance(content, str):
        return content, []
    if isinstance(content, list):
        text = "".join(p.get("text", "") for p in content if _is_text_part(p))
        return text, [p for p in content if not _is_text_part(p)]
    return "", []


def enrich_messages(
    messages: list[dict[str, Any]],
    attachments: list[Attachment],
    binary_policy: BinaryPolicy = BinaryPolicy.ENCODE,
) -> list[dict[str, Any]]:
    """Return a copy of ``messages`` with attachments folded into the last user turn.

    Args:
        messages: Chat messages with ``role`` and ``content`` keys
        attachments: Completed attachments, in display order
        binary_policy: Policy the attachments were loaded with

    Returns:
        A new message list. The input list and its dicts are not modified.
        When there is no user message the copy is returned unchanged.
    """
    enriched = [dict(message) for message in messages]

    user_indexes = [i for i, m in enumerate(enriched) if m.get("role") == "user"]
    if not user_indexes:
        return enriched
    last_user = user_indexes[-1]
    message = enriched[last_user]
    user_text, other_parts = _split_content(message.get("content"))
    file_parts: list[dict[str, Any]] = []
    notes: list[str] = []

    for attachment in attachments:
        if attachment.binary:
            if binary_policy is BinaryPolicy.ENCODE and attachment.content:
                file_parts.append(_file_part(attachment))
            else:
                notes.append(
                    f"Binary file attached: {attachment.name} ({attachment.mime_type})"
                )
        elif attachment.content:
            user_text += _text_block(attachment)

    if other_parts or file_parts:
        message["content"] = [
            {"type": "text", "text": user_text},
            *other_parts,
            *file_parts,
        ]
    else:
        message["content"] = user_text

    message["metadata"] = {
        **(message.get("metadata") or {}),
        "files": [a.model_dump(by_alias=True, mode="json") for a in attachments],
    }

    if notes:
        enriched.insert(
            last_user + 1,
            {
                "role": "system",
                "content": "\n".join(notes) + "\n" + BINARY_SUMMARY_INSTRUCTION,
            },
        )

    return enriched
