"""Compose helpers that turn ingested files into chat message payloads."""

from .attachments import Attachment, enrich_messages, to_attachments

__all__ = ["Attachment", "enrich_messages", "to_attachments"]
