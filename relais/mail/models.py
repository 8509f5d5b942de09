"""Data models for Gmail threads and extracted attachments."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class Attachment:
    """A file attached to a Gmail message.

    Small attachments arrive inline in the message payload (``data``);
    larger ones only carry an ``attachment_id`` and are downloaded on
    demand with ``GmailClient.get_attachment_data``.
    """

    message_id: str
    name: str
    mime_type: str = "application/octet-stream"
    attachment_id: str | None = None
    data: bytes | None = None
    size: int = 0


@dataclass(frozen=True)
class Message:
    """A single message inside a thread."""

    id: str
    thread_id: str
    subject: str
    date: datetime
    body: str = ""  # text/plain content
    attachments: tuple[Attachment, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Thread:
    """A Gmail conversation. Messages are in chronological order."""

    id: str
    messages: tuple[Message, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class EmailData:
    """PDF attachments taken from the latest message of a thread."""

    subject: str
    date: datetime
    message_id: str
    body: str
    attachments: tuple[Attachment, ...]
