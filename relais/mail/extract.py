"""PDF attachment extraction from Gmail threads.

Only the last message of a thread is inspected. Earlier messages in the
conversation are ignored even if they carry PDFs.
"""

from .models import Attachment, EmailData, Message, Thread


def is_pdf_name(name: str) -> bool:
    return name.lower().endswith(".pdf")


def get_pdf_attachments(message: Message) -> list[Attachment]:
    """Return the message's attachments whose filename ends in .pdf."""
    return [att for att in message.attachments if is_pdf_name(att.name)]


def extract_email_data(thread: Thread) -> EmailData | None:
    """Extract PDF attachments and metadata from the latest message.

    Returns:
        EmailData, or None if the thread is empty or its latest message
        has no PDF attachment.
    """
    if not thread.messages:
        return None

    message = thread.messages[-1]
    attachments = get_pdf_attachments(message)

    if not attachments:
        return None

    return EmailData(
        subject=message.subject,
        date=message.date,
        message_id=message.id,
        body=message.body,
        attachments=tuple(attachments),
    )


def attachment_names(email_data: EmailData | None) -> str:
    """Comma-separated attachment names, or an empty string."""
    if email_data is None:
        return ""
    return ", ".join(att.name for att in email_data.attachments)
