"""Gmail access: query building, thread retrieval and PDF extraction."""

from .extract import attachment_names, extract_email_data, get_pdf_attachments
from .gmail import GmailClient
from .models import Attachment, EmailData, Message, Thread
from .query import build_search_query, build_subject_query

__all__ = [
    "Attachment",
    "EmailData",
    "GmailClient",
    "Message",
    "Thread",
    "attachment_names",
    "build_search_query",
    "build_subject_query",
    "extract_email_data",
    "get_pdf_attachments",
]
