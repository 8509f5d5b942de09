"""Gmail API client for attachment search.

Wraps the Gmail API to provide a clean interface for the forwarding flows.
Handles pagination, payload walking and base64url decoding.
"""

import base64
import logging
from datetime import datetime, timezone

from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build

from relais.errors import host_call

from .models import Attachment, Message, Thread

logger = logging.getLogger(__name__)


def _decode_base64url(data: str) -> bytes:
    """Decode Gmail's URL-safe base64, tolerating missing padding."""
    return base64.urlsafe_b64decode(data + "=" * (-len(data) % 4))


def _header(headers: list[dict], name: str) -> str:
    """Return the first header value matching name (case-insensitive)."""
    lowered = name.lower()
    for header in headers:
        if header.get("name", "").lower() == lowered:
            return header.get("value", "")
    return ""


def _walk_parts(part: dict):
    """Yield a payload part and all of its nested parts, depth first."""
    yield part
    for child in part.get("parts", []) or []:
        yield from _walk_parts(child)


def parse_message(raw: dict) -> Message:
    """Convert a Gmail API message resource (format=full) into a Message."""
    payload = raw.get("payload", {})
    headers = payload.get("headers", [])

    # internalDate is milliseconds since the epoch, as a string
    internal_date = int(raw.get("internalDate", "0"))
    received = datetime.fromtimestamp(internal_date / 1000, tz=timezone.utc)

    body = ""
    attachments: list[Attachment] = []

    for part in _walk_parts(payload):
        part_body = part.get("body", {})
        filename = part.get("filename", "")

        if filename:
            inline = part_body.get("data")
            attachments.append(
                Attachment(
                    message_id=raw["id"],
                    name=filename,
                    mime_type=part.get("mimeType", "application/octet-stream"),
                    attachment_id=part_body.get("attachmentId"),
                    data=_decode_base64url(inline) if inline else None,
                    size=part_body.get("size", 0),
                )
            )
        elif not body and part.get("mimeType") == "text/plain":
            data = part_body.get("data")
            if data:
                body = _decode_base64url(data).decode("utf-8", errors="replace")

    return Message(
        id=raw["id"],
        thread_id=raw.get("threadId", ""),
        subject=_header(headers, "Subject"),
        date=received,
        body=body,
        attachments=tuple(attachments),
    )


class GmailClient:
    """Client for Gmail API operations.

    Example:
        creds = get_credentials()
        client = GmailClient(creds)
        threads = client.search("has:attachment filename:pdf")
        data = client.get_attachment_data(threads[0].messages[-1].attachments[0])
    """

    def __init__(self, credentials: Credentials):
        """Initialize Gmail client with credentials.

        Args:
            credentials: Google OAuth credentials object.
        """
        self._credentials = credentials
        self._service = build("gmail", "v1", credentials=credentials)

    @host_call
    def search_threads(self, query: str, max_results: int = 500) -> list[str]:
        """List thread IDs matching a Gmail search query.

        Handles pagination automatically to fetch up to max_results threads.
        Threads come back newest first, as Gmail orders them.

        Returns:
            List of thread ID strings.
        """
        thread_ids = []
        page_token = None

        while len(thread_ids) < max_results:
            # API max per page is 500
            page_size = min(max_results - len(thread_ids), 500)

            params = {
                "userId": "me",
                "q": query,
                "maxResults": page_size,
            }
            if page_token:
                params["pageToken"] = page_token

            result = self._service.users().threads().list(**params).execute()

            for thread in result.get("threads", []):
                thread_ids.append(thread["id"])
                if len(thread_ids) >= max_results:
                    break

            page_token = result.get("nextPageToken")
            if not page_token:
                break

        return thread_ids

    @host_call
    def get_thread(self, thread_id: str) -> Thread:
        """Fetch a thread with all messages in full format."""
        result = (
            self._service.users()
            .threads()
            .get(userId="me", id=thread_id, format="full")
            .execute()
        )

        messages = tuple(parse_message(raw) for raw in result.get("messages", []))
        return Thread(id=result["id"], messages=messages)

    def search(self, query: str, max_results: int = 500) -> list[Thread]:
        """Search and fetch full threads, in Gmail's result order."""
        logger.debug("Gmail query: %s", query)
        threads = [
            self.get_thread(thread_id)
            for thread_id in self.search_threads(query, max_results=max_results)
        ]
        logger.debug("Gmail returned %d thread(s)", len(threads))
        return threads

    @host_call
    def get_attachment_data(self, attachment: Attachment) -> bytes:
        """Return the bytes of an attachment, downloading them if needed."""
        if attachment.data is not None:
            return attachment.data

        result = (
            self._service.users()
            .messages()
            .attachments()
            .get(
                userId="me",
                messageId=attachment.message_id,
                id=attachment.attachment_id,
            )
            .execute()
        )

        return _decode_base64url(result.get("data", ""))
