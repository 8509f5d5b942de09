"""Tests for Gmail API client.

Uses mocking to test API interactions without real credentials.
"""

import base64
from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

import pytest

from relais.mail.gmail import GmailClient, parse_message
from relais.mail.models import Attachment


def b64(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode("ascii")


def full_message(message_id="msg1", parts=None, subject="Invoice January"):
    """Build a Gmail API message resource in format=full."""
    return {
        "id": message_id,
        "threadId": "thread1",
        "internalDate": "1705311000000",  # 2024-01-15 09:30:00 UTC
        "payload": {
            "mimeType": "multipart/mixed",
            "headers": [
                {"name": "From", "value": "billing@example.com"},
                {"name": "Subject", "value": subject},
            ],
            "parts": parts or [],
        },
    }


@pytest.fixture
def mock_credentials():
    """Create mock credentials for testing."""
    creds = MagicMock()
    creds.valid = True
    creds.expired = False
    return creds


@pytest.fixture
def mock_service():
    """Create a mock Gmail service."""
    return MagicMock()


@pytest.fixture
def gmail_client(mock_credentials, mock_service):
    """Create a GmailClient with mocked service."""
    with patch("relais.mail.gmail.build") as mock_build:
        mock_build.return_value = mock_service
        client = GmailClient(mock_credentials)
        return client


class TestSearchThreads:
    """Tests for search_threads method."""

    def test_returns_thread_ids(self, gmail_client, mock_service):
        mock_service.users().threads().list().execute.return_value = {
            "threads": [{"id": "t1"}, {"id": "t2"}]
        }

        thread_ids = gmail_client.search_threads("has:attachment")

        assert thread_ids == ["t1", "t2"]

    def test_respects_max_results(self, gmail_client, mock_service):
        mock_service.users().threads().list().execute.return_value = {
            "threads": [{"id": f"t{i}"} for i in range(50)]
        }

        thread_ids = gmail_client.search_threads("q", max_results=5)

        assert len(thread_ids) == 5

    def test_handles_pagination(self, gmail_client, mock_service):
        """search_threads follows nextPageToken."""
        mock_service.users().threads().list().execute.side_effect = [
            {"threads": [{"id": "t1"}], "nextPageToken": "token123"},
            {"threads": [{"id": "t2"}]},
        ]

        thread_ids = gmail_client.search_threads("q")

        assert thread_ids == ["t1", "t2"]
        assert mock_service.users().threads().list().execute.call_count == 2

    def test_handles_empty_response(self, gmail_client, mock_service):
        mock_service.users().threads().list().execute.return_value = {}

        assert gmail_client.search_threads("q") == []

    def test_passes_query(self, gmail_client, mock_service):
        mock_service.users().threads().list().execute.return_value = {}

        gmail_client.search_threads("subject:(invoice)", max_results=10)

        mock_service.users().threads().list.assert_called_with(
            userId="me", q="subject:(invoice)", maxResults=10
        )


class TestParseMessage:
    """Tests for parse_message."""

    def test_reads_subject_and_date(self):
        message = parse_message(full_message())

        assert message.subject == "Invoice January"
        assert message.date == datetime(2024, 1, 15, 9, 30, tzinfo=timezone.utc)
        assert message.thread_id == "thread1"

    def test_collects_nested_attachments(self):
        """Attachments inside nested multiparts are found."""
        raw = full_message(
            parts=[
                {
                    "mimeType": "multipart/alternative",
                    "filename": "",
                    "body": {"size": 0},
                    "parts": [
                        {
                            "mimeType": "text/plain",
                            "filename": "",
                            "body": {"data": b64(b"Please find attached.")},
                        },
                    ],
                },
                {
                    "mimeType": "application/pdf",
                    "filename": "invoice.pdf",
                    "body": {"attachmentId": "att-1", "size": 2048},
                },
                {
                    "mimeType": "image/png",
                    "filename": "logo.png",
                    "body": {"data": b64(b"PNG"), "size": 3},
                },
            ]
        )

        message = parse_message(raw)

        assert message.body == "Please find attached."
        assert [att.name for att in message.attachments] == ["invoice.pdf", "logo.png"]
        assert message.attachments[0].attachment_id == "att-1"
        assert message.attachments[0].data is None
        assert message.attachments[0].size == 2048
        assert message.attachments[1].data == b"PNG"

    def test_missing_subject_is_empty(self):
        raw = full_message()
        raw["payload"]["headers"] = []

        assert parse_message(raw).subject == ""


class TestGetThread:
    def test_returns_messages_in_order(self, gmail_client, mock_service):
        mock_service.users().threads().get().execute.return_value = {
            "id": "thread1",
            "messages": [full_message("m1"), full_message("m2")],
        }

        thread = gmail_client.get_thread("thread1")

        assert thread.id == "thread1"
        assert [m.id for m in thread.messages] == ["m1", "m2"]

    def test_search_fetches_each_thread(self, gmail_client, mock_service):
        mock_service.users().threads().list().execute.return_value = {
            "threads": [{"id": "t1"}, {"id": "t2"}]
        }
        mock_service.users().threads().get().execute.side_effect = [
            {"id": "t1", "messages": [full_message("m1")]},
            {"id": "t2", "messages": [full_message("m2")]},
        ]

        threads = gmail_client.search("q")

        assert [t.id for t in threads] == ["t1", "t2"]


class TestGetAttachmentData:
    """Tests for get_attachment_data method."""

    def test_inline_data_needs_no_request(self, gmail_client, mock_service):
        attachment = Attachment(message_id="m1", name="a.pdf", data=b"%PDF-inline")

        assert gmail_client.get_attachment_data(attachment) == b"%PDF-inline"
        mock_service.users().messages().attachments().get.assert_not_called()

    def test_downloads_by_attachment_id(self, gmail_client, mock_service):
        payload = b"%PDF-1.7 \xff\xfe"
        mock_service.users().messages().attachments().get().execute.return_value = {
            "data": b64(payload).rstrip("="),
            "size": len(payload),
        }
        attachment = Attachment(message_id="m1", name="a.pdf", attachment_id="att-9")

        data = gmail_client.get_attachment_data(attachment)

        assert data == payload
        mock_service.users().messages().attachments().get.assert_called_with(
            userId="me", messageId="m1", id="att-9"
        )
