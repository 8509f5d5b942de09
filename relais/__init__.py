"""relais - forward PDF attachments from Gmail into Google Drive."""

__version__ = "0.1.0"
