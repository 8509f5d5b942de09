"""Exception hierarchy shared by all relais components.

Name collisions on copy are not errors: they are reported through
``relais.drive.copy.AlreadyExists``.
"""

import functools

from googleapiclient.errors import HttpError


class RelaisError(Exception):
    """Base class for errors surfaced to the operator."""

    pass


class ConfigError(RelaisError):
    """Configuration is missing or malformed."""

    pass


class InvalidInputError(RelaisError):
    """Bad or missing operator input (dates, folder path, file name)."""

    pass


class FolderResolutionError(RelaisError):
    """A folder path could not be resolved in Drive."""

    pass


class NotFoundError(RelaisError):
    """Source message or named attachment is missing on re-lookup."""

    pass


class HostError(RelaisError):
    """Any other failure reported by a Google API."""

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status


def host_call(func):
    """Re-raise HttpError from a Google API client method as HostError."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except HttpError as e:
            status = e.resp.status
            raise HostError(
                f"Google API request failed ({status}): {e.reason}", status=status
            ) from e

    return wrapper
