"""Search criteria and operator input parsing."""

import re
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta

from relais.errors import InvalidInputError

DEFAULT_FOLDER_PATH = "/"

_DATE_PATTERN = re.compile(r"^(\d{4})[-/](\d{2})[-/](\d{2})$")

# Day zero of spreadsheet date serial numbers
SERIAL_EPOCH = date(1899, 12, 30)


@dataclass(frozen=True)
class SearchCriteria:
    """Filters for the search-and-list flow.

    Dates may be None when the operator left them blank; validate_criteria
    rejects that before any search runs.
    """

    start_date: date | None
    end_date: date | None
    keywords: list[str] = field(default_factory=list)
    folder_path: str = DEFAULT_FOLDER_PATH


def parse_date(value: date | str | int | float) -> date:
    """Parse a YYYY-MM-DD (or YYYY/MM/DD) string into a date.

    date and datetime values are accepted as-is. Numbers are spreadsheet
    date serials (days since 1899-12-30, fraction is the time of day), which
    is how a real date cell reads whatever its display format.

    Raises:
        InvalidInputError: If the value is not a valid date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, bool):
        raise InvalidInputError(f"Invalid date: {value!r}")
    if isinstance(value, (int, float)):
        try:
            return SERIAL_EPOCH + timedelta(days=int(value))
        except (OverflowError, ValueError):
            raise InvalidInputError(f"Invalid date: {value!r}")

    text = str(value).strip()
    match = _DATE_PATTERN.match(text)
    if not match:
        raise InvalidInputError(
            f"Invalid date format, expected YYYY-MM-DD: {text!r}"
        )

    try:
        return date(int(match[1]), int(match[2]), int(match[3]))
    except ValueError:
        raise InvalidInputError(f"Invalid date: {text!r}")


def parse_keywords(value: str | None) -> list[str]:
    """Split a comma-separated keyword string, dropping blanks."""
    if not value or not value.strip():
        return []

    return [keyword.strip() for keyword in value.split(",") if keyword.strip()]


def normalize_folder_path(value: str | None) -> str:
    """Blank folder paths mean the Drive root."""
    if value is None:
        return DEFAULT_FOLDER_PATH
    return value.strip() or DEFAULT_FOLDER_PATH


def validate_criteria(criteria: SearchCriteria) -> None:
    """Check criteria before running a search.

    Raises:
        InvalidInputError: If a date is missing, the range is reversed or
            the folder path is empty.
    """
    if criteria.start_date is None:
        raise InvalidInputError("Start date is missing.")

    if criteria.end_date is None:
        raise InvalidInputError("End date is missing.")

    if criteria.start_date > criteria.end_date:
        raise InvalidInputError("Start date is after end date.")

    if not criteria.folder_path:
        raise InvalidInputError("Folder path is missing.")


def format_datetime(value: datetime) -> str:
    """Render a timestamp as YYYY-MM-DD HH:MM:SS in local time."""
    if value.tzinfo is not None:
        value = value.astimezone()
    return value.strftime("%Y-%m-%d %H:%M:%S")
