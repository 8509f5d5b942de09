"""Gmail search query construction.

Keywords are passed through verbatim: a keyword containing Gmail search
operators or parentheses changes the meaning of the query.
"""

from datetime import date

# has:attachment narrows to mail with files, filename:pdf to PDF files
ATTACHMENT_FILTER = "has:attachment filename:pdf"


def _format_query_date(value: date) -> str:
    # Gmail query format: YYYY/MM/DD
    return f"{value.year}/{value.month:02d}/{value.day:02d}"


def build_search_query(start: date, end: date, keywords: list[str]) -> str:
    """Build the Gmail query for the search-and-list flow.

    Gmail treats ``before:`` as exclusive, so mail received on ``end``
    itself is not matched.

    Args:
        start: First day of the window (``after:``).
        end: Day the window closes (``before:``).
        keywords: Subject keywords, OR'd together. Empty means no filter.

    Returns:
        Query string, e.g.
        ``has:attachment filename:pdf after:2024/01/01 before:2024/01/31
        (subject:(invoice) OR subject:(receipt))``.
    """
    query = (
        f"{ATTACHMENT_FILTER} "
        f"after:{_format_query_date(start)} before:{_format_query_date(end)}"
    )

    if keywords:
        clause = " OR ".join(f"subject:({keyword})" for keyword in keywords)
        query += f" ({clause})"

    return query


def build_subject_query(subject: str) -> str:
    """Build the exact-subject query used to re-locate a ledger row's message."""
    return f'subject:"{subject}"'
