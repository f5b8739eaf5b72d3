"""Date handling for census reference dates and genealogical record dates.

Census dates use the GEDCOM style "DD MON YYYY" (e.g. "02 APR 1911").
Stored record dates may also be ISO dates or partial GEDCOM dates; a partial
date is read as the first day of the period it names.
"""

from datetime import date, datetime

CENSUS_DATE_FORMAT = "%d %b %Y"

# Tried in order; the first matching format wins.
_RECORD_DATE_FORMATS = (
    CENSUS_DATE_FORMAT,
    "%Y-%m-%d",
    "%b %Y",
    "%Y",
)


def parse_census_date(text: str) -> date:
    """Parse a census reference date.

    Args:
        text: Date in "DD MON YYYY" form

    Returns:
        The parsed date

    Raises:
        ValueError: If the text is not a two-digit day, three-letter month
            abbreviation and four-digit year
    """
    parts = text.split(" ")
    if len(parts) != 3 or len(parts[0]) != 2 or len(parts[1]) != 3 or len(parts[2]) != 4:
        raise ValueError(f"Census date must look like '02 APR 1911', got {text!r}")
    return datetime.strptime(text, CENSUS_DATE_FORMAT).date()


def parse_record_date(text: str | None) -> date | None:
    """Parse a date as stored on a genealogical record.

    Returns None for empty or unrecognised text.
    """
    if not text or not text.strip():
        return None

    cleaned = " ".join(text.split())
    for fmt in _RECORD_DATE_FORMATS:
        try:
            return datetime.strptime(cleaned, fmt).date()
        except ValueError:
            continue
    return None


def whole_years_between(start: date, end: date) -> int:
    """Completed years from start to end (negative if end precedes start)."""
    years = end.year - start.year
    if (end.month, end.day) < (start.month, start.day):
        years -= 1
    return years
