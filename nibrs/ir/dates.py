"""
Date parsing for incident, clearance and arrest dates.

Accepts ISO dates (with or without a time part) and the common US forms
officers type: 03/14/2024, 3-14-24, March 14, 2024, Mar 14 2024, 20240314.
"""

from datetime import date, datetime
from typing import Optional

_US_FORMATS = (
    "%m/%d/%Y",
    "%m-%d-%Y",
    "%m/%d/%y",
    "%m-%d-%y",
    "%B %d, %Y",
    "%B %d %Y",
    "%b %d, %Y",
    "%b %d %Y",
    "%d %B %Y",
    "%Y%m%d",
    "%Y/%m/%d",
)


def parse_date(value: Optional[str]) -> Optional[date]:
    """Parse a date string, returning None if it is empty or unparseable."""
    if not value:
        return None
    text = value.strip()
    if not text:
        return None

    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        pass

    for fmt in _US_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def is_valid_date(value: Optional[str]) -> bool:
    return parse_date(value) is not None
