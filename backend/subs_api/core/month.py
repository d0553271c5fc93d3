"""
Month Dates
Conversion between the MM-YYYY wire format and stored calendar dates.

A subscription month has no day-of-month meaning. On the wire it is always
``MM-YYYY``; in the database it is the first day of that month.

Example:
    parse_month("09-2025")   -> date(2025, 9, 1)
    format_month(date(2025, 9, 1)) -> "09-2025"
    end_of_month("02-2024")  -> date(2024, 2, 29)
"""

import calendar
import re
from datetime import date

from subs_api.core.exceptions import InvalidMonthFormat


_MONTH_PATTERN = re.compile(r"(0[1-9]|1[0-2])-([0-9]{4})")


def parse_month(value: str, field: str = "date") -> date:
    """
    Parse an ``MM-YYYY`` string into the first day of that month.

    Args:
        value: Month string, e.g. "09-2025"
        field: Name reported in the error message

    Raises:
        InvalidMonthFormat: for any other shape, including "2025-09",
            "9-2025", "13-2025" and "09/2025"
    """
    if not isinstance(value, str):
        raise InvalidMonthFormat(field, str(value))

    match = _MONTH_PATTERN.fullmatch(value)
    if match is None:
        raise InvalidMonthFormat(field, value)

    month, year = int(match.group(1)), int(match.group(2))
    try:
        return date(year, month, 1)
    except ValueError:
        # year 0000
        raise InvalidMonthFormat(field, value) from None


def format_month(value: date) -> str:
    """Render a stored date as ``MM-YYYY``."""
    return f"{value.month:02d}-{value.year:04d}"


def end_of_month(value: str, field: str = "to") -> date:
    """
    Last calendar day of an ``MM-YYYY`` month.

    Used for "to" filters so that ``start_date <= end_of_month(to)``
    includes the whole final month.
    """
    first = parse_month(value, field)
    _, last_day = calendar.monthrange(first.year, first.month)
    return first.replace(day=last_day)
