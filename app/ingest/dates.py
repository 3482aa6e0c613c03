"""
Date handling for workbook cells and API payloads.

Spreadsheet dates arrive either as real datetimes (cells formatted as dates)
or as raw serial numbers counted from the 1900 spreadsheet epoch. Serial
25569 is 1970-01-01, so a serial decodes as the Unix epoch plus
(serial - 25569) days.
"""

import math
from datetime import date, datetime, timedelta
from decimal import Decimal

from django.utils.dateparse import parse_date, parse_datetime

SERIAL_UNIX_OFFSET = 25569
UNIX_EPOCH = date(1970, 1, 1)


def serial_to_date(serial):
    """Decode a spreadsheet date serial; any time-of-day fraction is dropped."""
    days = math.floor(float(serial)) - SERIAL_UNIX_OFFSET
    return UNIX_EPOCH + timedelta(days=days)


def to_date(value):
    """
    Coerce a cell or payload value to a date.

    Accepts date/datetime objects, serial numbers (numeric or numeric strings)
    and ISO date or datetime strings. Anything else raises ValueError.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, bool):
        raise ValueError(f"Not a date: {value!r}")
    if isinstance(value, (int, float, Decimal)):
        return serial_to_date(value)
    if isinstance(value, str):
        text = value.strip()
        parsed = parse_date(text)
        if parsed is not None:
            return parsed
        parsed_dt = parse_datetime(text)
        if parsed_dt is not None:
            return parsed_dt.date()
        try:
            return serial_to_date(text)
        except (ValueError, OverflowError):
            raise ValueError(f"Not a date or date serial: {value!r}") from None
    raise ValueError(f"Not a date: {value!r}")
