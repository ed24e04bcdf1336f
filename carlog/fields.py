"""Field parsing and validation helpers used when building records."""

import math
from datetime import date, datetime, timezone
from typing import Optional, Union

from dateutil import parser as date_parser

from .exceptions import RecordValidationError


def parse_date(value: Union[str, date, datetime], field: str = "date") -> date:
    """Parse a calendar date ("2025-01-15"); datetimes keep only their date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date_parser.isoparse(str(value)).date()
    except (ValueError, OverflowError) as e:
        raise RecordValidationError(f"Invalid date: {e}", field, value)


def parse_datetime(value: Union[str, date, datetime], field: str = "date") -> datetime:
    """
    Parse an ISO date-time ("2025-01-15T08:30").

    Aware values are converted to UTC and made naive so that every timestamp
    in a logbook compares against every other one.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    else:
        try:
            parsed = date_parser.isoparse(str(value))
        except (ValueError, OverflowError) as e:
            raise RecordValidationError(f"Invalid date-time: {e}", field, value)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def as_number(value, field: str) -> float:
    """Coerce a numeric field, rejecting booleans, non-numeric strings and NaN/inf."""
    if isinstance(value, bool):
        raise RecordValidationError(f"{field} must be a number", field, value)
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise RecordValidationError(f"{field} must be a number", field, value)
    if not math.isfinite(number):
        raise RecordValidationError(f"{field} must be a finite number", field, value)
    return number


def optional_number(value, field: str) -> Optional[float]:
    if value is None:
        return None
    return as_number(value, field)


def require_non_negative(value: float, field: str) -> None:
    if value < 0:
        raise RecordValidationError(f"{field} must not be negative", field, value)


def require_percentage(value: Optional[float], field: str) -> None:
    """Tank percentages are gauge readings between 0 and 100."""
    if value is not None and not 0 <= value <= 100:
        raise RecordValidationError(f"{field} must be between 0 and 100", field, value)
