"""
Payroll utility functions for rounding, numeric coercion and period handling.

Every derived money or hour quantity in the payroll core passes through
round_half_up(), so intermediate values are stable and auditable.
"""

import calendar
import logging
import re
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

import pytz

from django.conf import settings
from django.core.exceptions import ValidationError

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")
ZERO = Decimal("0.00")

_MONTH_RE = re.compile(r"^(\d{4})-(\d{2})$")


def round_half_up(value) -> Decimal:
    """Round to 2 decimal places with half-up rounding"""
    return Decimal(value).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def to_decimal(value, field: str = "value") -> Decimal:
    """
    Coerce upstream numeric input to Decimal.

    Missing values are zero. Unparsable values are also zero, with a warning,
    so one bad record does not abort a whole batch.

    Args:
        value: Raw value (Decimal, int, float, str or None)
        field: Field name used in the warning

    Returns:
        Decimal: Parsed value, or 0 when missing or malformed
    """
    if value is None or value == "":
        return Decimal("0")
    if isinstance(value, Decimal):
        parsed = value
    else:
        try:
            parsed = Decimal(str(value).strip())
        except (InvalidOperation, ValueError, TypeError):
            parsed = None

    if parsed is None or not parsed.is_finite():
        logger.warning(
            "Malformed numeric input defaulted to zero",
            extra={
                "field": field,
                "value_type": type(value).__name__,
                "action": "coerce_decimal",
            },
        )
        return Decimal("0")
    return parsed


def get_payroll_timezone():
    return pytz.timezone(getattr(settings, "PAYROLL_TIME_ZONE", "Asia/Seoul"))


def to_local_date(value) -> date:
    """
    Convert a date, datetime or ISO string to a calendar date in the payroll
    time zone. Naive datetimes are taken as already local.
    """
    if isinstance(value, str):
        text = value.strip()
        if len(text) == 10:
            return date.fromisoformat(text)
        value = datetime.fromisoformat(text.replace("Z", "+00:00"))

    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.date()
        return value.astimezone(get_payroll_timezone()).date()
    if isinstance(value, date):
        return value
    raise TypeError(f"Cannot convert {type(value).__name__} to a date")


def resolve_month_range(month: str):
    """
    Resolve a "YYYY-MM" token to the inclusive (first_day, last_day) range.

    Raises:
        ValidationError: If the token is not a valid month
    """
    match = _MONTH_RE.match((month or "").strip())
    if not match:
        raise ValidationError({"month": "Month must use the YYYY-MM format"})

    year, month_number = int(match.group(1)), int(match.group(2))
    if not 1 <= month_number <= 12:
        raise ValidationError({"month": "Month must be between 01 and 12"})

    _, last_day = calendar.monthrange(year, month_number)
    return date(year, month_number, 1), date(year, month_number, last_day)


def is_whole_month(start: date, end: date) -> bool:
    if start.year != end.year or start.month != end.month or start.day != 1:
        return False
    return end.day == calendar.monthrange(end.year, end.month)[1]


def period_label(start: date, end: date) -> str:
    """Human-readable settlement period, e.g. "October 2026" """
    if is_whole_month(start, end):
        return f"{calendar.month_name[start.month]} {start.year}"
    return f"{start.isoformat()} to {end.isoformat()}"
