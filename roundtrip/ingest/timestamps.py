"""Timestamp parsing for exchange transaction logs.

The exchange exports timestamps in a human-readable form such as
``"Jan 20, 2025 at 10:04 AM PST"``. Those are resolved through a fixed
abbreviation table; anything else goes through pandas' generic parser.
"""

import logging
import re
from datetime import datetime, timedelta, timezone

import pandas as pd

logger = logging.getLogger(__name__)

# UTC offsets in hours for the abbreviations the exchange emits
TIMEZONE_OFFSETS: dict[str, float] = {
    "PST": -8, "PDT": -7, "PT": -8,
    "MST": -7, "MDT": -6, "MT": -7,
    "CST": -6, "CDT": -5, "CT": -6,
    "EST": -5, "EDT": -4, "ET": -5,
    "AKST": -9, "AKDT": -8, "AKT": -9,
    "HST": -10, "HDT": -9, "HT": -10,
    "AST": -4, "ADT": -3, "AT": -4,
    "UTC": 0, "GMT": 0, "Z": 0,
}

# Unknown abbreviations are read as Pacific standard time
DEFAULT_OFFSET_HOURS = -8

MONTH_NAMES = (
    "january", "february", "march", "april", "may", "june",
    "july", "august", "september", "october", "november", "december",
)

# Full names and three-letter abbreviations only
MONTHS: dict[str, int] = {
    **{name: number for number, name in enumerate(MONTH_NAMES, start=1)},
    **{name[:3]: number for number, name in enumerate(MONTH_NAMES, start=1)},
    "sept": 9,
}

EXCHANGE_PATTERN = re.compile(
    r"(?P<month>[A-Za-z]+)\.? (?P<day>\d{1,2}), (?P<year>\d{4}) at "
    r"(?P<hour>\d{1,2}):(?P<minute>\d{2}) ?(?P<ampm>[AP]M) (?P<tz>[A-Z]{1,4})",
    re.IGNORECASE,
)


def resolve_timezone(abbreviation: str) -> timezone:
    """Map a timezone abbreviation to a fixed UTC offset.
    
    Args:
        abbreviation: Abbreviation such as "PST" or "edt".
        
    Returns:
        Fixed-offset timezone. Unknown abbreviations map to UTC-8.
    """
    hours = TIMEZONE_OFFSETS.get(abbreviation.upper(), DEFAULT_OFFSET_HOURS)
    return timezone(timedelta(hours=hours))


def _parse_exchange_format(text: str) -> datetime | None:
    match = EXCHANGE_PATTERN.search(text)
    if match is None:
        return None

    month = MONTHS.get(match.group("month").lower())
    if month is None:
        return None

    hour = int(match.group("hour"))
    ampm = match.group("ampm").upper()
    if ampm == "PM" and hour != 12:
        hour += 12
    elif ampm == "AM" and hour == 12:
        hour = 0

    try:
        local = datetime(
            int(match.group("year")),
            month,
            int(match.group("day")),
            hour,
            int(match.group("minute")),
            tzinfo=resolve_timezone(match.group("tz")),
        )
    except ValueError:
        return None
    return local.astimezone(timezone.utc)


def _parse_generic(text: str) -> datetime | None:
    try:
        parsed = pd.to_datetime(text)
    except (ValueError, TypeError, OverflowError):
        return None
    if parsed is pd.NaT or pd.isna(parsed):
        return None

    result = parsed.to_pydatetime()
    if result.tzinfo is None:
        return result.replace(tzinfo=timezone.utc)
    return result.astimezone(timezone.utc)


def parse_timestamp(text: str) -> tuple[datetime, bool]:
    """Parse an exchange timestamp into a UTC instant.
    
    Args:
        text: Raw timestamp text from the log.
        
    Returns:
        Tuple of (aware UTC datetime, degraded). When the text cannot be
        parsed at all the current time is returned with degraded=True.
    """
    text = (text or "").strip()

    if text:
        parsed = _parse_exchange_format(text)
        if parsed is not None:
            return parsed, False

        parsed = _parse_generic(text)
        if parsed is not None:
            return parsed, False

    logger.error("Failed to parse date: %r, using current time", text)
    return datetime.now(timezone.utc), True
