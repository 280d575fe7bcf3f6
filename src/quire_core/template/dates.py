"""Timestamp normalisation and fixed-format rendering."""

import re
from collections.abc import Callable
from datetime import UTC, datetime, timedelta, timezone

Clock = Callable[[], datetime]

_DAY_NAMES = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_MONTH_NAMES = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
_FULL_DAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
_FULL_MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

# A "%" directive: optional padding flag, then the conversion character
_STRFTIME_DIRECTIVE = re.compile(r"%([-_0]?)(.?)", re.DOTALL)
_STRFTIME_CODES = frozenset("aAbBcCdDeFgGhHIjklmMnpPrRsStTuUVwWxXyYzZf%")


def system_clock() -> datetime:
    """Current instant, UTC."""
    return datetime.now(UTC)


def normalise_datetime(when: datetime) -> datetime:
    """Convert to a fixed-offset zone carrying the same UTC offset.

    Naive values are interpreted in the local zone.
    """
    if when.tzinfo is None or when.utcoffset() is None:
        when = when.astimezone()
    offset = when.utcoffset() or timedelta(0)
    return when.astimezone(timezone(offset))


def now_utc(clock: Clock = system_clock) -> datetime:
    return normalise_datetime(clock().astimezone(UTC))


def now_local(clock: Clock = system_clock) -> datetime:
    return normalise_datetime(clock().astimezone())


def _offset(when: datetime, colon: bool) -> str:
    offset = when.utcoffset() or timedelta(0)
    minutes = int(offset.total_seconds()) // 60
    sign = "-" if minutes < 0 else "+"
    hours, minutes = divmod(abs(minutes), 60)
    return f"{sign}{hours:02d}{':' if colon else ''}{minutes:02d}"


def format_rfc2822(when: datetime) -> str:
    """Format as RFC 2822, e.g. "Thu,  6 Sep 2018 18:32:22 +0200".

    Day and month names are always English; the day is space-padded.
    """
    return (
        f"{_DAY_NAMES[when.weekday()]}, {when.day:2d} {_MONTH_NAMES[when.month - 1]} "
        f"{when.year:04d} {when.hour:02d}:{when.minute:02d}:{when.second:02d} "
        f"{_offset(when, colon=False)}"
    )


def format_rfc3339(when: datetime) -> str:
    """Format as RFC 3339, e.g. "2018-09-06T18:32:22+02:00"."""
    stamp = f"{when.year:04d}-{when.month:02d}-{when.day:02d}T{when.hour:02d}:{when.minute:02d}:{when.second:02d}"
    if when.microsecond:
        stamp += f".{when.microsecond:06d}"
    return stamp + _offset(when, colon=True)


def _english_name(when: datetime, match: re.Match[str]) -> str:
    code = match.group(2)
    if code == "a":
        return _DAY_NAMES[when.weekday()]
    if code == "A":
        return _FULL_DAY_NAMES[when.weekday()]
    if code in ("b", "h"):
        return _MONTH_NAMES[when.month - 1]
    if code == "B":
        return _FULL_MONTH_NAMES[when.month - 1]
    return match.group(0)


def format_strftime(when: datetime, pattern: str) -> str:
    """Format with a strftime pattern, day and month names in English.

    Other locale-dependent directives (%c, %x, %X, %p) follow the C library.
    """
    return when.strftime(_STRFTIME_DIRECTIVE.sub(lambda match: _english_name(when, match), pattern))


def compile_strftime(pattern: str) -> Callable[[datetime], str] | None:
    """Formatter for pattern, or None if it has an unknown or dangling directive."""
    for match in _STRFTIME_DIRECTIVE.finditer(pattern):
        if match.group(2) not in _STRFTIME_CODES:
            return None
    return lambda when: format_strftime(when, pattern)
