"""Wall-clock calendar arithmetic.

Shifts are computed on a ``WallTime``: a day count since 1970-01-01 and
the nanoseconds into that day, both plain ints. Civil dates are read and
written through numpy's ``datetime64[M]``/``datetime64[D]``, so
intermediate values may lie far outside the range of any Timestamp.
Only the final result is turned back into a ``pd.Timestamp`` (see
``to_timestamp``), and the input's tz is re-attached there.
"""

from datetime import datetime, timedelta, tzinfo
from typing import NamedTuple

import numpy as np
import pandas as pd

from timeshift.config import get_timeshift_config

NS_PER_SECOND = 1_000_000_000
NS_PER_DAY = 86_400 * NS_PER_SECOND

_EPOCH_MONTH = np.datetime64("1970-01", "M")

# Wall times pandas can hold at nanosecond resolution
_NS_MIN = pd.Timestamp.min.value
_NS_MAX = pd.Timestamp.max.value

# Years a Timestamp of any resolution can hold
MIN_YEAR = 1
MAX_YEAR = 9999


class ShiftRangeError(OverflowError):
    """Raised when a shifted timestamp falls outside years 1-9999."""
    pass


class WallTime(NamedTuple):
    """A tz-naive wall time."""

    days: int  # since 1970-01-01
    nanos: int  # into the day, 0 <= nanos < NS_PER_DAY


def days_from_civil(year: int, month: int) -> int:
    """Day number of the first of a month; months outside 1-12 carry into years."""
    months = (year - 1970) * 12 + (month - 1)
    first = (_EPOCH_MONTH + np.timedelta64(months, "M")).astype("datetime64[D]")
    return int(first.astype(np.int64))


def civil_from_days(days: int) -> tuple[int, int, int]:
    """(year, month, day) of a day number."""
    months = int(np.datetime64(days, "D").astype("datetime64[M]").astype(np.int64))
    year, month0 = divmod(months, 12)
    year += 1970
    return year, month0 + 1, days - days_from_civil(year, month0 + 1) + 1


def compose(
    year: int,
    month: int,
    day: int,
    hour: int = 0,
    minute: int = 0,
    second: int = 0,
    millisecond: int = 0,
    microsecond: int = 0,
    nanosecond: int = 0,
) -> WallTime:
    """Build a wall time from fields that may be out of range.

    Overflow carries the way a calendar does: month 13 is January of the
    next year, day 0 is the last day of the previous month, minute 200 is
    three hours and twenty minutes.
    """
    nanos = (
        ((hour * 60 + minute) * 60 + second) * NS_PER_SECOND
        + millisecond * 1_000_000
        + microsecond * 1_000
        + nanosecond
    )
    carry, nanos = divmod(nanos, NS_PER_DAY)
    return WallTime(days_from_civil(year, month) + day - 1 + carry, nanos)


def decompose(wall: WallTime) -> dict[str, int]:
    """Break a wall time into the nine substitutable fields."""
    year, month, day = civil_from_days(wall.days)
    seconds, subsecond = divmod(wall.nanos, NS_PER_SECOND)
    hour, rest = divmod(seconds, 3600)
    minute, second = divmod(rest, 60)
    return {
        "year": year,
        "month": month,
        "day": day,
        "hour": hour,
        "minute": minute,
        "second": second,
        "millisecond": subsecond // 1_000_000,
        "microsecond": subsecond // 1_000 % 1_000,
        "nanosecond": subsecond % 1_000,
    }


def add_date(
    wall: WallTime, years: int = 0, months: int = 0, days: int = 0
) -> WallTime:
    """Add years, months and days, normalizing overflow, keeping the clock.

    Months are added before days, so Jan 31 plus one month is Mar 3 (or
    Mar 2 in a leap year), matching ``compose``.
    """
    year, month, day = civil_from_days(wall.days)
    start = days_from_civil(year + years, month + months)
    return WallTime(start + day - 1 + days, wall.nanos)


def add_days(wall: WallTime, days: int) -> WallTime:
    return WallTime(wall.days + days, wall.nanos)


def weekday(wall: WallTime) -> int:
    """Day of week with 0 = Sunday through 6 = Saturday."""
    # 1970-01-01 was a Thursday
    return (wall.days + 4) % 7


def month_start(wall: WallTime) -> WallTime:
    return add_days(wall, 1 - civil_from_days(wall.days)[2])


def month_end(wall: WallTime) -> WallTime:
    return add_date(wall, months=1, days=-civil_from_days(wall.days)[2])


def year_start(wall: WallTime) -> WallTime:
    year = civil_from_days(wall.days)[0]
    return WallTime(days_from_civil(year, 1), wall.nanos)


def wall_clock(ts: pd.Timestamp) -> tuple[WallTime, tzinfo | None]:
    """Split a timestamp into its wall time and its tz."""
    wall = compose(
        ts.year,
        ts.month,
        ts.day,
        ts.hour,
        ts.minute,
        ts.second,
        microsecond=ts.microsecond,
        nanosecond=ts.nanosecond,
    )
    return wall, ts.tz


def _naive_timestamp(wall: WallTime) -> pd.Timestamp:
    value = wall.days * NS_PER_DAY + wall.nanos
    if _NS_MIN <= value <= _NS_MAX:
        return pd.Timestamp(value)

    year, month, day = civil_from_days(wall.days)
    if not MIN_YEAR <= year <= MAX_YEAR:
        raise ShiftRangeError(
            f"shifted time falls in year {year}, outside {MIN_YEAR}-{MAX_YEAR}"
        )
    # Microsecond resolution; the nanosecond digits are dropped
    return pd.Timestamp(
        datetime(year, month, day) + timedelta(microseconds=wall.nanos // 1_000)
    )


def to_timestamp(wall: WallTime, tz: tzinfo | None) -> pd.Timestamp:
    """Turn a wall time back into a Timestamp carrying ``tz``.

    Inside pandas' nanosecond window the result has nanosecond resolution,
    elsewhere in years 1-9999 microsecond resolution.

    Raises:
        ShiftRangeError: If the result lies outside years 1-9999.
    """
    return attach_tz(_naive_timestamp(wall), tz)


def attach_tz(ts: pd.Timestamp, tz: tzinfo | None) -> pd.Timestamp:
    """Re-attach a tz to a naive wall time.

    Wall times that a DST zone repeats or skips are resolved with the
    configured ``ambiguous`` and ``nonexistent`` policies.
    """
    if tz is None:
        return ts
    config = get_timeshift_config()
    try:
        return ts.tz_localize(
            tz, ambiguous=config.ambiguous, nonexistent=config.nonexistent
        )
    except pd.errors.OutOfBoundsDatetime:
        # The UTC instant left the nanosecond window
        pass
    try:
        return ts.as_unit("us").tz_localize(
            tz, ambiguous=config.ambiguous, nonexistent=config.nonexistent
        )
    except pd.errors.OutOfBoundsDatetime as exc:
        raise ShiftRangeError(f"shifted time {ts} can not carry tz {tz}") from exc
