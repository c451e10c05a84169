"""Apply a ShiftSpec to a timestamp."""

from typing import Any

import pandas as pd

from timeshift import calendar as cal
from timeshift.spec import PartDef, ShiftSpec
from timeshift.utils import to_timestamp

# Fields set or incremented directly before calendar normalization
SUBSTITUTED_FIELDS = (
    "year",
    "month",
    "day",
    "hour",
    "minute",
    "second",
    "millisecond",
    "microsecond",
    "nanosecond",
)


def substitute(part: PartDef, value: int) -> int:
    """Apply one part to one field value.

    End-anchored parts leave the field alone; they are resolved after the
    timestamp has been rebuilt.
    """
    if not part.active or part.from_end:
        return value
    if part.absolute:
        return part.value
    return value + part.value


def apply(spec: ShiftSpec, t: Any) -> Any:
    """Shift a timestamp according to ``spec``.

    Args:
        spec: A parsed shift.
        t: pandas Timestamp, datetime or ISO-8601 string. Its tz (or
            fixed offset) is carried over to the result.

    Returns:
        The shifted ``pd.Timestamp``, at nanosecond resolution when it
        falls inside pandas' nanosecond window (1677-2262) and at
        microsecond resolution elsewhere. The identity spec returns ``t``
        itself, and a missing value (NaT) is returned unchanged.

    Raises:
        ShiftRangeError: Only if the result lies outside years 1-9999,
            which no Timestamp can hold.
    """
    if spec.empty:
        return t

    ts = to_timestamp(t)
    if ts is pd.NaT:
        return ts

    wall, tz = cal.wall_clock(ts)
    fields = cal.decompose(wall)

    shifted = {
        name: substitute(getattr(spec, name), fields[name])
        for name in SUBSTITUTED_FIELDS
    }
    result = cal.compose(**shifted)

    if spec.day.active and spec.day.from_end:
        # D$1 is the last day of the month, D$2 the one before, ...
        back = fields["day"] + spec.day.value - 1
        result = cal.add_date(result, months=1, days=-back)

    result = _resolve_week(spec, result)
    return cal.to_timestamp(result, tz)


def _nth_weekday_from(start: cal.WallTime, wd: int, n: int) -> cal.WallTime:
    """The n-th occurrence of weekday ``wd`` on or after ``start``."""
    shift = (wd - cal.weekday(start)) % 7 + 7 * (n - 1)
    return cal.add_days(start, shift)


def _nth_weekday_before(end: cal.WallTime, wd: int, n: int) -> cal.WallTime:
    """The n-th occurrence of weekday ``wd`` on or before ``end``."""
    shift = wd - cal.weekday(end)
    if shift > 0:
        shift -= 7
    return cal.add_days(end, shift - 7 * (n - 1))


def _resolve_week(spec: ShiftSpec, wall: cal.WallTime) -> cal.WallTime:
    week, weekday = spec.week, spec.weekday

    if week.active:
        wd = weekday.value if weekday.active else cal.weekday(wall)

        if week.from_begin:
            return _nth_weekday_from(cal.month_start(wall), wd, week.value)

        if week.from_end:
            return _nth_weekday_before(cal.month_end(wall), wd, week.value)

        if week.absolute:
            # Counts occurrences from Jan 1, not ISO weeks
            return _nth_weekday_from(cal.year_start(wall), wd, week.value)

        wall = cal.add_days(wall, 7 * week.value)

    if weekday.active:
        # Signed snap within the current Sunday-start week
        wall = cal.add_days(wall, weekday.value - cal.weekday(wall))

    return wall
