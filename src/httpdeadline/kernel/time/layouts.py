"""Kernel time – accepted textual layouts for caller-supplied timestamps.

The three layouts below are the ones HTTP/1.1 recipients must accept for
date values (RFC 9110 §5.6.7), tried in order:

* ``HTTP_DATE`` – ``Tue, 15 Nov 1994 08:12:31 GMT`` (IMF-fixdate)
* ``RFC_850``   – ``Tuesday, 15-Nov-94 08:12:31 GMT``
* ``ANSI_C``    – ``Tue Nov  5 08:12:31 1994`` (asctime, space-padded day, no zone → UTC)

Matching is exact: case-sensitive English names, single spaces, two-digit
clock fields and a literal ``GMT``.  Names come from fixed tables, so the
process locale plays no part in parsing or formatting.
"""
from __future__ import annotations

import dataclasses
import re
from datetime import UTC, datetime
from typing import Iterable

from httpdeadline.kernel.errors import InvalidDeadlineError

SHORT_WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
LONG_WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

_SHORT_WDAY = "(?P<wday>" + "|".join(SHORT_WEEKDAYS) + ")"
_LONG_WDAY = "(?P<wday>" + "|".join(LONG_WEEKDAYS) + ")"
_MONTH = "(?P<month>" + "|".join(MONTHS) + ")"
_CLOCK = r"(?P<hour>\d{2}):(?P<minute>\d{2}):(?P<second>\d{2})"


@dataclasses.dataclass(frozen=True)
class TimeLayout:
    """One accepted timestamp layout.

    ``shape`` must match the whole value and capture ``day``, ``month``,
    ``year``, ``hour``, ``minute`` and ``second``.  ``template`` renders a
    moment back with :meth:`str.format` fields ``wday``, ``day``, ``month``,
    ``year`` or ``year_2d``, ``hour``, ``minute`` and ``second``.  The
    weekday is checked for spelling only, never against the date.
    """

    name: str
    shape: re.Pattern[str]
    template: str
    example: str = ""
    long_weekday: bool = False

    def parse(self, value: str) -> datetime:
        """Parse *value*; raise :class:`ValueError` when it does not match exactly."""
        found = self.shape.fullmatch(value)
        if found is None:
            raise ValueError(f"{value!r} does not match layout {self.name}")
        year = int(found["year"])
        if len(found["year"]) == 2:
            year += 1900 if year >= 69 else 2000
        return datetime(
            year,
            MONTHS.index(found["month"]) + 1,
            int(found["day"]),
            int(found["hour"]),
            int(found["minute"]),
            int(found["second"]),
            tzinfo=UTC,
        )

    def format(self, moment: datetime) -> str:
        """Render *moment* (converted to UTC) in this layout."""
        if moment.tzinfo is not None:
            moment = moment.astimezone(UTC)
        weekdays = LONG_WEEKDAYS if self.long_weekday else SHORT_WEEKDAYS
        return self.template.format(
            wday=weekdays[moment.weekday()],
            day=moment.day,
            month=MONTHS[moment.month - 1],
            year=moment.year,
            year_2d=moment.year % 100,
            hour=moment.hour,
            minute=moment.minute,
            second=moment.second,
        )


HTTP_DATE = TimeLayout(
    name="http-date",
    shape=re.compile(
        rf"{_SHORT_WDAY}, (?P<day>\d{{2}}) {_MONTH} (?P<year>\d{{4}}) {_CLOCK} GMT", re.ASCII
    ),
    template="{wday}, {day:02d} {month} {year:04d} {hour:02d}:{minute:02d}:{second:02d} GMT",
    example="Tue, 15 Nov 1994 08:12:31 GMT",
)
RFC_850 = TimeLayout(
    name="rfc850",
    shape=re.compile(
        rf"{_LONG_WDAY}, (?P<day>\d{{2}})-{_MONTH}-(?P<year>\d{{2}}) {_CLOCK} GMT", re.ASCII
    ),
    template="{wday}, {day:02d}-{month}-{year_2d:02d} {hour:02d}:{minute:02d}:{second:02d} GMT",
    example="Tuesday, 15-Nov-94 08:12:31 GMT",
    long_weekday=True,
)
# asctime pads a one-digit day with a space ("Nov  5"); "Nov 05" is read too.
ANSI_C = TimeLayout(
    name="ansi-c",
    shape=re.compile(
        rf"{_SHORT_WDAY} {_MONTH} (?P<day> [1-9]|\d{{2}}) {_CLOCK} (?P<year>\d{{4}})", re.ASCII
    ),
    template="{wday} {month} {day:2d} {hour:02d}:{minute:02d}:{second:02d} {year:04d}",
    example="Tue Nov 15 08:12:31 1994",
)

# Priority order; the first match wins.
ACCEPTED_LAYOUTS: tuple[TimeLayout, ...] = (HTTP_DATE, RFC_850, ANSI_C)


def parse_http_time(
    value: str,
    layouts: Iterable[TimeLayout] = ACCEPTED_LAYOUTS,
) -> datetime:
    """Return the instant encoded by *value* in the first matching layout.

    Raises :class:`InvalidDeadlineError` when *value* is empty or when every
    layout rejects it (including values with trailing data or impossible
    dates such as ``31 Feb``).
    """
    if value == "":
        raise InvalidDeadlineError(value)
    for layout in layouts:
        try:
            return layout.parse(value)
        except ValueError:
            continue
    raise InvalidDeadlineError(value)


__all__ = [
    "ACCEPTED_LAYOUTS",
    "ANSI_C",
    "HTTP_DATE",
    "LONG_WEEKDAYS",
    "MONTHS",
    "RFC_850",
    "SHORT_WEEKDAYS",
    "TimeLayout",
    "parse_http_time",
]
