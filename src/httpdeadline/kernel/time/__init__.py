"""Kernel time – clock port and accepted HTTP time layouts."""
from httpdeadline.kernel.time.clock import Clock, FrozenClock, SystemClock
from httpdeadline.kernel.time.layouts import (
    ACCEPTED_LAYOUTS,
    ANSI_C,
    HTTP_DATE,
    LONG_WEEKDAYS,
    MONTHS,
    RFC_850,
    SHORT_WEEKDAYS,
    TimeLayout,
    parse_http_time,
)

__all__ = [
    "ACCEPTED_LAYOUTS",
    "ANSI_C",
    "Clock",
    "FrozenClock",
    "HTTP_DATE",
    "LONG_WEEKDAYS",
    "MONTHS",
    "RFC_850",
    "SHORT_WEEKDAYS",
    "SystemClock",
    "TimeLayout",
    "parse_http_time",
]
