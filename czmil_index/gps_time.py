from __future__ import annotations

import datetime
import os
import re
import time
from typing import Optional, Tuple

from czmil_index.common import MICROSECONDS, WEEK_SECONDS

YYMMDD_RE = re.compile(r"^(?P<yy>\d{2})(?P<mm>\d{2})(?P<dd>\d{2})$")


def force_gmt() -> None:
    """Run the rest of the process in GMT. The previous zone is not restored."""
    os.environ["TZ"] = "GMT"
    if hasattr(time, "tzset"):
        time.tzset()


def parse_yymmdd(token: str) -> Tuple[int, int, int]:
    m = YYMMDD_RE.match(token)
    if not m:
        raise ValueError(f"Invalid dataset date token (expected YYMMDD): {token!r}")
    year = 2000 + int(m.group("yy"))
    month = int(m.group("mm"))
    day = int(m.group("dd"))
    # raises ValueError for impossible dates
    datetime.date(year, month, day)
    return year, month, day


def week_anchor(year: int, month: int, day: int) -> int:
    """UNIX seconds of the GPS week start (Saturday/Sunday midnight GMT) at or before the date."""
    midnight = datetime.datetime(year, month, day, tzinfo=datetime.timezone.utc)
    days_since_sunday = (midnight.weekday() + 1) % 7
    return int(midnight.timestamp()) - days_since_sunday * 86400


class GpsTimeReconstructor:
    """Convert GPS seconds-of-week to absolute microsecond timestamps.

    The week anchor is computed from the dataset date on the first record. When
    a timestamp goes backwards the dataset has crossed a week boundary; from then
    on every timestamp gets one week added.
    """

    def __init__(self, date_token: str):
        self.date_token = date_token
        self.anchor: Optional[int] = None
        self.rolled_over = False
        self._prev_time = -1

    def picture_time(self, seconds_of_week: float) -> int:
        if self.anchor is None:
            self.anchor = week_anchor(*parse_yymmdd(self.date_token))

        t = int(round((float(self.anchor) + float(seconds_of_week)) * float(MICROSECONDS)))

        if t < self._prev_time:
            self.rolled_over = True
        self._prev_time = t

        if self.rolled_over:
            t += WEEK_SECONDS * MICROSECONDS
        return t
