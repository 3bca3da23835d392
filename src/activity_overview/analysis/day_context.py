"""
Time-of-day helpers shared by the score and insight engines.

All functions take the reference instant and timezone explicitly; nothing
here reads the system clock. Naive datetimes are treated as already being
local to the given timezone.
"""
from dataclasses import dataclass
from datetime import date, datetime, tzinfo
from enum import Enum
from typing import Optional

from activity_overview.analysis.thresholds import DEFAULT_SCORE_THRESHOLDS, ScoreThresholds

MINUTES_PER_DAY = 24 * 60

# Day-progress fraction at which each part of the day begins
_AFTERNOON_START = 0.33
_EVENING_START = 0.66


class DayPart(str, Enum):
    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"


@dataclass(frozen=True)
class DayContext:
    """Where in the local day the reference instant falls."""
    day_part: DayPart
    day_progress_fraction: float  # 0.0–1.0
    minutes_elapsed: int          # 0–1440


def to_local(moment: datetime, tz: tzinfo) -> datetime:
    """Express `moment` in `tz`. Naive datetimes are returned unchanged."""
    if moment.tzinfo is None:
        return moment
    return moment.astimezone(tz)


def local_wall_time(moment: datetime, tz: tzinfo) -> datetime:
    """Naive local time of `moment` in `tz`; comparable across naive and aware input."""
    return to_local(moment, tz).replace(tzinfo=None)


def local_date(moment: datetime, tz: tzinfo) -> date:
    return to_local(moment, tz).date()


def day_part_for_fraction(fraction: float) -> DayPart:
    if fraction < _AFTERNOON_START:
        return DayPart.MORNING
    if fraction < _EVENING_START:
        return DayPart.AFTERNOON
    return DayPart.EVENING


def make_day_context(now: datetime, tz: tzinfo) -> DayContext:
    """
    Derive the day part and elapsed-day fraction for `now`.

    Only hour and minute count; seconds are ignored. Boundaries:
    [0, 0.33) morning, [0.33, 0.66) afternoon, [0.66, 1.0] evening.
    """
    local = to_local(now, tz)
    minutes = max(0, min(local.hour * 60 + local.minute, MINUTES_PER_DAY))
    fraction = minutes / MINUTES_PER_DAY
    return DayContext(
        day_part=day_part_for_fraction(fraction),
        day_progress_fraction=fraction,
        minutes_elapsed=minutes,
    )


def safe_ratio(value: float, average: Optional[float]) -> Optional[float]:
    """
    Today's value relative to its average.

    Returns None when there is no usable average (absent or not positive).
    Callers decide what a missing ratio means for them.
    """
    if average is None or average <= 0:
        return None
    return value / average


def days_between(start: datetime, end: datetime, tz: tzinfo) -> int:
    """
    Whole calendar days from `start` to `end` in `tz`.

    Both instants are truncated to their local date first, so a workout at
    23:50 yesterday is one day ago at 00:10 today. Negative if `start` lies
    on a later local day than `end`.
    """
    return (local_date(end, tz) - local_date(start, tz)).days


def time_of_day_factor(
    hour: int,
    thresholds: ScoreThresholds = DEFAULT_SCORE_THRESHOLDS,
) -> float:
    """Share of a full day's activity expected to have happened by `hour`."""
    for upper_hour, factor in thresholds.time_of_day_factors:
        if hour < upper_hour:
            return factor
    return thresholds.full_day_factor


def expected_for_time_of_day(
    goal: float,
    now: datetime,
    tz: tzinfo,
    thresholds: ScoreThresholds = DEFAULT_SCORE_THRESHOLDS,
) -> float:
    """Scale a full-day goal or average down to what is expected by `now`."""
    hour = to_local(now, tz).hour
    return goal * time_of_day_factor(hour, thresholds)
