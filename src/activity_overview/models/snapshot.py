"""Input models: the aggregated daily-activity snapshot and the last workout."""
from dataclasses import dataclass, replace
from datetime import datetime, tzinfo
from typing import Optional


@dataclass(frozen=True)
class LastWorkout:
    """Most recent workout, already normalized (minutes, km, kcal)."""
    name: str
    minutes: int
    start: datetime
    distance_km: Optional[float] = None
    energy_kcal: Optional[int] = None


@dataclass(frozen=True)
class DailyActivitySnapshot:
    """
    Today's activity metrics plus rolling 7-day averages.

    Averages are Optional: None means "no history yet", which the engines
    treat differently from an average of zero. The movement split minutes
    (sleep / active / sedentary) cover the elapsed part of the day and need
    not add up to 1440.
    """
    now: datetime
    tz: tzinfo

    steps_today: int
    exercise_minutes_today: int
    active_energy_today_kcal: int

    steps_goal: Optional[int] = None
    steps_7d_avg: Optional[int] = None
    exercise_minutes_7d_avg: Optional[int] = None
    active_energy_7d_avg_kcal: Optional[int] = None

    # Carried for the presentation layer; not used by scoring
    distance_today_km: Optional[float] = None
    distance_7d_avg_km: Optional[float] = None

    sleep_minutes_today: int = 0
    active_minutes_today: int = 0
    sedentary_minutes_today: int = 0

    last_workout: Optional[LastWorkout] = None

    def with_now(self, now: datetime) -> "DailyActivitySnapshot":
        return replace(self, now=now)

    def without_last_workout(self) -> "DailyActivitySnapshot":
        return replace(self, last_workout=None)
