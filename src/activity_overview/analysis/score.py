"""
Activity score: one 0–100 number summarising today's movement.

Five sub-scores, each a float in [0, 100], are combined with fixed weights:

  steps       0.30  steps today vs. the daily goal
  exercise    0.25  exercise minutes vs. the 7-day average
  energy      0.20  active kcal vs. the 7-day average
  sedentary   0.15  sedentary share of the elapsed movement split
  recency     0.10  days since the last workout

Steps, exercise and energy compare today's value with a time-of-day adjusted
expectation, so a partial day is not measured against a full-day target.
Being ahead of schedule always scores 100; only a shortfall is penalised.

Missing goals or averages never fail the calculation. They fall back to mildly
positive constants so a user without history is not punished.

Public API:
  make_score(snapshot)       → int
  score_breakdown(snapshot)  → ScoreBreakdown
"""
import math
from dataclasses import dataclass
from typing import Optional

from activity_overview.analysis.day_context import (
    MINUTES_PER_DAY,
    days_between,
    expected_for_time_of_day,
)
from activity_overview.analysis.thresholds import (
    DEFAULT_SCORE_THRESHOLDS,
    ScoreThresholds,
    ShortfallBand,
)
from activity_overview.models.snapshot import DailyActivitySnapshot


@dataclass(frozen=True)
class ScoreBreakdown:
    """Sub-scores and the final weighted activity score."""
    steps: float
    exercise: float
    energy: float
    sedentary: float
    recency: float
    score: int


def shortfall_score(
    actual: float,
    reference: Optional[float],
    band: ShortfallBand,
    snapshot: DailyActivitySnapshot,
    thresholds: ScoreThresholds = DEFAULT_SCORE_THRESHOLDS,
) -> float:
    """
    Score `actual` against the time-of-day share of `reference`.

    Returns 100 when at or ahead of expectation or within the tolerated
    shortfall, then falls linearly to 0 at `band.maximum`.
    """
    if not reference:
        return thresholds.no_reference_score

    expected = expected_for_time_of_day(reference, snapshot.now, snapshot.tz, thresholds)
    if expected <= 0:
        return thresholds.no_reference_score

    ratio = actual / expected
    if ratio >= 1.0:
        return 100.0

    diff = 1.0 - ratio
    if diff <= band.tolerated:
        return 100.0

    over = min(diff, band.maximum) - band.tolerated
    penalty_fraction = over / (band.maximum - band.tolerated)
    score = 100.0 * (1.0 - penalty_fraction)
    return max(0.0, min(100.0, score))


def steps_score(
    snapshot: DailyActivitySnapshot,
    thresholds: ScoreThresholds = DEFAULT_SCORE_THRESHOLDS,
) -> float:
    return shortfall_score(
        snapshot.steps_today,
        snapshot.steps_goal,
        thresholds.steps_band,
        snapshot,
        thresholds,
    )


def exercise_score(
    snapshot: DailyActivitySnapshot,
    thresholds: ScoreThresholds = DEFAULT_SCORE_THRESHOLDS,
) -> float:
    # Exercise is spiky, hence the wider tolerated band
    return shortfall_score(
        snapshot.exercise_minutes_today,
        snapshot.exercise_minutes_7d_avg,
        thresholds.exercise_band,
        snapshot,
        thresholds,
    )


def energy_score(
    snapshot: DailyActivitySnapshot,
    thresholds: ScoreThresholds = DEFAULT_SCORE_THRESHOLDS,
) -> float:
    return shortfall_score(
        snapshot.active_energy_today_kcal,
        snapshot.active_energy_7d_avg_kcal,
        thresholds.energy_band,
        snapshot,
        thresholds,
    )


def sedentary_score(
    snapshot: DailyActivitySnapshot,
    thresholds: ScoreThresholds = DEFAULT_SCORE_THRESHOLDS,
) -> float:
    """
    Penalise a high sedentary share of the elapsed movement split.

    The elapsed day is taken from the split itself (sleep + active +
    sedentary), not from the clock. Before a quarter of the day is
    accounted for the score stays neutral. Above the moderate band the score
    drops to a fixed floor rather than to zero.
    """
    elapsed = max(
        snapshot.sleep_minutes_today
        + snapshot.active_minutes_today
        + snapshot.sedentary_minutes_today,
        1,
    )
    share = snapshot.sedentary_minutes_today / elapsed
    day_fraction = elapsed / MINUTES_PER_DAY

    if day_fraction < thresholds.sedentary_min_day_fraction:
        return thresholds.sedentary_early_score

    if share <= thresholds.sedentary_good_share:
        return 100.0

    if share <= thresholds.sedentary_moderate_share:
        band = thresholds.sedentary_moderate_share - thresholds.sedentary_good_share
        penalty_fraction = (share - thresholds.sedentary_good_share) / band
        score = 100.0 - (100.0 - thresholds.sedentary_moderate_floor) * penalty_fraction
        return max(thresholds.sedentary_moderate_floor, min(100.0, score))

    return thresholds.sedentary_high_score


def workout_recency_score(
    snapshot: DailyActivitySnapshot,
    thresholds: ScoreThresholds = DEFAULT_SCORE_THRESHOLDS,
) -> float:
    """More recent last workout → higher score. Counts calendar days."""
    workout = snapshot.last_workout
    if workout is None:
        return thresholds.recency_no_workout_score

    days = days_between(workout.start, snapshot.now, snapshot.tz)
    if days < 0:
        return thresholds.recency_future_score

    for max_days, score in thresholds.recency_tiers:
        if days <= max_days:
            return score
    return thresholds.recency_stale_score


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def score_breakdown(
    snapshot: DailyActivitySnapshot,
    thresholds: ScoreThresholds = DEFAULT_SCORE_THRESHOLDS,
) -> ScoreBreakdown:
    """Compute all five sub-scores and their weighted, rounded total."""
    steps = steps_score(snapshot, thresholds)
    exercise = exercise_score(snapshot, thresholds)
    energy = energy_score(snapshot, thresholds)
    sedentary = sedentary_score(snapshot, thresholds)
    recency = workout_recency_score(snapshot, thresholds)

    combined = (
        steps * thresholds.steps_weight
        + exercise * thresholds.exercise_weight
        + energy * thresholds.energy_weight
        + sedentary * thresholds.sedentary_weight
        + recency * thresholds.recency_weight
    )
    score = max(0, min(100, _round_half_up(combined)))

    return ScoreBreakdown(
        steps=steps,
        exercise=exercise,
        energy=energy,
        sedentary=sedentary,
        recency=recency,
        score=score,
    )


def make_score(
    snapshot: DailyActivitySnapshot,
    thresholds: ScoreThresholds = DEFAULT_SCORE_THRESHOLDS,
) -> int:
    """
    Activity score for the snapshot, an int in [0, 100].

    Deterministic and side-effect free; never raises for degenerate input.
    """
    return score_breakdown(snapshot, thresholds).score
