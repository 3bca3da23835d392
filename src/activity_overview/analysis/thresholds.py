"""
Tunable constants for the activity score and insight engines.

Every number the engines compare against lives here so it can be tested and
adjusted without touching the algorithm shape. Both engines take an optional
thresholds instance; the module-level defaults reproduce the dashboard's
shipped behaviour.
"""
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class ShortfallBand:
    """How far below expectation a metric may fall before it is penalised."""
    tolerated: float   # shortfall still scored as 100
    maximum: float     # shortfall at (and beyond) which the score reaches 0


@dataclass(frozen=True)
class ScoreThresholds:
    # Weights (sum to 1.0)
    steps_weight: float = 0.30
    exercise_weight: float = 0.25
    energy_weight: float = 0.20
    sedentary_weight: float = 0.15
    recency_weight: float = 0.10

    # Shortfall bands per metric
    steps_band: ShortfallBand = ShortfallBand(tolerated=0.25, maximum=0.80)
    exercise_band: ShortfallBand = ShortfallBand(tolerated=0.35, maximum=1.00)
    energy_band: ShortfallBand = ShortfallBand(tolerated=0.30, maximum=0.90)

    # Returned when there is no goal / history to compare against
    no_reference_score: float = 60.0

    # Time-of-day expectation: (hour upper bound exclusive, factor)
    time_of_day_factors: Tuple[Tuple[int, float], ...] = (
        (8, 0.25),
        (12, 0.45),
        (16, 0.60),
        (20, 0.75),
        (21, 0.90),
    )
    full_day_factor: float = 1.0

    # Sedentary share of the movement split
    sedentary_min_day_fraction: float = 0.25
    sedentary_early_score: float = 60.0
    sedentary_good_share: float = 0.50
    sedentary_moderate_share: float = 0.80
    sedentary_moderate_floor: float = 50.0
    sedentary_high_score: float = 40.0

    # Workout recency: (max days inclusive, score), checked in order
    recency_tiers: Tuple[Tuple[int, float], ...] = (
        (0, 100.0),
        (1, 95.0),
        (2, 90.0),
        (3, 80.0),
        (6, 65.0),
        (9, 50.0),
        (14, 45.0),
    )
    recency_stale_score: float = 40.0
    recency_future_score: float = 60.0
    recency_no_workout_score: float = 55.0


@dataclass(frozen=True)
class InsightThresholds:
    min_elapsed_minutes: int = 6 * 60

    # Rule 1: sedentary pattern
    sedentary_share: float = 0.70
    few_steps: int = 5000
    little_exercise_minutes: int = 20
    low_ratio: float = 0.7

    # Rule 2: strong workout day
    strong_ratio: float = 1.3
    strong_steps: int = 8000
    strong_exercise_minutes: int = 30
    strong_energy_kcal: int = 300

    # Rule 3: everyday movement
    near_steps_ratio: float = 0.9

    # Rule 4: last workout reminder
    reminder_days: int = 3
    reminder_few_days_max: int = 6

    # Rule 5: early day
    early_day_fraction: float = 0.25
    early_max_steps: int = 1000

    # Rule 6: neutral fallback, inclusive (low, high) ranges
    typical_steps_range: Tuple[float, float] = (0.8, 1.2)
    typical_exercise_range: Tuple[float, float] = (0.7, 1.3)
    typical_energy_range: Tuple[float, float] = (0.7, 1.3)


DEFAULT_SCORE_THRESHOLDS = ScoreThresholds()
DEFAULT_INSIGHT_THRESHOLDS = InsightThresholds()
