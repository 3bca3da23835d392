"""
Activity insight: one sentence about today plus a category tag.

Rules are evaluated in priority order and the first match wins. The order
lives in `INSIGHT_RULES`, so adding or reordering a rule does not touch the
others:

  1. sedentary          mostly sitting, few steps, little exercise
  2. strong_workout     clearly above the 7-day average
  3. everyday_movement  usual steps but little focused training
  4. workout_reminder   last workout three or more days ago
  5. early_day          day just started, nothing recorded yet
  6. neutral            fallback, always matches

Ratios compare today's value with its 7-day average. When there is no
average, rules 1–3 treat the ratio as 0.0 ("assume no activity") while the
neutral fallback treats it as 1.0 ("assume typical"). Each rule applies its
own default.

Public API:
  generate_insight(snapshot)  → Insight
  match_insight_rule(snapshot, context) → (rule name, Insight)
"""
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, NamedTuple, Optional, Tuple

from activity_overview.analysis.day_context import (
    DayContext,
    DayPart,
    days_between,
    make_day_context,
    safe_ratio,
)
from activity_overview.analysis.thresholds import DEFAULT_INSIGHT_THRESHOLDS, InsightThresholds
from activity_overview.models.snapshot import DailyActivitySnapshot


class InsightCategory(str, Enum):
    NEUTRAL = "neutral"
    STEPS = "steps"
    EXERCISE = "exercise"
    ENERGY = "energy"
    SEDENTARY = "sedentary"
    RECOVERY = "recovery"


@dataclass(frozen=True)
class Insight:
    text: str
    category: InsightCategory


# ─── Copy ─────────────────────────────────────────────────────────────────────

SEDENTARY_AFTERNOON_TEXT = (
    "Your day has been fairly sedentary so far, with many inactive minutes "
    "and little movement. A few short standing or walking breaks this "
    "afternoon can bring you back toward your recent activity level."
)
SEDENTARY_EVENING_TEXT = (
    "Today has been mostly sedentary and your steps and exercise minutes are "
    "below your usual range. If it fits your evening, a short walk or a light "
    "workout is a good way to round off the day."
)
STRONG_WORKOUT_TEXT = (
    "You are clearly above your 7-day average in activity and energy "
    "expenditure today. A strong movement day, so plan enough rest and "
    "recovery later on."
)
EVERYDAY_MOVEMENT_TEXT = (
    "Your everyday movement is solid today and roughly in line with your "
    "usual level. There is still room for focused training, and even a short "
    "workout would complement it nicely."
)
REMINDER_THREE_DAYS_TEXT = (
    "Your last workout was about three days ago. Today or tomorrow would be a "
    "good moment to plan your next session."
)
REMINDER_FEW_DAYS_TEXT = (
    "Your last workout was a few days ago. A moderate session can help you "
    "get back into your usual rhythm."
)
REMINDER_LONG_AGO_TEXT = (
    "Your last workout was quite a while ago. Consider planning a small "
    "restart in the next few days; even a short session makes a difference."
)
EARLY_DAY_TEXT = (
    "The day has only just started, so there has not been much movement yet. "
    "Short bursts of activity spread over the day are a relaxed way to reach "
    "your usual steps and exercise minutes."
)
CLOSE_TO_USUAL_TEXT = (
    "Your activity today is close to your usual range over the last week. "
    "Keep your current pace or add an extra session if it feels right."
)
BELOW_TYPICAL_TEXT = (
    "You are currently a bit below your typical activity level. A little "
    "extra movement later today can bring you closer to your 7-day average."
)
ABOVE_TYPICAL_TEXT = (
    "You are slightly more active today than on most recent days. Enjoy it, "
    "and leave room for enough recovery."
)


# ─── Rule plumbing ────────────────────────────────────────────────────────────

Predicate = Callable[[DailyActivitySnapshot, DayContext, InsightThresholds], bool]
Producer = Callable[[DailyActivitySnapshot, DayContext, InsightThresholds], Insight]


class InsightRule(NamedTuple):
    name: str
    matches: Predicate
    build: Producer


class _Ratios(NamedTuple):
    steps: float
    exercise: float
    energy: float


def _ratios(snapshot: DailyActivitySnapshot, default: float) -> _Ratios:
    """Today-vs-average ratios with `default` substituted for missing averages."""
    steps = safe_ratio(snapshot.steps_today, snapshot.steps_7d_avg)
    exercise = safe_ratio(snapshot.exercise_minutes_today, snapshot.exercise_minutes_7d_avg)
    energy = safe_ratio(snapshot.active_energy_today_kcal, snapshot.active_energy_7d_avg_kcal)
    return _Ratios(
        steps=default if steps is None else steps,
        exercise=default if exercise is None else exercise,
        energy=default if energy is None else energy,
    )


def _day_is_underway(context: DayContext, thresholds: InsightThresholds) -> bool:
    return (
        context.day_part != DayPart.MORNING
        and context.minutes_elapsed >= thresholds.min_elapsed_minutes
    )


# ─── 1. Sedentary pattern ─────────────────────────────────────────────────────

def sedentary_matches(
    snapshot: DailyActivitySnapshot,
    context: DayContext,
    thresholds: InsightThresholds,
) -> bool:
    if not _day_is_underway(context, thresholds):
        return False

    share = snapshot.sedentary_minutes_today / max(context.minutes_elapsed, 1)
    if share < thresholds.sedentary_share:
        return False

    ratios = _ratios(snapshot, default=0.0)
    few_steps = snapshot.steps_today < thresholds.few_steps and ratios.steps < thresholds.low_ratio
    little_exercise = (
        snapshot.exercise_minutes_today < thresholds.little_exercise_minutes
        and ratios.exercise < thresholds.low_ratio
    )
    return few_steps and little_exercise


def sedentary_insight(
    snapshot: DailyActivitySnapshot,
    context: DayContext,
    thresholds: InsightThresholds,
) -> Insight:
    # Morning never reaches here; _day_is_underway excludes it
    if context.day_part == DayPart.AFTERNOON:
        text = SEDENTARY_AFTERNOON_TEXT
    else:
        text = SEDENTARY_EVENING_TEXT
    return Insight(text=text, category=InsightCategory.SEDENTARY)


# ─── 2. Strong workout day ────────────────────────────────────────────────────

def strong_workout_matches(
    snapshot: DailyActivitySnapshot,
    context: DayContext,
    thresholds: InsightThresholds,
) -> bool:
    ratios = _ratios(snapshot, default=0.0)
    high_steps = (
        ratios.steps >= thresholds.strong_ratio
        and snapshot.steps_today >= thresholds.strong_steps
    )
    high_exercise = (
        ratios.exercise >= thresholds.strong_ratio
        and snapshot.exercise_minutes_today >= thresholds.strong_exercise_minutes
    )
    high_energy = (
        ratios.energy >= thresholds.strong_ratio
        and snapshot.active_energy_today_kcal >= thresholds.strong_energy_kcal
    )
    return high_steps or high_exercise or high_energy


def strong_workout_insight(
    snapshot: DailyActivitySnapshot,
    context: DayContext,
    thresholds: InsightThresholds,
) -> Insight:
    return Insight(text=STRONG_WORKOUT_TEXT, category=InsightCategory.EXERCISE)


# ─── 3. Everyday movement, little focused training ────────────────────────────

def everyday_movement_matches(
    snapshot: DailyActivitySnapshot,
    context: DayContext,
    thresholds: InsightThresholds,
) -> bool:
    if not _day_is_underway(context, thresholds):
        return False

    ratios = _ratios(snapshot, default=0.0)
    near_or_above_steps_avg = ratios.steps >= thresholds.near_steps_ratio
    low_exercise = (
        ratios.exercise < thresholds.low_ratio
        or snapshot.exercise_minutes_today < thresholds.little_exercise_minutes
    )
    return near_or_above_steps_avg and low_exercise


def everyday_movement_insight(
    snapshot: DailyActivitySnapshot,
    context: DayContext,
    thresholds: InsightThresholds,
) -> Insight:
    return Insight(text=EVERYDAY_MOVEMENT_TEXT, category=InsightCategory.STEPS)


# ─── 4. Last workout reminder ─────────────────────────────────────────────────

def _days_since_workout(snapshot: DailyActivitySnapshot) -> Optional[int]:
    if snapshot.last_workout is None:
        return None
    return days_between(snapshot.last_workout.start, snapshot.now, snapshot.tz)


def workout_reminder_matches(
    snapshot: DailyActivitySnapshot,
    context: DayContext,
    thresholds: InsightThresholds,
) -> bool:
    days = _days_since_workout(snapshot)
    return days is not None and days >= thresholds.reminder_days


def workout_reminder_insight(
    snapshot: DailyActivitySnapshot,
    context: DayContext,
    thresholds: InsightThresholds,
) -> Insight:
    days = _days_since_workout(snapshot)
    if days == thresholds.reminder_days:
        text = REMINDER_THREE_DAYS_TEXT
    elif days <= thresholds.reminder_few_days_max:
        text = REMINDER_FEW_DAYS_TEXT
    else:
        text = REMINDER_LONG_AGO_TEXT
    return Insight(text=text, category=InsightCategory.RECOVERY)


# ─── 5. Early in the day, nothing yet ─────────────────────────────────────────

def early_day_matches(
    snapshot: DailyActivitySnapshot,
    context: DayContext,
    thresholds: InsightThresholds,
) -> bool:
    if context.day_part != DayPart.MORNING:
        return False
    if context.day_progress_fraction > thresholds.early_day_fraction:
        return False
    return (
        snapshot.steps_today < thresholds.early_max_steps
        and snapshot.exercise_minutes_today == 0
    )


def early_day_insight(
    snapshot: DailyActivitySnapshot,
    context: DayContext,
    thresholds: InsightThresholds,
) -> Insight:
    return Insight(text=EARLY_DAY_TEXT, category=InsightCategory.NEUTRAL)


# ─── 6. Neutral fallback ──────────────────────────────────────────────────────

def _within(value: float, bounds: Tuple[float, float]) -> bool:
    low, high = bounds
    return low <= value <= high


def neutral_insight(
    snapshot: DailyActivitySnapshot,
    context: DayContext,
    thresholds: InsightThresholds,
) -> Insight:
    ratios = _ratios(snapshot, default=1.0)

    close_to_typical = (
        _within(ratios.steps, thresholds.typical_steps_range)
        and _within(ratios.exercise, thresholds.typical_exercise_range)
        and _within(ratios.energy, thresholds.typical_energy_range)
    )
    if close_to_typical:
        text = CLOSE_TO_USUAL_TEXT
    elif (
        ratios.steps < thresholds.typical_steps_range[0]
        or ratios.exercise < thresholds.typical_exercise_range[0]
    ):
        text = BELOW_TYPICAL_TEXT
    else:
        text = ABOVE_TYPICAL_TEXT
    return Insight(text=text, category=InsightCategory.NEUTRAL)


def _always(
    snapshot: DailyActivitySnapshot,
    context: DayContext,
    thresholds: InsightThresholds,
) -> bool:
    return True


# Priority order: first match wins. The last rule must always match.
INSIGHT_RULES: List[InsightRule] = [
    InsightRule("sedentary", sedentary_matches, sedentary_insight),
    InsightRule("strong_workout", strong_workout_matches, strong_workout_insight),
    InsightRule("everyday_movement", everyday_movement_matches, everyday_movement_insight),
    InsightRule("workout_reminder", workout_reminder_matches, workout_reminder_insight),
    InsightRule("early_day", early_day_matches, early_day_insight),
    InsightRule("neutral", _always, neutral_insight),
]


def match_insight_rule(
    snapshot: DailyActivitySnapshot,
    context: DayContext,
    thresholds: InsightThresholds = DEFAULT_INSIGHT_THRESHOLDS,
) -> Tuple[str, Insight]:
    """
    Evaluate the rules against a precomputed day context.

    Returns the name of the first matching rule and its insight.

    Raises:
        RuntimeError: if INSIGHT_RULES no longer ends with a rule that
            always matches.
    """
    for rule in INSIGHT_RULES:
        if rule.matches(snapshot, context, thresholds):
            return rule.name, rule.build(snapshot, context, thresholds)
    raise RuntimeError("No insight rule matched; the last rule must always match")


def generate_insight(
    snapshot: DailyActivitySnapshot,
    thresholds: InsightThresholds = DEFAULT_INSIGHT_THRESHOLDS,
) -> Insight:
    """Today's insight for the snapshot. Pure; never raises."""
    context = make_day_context(snapshot.now, snapshot.tz)
    _, insight = match_insight_rule(snapshot, context, thresholds)
    return insight
