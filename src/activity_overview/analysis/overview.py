"""
Score and insight for one dashboard refresh.

Both engines are fed the same snapshot and therefore the same `now`, so the
day part behind the score and behind the insight always agree.

When the dashboard shows a past day, the day is scored as completed (as of
its last second) and no insight is produced; insights are worded for today
only. A last workout that starts after the reference instant is dropped
before scoring.
"""
import logging
from dataclasses import dataclass
from datetime import date, datetime, time, tzinfo
from typing import Optional

from activity_overview.analysis.day_context import (
    DayContext,
    local_date,
    local_wall_time,
    make_day_context,
)
from activity_overview.analysis.insight import Insight, match_insight_rule
from activity_overview.analysis.score import ScoreBreakdown, score_breakdown
from activity_overview.analysis.thresholds import (
    DEFAULT_INSIGHT_THRESHOLDS,
    DEFAULT_SCORE_THRESHOLDS,
    InsightThresholds,
    ScoreThresholds,
)
from activity_overview.models.snapshot import DailyActivitySnapshot

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ActivityOverview:
    score: int
    breakdown: ScoreBreakdown
    day_context: DayContext
    insight: Optional[Insight]   # None for past days
    insight_rule: Optional[str] = None


def reference_now(selected_day: date, now: datetime, tz: tzinfo) -> datetime:
    """
    The instant a selected day should be evaluated at.

    Today → `now` itself. Any other day → 23:59:59 local time on that day.
    """
    if local_date(now, tz) == selected_day:
        return now
    end_of_day = datetime.combine(selected_day, time(23, 59, 59))
    if now.tzinfo is None:
        return end_of_day
    return end_of_day.replace(tzinfo=tz)


def drop_future_workout(snapshot: DailyActivitySnapshot) -> DailyActivitySnapshot:
    """Discard a last workout that has not started yet at `snapshot.now`."""
    workout = snapshot.last_workout
    if workout is None:
        return snapshot
    if local_wall_time(workout.start, snapshot.tz) > local_wall_time(snapshot.now, snapshot.tz):
        return snapshot.without_last_workout()
    return snapshot


def build_overview(
    snapshot: DailyActivitySnapshot,
    selected_day: Optional[date] = None,
    score_thresholds: ScoreThresholds = DEFAULT_SCORE_THRESHOLDS,
    insight_thresholds: InsightThresholds = DEFAULT_INSIGHT_THRESHOLDS,
) -> ActivityOverview:
    """
    Compute the dashboard header for `selected_day` (default: today).

    Args:
        snapshot: aggregated metrics for the selected day; `snapshot.now` is
            the wall-clock time of the refresh.
        selected_day: local date being displayed.

    Returns:
        ActivityOverview with the score and, for today only, the insight.
    """
    today = local_date(snapshot.now, snapshot.tz)
    day = selected_day or today
    is_today = day == today

    if not is_today:
        snapshot = snapshot.with_now(reference_now(day, snapshot.now, snapshot.tz))
    snapshot = drop_future_workout(snapshot)

    context = make_day_context(snapshot.now, snapshot.tz)
    breakdown = score_breakdown(snapshot, score_thresholds)

    insight: Optional[Insight] = None
    rule_name: Optional[str] = None
    if is_today:
        rule_name, insight = match_insight_rule(snapshot, context, insight_thresholds)

    logger.debug(
        "Overview for %s: score=%d day_part=%s rule=%s",
        day.isoformat(),
        breakdown.score,
        context.day_part.value,
        rule_name,
    )

    return ActivityOverview(
        score=breakdown.score,
        breakdown=breakdown,
        day_context=context,
        insight=insight,
        insight_rule=rule_name,
    )
