"""Overview routes: score and insight for a posted snapshot."""
import logging
from datetime import date, datetime
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from activity_overview.analysis.insight import generate_insight
from activity_overview.analysis.overview import build_overview
from activity_overview.analysis.score import make_score
from activity_overview.config import get_settings
from activity_overview.models.snapshot import DailyActivitySnapshot, LastWorkout

logger = logging.getLogger(__name__)

router = APIRouter()


class LastWorkoutBody(BaseModel):
    name: str
    minutes: int = Field(ge=0)
    start: datetime
    distance_km: Optional[float] = None
    energy_kcal: Optional[int] = None


class SnapshotRequest(BaseModel):
    now: datetime
    timezone: Optional[str] = None  # IANA name; settings.timezone if omitted
    selected_day: Optional[date] = None

    steps_today: int = Field(ge=0)
    steps_goal: Optional[int] = None  # omitted → configured default, null → no goal
    steps_7d_avg: Optional[int] = None

    distance_today_km: Optional[float] = None
    distance_7d_avg_km: Optional[float] = None

    exercise_minutes_today: int = Field(ge=0)
    exercise_minutes_7d_avg: Optional[int] = None

    active_energy_today_kcal: int = Field(ge=0)
    active_energy_7d_avg_kcal: Optional[int] = None

    sleep_minutes_today: int = Field(default=0, ge=0)
    active_minutes_today: int = Field(default=0, ge=0)
    sedentary_minutes_today: int = Field(default=0, ge=0)

    last_workout: Optional[LastWorkoutBody] = None


class InsightResponse(BaseModel):
    text: str
    category: str


class BreakdownResponse(BaseModel):
    steps: float
    exercise: float
    energy: float
    sedentary: float
    recency: float


class OverviewResponse(BaseModel):
    score: int
    day_part: str
    breakdown: BreakdownResponse
    insight: Optional[InsightResponse]


class ScoreResponse(BaseModel):
    score: int


def _resolve_timezone(name: Optional[str]) -> ZoneInfo:
    key = name or get_settings().timezone
    try:
        return ZoneInfo(key)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Rejected unknown timezone %r", key)
        raise HTTPException(status_code=422, detail=f"Unknown timezone: {key}")


def to_snapshot(request: SnapshotRequest) -> DailyActivitySnapshot:
    """Convert the request body into the engines' input model."""
    tz = _resolve_timezone(request.timezone)

    if "steps_goal" in request.model_fields_set:
        steps_goal = request.steps_goal
    else:
        steps_goal = get_settings().default_steps_goal

    workout = None
    if request.last_workout is not None:
        workout = LastWorkout(
            name=request.last_workout.name,
            minutes=request.last_workout.minutes,
            start=request.last_workout.start,
            distance_km=request.last_workout.distance_km,
            energy_kcal=request.last_workout.energy_kcal,
        )

    return DailyActivitySnapshot(
        now=request.now,
        tz=tz,
        steps_today=request.steps_today,
        steps_goal=steps_goal,
        steps_7d_avg=request.steps_7d_avg,
        distance_today_km=request.distance_today_km,
        distance_7d_avg_km=request.distance_7d_avg_km,
        exercise_minutes_today=request.exercise_minutes_today,
        exercise_minutes_7d_avg=request.exercise_minutes_7d_avg,
        active_energy_today_kcal=request.active_energy_today_kcal,
        active_energy_7d_avg_kcal=request.active_energy_7d_avg_kcal,
        sleep_minutes_today=request.sleep_minutes_today,
        active_minutes_today=request.active_minutes_today,
        sedentary_minutes_today=request.sedentary_minutes_today,
        last_workout=workout,
    )


@router.post("/", response_model=OverviewResponse)
def overview(request: SnapshotRequest):
    """Score for the selected day plus today's insight."""
    snapshot = to_snapshot(request)
    result = build_overview(snapshot, selected_day=request.selected_day)

    insight = None
    if result.insight is not None:
        insight = InsightResponse(
            text=result.insight.text,
            category=result.insight.category.value,
        )

    return OverviewResponse(
        score=result.score,
        day_part=result.day_context.day_part.value,
        breakdown=BreakdownResponse(
            steps=result.breakdown.steps,
            exercise=result.breakdown.exercise,
            energy=result.breakdown.energy,
            sedentary=result.breakdown.sedentary,
            recency=result.breakdown.recency,
        ),
        insight=insight,
    )


@router.post("/score", response_model=ScoreResponse)
def score(request: SnapshotRequest):
    """Activity score only, evaluated at `now` as given."""
    return ScoreResponse(score=make_score(to_snapshot(request)))


@router.post("/insight", response_model=InsightResponse)
def insight(request: SnapshotRequest):
    """Insight only, evaluated at `now` as given."""
    result = generate_insight(to_snapshot(request))
    return InsightResponse(text=result.text, category=result.category.value)
