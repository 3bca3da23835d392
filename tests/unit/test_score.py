"""Tests for the activity score engine."""
import pytest

from activity_overview.analysis.score import (
    ScoreBreakdown,
    energy_score,
    exercise_score,
    make_score,
    score_breakdown,
    sedentary_score,
    steps_score,
    workout_recency_score,
)
from activity_overview.analysis.thresholds import ScoreThresholds

from factories import at, make_snapshot, workout_days_ago


# ─── steps ────────────────────────────────────────────────────────────────────

class TestStepsScore:
    def test_ahead_of_goal_is_100(self):
        """12000 steps vs. an 8000 goal at 21:00 (factor 1.0): ratio 1.5."""
        snap = make_snapshot(now=at(21), steps_today=12000, steps_goal=8000, steps_7d_avg=8000)
        assert steps_score(snap) == 100.0

    @pytest.mark.parametrize("goal", [0, None])
    @pytest.mark.parametrize("steps", [0, 4000, 50000])
    def test_no_goal_is_neutral_60(self, goal, steps):
        snap = make_snapshot(steps_goal=goal, steps_today=steps)
        assert steps_score(snap) == 60.0

    def test_within_tolerated_shortfall_is_100(self):
        snap = make_snapshot(now=at(21), steps_goal=10000, steps_today=7500)
        assert steps_score(snap) == 100.0

    def test_shortfall_interpolates_linearly(self):
        # diff 0.5 → (0.5 - 0.25) / (0.80 - 0.25) penalty
        snap = make_snapshot(now=at(21), steps_goal=10000, steps_today=5000)
        assert steps_score(snap) == pytest.approx(100 * (1 - 0.25 / 0.55))

    def test_max_shortfall_is_zero(self):
        snap = make_snapshot(now=at(21), steps_goal=10000, steps_today=2000)
        assert steps_score(snap) == pytest.approx(0.0)

    def test_no_steps_is_zero(self):
        snap = make_snapshot(now=at(21), steps_goal=10000, steps_today=0)
        assert steps_score(snap) == 0.0

    def test_early_morning_expectation_is_a_quarter(self):
        """At 07:00 only 25% of the goal is expected."""
        snap = make_snapshot(now=at(7), steps_goal=10000, steps_today=2500)
        assert steps_score(snap) == 100.0

    def test_monotonic_in_steps(self):
        scores = [
            steps_score(make_snapshot(now=at(21), steps_goal=10000, steps_today=s))
            for s in range(0, 15001, 250)
        ]
        assert scores == sorted(scores)
        assert all(0.0 <= s <= 100.0 for s in scores)

    def test_pinned_at_100_once_ratio_reaches_one(self):
        for steps in (10000, 12000, 30000):
            snap = make_snapshot(now=at(21), steps_goal=10000, steps_today=steps)
            assert steps_score(snap) == 100.0

    def test_uses_goal_not_average(self):
        snap = make_snapshot(now=at(21), steps_goal=4000, steps_7d_avg=20000, steps_today=4000)
        assert steps_score(snap) == 100.0


# ─── exercise / energy ────────────────────────────────────────────────────────

class TestExerciseScore:
    @pytest.mark.parametrize("avg", [0, None])
    def test_no_history_is_neutral_60(self, avg):
        snap = make_snapshot(exercise_minutes_7d_avg=avg, exercise_minutes_today=0)
        assert exercise_score(snap) == 60.0

    def test_wider_tolerance_than_steps(self):
        # ratio 0.65 → diff 0.35, still tolerated for exercise
        snap = make_snapshot(now=at(21), exercise_minutes_7d_avg=40, exercise_minutes_today=26)
        assert exercise_score(snap) == 100.0

    def test_half_penalty(self):
        # ratio 0.325 → diff 0.675 → (0.675 - 0.35) / 0.65 = 0.5
        snap = make_snapshot(now=at(21), exercise_minutes_7d_avg=40, exercise_minutes_today=13)
        assert exercise_score(snap) == pytest.approx(50.0)

    def test_no_exercise_is_zero(self):
        snap = make_snapshot(now=at(21), exercise_minutes_7d_avg=40, exercise_minutes_today=0)
        assert exercise_score(snap) == 0.0


class TestEnergyScore:
    @pytest.mark.parametrize("avg", [0, None])
    def test_no_history_is_neutral_60(self, avg):
        snap = make_snapshot(active_energy_7d_avg_kcal=avg, active_energy_today_kcal=0)
        assert energy_score(snap) == 60.0

    def test_half_penalty(self):
        # ratio 0.4 → diff 0.6 → (0.6 - 0.3) / 0.6 = 0.5
        snap = make_snapshot(now=at(21), active_energy_7d_avg_kcal=500, active_energy_today_kcal=200)
        assert energy_score(snap) == pytest.approx(50.0)

    def test_afternoon_expectation(self):
        # 14:00 → factor 0.60 → expected 300 kcal
        snap = make_snapshot(now=at(14), active_energy_7d_avg_kcal=500, active_energy_today_kcal=300)
        assert energy_score(snap) == 100.0


# ─── sedentary ────────────────────────────────────────────────────────────────

class TestSedentaryScore:
    def _split(self, sleep, active, sedentary):
        return make_snapshot(
            sleep_minutes_today=sleep,
            active_minutes_today=active,
            sedentary_minutes_today=sedentary,
        )

    def test_too_early_in_day_is_60(self):
        # 300 of 1440 minutes accounted for → fraction 0.21
        assert sedentary_score(self._split(0, 0, 300)) == 60.0

    def test_empty_split_is_60(self):
        assert sedentary_score(self._split(0, 0, 0)) == 60.0

    def test_half_sedentary_is_100(self):
        assert sedentary_score(self._split(400, 100, 500)) == 100.0

    def test_moderate_share_interpolates(self):
        # share 0.65 → 100 - 50 * 0.15 / 0.30 = 75
        assert sedentary_score(self._split(250, 100, 650)) == pytest.approx(75.0)

    def test_share_at_moderate_limit_is_50(self):
        assert sedentary_score(self._split(200, 0, 800)) == pytest.approx(50.0)

    def test_very_high_share_hits_floor_not_zero(self):
        assert sedentary_score(self._split(100, 0, 900)) == 40.0


# ─── workout recency ──────────────────────────────────────────────────────────

class TestWorkoutRecencyScore:
    def test_no_workout_is_55(self):
        assert workout_recency_score(make_snapshot(last_workout=None)) == 55.0

    @pytest.mark.parametrize("days,expected", [
        (0, 100.0),
        (1, 95.0),
        (2, 90.0),
        (3, 80.0),
        (4, 65.0),
        (6, 65.0),
        (7, 50.0),
        (9, 50.0),
        (10, 45.0),
        (14, 45.0),
        (15, 40.0),
        (60, 40.0),
    ])
    def test_stepped_tiers(self, days, expected):
        now = at(21, 30)
        snap = make_snapshot(now=now, last_workout=workout_days_ago(now, days))
        assert workout_recency_score(snap) == expected

    def test_future_workout_is_60(self):
        now = at(21, 30)
        snap = make_snapshot(now=now, last_workout=workout_days_ago(now, -1))
        assert workout_recency_score(snap) == 60.0

    def test_counts_calendar_days_not_hours(self):
        """A workout late yesterday is one day ago even if only hours passed."""
        now = at(0, 30, day=10)
        snap = make_snapshot(now=now, last_workout=workout_days_ago(at(23, 0, day=9), 0))
        assert workout_recency_score(snap) == 95.0


# ─── combined ─────────────────────────────────────────────────────────────────

class TestMakeScore:
    def test_typical_complete_day_scores_100(self, snapshot):
        assert make_score(snapshot) == 100

    def test_returns_int(self, snapshot):
        assert isinstance(make_score(snapshot), int)

    def test_no_history_with_fresh_workout(self):
        # 60*0.3 + 60*0.25 + 60*0.2 + 60*0.15 + 100*0.1 = 64
        snap = make_snapshot(
            steps_goal=None,
            steps_7d_avg=None,
            exercise_minutes_7d_avg=None,
            active_energy_7d_avg_kcal=None,
            sleep_minutes_today=0,
            active_minutes_today=0,
            sedentary_minutes_today=0,
        )
        assert make_score(snap) == 64

    def test_half_point_total_rounds_up(self):
        # 60*0.3 + 60*0.25 + 60*0.2 + 60*0.15 + 65*0.1 = 60.5 → 61 (round() gives 60)
        now = at(21, 30)
        snap = make_snapshot(
            now=now,
            steps_goal=None,
            steps_7d_avg=None,
            exercise_minutes_7d_avg=None,
            active_energy_7d_avg_kcal=None,
            sleep_minutes_today=0,
            active_minutes_today=0,
            sedentary_minutes_today=0,
            last_workout=workout_days_ago(now, 4),
        )
        breakdown = score_breakdown(snap)
        assert breakdown.recency == 65.0
        assert breakdown.score == 61
        assert make_score(snap) == 61

    def test_worst_case_keeps_the_floors(self):
        now = at(21, 30)
        snap = make_snapshot(
            now=now,
            steps_today=0,
            steps_goal=10000,
            exercise_minutes_today=0,
            exercise_minutes_7d_avg=40,
            active_energy_today_kcal=0,
            active_energy_7d_avg_kcal=500,
            sleep_minutes_today=100,
            active_minutes_today=0,
            sedentary_minutes_today=900,
            last_workout=workout_days_ago(now, 30),
        )
        # only the sedentary (40) and recency (40) floors contribute
        assert make_score(snap) == 10

    def test_idempotent(self, snapshot):
        assert make_score(snapshot) == make_score(snapshot)

    @pytest.mark.parametrize("hour", [0, 6, 9, 13, 17, 20, 23])
    @pytest.mark.parametrize("steps", [0, 3000, 20000])
    def test_always_in_range(self, hour, steps):
        snap = make_snapshot(now=at(hour), steps_today=steps, exercise_minutes_today=0)
        assert 0 <= make_score(snap) <= 100

    def test_breakdown_matches_score(self, snapshot):
        breakdown = score_breakdown(snapshot)
        assert isinstance(breakdown, ScoreBreakdown)
        assert breakdown.score == make_score(snapshot)
        assert breakdown.steps == steps_score(snapshot)
        assert breakdown.recency == workout_recency_score(snapshot)

    def test_custom_weights(self):
        thresholds = ScoreThresholds(
            steps_weight=1.0,
            exercise_weight=0.0,
            energy_weight=0.0,
            sedentary_weight=0.0,
            recency_weight=0.0,
        )
        snap = make_snapshot(now=at(21), steps_goal=10000, steps_today=5000)
        # 100 * (1 - 0.25 / 0.55) = 54.5 → 55
        assert make_score(snap, thresholds) == 55
