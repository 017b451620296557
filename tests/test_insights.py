"""Tests for the insight deriver."""

from __future__ import annotations

import pytest

from genewell.blueprint.analyzer import analyze
from genewell.blueprint.insights import (
    STRESS_TEMPLATES,
    calorie_range,
    derive,
    format_clock,
    meal_times,
    supplement_stack,
)
from tests.conftest import make_answers


class TestClock:
    def test_format_clock(self):
        assert format_clock(0) == "12:00 AM"
        assert format_clock(8 * 60) == "8:00 AM"
        assert format_clock(12 * 60 + 30) == "12:30 PM"
        assert format_clock(18 * 60) == "6:00 PM"

    def test_wraps_past_midnight(self):
        assert format_clock(25 * 60 + 5) == "1:05 AM"

    def test_meal_times_from_seven(self):
        assert meal_times("07:00") == ("8:00 AM", "12:30 PM", "6:00 PM")

    def test_meal_times_late_riser(self):
        assert meal_times("10:30") == ("11:30 AM", "4:00 PM", "9:30 PM")


class TestCalorieRange:
    def test_range_around_tdee(self):
        r = calorie_range(2000)
        assert (r.min, r.max) == (1500, 2200)

    def test_floor_respected(self):
        r = calorie_range(1300)
        assert r.min == 1200
        assert r.max == 1500


class TestSupplementStack:
    def test_catalog_lookup(self):
        stack = supplement_stack(("Vitamin D3",))
        assert stack[0].name == "Vitamin D3"
        assert "IU" in stack[0].dosage

    def test_unknown_supplement(self):
        stack = supplement_stack(("Moon Dust",))
        assert stack[0].dosage == "As directed by your physician"


class TestDerive:
    def test_meal_times(self, insights):
        assert insights.recommended_meal_times == ("8:00 AM", "12:30 PM", "6:00 PM")

    def test_calorie_range(self, profile, insights):
        assert insights.calorie_range.min == profile.tdee - 500
        assert insights.calorie_range.max == profile.tdee + 200

    def test_macro_ratio_bound(self, insights):
        assert 98 <= insights.macro_ratios.total <= 102

    def test_supplements_follow_priority(self, profile, insights):
        assert tuple(s.name for s in insights.supplement_stack) == profile.supplement_priority

    def test_metabolic_insight_mentions_numbers(self, profile, insights):
        assert str(profile.bmr) in insights.metabolic_insight
        assert str(profile.tdee) in insights.metabolic_insight
        assert profile.name in insights.metabolic_insight

    def test_low_stress_resilience_template(self):
        p = analyze(make_answers(stress_frequency=5, stress_coping=1))
        assert p.stress_score < 40
        assert derive(p).stress_strategy == STRESS_TEMPLATES["low"].format(score=p.stress_score)

    def test_high_sleep_template_uses_wake_time(self):
        p = analyze(make_answers(sleep_quality=5, wake_refreshed=5, wake_time="06:00"))
        assert "6:00 AM" in derive(p).sleep_strategy
        assert "excellent" in derive(p).sleep_strategy

    def test_deterministic(self, profile):
        assert derive(profile) == derive(profile)

    @pytest.mark.parametrize("weight", [40, 75, 130])
    @pytest.mark.parametrize("freq", ["none", "1-2", "daily"])
    def test_macro_bound_across_profiles(self, weight, freq):
        p = analyze(make_answers(weight_kg=weight, exercise_frequency=freq, activity_level=5))
        assert 98 <= derive(p).macro_ratios.total <= 102
