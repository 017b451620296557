"""Tests for the quiz analyzer, metabolic math and the question table."""

from __future__ import annotations

import pytest

from genewell.blueprint import metabolism, quiz_map
from genewell.blueprint.analyzer import analyze, prioritize_supplements, recommend_tests
from genewell.blueprint.errors import ValidationError
from genewell.blueprint.models import ExerciseIntensity, Gender, Region
from tests.conftest import make_answers


# ---------------------------------------------------------------------------
# Metabolic math
# ---------------------------------------------------------------------------

class TestMetabolism:
    def test_bmr_female(self):
        assert metabolism.bmr_mifflin_st_jeor(60, 160, 30, "female") == pytest.approx(1289.0)

    def test_bmr_male(self):
        assert metabolism.bmr_mifflin_st_jeor(70, 170, 30, "male") == pytest.approx(1617.5)

    def test_bmr_other_is_midpoint(self):
        male = metabolism.bmr_mifflin_st_jeor(65, 165, 40, "male")
        female = metabolism.bmr_mifflin_st_jeor(65, 165, 40, "female")
        other = metabolism.bmr_mifflin_st_jeor(65, 165, 40, "other")
        assert other == pytest.approx((male + female) / 2)

    def test_tdee_floor(self):
        assert metabolism.tdee_from_bmr(800, 1.2) == metabolism.TDEE_FLOOR_KCAL

    def test_tdee_rounds(self):
        assert metabolism.tdee_from_bmr(1289, 1.55) == 1998

    def test_protein_capped_for_heavy_low_tdee(self):
        protein, _, _ = metabolism.macro_grams(1200, 200, "high")
        assert protein * 4 <= 1200 * metabolism.PROTEIN_CAP_SHARE_OF_TDEE + 2

    @pytest.mark.parametrize("tdee", [1200, 1457, 1998, 2650, 3999])
    @pytest.mark.parametrize("weight", [45.0, 72.5, 140.0])
    def test_macro_percentages_sum_near_100(self, tdee, weight):
        p, c, f = metabolism.macro_grams(tdee, weight, "moderate")
        total = sum(metabolism.macro_percentages(p, c, f, tdee))
        assert 98 <= total <= 102

    def test_macro_percentages_zero_tdee(self):
        assert metabolism.macro_percentages(10, 10, 10, 0) == (0, 0, 0)

    def test_likert_fraction(self):
        assert metabolism.likert_fraction(1, reverse=False) == 0.0
        assert metabolism.likert_fraction(5, reverse=False) == 1.0
        assert metabolism.likert_fraction(5, reverse=True) == 0.0

    def test_weighted_score_empty_is_neutral(self):
        assert metabolism.weighted_score([]) == 50

    def test_weighted_score(self):
        assert metabolism.weighted_score([(1.0, 3.0), (0.0, 1.0)]) == 75

    def test_score_bucket(self):
        assert metabolism.score_bucket(39) == "low"
        assert metabolism.score_bucket(40) == "moderate"
        assert metabolism.score_bucket(69) == "moderate"
        assert metabolism.score_bucket(70) == "high"


class TestQuizMap:
    def test_core_questions_cover_every_dimension(self):
        dims = {quiz_map.get_question(k).dimension for k in quiz_map.CORE_QUESTIONS}
        assert dims == set(quiz_map.DIMENSIONS)

    def test_questions_for(self):
        stress = quiz_map.questions_for("stress")
        assert set(stress) == {"stress_frequency", "stress_coping", "overwhelm_frequency"}

    def test_unknown_question(self):
        assert quiz_map.get_question("favourite_colour") is None


# ---------------------------------------------------------------------------
# analyze()
# ---------------------------------------------------------------------------

class TestAnalyzeHappyPath:
    def test_identity_fields(self, profile):
        assert profile.name == "Priya Sharma"
        assert profile.age == 30
        assert profile.gender == Gender.female
        assert profile.region == Region.north

    def test_metabolics(self, profile):
        assert profile.bmr == 1289
        assert profile.tdee == 1998
        assert profile.protein_grams == 108

    def test_neutral_answers_score_50(self, profile):
        assert profile.stress_score == 50
        assert profile.sleep_score == 50
        assert profile.activity_score == 50
        assert profile.energy_score == 50
        assert profile.exercise_intensity == ExerciseIntensity.moderate

    def test_multi_selects(self, profile):
        assert profile.exercise_preference == frozenset({"yoga", "walking"})
        assert profile.medical_conditions == frozenset()

    def test_deterministic(self, answers):
        assert analyze(answers) == analyze(dict(answers))

    def test_string_numbers_accepted(self):
        p = analyze(make_answers(age="30", height_cm="160", weight_kg="60.0", sleep_quality="3"))
        assert p.age == 30
        assert p.bmr == 1289

    def test_gender_alias(self):
        assert analyze(make_answers(gender="M")).gender == Gender.male

    def test_comma_separated_multi_select(self):
        p = analyze(make_answers(medical_conditions="Thyroid, PCOS"))
        assert p.medical_conditions == frozenset({"thyroid", "pcos"})

    def test_none_literal_is_empty_selection(self):
        p = analyze(make_answers(digestive_issues=["none"]))
        assert p.digestive_issues == frozenset()

    def test_wake_time_normalized(self):
        assert analyze(make_answers(wake_time="6:15")).wake_time == "06:15"

    def test_wake_time_defaults(self):
        assert analyze(make_answers(wake_time=None)).wake_time == "07:00"


class TestAnalyzeDefaults:
    def test_missing_body_uses_reference(self):
        p = analyze(make_answers(height_cm=None, weight_kg=None))
        assert (p.height_cm, p.weight_kg) == quiz_map.REFERENCE_BODY["female"]

    def test_international_reference_offset(self):
        p = analyze(make_answers(height_cm=None, weight_kg=None, region="Atlantis"))
        assert p.region == Region.international
        ref_h, ref_w = quiz_map.REFERENCE_BODY["female"]
        assert p.height_cm == ref_h + 5
        assert p.weight_kg == ref_w + 5

    def test_missing_region_defaults_north(self):
        assert analyze(make_answers(region=None)).region == Region.north

    def test_unknown_exercise_frequency_is_sedentary(self):
        p = analyze(make_answers(exercise_frequency="sometimes"))
        assert p.tdee == round(1289 * quiz_map.DEFAULT_ACTIVITY_MULTIPLIER)

    def test_optional_likert_changes_score(self):
        p = analyze(make_answers(night_waking=5))
        assert p.sleep_score < 50

    def test_diet_defaults_to_omnivore(self):
        assert analyze(make_answers(dietary_preference=None)).dietary_preference == "omnivore"


class TestAnalyzeValidation:
    def test_empty_answers(self):
        with pytest.raises(ValidationError) as exc_info:
            analyze({})
        assert "name" in exc_info.value.fields
        assert "age" in exc_info.value.fields

    @pytest.mark.parametrize("field", ["name", "age", "gender", "sleep_quality", "activity_level"])
    def test_missing_required_field(self, field):
        with pytest.raises(ValidationError) as exc_info:
            analyze(make_answers(**{field: None}))
        assert exc_info.value.fields == [field]

    def test_blank_name(self):
        with pytest.raises(ValidationError) as exc_info:
            analyze(make_answers(name="   "))
        assert exc_info.value.fields == ["name"]

    @pytest.mark.parametrize("age", [0, -3, 150, "thirty", 30.5])
    def test_bad_age(self, age):
        with pytest.raises(ValidationError):
            analyze(make_answers(age=age))

    def test_likert_out_of_range(self):
        with pytest.raises(ValidationError) as exc_info:
            analyze(make_answers(stress_coping=7))
        assert exc_info.value.fields == ["stress_coping"]

    def test_implausible_weight(self):
        with pytest.raises(ValidationError) as exc_info:
            analyze(make_answers(weight_kg=900))
        assert exc_info.value.fields == ["weight_kg"]

    def test_bad_wake_time(self):
        with pytest.raises(ValidationError):
            analyze(make_answers(wake_time="25:00"))

    def test_bad_email(self):
        with pytest.raises(ValidationError):
            analyze(make_answers(email="not-an-email"))

    def test_collects_every_bad_field(self):
        with pytest.raises(ValidationError) as exc_info:
            analyze(make_answers(age=None, gender="robot", energy_level=None))
        assert set(exc_info.value.fields) == {"age", "gender", "energy_level"}


# ---------------------------------------------------------------------------
# Recommendation seeds
# ---------------------------------------------------------------------------

class TestRecommendations:
    def test_tests_for_vegetarian_woman(self, profile):
        tests = profile.recommended_tests
        assert tests[0] == "Complete Blood Count (CBC)"
        assert "Iron Studies & Ferritin" in tests
        assert "Omega-3 Index" in tests
        assert len(tests) == len(set(tests))

    def test_condition_tests(self):
        tests = recommend_tests("male", 50, frozenset({"diabetes"}), "omnivore")
        assert "Fasting Insulin" in tests
        assert "PSA (Prostate Screening)" in tests
        assert "Kidney Function Test (KFT)" in tests

    def test_vitamin_d_first(self, profile):
        assert profile.supplement_priority[0] == "Vitamin D3"

    def test_vegetarian_supplements(self, profile):
        assert profile.supplement_priority == ("Vitamin D3", "Vitamin B12", "Algae Omega-3")

    def test_low_scores_add_support(self):
        stack = prioritize_supplements(
            20, 20, 20, "omnivore", Region.international, frozenset({"anemia"}), frozenset({"bloating"})
        )
        assert len(stack) == 6
        assert stack[:2] == ("Vitamin D3", "Omega-3 Fish Oil")
        assert "Ashwagandha" in stack

    def test_meal_frequency_digestive(self):
        assert analyze(make_answers(digestive_issues=["bloating"])).meal_frequency == 5

    def test_meal_frequency_default(self, profile):
        assert profile.meal_frequency == 3
