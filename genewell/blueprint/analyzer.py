"""Quiz Analyzer: raw quiz answers to PersonalizationProfile.

Pure and deterministic: identical answers always produce an identical
profile. Every malformed field is collected before raising, so a single
ValidationError lists everything the user still has to fix.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from typing import Any

from genewell.blueprint import metabolism, quiz_map
from genewell.blueprint.errors import ValidationError
from genewell.blueprint.models import (
    ExerciseIntensity,
    Gender,
    PersonalizationProfile,
    Region,
)

_WAKE_TIME_RE = re.compile(r"^([01]?\d|2[0-3]):([0-5]\d)$")

BASE_TESTS = (
    "Complete Blood Count (CBC)",
    "Vitamin D (25-OH)",
    "Vitamin B12",
    "Fasting Blood Sugar & HbA1c",
    "Lipid Profile",
)

CONDITION_TESTS: dict[str, tuple[str, ...]] = {
    "thyroid": ("Thyroid Panel (TSH, T3, T4)",),
    "diabetes": ("Fasting Insulin", "HbA1c (quarterly)"),
    "prediabetes": ("Fasting Insulin",),
    "pcos": ("Hormone Panel (LH, FSH, Testosterone)", "Fasting Insulin"),
    "hypertension": ("Kidney Function Test (KFT)", "Electrolytes"),
    "cholesterol": ("Advanced Lipid Panel (ApoB)",),
    "anemia": ("Iron Studies & Ferritin",),
    "fatty_liver": ("Liver Function Test (LFT)",),
}


# ---------------------------------------------------------------------------
# Field coercion helpers; each returns None on failure, never raises
# ---------------------------------------------------------------------------


def _clean_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _as_int(value: Any) -> int | None:
    """Parse an integral number (int, integral float, or numeric string)."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        try:
            parsed = float(value.strip())
        except ValueError:
            return None
        return int(parsed) if parsed.is_integer() else None
    return None


def _as_float(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def _as_set(value: Any) -> frozenset[str]:
    """Normalize a multi-select answer: list/set/comma string → lower-cased frozenset.

    The literal "none" is an explicit empty selection.
    """
    if value is None:
        return frozenset()
    if isinstance(value, str):
        parts: Iterable[Any] = value.split(",")
    elif isinstance(value, Iterable):
        parts = value
    else:
        parts = [value]
    items = {str(p).strip().lower() for p in parts if p is not None}
    return frozenset(i for i in items if i and i != "none")


def _normalize_gender(value: Any) -> str | None:
    text = _clean_str(value)
    if text is None:
        return None
    return quiz_map.GENDER_ALIASES.get(text.lower().replace(" ", "_"))


def _normalize_region(value: Any) -> Region:
    text = _clean_str(value)
    if text is None:
        return Region.north
    try:
        return Region(text.lower())
    except ValueError:
        return Region.international


# ---------------------------------------------------------------------------
# Recommendation seeds
# ---------------------------------------------------------------------------


def _dedupe(items: Iterable[str]) -> tuple[str, ...]:
    seen: dict[str, None] = {}
    for item in items:
        seen.setdefault(item, None)
    return tuple(seen)


def recommend_tests(
    gender: str,
    age: int,
    conditions: frozenset[str],
    dietary_preference: str,
) -> tuple[str, ...]:
    tests: list[str] = list(BASE_TESTS)
    for condition in sorted(conditions):
        tests.extend(CONDITION_TESTS.get(condition, ()))
    if gender == "female":
        tests.append("Iron Studies & Ferritin")
        tests.append("Thyroid Panel (TSH, T3, T4)")
    if age >= 40:
        tests.append("Kidney Function Test (KFT)")
        tests.append("hs-CRP (Inflammation Marker)")
    if gender == "male" and age >= 45:
        tests.append("PSA (Prostate Screening)")
    if dietary_preference in {"vegetarian", "vegan", "jain"}:
        tests.append("Iron Studies & Ferritin")
        tests.append("Omega-3 Index")
    return _dedupe(tests)


def prioritize_supplements(
    stress_score: int,
    sleep_score: int,
    energy_score: int,
    dietary_preference: str,
    region: Region,
    conditions: frozenset[str],
    digestive_issues: frozenset[str],
) -> tuple[str, ...]:
    """Rule-driven supplement ordering, most important first, max 6."""
    stack: list[str] = []
    # Vitamin D deficiency is near-universal in indoor/urban lifestyles
    stack.append("Vitamin D3")
    if dietary_preference in {"vegetarian", "vegan", "jain"}:
        stack.append("Vitamin B12")
        stack.append("Algae Omega-3")
    else:
        stack.append("Omega-3 Fish Oil")
    if sleep_score < 50 or stress_score < 40:
        stack.append("Magnesium Glycinate")
    if stress_score < 40:
        stack.append("Ashwagandha")
    if energy_score < 40:
        stack.append("Vitamin B Complex")
    if digestive_issues:
        stack.append("Probiotic")
    if "anemia" in conditions:
        stack.append("Iron Bisglycinate")
    if region == Region.international:
        stack.append("Multivitamin")
    return _dedupe(stack)[:6]


def _exercise_intensity(activity_score: int) -> ExerciseIntensity:
    bucket = metabolism.score_bucket(activity_score)
    return {
        "low": ExerciseIntensity.low,
        "moderate": ExerciseIntensity.moderate,
        "high": ExerciseIntensity.high,
    }[bucket]


def _meal_frequency(
    digestive_issues: frozenset[str],
    work_schedule: str,
    intensity: ExerciseIntensity,
) -> int:
    if digestive_issues or work_schedule in {"night_shift", "rotating"}:
        return 5
    if intensity == ExerciseIntensity.high:
        return 4
    return 3


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------


def _score_dimensions(answers: Mapping[str, Any], errors: list[str]) -> dict[str, int]:
    per_dim: dict[str, list[tuple[float, float]]] = {d: [] for d in quiz_map.DIMENSIONS}
    for key, cfg in quiz_map.QUESTION_CONFIG.items():
        raw = answers.get(key)
        if raw is None:
            if cfg.required:
                errors.append(key)
            continue
        value = _as_int(raw)
        if value is None or not quiz_map.LIKERT_MIN <= value <= quiz_map.LIKERT_MAX:
            errors.append(key)
            continue
        frac = metabolism.likert_fraction(value, cfg.reverse, quiz_map.LIKERT_MIN, quiz_map.LIKERT_MAX)
        per_dim[cfg.dimension].append((frac, cfg.weight))
    return {dim: metabolism.weighted_score(items) for dim, items in per_dim.items()}


def analyze(raw_answers: Mapping[str, Any]) -> PersonalizationProfile:
    """Turn raw quiz answers into a PersonalizationProfile.

    Raises ValidationError when name, age, gender or any core Likert
    answer is missing or malformed, or when optional fields are present
    but implausible.
    """
    if not isinstance(raw_answers, Mapping) or not raw_answers:
        raise ValidationError("Quiz answers are empty", fields=["name", "age", "gender", *quiz_map.CORE_QUESTIONS])

    errors: list[str] = []

    name = _clean_str(raw_answers.get("name"))
    if name is None:
        errors.append("name")

    email = _clean_str(raw_answers.get("email"))
    if email is not None and "@" not in email:
        errors.append("email")

    age = _as_int(raw_answers.get("age"))
    age_lo, age_hi = quiz_map.AGE_RANGE
    if age is None or not age_lo <= age <= age_hi:
        errors.append("age")

    gender = _normalize_gender(raw_answers.get("gender"))
    if gender is None:
        errors.append("gender")

    region = _normalize_region(raw_answers.get("region"))

    height = _optional_measure(raw_answers, "height_cm", quiz_map.HEIGHT_RANGE_CM, errors)
    weight = _optional_measure(raw_answers, "weight_kg", quiz_map.WEIGHT_RANGE_KG, errors)

    wake_time = _clean_str(raw_answers.get("wake_time")) or "07:00"
    match = _WAKE_TIME_RE.match(wake_time)
    if match is None:
        errors.append("wake_time")
    else:
        wake_time = f"{int(match.group(1)):02d}:{match.group(2)}"

    scores = _score_dimensions(raw_answers, errors)

    if errors:
        raise ValidationError(f"Invalid or missing quiz answers: {', '.join(errors)}", fields=errors)

    ref_height, ref_weight = quiz_map.REFERENCE_BODY[gender]
    if region == Region.international:
        ref_height += quiz_map.INTERNATIONAL_BODY_OFFSET[0]
        ref_weight += quiz_map.INTERNATIONAL_BODY_OFFSET[1]
    height_cm = height if height is not None else ref_height
    weight_kg = weight if weight is not None else ref_weight

    exercise_frequency = (_clean_str(raw_answers.get("exercise_frequency")) or "").lower()
    multiplier = quiz_map.ACTIVITY_MULTIPLIERS.get(exercise_frequency, quiz_map.DEFAULT_ACTIVITY_MULTIPLIER)

    bmr = round(metabolism.bmr_mifflin_st_jeor(weight_kg, height_cm, age, gender))
    tdee = metabolism.tdee_from_bmr(bmr, multiplier)

    intensity = _exercise_intensity(scores["activity"])
    protein, carbs, fats = metabolism.macro_grams(tdee, weight_kg, intensity.value)

    selections = {key: _as_set(raw_answers.get(key)) for key in quiz_map.MULTI_SELECT_KEYS}
    conditions = selections["medical_conditions"]
    digestive = selections["digestive_issues"]

    diet = (_clean_str(raw_answers.get("dietary_preference")) or "omnivore").lower()
    work_schedule = (_clean_str(raw_answers.get("work_schedule")) or "day").lower()

    return PersonalizationProfile(
        name=name,
        email=email,
        age=age,
        gender=Gender(gender),
        height_cm=round(height_cm, 1),
        weight_kg=round(weight_kg, 1),
        bmr=bmr,
        tdee=tdee,
        protein_grams=protein,
        carbs_grams=carbs,
        fats_grams=fats,
        stress_score=scores["stress"],
        sleep_score=scores["sleep"],
        activity_score=scores["activity"],
        energy_score=scores["energy"],
        medical_conditions=conditions,
        digestive_issues=digestive,
        food_intolerances=selections["food_intolerances"],
        skin_concerns=selections["skin_concerns"],
        dietary_preference=diet,
        exercise_preference=selections["exercise_preference"],
        work_schedule=work_schedule,
        region=region,
        wake_time=wake_time,
        recommended_tests=recommend_tests(gender, age, conditions, diet),
        supplement_priority=prioritize_supplements(
            scores["stress"],
            scores["sleep"],
            scores["energy"],
            diet,
            region,
            conditions,
            digestive,
        ),
        exercise_intensity=intensity,
        meal_frequency=_meal_frequency(digestive, work_schedule, intensity),
        dna_consent=_as_bool(raw_answers.get("dna_consent")),
    )


def _optional_measure(
    answers: Mapping[str, Any],
    key: str,
    bounds: tuple[float, float],
    errors: list[str],
) -> float | None:
    raw = answers.get(key)
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return None
    value = _as_float(raw)
    if value is None or not bounds[0] <= value <= bounds[1]:
        errors.append(key)
        return None
    return value


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in {"true", "yes", "y", "1"}
    if isinstance(value, (int, float)):
        return value != 0
    return False
