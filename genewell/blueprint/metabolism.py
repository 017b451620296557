"""Pure stateless metabolic and scoring math, no I/O."""

from __future__ import annotations

KCAL_PER_GRAM = {"protein": 4, "carbs": 4, "fats": 9}

TDEE_FLOOR_KCAL = 1200
FAT_SHARE_OF_TDEE = 0.25
PROTEIN_CAP_SHARE_OF_TDEE = 0.35
PROTEIN_G_PER_KG = {"low": 1.6, "moderate": 1.8, "high": 2.0}


def clamp(value: float, lo: float, hi: float) -> float:
    return min(max(value, lo), hi)


def bmr_mifflin_st_jeor(weight_kg: float, height_cm: float, age_years: int, gender: str) -> float:
    """Mifflin-St Jeor BMR formula. Returns kcal/day.

    "other" averages the male (+5) and female (-161) constants.
    """
    base = 10.0 * weight_kg + 6.25 * height_cm - 5.0 * age_years
    g = (gender or "").lower()
    if g.startswith("f"):
        return base - 161.0
    if g.startswith("m"):
        return base + 5.0
    return base - 78.0


def tdee_from_bmr(bmr: float, activity_multiplier: float) -> int:
    """TDEE = BMR × activity multiplier, rounded and floored at TDEE_FLOOR_KCAL."""
    return max(TDEE_FLOOR_KCAL, round(bmr * activity_multiplier))


def macro_grams(tdee: int, weight_kg: float, intensity: str) -> tuple[int, int, int]:
    """Return integer (protein, carbs, fats) grams that add up to ~tdee kcal.

    Protein and fats are fixed first; carbs absorb the remainder so the
    calorie total never drifts by more than one carb-gram rounding (2 kcal).
    """
    g_per_kg = PROTEIN_G_PER_KG.get(intensity, PROTEIN_G_PER_KG["moderate"])
    protein_cap = tdee * PROTEIN_CAP_SHARE_OF_TDEE / KCAL_PER_GRAM["protein"]
    protein = round(min(weight_kg * g_per_kg, protein_cap))
    fats = round(tdee * FAT_SHARE_OF_TDEE / KCAL_PER_GRAM["fats"])
    remaining = tdee - protein * KCAL_PER_GRAM["protein"] - fats * KCAL_PER_GRAM["fats"]
    carbs = max(0, round(remaining / KCAL_PER_GRAM["carbs"]))
    return protein, carbs, fats


def macro_percentages(protein_g: int, carbs_g: int, fats_g: int, tdee: int) -> tuple[int, int, int]:
    """Percentage of TDEE per macro: grams × kcal/g ÷ TDEE × 100, rounded."""
    if tdee <= 0:
        return 0, 0, 0
    return (
        round(protein_g * KCAL_PER_GRAM["protein"] / tdee * 100),
        round(carbs_g * KCAL_PER_GRAM["carbs"] / tdee * 100),
        round(fats_g * KCAL_PER_GRAM["fats"] / tdee * 100),
    )


def likert_fraction(answer: int, reverse: bool, lo: int = 1, hi: int = 5) -> float:
    """Map a Likert answer onto [0, 1]; reverse-scored items are flipped."""
    span = hi - lo
    frac = (answer - lo) / span if span else 0.0
    return 1.0 - frac if reverse else frac


def weighted_score(items: list[tuple[float, float]]) -> int:
    """Weighted mean of (fraction, weight) pairs scaled to a 0-100 integer.

    Empty input (or zero total weight) scores 50, the neutral midpoint.
    """
    total_weight = sum(w for _, w in items)
    if total_weight <= 0:
        return 50
    mean = sum(f * w for f, w in items) / total_weight
    return int(clamp(round(mean * 100), 0, 100))


def score_bucket(score: int, low: int = 40, high: int = 70) -> str:
    """Bucket a 0-100 score: <low is "low", <high is "moderate", else "high"."""
    if score < low:
        return "low"
    if score < high:
        return "moderate"
    return "high"
