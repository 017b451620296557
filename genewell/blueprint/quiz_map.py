"""
Likert question configuration for the wellness quiz.

Every scored question is answered on a 1..5 scale. Each entry maps a
question key to:
  - dimension: which profile score it feeds ("stress" | "sleep" | "activity" | "energy")
  - weight: relative weight inside its dimension
  - reverse: True when a high answer is *bad* (e.g. "how often are you stressed?")
  - required: core answer set; analyze() rejects submissions missing these

The stress dimension is scored as resilience: 100 = copes very well.
"""

from __future__ import annotations

from dataclasses import dataclass

LIKERT_MIN = 1
LIKERT_MAX = 5

DIMENSIONS = ("stress", "sleep", "activity", "energy")


@dataclass(frozen=True, slots=True)
class QuestionConfig:
    dimension: str
    weight: float = 1.0
    reverse: bool = False
    required: bool = True


QUESTION_CONFIG: dict[str, QuestionConfig] = {
    # Stress resilience
    "stress_frequency": QuestionConfig(dimension="stress", weight=1.5, reverse=True),
    "stress_coping": QuestionConfig(dimension="stress", weight=1.0),
    "overwhelm_frequency": QuestionConfig(dimension="stress", weight=0.5, reverse=True, required=False),
    # Sleep
    "sleep_quality": QuestionConfig(dimension="sleep", weight=1.5),
    "wake_refreshed": QuestionConfig(dimension="sleep", weight=1.0),
    "night_waking": QuestionConfig(dimension="sleep", weight=0.5, reverse=True, required=False),
    # Activity
    "activity_level": QuestionConfig(dimension="activity", weight=2.0),
    "daily_movement": QuestionConfig(dimension="activity", weight=1.0, required=False),
    # Energy
    "energy_level": QuestionConfig(dimension="energy", weight=1.5),
    "afternoon_slump": QuestionConfig(dimension="energy", weight=1.0, reverse=True, required=False),
}

CORE_QUESTIONS: tuple[str, ...] = tuple(k for k, cfg in QUESTION_CONFIG.items() if cfg.required)

# Self-reported exercise frequency → TDEE activity multiplier
ACTIVITY_MULTIPLIERS: dict[str, float] = {
    "none": 1.2,
    "1-2": 1.375,
    "3-4": 1.55,
    "5-6": 1.725,
    "daily": 1.9,
}
DEFAULT_ACTIVITY_MULTIPLIER = 1.2

GENDER_ALIASES: dict[str, str] = {
    "male": "male",
    "m": "male",
    "man": "male",
    "female": "female",
    "f": "female",
    "woman": "female",
    "other": "other",
    "non-binary": "other",
    "nonbinary": "other",
    "prefer_not_to_say": "other",
}

# Reference anthropometrics used when the user skips height/weight
REFERENCE_BODY: dict[str, tuple[float, float]] = {
    "female": (158.0, 57.0),
    "male": (170.0, 70.0),
    "other": (164.0, 63.0),
}
INTERNATIONAL_BODY_OFFSET: tuple[float, float] = (5.0, 5.0)

HEIGHT_RANGE_CM: tuple[float, float] = (120.0, 230.0)
WEIGHT_RANGE_KG: tuple[float, float] = (30.0, 250.0)
AGE_RANGE: tuple[int, int] = (1, 120)

# Multi-select answers: the literal "none" means an empty selection
MULTI_SELECT_KEYS: tuple[str, ...] = (
    "medical_conditions",
    "digestive_issues",
    "food_intolerances",
    "skin_concerns",
    "exercise_preference",
)


def get_question(key: str) -> QuestionConfig | None:
    return QUESTION_CONFIG.get(key)


def questions_for(dimension: str) -> dict[str, QuestionConfig]:
    return {k: cfg for k, cfg in QUESTION_CONFIG.items() if cfg.dimension == dimension}
