"""Blueprint data contracts: Pydantic v2 models."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Gender(str, Enum):
    male = "male"
    female = "female"
    other = "other"


class Region(str, Enum):
    north = "north"
    south = "south"
    east = "east"
    west = "west"
    central = "central"
    northeast = "northeast"
    international = "international"


class Language(str, Enum):
    en = "en"
    hi = "hi"


class Tier(str, Enum):
    """Purchased plan level. Ordered: free < essential < premium < coaching."""

    free = "free"
    essential = "essential"
    premium = "premium"
    coaching = "coaching"

    @property
    def rank(self) -> int:
        return _TIER_ORDER.index(self.value)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Tier):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Tier):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Tier):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Tier):
            return NotImplemented
        return self.rank >= other.rank

    @classmethod
    def from_plan_id(cls, plan_id: str) -> Tier:
        """Resolve a checkout plan id ("essential_blueprint", "complete_coaching") or bare tier name."""
        key = plan_id.strip().lower()
        if key == "complete_coaching":
            return cls.coaching
        key = key.removesuffix("_blueprint")
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f"Unknown plan id: {plan_id}") from None


_TIER_ORDER = ("free", "essential", "premium", "coaching")


class ExerciseIntensity(str, Enum):
    low = "low"
    moderate = "moderate"
    high = "high"


# ---------------------------------------------------------------------------
# Profile & insights
# ---------------------------------------------------------------------------


class PersonalizationProfile(BaseModel):
    """Normalized snapshot of one quiz submission, read-only downstream."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    email: str | None = None
    age: int = Field(gt=0)
    gender: Gender

    height_cm: float
    weight_kg: float
    bmr: int
    tdee: int
    protein_grams: int
    carbs_grams: int
    fats_grams: int

    stress_score: int = Field(ge=0, le=100)  # higher = more resilient
    sleep_score: int = Field(ge=0, le=100)
    activity_score: int = Field(ge=0, le=100)
    energy_score: int = Field(ge=0, le=100)

    medical_conditions: frozenset[str] = frozenset()
    digestive_issues: frozenset[str] = frozenset()
    food_intolerances: frozenset[str] = frozenset()
    skin_concerns: frozenset[str] = frozenset()

    dietary_preference: str = "omnivore"
    exercise_preference: frozenset[str] = frozenset()
    work_schedule: str = "day"
    region: Region = Region.north
    wake_time: str = "07:00"  # HH:MM, 24h

    recommended_tests: tuple[str, ...] = ()
    supplement_priority: tuple[str, ...] = ()
    exercise_intensity: ExerciseIntensity = ExerciseIntensity.moderate
    meal_frequency: int = Field(default=3, ge=1)
    dna_consent: bool = False


class CalorieRange(BaseModel):
    model_config = ConfigDict(frozen=True)

    min: int
    max: int


class MacroRatios(BaseModel):
    model_config = ConfigDict(frozen=True)

    protein: int
    carbs: int
    fats: int

    @property
    def total(self) -> int:
        return self.protein + self.carbs + self.fats


class SupplementRecommendation(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    reason: str
    dosage: str


class PersonalizationInsights(BaseModel):
    model_config = ConfigDict(frozen=True)

    metabolic_insight: str
    recommended_meal_times: tuple[str, str, str]  # breakfast, lunch, dinner
    calorie_range: CalorieRange
    macro_ratios: MacroRatios
    supplement_stack: tuple[SupplementRecommendation, ...] = ()
    workout_strategy: str
    sleep_strategy: str
    stress_strategy: str


# ---------------------------------------------------------------------------
# Purchase configuration
# ---------------------------------------------------------------------------


class ReportConfiguration(BaseModel):
    model_config = ConfigDict(frozen=True)

    tier: Tier
    add_ons: frozenset[str] = frozenset()
    order_id: str = Field(min_length=1)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    language: Language = Language.en

    @classmethod
    def from_plan_id(cls, plan_id: str, **kwargs: Any) -> ReportConfiguration:
        return cls(tier=Tier.from_plan_id(plan_id), **kwargs)


# ---------------------------------------------------------------------------
# Composed sections
# ---------------------------------------------------------------------------


class SectionKind(str, Enum):
    cover = "cover"
    top_actions = "top_actions"
    executive_summary = "executive_summary"
    science_updates = "science_updates"
    metabolic_profile = "metabolic_profile"
    nutrition_plan = "nutrition_plan"
    meal_plan_detail = "meal_plan_detail"
    sleep_protocol = "sleep_protocol"
    movement_plan = "movement_plan"
    stress_management = "stress_management"
    supplements = "supplements"
    progress_tracking = "progress_tracking"
    action_plan = "action_plan"
    closing = "closing"


class TextRole(str, Enum):
    body = "body"
    note = "note"  # muted explanatory text
    emphasis = "emphasis"  # bold body
    callout = "callout"  # brand-coloured bold
    small = "small"


class HeadingBlock(BaseModel):
    type: Literal["heading"] = "heading"
    text: str


class ParagraphBlock(BaseModel):
    type: Literal["paragraph"] = "paragraph"
    text: str
    role: TextRole = TextRole.body


class BulletListBlock(BaseModel):
    type: Literal["bullet_list"] = "bullet_list"
    items: list[str] = Field(default_factory=list)


class LabeledValueBlock(BaseModel):
    type: Literal["labeled_value"] = "labeled_value"
    label: str
    value: str


Block = Annotated[
    Union[HeadingBlock, ParagraphBlock, BulletListBlock, LabeledValueBlock],
    Field(discriminator="type"),
]


class Section(BaseModel):
    """One report section.

    An add-on section carries its anchor's `kind` and sets `add_on`, so
    `(kind, add_on)` is unique within a report while `kind` alone is not.
    """

    kind: SectionKind
    title: str
    subtitle: str | None = None
    blocks: list[Block] = Field(default_factory=list)
    add_on: str | None = None  # set when injected by an add-on


# ---------------------------------------------------------------------------
# HTTP request / response bodies
# ---------------------------------------------------------------------------


class QuoteRequest(BaseModel):
    plan_id: str
    add_ons: list[str] = Field(default_factory=list)


class ReportRequest(BaseModel):
    answers: dict[str, Any]
    plan_id: str = "free_blueprint"
    add_ons: list[str] = Field(default_factory=list)
    order_id: str = Field(min_length=1)
    timestamp: datetime | None = None
    language: Language | None = None

    @field_validator("order_id")
    @classmethod
    def _strip_order_id(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("order_id must not be blank")
        return v


class AnalysisResponse(BaseModel):
    profile: PersonalizationProfile
    insights: PersonalizationInsights


class OutlineEntry(BaseModel):
    kind: SectionKind
    title: str
    add_on: str | None = None  # distinguishes an add-on from its anchor of the same kind


class OutlineResponse(BaseModel):
    order_id: str
    tier: Tier
    sections: list[OutlineEntry] = Field(default_factory=list)
