"""Insight Deriver: PersonalizationProfile to PersonalizationInsights.

Pure function of the profile. Every narrative is picked from a fixed
template table keyed by score bucket and filled with profile values;
nothing is generated free-form.
"""

from __future__ import annotations

from genewell.blueprint import metabolism
from genewell.blueprint.models import (
    CalorieRange,
    MacroRatios,
    PersonalizationInsights,
    PersonalizationProfile,
    SupplementRecommendation,
)

# Minutes after waking
MEAL_OFFSETS_MIN: tuple[int, int, int] = (60, 330, 660)

CALORIE_RANGE_BELOW = 500
CALORIE_RANGE_ABOVE = 200


SUPPLEMENT_CATALOG: dict[str, tuple[str, str]] = {
    "Vitamin D3": ("Supports immunity, mood and bone health; most indoor workers run low.", "2000-4000 IU with breakfast"),
    "Vitamin B12": ("Plant-forward diets provide little B12; needed for energy and nerves.", "500-1000 mcg daily"),
    "Omega-3 Fish Oil": ("Anti-inflammatory EPA/DHA for heart, brain and joints.", "2-3 g EPA+DHA with meals"),
    "Algae Omega-3": ("Vegetarian EPA/DHA source for heart and brain health.", "250-500 mg DHA+EPA with meals"),
    "Magnesium Glycinate": ("Calms the nervous system and deepens sleep.", "300-400 mg, 60 min before bed"),
    "Ashwagandha": ("Adaptogen shown to lower cortisol and perceived stress.", "300-600 mg root extract daily"),
    "Vitamin B Complex": ("Cofactors for energy metabolism when fatigue is high.", "1 capsule with breakfast"),
    "Probiotic": ("Supports gut comfort and regularity.", "10-20 billion CFU with a meal"),
    "Iron Bisglycinate": ("Gentle iron form to rebuild ferritin stores.", "18-25 mg on alternate days, with vitamin C"),
    "Multivitamin": ("Broad insurance against micronutrient gaps.", "1 daily with breakfast"),
}
UNKNOWN_SUPPLEMENT_REASON = "Recommended based on your quiz answers."
UNKNOWN_SUPPLEMENT_DOSAGE = "As directed by your physician"


METABOLIC_TEMPLATES: dict[str, str] = {
    "low": (
        "{name}, your body burns about {bmr} kcal/day at rest and roughly {tdee} kcal/day in total. "
        "Your current routine is mostly sedentary, so small daily movement gains will lift your "
        "energy expenditure faster than strict dieting."
    ),
    "moderate": (
        "{name}, your resting metabolism is about {bmr} kcal/day and your total daily burn is around "
        "{tdee} kcal. You are moderately active; pairing consistent meal timing with {protein}g of "
        "protein daily will protect muscle and steady your energy."
    ),
    "high": (
        "{name}, with a resting metabolism of about {bmr} kcal/day and a high activity level, you burn "
        "roughly {tdee} kcal daily. Fuel training days properly and prioritise recovery so the extra "
        "output turns into progress, not fatigue."
    ),
}

STRESS_TEMPLATES: dict[str, str] = {
    "low": (
        "Your stress resilience score is {score}/100, which signals low resilience right now. Your nervous "
        "system is spending too long in fight-or-flight. Start with 5 minutes of box breathing twice "
        "daily and protect your sleep before adding anything else."
    ),
    "moderate": (
        "Your stress resilience score is {score}/100. You cope reasonably well but stress still leaks into "
        "sleep and energy. A daily 10-minute wind-down and one screen-free hour each evening will move "
        "you into the resilient range."
    ),
    "high": (
        "Your stress resilience score is {score}/100, a strong foundation. Keep your current habits and "
        "use deliberate recovery (nature time, social connection) to stay resilient through busy weeks."
    ),
}

SLEEP_TEMPLATES: dict[str, str] = {
    "low": (
        "Your sleep score is {score}/100, so sleep is your number-one lever. Wake at {wake} every day, "
        "including weekends, get morning daylight within 30 minutes, and cut caffeine after 2 PM."
    ),
    "moderate": (
        "Your sleep score is {score}/100. Your sleep is workable but inconsistent. Anchor your wake time "
        "at {wake}, keep the bedroom cool and dark, and aim for 7-8 hours in bed."
    ),
    "high": (
        "Your sleep score is {score}/100, which is excellent. Protect it: keep waking at {wake}, "
        "avoid late heavy meals, and treat sleep as part of your training."
    ),
}

WORKOUT_TEMPLATES: dict[str, str] = {
    "low": (
        "Your activity score is {score}/100. Begin with three 20-30 minute sessions a week: brisk walks, "
        "bodyweight strength and gentle mobility. Consistency matters more than intensity for the "
        "first month."
    ),
    "moderate": (
        "Your activity score is {score}/100. Build on your base with 3-4 sessions weekly that combine "
        "full-body strength training and Zone 2 cardio, adding load gradually every two weeks."
    ),
    "high": (
        "Your activity score is {score}/100. You are ready for a structured split with progressive "
        "overload, one interval session a week and planned deload weeks to keep recovery on track."
    ),
}


def format_clock(minutes_after_midnight: int) -> str:
    """Format minutes-after-midnight as "H:MM AM/PM", wrapping past 24h."""
    minutes = minutes_after_midnight % (24 * 60)
    hour24, minute = divmod(minutes, 60)
    suffix = "AM" if hour24 < 12 else "PM"
    hour12 = hour24 % 12 or 12
    return f"{hour12}:{minute:02d} {suffix}"


def wake_minutes(wake_time: str) -> int:
    hours, minutes = wake_time.split(":")
    return int(hours) * 60 + int(minutes)


def meal_times(wake_time: str) -> tuple[str, str, str]:
    start = wake_minutes(wake_time)
    breakfast, lunch, dinner = (format_clock(start + off) for off in MEAL_OFFSETS_MIN)
    return breakfast, lunch, dinner


def macro_ratios(profile: PersonalizationProfile) -> MacroRatios:
    protein, carbs, fats = metabolism.macro_percentages(
        profile.protein_grams, profile.carbs_grams, profile.fats_grams, profile.tdee
    )
    return MacroRatios(protein=protein, carbs=carbs, fats=fats)


def calorie_range(tdee: int) -> CalorieRange:
    low = max(metabolism.TDEE_FLOOR_KCAL, tdee - CALORIE_RANGE_BELOW)
    high = max(low, tdee + CALORIE_RANGE_ABOVE)
    return CalorieRange(min=low, max=high)


def supplement_stack(priority: tuple[str, ...]) -> tuple[SupplementRecommendation, ...]:
    stack = []
    for name in priority:
        reason, dosage = SUPPLEMENT_CATALOG.get(name, (UNKNOWN_SUPPLEMENT_REASON, UNKNOWN_SUPPLEMENT_DOSAGE))
        stack.append(SupplementRecommendation(name=name, reason=reason, dosage=dosage))
    return tuple(stack)


def _activity_bucket(profile: PersonalizationProfile) -> str:
    ratio = profile.tdee / profile.bmr if profile.bmr > 0 else 1.0
    if ratio < 1.3:
        return "low"
    if ratio < 1.6:
        return "moderate"
    return "high"


def derive(profile: PersonalizationProfile) -> PersonalizationInsights:
    wake = format_clock(wake_minutes(profile.wake_time))
    return PersonalizationInsights(
        metabolic_insight=METABOLIC_TEMPLATES[_activity_bucket(profile)].format(
            name=profile.name,
            bmr=profile.bmr,
            tdee=profile.tdee,
            protein=profile.protein_grams,
        ),
        recommended_meal_times=meal_times(profile.wake_time),
        calorie_range=calorie_range(profile.tdee),
        macro_ratios=macro_ratios(profile),
        supplement_stack=supplement_stack(profile.supplement_priority),
        workout_strategy=WORKOUT_TEMPLATES[profile.exercise_intensity.value].format(score=profile.activity_score),
        sleep_strategy=SLEEP_TEMPLATES[metabolism.score_bucket(profile.sleep_score)].format(
            score=profile.sleep_score, wake=wake
        ),
        stress_strategy=STRESS_TEMPLATES[metabolism.score_bucket(profile.stress_score)].format(
            score=profile.stress_score
        ),
    )
