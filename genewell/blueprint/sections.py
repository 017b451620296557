"""
Section eligibility table and per-section content builders.

SECTION_RULES is the single source of truth for tier gating: each
SectionKind lists the minimum tier that unlocks it and the builder that
produces its content. Sections are always emitted in SECTION_ORDER.

ADDON_SECTIONS is the add-on extension point: an add-on id maps to an
anchor SectionKind and a builder; the composer injects the add-on section
directly after its anchor.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import timezone

from genewell.blueprint.insights import format_clock, wake_minutes
from genewell.blueprint.models import (
    BulletListBlock,
    HeadingBlock,
    LabeledValueBlock,
    ParagraphBlock,
    PersonalizationInsights,
    PersonalizationProfile,
    ReportConfiguration,
    Section,
    SectionKind,
    TextRole,
    Tier,
)

SectionBuilder = Callable[[PersonalizationProfile, PersonalizationInsights, ReportConfiguration], Section]

TIER_EDITIONS: dict[Tier, str] = {
    Tier.free: "Free Edition",
    Tier.essential: "Essential Edition",
    Tier.premium: "Premium Edition",
    Tier.coaching: "Complete Coaching Edition",
}


def _heading(text: str) -> HeadingBlock:
    return HeadingBlock(text=text)


def _para(text: str, role: TextRole = TextRole.body) -> ParagraphBlock:
    return ParagraphBlock(text=text, role=role)


def _note(text: str) -> ParagraphBlock:
    return ParagraphBlock(text=text, role=TextRole.note)


def _bullets(*items: str) -> BulletListBlock:
    return BulletListBlock(items=list(items))


def _value(label: str, value: object) -> LabeledValueBlock:
    return LabeledValueBlock(label=label, value=str(value))


def _generated_at(config: ReportConfiguration) -> str:
    ts = config.timestamp
    if ts.tzinfo is not None:
        ts = ts.astimezone(timezone.utc)
    return ts.strftime("%d %b %Y at %H:%M UTC")


# ---------------------------------------------------------------------------
# Core section builders
# ---------------------------------------------------------------------------


def build_cover(profile: PersonalizationProfile, insights: PersonalizationInsights, config: ReportConfiguration) -> Section:
    return Section(
        kind=SectionKind.cover,
        title="Your Wellness Blueprint",
        subtitle=profile.name,
        blocks=[
            _para(f"{TIER_EDITIONS[config.tier]} - Science-Based & Fully Personalized", TextRole.callout),
            _value("Generated", _generated_at(config)),
            _value("Order ID", config.order_id),
            _value("Plan Tier", config.tier.value.upper()),
            _value("Age | Gender", f"{profile.age} | {profile.gender.value}"),
            _value("Height | Weight", f"{profile.height_cm:g} cm | {profile.weight_kg:g} kg"),
            _para(f"Dear {profile.name},"),
            _para(
                "This personalized wellness blueprint is uniquely designed for you, based on your quiz "
                "answers, lifestyle, and goals. Every recommendation is science-backed and actionable."
            ),
            _para(
                "Follow the daily and weekly steps consistently, and you'll see measurable improvements "
                "within 30 days."
            ),
        ],
    )


def build_top_actions(profile: PersonalizationProfile, insights: PersonalizationInsights, config: ReportConfiguration) -> Section:
    breakfast, lunch, dinner = insights.recommended_meal_times
    wake = format_clock(wake_minutes(profile.wake_time))
    return Section(
        kind=SectionKind.top_actions,
        title=f"{profile.name}'s Top 3 Actions This Week",
        subtitle="Start here - these three changes will have the biggest impact on your energy and results",
        blocks=[
            _para("1. Lock Your Wake Time", TextRole.callout),
            _para(
                f"Wake at {wake} every day (including weekends) for 30 days. This single action resets "
                "your circadian rhythm and improves sleep quality within days."
            ),
            _para("2. Eat Within a 10-12 Hour Window", TextRole.callout),
            _para(
                f"Breakfast: {breakfast} | Lunch: {lunch} | Dinner: {dinner} | Stop eating after {dinner}. "
                "This simple timing synchronizes your metabolism and digestion."
            ),
            _para("3. Move for 20-30 Minutes, 3x This Week", TextRole.callout),
            _para(
                "Any movement counts: walk, yoga, gym, dancing. Regular movement reduces stress, "
                "increases energy, and improves sleep. Start with what feels easy."
            ),
            _para(
                "Pro Tip: These three actions work together. Lock your wake time first (it sets everything "
                "else). Add meal timing in week 2. Add movement in week 3. Small steps, big results.",
                TextRole.small,
            ),
        ],
    )


def build_executive_summary(profile: PersonalizationProfile, insights: PersonalizationInsights, config: ReportConfiguration) -> Section:
    return Section(
        kind=SectionKind.executive_summary,
        title="Executive Summary",
        subtitle=f"{profile.name}'s Personalized Wellness Analysis",
        blocks=[
            _para(insights.metabolic_insight),
            _heading("Your Wellness Baseline"),
            _value("Energy Level", f"{profile.energy_score}/100"),
            _value("Sleep Quality", f"{profile.sleep_score}/100"),
            _value("Stress Resilience", f"{profile.stress_score}/100"),
            _value("Physical Activity", f"{profile.activity_score}/100"),
            _heading("Critical Blood Work (Baseline)"),
            _note("Get these tests done BEFORE starting (compare at 6 & 12 weeks):"),
            _bullets(*profile.recommended_tests[:6]),
        ],
    )


def build_science_updates(profile: PersonalizationProfile, insights: PersonalizationInsights, config: ReportConfiguration) -> Section:
    return Section(
        kind=SectionKind.science_updates,
        title="Latest Science Updates",
        subtitle="Current health research applied to your profile",
        blocks=[
            _para(
                "Your personalized plan incorporates recent wellness research. These insights are matched "
                "to your profile and goals."
            ),
            _heading("Your Personalized Research Insights"),
            _bullets(
                "Sleep: Sleep consistency matters more than duration. Your target is to wake at the same "
                "time daily, including weekends.",
                "Nutrition: Mediterranean diet principles improve longevity. We've adapted them to your "
                f"{profile.dietary_preference} preferences.",
                "Exercise: Zone 2 training (conversational pace cardio) builds aerobic capacity without "
                "overtraining. Aim for 2-3 sessions weekly.",
                "Stress: Brief cold exposure (15-30 seconds) activates the vagus nerve and improves "
                "resilience. Start conservatively if new to cold.",
            ),
        ],
    )


def build_metabolic_profile(profile: PersonalizationProfile, insights: PersonalizationInsights, config: ReportConfiguration) -> Section:
    tdee = profile.tdee
    ratios = insights.macro_ratios
    return Section(
        kind=SectionKind.metabolic_profile,
        title="Your Metabolic Profile",
        subtitle=f"{profile.name}'s Personal Energy Calculation",
        blocks=[
            _para("Based on your age, gender, activity level, and body composition:"),
            _para(f"Basal Metabolic Rate (BMR): {profile.bmr} calories/day", TextRole.emphasis),
            _note("Energy your body burns at complete rest (breathing, circulation, brain)."),
            _para(f"Total Daily Energy Expenditure (TDEE): {tdee} calories/day", TextRole.emphasis),
            _note("Your actual daily calorie burn, including activity."),
            _heading("What This Means for Weight Management"),
            _bullets(
                f"To maintain weight: Eat ~{tdee} calories daily",
                f"To lose fat: Eat {tdee - 500} - {tdee - 300} calories/day",
                f"To gain muscle: Eat {tdee + 300} - {tdee + 500} calories/day",
            ),
            _value("Suggested daily range", f"{insights.calorie_range.min} - {insights.calorie_range.max} kcal"),
            _heading("Daily Macronutrient Targets"),
            _value("Protein", f"{profile.protein_grams}g/day ({ratios.protein}%)"),
            _note("For muscle preservation and satiety. 1.6-2.2g per kg body weight is optimal."),
            _value("Carbs", f"{profile.carbs_grams}g/day ({ratios.carbs}%)"),
            _note("Fuels workouts, brain, and recovery. Timing matters (pre/post-workout)."),
            _value("Fats", f"{profile.fats_grams}g/day ({ratios.fats}%)"),
            _note("Essential for hormones, brain, and nutrient absorption."),
        ],
    )


def build_nutrition_plan(profile: PersonalizationProfile, insights: PersonalizationInsights, config: ReportConfiguration) -> Section:
    meal_lines = [
        _value(meal, time)
        for meal, time in zip(("Breakfast", "Lunch", "Dinner"), insights.recommended_meal_times)
    ]
    blocks = [
        _heading("Your Meal Timing (Circadian Optimization)"),
        *meal_lines,
        _value("Meals per day", profile.meal_frequency),
        _note(
            "Eating within consistent windows synchronizes your circadian rhythm, improves digestion, "
            "and stabilizes blood sugar."
        ),
        _heading("Core Nutrition Framework (Every Meal)"),
        _bullets(
            "Protein source (eggs, Greek yogurt, paneer, dal, chicken, tofu)",
            "Carb source (rice, roti, oats, sweet potato, quinoa)",
            "Vegetable (minimum 2 cups, variety of colors)",
            "Healthy fat (olive oil, ghee, nuts, avocado)",
        ),
    ]
    if profile.food_intolerances:
        blocks.append(_heading("Foods to Avoid or Limit"))
        blocks.append(_bullets(*(i.replace("_", " ").title() for i in sorted(profile.food_intolerances))))
    return Section(
        kind=SectionKind.nutrition_plan,
        title="Personalized Nutrition Plan",
        subtitle=f"{profile.name}'s Optimal Eating Strategy",
        blocks=blocks,
    )


def build_meal_plan_detail(profile: PersonalizationProfile, insights: PersonalizationInsights, config: ReportConfiguration) -> Section:
    return Section(
        kind=SectionKind.meal_plan_detail,
        title="7-Day Meal Plan Framework",
        subtitle=f"{profile.name}'s Weekly Eating Template",
        blocks=[
            _para("Use this as a template. Mix and match based on your preferences:"),
            _bullets(
                "Breakfast: 2-3 eggs + oats with banana + 1 tsp ghee",
                "Mid-morning: Greek yogurt + berries + almonds",
                "Lunch: Grilled chicken + brown rice + roasted broccoli + olive oil",
                "Afternoon: Apple + peanut butter",
                "Dinner: Lentil dal + roti + spinach curry",
                "Optional evening: Greek yogurt if hungry after 8 PM",
            ),
            _heading("Indian Grocery Shopping List"),
            _value("Proteins", "Chicken breast, Fish, Paneer, Moong/Arhar dal, Eggs"),
            _value("Vegetables", "Spinach, Broccoli, Bell peppers, Carrots, Cauliflower, Tomatoes"),
            _value("Grains", "Brown rice, Whole wheat roti, Oats, Quinoa, Millets"),
            _value("Healthy Fats", "Olive oil, Ghee, Almonds, Peanuts, Sesame oil"),
            _heading("Hydration Protocol (Science-Based)"),
            _bullets(
                "Upon waking: 500ml water (rehydrates after the overnight fast)",
                "With meals: 250ml water (aids digestion)",
                "Between meals: Drink when thirsty",
                "Daily target: 2-2.5 liters (adjust for climate, activity)",
                "After 7 PM: Reduce intake (minimize nighttime waking)",
            ),
        ],
    )


def build_sleep_protocol(profile: PersonalizationProfile, insights: PersonalizationInsights, config: ReportConfiguration) -> Section:
    blocks = [
        _para(insights.sleep_strategy),
        _heading("Sleep Hygiene Checklist"),
        _bullets(
            "Consistent sleep-wake time (even weekends) - most important",
            "Dark room: <5 lux (blackout curtains or eye mask)",
            "Cool temperature: 18-20 C (65-68 F)",
            "Quiet environment: <30 dB (earplugs or white noise)",
            "No blue light 60-90 min before bed",
            "No caffeine after 2 PM (5-6 hour half-life)",
            "Warm bath or tea 90 min before bed (triggers melatonin)",
        ),
    ]
    if config.tier >= Tier.essential:
        blocks += [
            _heading("Sleep Supplements (If Protocol Alone Isn't Enough)"),
            _bullets(
                "Magnesium Glycinate: 300-400mg, 60 min before bed",
                "L-Theanine: 100-200mg, optional with magnesium",
                "Herbal tea: Chamomile or passionflower (traditional)",
            ),
            _note("Try the protocol first for 2 weeks minimum. Then add one supplement at a time."),
        ]
    return Section(
        kind=SectionKind.sleep_protocol,
        title="Sleep Optimization Protocol",
        subtitle=f"{profile.name}'s Critical Recovery Foundation",
        blocks=blocks,
    )


WORKOUT_SCHEDULES: dict[Tier, tuple[str, list[tuple[str, list[str]]]]] = {
    Tier.essential: (
        "3-Day Beginner",
        [
            ("Monday: Full Body Strength (30 min)", [
                "Push-ups or chest press: 3 sets x 8-12 reps",
                "Squats or leg press: 3 sets x 12-15 reps",
                "Plank or core: 3 sets x 30-60 seconds",
            ]),
            ("Wednesday: Zone 2 Cardio (30 min, conversational pace)", ["Brisk walk, jog, or cycle at easy pace"]),
            ("Friday: Flexibility & Recovery (20 min)", ["Yoga, stretching, deep breathing"]),
        ],
    ),
    Tier.premium: (
        "5-Day Intermediate",
        [
            ("Monday: Lower Body Strength (45 min)", ["Focus: Squat, deadlift variations"]),
            ("Tuesday: Upper Body Push (45 min)", ["Focus: Chest, shoulders, triceps"]),
            ("Wednesday: Active Recovery (30 min)", ["Walk, yoga, or light mobility"]),
            ("Thursday: Upper Body Pull (45 min)", ["Focus: Back, biceps, rear delts"]),
            ("Friday: Full Body Power (45 min)", ["Focus: Olympic lift patterns, explosive movements"]),
            ("Sat-Sun: Optional light activity or complete rest", []),
        ],
    ),
    Tier.coaching: (
        "6-Day Advanced",
        [
            ("6-day periodized program with progressive overload", [
                "Phases: Strength (weeks 1-4), Hypertrophy (weeks 5-8), Power (weeks 9-12)",
            ]),
        ],
    ),
}


def build_movement_plan(profile: PersonalizationProfile, insights: PersonalizationInsights, config: ReportConfiguration) -> Section:
    label, days = WORKOUT_SCHEDULES.get(config.tier, WORKOUT_SCHEDULES[Tier.essential])
    blocks = [_para(insights.workout_strategy), _heading(f"{label} Weekly Schedule")]
    for day, items in days:
        blocks.append(_para(day, TextRole.emphasis))
        if items:
            blocks.append(_bullets(*items))
    if profile.exercise_preference:
        prefs = ", ".join(p.replace("_", " ") for p in sorted(profile.exercise_preference))
        blocks.append(_note(f"Swap in activities you enjoy ({prefs}) on cardio and recovery days."))
    blocks += [
        _heading("Progressive Overload Formula"),
        _value("Weeks 1-4", "Master form with moderate weight"),
        _value("Weeks 5-8", "Increase weight or reps by 5-10%"),
        _value("Weeks 9-12", "New variations or higher intensity"),
    ]
    return Section(
        kind=SectionKind.movement_plan,
        title="Movement & Training Plan",
        subtitle=f"{profile.name}'s Personalized Exercise Protocol",
        blocks=blocks,
    )


def build_stress_management(profile: PersonalizationProfile, insights: PersonalizationInsights, config: ReportConfiguration) -> Section:
    blocks = [
        _para(insights.stress_strategy),
        _heading("Daily Stress Management Tools"),
        _bullets(
            "Box Breathing: 4-4-4-4 count. Activates the parasympathetic system in 5 minutes.",
            "Movement: 20-30 min moderate activity (walk, yoga, gym) lowers cortisol.",
            "Social connection: 30+ min meaningful interaction 3x/week.",
            "Fix sleep first: a single bad night measurably raises next-day anxiety.",
        ),
    ]
    if config.tier >= Tier.essential:
        blocks += [
            _heading("Advanced Stress Techniques"),
            _bullets(
                "Progressive Muscle Relaxation: Tense & release each muscle group",
                "Meditation: 10-15 min daily (guided apps or free videos)",
                "Nature exposure: 20+ min in nature (park, forest) 1-2x/week",
                "Creative hobbies: Art, music, or writing",
            ),
        ]
    return Section(
        kind=SectionKind.stress_management,
        title="Stress Management & Nervous System Optimization",
        subtitle=f"{profile.name}'s Daily Resilience Protocol",
        blocks=blocks,
    )


def build_supplements(profile: PersonalizationProfile, insights: PersonalizationInsights, config: ReportConfiguration) -> Section:
    blocks = [_heading("Your Supplement Priority Stack")]
    for idx, supp in enumerate(insights.supplement_stack, start=1):
        blocks.append(_para(f"{idx}. {supp.name} - {supp.dosage}", TextRole.emphasis))
        blocks.append(_note(supp.reason))
    blocks += [
        _heading("Supplement Timing Protocol"),
        _para("Morning (with breakfast):", TextRole.emphasis),
        _bullets(
            "Vitamin D3: 2000-4000 IU (immune, mood, metabolism)",
            "Omega-3 (fish oil or algae): 2-3g EPA+DHA",
            "Multivitamin: If deficient (optional)",
        ),
        _para("Evening (with dinner):", TextRole.emphasis),
        _bullets("Magnesium: Only if prescribed or sleep issues"),
        _heading("Supplement Selection Rules"),
        _bullets(
            "Start ONE supplement at a time (2-week minimum)",
            "Buy from reputable brands: USP, NSF, Informed Choice certified",
            "Food first - supplements fill gaps, not replace real nutrition",
            "Consult your doctor before starting anything",
            "Store in a cool, dry place away from sunlight",
        ),
    ]
    return Section(
        kind=SectionKind.supplements,
        title="Smart Supplement Strategy",
        subtitle=f"{profile.name}'s Science-Backed Nutritional Support",
        blocks=blocks,
    )


def build_progress_tracking(profile: PersonalizationProfile, insights: PersonalizationInsights, config: ReportConfiguration) -> Section:
    return Section(
        kind=SectionKind.progress_tracking,
        title="90-Day Progress Tracking System",
        subtitle=f"{profile.name}'s Transformation Timeline",
        blocks=[
            _heading("Weekly Check-In (2 Minutes)"),
            _para("Track every Sunday evening:"),
            _bullets(
                "Energy levels (morning, midday, evening): 1-10 scale",
                "Sleep quality & duration: hours + 1-10 rating",
                "Stress level: 1-10 scale",
                "Workouts completed this week: __/3 or __/5",
                "Meal plan adherence: __%",
            ),
            _heading("Monthly Assessment (Week 4, 8, 12)"),
            _bullets(
                "Photos: Same time, same place, same light (front & side)",
                "Measurements: Weight, waist, chest, arms (if applicable)",
                "Performance: Push-ups, squats, running time, etc.",
                "Blood work: If doing 6 & 12 week testing",
                "Mood & energy consistency",
            ),
            _heading("Expected 90-Day Timeline"),
            _value("Weeks 1-2", "Sleep improves, energy stabilizes"),
            _value("Weeks 3-4", "Mood lifts, stress improves, workouts feel easier"),
            _value("Weeks 5-8", "Visible changes, muscle/strength gains"),
            _value("Weeks 9-12", "Major transformation, habits feel automatic"),
        ],
    )


def build_action_plan(profile: PersonalizationProfile, insights: PersonalizationInsights, config: ReportConfiguration) -> Section:
    return Section(
        kind=SectionKind.action_plan,
        title="Your 90-Day Action Plan",
        subtitle=f"{profile.name}'s Step-by-Step Implementation",
        blocks=[
            _para("Week 1: Foundation", TextRole.emphasis),
            _bullets(
                "Review this entire blueprint thoroughly",
                "Schedule baseline blood work (if recommended)",
                "Set up meal prep containers and a grocery plan",
                "Create a tracking system (spreadsheet or app)",
            ),
            _para("Weeks 2-4: System Establishment", TextRole.emphasis),
            _bullets(
                "Lock in meal times (most important step)",
                "Complete 3-4 workouts, focus on form",
                "Practice daily stress management (5 min minimum)",
                "Track sleep, energy, mood daily",
            ),
            _para("Weeks 5-12: Momentum & Optimization", TextRole.emphasis),
            _bullets(
                "Adjust calories/macros based on results",
                "Increase workout intensity or volume",
                "Refine supplement stack if needed",
                "Build lasting habits - consistency beats perfection",
            ),
        ],
    )


def build_closing(profile: PersonalizationProfile, insights: PersonalizationInsights, config: ReportConfiguration) -> Section:
    return Section(
        kind=SectionKind.closing,
        title="Remember: Small consistent steps create lasting transformation.",
        blocks=[
            _para(
                f"{profile.name}, you have the evidence-based roadmap. Commit to the process, and results "
                "will follow."
            ),
            _para("This blueprint is for educational purposes and not medical advice.", TextRole.small),
            _para("Always consult healthcare professionals before major lifestyle changes.", TextRole.small),
            _para(f"Order: {config.order_id}", TextRole.small),
        ],
    )


# ---------------------------------------------------------------------------
# Add-on section builders
# ---------------------------------------------------------------------------


def build_dna_insights(profile: PersonalizationProfile, insights: PersonalizationInsights, config: ReportConfiguration) -> Section:
    blocks = [
        _para(
            "These notes explain how common genetic variants shape nutrition response. They become "
            "personal once your DNA sample is processed."
        ),
        _heading("Variants We Review"),
        _bullets(
            "CYP1A2 (caffeine metabolism): fast vs slow processors",
            "LCT (lactase persistence): dairy tolerance",
            "AMY1 copy number: starch digestion capacity",
            "FTO: appetite regulation and weight-gain tendency",
            "MTHFR: folate metabolism",
        ),
    ]
    if not profile.dna_consent:
        blocks.append(_note("DNA consent was not given in your quiz. Update your consent to receive gene-level results."))
    return Section(
        kind=SectionKind.metabolic_profile,
        title="DNA Nutrition Insights",
        subtitle=f"{profile.name}'s Gene-Informed Notes",
        blocks=blocks,
        add_on="dna_insights",
    )


def build_meal_prep_guide(profile: PersonalizationProfile, insights: PersonalizationInsights, config: ReportConfiguration) -> Section:
    return Section(
        kind=SectionKind.nutrition_plan,
        title="Weekly Meal Prep Guide",
        subtitle=f"Batch cooking for {profile.meal_frequency} meals a day",
        blocks=[
            _heading("Sunday Prep (90 Minutes)"),
            _bullets(
                "Cook 2 proteins (e.g. dal and chicken or paneer)",
                "Cook 2 grains (brown rice, millets) and portion into boxes",
                "Wash and chop vegetables for 3 days",
                "Prepare one chutney or dressing for variety",
            ),
            _heading("Wednesday Top-Up (30 Minutes)"),
            _bullets("Cook a fresh protein", "Chop vegetables for the rest of the week"),
            _heading("Storage Rules"),
            _bullets(
                "Cooked grains and proteins: 3-4 days refrigerated",
                "Cut vegetables: 3 days in airtight containers",
                "Freeze extra portions for busy days",
            ),
        ],
        add_on="meal_prep_guide",
    )


def build_sleep_deep_dive(profile: PersonalizationProfile, insights: PersonalizationInsights, config: ReportConfiguration) -> Section:
    return Section(
        kind=SectionKind.sleep_protocol,
        title="Sleep Deep Dive",
        subtitle="A 14-day sleep reset",
        blocks=[
            _heading("Days 1-7: Anchor"),
            _bullets(
                f"Fixed wake time at {profile.wake_time}, no exceptions",
                "10 minutes of outdoor light within 30 minutes of waking",
                "No screens in bed",
            ),
            _heading("Days 8-14: Extend"),
            _bullets(
                "Move bedtime 15 minutes earlier every 3 nights",
                "Keep a sleep diary: bedtime, wake time, night wakings",
                "Add a 10-minute wind-down routine",
            ),
            _note("If you still wake unrefreshed after 14 days, discuss a sleep study with your doctor."),
        ],
        add_on="sleep_deep_dive",
    )


# ---------------------------------------------------------------------------
# Tables
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class SectionRule:
    min_tier: Tier
    builder: SectionBuilder


@dataclass(frozen=True, slots=True)
class AddOnSection:
    anchor: SectionKind
    min_tier: Tier
    builder: SectionBuilder


SECTION_RULES: dict[SectionKind, SectionRule] = {
    SectionKind.cover: SectionRule(min_tier=Tier.free, builder=build_cover),
    SectionKind.top_actions: SectionRule(min_tier=Tier.free, builder=build_top_actions),
    SectionKind.executive_summary: SectionRule(min_tier=Tier.free, builder=build_executive_summary),
    SectionKind.science_updates: SectionRule(min_tier=Tier.premium, builder=build_science_updates),
    SectionKind.metabolic_profile: SectionRule(min_tier=Tier.essential, builder=build_metabolic_profile),
    SectionKind.nutrition_plan: SectionRule(min_tier=Tier.essential, builder=build_nutrition_plan),
    SectionKind.meal_plan_detail: SectionRule(min_tier=Tier.premium, builder=build_meal_plan_detail),
    SectionKind.sleep_protocol: SectionRule(min_tier=Tier.free, builder=build_sleep_protocol),
    SectionKind.movement_plan: SectionRule(min_tier=Tier.essential, builder=build_movement_plan),
    SectionKind.stress_management: SectionRule(min_tier=Tier.free, builder=build_stress_management),
    SectionKind.supplements: SectionRule(min_tier=Tier.premium, builder=build_supplements),
    SectionKind.progress_tracking: SectionRule(min_tier=Tier.free, builder=build_progress_tracking),
    SectionKind.action_plan: SectionRule(min_tier=Tier.free, builder=build_action_plan),
    SectionKind.closing: SectionRule(min_tier=Tier.free, builder=build_closing),
}

# Declaration order of SectionKind is the emission order
SECTION_ORDER: tuple[SectionKind, ...] = tuple(SectionKind)

ADDON_SECTIONS: dict[str, AddOnSection] = {
    "dna_insights": AddOnSection(anchor=SectionKind.metabolic_profile, min_tier=Tier.essential, builder=build_dna_insights),
    "meal_prep_guide": AddOnSection(anchor=SectionKind.nutrition_plan, min_tier=Tier.essential, builder=build_meal_prep_guide),
    "sleep_deep_dive": AddOnSection(anchor=SectionKind.sleep_protocol, min_tier=Tier.free, builder=build_sleep_deep_dive),
}


def is_eligible(kind: SectionKind, tier: Tier) -> bool:
    return tier >= SECTION_RULES[kind].min_tier


def eligible_kinds(tier: Tier) -> list[SectionKind]:
    return [k for k in SECTION_ORDER if is_eligible(k, tier)]


def get_addon_section(addon_id: str) -> AddOnSection | None:
    return ADDON_SECTIONS.get(addon_id)
