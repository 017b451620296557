"""Hardcoded plan and add-on catalog, configuration only."""

from __future__ import annotations

from dataclasses import dataclass, field

from genewell.blueprint.models import Tier


@dataclass(frozen=True, slots=True)
class PlanDefinition:
    plan_id: str
    tier: Tier
    name: str
    price: float
    description: str
    features: list[str] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class AddOnDefinition:
    id: str
    name: str
    price: float
    description: str
    adds_section: bool = False  # True when the composer injects report content for it


@dataclass(frozen=True, slots=True)
class Quote:
    plan: PlanDefinition
    add_ons: list[AddOnDefinition]
    total: float


PLANS: dict[str, PlanDefinition] = {
    "free_blueprint": PlanDefinition(
        plan_id="free_blueprint",
        tier=Tier.free,
        name="Free Blueprint",
        price=0.0,
        description="Your wellness baseline, top 3 actions and core sleep & stress protocols.",
        features=["Top 3 actions", "Executive summary", "Sleep protocol", "Stress toolkit", "90-day tracker"],
    ),
    "essential_blueprint": PlanDefinition(
        plan_id="essential_blueprint",
        tier=Tier.essential,
        name="Essential Blueprint",
        price=499.0,
        description="Adds your metabolic profile, nutrition plan and a 3-day training schedule.",
        features=["Everything in Free", "Metabolic profile", "Nutrition plan", "Movement plan"],
    ),
    "premium_blueprint": PlanDefinition(
        plan_id="premium_blueprint",
        tier=Tier.premium,
        name="Premium Blueprint",
        price=999.0,
        description="Adds the latest science, a 7-day meal framework and a supplement strategy.",
        features=["Everything in Essential", "Science updates", "7-day meal plan", "Supplement stack"],
    ),
    "complete_coaching": PlanDefinition(
        plan_id="complete_coaching",
        tier=Tier.coaching,
        name="Complete Coaching",
        price=2999.0,
        description="The full blueprint with a 6-day periodized program and coaching check-ins.",
        features=["Everything in Premium", "6-day periodized training", "Coaching check-ins"],
    ),
}


ADDONS: dict[str, AddOnDefinition] = {
    "dna_insights": AddOnDefinition(
        id="dna_insights",
        name="DNA Nutrition Insights",
        price=1499.0,
        description="Gene-informed notes on caffeine, lactose and carbohydrate response.",
        adds_section=True,
    ),
    "meal_prep_guide": AddOnDefinition(
        id="meal_prep_guide",
        name="Weekly Meal Prep Guide",
        price=299.0,
        description="Batch-cooking workflow and storage guide built around your meal plan.",
        adds_section=True,
    ),
    "sleep_deep_dive": AddOnDefinition(
        id="sleep_deep_dive",
        name="Sleep Deep Dive",
        price=299.0,
        description="Chronotype notes and a 14-day sleep reset schedule.",
        adds_section=True,
    ),
    "live_training": AddOnDefinition(
        id="live_training",
        name="Live Training Sessions",
        price=1999.0,
        description="Four live 1:1 training sessions with a certified coach.",
    ),
}


def list_plans() -> list[PlanDefinition]:
    return list(PLANS.values())


def get_plan(plan_id: str) -> PlanDefinition | None:
    """Look up a plan by checkout id, also accepting bare tier names."""
    plan = PLANS.get(plan_id)
    if plan is not None:
        return plan
    try:
        tier = Tier.from_plan_id(plan_id)
    except ValueError:
        return None
    return next((p for p in PLANS.values() if p.tier == tier), None)


def list_addons() -> list[AddOnDefinition]:
    return list(ADDONS.values())


def get_addon(addon_id: str) -> AddOnDefinition | None:
    return ADDONS.get(addon_id)


def quote(plan_id: str, addon_ids: list[str]) -> Quote:
    """Price a plan plus add-ons. Duplicate add-on ids are charged once.

    Raises LookupError naming the first unknown plan or add-on id.
    """
    plan = get_plan(plan_id)
    if plan is None:
        raise LookupError(f"Unknown plan: {plan_id}")

    resolved: list[AddOnDefinition] = []
    for addon_id in dict.fromkeys(addon_ids):
        addon = get_addon(addon_id)
        if addon is None:
            raise LookupError(f"Unknown add-on: {addon_id}")
        resolved.append(addon)

    total = round(plan.price + sum(a.price for a in resolved), 2)
    return Quote(plan=plan, add_ons=resolved, total=total)
