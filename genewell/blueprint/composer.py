"""Report Composer: profile + insights + configuration -> ordered sections.

Gating lives entirely in sections.SECTION_RULES / ADDON_SECTIONS; this
module only walks the fixed order and splices add-on sections in after
their anchors.
"""

from __future__ import annotations

import logging

from genewell.blueprint import catalog
from genewell.blueprint.models import (
    PersonalizationInsights,
    PersonalizationProfile,
    ReportConfiguration,
    Section,
    SectionKind,
)
from genewell.blueprint.sections import ADDON_SECTIONS, SECTION_ORDER, SECTION_RULES, get_addon_section, is_eligible

logger = logging.getLogger(__name__)


def _addons_by_anchor(config: ReportConfiguration) -> dict[SectionKind, list[str]]:
    by_anchor: dict[SectionKind, list[str]] = {}
    for addon_id in sorted(config.add_ons):
        entry = get_addon_section(addon_id)
        if entry is None:
            if catalog.get_addon(addon_id) is None:
                logger.warning("Ignoring unknown add-on %s (order %s)", addon_id, config.order_id)
            continue
        if config.tier < entry.min_tier:
            logger.info("Add-on %s needs tier %s, order %s is %s", addon_id, entry.min_tier.value, config.order_id, config.tier.value)
            continue
        by_anchor.setdefault(entry.anchor, []).append(addon_id)
    return by_anchor


def compose(
    profile: PersonalizationProfile,
    insights: PersonalizationInsights,
    config: ReportConfiguration,
) -> list[Section]:
    """Build the ordered section list for one report.

    Sections below the purchased tier are skipped. An add-on section follows
    its anchor; if the anchor was skipped, so is the add-on.
    """
    addons = _addons_by_anchor(config)
    sections: list[Section] = []
    for kind in SECTION_ORDER:
        if not is_eligible(kind, config.tier):
            continue
        sections.append(SECTION_RULES[kind].builder(profile, insights, config))
        for addon_id in addons.pop(kind, []):
            sections.append(ADDON_SECTIONS[addon_id].builder(profile, insights, config))

    for kind, dropped in addons.items():
        logger.info("Dropping add-ons %s: anchor %s not in tier %s", dropped, kind.value, config.tier.value)
    return sections
