"""Analyze -> derive -> compose -> render, with stage logging."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from genewell.blueprint.analyzer import analyze
from genewell.blueprint.composer import compose
from genewell.blueprint.document import PageLayout
from genewell.blueprint.errors import RenderError, ValidationError
from genewell.blueprint.insights import derive
from genewell.blueprint.models import (
    PersonalizationInsights,
    PersonalizationProfile,
    ReportConfiguration,
    Section,
)
from genewell.blueprint.renderer import DEFAULT_BRAND, RenderedReport, render

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Plan:
    """Everything short of the PDF bytes."""

    profile: PersonalizationProfile
    insights: PersonalizationInsights
    sections: list[Section]


def plan_report(raw_answers: Mapping[str, Any], config: ReportConfiguration) -> Plan:
    try:
        profile = analyze(raw_answers)
    except ValidationError as exc:
        logger.warning("Order %s rejected: %s", config.order_id, exc.message)
        raise
    insights = derive(profile)
    sections = compose(profile, insights, config)
    logger.info(
        "Order %s composed: tier=%s sections=%d add_ons=%s",
        config.order_id,
        config.tier.value,
        len(sections),
        sorted(config.add_ons),
    )
    return Plan(profile=profile, insights=insights, sections=sections)


def generate_report(
    raw_answers: Mapping[str, Any],
    config: ReportConfiguration,
    layout: PageLayout | None = None,
    brand: str = DEFAULT_BRAND,
) -> RenderedReport:
    """Run the full pipeline for one order.

    Raises ValidationError for unusable quiz answers and RenderError when
    the PDF cannot be produced. No partial document is ever returned.
    """
    plan = plan_report(raw_answers, config)
    try:
        report = render(plan.sections, plan.profile, config, layout=layout, brand=brand)
    except RenderError:
        logger.exception("Order %s: report generation failed", config.order_id)
        raise
    logger.info("Order %s rendered: %s (%d pages)", config.order_id, report.filename, report.page_count)
    return report
