"""Blueprint HTTP router: catalog, quotes, analysis, outlines and PDF reports."""

from __future__ import annotations

from dataclasses import asdict
from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Request
from fastapi.responses import JSONResponse, Response
from starlette.concurrency import run_in_threadpool

from genewell.auth import verify_api_key
from genewell.config import settings
from genewell.blueprint import catalog
from genewell.blueprint.analyzer import analyze
from genewell.blueprint.document import PageLayout
from genewell.blueprint.errors import RenderError, ValidationError
from genewell.blueprint.insights import derive
from genewell.blueprint.models import (
    AnalysisResponse,
    Language,
    OutlineEntry,
    OutlineResponse,
    QuoteRequest,
    ReportConfiguration,
    ReportRequest,
    Tier,
)
from genewell.blueprint.pipeline import generate_report, plan_report

router = APIRouter(prefix="/blueprint", tags=["blueprint"])


def _config_from_request(req: ReportRequest) -> ReportConfiguration:
    try:
        tier = Tier.from_plan_id(req.plan_id)
    except ValueError:
        raise HTTPException(status_code=404, detail=f"Unknown plan: {req.plan_id}")
    return ReportConfiguration(
        tier=tier,
        add_ons=frozenset(req.add_ons),
        order_id=req.order_id,
        timestamp=req.timestamp or datetime.now(timezone.utc),
        language=req.language or Language(settings.default_language),
    )


def _layout() -> PageLayout:
    return PageLayout(margin_mm=settings.report_margin_mm)


# ---------------------------------------------------------------------------
# Exception handlers (registered in genewell.main)
# ---------------------------------------------------------------------------


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content={"error": "missing_prerequisite_data", "message": exc.message, "fields": exc.fields},
    )


async def render_error_handler(request: Request, exc: RenderError) -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content={"error": "generation_failed", "message": "Report generation failed, please retry"},
    )


# ---------------------------------------------------------------------------
# /blueprint/plans, /blueprint/quote
# ---------------------------------------------------------------------------


@router.get("/plans")
async def plans_list(
    _: str = Depends(verify_api_key),
) -> dict:
    return {
        "currency": settings.currency,
        "plans": [asdict(p) for p in catalog.list_plans()],
        "add_ons": [asdict(a) for a in catalog.list_addons()],
    }


@router.post("/quote")
async def quote(
    body: QuoteRequest,
    _: str = Depends(verify_api_key),
) -> dict:
    if catalog.get_plan(body.plan_id) is None:
        raise HTTPException(status_code=404, detail=f"Unknown plan: {body.plan_id}")
    try:
        q = catalog.quote(body.plan_id, body.add_ons)
    except LookupError as exc:
        raise HTTPException(status_code=422, detail=str(exc.args[0]))
    return {
        "plan_id": q.plan.plan_id,
        "tier": q.plan.tier.value,
        "add_ons": [asdict(a) for a in q.add_ons],
        "total": q.total,
        "currency": settings.currency,
    }


# ---------------------------------------------------------------------------
# /blueprint/analyze, /blueprint/outline, /blueprint/report
# ---------------------------------------------------------------------------


@router.post("/analyze", response_model=AnalysisResponse)
async def analyze_answers(
    answers: dict[str, Any] = Body(...),
    _: str = Depends(verify_api_key),
) -> AnalysisResponse:
    profile = analyze(answers)
    return AnalysisResponse(profile=profile, insights=derive(profile))


@router.post("/outline", response_model=OutlineResponse)
async def outline(
    body: ReportRequest,
    _: str = Depends(verify_api_key),
) -> OutlineResponse:
    config = _config_from_request(body)
    plan = plan_report(body.answers, config)
    return OutlineResponse(
        order_id=config.order_id,
        tier=config.tier,
        sections=[OutlineEntry(kind=s.kind, title=s.title, add_on=s.add_on) for s in plan.sections],
    )


@router.post("/report")
async def report(
    body: ReportRequest,
    _: str = Depends(verify_api_key),
) -> Response:
    config = _config_from_request(body)
    rendered = await run_in_threadpool(
        generate_report, body.answers, config, _layout(), settings.report_brand
    )
    return Response(
        content=rendered.content,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f'attachment; filename="{rendered.filename}"',
            "X-Page-Count": str(rendered.page_count),
        },
    )
