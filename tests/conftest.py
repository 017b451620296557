"""Shared fixtures for the test suite."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from genewell.blueprint.analyzer import analyze
from genewell.blueprint.insights import derive
from genewell.blueprint.models import ReportConfiguration, Tier
from genewell.config import settings
from genewell.main import app

FIXED_TS = datetime(2026, 3, 1, 9, 30, tzinfo=timezone.utc)


def make_answers(**overrides: Any) -> dict[str, Any]:
    """Helper to build a complete quiz submission.

    Defaults: 30-year-old vegetarian woman, 160 cm / 60 kg, trains 3-4x a
    week, wakes at 07:00, every Likert answer neutral (3). Pass a key with
    value None to drop it.
    """
    answers: dict[str, Any] = {
        "name": "Priya Sharma",
        "email": "priya@example.com",
        "age": 30,
        "gender": "female",
        "height_cm": 160,
        "weight_kg": 60,
        "region": "north",
        "wake_time": "07:00",
        "exercise_frequency": "3-4",
        "dietary_preference": "vegetarian",
        "work_schedule": "day",
        "medical_conditions": [],
        "digestive_issues": [],
        "food_intolerances": [],
        "exercise_preference": ["yoga", "walking"],
        "stress_frequency": 3,
        "stress_coping": 3,
        "sleep_quality": 3,
        "wake_refreshed": 3,
        "activity_level": 3,
        "energy_level": 3,
    }
    answers.update(overrides)
    return {k: v for k, v in answers.items() if v is not None}


def make_config(tier: Tier = Tier.essential, add_ons: tuple[str, ...] = (), order_id: str = "ORD-1001") -> ReportConfiguration:
    return ReportConfiguration(tier=tier, add_ons=frozenset(add_ons), order_id=order_id, timestamp=FIXED_TS)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def answers() -> dict[str, Any]:
    return make_answers()


@pytest.fixture()
def profile(answers):
    return analyze(answers)


@pytest.fixture()
def insights(profile):
    return derive(profile)


@pytest.fixture()
def open_access(monkeypatch):
    """Run endpoint tests with the API key guard disabled."""
    monkeypatch.setattr(settings, "blueprint_api_key", None)


@pytest.fixture()
async def client(open_access):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


def report_body(**overrides: Any) -> dict[str, Any]:
    body: dict[str, Any] = {
        "answers": make_answers(),
        "plan_id": "essential_blueprint",
        "add_ons": [],
        "order_id": "ORD-1001",
        "timestamp": FIXED_TS.isoformat(),
    }
    body.update(overrides)
    return body
