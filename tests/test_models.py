"""Tests for Pydantic models, tier ordering and the error types."""

from datetime import datetime, timezone

import pydantic
import pytest

from genewell.blueprint.errors import BlueprintError, RenderError, ValidationError
from genewell.blueprint.models import (
    HeadingBlock,
    Language,
    ParagraphBlock,
    ReportConfiguration,
    ReportRequest,
    Section,
    SectionKind,
    TextRole,
    Tier,
)


class TestTier:
    def test_ordering(self):
        assert Tier.free < Tier.essential < Tier.premium < Tier.coaching

    def test_ge_le(self):
        assert Tier.premium >= Tier.essential
        assert Tier.essential >= Tier.essential
        assert Tier.free <= Tier.coaching
        assert not Tier.free >= Tier.essential

    def test_sorted(self):
        assert sorted([Tier.coaching, Tier.free, Tier.premium, Tier.essential]) == [
            Tier.free,
            Tier.essential,
            Tier.premium,
            Tier.coaching,
        ]

    def test_from_plan_id(self):
        assert Tier.from_plan_id("free_blueprint") == Tier.free
        assert Tier.from_plan_id("essential_blueprint") == Tier.essential
        assert Tier.from_plan_id("premium_blueprint") == Tier.premium
        assert Tier.from_plan_id("complete_coaching") == Tier.coaching

    def test_from_plan_id_accepts_bare_tier(self):
        assert Tier.from_plan_id(" Premium ") == Tier.premium

    def test_from_plan_id_unknown(self):
        with pytest.raises(ValueError, match="Unknown plan id"):
            Tier.from_plan_id("platinum_blueprint")


class TestReportConfiguration:
    def test_defaults(self):
        cfg = ReportConfiguration(tier=Tier.free, order_id="A1")
        assert cfg.add_ons == frozenset()
        assert cfg.language == Language.en
        assert cfg.timestamp.tzinfo is not None

    def test_from_plan_id(self):
        cfg = ReportConfiguration.from_plan_id("complete_coaching", order_id="A1", add_ons=frozenset({"dna_insights"}))
        assert cfg.tier == Tier.coaching
        assert "dna_insights" in cfg.add_ons

    def test_empty_order_id_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            ReportConfiguration(tier=Tier.free, order_id="")

    def test_frozen(self):
        cfg = ReportConfiguration(tier=Tier.free, order_id="A1")
        with pytest.raises(pydantic.ValidationError):
            cfg.tier = Tier.premium


class TestReportRequest:
    def test_order_id_stripped(self):
        req = ReportRequest(answers={}, order_id="  ORD-9 ")
        assert req.order_id == "ORD-9"
        assert req.plan_id == "free_blueprint"

    def test_blank_order_id_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            ReportRequest(answers={}, order_id="   ")

    def test_timestamp_parsed(self):
        req = ReportRequest(answers={}, order_id="X", timestamp="2026-03-01T09:30:00+00:00")
        assert req.timestamp == datetime(2026, 3, 1, 9, 30, tzinfo=timezone.utc)


class TestSection:
    def test_blocks_discriminated_from_dicts(self):
        section = Section.model_validate(
            {
                "kind": "closing",
                "title": "Bye",
                "blocks": [
                    {"type": "heading", "text": "H"},
                    {"type": "paragraph", "text": "P", "role": "note"},
                ],
            }
        )
        assert isinstance(section.blocks[0], HeadingBlock)
        assert isinstance(section.blocks[1], ParagraphBlock)
        assert section.blocks[1].role == TextRole.note
        assert section.kind == SectionKind.closing

    def test_unknown_block_type_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            Section.model_validate({"kind": "cover", "title": "T", "blocks": [{"type": "table"}]})


class TestErrors:
    def test_hierarchy(self):
        assert issubclass(ValidationError, BlueprintError)
        assert issubclass(RenderError, BlueprintError)

    def test_validation_error_fields(self):
        exc = ValidationError("missing", fields=["age", "name"])
        assert exc.fields == ["age", "name"]
        assert exc.message == "missing"
        assert str(exc) == "missing"

    def test_validation_error_default_fields(self):
        assert ValidationError("x").fields == []
