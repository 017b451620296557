"""Document Renderer: ordered sections -> PDF bytes plus a stable filename."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path

from genewell.blueprint.document import DocumentBuilder, PageLayout, PdfDocumentBuilder
from genewell.blueprint.errors import RenderError
from genewell.blueprint.models import (
    BulletListBlock,
    HeadingBlock,
    LabeledValueBlock,
    ParagraphBlock,
    PersonalizationProfile,
    ReportConfiguration,
    Section,
    SectionKind,
)

logger = logging.getLogger(__name__)

DEFAULT_BRAND = "Genewell Wellness"

_NAME_STRIP_RE = re.compile(r"[^\w\s-]", re.ASCII)
_WHITESPACE_RE = re.compile(r"\s+")
_ORDER_STRIP_RE = re.compile(r"[^A-Za-z0-9_-]")


@dataclass(slots=True)
class RenderedReport:
    content: bytes
    filename: str
    page_count: int
    section_pages: list[int] = field(default_factory=list)

    @property
    def size(self) -> int:
        return len(self.content)


def sanitize_name(name: str) -> str:
    """Lower-case, drop punctuation, collapse whitespace to "-"."""
    cleaned = _NAME_STRIP_RE.sub("", name.lower()).strip()
    cleaned = _WHITESPACE_RE.sub("-", cleaned)
    return cleaned or "user"


def sanitize_order_id(order_id: str) -> str:
    return _ORDER_STRIP_RE.sub("", order_id) or "order"


def build_filename(name: str, config: ReportConfiguration) -> str:
    return f"{sanitize_name(name)}_{config.tier.value}_blueprint_{sanitize_order_id(config.order_id)}.pdf"


def emit_sections(builder: DocumentBuilder, sections: list[Section]) -> list[int]:
    """Walk sections block by block through a DocumentBuilder.

    Returns the first page of each section.
    """
    pages: list[int] = []
    for section in sections:
        pages.append(builder.start_section(section.title, section.subtitle, cover=section.kind == SectionKind.cover))
        for block in section.blocks:
            if isinstance(block, HeadingBlock):
                builder.add_heading(block.text)
            elif isinstance(block, ParagraphBlock):
                builder.add_paragraph(block.text, role=block.role.value)
            elif isinstance(block, BulletListBlock):
                builder.add_bullet_list(block.items)
            elif isinstance(block, LabeledValueBlock):
                builder.add_labeled_value(block.label, block.value)
            else:
                raise RenderError(f"Unsupported block type: {type(block).__name__}")
    return pages


def render(
    sections: list[Section],
    profile: PersonalizationProfile,
    config: ReportConfiguration,
    layout: PageLayout | None = None,
    brand: str = DEFAULT_BRAND,
) -> RenderedReport:
    """Lay sections out as an A4 PDF.

    Raises RenderError when reportlab fails; nothing partial is returned.
    """
    if not sections:
        raise RenderError("Nothing to render: section list is empty")

    builder = PdfDocumentBuilder(
        layout or PageLayout(),
        title=f"{profile.name}'s Wellness Blueprint",
        author=brand,
        footer=f"Generated by {brand} • Order: {config.order_id}",
    )
    section_pages = emit_sections(builder, sections)
    content = builder.finish()

    report = RenderedReport(
        content=content,
        filename=build_filename(profile.name, config),
        page_count=builder.page_count,
        section_pages=section_pages,
    )
    logger.debug("Rendered %s: %d pages, %d bytes", report.filename, report.page_count, report.size)
    return report


def write_report(report: RenderedReport, path: str | Path) -> Path:
    """Write the PDF to path (a directory gets report.filename appended)."""
    target = Path(path)
    if target.is_dir():
        target = target / report.filename
    with open(target, "wb") as fh:
        fh.write(report.content)
    return target
