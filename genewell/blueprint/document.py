"""
DocumentBuilder abstraction and its reportlab canvas implementation.

Coordinates handed around this module are top-down offsets in points
(0 = top edge of the page); only the drawing helpers convert them to
reportlab's bottom-up y axis.
"""

from __future__ import annotations

import io
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import simpleSplit
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas

from genewell.blueprint.errors import RenderError

BRAND_PRIMARY = "#1a365d"
BRAND_ACCENT = "#2f855a"
TEXT_DARK = "#2d3748"
TEXT_MUTED = "#718096"
RULE_COLOR = "#cbd5e0"

BULLET = "•"


@dataclass(frozen=True, slots=True)
class PageLayout:
    page_width: float = A4[0]
    page_height: float = A4[1]
    margin_mm: float = 15.0
    block_gap: float = 6.0  # points between consecutive blocks

    @property
    def margin(self) -> float:
        return self.margin_mm * mm

    @property
    def content_width(self) -> float:
        return self.page_width - 2 * self.margin

    @property
    def bottom(self) -> float:
        """Lowest offset a block may reach."""
        return self.page_height - self.margin

    @property
    def content_height(self) -> float:
        return self.bottom - self.margin


@dataclass(frozen=True, slots=True)
class StyleSpec:
    font: str
    size: float
    leading: float
    color: str


STYLES: dict[str, StyleSpec] = {
    "cover_title": StyleSpec("Helvetica-Bold", 28, 34, BRAND_PRIMARY),
    "title": StyleSpec("Helvetica-Bold", 18, 23, BRAND_PRIMARY),
    "subtitle": StyleSpec("Helvetica-Oblique", 11, 15, TEXT_MUTED),
    "heading": StyleSpec("Helvetica-Bold", 13, 17, BRAND_PRIMARY),
    "body": StyleSpec("Helvetica", 10, 14, TEXT_DARK),
    "note": StyleSpec("Helvetica-Oblique", 9, 12, TEXT_MUTED),
    "emphasis": StyleSpec("Helvetica-Bold", 10, 14, TEXT_DARK),
    "callout": StyleSpec("Helvetica-Bold", 11, 15, BRAND_ACCENT),
    "small": StyleSpec("Helvetica", 8, 11, TEXT_MUTED),
    "bullet": StyleSpec("Helvetica", 10, 14, TEXT_DARK),
    "label": StyleSpec("Helvetica-Bold", 10, 14, TEXT_DARK),
    "rule": StyleSpec("Helvetica", 1, 8, RULE_COLOR),
    "footer": StyleSpec("Helvetica", 8, 10, TEXT_MUTED),
}

BULLET_INDENT = 14.0


class RendererState(str, Enum):
    idle = "idle"
    laying_out = "laying_out"
    page_full = "page_full"
    done = "done"


@dataclass(slots=True)
class RenderCursor:
    """Where the next block goes. Offsets are measured from the page top."""

    page: int
    offset: float
    page_height: float
    content_top: float
    content_bottom: float
    state: RendererState = RendererState.idle

    @property
    def remaining(self) -> float:
        return self.content_bottom - self.offset


@dataclass(frozen=True, slots=True)
class Placement:
    page: int
    top: float
    height: float
    role: str


@dataclass(slots=True)
class _Line:
    text: str
    prefix: str = ""


@dataclass(slots=True)
class _Block:
    role: str
    lines: list[_Line]
    text_x: float = 0.0  # relative to the left margin
    prefix_role: str | None = None
    is_rule: bool = False


class DocumentBuilder:
    """Block-level drawing interface the renderer writes against."""

    def start_section(self, title: str, subtitle: str | None = None, *, cover: bool = False) -> int:
        raise NotImplementedError

    def add_heading(self, text: str) -> None:
        raise NotImplementedError

    def add_paragraph(self, text: str, role: str = "body") -> None:
        raise NotImplementedError

    def add_bullet_list(self, items: list[str]) -> None:
        raise NotImplementedError

    def add_labeled_value(self, label: str, value: str) -> None:
        raise NotImplementedError

    def add_rule(self) -> None:
        raise NotImplementedError

    def new_page(self) -> None:
        raise NotImplementedError

    def finish(self) -> bytes:
        raise NotImplementedError

    @property
    def page_count(self) -> int:
        raise NotImplementedError


@contextmanager
def _reportlab_errors(action: str) -> Iterator[None]:
    try:
        yield
    except RenderError:
        raise
    except Exception as exc:
        raise RenderError(f"PDF {action} failed: {exc}") from exc


class PdfDocumentBuilder(DocumentBuilder):
    """Lays blocks out top-to-bottom on a reportlab canvas.

    Each block is measured, moved to a fresh page when it does not fit,
    and split at wrapped-line boundaries only when it is taller than a
    whole page's content area.
    """

    def __init__(
        self,
        layout: PageLayout | None = None,
        *,
        title: str = "",
        author: str = "",
        footer: str | None = None,
    ) -> None:
        self.layout = layout or PageLayout()
        tallest = max(style.leading for style in STYLES.values())
        if self.layout.content_width <= 0 or self.layout.content_height < tallest:
            raise RenderError(
                f"Margin of {self.layout.margin_mm} mm leaves no room for content"
            )
        self.title = title
        self.author = author
        self.footer = footer
        self.cursor = RenderCursor(
            page=1,
            offset=self.layout.margin,
            page_height=self.layout.page_height,
            content_top=self.layout.margin,
            content_bottom=self.layout.bottom,
        )
        self.placements: list[Placement] = []
        self.section_pages: list[int] = []
        self._buf = io.BytesIO()
        self._canvas: canvas.Canvas | None = None

    # ------------------------------------------------------------------
    # State handling
    # ------------------------------------------------------------------

    def _open(self) -> canvas.Canvas:
        if self.cursor.state == RendererState.done:
            raise RenderError("Document already finished")
        if self._canvas is None:
            with _reportlab_errors("setup"):
                c = canvas.Canvas(
                    self._buf,
                    pagesize=(self.layout.page_width, self.layout.page_height),
                    invariant=1,
                )
                if self.title:
                    c.setTitle(self.title)
                if self.author:
                    c.setAuthor(self.author)
            self._canvas = c
            self.cursor.state = RendererState.laying_out
        return self._canvas

    @property
    def state(self) -> RendererState:
        return self.cursor.state

    @property
    def page_count(self) -> int:
        return self.cursor.page

    def _page_has_content(self) -> bool:
        return any(p.page == self.cursor.page for p in self.placements)

    def _draw_footer(self, c: canvas.Canvas) -> None:
        if not self.footer:
            return
        style = STYLES["footer"]
        y = self.layout.margin / 2
        with _reportlab_errors("drawing"):
            c.setFont(style.font, style.size)
            c.setFillColor(colors.HexColor(style.color))
            c.drawString(self.layout.margin, y, self.footer)
            c.drawRightString(self.layout.page_width - self.layout.margin, y, f"Page {self.cursor.page}")

    def _break_page(self) -> None:
        c = self._open()
        self.cursor.state = RendererState.page_full
        self._draw_footer(c)
        with _reportlab_errors("page break"):
            c.showPage()
        self.cursor.page += 1
        self.cursor.offset = self.cursor.content_top
        self.cursor.state = RendererState.laying_out

    def new_page(self) -> None:
        self._open()
        self._break_page()

    # ------------------------------------------------------------------
    # Measuring and placing
    # ------------------------------------------------------------------

    def _wrap(self, text: str, role: str, width: float) -> list[str]:
        style = STYLES[role]
        with _reportlab_errors("measuring"):
            lines = simpleSplit(text, style.font, style.size, width)
        return lines or [""]

    def _place(self, block: _Block) -> None:
        c = self._open()
        style = STYLES[block.role]
        remaining = block.lines
        while remaining:
            available = self.cursor.remaining
            height = len(remaining) * style.leading
            if height <= available:
                chunk, remaining = remaining, []
            elif height > self.layout.content_height:
                fit = int(available // style.leading)
                if fit <= 0:
                    self._break_page()
                    continue
                chunk, remaining = remaining[:fit], remaining[fit:]
            else:
                self._break_page()
                continue
            self._draw(c, block, chunk)
            if remaining:
                self._break_page()

    def _draw(self, c: canvas.Canvas, block: _Block, lines: list[_Line]) -> None:
        style = STYLES[block.role]
        top = self.cursor.offset
        height = len(lines) * style.leading
        left = self.layout.margin
        with _reportlab_errors("drawing"):
            if block.is_rule:
                y = self.cursor.page_height - (top + style.leading / 2)
                c.setStrokeColor(colors.HexColor(style.color))
                c.setLineWidth(style.size)
                c.line(left, y, left + self.layout.content_width, y)
            else:
                for i, line in enumerate(lines):
                    baseline = self.cursor.page_height - (top + i * style.leading + style.size)
                    if line.prefix:
                        prefix_style = STYLES[block.prefix_role or block.role]
                        c.setFont(prefix_style.font, prefix_style.size)
                        c.setFillColor(colors.HexColor(prefix_style.color))
                        c.drawString(left, baseline, line.prefix)
                    c.setFont(style.font, style.size)
                    c.setFillColor(colors.HexColor(style.color))
                    c.drawString(left + block.text_x, baseline, line.text)
        self.placements.append(Placement(page=self.cursor.page, top=top, height=height, role=block.role))
        self.cursor.offset = top + height + self.layout.block_gap

    # ------------------------------------------------------------------
    # Drawing operations
    # ------------------------------------------------------------------

    def start_section(self, title: str, subtitle: str | None = None, *, cover: bool = False) -> int:
        """Open a section on a fresh page (unless it is the very first) and draw its title.

        Returns the page the section starts on.
        """
        self._open()
        if self.section_pages or self._page_has_content():
            self._break_page()
        self.section_pages.append(self.cursor.page)
        role = "cover_title" if cover else "title"
        self._place(_Block(role=role, lines=[_Line(t) for t in self._wrap(title, role, self.layout.content_width)]))
        if subtitle:
            self.add_paragraph(subtitle, role="subtitle")
        self.add_rule()
        return self.cursor.page

    def add_heading(self, text: str) -> None:
        self._open()
        lines = self._wrap(text, "heading", self.layout.content_width)
        self._place(_Block(role="heading", lines=[_Line(t) for t in lines]))

    def add_paragraph(self, text: str, role: str = "body") -> None:
        self._open()
        if role not in STYLES:
            raise RenderError(f"Unknown text role: {role}")
        lines = self._wrap(text, role, self.layout.content_width)
        self._place(_Block(role=role, lines=[_Line(t) for t in lines]))

    def add_bullet_list(self, items: list[str]) -> None:
        self._open()
        lines: list[_Line] = []
        for item in items:
            wrapped = self._wrap(item, "bullet", self.layout.content_width - BULLET_INDENT)
            lines.append(_Line(wrapped[0], prefix=BULLET))
            lines.extend(_Line(t) for t in wrapped[1:])
        if lines:
            self._place(_Block(role="bullet", lines=lines, text_x=BULLET_INDENT))

    def add_labeled_value(self, label: str, value: str) -> None:
        self._open()
        label_text = f"{label}: "
        label_style = STYLES["label"]
        with _reportlab_errors("measuring"):
            label_width = stringWidth(label_text, label_style.font, label_style.size)
        # very long labels fall back to a hanging value on its own lines
        if label_width > self.layout.content_width / 2:
            self._place(_Block(role="label", lines=[_Line(t) for t in self._wrap(label, "label", self.layout.content_width)]))
            self.add_paragraph(value)
            return
        wrapped = self._wrap(value, "body", self.layout.content_width - label_width)
        lines = [_Line(wrapped[0], prefix=label_text)] + [_Line(t) for t in wrapped[1:]]
        self._place(_Block(role="body", lines=lines, text_x=label_width, prefix_role="label"))

    def add_rule(self) -> None:
        self._open()
        self._place(_Block(role="rule", lines=[_Line("")], is_rule=True))

    def finish(self) -> bytes:
        c = self._open()
        self._draw_footer(c)
        with _reportlab_errors("finalising"):
            c.showPage()
            c.save()
        self.cursor.state = RendererState.done
        return self._buf.getvalue()


@dataclass(slots=True)
class RecordingDocumentBuilder(DocumentBuilder):
    """Records builder calls without drawing. Used for outlines and tests."""

    calls: list[tuple[str, tuple]] = field(default_factory=list)
    sections: int = 0
    finished: bool = False

    def _record(self, name: str, *args: object) -> None:
        if self.finished:
            raise RenderError("Document already finished")
        self.calls.append((name, args))

    def start_section(self, title: str, subtitle: str | None = None, *, cover: bool = False) -> int:
        self._record("start_section", title, subtitle)
        self.sections += 1
        return self.sections

    def add_heading(self, text: str) -> None:
        self._record("add_heading", text)

    def add_paragraph(self, text: str, role: str = "body") -> None:
        self._record("add_paragraph", text, role)

    def add_bullet_list(self, items: list[str]) -> None:
        self._record("add_bullet_list", tuple(items))

    def add_labeled_value(self, label: str, value: str) -> None:
        self._record("add_labeled_value", label, value)

    def add_rule(self) -> None:
        self._record("add_rule")

    def new_page(self) -> None:
        self._record("new_page")

    def finish(self) -> bytes:
        self._record("finish")
        self.finished = True
        return b""

    @property
    def page_count(self) -> int:
        return self.sections
