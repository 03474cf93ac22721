"""Page layout for the PDF partner card.

Positions are A4 points measured from the top-left corner of the page. A
running cursor ``y`` moves down as fields are placed. Two columns start from
the same cursor and the cursor then continues below the taller of the two.
Only section headers check for room and start a new page; a section that
outgrows its page is not split.
"""
from __future__ import annotations

import textwrap
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple, Union

from partnercard.core.choices import CHECKLIST
from partnercard.core.config import DEFAULT_BASE_FILENAME, DEFAULT_ORGANISATION
from partnercard.core.models import ROLES, PartnerRecord
from partnercard.export.layout import MULTILINE, ROLE, SECTIONS, Block, FieldSpec

PAGE_WIDTH = 595.28
PAGE_HEIGHT = 841.89
MARGIN = 40.0
CONTENT_WIDTH = PAGE_WIDTH - 2 * MARGIN
COLUMN_WIDTH = PAGE_WIDTH / 2 - MARGIN
RIGHT_COLUMN_X = PAGE_WIDTH / 2

HEADER_TOP = 24.0
HEADER_HEIGHT = 44.0
TITLE_SIZE = 16.0

FONT_SIZE = 9.0
LINE_HEIGHT = 11.0
FIELD_HEIGHT = 15.0
FIELD_GAP = 8.0
VALUE_PADDING = 5.0
SECTION_HEADER_HEIGHT = 15.0
SECTION_HEADER_ADVANCE = 25.0
MIN_SECTION_SPACE = 120.0
CHECKBOX_SIZE = 10.0
CHECKLIST_ROW = 20.0

# Average Helvetica glyph width as a fraction of the font size.
CHAR_WIDTH = 0.5

HEADER_FILL = "#e0e0e0"
BORDER_COLOR = "#808080"


@dataclass(frozen=True)
class TextOp:
    x: float
    y: float
    text: str
    size: float = FONT_SIZE
    bold: bool = False
    align: str = "left"
    key: str = ""


@dataclass(frozen=True)
class RectOp:
    x: float
    y: float
    width: float
    height: float
    fill: str | None = None
    stroke: str | None = BORDER_COLOR


@dataclass(frozen=True)
class LineOp:
    x1: float
    y: float
    x2: float


@dataclass(frozen=True)
class CheckboxOp:
    x: float
    y: float
    checked: bool
    size: float = CHECKBOX_SIZE


@dataclass(frozen=True)
class ImageOp:
    x: float
    y: float
    width: float
    height: float
    src: str


DrawOp = Union[TextOp, RectOp, LineOp, CheckboxOp, ImageOp]


@dataclass
class Page:
    ops: List[DrawOp] = field(default_factory=list)

    def texts(self) -> List[str]:
        return [op.text for op in self.ops if isinstance(op, TextOp)]


def wrap_text(text: str, width: float, size: float = FONT_SIZE) -> List[str]:
    """Split ``text`` into lines that fit ``width`` points; always at least one line."""

    max_chars = max(1, int(width / (size * CHAR_WIDTH)))
    lines: List[str] = []
    for paragraph in text.splitlines() or [""]:
        lines.extend(textwrap.wrap(paragraph, width=max_chars) or [""])
    return lines


class PageLayout:
    """Accumulates draw operations page by page behind a vertical cursor."""

    def __init__(self) -> None:
        self.pages: List[Page] = [Page()]
        self.y = HEADER_TOP + HEADER_HEIGHT + 8

    @property
    def page(self) -> Page:
        return self.pages[-1]

    def add(self, op: DrawOp) -> None:
        self.page.ops.append(op)

    def new_page(self) -> None:
        self.pages.append(Page())
        self.y = MARGIN

    def remaining(self) -> float:
        return PAGE_HEIGHT - MARGIN - self.y

    def title(self, text: str) -> None:
        """Centered title inside the header band of the first page."""

        top = HEADER_TOP + (HEADER_HEIGHT - TITLE_SIZE * 1.2) / 2
        self.pages[0].ops.append(
            TextOp(PAGE_WIDTH / 2, top, text, size=TITLE_SIZE, bold=True, align="center", key="title")
        )

    def section_header(self, text: str) -> None:
        if self.remaining() < MIN_SECTION_SPACE:
            self.new_page()
        self.add(RectOp(MARGIN, self.y, CONTENT_WIDTH, SECTION_HEADER_HEIGHT, fill=HEADER_FILL, stroke=None))
        self.add(TextOp(PAGE_WIDTH / 2, self.y + 2, text, size=10, bold=True, align="center"))
        self.y += SECTION_HEADER_ADVANCE

    def rule(self) -> None:
        self.add(LineOp(MARGIN, self.y, PAGE_WIDTH - MARGIN))
        self.y += 15

    def subheading(self, text: str) -> None:
        self.add(TextOp(MARGIN, self.y, text, bold=True))
        self.y += 20

    def field(
        self,
        label: str,
        value: str,
        x: float,
        y: float,
        label_width: float,
        width: float,
    ) -> float:
        """Draw a label and its bordered value box; return the y below it."""

        value_x = x + label_width
        value_width = width - label_width - 10
        lines = wrap_text(value, value_width - 2 * VALUE_PADDING)
        height = FIELD_HEIGHT + (len(lines) - 1) * LINE_HEIGHT
        self.add(TextOp(x, y + 2, label, bold=True))
        self.add(RectOp(value_x, y, value_width, height))
        for index, line in enumerate(lines):
            if line:
                self.add(TextOp(value_x + VALUE_PADDING, y + 2 + index * LINE_HEIGHT, line))
        return y + height + FIELD_GAP

    def role(self, label: str, selected: str, x: float, y: float, label_width: float) -> float:
        self.add(TextOp(x, y + 2, label, bold=True))
        option_x = x + label_width
        for option, option_label in ROLES.items():
            self.add(TextOp(option_x, y + 2, option_label))
            self.add(CheckboxOp(option_x + 45, y + 2, selected == option))
            option_x += 80
        return y + FIELD_HEIGHT + FIELD_GAP

    def layout_field(
        self, entry: FieldSpec, record: PartnerRecord, x: float, y: float, label_width: float, width: float
    ) -> float:
        if entry.kind == ROLE:
            return self.role(entry.label_for(record), record.role, x, y, label_width)
        if entry.kind == MULTILINE:
            width = CONTENT_WIDTH
        return self.field(entry.label_for(record), entry.value_for(record), x, y, label_width, width)

    def columns(
        self,
        left: Sequence[FieldSpec],
        right: Sequence[FieldSpec],
        record: PartnerRecord,
        label_width: float,
    ) -> Tuple[float, float]:
        """Draw both columns from the current cursor and return their end positions.

        The cursor continues from ``max(left_end, right_end)``.
        """

        start = self.y
        left_width = COLUMN_WIDTH if right else CONTENT_WIDTH
        left_end = start
        for entry in left:
            left_end = self.layout_field(entry, record, MARGIN, left_end, label_width, left_width)
        right_end = start
        for entry in right:
            right_end = self.layout_field(entry, record, RIGHT_COLUMN_X, right_end, label_width, COLUMN_WIDTH)
        self.y = max(left_end, right_end)
        return left_end, right_end

    def block(self, block: Block, record: PartnerRecord) -> None:
        if block.rule_before:
            self.rule()
        if block.title:
            self.subheading(f"{block.title}:")
        self.columns(block.left, block.right, record, block.label_width)

    def checklist(self, record: PartnerRecord) -> None:
        column_width = CONTENT_WIDTH / len(CHECKLIST)
        start = self.y
        for index, column in enumerate(CHECKLIST):
            x = MARGIN + index * column_width
            for offset, (attr, label) in enumerate(column):
                row_y = start + offset * CHECKLIST_ROW
                self.add(CheckboxOp(x, row_y, bool(getattr(record, attr))))
                self.add(TextOp(x + CHECKBOX_SIZE + 5, row_y, label))
        self.y = start + max(len(column) for column in CHECKLIST) * CHECKLIST_ROW + 5


def layout_partner_card(
    record: PartnerRecord,
    organisation: str = DEFAULT_ORGANISATION,
    title: str | None = None,
) -> List[Page]:
    """Lay out the full card and return its pages of draw operations."""

    layout = PageLayout()
    layout.title(title or f"{organisation} {DEFAULT_BASE_FILENAME}")
    for section in SECTIONS:
        if section.new_page:
            layout.new_page()
        layout.section_header(section.heading_for(organisation))
        if section.checklist:
            layout.checklist(record)
        for block in section.blocks:
            layout.block(block, record)
    return layout.pages
