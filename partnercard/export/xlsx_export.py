"""Spreadsheet export that mirrors the printed partner card grid."""
from __future__ import annotations

import io
import logging
from typing import Any, List, Optional, Set, Tuple

from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.pagebreak import Break
from openpyxl.worksheet.worksheet import Worksheet

from partnercard.core.choices import CHECKLIST
from partnercard.core.config import DEFAULT_BASE_FILENAME, DEFAULT_ORGANISATION
from partnercard.core.models import ROLES, PartnerRecord
from partnercard.export.layout import BANK, COMPANY, INTERNAL, MULTILINE, ROLE, SECTIONS, Block, FieldSpec

logger = logging.getLogger(__name__)

SHEET_TITLE = "Partner Card"

# Left pair: label in A, value merged B:D. Right pair: label in E, value F:H.
COLUMN_WIDTHS = {"A": 30, "B": 16, "C": 16, "D": 6, "E": 30, "F": 16, "G": 16, "H": 6}
LAST_COLUMN = 8
LEFT_LABEL, LEFT_VALUE, LEFT_VALUE_END = 1, 2, 4
RIGHT_LABEL, RIGHT_VALUE, RIGHT_VALUE_END = 5, 6, 8
MULTILINE_ROWS = 4

HEADER_FILL = PatternFill("solid", start_color="FFD9D9D9", end_color="FFD9D9D9")
REGION_FILLS = {
    INTERNAL: PatternFill("solid", start_color="FFFFF2CC", end_color="FFFFF2CC"),
    COMPANY: PatternFill("solid", start_color="FFDDEBF7", end_color="FFDDEBF7"),
    BANK: PatternFill("solid", start_color="FFE2EFDA", end_color="FFE2EFDA"),
}
_THIN = Side(style="thin", color="FF808080")
VALUE_BORDER = Border(left=_THIN, right=_THIN, top=_THIN, bottom=_THIN)


class SheetWriter:
    """Writes cells at explicit coordinates and keeps the used range and merges honest.

    Spreadsheet viewers rely on the sheet dimension and merge list; both are
    derived here from exactly the cells that were written.
    """

    def __init__(self, sheet: Worksheet) -> None:
        self.sheet = sheet
        self.merges: List[str] = []
        self._merged: Set[Tuple[int, int]] = set()
        self._bounds: Optional[Tuple[int, int, int, int]] = None

    @property
    def used_range(self) -> str:
        if self._bounds is None:
            return "A1:A1"
        min_col, min_row, max_col, max_row = self._bounds
        return f"{get_column_letter(min_col)}{min_row}:{get_column_letter(max_col)}{max_row}"

    def _touch(self, col: int, row: int) -> None:
        if self._bounds is None:
            self._bounds = (col, row, col, row)
            return
        min_col, min_row, max_col, max_row = self._bounds
        self._bounds = (min(min_col, col), min(min_row, row), max(max_col, col), max(max_row, row))

    def _check_free(self, col: int, row: int, end_col: int, end_row: int) -> Set[Tuple[int, int]]:
        cells = {(c, r) for c in range(col, end_col + 1) for r in range(row, end_row + 1)}
        if cells & self._merged:
            ref = f"{get_column_letter(col)}{row}:{get_column_letter(end_col)}{end_row}"
            raise ValueError(f"Range {ref} overlaps an existing merge")
        return cells

    def merge(self, col: int, row: int, end_col: int, end_row: int) -> str:
        ref = f"{get_column_letter(col)}{row}:{get_column_letter(end_col)}{end_row}"
        self._merged |= self._check_free(col, row, end_col, end_row)
        self.sheet.merge_cells(ref)
        self.merges.append(ref)
        return ref

    def write(
        self,
        col: int,
        row: int,
        value: Any = None,
        *,
        end_col: int | None = None,
        end_row: int | None = None,
        bold: bool = False,
        size: float | None = None,
        fill: PatternFill | None = None,
        border: Border | None = None,
        horizontal: str | None = None,
        wrap: bool = False,
    ) -> None:
        end_col = end_col or col
        end_row = end_row or row
        self._check_free(col, row, end_col, end_row)

        anchor = self.sheet.cell(row=row, column=col)
        if isinstance(value, str):
            value = ILLEGAL_CHARACTERS_RE.sub("", value)
        anchor.value = value if value != "" else None
        if isinstance(anchor.value, str):
            # Free text such as "=30" stays text instead of becoming a formula.
            anchor.data_type = "s"
        if (end_col, end_row) != (col, row):
            self.merge(col, row, end_col, end_row)

        for r in range(row, end_row + 1):
            for c in range(col, end_col + 1):
                cell = self.sheet.cell(row=r, column=c)
                if fill is not None:
                    cell.fill = fill
                if border is not None:
                    cell.border = border
                self._touch(c, r)

        if bold or size:
            anchor.font = Font(bold=bold, size=size or 11)
        anchor.alignment = Alignment(
            horizontal=horizontal,
            vertical="top" if wrap else "center",
            wrap_text=wrap,
        )


def _write_field(
    writer: SheetWriter, entry: FieldSpec, record: PartnerRecord, row: int, right: bool
) -> int:
    """Write one label/value pair starting at ``row`` and return the rows it used."""

    label_col = RIGHT_LABEL if right else LEFT_LABEL
    value_col = RIGHT_VALUE if right else LEFT_VALUE
    value_end = RIGHT_VALUE_END if right else LEFT_VALUE_END
    fill = REGION_FILLS[entry.region]

    if entry.kind == ROLE:
        writer.write(label_col, row, entry.label_for(record), bold=True, fill=fill)
        for offset, (option, option_label) in enumerate(ROLES.items()):
            writer.write(value_col, row + offset, option_label, fill=fill)
            writer.write(
                value_col + 1,
                row + offset,
                "X" if record.role == option else None,
                fill=fill,
                border=VALUE_BORDER,
                horizontal="center",
            )
        return len(ROLES)

    if entry.kind == MULTILINE:
        # Free text spans every value column to the right edge of the sheet.
        writer.write(label_col, row, entry.label_for(record), bold=True, fill=fill)
        writer.write(
            value_col,
            row,
            entry.value_for(record),
            end_col=LAST_COLUMN,
            end_row=row + MULTILINE_ROWS - 1,
            fill=fill,
            border=VALUE_BORDER,
            wrap=True,
        )
        return MULTILINE_ROWS

    writer.write(label_col, row, entry.label_for(record), bold=True, fill=fill)
    writer.write(
        value_col,
        row,
        entry.value_for(record),
        end_col=value_end,
        fill=fill,
        border=VALUE_BORDER,
    )
    return 1


def _write_column(
    writer: SheetWriter, fields: Tuple[FieldSpec, ...], record: PartnerRecord, row: int, right: bool
) -> int:
    for entry in fields:
        row += _write_field(writer, entry, record, row, right)
    return row


def _write_block(writer: SheetWriter, block: Block, record: PartnerRecord, row: int) -> int:
    if block.rule_before:
        row += 1
    if block.title:
        writer.write(LEFT_LABEL, row, block.title, bold=True)
        row += 1
    left_end = _write_column(writer, block.left, record, row, right=False)
    right_end = _write_column(writer, block.right, record, row, right=True)
    return max(left_end, right_end)


def _write_checklist(writer: SheetWriter, record: PartnerRecord, row: int) -> int:
    fill = REGION_FILLS[INTERNAL]
    for index, column in enumerate(CHECKLIST):
        label_col = 1 + index * 2
        for offset, (attr, label) in enumerate(column):
            writer.write(label_col, row + offset, label, fill=fill)
            writer.write(
                label_col + 1,
                row + offset,
                "X" if getattr(record, attr) else None,
                fill=fill,
                border=VALUE_BORDER,
                horizontal="center",
            )
    return row + max(len(column) for column in CHECKLIST)


def build_sheet(
    sheet: Worksheet,
    record: PartnerRecord,
    organisation: str = DEFAULT_ORGANISATION,
    title: str | None = None,
) -> SheetWriter:
    """Lay the partner card out on ``sheet`` and return the writer that did it."""

    writer = SheetWriter(sheet)
    for letter, width in COLUMN_WIDTHS.items():
        sheet.column_dimensions[letter].width = width

    writer.write(
        1,
        1,
        title or f"{organisation} {DEFAULT_BASE_FILENAME}",
        end_col=LAST_COLUMN,
        bold=True,
        size=14,
        horizontal="center",
    )
    row = 3

    for section in SECTIONS:
        if section.new_page:
            sheet.row_breaks.append(Break(id=row - 1))
        writer.write(
            1,
            row,
            section.heading_for(organisation),
            end_col=LAST_COLUMN,
            bold=True,
            fill=HEADER_FILL,
            horizontal="center",
        )
        row += 1
        if section.checklist:
            row = _write_checklist(writer, record, row) + 1
        for block in section.blocks:
            row = _write_block(writer, block, record, row)
        row += 1

    return writer


def build_workbook(
    record: PartnerRecord,
    organisation: str = DEFAULT_ORGANISATION,
    title: str | None = None,
) -> Tuple[Workbook, SheetWriter]:
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = SHEET_TITLE
    writer = build_sheet(sheet, record, organisation=organisation, title=title)
    return workbook, writer


def to_xlsx(
    record: PartnerRecord,
    organisation: str = DEFAULT_ORGANISATION,
    title: str | None = None,
) -> bytes:
    """Return the partner card as XLSX bytes."""

    workbook, writer = build_workbook(record, organisation=organisation, title=title)
    logger.debug("XLSX used range %s with %d merges", writer.used_range, len(writer.merges))
    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()
