"""Spreadsheet export reproduces the card grid with honest ranges and merges."""
import io

import pytest
from openpyxl import Workbook, load_workbook

from partnercard.core.choices import CHECKLIST
from partnercard.core.models import PartnerRecord
from partnercard.export.xlsx_export import REGION_FILLS, SHEET_TITLE, SheetWriter, build_workbook, to_xlsx


def _values(sheet) -> list:
    return [value for row in sheet.iter_rows(values_only=True) for value in row if value is not None]


def _find(sheet, text: str):
    for row in sheet.iter_rows():
        for cell in row:
            if cell.value == text:
                return cell
    raise AssertionError(f"{text!r} not found")


def test_xlsx_is_a_single_sheet_workbook(sample_record):
    workbook = load_workbook(io.BytesIO(to_xlsx(sample_record)))
    assert workbook.sheetnames == [SHEET_TITLE]
    sheet = workbook.active
    assert sheet["A1"].value == "Red2Roast Partner Card"
    assert "Acme Coffee Ltd" in _values(sheet)


def test_used_range_and_merges_cover_exactly_the_written_cells(sample_record):
    workbook, writer = build_workbook(sample_record)
    sheet = workbook.active
    assert sheet.dimensions == writer.used_range
    assert writer.used_range.startswith("A1:H")
    assert {str(rng) for rng in sheet.merged_cells.ranges} == set(writer.merges)

    reloaded = load_workbook(io.BytesIO(to_xlsx(sample_record))).active
    assert {str(rng) for rng in reloaded.merged_cells.ranges} == set(writer.merges)


def test_labels_follow_the_selected_discriminators(sample_record):
    values = _values(load_workbook(io.BytesIO(to_xlsx(sample_record))).active)
    assert "IBAN" in values
    assert "Account No." not in values
    assert "BIC" in values and "Swift Code" not in values
    assert "EIN No (US)" in values and "EORI No (EU)" not in values
    assert "Routing No. (ACH/Wire)" in values and "Sort Code" not in values


def test_default_discriminators_show_the_other_labels():
    values = _values(load_workbook(io.BytesIO(to_xlsx(PartnerRecord()))).active)
    assert "Account No." in values
    assert "IBAN" not in values
    assert "Swift Code" in values and "BIC" not in values


def test_checklist_marks_follow_flags(sample_record):
    sheet = load_workbook(io.BytesIO(to_xlsx(sample_record))).active
    for column in CHECKLIST:
        for attr, label in column:
            label_cell = _find(sheet, label)
            mark = sheet.cell(row=label_cell.row, column=label_cell.column + 1).value
            assert mark == ("X" if getattr(sample_record, attr) else None), label


def test_role_mark_sits_next_to_the_selected_role(sample_record):
    sheet = load_workbook(io.BytesIO(to_xlsx(sample_record))).active
    creditor = _find(sheet, "Creditor")
    debtor = _find(sheet, "Debtor")
    assert sheet.cell(row=creditor.row, column=creditor.column + 1).value == "X"
    assert sheet.cell(row=debtor.row, column=debtor.column + 1).value is None


def test_regions_use_distinct_fills(sample_record):
    workbook, _ = build_workbook(sample_record)
    sheet = workbook.active
    company = _find(sheet, "Company Name")
    bank = _find(sheet, "Bank Name")
    internal = _find(sheet, "Debtor No Scope")
    colors = {cell.fill.start_color.rgb for cell in (company, bank, internal)}
    assert len(colors) == 3
    assert len({fill.start_color.rgb for fill in REGION_FILLS.values()}) == 3


def test_remarks_span_the_full_width_and_wrap(sample_record):
    workbook, writer = build_workbook(sample_record)
    sheet = workbook.active
    remarks = _find(sheet, sample_record.remarks)
    assert remarks.alignment.wrap_text
    assert any(ref.startswith(f"B{remarks.row}:H") for ref in writer.merges)


def test_overlapping_merges_are_rejected():
    writer = SheetWriter(Workbook().active)
    writer.write(1, 1, "a", end_col=3)
    with pytest.raises(ValueError):
        writer.write(2, 1, "b", end_col=4)


def test_used_range_grows_with_writes():
    writer = SheetWriter(Workbook().active)
    assert writer.used_range == "A1:A1"
    writer.write(2, 3, "x")
    writer.write(1, 5, "y", end_col=4)
    assert writer.used_range == "A3:D5"
    assert writer.merges == ["A5:D5"]


def test_writing_inside_an_existing_merge_is_rejected():
    writer = SheetWriter(Workbook().active)
    writer.write(1, 1, "a", end_col=3)
    with pytest.raises(ValueError):
        writer.write(2, 1, "b")
    assert writer.merges == ["A1:C1"]


def test_values_starting_with_equals_stay_text():
    record = PartnerRecord(remarks="=== call first ===", requested_payment_terms="=30")
    sheet = load_workbook(io.BytesIO(to_xlsx(record))).active
    for text in ("=== call first ===", "=30"):
        cell = _find(sheet, text)
        assert cell.data_type == "s"


def test_control_characters_are_stripped_from_text():
    sheet = load_workbook(io.BytesIO(to_xlsx(PartnerRecord(remarks="pasted\x0bfrom word")))).active
    assert _find(sheet, "pastedfrom word").alignment.wrap_text
