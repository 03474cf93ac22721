"""CSV and JSON exports plus the shared filename convention."""
import csv
import io
import json

from partnercard.core.models import PartnerRecord, field_names
from partnercard.export.common import build_filename
from partnercard.export.csv_export import to_csv
from partnercard.export.json_export import to_json


def test_csv_header_and_value_rows_have_the_same_width(sample_record):
    rows = list(csv.reader(io.StringIO(to_csv(sample_record))))
    assert len(rows) == 2
    assert rows[0] == field_names()
    assert len(rows[0]) == len(rows[1])


def test_csv_quotes_every_value_and_escapes_embedded_quotes(sample_record):
    text = to_csv(sample_record)
    header, values = text.split("\n", 1)
    assert not header.startswith('"')
    assert values.startswith('"2024-05-01","Jan Paul Douma"')
    assert '""green""' in values

    row = next(csv.DictReader(io.StringIO(text)))
    assert row["remarks"] == sample_record.remarks
    assert row["requestedCreditLimit"] == "50,000"


def test_csv_writes_flags_as_true_false(sample_record):
    row = next(csv.DictReader(io.StringIO(to_csv(sample_record))))
    assert row["poa"] == "true"
    assert row["scope"] == "false"


def test_json_round_trip_is_lossless(sample_record):
    restored = PartnerRecord.from_dict(json.loads(to_json(sample_record)))
    assert restored == sample_record
    assert json.loads(to_json(sample_record)) == sample_record.to_dict()


def test_json_is_indented_with_two_spaces_in_field_order():
    text = to_json(PartnerRecord())
    assert text.splitlines()[1] == '  "date": "",'
    assert list(json.loads(text)) == field_names()


def test_filename_includes_company_and_date():
    assert build_filename("Partner Card", " Acme Ltd ", "2024-05-01", "pdf") == "Partner Card Acme Ltd 2024-05-01.pdf"


def test_filename_omits_empty_parts():
    assert build_filename("Partner Card", "", "", "csv") == "Partner Card.csv"
    assert build_filename("Partner Card", "   ", None, "json") == "Partner Card.json"
    assert build_filename("Partner Card", None, "2024-01-01", "xlsx") == "Partner Card 2024-01-01.xlsx"
