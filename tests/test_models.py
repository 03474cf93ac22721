"""The record model keeps wire names stable and survives serialization."""
import json

from partnercard.core.choices import ACCOUNT_IDENTIFIER, CHOICE_PAIRS, SORT_OR_ROUTING, checklist_items
from partnercard.core.models import PartnerRecord, field_names, flag_names, wire_name


def test_defaults_match_a_fresh_form():
    record = PartnerRecord()
    assert record.request_by == "Gert-Jan Dokter"
    assert record.role == "debtor"
    assert record.status == "New"
    assert record.invoice_language == "English"
    assert record.default_currency == "United States Dollars (USD)"
    assert record.company_name == ""
    assert not any(getattr(record, name) for name in flag_names())


def test_to_dict_uses_camel_case_in_declaration_order():
    keys = list(PartnerRecord().to_dict())
    assert keys[:4] == ["date", "requestBy", "role", "status"]
    assert "cityAndState" in keys
    assert "eoriOrEin" in keys and "eoriNo" in keys
    assert keys[-1] == "signature"
    assert keys == field_names()


def test_wire_name_conversion():
    assert wire_name("invoice_city_and_state") == "invoiceCityAndState"
    assert wire_name("it") == "it"


def test_twelve_checklist_flags_match_the_checklist_table():
    assert len(flag_names()) == 12
    assert {attr for attr, _ in checklist_items()} == set(flag_names())


def test_from_dict_round_trips(sample_record):
    restored = PartnerRecord.from_dict(json.loads(json.dumps(sample_record.to_dict())))
    assert restored == sample_record


def test_from_dict_fills_missing_keys_and_ignores_unknown():
    record = PartnerRecord.from_dict({"companyName": "Acme", "date": "", "favouriteColour": "red"})
    assert record.company_name == "Acme"
    assert record.role == "debtor"
    assert not hasattr(record, "favourite_colour")


def test_from_dict_accepts_legacy_eori_keys():
    record = PartnerRecord.from_dict({"eoriOrEinType": "ein", "eoriOrEinValue": "99"})
    assert record.eori_or_ein == "ein"
    assert record.eori_no == "99"


def test_from_dict_coerces_flags_and_scalars():
    record = PartnerRecord.from_dict({"poa": "true", "gdpr": "0", "bank": 1, "requestedCreditLimit": 5000, "remarks": None})
    assert record.poa is True
    assert record.gdpr is False
    assert record.bank is True
    assert record.requested_credit_limit == "5000"
    assert record.remarks == ""


def test_unknown_discriminator_falls_back_to_default(caplog):
    caplog.set_level("WARNING")
    record = PartnerRecord.from_dict({"accountIdentifierType": "bsb"})
    assert record.account_identifier_type == ACCOUNT_IDENTIFIER.default
    assert "accountIdentifierType" in caplog.text


def test_choice_pairs_only_label_the_selected_option():
    record = PartnerRecord(account_identifier_type="iban", sort_or_routing_type="routing")
    assert ACCOUNT_IDENTIFIER.label_for(record) == "IBAN"
    assert SORT_OR_ROUTING.label_for(record) == "Routing No. (ACH/Wire)"
    assert ACCOUNT_IDENTIFIER.label_for(PartnerRecord()) == "Account No."


def test_every_choice_pair_has_exactly_two_options():
    for pair in CHOICE_PAIRS:
        assert len(pair.options) == 2
        assert pair.default in pair.options
        assert getattr(PartnerRecord(), pair.selector) == pair.default
