"""Core building blocks for the partner card package."""
from partnercard.core.choices import CHECKLIST, CHOICE_PAIRS, ChoicePair, checklist_items
from partnercard.core.config import Settings, load_settings
from partnercard.core.errors import ImportValidationError, UnsupportedLogoError
from partnercard.core.logging import configure_logging
from partnercard.core.models import PartnerRecord, field_names, flag_names, wire_name

__all__ = [
    "CHECKLIST",
    "CHOICE_PAIRS",
    "ChoicePair",
    "checklist_items",
    "Settings",
    "load_settings",
    "ImportValidationError",
    "UnsupportedLogoError",
    "configure_logging",
    "PartnerRecord",
    "field_names",
    "flag_names",
    "wire_name",
]
