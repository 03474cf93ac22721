"""Form front end and the record helpers it relies on."""
from partnercard.ui.form import apply_edits, clear_invoice_address, missing_required, sync_invoice_address

__all__ = [
    "apply_edits",
    "clear_invoice_address",
    "missing_required",
    "sync_invoice_address",
]
