"""Create, update and delete actions for invoices.

Each action validates a flat form payload, writes a single row, revalidates
the cached invoice list and then navigates back to it. Failures never
escape: validation problems and database errors are returned to the caller
as an :class:`InvoiceState` so the form can be shown again.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.datastructures import MultiDict

from dashboard import db
from dashboard.forms import InvoiceForm
from dashboard.models import Invoice
from dashboard.utils.navigation import navigate
from dashboard.utils.numeric import to_minor_units
from dashboard.utils.render_cache import revalidate_path

INVOICES_PATH = "/dashboard/invoices"

MISSING_FIELDS_MESSAGES = {
    "create": "Missing Fields. Failed to Create Invoice.",
    "update": "Missing Fields. Failed to Update Invoice.",
}
CREATE_FAILED_MESSAGE = "Database Error: Failed to Create Invoice."
UPDATE_FAILED_MESSAGE = "Database Error: Failed to Update Invoice."
DELETE_FAILED_MESSAGE = "The database failed to delete the invoice."
NOT_FOUND_MESSAGE = "Invoice not found."

FieldErrors = Dict[str, List[str]]


@dataclass
class InvoiceState:
    """Outcome of an action that did not navigate away."""

    errors: FieldErrors = field(default_factory=dict)
    message: Optional[str] = None
    not_found: bool = False

    @property
    def ok(self) -> bool:
        return not self.errors and self.message is None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        if self.errors:
            data["errors"] = {name: list(msgs) for name, msgs in self.errors.items()}
        if self.message is not None:
            data["message"] = self.message
        return data


@dataclass(frozen=True)
class InvoiceInput:
    customer_id: str
    amount: Decimal
    status: str

    @property
    def amount_in_cents(self) -> int:
        return to_minor_units(self.amount)


@dataclass
class ValidationResult:
    data: Optional[InvoiceInput] = None
    errors: FieldErrors = field(default_factory=dict)
    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.data is not None

    def to_state(self) -> InvoiceState:
        return InvoiceState(errors=self.errors, message=self.message)


def _as_formdata(payload: Mapping[str, Any]) -> MultiDict:
    """Normalise ``payload`` to string values; ``None`` counts as missing."""

    if isinstance(payload, MultiDict):
        items = payload.items(multi=True)
    else:
        items = payload.items()
    pairs = []
    for key, value in items:
        values = value if isinstance(value, (list, tuple)) else [value]
        pairs.extend((key, str(v)) for v in values if v is not None)
    return MultiDict(pairs)


def today_iso() -> str:
    return datetime.now(timezone.utc).date().isoformat()


def validate_invoice_input(
    payload: Mapping[str, Any], mode: str = "create"
) -> ValidationResult:
    """Validate an invoice payload.

    Every field is checked and all failures are reported together, keyed by
    form field name (``customerId``, ``amount``, ``status``). Fields that
    pass are absent from the mapping.
    """

    if mode not in MISSING_FIELDS_MESSAGES:
        raise ValueError(f"Unknown validation mode: {mode!r}")

    form = InvoiceForm(_as_formdata(payload))
    if not form.validate():
        errors = {f.name: list(f.errors) for f in form if f.errors}
        return ValidationResult(
            errors=errors, message=MISSING_FIELDS_MESSAGES[mode]
        )

    return ValidationResult(
        data=InvoiceInput(
            customer_id=form.customer_id.data,
            amount=form.amount.data,
            status=form.status.data,
        )
    )


def create_invoice(
    previous_state: Optional[InvoiceState], payload: Mapping[str, Any]
) -> InvoiceState:
    """Insert a new invoice and navigate to the invoice list.

    ``previous_state`` is whatever the last submission of the same form
    returned; the new state depends on ``payload`` alone.
    """

    result = validate_invoice_input(payload, mode="create")
    if not result.ok:
        return result.to_state()

    fields = result.data
    invoice = Invoice(
        customer_id=fields.customer_id,
        amount=fields.amount_in_cents,
        status=fields.status,
        date=today_iso(),
    )
    try:
        db.session.add(invoice)
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception(
            "Failed to create invoice for customer %s", fields.customer_id
        )
        return InvoiceState(message=CREATE_FAILED_MESSAGE)

    current_app.logger.info("Created invoice %s", invoice.id)
    revalidate_path(INVOICES_PATH)
    navigate(INVOICES_PATH)


def update_invoice(invoice_id: str, payload: Mapping[str, Any]) -> InvoiceState:
    """Update customer, amount and status of an invoice, then navigate."""

    result = validate_invoice_input(payload, mode="update")
    if not result.ok:
        return result.to_state()

    fields = result.data
    try:
        invoice = db.session.get(Invoice, invoice_id)
        if invoice is None:
            return InvoiceState(message=NOT_FOUND_MESSAGE, not_found=True)
        invoice.customer_id = fields.customer_id
        invoice.amount = fields.amount_in_cents
        invoice.status = fields.status
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("Failed to update invoice %s", invoice_id)
        return InvoiceState(message=UPDATE_FAILED_MESSAGE)

    current_app.logger.info("Updated invoice %s", invoice_id)
    revalidate_path(INVOICES_PATH)
    navigate(INVOICES_PATH)


def delete_invoice(invoice_id: str) -> InvoiceState:
    """Delete an invoice. The caller stays where it is."""

    try:
        invoice = db.session.get(Invoice, invoice_id)
        if invoice is None:
            return InvoiceState(message=NOT_FOUND_MESSAGE, not_found=True)
        db.session.delete(invoice)
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("Failed to delete invoice %s", invoice_id)
        return InvoiceState(message=DELETE_FAILED_MESSAGE)

    current_app.logger.info("Deleted invoice %s", invoice_id)
    revalidate_path(INVOICES_PATH)
    return InvoiceState()
