"""Read-side lookups used by the invoice pages."""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy import or_

from dashboard import db
from dashboard.models import Customer, Invoice


def fetch_customers() -> List[Customer]:
    """Return all customers ordered by name for the customer picker."""
    return Customer.query.order_by(Customer.name.asc()).all()


def fetch_invoice_by_id(invoice_id: str) -> Optional[Invoice]:
    return db.session.get(Invoice, invoice_id)


def fetch_filtered_invoices(query: str = "", page: int = 1, per_page: int = 25):
    """Return a page of invoices, newest first.

    ``query`` matches customer name, customer email, status or date
    (case-insensitive substring).
    """

    stmt = Invoice.query.join(Customer)
    if query:
        pattern = f"%{query}%"
        stmt = stmt.filter(
            or_(
                Customer.name.ilike(pattern),
                Customer.email.ilike(pattern),
                Invoice.status.ilike(pattern),
                Invoice.date.ilike(pattern),
            )
        )
    return stmt.order_by(Invoice.date.desc(), Invoice.id.asc()).paginate(
        page=page, per_page=per_page, error_out=False
    )
