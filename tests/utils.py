"""Utility helpers shared across the test-suite."""

from __future__ import annotations

import re
from typing import Any

from werkzeug.security import generate_password_hash

from dashboard import db
from dashboard.models import Invoice, User

_CSRF_RE = re.compile(r'name=["\']csrf_token["\'][^>]*value=["\']([^"\']+)["\']', re.IGNORECASE)


def extract_csrf_token(response: Any, *, required: bool = True) -> str:
    """Return the first CSRF token found in ``response`` HTML content."""

    if hasattr(response, "data"):
        html: str = response.data.decode("utf-8")
    elif isinstance(response, (bytes, bytearray)):
        html = response.decode("utf-8")
    else:
        html = str(response)
    match = _CSRF_RE.search(html)
    if not match:
        if required:
            raise AssertionError("CSRF token not found in response")
        return ""
    return match.group(1)


def login(client, email: str, password: str):
    """Helper to login a user in tests, respecting CSRF protection."""

    login_page = client.get("/auth/login")
    token = extract_csrf_token(login_page, required=False)
    form_data = {"email": email, "password": password}
    if token:
        form_data["csrf_token"] = token
    return client.post(
        "/auth/login",
        data=form_data,
        follow_redirects=True,
    )


def create_user(app, email: str = "clerk@example.com", password: str = "pass", active: bool = True) -> str:
    with app.app_context():
        user = User(
            email=email,
            password=generate_password_hash(password),
            active=active,
        )
        db.session.add(user)
        db.session.commit()
        return user.email


def add_invoice(app, customer_id: str, amount: int = 1000, status: str = "pending", date: str = "2026-01-15", invoice_id: str | None = None) -> str:
    """Insert an invoice row directly and return its id."""

    with app.app_context():
        invoice = Invoice(
            customer_id=customer_id,
            amount=amount,
            status=status,
            date=date,
        )
        if invoice_id is not None:
            invoice.id = invoice_id
        db.session.add(invoice)
        db.session.commit()
        return invoice.id
