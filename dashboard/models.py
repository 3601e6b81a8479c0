from uuid import uuid4

from flask_login import UserMixin

from dashboard import db
from dashboard.utils.numeric import from_minor_units

INVOICE_STATUSES = ("pending", "paid")


def _new_id() -> str:
    return str(uuid4())


class User(UserMixin, db.Model):
    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(120), unique=True, nullable=False)
    password = db.Column(db.String(255), nullable=False)
    is_admin = db.Column(db.Boolean, default=False, nullable=False)
    active = db.Column(db.Boolean, default=False, nullable=False)


class Customer(db.Model):
    __tablename__ = "customers"
    id = db.Column(db.String(36), primary_key=True, default=_new_id)
    name = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False)
    image_url = db.Column(db.String(255))

    invoices = db.relationship("Invoice", backref="customer", lazy=True)

    __table_args__ = (db.Index("ix_customers_name", "name"),)


class Invoice(db.Model):
    __tablename__ = "invoices"
    id = db.Column(db.String(36), primary_key=True, default=_new_id)
    customer_id = db.Column(
        db.String(36),
        db.ForeignKey("customers.id"),
        nullable=False,
        index=True,
    )
    # Minor currency units (cents)
    amount = db.Column(db.Integer, nullable=False)
    status = db.Column(db.String(16), nullable=False)
    # ISO-8601 calendar date, YYYY-MM-DD
    date = db.Column(db.String(10), nullable=False, index=True)

    __table_args__ = (
        db.CheckConstraint("amount > 0", name="ck_invoices_amount_positive"),
        db.CheckConstraint(
            "status IN ('pending', 'paid')", name="ck_invoices_status"
        ),
    )

    @property
    def amount_in_dollars(self):
        return from_minor_units(self.amount)
