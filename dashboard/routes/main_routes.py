from flask import Blueprint, redirect, url_for
from flask_login import login_required

main = Blueprint("main", __name__)


@main.route("/")
@main.route("/dashboard")
@login_required
def home():
    """Send the user to the invoice list."""
    return redirect(url_for("invoice.view_invoices"))
