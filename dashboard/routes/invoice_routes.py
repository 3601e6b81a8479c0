from flask import (
    Blueprint,
    abort,
    flash,
    redirect,
    render_template,
    request,
    url_for,
)
from flask_login import login_required

from dashboard.forms import InvoiceForm
from dashboard.services.invoice_actions import (
    INVOICES_PATH,
    InvoiceState,
    create_invoice as create_invoice_action,
    delete_invoice as delete_invoice_action,
    update_invoice as update_invoice_action,
)
from dashboard.services.invoice_queries import (
    fetch_customers,
    fetch_filtered_invoices,
    fetch_invoice_by_id,
)
from dashboard.utils.navigation import NavigationRedirect
from dashboard.utils.pagination import build_pagination_args, get_per_page
from dashboard.utils.render_cache import get_render_cache

invoice = Blueprint("invoice", __name__)


def _render_form(form, state, title, breadcrumbs, action_url):
    form.set_customer_choices(fetch_customers())
    return render_template(
        "invoices/invoice_form_page.html",
        form=form,
        state=state,
        title=title,
        breadcrumbs=breadcrumbs,
        action_url=action_url,
    )


@invoice.route(INVOICES_PATH)
@login_required
def view_invoices():
    """List invoices with an optional search query."""
    page = request.args.get("page", 1, type=int)
    per_page = get_per_page()
    query = request.args.get("query", "").strip()

    def render_table():
        invoices = fetch_filtered_invoices(query, page=page, per_page=per_page)
        return render_template(
            "invoices/_invoice_table.html",
            invoices=invoices,
            query=query,
            pagination_args=build_pagination_args(per_page, query=query),
        )

    # Only the table is cached; flashed messages render around it.
    table_html = get_render_cache().get_or_render(
        INVOICES_PATH, f"{query}|{page}|{per_page}", render_table
    )
    return render_template(
        "invoices/view_invoices.html", table_html=table_html, query=query
    )


@invoice.route(f"{INVOICES_PATH}/create", methods=["GET", "POST"])
@login_required
def create_invoice():
    """Create an invoice."""
    breadcrumbs = [
        {"label": "Invoices", "href": INVOICES_PATH},
        {
            "label": "Create Invoice",
            "href": url_for("invoice.create_invoice"),
            "active": True,
        },
    ]
    form = InvoiceForm(request.form)
    state = InvoiceState()
    if request.method == "POST":
        # Navigates away on success.
        state = create_invoice_action(state, request.form)
        if not state.errors and state.message:
            flash(state.message, "danger")
    return _render_form(
        form,
        state,
        "Create Invoice",
        breadcrumbs,
        url_for("invoice.create_invoice"),
    )


@invoice.route(f"{INVOICES_PATH}/<invoice_id>/edit", methods=["GET", "POST"])
@login_required
def edit_invoice(invoice_id):
    """Edit the customer, amount and status of an invoice."""
    existing = fetch_invoice_by_id(invoice_id)
    if existing is None:
        abort(404)

    breadcrumbs = [
        {"label": "Invoices", "href": INVOICES_PATH},
        {
            "label": "Edit Invoice",
            "href": url_for("invoice.edit_invoice", invoice_id=invoice_id),
            "active": True,
        },
    ]
    state = InvoiceState()
    if request.method == "POST":
        form = InvoiceForm(request.form)
        state = update_invoice_action(invoice_id, request.form)
        if state.not_found:
            abort(404)
        if not state.errors and state.message:
            flash(state.message, "danger")
    else:
        form = InvoiceForm(
            data={
                "customer_id": existing.customer_id,
                "amount": existing.amount_in_dollars,
                "status": existing.status,
            }
        )
    return _render_form(
        form,
        state,
        "Edit Invoice",
        breadcrumbs,
        url_for("invoice.edit_invoice", invoice_id=invoice_id),
    )


@invoice.route(f"{INVOICES_PATH}/<invoice_id>/delete", methods=["POST"])
@login_required
def delete_invoice(invoice_id):
    """Delete an invoice and return to the list."""
    state = delete_invoice_action(invoice_id)
    if state.not_found:
        abort(404)
    if state.ok:
        flash("Invoice deleted.", "success")
    else:
        flash(state.message, "danger")
    return redirect(url_for("invoice.view_invoices"))


def _json_payload():
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        return request.form
    return payload


def _state_response(state):
    if state.not_found:
        return state.to_dict(), 404
    if state.errors:
        return state.to_dict(), 400
    return state.to_dict(), 500


@invoice.route("/api/invoices", methods=["POST"])
@login_required
def create_invoice_api():
    """Create an invoice from a JSON body."""
    try:
        state = create_invoice_action(None, _json_payload())
    except NavigationRedirect as signal:
        return {"redirect": signal.location}, 201
    return _state_response(state)


@invoice.route("/api/invoices/<invoice_id>", methods=["POST", "PUT"])
@login_required
def update_invoice_api(invoice_id):
    """Update an invoice from a JSON body."""
    try:
        state = update_invoice_action(invoice_id, _json_payload())
    except NavigationRedirect as signal:
        return {"redirect": signal.location}
    return _state_response(state)


@invoice.route("/api/invoices/<invoice_id>", methods=["DELETE"])
@login_required
def delete_invoice_api(invoice_id):
    """Delete an invoice."""
    state = delete_invoice_action(invoice_id)
    if state.ok:
        return {}
    return _state_response(state)
