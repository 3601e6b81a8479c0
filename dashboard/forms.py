from flask_wtf import FlaskForm
from wtforms import (
    Field,
    Form,
    PasswordField,
    RadioField,
    SelectField,
    StringField,
)
from wtforms.validators import (
    AnyOf,
    DataRequired,
    Email,
    InputRequired,
    ValidationError,
)
from wtforms.widgets import NumberInput

from dashboard.models import INVOICE_STATUSES
from dashboard.utils.numeric import MAX_AMOUNT, coerce_decimal

CUSTOMER_REQUIRED_MESSAGE = "Please select a customer."
AMOUNT_MESSAGE = "Please enter an amount greater than $0."
STATUS_MESSAGE = "Please select an invoice status."


class AmountField(Field):
    """Dollar amount parsed to :class:`~decimal.Decimal`.

    Unparseable input leaves ``data`` as ``None`` and is reported by the
    field validators rather than as a processing error, so the user sees a
    single message for the field.
    """

    widget = NumberInput(step="0.01")

    def process_formdata(self, valuelist):
        self.data = None
        if valuelist:
            self.data = coerce_decimal(valuelist[0])

    def _value(self):
        if self.raw_data:
            return str(self.raw_data[0])
        if self.data is not None:
            return str(self.data)
        return ""


class AmountRange:
    """Require ``minimum < value <= maximum`` with a single message."""

    def __init__(self, minimum, maximum, message=None):
        self.minimum = minimum
        self.maximum = maximum
        self.message = message

    def __call__(self, form, field):
        value = field.data
        if value is None or not self.minimum < value <= self.maximum:
            message = self.message
            if message is None:
                message = field.gettext(
                    "Number must be greater than %(min)s and at most %(max)s."
                )
            raise ValidationError(
                message % dict(min=self.minimum, max=self.maximum)
            )


class InvoiceForm(Form):
    """Invoice fields shared by the create and edit screens.

    A plain WTForms form so it also validates JSON bodies and plain dicts.
    """

    customer_id = SelectField(
        "Customer",
        name="customerId",
        choices=[],
        validate_choice=False,
        validators=[InputRequired(message=CUSTOMER_REQUIRED_MESSAGE)],
    )
    amount = AmountField(
        "Amount",
        validators=[AmountRange(0, MAX_AMOUNT, message=AMOUNT_MESSAGE)],
    )
    status = RadioField(
        "Status",
        choices=[(status, status.capitalize()) for status in INVOICE_STATUSES],
        validate_choice=False,
        validators=[AnyOf(INVOICE_STATUSES, message=STATUS_MESSAGE)],
    )

    def set_customer_choices(self, customers):
        self.customer_id.choices = [("", "Select a customer")] + [
            (c.id, c.name) for c in customers
        ]


class LoginForm(FlaskForm):
    email = StringField("Email", validators=[DataRequired(), Email()])
    password = PasswordField("Password", validators=[DataRequired()])
