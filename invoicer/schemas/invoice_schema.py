from decimal import Decimal, ROUND_HALF_UP
from marshmallow import EXCLUDE, Schema, ValidationError, fields, validates

from invoicer.models.financial import InvoiceFinancialInput
from invoicer.utils.validation import (
    DEFAULT_MAX_EXCHANGE_RATE,
    validate_exchange_rate,
    validate_non_negative,
    validate_percentage,
)


def _raise_on_errors(result):
    is_valid, errors = result
    if not is_valid:
        raise ValidationError(errors)


def non_negative(field_name):
    return lambda value: _raise_on_errors(validate_non_negative(value, field_name))


def percentage(field_name):
    return lambda value: _raise_on_errors(validate_percentage(value, field_name))


class Money(fields.Decimal):
    """Decimal rounded to cents and emitted as a JSON number."""

    def __init__(self, **kwargs):
        super().__init__(places=2, rounding=ROUND_HALF_UP, **kwargs)

    def _serialize(self, value, attr, obj, **kwargs):
        number = super()._serialize(value, attr, obj, **kwargs)
        return float(number) if number is not None else None


class ResourceLineSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    type = fields.String(load_default="")
    hours = fields.Decimal(required=True, validate=non_negative('Hours'))
    rate = fields.Decimal(required=True, validate=non_negative('Rate'))


class InvoiceCalculationSchema(Schema):
    """Validates the financial fields of an invoice payload."""

    class Meta:
        unknown = EXCLUDE

    quantity = fields.Decimal(data_key='qty', load_default=Decimal('0'), validate=non_negative('Quantity'))
    rate = fields.Decimal(load_default=Decimal('0'), validate=non_negative('Rate'))
    paid_amount = fields.Decimal(data_key='paid', load_default=Decimal('0'), validate=non_negative('Paid amount'))
    discount_percent = fields.Decimal(data_key='discount', load_default=Decimal('0'), validate=percentage('Discount'))
    vat_percent = fields.Decimal(data_key='vat', load_default=Decimal('0'), validate=percentage('VAT'))
    exchange_rate = fields.Decimal(data_key='fx', load_default=None, allow_none=True)
    show_vat = fields.Boolean(data_key='showVat', load_default=True)
    total_is_locked = fields.Boolean(data_key='lockTotal', load_default=False)
    locked_total_value = fields.Decimal(data_key='finalTotal', load_default=Decimal('0'), validate=non_negative('Final total'))
    total_includes_vat = fields.Boolean(data_key='totalInclVat', load_default=True)
    resource_lines = fields.List(fields.Nested(ResourceLineSchema), data_key='resources', load_default=list)

    from_currency = fields.String(data_key='fromCurrency', load_default=None, allow_none=True)
    to_currency = fields.String(data_key='toCurrency', load_default=None, allow_none=True)
    invoice_currency = fields.String(data_key='invoiceCurrency', load_default=None, allow_none=True)
    invoice_number = fields.String(data_key='invoiceNumber', load_default=None, allow_none=True)

    def __init__(self, *args, max_exchange_rate=DEFAULT_MAX_EXCHANGE_RATE, **kwargs):
        super().__init__(*args, **kwargs)
        self.max_exchange_rate = max_exchange_rate

    @validates('exchange_rate')
    def validate_fx(self, value, **kwargs):
        if value is None:
            return
        _raise_on_errors(validate_exchange_rate(value, self.max_exchange_rate))

    def load_financial_input(self, payload) -> InvoiceFinancialInput:
        """Validate a payload and build the calculator input from it."""
        data = self.load(payload)
        return InvoiceFinancialInput.model_validate(data)


class FinancialSummarySchema(Schema):
    subtotal = Money()
    resources_total = Money(data_key='resourcesTotal')
    discount_amount = Money(data_key='discountAmount')
    vat_amount = Money(data_key='vatAmount')
    total = Money()
    total_with_vat = Money(data_key='totalWithVat')
    amount_due = Money(data_key='amountDue')
