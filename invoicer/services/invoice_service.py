import logging
import random
from datetime import datetime

from marshmallow import ValidationError

from invoicer.config import Config
from invoicer.models.financial import FinancialSummary, InvoiceFinancialInput
from invoicer.schemas.invoice_schema import FinancialSummarySchema, InvoiceCalculationSchema
from invoicer.services.calculation_service import compute_summary, resolve_final_total, round_to
from invoicer.services.exchange_rate_service import ExchangeRateService
from invoicer.utils.expression import numeric_value

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    def __init__(self, message):
        super().__init__(message)
        self.message = message


class InvoiceValidationError(ServiceError):
    def __init__(self, message, errors=None):
        super().__init__(message)
        self.errors = errors or {}


def generate_invoice_number(pattern='INV-{YYYY}-{MM}-{###}', now=None, rng=None):
    """
    Fill an invoice number pattern.

    Supported tokens: {YYYY}, {YY}, {MM}, {DD} and {###} (random 100-999).
    """
    now = now or datetime.now()
    rng = rng or random
    year = f"{now.year:04d}"
    return (
        pattern
        .replace('{YYYY}', year)
        .replace('{YY}', year[-2:])
        .replace('{MM}', f"{now.month:02d}")
        .replace('{DD}', f"{now.day:02d}")
        .replace('{###}', str(rng.randint(100, 999)))
    )


def payment_status(summary: FinancialSummary, paid_amount) -> str:
    """Payment state of an invoice from its amount due and what was paid."""
    paid = numeric_value(paid_amount)
    if summary.amount_due <= 0 and (summary.total_with_vat > 0 or paid > 0):
        return "PAID"
    if paid > 0:
        return "PARTIALLY_PAID"
    return "UNPAID"


class InvoiceService:
    def __init__(self, exchange_rates: ExchangeRateService = None, config=Config):
        self.config = config
        self.exchange_rates = exchange_rates or ExchangeRateService(config=config)
        self.schema = InvoiceCalculationSchema(max_exchange_rate=config.MAX_EXCHANGE_RATE)
        self.summary_schema = FinancialSummarySchema()

    def _load(self, payload):
        if not isinstance(payload, dict):
            raise InvoiceValidationError("Invoice payload must be an object", {'_schema': ['Invalid input type.']})
        try:
            return self.schema.load(payload)
        except ValidationError as e:
            logger.warning(f"Invoice payload rejected: {e.messages}")
            raise InvoiceValidationError("Invoice data is invalid.", e.messages)

    def _financial_input(self, data) -> InvoiceFinancialInput:
        """Build calculator input with the exchange rate already resolved."""
        fx = self.exchange_rates.resolve(
            data.get('from_currency'),
            data.get('to_currency') or data.get('invoice_currency'),
            manual_rate=data.get('exchange_rate'),
        )
        return InvoiceFinancialInput.model_validate({**data, 'exchange_rate': fx})

    def calculate(self, payload) -> FinancialSummary:
        """Validate an invoice payload and return its financial summary."""
        data = self._load(payload)
        try:
            return compute_summary(self._financial_input(data))
        except Exception as e:
            logger.error(f"Error calculating invoice summary: {e}", exc_info=True)
            raise ServiceError("Could not calculate invoice totals. Please try again later.")

    def prepare_invoice(self, payload) -> dict:
        """
        Validate an invoice payload and fill in its derived fields.

        Returns the payload with fx resolved, finalTotal populated, an
        invoiceNumber when none was given, paymentStatus and the serialized
        financialSummary. A locked total is kept as entered.
        """
        data = self._load(payload)
        try:
            financial_input = self._financial_input(data)
            summary = compute_summary(financial_input)
            if financial_input.total_is_locked:
                final_total = numeric_value(financial_input.locked_total_value)
            else:
                final_total = resolve_final_total(financial_input)
            places = self.config.MONEY_DECIMAL_PLACES

            record = dict(payload)
            record['fx'] = float(financial_input.exchange_rate)
            record['finalTotal'] = float(round_to(final_total, places))
            record['invoiceNumber'] = data.get('invoice_number') or generate_invoice_number(
                self.config.INVOICE_NUMBER_PATTERN
            )
            record['paymentStatus'] = payment_status(summary, financial_input.paid_amount)
            record['financialSummary'] = self.summary_schema.dump(summary)
        except Exception as e:
            logger.error(f"Error preparing invoice: {e}", exc_info=True)
            raise ServiceError("Could not prepare invoice. Please try again later.")

        logger.info(
            f"Prepared invoice {record['invoiceNumber']}: "
            f"finalTotal={record['finalTotal']}, amountDue={record['financialSummary']['amountDue']}"
        )
        return record
