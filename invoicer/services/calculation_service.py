"""
Financial summary calculation for invoices.

One pure function, compute_summary(), turns the raw numeric fields of an
invoice into the figures shown on the invoice form, the rendered document
and the notification email. The exchange rate is a plain input: callers
resolve it (see exchange_rate_service) before calling in.
"""

from collections.abc import Mapping
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Sequence, Union

from invoicer.models.financial import FinancialSummary, InvoiceFinancialInput
from invoicer.utils.expression import ZERO, finite_result, lenient_arithmetic, numeric_value

HUNDRED = Decimal("100")
ONE = Decimal("1")

FinancialInputLike = Union[InvoiceFinancialInput, Mapping]


def to_financial_input(data: Any) -> InvoiceFinancialInput:
    """Build an InvoiceFinancialInput from a record dict, model or ORM row."""
    if isinstance(data, InvoiceFinancialInput):
        return data
    if isinstance(data, Mapping):
        return InvoiceFinancialInput.model_validate(dict(data))
    return InvoiceFinancialInput.model_validate(data, from_attributes=True)


@finite_result
def calculate_subtotal(quantity, rate) -> Decimal:
    return numeric_value(quantity) * numeric_value(rate)


@finite_result
def calculate_resources_total(resources) -> Decimal:
    """Sum hours x rate over resource lines; 0 when there are none."""
    if not resources:
        return ZERO
    total = ZERO
    for resource in resources:
        if isinstance(resource, Mapping):
            hours, rate = resource.get("hours"), resource.get("rate")
        else:
            hours, rate = getattr(resource, "hours", None), getattr(resource, "rate", None)
        total += numeric_value(hours) * numeric_value(rate)
    return total


@finite_result
def calculate_discount_amount(amount, discount_percent) -> Decimal:
    return numeric_value(amount) * (numeric_value(discount_percent) / HUNDRED)


@finite_result
def calculate_vat_amount(amount, vat_percent) -> Decimal:
    return numeric_value(amount) * (numeric_value(vat_percent) / HUNDRED)


def effective_exchange_rate(raw_rate) -> Decimal:
    # blank, missing or malformed rates evaluate to 0 and mean "no conversion"
    return numeric_value(raw_rate) or ONE


def resolve_final_total(data: FinancialInputLike) -> Decimal:
    """
    Return the authoritative final total in the target currency.

    A locked invoice uses its locked total; otherwise the total with or
    without VAT is chosen by total_includes_vat.
    """
    data = to_financial_input(data)
    fx = effective_exchange_rate(data.exchange_rate)
    if data.total_is_locked:
        with lenient_arithmetic():
            return numeric_value(numeric_value(data.locked_total_value) * fx)
    summary = compute_summary(data)
    return summary.total_with_vat if data.total_includes_vat else summary.total


def compute_summary(data: FinancialInputLike) -> FinancialSummary:
    """
    Compute the financial summary for one invoice.

    Never raises on field values: amounts too large to represent degrade to
    0 like any other unusable input.

    Args:
        data: InvoiceFinancialInput, or an invoice record / form state that
            validates into one

    Returns:
        FinancialSummary with source-currency subtotal, resources_total,
        discount_amount and vat_amount, and converted total, total_with_vat
        and amount_due
    """
    data = to_financial_input(data)
    fx = effective_exchange_rate(data.exchange_rate)
    paid = numeric_value(data.paid_amount)

    with lenient_arithmetic():
        subtotal = calculate_subtotal(data.quantity, data.rate)
        resources_total = calculate_resources_total(data.resources)
        pre_discount_total = numeric_value(subtotal + resources_total)

        discount_amount = calculate_discount_amount(pre_discount_total, data.discount_percent)
        after_discount = numeric_value(pre_discount_total - discount_amount)

        vat_amount = calculate_vat_amount(after_discount, data.vat_percent) if data.show_vat else ZERO

        total_excl_vat = after_discount
        total_incl_vat = numeric_value(after_discount + vat_amount)

        if data.total_is_locked:
            base_final_total = numeric_value(data.locked_total_value)
        elif data.total_includes_vat:
            base_final_total = total_incl_vat
        else:
            base_final_total = total_excl_vat

        converted_final_total = numeric_value(base_final_total * fx)
        amount_due = max(ZERO, numeric_value(converted_final_total - paid))

        total = numeric_value(total_excl_vat * fx)
        total_with_vat = numeric_value(total_incl_vat * fx)

    return FinancialSummary(
        subtotal=subtotal,
        resources_total=resources_total,
        discount_amount=discount_amount,
        vat_amount=vat_amount,
        total=total,
        total_with_vat=total_with_vat,
        amount_due=amount_due,
    )


@finite_result
def calculate_percentage(part, whole) -> Decimal:
    whole = numeric_value(whole)
    if whole == 0:
        return ZERO
    return numeric_value(part) / whole * HUNDRED


@finite_result
def round_to(value, decimals: int = 2) -> Decimal:
    """Round half-up to the given number of decimal places."""
    exponent = Decimal(1).scaleb(-decimals)
    return numeric_value(value).quantize(exponent, rounding=ROUND_HALF_UP)


@finite_result
def calculate_tax_inclusive(amount, tax_rate) -> Decimal:
    return numeric_value(amount) * (ONE + numeric_value(tax_rate) / HUNDRED)


@finite_result
def calculate_tax_exclusive(amount, tax_rate) -> Decimal:
    divisor = ONE + numeric_value(tax_rate) / HUNDRED
    if divisor == 0:
        return ZERO
    return numeric_value(amount) / divisor


@finite_result
def calculate_compound_interest(principal, rate, periods: int) -> Decimal:
    """Principal grown by rate percent per period, e.g. for late-payment penalties."""
    return numeric_value(principal) * (ONE + numeric_value(rate) / HUNDRED) ** int(periods)


@finite_result
def calculate_weighted_average(values: Sequence, weights: Sequence) -> Decimal:
    if len(values) != len(weights) or not values:
        return ZERO
    weights = [numeric_value(w) for w in weights]
    total_weight = sum(weights, ZERO)
    if total_weight == 0:
        return ZERO
    weighted_sum = sum((numeric_value(v) * w for v, w in zip(values, weights)), ZERO)
    return weighted_sum / total_weight
