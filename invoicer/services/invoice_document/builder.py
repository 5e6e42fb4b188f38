"""
Builds the data the document renderer and the email composer consume.

Both read their totals from one FinancialSummary so the PDF/HTML footer and
the email summary block always show the same figures.
"""
import logging
from collections.abc import Mapping
from datetime import date
from decimal import Decimal
from typing import Any, List, Optional

from invoicer.config import Config
from invoicer.models.financial import FinancialSummary
from invoicer.services.calculation_service import (
    calculate_subtotal,
    compute_summary,
    to_financial_input,
)
from invoicer.utils.date_utils import calculate_eta_date, parse_date
from invoicer.utils.expression import numeric_value
from invoicer.utils.formatting import format_currency

from .models import DocumentLineItem, InvoiceDocument, OutputFormat, SummaryLine

logger = logging.getLogger(__name__)

DEFAULT_PROJECT_CODE = "PROJ-001"
DEFAULT_DESCRIPTION = "Project work"


def _field(record: Any, key: str, default=None):
    if isinstance(record, Mapping):
        value = record.get(key, default)
    else:
        value = getattr(record, key, default)
    return default if value is None else value


def _plain_number(value: Decimal) -> str:
    return format(numeric_value(value).normalize(), 'f')


def build_line_items(record: Any) -> List[DocumentLineItem]:
    """Main quantity x rate line followed by one line per resource."""
    data = to_financial_input(record)
    items = [
        DocumentLineItem(
            code=_field(record, 'project') or DEFAULT_PROJECT_CODE,
            description=_field(record, 'longDesc') or DEFAULT_DESCRIPTION,
            quantity=_plain_number(data.quantity),
            rate=numeric_value(data.rate),
            amount=calculate_subtotal(data.quantity, data.rate),
        )
    ]
    for resource in data.resources:
        items.append(
            DocumentLineItem(
                code=f"RES-{resource.type[:6].upper()}",
                description=resource.type,
                quantity=f"{_plain_number(resource.hours)} hrs",
                rate=numeric_value(resource.rate),
                amount=calculate_subtotal(resource.hours, resource.rate),
            )
        )
    return items


def build_summary_lines(
    record: Any,
    summary: Optional[FinancialSummary] = None,
    currency: Optional[str] = None,
) -> List[SummaryLine]:
    """
    Footer rows of the totals table.

    Discount appears only when a discount is set, VAT only when it is shown
    and non-zero, Amount Paid / Amount Due only when something was paid.
    """
    data = to_financial_input(record)
    summary = summary or compute_summary(data)

    def line(label, amount, emphasis=False, negative=False):
        formatted = format_currency(amount, currency)
        return SummaryLine(
            label=label,
            amount=-amount if negative else amount,
            formatted=f"-{formatted}" if negative else formatted,
            emphasis=emphasis,
        )

    discount = numeric_value(data.discount_percent)
    vat = numeric_value(data.vat_percent)
    paid = numeric_value(data.paid_amount)

    lines = [line("Subtotal", summary.subtotal + summary.resources_total, emphasis=True)]
    if discount > 0:
        lines.append(line(f"Discount ({_plain_number(discount)}%)", summary.discount_amount, negative=True))
    if data.show_vat and vat > 0:
        lines.append(line(f"VAT ({_plain_number(vat)}%)", summary.vat_amount))

    total = summary.total_with_vat if data.total_includes_vat else summary.total
    lines.append(line("Total", total, emphasis=True))

    if paid > 0:
        lines.append(line("Amount Paid", paid))
        lines.append(line("Amount Due", summary.amount_due, emphasis=True))
    return lines


def build_invoice_document(
    record: Any,
    summary: Optional[FinancialSummary] = None,
    output_format: OutputFormat = OutputFormat.PDF,
    currency: Optional[str] = None,
    config=Config,
) -> InvoiceDocument:
    """Assemble everything the renderer needs for one invoice."""
    summary = summary or compute_summary(record)
    currency = currency or _field(record, 'invoiceCurrency')

    start = _field(record, 'startDate')
    issue_date = parse_date(start) if start else date.today()
    eta_days = int(numeric_value(_field(record, 'etaDays', config.DEFAULT_ETA_DAYS)))

    document = InvoiceDocument(
        number=_field(record, 'invoiceNumber'),
        doc_type=_field(record, 'docType', 'Invoice'),
        project=_field(record, 'project', ''),
        description=_field(record, 'longDesc', ''),
        currency=currency,
        issue_date=issue_date,
        due_date=calculate_eta_date(issue_date, eta_days),
        client_name=_field(_field(record, 'clientData', {}), 'name'),
        company_name=_field(_field(record, 'companyData', {}), 'name'),
        items=build_line_items(record),
        summary_lines=build_summary_lines(record, summary, currency),
        summary=summary,
        output_format=output_format,
    )
    logger.debug(f"Built {output_format.value} document {document.filename} with {len(document.items)} items")
    return document


def compose_email_summary(
    record: Any,
    summary: Optional[FinancialSummary] = None,
    currency: Optional[str] = None,
) -> str:
    """Plain-text financial summary block for invoice notification emails."""
    data = to_financial_input(record)
    rows = [
        "Financial Summary",
        f"Quantity: {_plain_number(data.quantity)}",
        f"Rate: {format_currency(numeric_value(data.rate), currency)}",
    ]
    rows.extend(f"{line.label}: {line.formatted}" for line in build_summary_lines(data, summary, currency))
    return "\n".join(rows)
