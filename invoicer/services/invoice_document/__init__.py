from .builder import (
    build_invoice_document,
    build_line_items,
    build_summary_lines,
    compose_email_summary,
)
from .models import DocumentLineItem, InvoiceDocument, OutputFormat, SummaryLine

__all__ = [
    "build_invoice_document",
    "build_line_items",
    "build_summary_lines",
    "compose_email_summary",
    "DocumentLineItem",
    "InvoiceDocument",
    "OutputFormat",
    "SummaryLine",
]
