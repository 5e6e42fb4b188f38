"""
Data models for the invoice document
"""

from .output_format import OutputFormat
from .line_item import DocumentLineItem, SummaryLine
from .invoice_document import InvoiceDocument

__all__ = ["OutputFormat", "DocumentLineItem", "SummaryLine", "InvoiceDocument"]
