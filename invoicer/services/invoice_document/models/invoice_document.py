"""
Invoice document model
"""

from datetime import date as Date
from typing import List, Optional
from pydantic import BaseModel, Field, ConfigDict

from invoicer.models.financial import FinancialSummary
from .line_item import DocumentLineItem, SummaryLine
from .output_format import OutputFormat


class InvoiceDocument(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)
    number: Optional[str] = None
    doc_type: str = "Invoice"
    project: str = ""
    description: str = ""
    currency: Optional[str] = None
    issue_date: Date = Field(default_factory=Date.today)
    due_date: Optional[Date] = None
    client_name: Optional[str] = None
    company_name: Optional[str] = None

    items: List[DocumentLineItem] = Field(min_length=1)
    summary_lines: List[SummaryLine] = Field(default_factory=list)
    summary: FinancialSummary
    output_format: OutputFormat = OutputFormat.PDF

    @property
    def total_line(self) -> Optional[SummaryLine]:
        for line in self.summary_lines:
            if line.label == "Total":
                return line
        return None

    @property
    def filename(self) -> str:
        return f"invoice-{self.number or 'generated'}.{self.output_format.value}"
