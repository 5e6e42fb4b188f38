from .financial import FinancialSummary, InvoiceFinancialInput, ResourceLine

__all__ = ["FinancialSummary", "InvoiceFinancialInput", "ResourceLine"]
