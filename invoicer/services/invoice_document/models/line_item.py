from decimal import Decimal
from pydantic import BaseModel, Field, ConfigDict


class DocumentLineItem(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)
    code: str = Field(min_length=1)
    description: str
    quantity: str
    rate: Decimal
    amount: Decimal


class SummaryLine(BaseModel):
    """One footer row of the totals table, shared by documents and emails."""
    model_config = ConfigDict(arbitrary_types_allowed=True)
    label: str
    amount: Decimal
    formatted: str
    emphasis: bool = False
