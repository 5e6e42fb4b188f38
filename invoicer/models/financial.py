"""
Financial input and summary models
"""

from decimal import Decimal
from typing import Any, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class ResourceLine(BaseModel):
    """Billable hours x rate item added alongside the primary line."""
    model_config = ConfigDict(arbitrary_types_allowed=True, from_attributes=True)
    type: str = ""
    hours: Any = 0
    rate: Any = 0

    @field_validator("type", mode="before")
    @classmethod
    def _blank_type(cls, value):
        return "" if value is None else str(value)


class InvoiceFinancialInput(BaseModel):
    """
    Raw numeric fields of an invoice record or in-flight form state.

    Amount fields stay raw (numbers, blanks or arithmetic shorthand); they
    are normalized by numeric_value() at calculation time. Fields accept both
    the attribute names and the record keys (qty, discount, vat, paid, fx,
    resources, showVat, lockTotal, finalTotal, totalInclVat).
    """
    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        populate_by_name=True,
        from_attributes=True,
        extra="ignore",
    )

    quantity: Any = Field(default=0, alias="qty")
    rate: Any = 0
    discount_percent: Any = Field(default=0, alias="discount")
    vat_percent: Any = Field(default=0, alias="vat")
    show_vat: bool = Field(default=True, alias="showVat")
    paid_amount: Any = Field(default=0, alias="paid")
    exchange_rate: Any = Field(default=1, alias="fx")
    resource_lines: Optional[List[ResourceLine]] = Field(default=None, alias="resources")
    total_is_locked: bool = Field(default=False, alias="lockTotal")
    locked_total_value: Any = Field(default=0, alias="finalTotal")
    total_includes_vat: bool = Field(default=True, alias="totalInclVat")

    @field_validator("show_vat", "total_includes_vat", mode="before")
    @classmethod
    def _default_true(cls, value):
        return True if value is None else value

    @field_validator("total_is_locked", mode="before")
    @classmethod
    def _default_false(cls, value):
        return False if value is None else value

    @property
    def resources(self) -> List[ResourceLine]:
        return list(self.resource_lines or [])


class FinancialSummary(BaseModel):
    """
    Derived figures for one invoice.

    subtotal, resources_total, discount_amount and vat_amount are in source
    currency units; total, total_with_vat and amount_due are multiplied by
    the exchange rate.
    """
    model_config = ConfigDict(frozen=True)

    subtotal: Decimal
    resources_total: Decimal
    discount_amount: Decimal
    vat_amount: Decimal
    total: Decimal
    total_with_vat: Decimal
    amount_due: Decimal = Field(ge=0)
