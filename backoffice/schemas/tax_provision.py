"""
schemas/tax_provision.py
------------------------
Pydantic models for tax provisions.
"""

from decimal import Decimal
from typing import Optional

from pydantic import Field

from backoffice.schemas.common import CamelModel, Money, RecordRead, TrimmedStr


class TaxProvisionCreate(CamelModel):
    entity: TrimmedStr = Field(..., description="Legal entity the provision is booked for")
    period: TrimmedStr
    amount: Money
    workpapers: list[str] = Field(default_factory=list)


class TaxProvisionUpdate(CamelModel):
    entity: Optional[TrimmedStr] = None
    period: Optional[TrimmedStr] = None
    amount: Optional[Money] = None
    workpapers: Optional[list[str]] = None


class TaxProvisionFilter(CamelModel):
    entity: Optional[str] = None
    period: Optional[str] = None


class TaxProvisionRead(RecordRead):
    entity: str
    period: str
    amount: Decimal
    workpapers: list[str] = []
