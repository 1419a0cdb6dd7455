"""
schemas/challan.py
------------------
Pydantic models for GST payment challans.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import Field

from backoffice.models.challan import ChallanStatus
from backoffice.schemas.common import CamelModel, Money, RecordRead, TrimmedStr


class ChallanCreate(CamelModel):
    challan_no: TrimmedStr = Field(..., examples=["CPIN-24070001"])
    period: TrimmedStr = Field(..., examples=["2024-07"])
    amount: Money = Field(..., ge=0)
    payment_date: Optional[datetime] = None
    status: ChallanStatus


class ChallanUpdate(CamelModel):
    challan_no: Optional[TrimmedStr] = None
    period: Optional[TrimmedStr] = None
    amount: Optional[Money] = Field(None, ge=0)
    payment_date: Optional[datetime] = None
    status: Optional[ChallanStatus] = None


class ChallanFilter(CamelModel):
    period: Optional[str] = None
    status: Optional[ChallanStatus] = None


class ChallanRead(RecordRead):
    challan_no: str
    period: str
    amount: Decimal
    payment_date: Optional[datetime] = None
    status: str
