"""
schemas/eway_bill.py
--------------------
Pydantic models for e-way bills.

The validity window is checked on the full record: validity_to may not
precede validity_from. Updates are re-validated against EWayBillCreate
after merging, so the rule also holds for partial updates.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field, model_validator

from backoffice.models.eway_bill import EWayBillStatus
from backoffice.schemas.common import CamelModel, RecordRead, TrimmedStr


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; treat them as UTC
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


class Consignment(CamelModel):
    vehicle_no: Optional[str] = Field(None, max_length=32)
    from_address: Optional[str] = None
    to_address: Optional[str] = None


class EWayBillCreate(CamelModel):
    bill_no: TrimmedStr = Field(..., examples=["EWB-331001234567"])
    validity_from: Optional[datetime] = None
    validity_to: Optional[datetime] = None
    consignment: Optional[Consignment] = None
    status: EWayBillStatus
    cancelled_at: Optional[datetime] = None

    @model_validator(mode="after")
    def check_validity_window(self) -> "EWayBillCreate":
        if self.validity_from and self.validity_to:
            if _as_utc(self.validity_to) < _as_utc(self.validity_from):
                raise ValueError("validityTo must not be earlier than validityFrom")
        return self


class EWayBillUpdate(CamelModel):
    bill_no: Optional[TrimmedStr] = None
    validity_from: Optional[datetime] = None
    validity_to: Optional[datetime] = None
    consignment: Optional[Consignment] = None
    status: Optional[EWayBillStatus] = None
    cancelled_at: Optional[datetime] = None


class EWayBillFilter(CamelModel):
    bill_no: Optional[str] = None
    status: Optional[EWayBillStatus] = None


class EWayBillRead(RecordRead):
    bill_no: str
    validity_from: Optional[datetime] = None
    validity_to: Optional[datetime] = None
    consignment: Optional[Consignment] = None
    status: str
    cancelled_at: Optional[datetime] = None
