"""
models/eway_bill.py
-------------------
E-way bill issued for a goods consignment.

bill_no is unique per tenant only; two tenants may legitimately hold the
same number. The consignment (vehicle, from/to address) is stored as a
JSON document alongside the bill.
"""

from datetime import datetime
from enum import Enum as PyEnum
from typing import Any, Optional

from sqlalchemy import JSON, DateTime, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from backoffice.db.base import Base, TenantScopedMixin


class EWayBillStatus(str, PyEnum):
    active = "Active"
    cancelled = "Cancelled"


class EWayBill(Base, TenantScopedMixin):
    __tablename__ = "eway_bills"
    __table_args__ = (UniqueConstraint("tenant_id", "bill_no"),)

    bill_no: Mapped[str] = mapped_column(String(64), nullable=False)
    validity_from: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))
    validity_to: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))
    consignment: Mapped[Optional[dict[str, Any]]] = mapped_column(JSON)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    cancelled_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))

    def __repr__(self) -> str:
        return f"<EWayBill id={self.id} bill_no={self.bill_no} status={self.status}>"
