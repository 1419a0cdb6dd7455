"""
models/challan.py
-----------------
GST payment challan. challan_no is unique within a tenant.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum as PyEnum
from typing import Optional

from sqlalchemy import DateTime, Numeric, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from backoffice.db.base import Base, TenantScopedMixin


class ChallanStatus(str, PyEnum):
    created = "Created"
    paid = "Paid"
    failed = "Failed"


class Challan(Base, TenantScopedMixin):
    __tablename__ = "challans"
    __table_args__ = (UniqueConstraint("tenant_id", "challan_no"),)

    challan_no: Mapped[str] = mapped_column(String(64), nullable=False)
    period: Mapped[str] = mapped_column(String(32), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False)
    payment_date: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))
    status: Mapped[str] = mapped_column(String(20), nullable=False)

    def __repr__(self) -> str:
        return f"<Challan id={self.id} challan_no={self.challan_no} status={self.status}>"
