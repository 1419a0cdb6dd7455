"""
models/itc_record.py
--------------------
Input tax credit matching record: links a purchase invoice to the
counter-party invoice it was reconciled against, or records why it
could not be matched.
"""

import uuid
from enum import Enum as PyEnum
from typing import Optional

from sqlalchemy import Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from backoffice.db.base import Base, TenantScopedMixin


class ItcMatchStatus(str, PyEnum):
    matched = "Matched"
    unmatched = "Unmatched"


class ItcRecord(Base, TenantScopedMixin):
    __tablename__ = "itc_records"
    __table_args__ = (Index("ix_itc_records_tenant_id_status", "tenant_id", "status"),)

    source_invoice_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    matched_invoice_id: Mapped[Optional[uuid.UUID]] = mapped_column(Uuid)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    mismatch_reason: Mapped[Optional[str]] = mapped_column(Text)

    def __repr__(self) -> str:
        return f"<ItcRecord id={self.id} status={self.status}>"
