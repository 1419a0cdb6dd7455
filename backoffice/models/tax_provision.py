"""
models/tax_provision.py
-----------------------
Tax provision booked for a legal entity in a period, with links to the
supporting workpapers.
"""

from decimal import Decimal

from sqlalchemy import JSON, Numeric, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from backoffice.db.base import Base, TenantScopedMixin


class TaxProvision(Base, TenantScopedMixin):
    __tablename__ = "tax_provisions"
    __table_args__ = (UniqueConstraint("tenant_id", "period", "entity"),)

    entity: Mapped[str] = mapped_column(String(255), nullable=False)
    period: Mapped[str] = mapped_column(String(32), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False)
    workpapers: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    def __repr__(self) -> str:
        return f"<TaxProvision id={self.id} entity={self.entity} period={self.period}>"
