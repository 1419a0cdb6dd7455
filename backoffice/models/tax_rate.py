"""
models/tax_rate.py
------------------
GST tax rate configured by a tenant.
"""

from decimal import Decimal
from enum import Enum as PyEnum
from typing import Optional

from sqlalchemy import Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from backoffice.db.base import Base, TenantScopedMixin


class TaxRateType(str, PyEnum):
    standard = "Standard"
    reduced = "Reduced"
    exempt = "Exempt"
    nil = "Nil"


class TaxRate(Base, TenantScopedMixin):
    __tablename__ = "tax_rates"

    type: Mapped[str] = mapped_column(String(20), nullable=False)
    rate_percent: Mapped[Decimal] = mapped_column(Numeric(7, 4), nullable=False)
    surcharge: Mapped[Optional[Decimal]] = mapped_column(Numeric(7, 4))
    cess: Mapped[Optional[Decimal]] = mapped_column(Numeric(7, 4))

    def __repr__(self) -> str:
        return f"<TaxRate id={self.id} type={self.type} rate={self.rate_percent}>"
