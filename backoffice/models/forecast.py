"""
models/forecast.py
------------------
Driver-based financial forecast. One row per (tenant, period, version);
a revised forecast for the same period is stored as a new version.
"""

from typing import Any, Optional

from sqlalchemy import JSON, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from backoffice.db.base import Base, TenantScopedMixin


class Forecast(Base, TenantScopedMixin):
    __tablename__ = "forecasts"
    __table_args__ = (UniqueConstraint("tenant_id", "period", "version"),)

    driver_inputs: Mapped[Optional[dict[str, Any]]] = mapped_column(JSON)
    actuals_link: Mapped[Optional[Any]] = mapped_column(JSON)
    period: Mapped[str] = mapped_column(String(32), nullable=False)
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    def __repr__(self) -> str:
        return f"<Forecast id={self.id} period={self.period} version={self.version}>"
