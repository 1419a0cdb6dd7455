"""
models/tenant.py
----------------
Tenant (company) ORM model.

Each tenant is an isolated organisational unit. All data belonging to a tenant
is scoped by tenant_id at the query level — never trust application-level
filtering alone; always include tenant_id in WHERE clauses.
"""

import uuid
from datetime import date, timedelta

from sqlalchemy import Date, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from backoffice.db.base import Base, TimestampMixin


class Tenant(Base, TimestampMixin):
    __tablename__ = "tenants"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    domain: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    financial_year_start: Mapped[date] = mapped_column(Date, nullable=False)
    currency: Mapped[str] = mapped_column(String(3), nullable=False, default="INR")
    decimal_precision: Mapped[int] = mapped_column(Integer, nullable=False, default=2)

    @property
    def current_financial_year(self) -> tuple[date, date]:
        return financial_year_window(self.financial_year_start, date.today())

    def __repr__(self) -> str:
        return f"<Tenant id={self.id} domain={self.domain}>"


def financial_year_window(start: date, today: date) -> tuple[date, date]:
    """
    Return (first_day, last_day) of the financial year containing ``today``
    for a tenant whose year starts on ``start``'s month/day.
    """
    first = _replace_year(start, today.year)
    if today < first:
        first = _replace_year(start, today.year - 1)
    last = _replace_year(start, first.year + 1) - timedelta(days=1)
    return first, last


def _replace_year(day: date, year: int) -> date:
    try:
        return day.replace(year=year)
    except ValueError:  # 29 Feb in a non-leap year
        return day.replace(year=year, day=28)
