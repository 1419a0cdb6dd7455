"""
models/control.py
-----------------
Internal control register entry. Control names are unique per tenant.
"""

from enum import Enum as PyEnum
from typing import Any, Optional

from sqlalchemy import JSON, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from backoffice.db.base import Base, TenantScopedMixin


class ControlType(str, PyEnum):
    process = "Process"
    it = "IT"
    financial = "Financial"


class Control(Base, TenantScopedMixin):
    __tablename__ = "controls"
    __table_args__ = (UniqueConstraint("tenant_id", "name"),)

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[str] = mapped_column(String(20), nullable=False)
    testing_schedule: Mapped[Optional[dict[str, Any]]] = mapped_column(JSON)
    status: Mapped[Optional[str]] = mapped_column(String(50))

    def __repr__(self) -> str:
        return f"<Control id={self.id} name={self.name}>"
