"""
models/attachment.py
--------------------
File attachment linked to any other record (journal entry, invoice, ...)
by entity name + entity_id. Only metadata lives here; the file itself is
stored wherever file_url points.
"""

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import BigInteger, DateTime, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from backoffice.db.base import Base, TenantScopedMixin, utcnow


class Attachment(Base, TenantScopedMixin):
    __tablename__ = "attachments"
    __table_args__ = (
        Index("ix_attachments_tenant_id_entity_entity_id", "tenant_id", "entity", "entity_id"),
    )

    entity: Mapped[str] = mapped_column(String(100), nullable=False)
    entity_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    file_name: Mapped[str] = mapped_column(String(255), nullable=False)
    file_url: Mapped[str] = mapped_column(String(2048), nullable=False)
    file_size: Mapped[int] = mapped_column(BigInteger, nullable=False)
    mime_type: Mapped[str] = mapped_column(String(255), nullable=False)
    uploaded_by: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    uploaded_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, index=True
    )
    description: Mapped[Optional[str]] = mapped_column(Text)

    def __repr__(self) -> str:
        return f"<Attachment id={self.id} entity={self.entity} file={self.file_name}>"
