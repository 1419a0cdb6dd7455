"""
schemas/attachment.py
---------------------
Pydantic models for file attachments. Text fields are trimmed.
"""

import uuid
from datetime import datetime
from typing import Annotated, Optional

from pydantic import Field, StringConstraints

from backoffice.db.base import utcnow
from backoffice.schemas.common import CamelModel, RecordRead, TrimmedStr

UrlStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=2048)]
NoteStr = Annotated[str, StringConstraints(strip_whitespace=True)]


class AttachmentCreate(CamelModel):
    entity: TrimmedStr = Field(..., examples=["JournalEntry"])
    entity_id: uuid.UUID
    file_name: TrimmedStr
    file_url: UrlStr
    file_size: int = Field(..., ge=0)
    mime_type: TrimmedStr = Field(..., examples=["application/pdf"])
    uploaded_by: uuid.UUID
    uploaded_at: datetime = Field(default_factory=utcnow)
    description: Optional[NoteStr] = None


class AttachmentUpdate(CamelModel):
    entity: Optional[TrimmedStr] = None
    entity_id: Optional[uuid.UUID] = None
    file_name: Optional[TrimmedStr] = None
    file_url: Optional[UrlStr] = None
    file_size: Optional[int] = Field(None, ge=0)
    mime_type: Optional[TrimmedStr] = None
    uploaded_by: Optional[uuid.UUID] = None
    uploaded_at: Optional[datetime] = None
    description: Optional[NoteStr] = None


class AttachmentFilter(CamelModel):
    entity: Optional[str] = None
    entity_id: Optional[uuid.UUID] = None


class AttachmentRead(RecordRead):
    entity: str
    entity_id: uuid.UUID
    file_name: str
    file_url: str
    file_size: int
    mime_type: str
    uploaded_by: uuid.UUID
    uploaded_at: datetime
    description: Optional[str] = None
