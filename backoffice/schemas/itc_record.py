"""
schemas/itc_record.py
---------------------
Pydantic models for ITC matching records.
"""

import uuid
from typing import Optional

from pydantic import Field

from backoffice.models.itc_record import ItcMatchStatus
from backoffice.schemas.common import CamelModel, RecordRead


class ItcRecordCreate(CamelModel):
    source_invoice_id: uuid.UUID
    matched_invoice_id: Optional[uuid.UUID] = None
    status: ItcMatchStatus
    mismatch_reason: Optional[str] = Field(None, max_length=2000)


class ItcRecordUpdate(CamelModel):
    source_invoice_id: Optional[uuid.UUID] = None
    matched_invoice_id: Optional[uuid.UUID] = None
    status: Optional[ItcMatchStatus] = None
    mismatch_reason: Optional[str] = Field(None, max_length=2000)


class ItcRecordFilter(CamelModel):
    status: Optional[ItcMatchStatus] = None
    source_invoice_id: Optional[uuid.UUID] = None


class ItcRecordRead(RecordRead):
    source_invoice_id: uuid.UUID
    matched_invoice_id: Optional[uuid.UUID] = None
    status: str
    mismatch_reason: Optional[str] = None
