"""
schemas/common.py
-----------------
Shared Pydantic building blocks.

Naming convention (per entity):
  XCreate  → inbound create body (required fields enforced)
  XUpdate  → inbound partial update body (every field optional)
  XFilter  → query-string filters accepted by the list endpoint
  XRead    → outbound response body

Python attributes are snake_case; the wire format is camelCase to match
the frontend. Inbound bodies accept either spelling.
"""

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, StringConstraints
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
        extra="forbid",
    )


class RecordRead(CamelModel):
    """System-managed fields present on every tenant-scoped record."""

    model_config = ConfigDict(from_attributes=True, extra="ignore")

    id: uuid.UUID
    tenant_id: uuid.UUID
    created_at: datetime
    updated_at: datetime


# Datetimes nested inside JSON columns are stored as ISO-8601 strings.
JsonDateTime = Annotated[datetime, PlainSerializer(lambda v: v.isoformat(), return_type=str)]

TrimmedStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)]

# Money and rates are exact decimals, serialised as strings on the wire.
Money = Annotated[Decimal, Field(max_digits=18, decimal_places=2)]
Rate = Annotated[Decimal, Field(max_digits=7, decimal_places=4)]


class FieldError(BaseModel):
    field: Optional[str] = None
    message: str
    type: str


class ErrorResponse(BaseModel):
    message: str
    errors: list[FieldError] = []


class DeleteResponse(BaseModel):
    message: str = "Deleted"
    id: uuid.UUID


ERROR_RESPONSES = {
    404: {"model": ErrorResponse, "description": "Record not found in the caller's tenant"},
    409: {"model": ErrorResponse, "description": "Unique key already used in this tenant"},
    422: {"model": ErrorResponse, "description": "Payload failed validation"},
}
