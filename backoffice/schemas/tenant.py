"""
schemas/tenant.py
-----------------
Pydantic request/response models for Tenant.

Naming convention:
  TenantCreate  → inbound request body
  TenantRead    → outbound response body (never exposes internal fields)
"""

import uuid
from datetime import date, datetime

from pydantic import Field, field_validator

from backoffice.schemas.common import CamelModel


class TenantCreate(CamelModel):
    name: str = Field(
        ...,
        min_length=2,
        max_length=255,
        examples=["Acme Traders Pvt Ltd"],
        description="Company / tenant display name",
    )
    domain: str = Field(
        ...,
        min_length=3,
        max_length=255,
        examples=["acme.example.in"],
        description="Unique tenant domain",
    )
    financial_year_start: date = Field(..., examples=["2024-04-01"])
    currency: str = Field("INR", min_length=3, max_length=3)
    decimal_precision: int = Field(2, ge=0, le=6)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return v.strip()

    @field_validator("domain")
    @classmethod
    def normalise_domain(cls, v: str) -> str:
        return v.strip().lower()

    @field_validator("currency")
    @classmethod
    def upper_currency(cls, v: str) -> str:
        return v.strip().upper()


class FinancialYear(CamelModel):
    start: date
    end: date


class TenantRead(CamelModel):
    id: uuid.UUID
    name: str
    domain: str
    financial_year_start: date
    currency: str
    decimal_precision: int
    created_at: datetime

    model_config = {"from_attributes": True, "extra": "ignore"}


class TenantDetail(TenantRead):
    current_financial_year: FinancialYear

    @field_validator("current_financial_year", mode="before")
    @classmethod
    def from_window(cls, v):
        if isinstance(v, tuple):
            start, end = v
            return {"start": start, "end": end}
        return v
