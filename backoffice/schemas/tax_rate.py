"""
schemas/tax_rate.py
-------------------
Pydantic models for GST tax rates.
"""

from decimal import Decimal
from typing import Optional

from pydantic import Field

from backoffice.models.tax_rate import TaxRateType
from backoffice.schemas.common import CamelModel, Rate, RecordRead


class TaxRateCreate(CamelModel):
    type: TaxRateType = Field(..., examples=["Standard"])
    rate_percent: Rate = Field(..., ge=0, le=100, examples=["18"])
    surcharge: Optional[Rate] = Field(None, ge=0)
    cess: Optional[Rate] = Field(None, ge=0)


class TaxRateUpdate(CamelModel):
    type: Optional[TaxRateType] = None
    rate_percent: Optional[Rate] = Field(None, ge=0, le=100)
    surcharge: Optional[Rate] = Field(None, ge=0)
    cess: Optional[Rate] = Field(None, ge=0)


class TaxRateFilter(CamelModel):
    type: Optional[TaxRateType] = None


class TaxRateRead(RecordRead):
    type: str
    rate_percent: Decimal
    surcharge: Optional[Decimal] = None
    cess: Optional[Decimal] = None
