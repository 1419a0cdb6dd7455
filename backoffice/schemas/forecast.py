"""
schemas/forecast.py
-------------------
Pydantic models for driver-based forecasts.
"""

from typing import Any, Optional

from pydantic import Field

from backoffice.schemas.common import CamelModel, RecordRead, TrimmedStr


class ForecastCreate(CamelModel):
    driver_inputs: Optional[dict[str, Any]] = None
    actuals_link: Optional[Any] = None
    period: TrimmedStr = Field(..., examples=["FY2024-Q3"])
    version: int = Field(..., ge=1)


class ForecastUpdate(CamelModel):
    driver_inputs: Optional[dict[str, Any]] = None
    actuals_link: Optional[Any] = None
    period: Optional[TrimmedStr] = None
    version: Optional[int] = Field(None, ge=1)


class ForecastFilter(CamelModel):
    period: Optional[str] = None
    version: Optional[int] = None


class ForecastRead(RecordRead):
    driver_inputs: Optional[dict[str, Any]] = None
    actuals_link: Optional[Any] = None
    period: str
    version: int
