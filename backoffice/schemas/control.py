"""
schemas/control.py
------------------
Pydantic models for the internal control register.
"""

from typing import Optional

from pydantic import Field

from backoffice.models.control import ControlType
from backoffice.schemas.common import CamelModel, JsonDateTime, RecordRead, TrimmedStr


class TestingSchedule(CamelModel):
    frequency: Optional[str] = Field(None, examples=["Quarterly"])
    next_test_date: Optional[JsonDateTime] = None


class ControlCreate(CamelModel):
    name: TrimmedStr
    type: ControlType
    testing_schedule: Optional[TestingSchedule] = None
    status: Optional[str] = Field(None, max_length=50)


class ControlUpdate(CamelModel):
    name: Optional[TrimmedStr] = None
    type: Optional[ControlType] = None
    testing_schedule: Optional[TestingSchedule] = None
    status: Optional[str] = Field(None, max_length=50)


class ControlFilter(CamelModel):
    type: Optional[ControlType] = None
    status: Optional[str] = None


class ControlRead(RecordRead):
    name: str
    type: str
    testing_schedule: Optional[TestingSchedule] = None
    status: Optional[str] = None
