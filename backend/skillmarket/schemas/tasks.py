from datetime import date
from typing import Optional

from pydantic import Field

from .base import CamelModel, Category, Currency


class TaskCreate(CamelModel):
    category: Category
    task_name: str = Field(min_length=1)
    description: Optional[str] = None
    expected_start_date: date
    expected_working_hours: float = Field(gt=0)
    hourly_rate_offered: float = Field(gt=0)
    rate_currency: Currency


class TaskUpdate(CamelModel):
    category: Optional[Category] = None
    task_name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    expected_start_date: Optional[date] = None
    expected_working_hours: Optional[float] = Field(default=None, gt=0)
    hourly_rate_offered: Optional[float] = Field(default=None, gt=0)
    rate_currency: Optional[Currency] = None


class OfferCreate(CamelModel):
    offered_hourly_rate: float = Field(gt=0)
    offered_rate_currency: Currency
    message: Optional[str] = None


class ProgressCreate(CamelModel):
    description: str = Field(min_length=1)
