from typing import Optional

from pydantic import Field

from .base import CamelModel, Category, Currency, WorkNature


class SkillCreate(CamelModel):
    category: Category
    experience: str = Field(min_length=1)
    nature_of_work: WorkNature
    hourly_rate: float = Field(gt=0)
    rate_currency: Currency


class SkillUpdate(CamelModel):
    category: Optional[Category] = None
    experience: Optional[str] = None
    nature_of_work: Optional[WorkNature] = None
    hourly_rate: Optional[float] = Field(default=None, gt=0)
    rate_currency: Optional[Currency] = None
