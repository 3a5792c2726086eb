from typing import Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

Currency = Literal["USD", "AUD", "SGD", "INR"]
WorkNature = Literal["onsite", "online"]
Category = Literal["Tutoring", "Handyman", "Consulting", "Web Development", "Graphic Design"]

TaskStatus = Literal[
    "open",
    "in_progress",
    "completed_pending_review",
    "completed",
    "closed",
    "cancelled",
    "rejected",
    "assigned",
]
OfferStatus = Literal["pending", "accepted", "rejected", "withdrawn"]


class CamelModel(BaseModel):
    """Request body with camelCase keys on the wire and snake_case attributes."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, str_strip_whitespace=True)
