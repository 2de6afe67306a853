"""Reference record models served by the data provider."""

from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from barberbot.utils import coerce_day_index


class Service(BaseModel):
    """A bookable service. Names are not guaranteed unique."""
    name: str
    price: Decimal = Field(ge=0)
    duration_minutes: int = Field(gt=0)
    description: Optional[str] = None


class Barber(BaseModel):
    """Staff member record."""
    id: str
    name: str = Field(min_length=1)
    bio: Optional[str] = None
    is_active: bool = True

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_text(cls, value: Any) -> str:
        return str(value)


class FAQ(BaseModel):
    question: str
    answer: str


class Promotion(BaseModel):
    """Promotion with an optional expiry; naive expiries are read as UTC."""
    title: str
    details: Optional[str] = None
    valid_until: Optional[datetime] = None

    @field_validator("valid_until", mode="before")
    @classmethod
    def _date_only_expiry(cls, value: Any) -> Any:
        if isinstance(value, str) and len(value.strip()) == 10:
            return f"{value.strip()}T00:00:00"
        return value


class Location(BaseModel):
    name: str
    address: str
    city: str
    phone: Optional[str] = None
    email: Optional[str] = None


class WorkingHours(BaseModel):
    """Opening hours for one weekday (0=Sunday .. 6=Saturday)."""
    day_of_week: int = Field(ge=0, le=6)
    open_time: Optional[str] = None
    close_time: Optional[str] = None
    is_closed: bool = False

    @field_validator("day_of_week", mode="before")
    @classmethod
    def _coerce_day(cls, value: Any) -> int:
        return coerce_day_index(value)
