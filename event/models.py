from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, constr, field_validator

from tiers.models import TierResponse


def in_utc(value: Optional[datetime]) -> Optional[datetime]:
    # SQLite keeps the wall-clock time and drops the offset, so store UTC.
    if value is not None and value.tzinfo:
        return value.astimezone(timezone.utc)
    return value


def as_naive(value: datetime) -> datetime:
    """UTC wall-clock time without tzinfo; naive input is taken as UTC."""
    if value.tzinfo:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class EventBase(BaseModel):
    title: constr(min_length=1, max_length=255)
    description: Optional[str] = None
    venue: Optional[constr(max_length=255)] = None
    location: Optional[constr(max_length=255)] = None
    banner_image: Optional[constr(max_length=1024)] = None
    category: Optional[constr(max_length=100)] = None
    start_time: datetime
    end_time: datetime

    @field_validator("start_time", "end_time")
    @classmethod
    def times_in_utc(cls, value):
        return in_utc(value)


class EventCreate(EventBase):
    def validate_times(self):
        if as_naive(self.end_time) < as_naive(self.start_time):
            raise ValueError("end_time must not be before start_time")


class EventUpdate(BaseModel):
    title: Optional[constr(min_length=1, max_length=255)] = None
    description: Optional[str] = None
    venue: Optional[constr(max_length=255)] = None
    location: Optional[constr(max_length=255)] = None
    banner_image: Optional[constr(max_length=1024)] = None
    category: Optional[constr(max_length=100)] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None

    @field_validator("start_time", "end_time")
    @classmethod
    def times_in_utc(cls, value):
        return in_utc(value)


class EventActivate(BaseModel):
    contract_address: Optional[str] = None


class EventResponse(EventBase):

    class Config:
        from_attributes = True

    id: str
    organizer_id: str
    is_active: bool
    contract_address: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class EventDetailResponse(EventResponse):
    tiers: List[TierResponse] = []

    @field_validator("tiers")
    @classmethod
    def cheapest_first(cls, tiers):
        return sorted(tiers, key=lambda t: t.price)


class EventActivateResponse(BaseModel):
    message: str
    event: EventResponse
