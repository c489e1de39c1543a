# expohub/schemas/expo.py
"""
Pydantic schemas and serializers for expos, registrations and schedules.
"""
import datetime as dt
import uuid
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from expohub.models.expo import EventSchedule, Expo, ExpoRegistration
from .common import iso, to_utc

EXPO_SORT_KEYS = ("date", "title", "category")
EXPO_SEARCH_FIELDS = ("title", "description", "category")
REGISTRATION_SORT_KEYS = ("registered_at",)
SCHEDULE_SORT_KEYS = ("event_time",)
SCHEDULE_SEARCH_FIELDS = ("event_name", "speaker_info")


class ExpoCreateIn(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1)
    date: dt.datetime  # "2024-05-01" and full ISO timestamps are both accepted
    category: str = Field(min_length=1, max_length=255)
    location: str = Field(min_length=1, max_length=255)
    featured: bool = False

    @field_validator("date")
    @classmethod
    def utc_date(cls, v):
        return to_utc(v)


class ExpoUpdateIn(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, min_length=1)
    date: Optional[dt.datetime] = None
    category: Optional[str] = Field(default=None, min_length=1, max_length=255)
    location: Optional[str] = Field(default=None, min_length=1, max_length=255)
    featured: Optional[bool] = None

    @field_validator("date")
    @classmethod
    def utc_date(cls, v):
        return to_utc(v) if v is not None else v


class RegistrationCreateIn(BaseModel):
    user_id: uuid.UUID
    expo_id: uuid.UUID


class EventScheduleCreateIn(BaseModel):
    expo_id: uuid.UUID
    event_name: str = Field(min_length=1, max_length=255)
    event_time: dt.datetime
    speaker_info: Optional[str] = None

    @field_validator("event_time")
    @classmethod
    def utc_event_time(cls, v):
        return to_utc(v)


def expo_to_dict(e: Expo) -> dict:
    return {
        "expo_id": str(e.id),
        "title": e.title,
        "description": e.description,
        "date": iso(e.date),
        "category": e.category,
        "location": e.location,
        "featured": bool(e.featured),
    }


def registration_to_dict(r: ExpoRegistration) -> dict:
    return {
        "registration_id": str(r.id),
        "user_id": str(r.user_id),
        "expo_id": str(r.expo_id),
        "registered_at": iso(r.registered_at),
    }


def schedule_to_dict(s: EventSchedule) -> dict:
    return {
        "schedule_id": str(s.id),
        "expo_id": str(s.expo_id),
        "event_name": s.event_name,
        "event_time": iso(s.event_time),
        "speaker_info": s.speaker_info,
    }
