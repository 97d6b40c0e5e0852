from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from eventhost.core.themes import DEFAULT_THEME_ID, is_known_theme
from eventhost.schemas.theme import Theme
from eventhost.utils.time import as_utc


def _drop_blank(items: List[str]) -> List[str]:
    return [item.strip() for item in items if item and item.strip()]


class EventBase(BaseModel):
    title: str = Field(..., min_length=1, json_schema_extra={"example": "PyData Meetup"})
    description: str = Field(
        ..., min_length=1, json_schema_extra={"example": "Talks and networking"}
    )
    start_date: datetime
    end_date: datetime
    location: str = Field(..., min_length=1, json_schema_extra={"example": "Berlin"})
    cover_image_url: Optional[str] = None
    agenda: List[str] = Field(default_factory=list)
    custom_questions: List[str] = Field(default_factory=list)
    theme: str = DEFAULT_THEME_ID
    price: Optional[float] = Field(None, ge=0, description="None means free")

    @field_validator("start_date", "end_date")
    @classmethod
    def dates_in_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        # SQLite keeps no offset, so every stored datetime is UTC.
        return as_utc(value)


class EventCreate(EventBase):
    @field_validator("agenda")
    @classmethod
    def agenda_not_empty(cls, value: List[str]) -> List[str]:
        cleaned = _drop_blank(value)
        if not cleaned:
            raise ValueError("At least one agenda item is required")
        return cleaned

    @field_validator("custom_questions")
    @classmethod
    def clean_questions(cls, value: List[str]) -> List[str]:
        return _drop_blank(value)

    @field_validator("theme")
    @classmethod
    def theme_must_exist(cls, value: str) -> str:
        if not is_known_theme(value):
            raise ValueError(f"Unknown theme '{value}'")
        return value

    @model_validator(mode="after")
    def end_after_start(self):
        if self.end_date < self.start_date:
            raise ValueError("End date must be after the start date")
        return self


# Omitted on update means unchanged; null is only accepted where the column
# allows it.
NOT_NULLABLE = (
    "title",
    "description",
    "start_date",
    "end_date",
    "location",
    "agenda",
    "custom_questions",
    "theme",
)


# Schema for updating an event. All fields are optional.
class EventUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = Field(None, min_length=1)
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    location: Optional[str] = Field(None, min_length=1)
    cover_image_url: Optional[str] = None
    agenda: Optional[List[str]] = None
    custom_questions: Optional[List[str]] = None
    theme: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)

    @field_validator("start_date", "end_date")
    @classmethod
    def dates_in_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        # SQLite keeps no offset, so every stored datetime is UTC.
        return as_utc(value)

    @model_validator(mode="before")
    @classmethod
    def reject_null_for_required(cls, data: Any) -> Any:
        if isinstance(data, dict):
            for key in NOT_NULLABLE:
                if key in data and data[key] is None:
                    raise ValueError(f"'{key}' cannot be null")
        return data

    @field_validator("agenda")
    @classmethod
    def agenda_not_empty(cls, value: Optional[List[str]]) -> Optional[List[str]]:
        if value is None:
            return value
        cleaned = _drop_blank(value)
        if not cleaned:
            raise ValueError("At least one agenda item is required")
        return cleaned

    @field_validator("custom_questions")
    @classmethod
    def clean_questions(cls, value: Optional[List[str]]) -> Optional[List[str]]:
        return None if value is None else _drop_blank(value)

    @field_validator("theme")
    @classmethod
    def theme_must_exist(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not is_known_theme(value):
            raise ValueError(f"Unknown theme '{value}'")
        return value


class Event(EventBase):
    id: str = Field(..., json_schema_extra={"example": "evt_c5a6d8e0f9b1"})
    host_id: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class EventWithCount(Event):
    registrations_count: int = 0


class PublicEvent(BaseModel):
    """What the public registration page needs."""
    id: str
    title: str
    description: str
    start_date: datetime
    end_date: datetime
    location: str
    cover_image_url: Optional[str] = None
    agenda: List[str]
    custom_questions: List[str]
    price: Optional[float] = None
    theme: Theme

    model_config = {"from_attributes": True}


class CalendarLinks(BaseModel):
    google: str
    outlook: str
    ics: str
