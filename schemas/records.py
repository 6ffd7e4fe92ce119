"""Longitudinal records supplied by the caller: timeline, photos, reminders."""

from datetime import date as dt_date
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class TimelineEntry(BaseModel):
    """A diary/timeline entry about the pet. Read-only input."""

    date: dt_date = Field(..., description="Entry date")
    title: str = Field(..., max_length=200, description="Entry title")
    content: str = Field("", description="Entry body")
    mood: Literal["happy", "normal", "sad", "sick"] = Field("normal", description="Pet's mood that day")


class PhotoMemory(BaseModel):
    """A captioned photo. Read-only input."""

    date: dt_date = Field(..., description="Photo date")
    caption: str = Field(..., min_length=1, description="Photo caption")


class ReminderSchedule(BaseModel):
    """When a reminder fires."""

    type: Literal["daily", "weekly", "monthly", "once"] = Field(..., description="Recurrence")
    time: str = Field("00:00", description="Time of day, HH:MM or HH:MM:SS")
    day_of_week: Optional[int] = Field(None, ge=0, le=6, description="Weekly: 0 = Sunday")
    day_of_month: Optional[int] = Field(None, ge=1, le=31, description="Monthly: day of month")
    date: Optional[dt_date] = Field(None, description="Once: the date")

    @field_validator("time")
    @classmethod
    def validate_time(cls, v: str) -> str:
        """Accept HH:MM with optional seconds, keep HH:MM."""
        parts = v.split(":")
        if len(parts) < 2 or not all(p.isdigit() for p in parts):
            raise ValueError("time must look like HH:MM")
        hour, minute = int(parts[0]), int(parts[1])
        if not (0 <= hour < 24 and 0 <= minute < 60):
            raise ValueError("time out of range")
        return f"{hour:02d}:{minute:02d}"

    @model_validator(mode="after")
    def check_recurrence_fields(self) -> "ReminderSchedule":
        """Weekly needs day_of_week, monthly needs day_of_month, once needs date."""
        required = {"weekly": "day_of_week", "monthly": "day_of_month", "once": "date"}.get(self.type)
        if required and getattr(self, required) is None:
            raise ValueError(f"{self.type} schedule requires {required}")
        return self

    @property
    def hour_minute(self) -> tuple[int, int]:
        hour, minute = self.time.split(":")
        return int(hour), int(minute)


class Reminder(BaseModel):
    """A care reminder. Read-only input."""

    type: str = Field(..., description="walk, meal, medicine, vaccine, grooming, vet or custom")
    title: str = Field(..., max_length=200, description="Reminder title")
    schedule: ReminderSchedule
    enabled: bool = Field(True, description="Only matters in active mode")
