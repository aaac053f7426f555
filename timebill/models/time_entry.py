from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator


class TimeEntry(BaseModel):
    id: int | None = None
    uuid: str = ""
    user_id: int = 0
    date: date
    hours: Decimal = Field(gt=0)
    description: str
    notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("description")
    @classmethod
    def _description_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("description must not be empty")
        return value

    @field_validator("notes")
    @classmethod
    def _blank_notes_to_none(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        return value
