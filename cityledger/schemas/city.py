"""City schemas."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from cityledger.schemas.common import ORMBaseSchema


class CityCreate(BaseModel):
    """Create payload for a city."""

    name: str = Field(min_length=2, max_length=128)

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        stripped = value.strip()
        if len(stripped) < 2:
            raise ValueError("name must be at least 2 characters")
        return stripped


class CityUpdate(CityCreate):
    """Rename payload for a city."""


class CityRead(ORMBaseSchema):
    """Read model for cities."""

    id: uuid.UUID
    name: str
    created_at: datetime
    updated_at: datetime
