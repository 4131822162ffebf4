"""Client schemas."""

from __future__ import annotations

import re
import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from cityledger.schemas.common import ORMBaseSchema

PHONE_PATTERN = re.compile(r"^[+\d][\d\s-]{6,20}$")


def _check_phone(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    trimmed = value.strip()
    if not trimmed:
        return None
    if not PHONE_PATTERN.match(trimmed):
        raise ValueError("Phone looks incorrect")
    return trimmed


def _check_name(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    stripped = value.strip()
    if len(stripped) < 2:
        raise ValueError("name must be at least 2 characters")
    return stripped


class ClientCreate(BaseModel):
    """Create payload for a client."""

    city_id: uuid.UUID
    name: str = Field(min_length=2, max_length=128)
    phone: Optional[str] = Field(default=None, max_length=32)
    tags: list[str] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: Optional[str]) -> Optional[str]:
        return _check_name(value)

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, value: Optional[str]) -> Optional[str]:
        return _check_phone(value)


class ClientUpdate(BaseModel):
    """Partial update for a client; omitted fields keep their value."""

    name: Optional[str] = Field(default=None, min_length=2, max_length=128)
    phone: Optional[str] = Field(default=None, max_length=32)
    tags: Optional[list[str]] = None
    archived: Optional[bool] = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: Optional[str]) -> Optional[str]:
        return _check_name(value)

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, value: Optional[str]) -> Optional[str]:
        return _check_phone(value)


class ClientRead(ORMBaseSchema):
    """Read model for clients."""

    id: uuid.UUID
    city_id: Optional[uuid.UUID]
    name: str
    phone: Optional[str]
    tags: list[str]
    archived: bool
    created_at: datetime
    updated_at: datetime
