"""Common schema helpers."""

from typing import Generic, TypeVar

from pydantic import BaseModel

DataT = TypeVar("DataT")


class ORMBaseSchema(BaseModel):
    """Base schema with ORM compatibility enabled."""

    model_config = {"from_attributes": True}


class OkResponse(BaseModel):
    """Acknowledgement for operations without a payload."""

    ok: bool = True


class ApiResponse(BaseModel, Generic[DataT]):
    """Success envelope wrapping every payload returned by the API."""

    ok: bool = True
    data: DataT
