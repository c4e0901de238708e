"""
Shared schema base: snake_case in Python, camelCase on the wire
"""
from datetime import datetime

from pydantic import BaseModel, field_validator
from pydantic.alias_generators import to_camel

from app.utils.clock import as_naive_utc


class CamelModel(BaseModel):
    """
    Accepts both camelCase and snake_case input, serializes as camelCase

    Datetimes sent with a UTC offset are stored as naive UTC, like every
    timestamp column.
    """

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True

    @field_validator("*", mode="after")
    @classmethod
    def normalize_datetimes(cls, value):
        if isinstance(value, datetime):
            return as_naive_utc(value)
        return value


class MessageResponse(BaseModel):
    message: str
