"""Exercise log entry schema."""

from typing import Any
from pydantic import BaseModel, Field, field_validator
from utils.helpers import coerce_text, parse_int

# BSON stores integers as at most 8 bytes
INT64_MIN = -2**63
INT64_MAX = 2**63 - 1


class Exercise(BaseModel):
    """Exercise entry embedded in a user's log."""
    description: str = Field(..., min_length=1, description="What was done")
    duration: int = Field(..., ge=INT64_MIN, le=INT64_MAX, description="Duration in minutes")
    date: str = Field(..., description="Date of the exercise, YYYY-MM-DD when defaulted")

    @field_validator("description", "date", mode="before")
    @classmethod
    def cast_text(cls, value: Any) -> Any:
        return coerce_text(value)

    @field_validator("duration", mode="before")
    @classmethod
    def parse_duration(cls, value: Any) -> int:
        duration = parse_int(value)
        if duration is None:
            raise ValueError("duration must be a number")
        return duration
