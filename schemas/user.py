"""User collection schema."""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, List, Optional
from schemas.exercise import Exercise
from utils.helpers import coerce_text


class User(BaseModel):
    """User collection model; the exercise log is embedded."""
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = Field(None, alias="_id", description="MongoDB ObjectId as hex string")
    username: str = Field(..., min_length=1, description="Display name, not unique")
    log: List[Exercise] = Field(default_factory=list, description="Exercises in insertion order")

    @field_validator("username", mode="before")
    @classmethod
    def cast_username(cls, value: Any) -> Any:
        return coerce_text(value)
