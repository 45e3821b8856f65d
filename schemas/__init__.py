"""Document schemas for the users collection."""

from schemas.exercise import Exercise
from schemas.user import User

__all__ = [
    "Exercise",
    "User",
]
