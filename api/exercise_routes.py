"""Exercise tracker API routes."""

from typing import Any, Dict, List, Optional
from fastapi import APIRouter, Depends, Query
from api.dependencies import read_payload
from api.errors import BadRequestError, NotFoundError
from models.user_store import UserStore, get_user_store
from services.exercise_log import build_log_response
from utils.helpers import normalize_date
from utils.logger import setup_logger

logger = setup_logger(__name__)

router = APIRouter(prefix="/api/exercise", tags=["exercise"])


@router.post("/new-user")
async def create_user(
    payload: Dict[str, Any] = Depends(read_payload),
    store: UserStore = Depends(get_user_store),
):
    """Register a user and return `{username, _id}`.

    The response is sent only after the insert is acknowledged.
    """
    user = await store.create_user(payload)
    return {"username": user.username, "_id": user.id}


@router.get("/users")
async def list_users(store: UserStore = Depends(get_user_store)) -> List[Dict[str, Any]]:
    """Return all users with their full logs."""
    users = await store.list_users()
    logger.info(f"Listing {len(users)} users")
    return users


@router.post("/add")
async def add_exercise(
    payload: Dict[str, Any] = Depends(read_payload),
    store: UserStore = Depends(get_user_store),
):
    """Append an exercise to a user's log.

    `date` defaults to today; `duration` is read as an integer.
    """
    fields = {
        "description": payload.get("description"),
        "duration": payload.get("duration"),
        "date": normalize_date(payload.get("date")),
    }
    result = await store.append_exercise(payload.get("userId"), fields)
    if result is None:
        raise NotFoundError("unknown userId")

    user, exercise = result
    return {
        "_id": user.id,
        "username": user.username,
        "date": exercise.date,
        "duration": exercise.duration,
        "description": exercise.description,
    }


@router.get("/log")
async def get_log(
    userId: Optional[str] = Query(None, description="User identifier"),
    from_date: Optional[str] = Query(None, alias="from", description="Exclusive lower date bound"),
    to_date: Optional[str] = Query(None, alias="to", description="Exclusive upper date bound"),
    limit: Optional[str] = Query(None, description="Maximum number of entries, in insertion order"),
    store: UserStore = Depends(get_user_store),
):
    """Return a user's log with `count`, optionally limited and date-filtered."""
    if not userId:
        raise BadRequestError("userId parameter is missing")

    user = await store.get_user(userId)
    if user is None:
        raise NotFoundError("unknown userId")

    return build_log_response(user, from_date=from_date, to_date=to_date, limit=limit)
