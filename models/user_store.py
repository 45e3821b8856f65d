"""Persistence for User documents and their embedded exercise logs."""

from typing import Any, Dict, List, Mapping, Optional, Tuple
from bson import ObjectId
from pymongo import ReturnDocument
from models.database import get_users_collection
from schemas import Exercise, User
from utils.helpers import pick_fields
from utils.logger import setup_logger

logger = setup_logger(__name__)


def document_serializer(document: Dict[str, Any]) -> Dict[str, Any]:
    """Copy a MongoDB document with its ObjectId as a string."""
    document = dict(document)
    document["_id"] = str(document["_id"])
    return document


def user_serializer(document: Dict[str, Any]) -> User:
    """Build a User from a stored document without re-validating it.

    Stored data was validated when written; older documents that no longer
    fit the schema are still readable.
    """
    document = document_serializer(document)
    log = [
        Exercise.model_construct(
            description=entry.get("description"),
            duration=entry.get("duration"),
            date=entry.get("date"),
        )
        for entry in document.get("log") or []
        if isinstance(entry, dict)
    ]
    return User.model_construct(**{"_id": document["_id"], "username": document.get("username"), "log": log})


def to_object_id(user_id: Any) -> Optional[ObjectId]:
    """Return the ObjectId for a hex string, or None if it is not one."""
    if isinstance(user_id, ObjectId):
        return user_id
    if isinstance(user_id, str) and ObjectId.is_valid(user_id):
        return ObjectId(user_id)
    return None


class UserStore:
    """Users collection access.

    Writes are validated against the document schemas first, so a
    pydantic ValidationError means bad input while a None result means
    the user does not exist.
    """

    def __init__(self, collection):
        self.collection = collection

    async def create_user(self, fields: Mapping[str, Any]) -> User:
        """Insert a new user with an empty log."""
        user = User.model_validate(pick_fields(fields, ["username"]))
        document = user.model_dump(exclude={"id"})
        result = await self.collection.insert_one(document)
        logger.info(f"Created user {result.inserted_id} ({user.username})")
        return user.model_copy(update={"id": str(result.inserted_id)})

    async def list_users(self) -> List[Dict[str, Any]]:
        """Return every user document as stored, logs included."""
        cursor = self.collection.find({})
        documents = await cursor.to_list(length=None)
        return [document_serializer(document) for document in documents]

    async def get_user(self, user_id: Any) -> Optional[User]:
        """Find a user by id."""
        object_id = to_object_id(user_id)
        if object_id is None:
            return None
        document = await self.collection.find_one({"_id": object_id})
        return user_serializer(document) if document else None

    async def append_exercise(self, user_id: Any, fields: Mapping[str, Any]) -> Optional[Tuple[User, Exercise]]:
        """Atomically push one exercise onto a user's log.

        Returns the updated user with the stored exercise, or None when no
        user has that id.
        """
        exercise = Exercise.model_validate(pick_fields(fields, ["description", "duration", "date"]))
        object_id = to_object_id(user_id)
        if object_id is None:
            return None

        document = await self.collection.find_one_and_update(
            {"_id": object_id},
            {"$push": {"log": exercise.model_dump()}},
            return_document=ReturnDocument.AFTER,
        )
        if not document:
            return None

        logger.info(f"Added exercise for user {object_id} on {exercise.date}")
        return user_serializer(document), exercise


def get_user_store() -> UserStore:
    """FastAPI dependency returning a store bound to the live collection."""
    return UserStore(get_users_collection())
