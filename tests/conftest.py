"""Shared test fixtures."""

import copy
from dataclasses import dataclass, field
from typing import Any

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient
from pymongo import ReturnDocument
from pymongo.results import InsertOneResult

from api.main import app
from models.user_store import UserStore, get_user_store


@dataclass
class FakeCursor:
    """Cursor over a snapshot of documents."""

    documents: list[dict[str, Any]]

    async def to_list(self, length: int | None = None) -> list[dict[str, Any]]:
        return self.documents if length is None else self.documents[:length]


@dataclass
class FakeUsersCollection:
    """In-memory stand-in for the motor users collection."""

    documents: list[dict[str, Any]] = field(default_factory=list)
    calls: list[str] = field(default_factory=list)

    def _match(self, query: dict[str, Any]) -> dict[str, Any] | None:
        for document in self.documents:
            if all(document.get(key) == value for key, value in query.items()):
                return document
        return None

    async def insert_one(self, document: dict[str, Any]) -> InsertOneResult:
        self.calls.append("insert_one")
        stored = copy.deepcopy(document)
        stored.setdefault("_id", ObjectId())
        self.documents.append(stored)
        return InsertOneResult(stored["_id"], acknowledged=True)

    def find(self, query: dict[str, Any] | None = None) -> FakeCursor:
        self.calls.append("find")
        query = query or {}
        matches = [
            copy.deepcopy(document)
            for document in self.documents
            if all(document.get(key) == value for key, value in query.items())
        ]
        return FakeCursor(matches)

    async def find_one(self, query: dict[str, Any]) -> dict[str, Any] | None:
        self.calls.append("find_one")
        document = self._match(query)
        return copy.deepcopy(document) if document else None

    async def find_one_and_update(
        self,
        query: dict[str, Any],
        update: dict[str, Any],
        return_document: ReturnDocument = ReturnDocument.BEFORE,
    ) -> dict[str, Any] | None:
        self.calls.append("find_one_and_update")
        document = self._match(query)
        if document is None:
            return None
        before = copy.deepcopy(document)
        for key, value in update.get("$push", {}).items():
            document.setdefault(key, []).append(copy.deepcopy(value))
        return copy.deepcopy(document) if return_document == ReturnDocument.AFTER else before


class FailingUsersCollection(FakeUsersCollection):
    """Collection whose reads fail like an unreachable server."""

    def find(self, query: dict[str, Any] | None = None) -> FakeCursor:
        raise ConnectionError("connection refused")


class FailingInsertCollection(FakeUsersCollection):
    """Collection whose inserts are never acknowledged."""

    async def insert_one(self, document: dict[str, Any]) -> InsertOneResult:
        self.calls.append("insert_one")
        raise ConnectionError("write failed: no primary available")


@pytest.fixture
def collection() -> FakeUsersCollection:
    return FakeUsersCollection()


@pytest.fixture
def store(collection: FakeUsersCollection) -> UserStore:
    return UserStore(collection)


@pytest.fixture
def client(store: UserStore):
    app.dependency_overrides[get_user_store] = lambda: store
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()


def seed_user(
    collection: FakeUsersCollection,
    username: str = "alice",
    log: list[dict[str, Any]] | None = None,
) -> str:
    """Insert a user document directly and return its id as a string."""
    user_id = ObjectId()
    collection.documents.append(
        {"_id": user_id, "username": username, "log": copy.deepcopy(log or [])}
    )
    return str(user_id)
