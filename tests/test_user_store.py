"""Tests for the users collection store."""

import asyncio

import pytest
from bson import ObjectId
from pydantic import ValidationError

from tests.conftest import seed_user


def test_create_user_inserts_document_with_empty_log(store, collection) -> None:
    user = asyncio.run(store.create_user({"username": "alice"}))

    assert ObjectId.is_valid(user.id)
    assert user.log == []
    assert collection.documents == [{"_id": ObjectId(user.id), "username": "alice", "log": []}]


def test_create_user_ignores_client_supplied_id(store) -> None:
    user = asyncio.run(store.create_user({"username": "alice", "_id": "abc"}))

    assert user.id != "abc"


@pytest.mark.parametrize("fields", [{}, {"username": ""}])
def test_create_user_rejects_missing_username(store, collection, fields) -> None:
    with pytest.raises(ValidationError):
        asyncio.run(store.create_user(fields))

    assert collection.documents == []


def test_get_user_returns_none_for_unknown_or_malformed_id(store, collection) -> None:
    seed_user(collection)

    assert asyncio.run(store.get_user(str(ObjectId()))) is None
    assert asyncio.run(store.get_user("not-an-id")) is None
    assert collection.calls == ["find_one"]


def test_append_exercise_pushes_in_order(store, collection) -> None:
    user_id = seed_user(collection)

    asyncio.run(store.append_exercise(user_id, {"description": "run", "duration": "30", "date": "2020-01-02"}))
    user, exercise = asyncio.run(
        store.append_exercise(user_id, {"description": "swim", "duration": 20, "date": "2020-01-01"})
    )

    assert exercise.duration == 20
    assert [entry.description for entry in user.log] == ["run", "swim"]
    assert collection.documents[0]["log"][0] == {"description": "run", "duration": 30, "date": "2020-01-02"}


def test_append_exercise_unknown_user(store, collection) -> None:
    result = asyncio.run(
        store.append_exercise(str(ObjectId()), {"description": "run", "duration": 30, "date": "2020-01-01"})
    )

    assert result is None


def test_append_exercise_validates_before_lookup(store, collection) -> None:
    user_id = seed_user(collection)

    with pytest.raises(ValidationError):
        asyncio.run(store.append_exercise(user_id, {"description": "run", "duration": "soon", "date": "2020-01-01"}))

    assert collection.calls == []
    assert collection.documents[0]["log"] == []


def test_list_users_returns_logs(store, collection) -> None:
    seed_user(collection, "alice", [{"description": "run", "duration": 30, "date": "2020-01-01"}])
    seed_user(collection, "bob")

    users = asyncio.run(store.list_users())

    assert [user["username"] for user in users] == ["alice", "bob"]
    assert users[0]["log"][0]["duration"] == 30
    assert all(isinstance(user["_id"], str) for user in users)


def test_append_exercise_rejects_duration_beyond_int64(store, collection) -> None:
    user_id = seed_user(collection)

    with pytest.raises(ValidationError):
        asyncio.run(
            store.append_exercise(user_id, {"description": "run", "duration": "99999999999999999999", "date": "2020-01-01"})
        )

    assert collection.calls == []


def test_append_exercise_accepts_int64_bounds(store, collection) -> None:
    user_id = seed_user(collection)

    _, exercise = asyncio.run(
        store.append_exercise(user_id, {"description": "run", "duration": str(2**63 - 1), "date": "2020-01-01"})
    )

    assert exercise.duration == 2**63 - 1


def test_append_exercise_casts_numbers_to_text(store, collection) -> None:
    user_id = seed_user(collection)

    _, exercise = asyncio.run(
        store.append_exercise(user_id, {"description": 5, "duration": 30, "date": 20200101})
    )

    assert exercise.description == "5"
    assert exercise.date == "20200101"


def test_reads_do_not_revalidate_stored_documents(store, collection) -> None:
    user_id = ObjectId()
    collection.documents.append(
        {
            "_id": user_id,
            "username": "",
            "__v": 0,
            "log": [{"description": "legacy", "duration": None, "date": "2019-12-31"}],
        }
    )

    users = asyncio.run(store.list_users())
    user = asyncio.run(store.get_user(str(user_id)))

    assert users == [
        {
            "_id": str(user_id),
            "username": "",
            "__v": 0,
            "log": [{"description": "legacy", "duration": None, "date": "2019-12-31"}],
        }
    ]
    assert user.id == str(user_id)
    assert user.log[0].description == "legacy"
