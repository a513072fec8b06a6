import asyncio

import pytest
from sqlalchemy.exc import OperationalError

from centerdesk.core.config import collection_path
from centerdesk.core.database import build_engine
from centerdesk.core.errors import (
    NotFoundError,
    StoreUnavailable,
    ValidationError,
    WriteFailure
)
from centerdesk.services.record_store import DocumentStore


async def test_add_stamps_id_and_timestamps(store):
    courses = store.collection("courses")
    course_id = await courses.add({"name": "Arabic", "price": 100, "id": "ignored"})

    record = await courses.get(course_id)
    assert record["id"] == course_id
    assert record["name"] == "Arabic"
    assert record["createdAt"] is not None
    assert record["updatedAt"] is not None


async def test_update_merges_fields(store):
    courses = store.collection("courses")
    course_id = await courses.add({"name": "Arabic", "price": 100})
    before = await courses.get(course_id)

    await courses.update(course_id, {"price": 120})

    after = await courses.get(course_id)
    assert after["name"] == "Arabic"
    assert after["price"] == 120
    assert after["createdAt"] == before["createdAt"]


async def test_update_missing_record_raises(store):
    with pytest.raises(NotFoundError):
        await store.collection("courses").update("missing", {"price": 1})


async def test_delete_missing_record_is_noop(store):
    courses = store.collection("courses")
    await courses.delete("missing")
    assert await courses.list() == []


async def test_set_creates_then_merges(store):
    attendance = store.collection("attendance")

    assert await attendance.set("key", {"status": "present", "note": "on time"}) is True
    first = await attendance.get("key")
    assert await attendance.set("key", {"status": "late"}) is False
    second = await attendance.get("key")

    assert second["status"] == "late"
    assert second["note"] == "on time"
    assert second["createdAt"] == first["createdAt"]


async def test_collections_are_isolated_by_namespace(database_url):
    engine = build_engine(database_url)
    one = DocumentStore(engine, installation="center-a")
    two = DocumentStore(engine, installation="center-b")
    await one.initialize()

    await one.collection("students").add({"name": "Sara"})
    assert len(await one.collection("students").list()) == 1
    assert await two.collection("students").list() == []
    assert one.collection("students").path == collection_path("students", "center-a")
    await one.close()


def test_unknown_collection_is_rejected():
    with pytest.raises(ValidationError):
        DocumentStore().collection("grades")


async def test_uninitialized_store_raises_store_unavailable():
    store = DocumentStore()
    with pytest.raises(StoreUnavailable):
        await store.collection("students").list()
    with pytest.raises(StoreUnavailable):
        await store.collection("students").add({"name": "Sara"})
    with pytest.raises(StoreUnavailable):
        await store.initialize()


async def test_database_errors_become_write_failures(store, monkeypatch):
    async def broken_commit(self):
        raise OperationalError("COMMIT", {}, Exception("disk I/O error"))

    monkeypatch.setattr("sqlalchemy.ext.asyncio.AsyncSession.commit", broken_commit)
    with pytest.raises(WriteFailure) as exc_info:
        await store.collection("expenses").add({"description": "Rent", "amount": 50})
    assert exc_info.value.params == {"collection": "expenses"}


async def test_subscription_receives_snapshots(store):
    courses = store.collection("courses")
    await courses.add({"name": "Arabic", "price": 100})

    async with await courses.subscribe() as subscription:
        assert subscription.loading is False
        assert subscription.error is None
        initial = await asyncio.wait_for(subscription.next_snapshot(), timeout=1)
        assert [course["name"] for course in initial] == ["Arabic"]

        await courses.add({"name": "English", "price": 80})
        updated = await asyncio.wait_for(subscription.next_snapshot(), timeout=1)
        assert sorted(course["name"] for course in updated) == ["Arabic", "English"]
        assert subscription.data == updated

    assert subscription.closed
    await courses.add({"name": "French", "price": 90})
    assert len(subscription.data) == 2


async def test_subscription_reports_errors_in_error_slot():
    subscription = await DocumentStore().collection("students").subscribe()
    assert isinstance(subscription.error, StoreUnavailable)
    assert subscription.loading is False
    assert subscription.data == []
    subscription.close()
