"""
Tests for the MongoDB-backed document store.

Runs ``BeanieDocumentStore`` against an in-memory Motor client, so the
real query documents (regex search, sort, conditional update) are
exercised without a MongoDB server.
"""

import asyncio
from datetime import datetime

import pytest
from beanie import init_beanie
from mongomock_motor import AsyncMongoMockClient
from pymongo.errors import ServerSelectionTimeoutError

from dentalhub.features.documents.models import ClinicDocument, DocumentCategory
from dentalhub.features.documents.store import BeanieDocumentStore
from dentalhub.shared.errors import StoreError

from conftest import CLINIC_ID, OTHER_CLINIC_ID, DOCTOR_ID


def _with_store(scenario):
    """Initialise Beanie on a fresh mock database and run ``scenario(store)``."""

    async def main():
        client = AsyncMongoMockClient()
        await init_beanie(database=client["dentalhub_test"], document_models=[ClinicDocument])
        return await scenario(BeanieDocumentStore())

    return asyncio.run(main())


async def _insert(store, title, day, clinic_id=CLINIC_ID, **extra):
    stamp = datetime(2024, 3, day, 9, 0, 0)
    values = {
        "clinic_id": clinic_id,
        "created_by": DOCTOR_ID,
        "title": title,
        "content": "body",
        "version": 1,
        "created_at": stamp,
        "updated_at": stamp,
    }
    values.update(extra)
    return await store.insert(values)


# ==================== find_many ====================

class TestFindMany:

    def test_most_recent_first(self):
        async def scenario(store):
            await _insert(store, "Oldest", 1)
            await _insert(store, "Newest", 3)
            await _insert(store, "Middle", 2)
            return await store.find_many(CLINIC_ID)

        documents = _with_store(scenario)

        assert [doc.title for doc in documents] == ["Newest", "Middle", "Oldest"]

    def test_scoped_to_clinic(self):
        async def scenario(store):
            await _insert(store, "Mine", 1)
            await _insert(store, "Theirs", 2, clinic_id=OTHER_CLINIC_ID)
            return await store.find_many(CLINIC_ID)

        documents = _with_store(scenario)

        assert [doc.title for doc in documents] == ["Mine"]

    def test_search_matches_tag_substring(self):
        async def scenario(store):
            await _insert(store, "Handbook", 1, tags=["Policy-2024", "staff"])
            await _insert(store, "Aftercare", 2, tags=["extraction"])
            return await store.find_many(CLINIC_ID, search="policy")

        documents = _with_store(scenario)

        assert [doc.title for doc in documents] == ["Handbook"]

    def test_search_matches_title_case_insensitive(self):
        async def scenario(store):
            await _insert(store, "Privacy POLICY", 1)
            await _insert(store, "Intake", 2)
            return await store.find_many(CLINIC_ID, search="policy")

        documents = _with_store(scenario)

        assert [doc.title for doc in documents] == ["Privacy POLICY"]

    def test_search_term_is_literal(self):
        async def scenario(store):
            await _insert(store, "Fee schedule (2024)", 1)
            await _insert(store, "Fee schedule 2024", 2)
            literal = await store.find_many(CLINIC_ID, search="(2024)")
            wildcard = await store.find_many(CLINIC_ID, search=".*")
            return literal, wildcard

        literal, wildcard = _with_store(scenario)

        assert [doc.title for doc in literal] == ["Fee schedule (2024)"]
        assert wildcard == []

    def test_category_and_search_combined(self):
        async def scenario(store):
            await _insert(store, "Consent", 1, category=DocumentCategory.FORMS, tags=["surgery"])
            await _insert(store, "Surgery protocol", 2, category=DocumentCategory.PROTOCOLS)
            await _insert(store, "Intake", 3, category=DocumentCategory.FORMS)
            return await store.find_many(CLINIC_ID, category=DocumentCategory.FORMS, search="surgery")

        documents = _with_store(scenario)

        assert [doc.title for doc in documents] == ["Consent"]


# ==================== get / update / delete ====================

class TestSingleDocument:

    def test_insert_then_get(self):
        async def scenario(store):
            created = await _insert(store, "Consent", 1, tags=["consent"], category=DocumentCategory.FORMS)
            return created, await store.get(created.id)

        created, fetched = _with_store(scenario)

        assert fetched == created
        assert fetched.tags == ["consent"]
        assert fetched.category == DocumentCategory.FORMS

    def test_conditional_update_applies_on_matching_version(self):
        async def scenario(store):
            created = await _insert(store, "Consent", 1)
            return created, await store.update(created.id, {"title": "Renamed", "version": 2}, expected_version=1)

        created, updated = _with_store(scenario)

        assert updated.title == "Renamed"
        assert updated.version == 2
        assert updated.updated_at > created.updated_at

    def test_conditional_update_loses_on_version_mismatch(self):
        async def scenario(store):
            created = await _insert(store, "Consent", 1)
            updated = await store.update(created.id, {"title": "Stale", "version": 3}, expected_version=2)
            return updated, await store.get(created.id)

        updated, current = _with_store(scenario)

        assert updated is None
        assert current.title == "Consent"
        assert current.version == 1

    def test_delete(self):
        async def scenario(store):
            created = await _insert(store, "Consent", 1)
            await store.delete(created.id)
            await store.delete(created.id)
            return await store.get(created.id)

        assert _with_store(scenario) is None

    def test_malformed_id_resolves_to_nothing(self):
        async def scenario(store):
            await _insert(store, "Consent", 1)
            fetched = await store.get("not-an-object-id")
            updated = await store.update("not-an-object-id", {"title": "x"})
            await store.delete("not-an-object-id")
            return fetched, updated, await store.find_many(CLINIC_ID)

        fetched, updated, remaining = _with_store(scenario)

        assert fetched is None
        assert updated is None
        assert [doc.title for doc in remaining] == ["Consent"]


# ==================== driver failures ====================

class TestDriverFailures:

    def test_get_failure_becomes_store_error(self, monkeypatch):
        async def unreachable(*args, **kwargs):
            raise ServerSelectionTimeoutError("no servers available")

        async def scenario(store):
            created = await _insert(store, "Consent", 1)
            monkeypatch.setattr(ClinicDocument, "get", unreachable)
            with pytest.raises(StoreError) as exc_info:
                await store.get(created.id)
            return exc_info.value

        error = _with_store(scenario)

        assert error.message == "no servers available"

    def test_insert_failure_becomes_store_error(self, monkeypatch):
        async def unreachable(self, *args, **kwargs):
            raise ServerSelectionTimeoutError("connection refused")

        async def scenario(store):
            monkeypatch.setattr(ClinicDocument, "insert", unreachable)
            with pytest.raises(StoreError) as exc_info:
                await _insert(store, "Consent", 1)
            return exc_info.value

        error = _with_store(scenario)

        assert error.message == "connection refused"
