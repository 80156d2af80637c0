"""
Shared fixtures for the test suite.

The document store, Socket.IO server and affiliation lookup are replaced
by small in-memory fakes so no MongoDB instance is needed.
"""

import os
import asyncio
import uuid
from datetime import datetime, timedelta

os.environ.setdefault("JWT_SECRET_KEY", "test-secret")

import pytest

from dentalhub.features.documents.invalidation import DocumentListInvalidator
from dentalhub.features.documents.repository import DocumentRepository
from dentalhub.features.documents.schemas import DocumentCreate, DocumentResponse
from dentalhub.features.documents.store import DocumentStore
from dentalhub.features.profiles.schemas import ActingSession
from dentalhub.shared.errors import AuthError, NotFoundError


CLINIC_ID = "clinic-1"
OTHER_CLINIC_ID = "clinic-2"
DOCTOR_ID = "doctor-1"


# ── Fakes ────────────────────────────────────────────────────────────

class FakeDocumentStore(DocumentStore):
    """Dict-backed store with a deterministic clock."""

    def __init__(self):
        self.rows = {}
        self.fail_with = None
        # Number of upcoming conditional writes that lose to a concurrent writer
        self.conflicts = 0
        self.update_calls = []
        self._now = datetime(2024, 1, 1, 9, 0, 0)

    def _tick(self):
        self._now += timedelta(seconds=1)
        return self._now

    def _check(self):
        if self.fail_with is not None:
            raise self.fail_with

    async def find_many(self, clinic_id, category=None, search=None):
        self._check()
        rows = [row for row in self.rows.values() if row.clinic_id == clinic_id]
        if category:
            rows = [row for row in rows if row.category == category]
        if search:
            term = search.lower()
            rows = [
                row for row in rows
                if term in row.title.lower() or any(term in tag.lower() for tag in row.tags)
            ]
        return sorted(rows, key=lambda row: row.updated_at, reverse=True)

    async def get(self, document_id):
        self._check()
        return self.rows.get(document_id)

    async def insert(self, values):
        self._check()
        now = self._tick()
        document = DocumentResponse(id=uuid.uuid4().hex, created_at=now, updated_at=now, **values)
        self.rows[document.id] = document
        return document

    async def update(self, document_id, values, expected_version=None):
        self._check()
        self.update_calls.append((document_id, dict(values), expected_version))
        row = self.rows.get(document_id)
        if row is None:
            return None
        if expected_version is not None:
            if self.conflicts:
                # Another writer bumps the version first
                self.conflicts -= 1
                self.rows[document_id] = row.model_copy(update={"version": row.version + 1})
                return None
            if row.version != expected_version:
                return None
        updated = DocumentResponse.model_validate(
            {**row.model_dump(), **values, "updated_at": self._tick()}
        )
        self.rows[document_id] = updated
        return updated

    async def delete(self, document_id):
        self._check()
        self.rows.pop(document_id, None)


class FakeSocketIO:
    """Records emitted events."""

    def __init__(self):
        self.emitted = []

    async def emit(self, event, data, room=None):
        self.emitted.append((event, data, room))


class FakeProfiles:
    """Affiliation lookup keyed by user id."""

    def __init__(self, clinics=None):
        self.clinics = clinics or {}

    async def resolve_clinic_id(self, session):
        if session is None:
            raise AuthError("Not authenticated")
        clinic_id = self.clinics.get(session.user_id)
        if not clinic_id:
            raise NotFoundError("No clinic associated with account")
        return clinic_id


# ── Fixtures ─────────────────────────────────────────────────────────

@pytest.fixture
def run():
    return asyncio.run


@pytest.fixture
def store():
    return FakeDocumentStore()


@pytest.fixture
def sio():
    return FakeSocketIO()


@pytest.fixture
def invalidator(sio):
    invalidator = DocumentListInvalidator(route="/dashboard/doctor/documents")
    invalidator.set_socketio(sio)
    return invalidator


@pytest.fixture
def repository(store, invalidator):
    return DocumentRepository(store, invalidator)


@pytest.fixture
def session():
    return ActingSession(user_id=DOCTOR_ID, email="doc@clinic.test", role="doctor")


@pytest.fixture
def profiles():
    return FakeProfiles({DOCTOR_ID: CLINIC_ID})


@pytest.fixture
def make_document(repository, run):
    """Create a document through the repository and return it."""

    def _make(title="Infection Control Policy", content="# Policy\n\nSterilise.", clinic_id=CLINIC_ID, **extra):
        result = run(repository.create_document(DocumentCreate(
            clinic_id=clinic_id,
            created_by=DOCTOR_ID,
            title=title,
            content=content,
            **extra,
        )))
        assert result.ok, result.error
        return result.data

    return _make
