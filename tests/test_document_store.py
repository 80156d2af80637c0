"""Tests for the clinic access policy wrapped around a document store."""

import pytest

from dentalhub.features.documents.store import ClinicPolicyStore
from dentalhub.shared.errors import StoreError

from conftest import CLINIC_ID, OTHER_CLINIC_ID, DOCTOR_ID


def _values(clinic_id, title="Doc"):
    return {
        "clinic_id": clinic_id,
        "created_by": DOCTOR_ID,
        "title": title,
        "content": "body",
        "category": None,
        "is_template": False,
        "is_shared_with_patients": False,
        "tags": [],
        "version": 1,
    }


@pytest.fixture
def foreign_document(store, run):
    return run(store.insert(_values(OTHER_CLINIC_ID, "Foreign")))


@pytest.fixture
def scoped(store):
    return ClinicPolicyStore(store, CLINIC_ID)


def test_other_clinic_rows_are_invisible(scoped, run, foreign_document):
    assert run(scoped.get(foreign_document.id)) is None
    assert run(scoped.find_many(OTHER_CLINIC_ID)) == []


def test_update_of_other_clinic_row_matches_nothing(scoped, store, run, foreign_document):
    assert run(scoped.update(foreign_document.id, {"title": "Hijacked", "version": 2})) is None
    assert store.rows[foreign_document.id].title == "Foreign"


def test_delete_of_other_clinic_row_is_noop(scoped, store, run, foreign_document):
    run(scoped.delete(foreign_document.id))

    assert foreign_document.id in store.rows


def test_insert_for_other_clinic_rejected(scoped, run):
    with pytest.raises(StoreError, match="row-level security"):
        run(scoped.insert(_values(OTHER_CLINIC_ID)))


def test_own_rows_pass_through(scoped, run):
    document = run(scoped.insert(_values(CLINIC_ID, "Mine")))

    assert run(scoped.get(document.id)) == document
    assert [doc.id for doc in run(scoped.find_many(CLINIC_ID))] == [document.id]

    updated = run(scoped.update(document.id, {"title": "Renamed", "version": 2}, expected_version=1))
    assert updated.title == "Renamed"

    run(scoped.delete(document.id))
    assert run(scoped.get(document.id)) is None
