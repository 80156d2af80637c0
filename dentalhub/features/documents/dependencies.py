# Documents Feature - Dependencies

from fastapi import Depends
from dentalhub.features.documents.invalidation import DocumentListInvalidator, list_invalidator
from dentalhub.features.documents.repository import DocumentRepository
from dentalhub.features.documents.store import BeanieDocumentStore, ClinicPolicyStore, DocumentStore
from dentalhub.features.profiles.dependencies import get_current_doctor
from dentalhub.features.profiles.schemas import DoctorProfile


def get_document_store() -> DocumentStore:
    """Dependency for the backing document store."""
    return BeanieDocumentStore()


def get_list_invalidator() -> DocumentListInvalidator:
    """Dependency for the shared list invalidator."""
    return list_invalidator


def get_document_repository(
    doctor: DoctorProfile = Depends(get_current_doctor),
    store: DocumentStore = Depends(get_document_store),
    invalidator: DocumentListInvalidator = Depends(get_list_invalidator),
) -> DocumentRepository:
    """
    Dependency to get a repository scoped to the current doctor's clinic.
    
    Rows of other clinics are invisible through the returned repository.
    """
    return DocumentRepository(ClinicPolicyStore(store, doctor.clinic_id), invalidator)
