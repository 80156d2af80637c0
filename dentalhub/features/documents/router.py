# Documents Feature - Router

from typing import Optional
from fastapi import APIRouter, Depends, Query, Response, status
from fastapi.responses import HTMLResponse
from dentalhub.features.documents.dependencies import get_document_repository, get_list_invalidator
from dentalhub.features.documents.invalidation import DocumentListInvalidator
from dentalhub.features.documents.markdown import render_markdown
from dentalhub.features.documents.models import DocumentCategory
from dentalhub.features.documents.repository import DocumentRepository
from dentalhub.features.documents.schemas import (
    DocumentCreate,
    DocumentCreateRequest,
    DocumentUpdate,
    DocumentResponse,
    DocumentListResponse,
    SharingUpdate,
    DeleteResponse,
)
from dentalhub.features.profiles.dependencies import get_current_doctor
from dentalhub.features.profiles.schemas import DoctorProfile
from dentalhub.shared.errors import ErrorType
from dentalhub.shared.exceptions import (
    BadRequestException,
    CredentialsException,
    NotFoundException,
    ServiceUnavailableException,
)
from dentalhub.shared.schemas import OperationResult


router = APIRouter(prefix="/documents", tags=["Documents"])


_ERROR_EXCEPTIONS = {
    ErrorType.VALIDATION: BadRequestException,
    ErrorType.NOT_FOUND: NotFoundException,
    ErrorType.AUTH: CredentialsException,
    ErrorType.STORE: ServiceUnavailableException,
}


def _unwrap(result: OperationResult):
    """Return the result's value or raise the matching HTTP exception."""
    if result.ok:
        return result.data
    raise _ERROR_EXCEPTIONS.get(result.error_type, ServiceUnavailableException)(result.error)


@router.get("", response_model=DocumentListResponse)
async def list_documents(
    response: Response,
    category: Optional[DocumentCategory] = Query(None),
    search: Optional[str] = Query(None),
    doctor: DoctorProfile = Depends(get_current_doctor),
    repository: DocumentRepository = Depends(get_document_repository),
    invalidator: DocumentListInvalidator = Depends(get_list_invalidator),
):
    """
    List the clinic's documents, most recently updated first.
    
    - **category**: Exact category filter (optional)
    - **search**: Matches titles or tags, case-insensitive (optional)
    
    The `X-Documents-Revision` header carries the clinic's list revision.
    """
    documents = _unwrap(await repository.list_documents(doctor.clinic_id, category, search))
    
    response.headers["X-Documents-Revision"] = str(invalidator.revision(doctor.clinic_id))
    return DocumentListResponse(documents=documents, total=len(documents))


@router.post("", response_model=DocumentResponse, status_code=status.HTTP_201_CREATED)
async def create_document(
    document_data: DocumentCreateRequest,
    doctor: DoctorProfile = Depends(get_current_doctor),
    repository: DocumentRepository = Depends(get_document_repository),
):
    """
    Create a new document for the clinic.
    
    - **title**: Document title (required, trimmed)
    - **content**: Document content (required)
    - **category**: policies, protocols, forms, instructions, insurance or other
    - **is_template**: Reusable template flag (default: false)
    - **is_shared_with_patients**: Patient visibility (default: false)
    - **tags**: Free-form tags
    """
    return _unwrap(await repository.create_document(DocumentCreate(
        clinic_id=doctor.clinic_id,
        created_by=doctor.user_id,
        **document_data.model_dump(),
    )))


@router.get("/{document_id}", response_model=DocumentResponse)
async def get_document(
    document_id: str,
    repository: DocumentRepository = Depends(get_document_repository),
):
    """Get a single document."""
    return _unwrap(await repository.get_document(document_id))


@router.get("/{document_id}/preview", response_class=HTMLResponse)
async def preview_document(
    document_id: str,
    repository: DocumentRepository = Depends(get_document_repository),
):
    """Render the document content as HTML."""
    document = _unwrap(await repository.get_document(document_id))
    return HTMLResponse(render_markdown(document.content))


@router.patch("/{document_id}", response_model=DocumentResponse)
async def update_document(
    document_id: str,
    update_data: DocumentUpdate,
    repository: DocumentRepository = Depends(get_document_repository),
):
    """
    Update an existing document. Only the fields sent are changed and the
    version is incremented by one.
    """
    return _unwrap(await repository.update_document(document_id, update_data))


@router.delete("/{document_id}", response_model=DeleteResponse)
async def delete_document(
    document_id: str,
    repository: DocumentRepository = Depends(get_document_repository),
):
    """Permanently delete a document."""
    _unwrap(await repository.delete_document(document_id))
    return DeleteResponse(success=True, message="Document deleted successfully")


@router.post("/{document_id}/duplicate", response_model=DocumentResponse, status_code=status.HTTP_201_CREATED)
async def duplicate_document(
    document_id: str,
    doctor: DoctorProfile = Depends(get_current_doctor),
    repository: DocumentRepository = Depends(get_document_repository),
):
    """
    Copy a document. The copy belongs to the caller, starts at version 1
    and is not shared with patients.
    """
    return _unwrap(await repository.duplicate_document(document_id, doctor.user_id))


@router.put("/{document_id}/sharing", response_model=DocumentResponse)
async def set_document_sharing(
    document_id: str,
    sharing: SharingUpdate,
    repository: DocumentRepository = Depends(get_document_repository),
):
    """Share the document with patients, or stop sharing it."""
    return _unwrap(await repository.toggle_sharing(document_id, sharing.is_shared_with_patients))
