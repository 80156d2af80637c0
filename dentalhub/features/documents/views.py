"""
View-models for the document list and editor screens.

They hold the screen state (fetched documents, filters, form fields,
banners and alerts) and wire user actions to the repository. Rendering
is left to the frontend.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional
from pydantic import ValidationError as PydanticValidationError
from dentalhub.config import settings
from dentalhub.core.logging import logger
from dentalhub.features.documents.filters import category_options, filter_documents
from dentalhub.features.documents.models import DocumentCategory
from dentalhub.features.documents.repository import DocumentRepository
from dentalhub.features.documents.schemas import (
    DocumentCreate,
    DocumentUpdate,
    DocumentResponse,
)
from dentalhub.features.profiles.schemas import ActingSession
from dentalhub.shared.errors import DocumentError


NEW_DOCUMENT_ID = "new"

DELETE_PROMPT = "Are you sure you want to delete this document?"
NO_DOCUMENTS_MESSAGE = "No documents yet. Create your first document to get started."
NO_MATCHES_MESSAGE = "No documents match your filters."


async def _resolve_clinic_id(profiles, session: Optional[ActingSession], fallback: str) -> str:
    try:
        return await profiles.resolve_clinic_id(session)
    except DocumentError:
        raise
    except Exception as e:
        logger.error(f"Affiliation lookup error: {type(e).__name__}: {e}")
        raise DocumentError(fallback)


class DocumentListView:
    """State of the clinic document list with client-side filters."""

    def __init__(self, repository: DocumentRepository, profiles, session: Optional[ActingSession]):
        self.repository = repository
        self.profiles = profiles
        self.session = session

        self.clinic_id: Optional[str] = None
        self.documents: List[DocumentResponse] = []
        self.filtered_documents: List[DocumentResponse] = []
        self.active_category: Optional[DocumentCategory] = None
        self.search_term = ""
        self.is_loading = True
        # Page-level banner
        self.error: Optional[str] = None
        # Last action-level failure
        self.alert: Optional[str] = None

    @property
    def category_options(self):
        return category_options()

    @property
    def empty_message(self) -> Optional[str]:
        if self.filtered_documents:
            return None
        return NO_DOCUMENTS_MESSAGE if not self.documents else NO_MATCHES_MESSAGE

    async def load(self) -> None:
        """Resolve the clinic, then fetch its full unfiltered document set."""
        self.is_loading = True
        self.error = None

        try:
            self.clinic_id = await _resolve_clinic_id(
                self.profiles, self.session, "Failed to fetch clinic information"
            )
        except DocumentError as e:
            self.error = e.message
            self.is_loading = False
            return

        await self.refresh()

    async def refresh(self) -> None:
        """Refetch the clinic's documents, e.g. after an invalidation signal."""
        if not self.clinic_id:
            return

        self.is_loading = True
        self.error = None

        result = await self.repository.list_documents(self.clinic_id)
        if result.ok:
            self._set_documents(result.data or [])
        else:
            self.error = result.error

        self.is_loading = False

    def set_category(self, category: Optional[DocumentCategory]) -> None:
        self.active_category = category
        self._refilter()

    def set_search(self, term: str) -> None:
        self.search_term = term
        self._refilter()

    def _set_documents(self, documents: List[DocumentResponse]) -> None:
        self.documents = documents
        self._refilter()

    def _refilter(self) -> None:
        self.filtered_documents = filter_documents(
            self.documents, self.active_category, self.search_term
        )

    async def delete(self, document_id: str, confirm: Callable[[str], bool]) -> bool:
        """
        Delete a document after an explicit confirmation.

        ``confirm`` receives the prompt and must return True for the
        delete to be issued.
        """
        if not confirm(DELETE_PROMPT):
            return False

        result = await self.repository.delete_document(document_id)
        if not result.ok:
            self.alert = f"Failed to delete document: {result.error}"
            return False

        self._set_documents([doc for doc in self.documents if doc.id != document_id])
        return True

    async def duplicate(self, document_id: str) -> Optional[DocumentResponse]:
        user_id = self.session.user_id if self.session else None
        result = await self.repository.duplicate_document(document_id, user_id)
        if not result.ok:
            self.alert = f"Failed to duplicate document: {result.error}"
            return None

        self._set_documents([result.data] + self.documents)
        return result.data

    async def toggle_share(self, document_id: str, is_shared: bool) -> Optional[DocumentResponse]:
        result = await self.repository.toggle_sharing(document_id, is_shared)
        if not result.ok:
            self.alert = f"Failed to update sharing: {result.error}"
            return None

        self._set_documents([
            result.data if doc.id == document_id else doc for doc in self.documents
        ])
        return result.data


def parse_tags(text: str) -> List[str]:
    """Split a comma-separated tag string into trimmed, non-empty tags."""
    return [tag.strip() for tag in text.split(",") if tag.strip()]


@dataclass
class DocumentForm:
    """Editable fields of the document editor."""

    title: str = ""
    content: str = ""
    category: Optional[DocumentCategory] = None
    is_template: bool = False
    is_shared_with_patients: bool = False
    tags_input: str = ""

    @classmethod
    def from_document(cls, document: DocumentResponse) -> "DocumentForm":
        return cls(
            title=document.title,
            content=document.content,
            category=document.category,
            is_template=document.is_template,
            is_shared_with_patients=document.is_shared_with_patients,
            tags_input=", ".join(document.tags),
        )

    def values(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "content": self.content,
            "category": self.category,
            "is_template": self.is_template,
            "is_shared_with_patients": self.is_shared_with_patients,
            "tags": parse_tags(self.tags_input),
        }


class DocumentEditorView:
    """Create/edit form for a single document, keyed by ``document_id``."""

    def __init__(
        self,
        repository: DocumentRepository,
        profiles,
        session: Optional[ActingSession],
        document_id: str,
        list_route: str = settings.DOCUMENTS_ROUTE
    ):
        self.repository = repository
        self.profiles = profiles
        self.session = session
        self.document_id = document_id
        self.list_route = list_route

        self.clinic_id: Optional[str] = None
        self.document: Optional[DocumentResponse] = None
        self.form = DocumentForm()
        self.is_loading = not self.is_new
        self.is_saving = False
        self.error: Optional[str] = None
        self.alert: Optional[str] = None
        self.redirect_to: Optional[str] = None

    @property
    def is_new(self) -> bool:
        return self.document_id == NEW_DOCUMENT_ID

    @property
    def user_id(self) -> Optional[str]:
        return self.session.user_id if self.session else None

    async def load(self) -> None:
        """Resolve the acting user's clinic and, in edit mode, load the document."""
        self.error = None

        try:
            self.clinic_id = await _resolve_clinic_id(
                self.profiles, self.session, "Failed to fetch user information"
            )
        except DocumentError as e:
            self.error = e.message
            self.is_loading = False
            return

        if self.is_new:
            return

        self.is_loading = True
        result = await self.repository.get_document(self.document_id)
        if result.ok:
            self.document = result.data
            self.form = DocumentForm.from_document(result.data)
        else:
            self.error = result.error
        self.is_loading = False

    def _changed_fields(self) -> Dict[str, Any]:
        original = DocumentForm.from_document(self.document).values()
        return {
            name: value
            for name, value in self.form.values().items()
            if value != original[name]
        }

    async def submit(self) -> bool:
        """
        Save the form. On success navigate back to the list; on failure
        keep the form as entered and surface the error.
        """
        if not self.clinic_id or not self.user_id or (not self.is_new and self.document is None):
            self.alert = "Missing required information"
            return False

        action = "create" if self.is_new else "update"
        changes = {} if self.is_new else self._changed_fields()
        if not self.is_new and not changes:
            self.redirect_to = self.list_route
            return True

        try:
            if self.is_new:
                data = DocumentCreate(
                    clinic_id=self.clinic_id,
                    created_by=self.user_id,
                    **self.form.values(),
                )
            else:
                data = DocumentUpdate(**changes)
        except PydanticValidationError as e:
            self.alert = f"Failed to {action} document: {e.errors()[0]['msg']}"
            return False

        self.is_saving = True

        if self.is_new:
            result = await self.repository.create_document(data)
        else:
            result = await self.repository.update_document(self.document_id, data)

        self.is_saving = False

        if not result.ok:
            self.alert = f"Failed to {action} document: {result.error}"
            return False

        self.document = result.data
        self.redirect_to = self.list_route
        return True

    def cancel(self) -> None:
        self.redirect_to = self.list_route
