# Documents Feature - Repository

from typing import Any, Awaitable, Callable, List, Optional
from dentalhub.config import settings
from dentalhub.core.logging import logger
from dentalhub.features.documents.invalidation import DocumentListInvalidator
from dentalhub.features.documents.models import DocumentCategory
from dentalhub.features.documents.schemas import (
    DocumentCreate,
    DocumentUpdate,
    DocumentResponse,
)
from dentalhub.features.documents.store import DocumentStore
from dentalhub.shared.errors import (
    DocumentError,
    ValidationError,
    NotFoundError,
    AuthError,
    StoreError,
)
from dentalhub.shared.schemas import OperationResult


class DocumentRepository:
    """
    Access layer for clinic documents.

    Every operation returns an ``OperationResult``; failures are reported
    through the result, never raised to the caller. Successful mutations
    invalidate the clinic's document list.
    """

    def __init__(
        self,
        store: DocumentStore,
        invalidator: Optional[DocumentListInvalidator] = None,
        max_update_retries: int = settings.DOCUMENT_UPDATE_MAX_RETRIES
    ):
        self.store = store
        self.invalidator = invalidator
        self.max_update_retries = max(1, max_update_retries)

    async def _run(
        self,
        fallback_message: str,
        operation: Callable[..., Awaitable[Any]],
        *args
    ) -> OperationResult:
        try:
            return OperationResult.success(await operation(*args))
        except DocumentError as e:
            logger.warning(f"{operation.__name__.lstrip('_')} failed: {e.message}")
            return OperationResult.failure(e)
        except Exception as e:
            logger.error(f"{operation.__name__.lstrip('_')} error: {type(e).__name__}: {e}")
            return OperationResult.failure(StoreError(fallback_message))

    async def _invalidate(self, clinic_id: str) -> None:
        if self.invalidator is None:
            return
        try:
            await self.invalidator.invalidate(clinic_id)
        except Exception as e:
            logger.warning(f"Failed to invalidate document list for clinic {clinic_id}: {e}")

    async def _require(self, document_id: str) -> DocumentResponse:
        document = await self.store.get(document_id)
        if document is None:
            raise NotFoundError("Document not found")
        return document

    # ==================== Reads ====================

    async def list_documents(
        self,
        clinic_id: str,
        category: Optional[DocumentCategory] = None,
        search: Optional[str] = None
    ) -> OperationResult[List[DocumentResponse]]:
        """
        Fetch a clinic's documents, most recently updated first.

        Args:
            clinic_id: Clinic ID
            category: Exact category filter (optional)
            search: Term matched against titles and tags (optional, blank ignored)
        """
        return await self._run("Failed to fetch documents", self._list, clinic_id, category, search)

    async def _list(self, clinic_id, category, search) -> List[DocumentResponse]:
        term = search.strip() if search else None
        return await self.store.find_many(clinic_id, category=category, search=term or None)

    async def get_document(self, document_id: str) -> OperationResult[DocumentResponse]:
        """Fetch a single document by ID."""
        return await self._run("Failed to fetch document", self._require, document_id)

    # ==================== Writes ====================

    async def create_document(self, data: DocumentCreate) -> OperationResult[DocumentResponse]:
        """
        Create a document at version 1.

        The title is stored trimmed; the content is stored exactly as given.
        """
        return await self._run("Failed to create document", self._create, data)

    async def _create(self, data: DocumentCreate) -> DocumentResponse:
        if not data.title.strip():
            raise ValidationError("Title is required")
        if not data.content.strip():
            raise ValidationError("Content is required")

        document = await self.store.insert({
            "clinic_id": data.clinic_id,
            "created_by": data.created_by,
            "title": data.title.strip(),
            "content": data.content,
            "category": data.category,
            "is_template": data.is_template or False,
            "is_shared_with_patients": data.is_shared_with_patients or False,
            "tags": list(data.tags or []),
            "version": 1,
        })

        logger.info(f"Created document '{document.title}' ({document.id}) in clinic {document.clinic_id}")
        await self._invalidate(document.clinic_id)
        return document

    async def update_document(
        self,
        document_id: str,
        data: DocumentUpdate
    ) -> OperationResult[DocumentResponse]:
        """
        Apply a partial update and bump the version by one.

        The new version is computed from a fresh read and written
        conditionally on that version; a concurrent writer forces a
        re-read, so each successful update lands on its own version.
        """
        return await self._run("Failed to update document", self._update, document_id, data)

    async def _update(self, document_id: str, data: DocumentUpdate) -> DocumentResponse:
        changes = data.changes()

        for attempt in range(1, self.max_update_retries + 1):
            current = await self._require(document_id)

            updated = await self.store.update(
                document_id,
                {**changes, "version": current.version + 1},
                expected_version=current.version,
            )
            if updated is not None:
                logger.info(f"Updated document {document_id} to version {updated.version} (fields: {sorted(changes)})")
                await self._invalidate(updated.clinic_id)
                return updated

            logger.warning(f"Version conflict updating document {document_id} at v{current.version} (attempt {attempt})")

        raise StoreError("Document was modified concurrently, please retry")

    async def delete_document(self, document_id: str) -> OperationResult[bool]:
        """Permanently delete a document. Deleting an absent document succeeds."""
        return await self._run("Failed to delete document", self._delete, document_id)

    async def _delete(self, document_id: str) -> bool:
        existing = await self.store.get(document_id)
        await self.store.delete(document_id)

        if existing is not None:
            logger.info(f"Deleted document {document_id} from clinic {existing.clinic_id}")
            await self._invalidate(existing.clinic_id)
        return True

    async def duplicate_document(
        self,
        document_id: str,
        acting_user_id: Optional[str]
    ) -> OperationResult[DocumentResponse]:
        """
        Copy a document as a new version-1 document owned by the acting user.

        The copy is never shared with patients, whatever the source says.
        """
        return await self._run("Failed to duplicate document", self._duplicate, document_id, acting_user_id)

    async def _duplicate(self, document_id: str, acting_user_id: Optional[str]) -> DocumentResponse:
        original = await self._require(document_id)

        if not acting_user_id:
            raise AuthError("Not authenticated")

        copy = await self.store.insert({
            "clinic_id": original.clinic_id,
            "created_by": acting_user_id,
            "title": original.title,
            "content": original.content,
            "category": original.category,
            "is_template": original.is_template,
            "is_shared_with_patients": False,
            "tags": list(original.tags),
            "version": 1,
        })

        logger.info(f"Duplicated document {document_id} as {copy.id} by user {acting_user_id}")
        await self._invalidate(copy.clinic_id)
        return copy

    async def toggle_sharing(
        self,
        document_id: str,
        is_shared: bool
    ) -> OperationResult[DocumentResponse]:
        """Set patient sharing to exactly ``is_shared``. The version is not bumped."""
        return await self._run("Failed to update sharing status", self._toggle_sharing, document_id, is_shared)

    async def _toggle_sharing(self, document_id: str, is_shared: bool) -> DocumentResponse:
        current = await self._require(document_id)
        if current.is_shared_with_patients == is_shared:
            return current

        updated = await self.store.update(document_id, {"is_shared_with_patients": is_shared})
        if updated is None:
            raise NotFoundError("Document not found")

        logger.info(f"Document {document_id} is_shared_with_patients set to {is_shared}")
        await self._invalidate(updated.clinic_id)
        return updated
