# Documents Feature - Store

import re
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List, Optional
from beanie import PydanticObjectId, UpdateResponse
from beanie.operators import Or, RegEx, Set
from bson.errors import InvalidId
from pymongo.errors import PyMongoError
from dentalhub.features.documents.models import ClinicDocument, DocumentCategory
from dentalhub.features.documents.schemas import DocumentResponse
from dentalhub.shared.errors import StoreError


class DocumentStore(ABC):
    """Persistence port for clinic documents."""

    @abstractmethod
    async def find_many(
        self,
        clinic_id: str,
        category: Optional[DocumentCategory] = None,
        search: Optional[str] = None
    ) -> List[DocumentResponse]:
        """Documents of a clinic, most recently updated first."""

    @abstractmethod
    async def get(self, document_id: str) -> Optional[DocumentResponse]:
        """Single document, or None when the id does not resolve."""

    @abstractmethod
    async def insert(self, values: Dict[str, Any]) -> DocumentResponse:
        """Insert a new row; the store assigns id and timestamps."""

    @abstractmethod
    async def update(
        self,
        document_id: str,
        values: Dict[str, Any],
        expected_version: Optional[int] = None
    ) -> Optional[DocumentResponse]:
        """
        Write ``values`` to a single row and refresh ``updated_at``.

        When ``expected_version`` is given the write only applies if the
        stored version still equals it. Returns None when nothing matched.
        """

    @abstractmethod
    async def delete(self, document_id: str) -> None:
        """Remove a row. Removing an absent row is not an error."""


def _to_response(document: ClinicDocument) -> DocumentResponse:
    """Convert ClinicDocument to the record schema."""
    return DocumentResponse(
        id=str(document.id),
        clinic_id=document.clinic_id,
        created_by=document.created_by,
        title=document.title,
        content=document.content,
        category=document.category,
        is_template=document.is_template,
        is_shared_with_patients=document.is_shared_with_patients,
        tags=list(document.tags),
        version=document.version,
        created_at=document.created_at,
        updated_at=document.updated_at,
    )


def _object_id(document_id: str) -> Optional[PydanticObjectId]:
    try:
        return PydanticObjectId(document_id)
    except (InvalidId, TypeError):
        return None


class BeanieDocumentStore(DocumentStore):
    """MongoDB-backed store using Beanie."""

    async def find_many(
        self,
        clinic_id: str,
        category: Optional[DocumentCategory] = None,
        search: Optional[str] = None
    ) -> List[DocumentResponse]:
        criteria = [ClinicDocument.clinic_id == clinic_id]

        if category:
            criteria.append(ClinicDocument.category == category)

        if search:
            # Title substring or any tag containing the term, both case-insensitive
            pattern = re.escape(search)
            criteria.append(Or(
                RegEx(ClinicDocument.title, pattern, options="i"),
                RegEx(ClinicDocument.tags, pattern, options="i"),
            ))

        try:
            documents = await ClinicDocument.find(*criteria).sort(
                [("updated_at", -1)]
            ).to_list()
        except PyMongoError as e:
            raise StoreError(str(e))

        return [_to_response(document) for document in documents]

    async def get(self, document_id: str) -> Optional[DocumentResponse]:
        object_id = _object_id(document_id)
        if object_id is None:
            return None

        try:
            document = await ClinicDocument.get(object_id)
        except PyMongoError as e:
            raise StoreError(str(e))

        return _to_response(document) if document else None

    async def insert(self, values: Dict[str, Any]) -> DocumentResponse:
        document = ClinicDocument(**values)

        try:
            await document.insert()
        except PyMongoError as e:
            raise StoreError(str(e))

        return _to_response(document)

    async def update(
        self,
        document_id: str,
        values: Dict[str, Any],
        expected_version: Optional[int] = None
    ) -> Optional[DocumentResponse]:
        object_id = _object_id(document_id)
        if object_id is None:
            return None

        criteria = [ClinicDocument.id == object_id]
        if expected_version is not None:
            criteria.append(ClinicDocument.version == expected_version)

        try:
            document = await ClinicDocument.find_one(*criteria).update(
                Set({**values, "updated_at": datetime.utcnow()}),
                response_type=UpdateResponse.NEW_DOCUMENT,
            )
        except PyMongoError as e:
            raise StoreError(str(e))

        return _to_response(document) if document else None

    async def delete(self, document_id: str) -> None:
        object_id = _object_id(document_id)
        if object_id is None:
            return

        try:
            await ClinicDocument.find_one(ClinicDocument.id == object_id).delete()
        except PyMongoError as e:
            raise StoreError(str(e))


class ClinicPolicyStore(DocumentStore):
    """
    Tenant access policy applied at the store boundary.

    Rows that belong to other clinics are invisible to the wrapped store:
    reads return nothing, updates and deletes match nothing, and inserting
    a row for another clinic is rejected.
    """

    def __init__(self, inner: DocumentStore, clinic_id: str):
        self.inner = inner
        self.clinic_id = clinic_id

    async def find_many(
        self,
        clinic_id: str,
        category: Optional[DocumentCategory] = None,
        search: Optional[str] = None
    ) -> List[DocumentResponse]:
        if clinic_id != self.clinic_id:
            return []
        return await self.inner.find_many(clinic_id, category=category, search=search)

    async def get(self, document_id: str) -> Optional[DocumentResponse]:
        document = await self.inner.get(document_id)
        if document is None or document.clinic_id != self.clinic_id:
            return None
        return document

    async def insert(self, values: Dict[str, Any]) -> DocumentResponse:
        if values.get("clinic_id") != self.clinic_id:
            raise StoreError("new row violates row-level security policy")
        return await self.inner.insert(values)

    async def update(
        self,
        document_id: str,
        values: Dict[str, Any],
        expected_version: Optional[int] = None
    ) -> Optional[DocumentResponse]:
        if await self.get(document_id) is None:
            return None
        return await self.inner.update(document_id, values, expected_version=expected_version)

    async def delete(self, document_id: str) -> None:
        if await self.get(document_id) is None:
            return
        await self.inner.delete(document_id)
