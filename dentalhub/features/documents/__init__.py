# Documents Feature

from dentalhub.features.documents.models import ClinicDocument, DocumentCategory
from dentalhub.features.documents.repository import DocumentRepository
from dentalhub.features.documents.router import router

__all__ = ["ClinicDocument", "DocumentCategory", "DocumentRepository", "router"]
