# Documents Feature - Models

from enum import Enum
from typing import List, Optional
from beanie import Document, Indexed
from pydantic import Field
from dentalhub.shared.models import TimestampMixin


class DocumentCategory(str, Enum):
    """Fixed set of clinic document categories."""
    
    POLICIES = "policies"
    PROTOCOLS = "protocols"
    FORMS = "forms"
    INSTRUCTIONS = "instructions"
    INSURANCE = "insurance"
    OTHER = "other"


class ClinicDocument(Document, TimestampMixin):
    """
    Clinic document model.
    Represents a policy, protocol, form or other text owned by one clinic.
    Documents can be flagged as templates and shared with patients.
    """
    
    # Clinic this document belongs to (never changes after creation)
    clinic_id: Indexed(str)
    
    # Doctor who created the document (or the copy)
    created_by: str
    
    # Document content
    title: str
    content: str
    category: Optional[DocumentCategory] = None
    tags: List[str] = Field(default_factory=list)
    
    # Flags
    is_template: bool = False
    is_shared_with_patients: bool = False
    
    # Revision counter, bumped on every content/metadata update
    version: int = 1
    
    class Settings:
        name = "clinic_documents"
        use_state_management = True
        indexes = [
            # Index for the clinic list ordered by last update
            [("clinic_id", 1), ("updated_at", -1)],
            # Index for category filtering
            [("clinic_id", 1), ("category", 1)],
            # Index for tag search
            [("tags", 1)],
        ]
    
    class Config:
        json_schema_extra = {
            "example": {
                "clinic_id": "clinic_123",
                "created_by": "user_456",
                "title": "Infection Control Policy",
                "content": "# Infection Control\n\nAll instruments must be sterilised.",
                "category": "policies",
                "tags": ["policy", "sterilisation"],
                "is_template": False,
                "is_shared_with_patients": False,
                "version": 1,
            }
        }
