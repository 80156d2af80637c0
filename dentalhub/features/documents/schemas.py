# Documents Feature - Schemas

from typing import Optional, List, Dict, Any
from datetime import datetime
from pydantic import BaseModel, Field
from dentalhub.features.documents.models import DocumentCategory


# Fields that may not be cleared by an update
NON_NULLABLE_UPDATE_FIELDS = {"title", "content", "is_template", "is_shared_with_patients", "tags"}


class DocumentCreate(BaseModel):
    """Input for creating a document."""
    clinic_id: str
    created_by: str
    title: str
    content: str
    category: Optional[DocumentCategory] = None
    is_template: Optional[bool] = None
    is_shared_with_patients: Optional[bool] = None
    tags: Optional[List[str]] = None


class DocumentCreateRequest(BaseModel):
    """Schema for creating a document over HTTP (clinic and creator come from the session)."""
    title: str = Field(..., description="Document title")
    content: str = Field(..., description="Document content (markdown subset)")
    category: Optional[DocumentCategory] = Field(None, description="Document category")
    is_template: bool = Field(default=False, description="Whether the document is a reusable template")
    is_shared_with_patients: bool = Field(default=False, description="Whether patients can see the document")
    tags: List[str] = Field(default_factory=list, description="Free-form tags")
    
    class Config:
        json_schema_extra = {
            "example": {
                "title": "Post-Extraction Instructions",
                "content": "## After your extraction\n\n- Bite on gauze for 30 minutes",
                "category": "instructions",
                "is_template": False,
                "is_shared_with_patients": True,
                "tags": ["extraction", "aftercare"],
            }
        }


class DocumentUpdate(BaseModel):
    """Schema for a partial document update. Only fields that are set are applied."""
    title: Optional[str] = Field(None, description="Document title")
    content: Optional[str] = Field(None, description="Document content")
    category: Optional[DocumentCategory] = Field(None, description="Document category (null clears it)")
    is_template: Optional[bool] = Field(None, description="Template flag")
    is_shared_with_patients: Optional[bool] = Field(None, description="Patient sharing flag")
    tags: Optional[List[str]] = Field(None, description="Replacement tag list")
    
    def changes(self) -> Dict[str, Any]:
        """Return the explicitly set fields, ignoring nulls for fields that cannot be cleared."""
        return {
            field: value
            for field, value in self.model_dump(exclude_unset=True).items()
            if value is not None or field not in NON_NULLABLE_UPDATE_FIELDS
        }


class SharingUpdate(BaseModel):
    """Schema for toggling patient sharing."""
    is_shared_with_patients: bool


class DocumentResponse(BaseModel):
    """Persisted document record."""
    id: str
    clinic_id: str
    created_by: str
    title: str
    content: str
    category: Optional[DocumentCategory] = None
    is_template: bool = False
    is_shared_with_patients: bool = False
    tags: List[str] = Field(default_factory=list)
    version: int = Field(1, ge=1)
    created_at: datetime
    updated_at: datetime
    
    class Config:
        json_schema_extra = {
            "example": {
                "id": "665f1c2e9b1e8a3d4c5b6a7f",
                "clinic_id": "clinic_123",
                "created_by": "user_456",
                "title": "Infection Control Policy",
                "content": "# Infection Control",
                "category": "policies",
                "is_template": False,
                "is_shared_with_patients": False,
                "tags": ["policy"],
                "version": 3,
                "created_at": "2024-01-15T10:00:00Z",
                "updated_at": "2024-02-01T09:30:00Z",
            }
        }


class DocumentListResponse(BaseModel):
    """Schema for a clinic's document list."""
    documents: List[DocumentResponse]
    total: int


class DeleteResponse(BaseModel):
    """Schema for a delete acknowledgement."""
    success: bool
    message: str
