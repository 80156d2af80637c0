from pydantic import Field
from datetime import datetime


class TimestampMixin:
    """Mixin for adding timestamp fields to documents."""
    
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
