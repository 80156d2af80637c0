"""Domain error taxonomy for the documents feature."""

from enum import Enum


class ErrorType(str, Enum):
    """Kinds of failure a repository operation can report."""
    
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    AUTH = "auth"
    STORE = "store"


class DocumentError(Exception):
    """Base class for errors normalised into an operation result."""
    
    error_type: ErrorType = ErrorType.STORE
    default_message: str = "Unexpected error"
    
    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(DocumentError):
    """Required input is missing or blank."""
    
    error_type = ErrorType.VALIDATION
    default_message = "Invalid input"


class NotFoundError(DocumentError):
    """Identifier does not resolve to a stored row."""
    
    error_type = ErrorType.NOT_FOUND
    default_message = "Document not found"


class AuthError(DocumentError):
    """No acting user identity was supplied."""
    
    error_type = ErrorType.AUTH
    default_message = "Not authenticated"


class StoreError(DocumentError):
    """Storage backend was unreachable or rejected the request."""
    
    error_type = ErrorType.STORE
    default_message = "Storage request failed"
