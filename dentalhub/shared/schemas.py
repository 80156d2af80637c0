from pydantic import BaseModel
from typing import Optional, Generic, TypeVar

from dentalhub.shared.errors import DocumentError, ErrorType


T = TypeVar("T")


class OperationResult(BaseModel, Generic[T]):
    """
    Outcome of a repository operation.
    
    Carries either a value in ``data`` or a human-readable ``error``
    together with its ``error_type``.
    """
    
    data: Optional[T] = None
    error: Optional[str] = None
    error_type: Optional[ErrorType] = None
    
    @property
    def ok(self) -> bool:
        return self.error is None
    
    @classmethod
    def success(cls, data: T) -> "OperationResult[T]":
        return cls(data=data)
    
    @classmethod
    def failure(cls, exc: DocumentError) -> "OperationResult[T]":
        return cls(error=exc.message, error_type=exc.error_type)
