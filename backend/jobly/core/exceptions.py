"""
Custom Exceptions for Jobly

Business logic exceptions raised by the repository layer. They carry no
HTTP concepts; the API layer maps each ``ErrorCategory`` to a status code.
"""

from typing import Optional, Dict, Any
from datetime import datetime, timezone
from enum import Enum


class ErrorCategory(Enum):
    """Error categories for classification and handling."""
    VALIDATION = "validation"
    CONFLICT = "conflict"
    NOT_FOUND = "not_found"
    DATABASE = "database"
    SYSTEM = "system"


class BaseApplicationException(Exception):
    """
    Base exception for all application-specific errors.

    Provides structured error information for consistent error handling
    and error responses.
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        category: ErrorCategory = ErrorCategory.SYSTEM,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__.upper()
        self.category = category
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for JSON serialization."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "category": self.category.value,
            "timestamp": self.timestamp.isoformat(),
            "details": self.details,
        }


# Validation Exceptions
class InvalidUpdateError(BaseApplicationException):
    """Raised when an update is requested with no fields to set."""

    def __init__(self, message: str = "No data", **kwargs):
        super().__init__(
            message=message,
            error_code="INVALID_UPDATE",
            category=ErrorCategory.VALIDATION,
            **kwargs
        )


class InvalidRangeError(BaseApplicationException):
    """Raised when search range criteria contradict each other."""

    def __init__(self, min_key: str, max_key: str, min_value: Any, max_value: Any, **kwargs):
        super().__init__(
            message=f"{min_key} must be less than {max_key}",
            error_code="INVALID_RANGE",
            category=ErrorCategory.VALIDATION,
            details={min_key: min_value, max_key: max_value},
            **kwargs
        )


# Conflict Exceptions
class DuplicateError(BaseApplicationException):
    """Raised when a create would repeat an existing natural key or row."""

    def __init__(self, resource_type: str, identity: Any, **kwargs):
        super().__init__(
            message=f"Duplicate {resource_type}: {identity}",
            error_code="DUPLICATE",
            category=ErrorCategory.CONFLICT,
            details={"resource_type": resource_type, "identity": identity},
            **kwargs
        )


# Resource Exceptions
class NotFoundError(BaseApplicationException):
    """Raised when an operation targets a key with no matching rows."""

    def __init__(self, resource_type: str, resource_id: Any, **kwargs):
        super().__init__(
            message=f"No {resource_type}: {resource_id}",
            error_code="RESOURCE_NOT_FOUND",
            category=ErrorCategory.NOT_FOUND,
            details={"resource_type": resource_type, "resource_id": resource_id},
            **kwargs
        )
