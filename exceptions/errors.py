"""
Custom exception classes for the application.

Every error carries a machine-readable code and an HTTP status so routes can
turn it into the standard error envelope.
"""

from typing import Optional, Any
from datetime import datetime


class AppError(Exception):
    """
    Base exception for all application errors.

    All custom exceptions inherit from this.

    Attributes:
        code: Error code (e.g., "CARD_NOT_FOUND")
        message: Human-readable message
        status_code: HTTP status code
        details: Additional context
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.utcnow().isoformat()
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to API response format."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
                "timestamp": self.timestamp
            }
        }


class NotFoundError(AppError):
    """Resource not found (404)."""

    def __init__(
        self,
        resource: str,
        identifier: str,
        code: Optional[str] = None
    ):
        super().__init__(
            code=code or f"{resource.upper()}_NOT_FOUND",
            message=f"{resource} not found",
            status_code=404,
            details={"id": identifier}
        )


class ValidationError(AppError):
    """Validation failed (422)."""

    def __init__(
        self,
        message: str,
        code: str = "VALIDATION_ERROR",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=422,
            details=details
        )


class BadRequestError(AppError):
    """Request could not be processed as sent (400)."""

    def __init__(
        self,
        message: str,
        code: str = "BAD_REQUEST",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=400,
            details=details
        )


class DatabaseError(AppError):
    """Store operation failed (500)."""

    def __init__(
        self,
        operation: str,
        message: str,
        details: Optional[dict] = None
    ):
        super().__init__(
            code="DATABASE_ERROR",
            message=f"Database {operation} failed: {message}",
            status_code=500,
            details={"operation": operation, **(details or {})}
        )


# ===================
# CARD ERRORS
# ===================

class CardNotFoundError(NotFoundError):
    """Card not found."""

    def __init__(self, card_id: int):
        super().__init__(
            resource="Card",
            identifier=str(card_id),
            code="CARD_NOT_FOUND"
        )


class InvalidCardError(ValidationError):
    """Card record failed import validation."""

    def __init__(self, message: str, field: str):
        super().__init__(
            code="CARD_INVALID",
            message=message,
            details={"field": field}
        )


# ===================
# IMPORT ERRORS
# ===================

class ImportParseError(BadRequestError):
    """Uploaded file could not be read into rows."""

    def __init__(
        self,
        message: str,
        details: Optional[dict] = None
    ):
        super().__init__(
            code="IMPORT_PARSE_ERROR",
            message=message,
            details=details
        )


class UnsupportedFileTypeError(BadRequestError):
    """Uploaded file is neither CSV nor Excel."""

    def __init__(self, filename: Optional[str], content_type: Optional[str] = None):
        super().__init__(
            code="UNSUPPORTED_FILE_TYPE",
            message="Invalid file type. Only CSV and Excel files are allowed.",
            details={"filename": filename, "content_type": content_type}
        )


class EmptyUploadError(BadRequestError):
    """Upload or text body carried no data."""

    def __init__(self, message: str = "Uploaded file is empty"):
        super().__init__(
            code="EMPTY_UPLOAD",
            message=message
        )


class UploadTooLargeError(AppError):
    """Uploaded file exceeds the configured limit (413)."""

    def __init__(self, size_bytes: int, limit_bytes: int):
        super().__init__(
            code="UPLOAD_TOO_LARGE",
            message=f"File exceeds the {limit_bytes // (1024 * 1024)}MB limit",
            status_code=413,
            details={"size_bytes": size_bytes, "limit_bytes": limit_bytes}
        )


class ColumnMappingError(BadRequestError):
    """columnMap form field is not a valid JSON object of strings."""

    def __init__(self, message: str, raw: Optional[str] = None):
        super().__init__(
            code="COLUMN_MAP_INVALID",
            message=message,
            details={"column_map": raw}
        )
