"""
Custom exceptions module.
"""

from exceptions.errors import (
    # Base exceptions
    AppError,
    NotFoundError,
    ValidationError,
    BadRequestError,
    DatabaseError,

    # Cards
    CardNotFoundError,
    InvalidCardError,

    # Imports
    ImportParseError,
    UnsupportedFileTypeError,
    EmptyUploadError,
    UploadTooLargeError,
    ColumnMappingError,
)

__all__ = [
    # Base
    "AppError",
    "NotFoundError",
    "ValidationError",
    "BadRequestError",
    "DatabaseError",

    # Cards
    "CardNotFoundError",
    "InvalidCardError",

    # Imports
    "ImportParseError",
    "UnsupportedFileTypeError",
    "EmptyUploadError",
    "UploadTooLargeError",
    "ColumnMappingError",
]
