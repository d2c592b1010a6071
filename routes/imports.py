"""
Bulk import API routes.

Endpoints:
- POST /api/import         CSV/Excel upload with optional columnMap
- POST /api/import/ebay    eBay bulk-listing export upload
- POST /api/import/cards   JSON array of card objects
- POST /api/import/text    Free text, one card per line

File-level problems (unreadable file, bad columnMap, wrong type, empty or
oversized upload) reject the whole request. Row-level problems are reported
per row in the ImportReport.
"""

import json
from typing import Optional

from fastapi import APIRouter, UploadFile, File, Form
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
import structlog

from config import settings
from models.imports import (
    ColumnMapping,
    ImportReport,
    TextImportRequest,
    BulkCardsRequest,
)
from parsers.spreadsheet_parser import parse_spreadsheet, detect_file_kind
from parsers.ebay_parser import is_ebay_export
from services.import_service import get_import_service
from exceptions import (
    AppError,
    ColumnMappingError,
    EmptyUploadError,
    ImportParseError,
    UploadTooLargeError,
)

logger = structlog.get_logger(__name__)

router = APIRouter()


# ===================
# EXCEPTION HANDLER
# ===================

def handle_error(e: Exception) -> JSONResponse:
    """Convert exception to JSON response."""
    if isinstance(e, AppError):
        return JSONResponse(
            status_code=e.status_code,
            content=e.to_dict()
        )
    # Unexpected error
    logger.error("unexpected_error", error=str(e), type=type(e).__name__)
    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred"
            }
        }
    )


# ===================
# HELPERS
# ===================

def parse_column_map(raw: Optional[str]) -> ColumnMapping:
    """
    Build a ColumnMapping from the columnMap form field.

    Keys may be camelCase or snake_case; keys not given keep their default
    column and unknown keys are an error.
    A blank field means the default mapping.

    Raises:
        ColumnMappingError: Not JSON, not an object, unknown keys or bad values
    """
    if raw is None or not raw.strip():
        return ColumnMapping()

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ColumnMappingError(f"columnMap is not valid JSON: {e.msg}", raw=raw)

    if not isinstance(data, dict):
        raise ColumnMappingError("columnMap must be a JSON object", raw=raw)

    try:
        return ColumnMapping.model_validate(data)
    except PydanticValidationError as e:
        raise ColumnMappingError(
            f"columnMap has invalid values: {e.error_count()} error(s)",
            raw=raw
        )


async def read_upload(file: UploadFile) -> bytes:
    """
    Read an upload, enforcing the size limit.

    Raises:
        EmptyUploadError: No bytes received
        UploadTooLargeError: Above settings.max_upload_mb
    """
    content = await file.read()

    if not content:
        raise EmptyUploadError()
    if len(content) > settings.max_upload_bytes:
        raise UploadTooLargeError(len(content), settings.max_upload_bytes)

    return content


# ===================
# ROUTES
# ===================

@router.post("", response_model=ImportReport)
async def import_spreadsheet(
    file: UploadFile = File(..., description="CSV or Excel file"),
    column_map: Optional[str] = Form(
        None,
        alias="columnMap",
        description="JSON object mapping card fields to column names"
    )
):
    """
    Import cards from a CSV or Excel file.

    Rows without a player/card name (and without an image plus card
    number) are skipped. Each remaining row is mapped, validated and
    stored independently.

    Raises:
        400: Unsupported type, unreadable file, empty upload, bad columnMap
        413: File too large
    """
    logger.info(
        "import_upload_started",
        filename=file.filename,
        content_type=file.content_type
    )

    try:
        mapping = parse_column_map(column_map)
        kind = detect_file_kind(file.filename, file.content_type)
        content = await read_upload(file)

        rows = parse_spreadsheet(content, kind)

        service = get_import_service()
        return service.import_rows(rows, mapping)

    except Exception as e:
        return handle_error(e)


@router.post("/ebay", response_model=ImportReport)
async def import_ebay_export(file: UploadFile = File(..., description="eBay export (CSV or Excel)")):
    """
    Import cards from an eBay bulk-listing export.

    Raises:
        400: Unsupported type, unreadable file, empty upload, not an eBay export
        413: File too large
    """
    logger.info(
        "ebay_upload_started",
        filename=file.filename,
        content_type=file.content_type
    )

    try:
        kind = detect_file_kind(file.filename, file.content_type)
        content = await read_upload(file)

        rows = parse_spreadsheet(content, kind)
        if rows and not is_ebay_export(rows[0].keys()):
            raise ImportParseError(
                "File does not look like an eBay export",
                details={"required_columns": ["Title", "PicURL"]}
            )

        service = get_import_service()
        return service.import_ebay(rows)

    except Exception as e:
        return handle_error(e)


@router.post("/cards", response_model=ImportReport)
async def import_card_objects(data: BulkCardsRequest):
    """
    Import a JSON array of card objects.

    Missing player name, sport, year and condition are defaulted.
    """
    try:
        service = get_import_service()
        return service.import_cards(data.cards)

    except Exception as e:
        return handle_error(e)


@router.post("/text", response_model=ImportReport)
async def import_text(data: TextImportRequest):
    """
    Import cards from free text, one description per line.

    Raises:
        400: Text is blank
    """
    try:
        if not data.text.strip():
            raise EmptyUploadError("Text is required")

        service = get_import_service()
        return service.import_text(data.text)

    except Exception as e:
        return handle_error(e)
