"""
CSV / Excel reader for card imports.

Turns an uploaded file into RawRows: plain dicts keyed by the header row, in
file order. Empty cells come back as None. Nothing card-specific happens here.
"""

from io import BytesIO
from pathlib import Path
from typing import Any, Optional, Union
import structlog

import pandas as pd

from exceptions import ImportParseError, UnsupportedFileTypeError

logger = structlog.get_logger(__name__)

RawRow = dict[str, Any]

CSV_EXTENSIONS = (".csv",)
EXCEL_EXTENSIONS = (".xlsx", ".xlsm", ".xls")
CSV_CONTENT_TYPES = ("text/csv", "application/csv")
EXCEL_CONTENT_TYPES = (
    "application/vnd.ms-excel",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
)


def detect_file_kind(filename: Optional[str], content_type: Optional[str] = None) -> str:
    """
    Decide whether an upload is CSV or Excel.

    The extension wins over the content type, since browsers report
    "application/vnd.ms-excel" for plain .csv files on Windows.

    Returns:
        "csv" or "excel"

    Raises:
        UnsupportedFileTypeError: Neither extension nor content type match
    """
    name = (filename or "").lower()
    if name.endswith(CSV_EXTENSIONS):
        return "csv"
    if name.endswith(EXCEL_EXTENSIONS):
        return "excel"
    if content_type in CSV_CONTENT_TYPES:
        return "csv"
    if content_type in EXCEL_CONTENT_TYPES:
        return "excel"
    raise UnsupportedFileTypeError(filename, content_type)


def parse_spreadsheet(
    file: Union[str, Path, bytes, BytesIO],
    kind: str,
) -> list[RawRow]:
    """
    Read the first sheet of a CSV or Excel file into RawRows.

    Args:
        file: File path, raw bytes, or file-like object
        kind: "csv" or "excel" (see detect_file_kind)

    Returns:
        List of row dicts, one per data row

    Raises:
        ImportParseError: If the file cannot be read
    """
    if isinstance(file, bytes):
        file = BytesIO(file)

    logger.info("parsing_spreadsheet", kind=kind, file_type=type(file).__name__)

    try:
        if kind == "csv":
            df = pd.read_csv(
                file,
                dtype=str,
                keep_default_na=False,
                skipinitialspace=True,
                encoding="utf-8-sig"
            )
        elif kind == "excel":
            # Keep numbers as numbers; the row mapper handles 2019.0 etc.
            df = pd.read_excel(file, sheet_name=0, engine="openpyxl")
        else:
            raise ValueError(f"Unknown spreadsheet kind: {kind}")
    except pd.errors.EmptyDataError:
        logger.warning("spreadsheet_empty", kind=kind)
        return []
    except Exception as e:
        logger.error("spreadsheet_read_failed", kind=kind, error=str(e))
        raise ImportParseError(
            message=f"Failed to read {kind.upper()} file",
            details={"original_error": str(e)}
        )

    df.columns = [str(col).strip() for col in df.columns]
    rows = [
        {col: _clean_value(value) for col, value in record.items()}
        for record in df.to_dict(orient="records")
    ]

    logger.info("spreadsheet_parsed", kind=kind, rows=len(rows), columns=len(df.columns))

    return rows


def _clean_value(value: Any) -> Any:
    """Map NaN/NaT and blank strings to None, trim strings."""
    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        return value or None
    try:
        if pd.isna(value):
            return None
    except (TypeError, ValueError):
        pass
    return value
