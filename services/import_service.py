"""
Bulk import service.

Drives every import path (column-mapped spreadsheet, eBay export, JSON
array, free text) through the same per-row contract:

    candidate -> validate -> persist -> ImportResult

A failing row never aborts the batch and never rolls back earlier rows;
it is reported in the results with the candidate echoed back.
"""

from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any, Callable, Optional
import structlog

from config import settings
from models.card import CardCreate, Condition, Sport
from models.imports import ColumnMapping, ImportReport, ImportResult
from parsers.spreadsheet_parser import RawRow
from parsers.row_mapper import map_row, has_card_data, coerce_card_object
from parsers.ebay_parser import map_ebay_row
from parsers.text_parser import parse_text
from services.card_service import CardService, get_card_service
from exceptions import InvalidCardError

logger = structlog.get_logger(__name__)


UNKNOWN_NAME = "Unknown"

# A unit of work: row index plus a thunk producing the candidate
Job = tuple[int, Callable[[], CardCreate]]


def validate_candidate(candidate: CardCreate) -> CardCreate:
    """
    Relaxed validation applied to mapped candidates.

    Only the fields every card must have are checked; optional fields are
    taken as mapped.

    Raises:
        InvalidCardError: If a required field is missing or invalid
    """
    if not candidate.player_name or not candidate.player_name.strip():
        raise InvalidCardError("Player name is required", field="player_name")
    if not isinstance(candidate.sport, Sport):
        raise InvalidCardError(f"Invalid sport: {candidate.sport}", field="sport")
    if not isinstance(candidate.condition, Condition):
        raise InvalidCardError(f"Invalid condition: {candidate.condition}", field="condition")
    return candidate


def build_report(results: list[ImportResult], skipped: int = 0) -> ImportReport:
    """Aggregate per-row results into the import summary."""
    imported = sum(1 for r in results if r.success)
    failed = len(results) - imported
    return ImportReport(
        message=f"{imported} imported, {failed} failed",
        imported=imported,
        failed=failed,
        skipped=skipped,
        results=results,
    )


class ImportService:
    """
    Batch import business logic.

    Rows are processed on a thread pool; results are slotted back by row
    index so the report follows input order regardless of completion order.
    """

    def __init__(
        self,
        card_service: Optional[CardService] = None,
        max_workers: Optional[int] = None
    ):
        self.cards = card_service or get_card_service()
        self.max_workers = max_workers or settings.import_max_workers

    # ===================
    # ENTRY POINTS
    # ===================

    def import_rows(
        self,
        rows: list[RawRow],
        mapping: Optional[ColumnMapping] = None
    ) -> ImportReport:
        """
        Import spreadsheet rows through a column mapping.

        Args:
            rows: Parsed spreadsheet rows
            mapping: Column mapping (defaults to the standard export layout)

        Returns:
            ImportReport; rows without card data are skipped, not failed
        """
        mapping = mapping or ColumnMapping()
        kept = [row for row in rows if has_card_data(row, mapping)]
        skipped = len(rows) - len(kept)

        logger.info(
            "import_started",
            source="spreadsheet",
            rows=len(rows),
            kept=len(kept),
            skipped=skipped
        )

        jobs = [(i, _bind(map_row, row, mapping)) for i, row in enumerate(kept)]
        return self._run(jobs, source="spreadsheet", skipped=skipped)

    def import_ebay(self, rows: list[RawRow]) -> ImportReport:
        """Import rows of an eBay bulk-listing export."""
        logger.info("import_started", source="ebay", rows=len(rows))
        jobs = [(i, _bind(map_ebay_row, row)) for i, row in enumerate(rows)]
        return self._run(jobs, source="ebay")

    def import_cards(self, items: list[Any]) -> ImportReport:
        """
        Import a JSON array of card-like objects.

        Missing player, sport, year and condition get defaults; anything
        else that fails validation fails just that item.
        """
        logger.info("import_started", source="json", rows=len(items))
        jobs = [(i, _bind(coerce_card_object, item)) for i, item in enumerate(items)]
        return self._run(jobs, source="json", raw_items=items)

    def import_text(self, text: str) -> ImportReport:
        """Import one card per non-blank line of free text."""
        candidates = parse_text(text)
        logger.info("import_started", source="text", rows=len(candidates))
        jobs = [(i, _constant(candidate)) for i, candidate in enumerate(candidates)]
        return self._run(jobs, source="text")

    # ===================
    # ROW PROCESSING
    # ===================

    def _run(
        self,
        jobs: list[Job],
        source: str,
        skipped: int = 0,
        raw_items: Optional[list[Any]] = None
    ) -> ImportReport:
        results: list[Optional[ImportResult]] = [None] * len(jobs)

        if self.max_workers <= 1 or len(jobs) <= 1:
            for index, build in jobs:
                results[index] = self._process(index, build, raw_items)
        else:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                futures = {
                    executor.submit(self._process, index, build, raw_items): index
                    for index, build in jobs
                }
                for future in as_completed(futures):
                    results[futures[future]] = future.result()

        report = build_report(results, skipped=skipped)

        logger.info(
            "import_completed",
            source=source,
            imported=report.imported,
            failed=report.failed,
            skipped=skipped
        )
        return report

    def _process(
        self,
        index: int,
        build: Callable[[], CardCreate],
        raw_items: Optional[list[Any]] = None
    ) -> ImportResult:
        """Map, validate and persist one row. Never raises."""
        candidate: Optional[CardCreate] = None
        try:
            candidate = build()
            validate_candidate(candidate)
            card = self.cards.create(candidate)
            return ImportResult(row=index, success=True, card=card)

        except Exception as e:
            name = _row_name(candidate, raw_items[index] if raw_items else None)
            message = _error_message(e)

            logger.warning(
                "import_row_failed",
                row=index,
                player_name=name,
                error=message,
                error_type=type(e).__name__
            )

            return ImportResult(
                row=index,
                success=False,
                error=f"Error processing record: {name} - {message}",
                data=candidate,
            )


# ===================
# HELPERS
# ===================

def _bind(func: Callable[..., CardCreate], *args) -> Callable[[], CardCreate]:
    return lambda: func(*args)


def _constant(candidate: CardCreate) -> Callable[[], CardCreate]:
    return lambda: candidate


def _row_name(candidate: Optional[CardCreate], raw_item: Any) -> str:
    """Best available player name for a failure message."""
    if candidate is not None and candidate.player_name:
        return candidate.player_name
    if isinstance(raw_item, dict):
        name = raw_item.get("playerName") or raw_item.get("player_name")
        if isinstance(name, str) and name.strip():
            return name.strip()
    return UNKNOWN_NAME


def _error_message(e: Exception) -> str:
    """AppError carries a clean message; everything else uses str()."""
    return getattr(e, "message", None) or str(e)


# Singleton instance for convenience
_import_service: Optional[ImportService] = None

def get_import_service() -> ImportService:
    """Get or create ImportService instance."""
    global _import_service
    if _import_service is None:
        _import_service = ImportService()
    return _import_service
