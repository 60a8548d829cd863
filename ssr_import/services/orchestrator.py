from __future__ import annotations

import logging
import time
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from ..config.loader import ConfigError, resolve_timezone
from ..db.connection import DatabaseConnectionError, db_cursor
from ..db.store import StoreError, store_import
from ..excel.reader import SheetReadError, read_rows
from ..logging.error_log import ErrorLogBuffer, ErrorRecord
from ..models.config_models import ImportConfig
from ..models.error_record import FILE_ROW
from ..models.import_run import ImportRun
from ..models.processing_result import ProcessingResult
from ..parser.builder import ParseOutcome, SectionBuilder, build_schedule
from ..parser.classify import RowRole
from ..parser.families import DocumentFamily, UnknownFamilyError, get_family
from ..parser.normalize import NormalizedRow
from .document import DocumentWriteError, to_document, validate_sections, write_document
from .progress import RowProgress

"""Service orchestration for one SSR import run.

read rows -> classify / build tree -> validate -> emit (JSON file or
PostgreSQL). Classification problems never fail a run; boundary failures
(missing workbook, unwritable output, database errors) are raised as
ProcessingError after being recorded in the error log.
"""

logger = logging.getLogger(__name__)

FILE_LEVEL = "<FILE_LEVEL>"


class ProcessingError(Exception):
    """Fatal run failure (reported once by the CLI, exit code 1)."""


def resolve_family(config: ImportConfig) -> DocumentFamily:
    try:
        return get_family(config.family)
    except UnknownFamilyError as e:
        raise ProcessingError(str(e.args[0])) from e


def default_output_path(config: ImportConfig, input_path: Path) -> Path:
    return Path(config.output_directory) / f"{input_path.stem}_parsed.json"


def parse_file(path: Path, family: DocumentFamily, sheet: str | int = 0) -> ParseOutcome:
    """Read one sheet and rebuild its section tree."""
    rows = read_rows(path, sheet)
    data_rows = max(0, len(rows) - family.header_rows)

    with RowProgress(data_rows, description=f"Parsing {path.name}") as progress:
        def _advance(row: NormalizedRow, role: RowRole, builder: SectionBuilder) -> None:
            progress.advance(sections=len(builder.sections))

        return build_schedule(rows, family, on_row=_advance)


def inspect_file(
    path: Path, family: DocumentFamily, sheet: str | int = 0
) -> list[tuple[NormalizedRow, RowRole]]:
    """Classify every data row without emitting anything (debug aid)."""
    seen: list[tuple[NormalizedRow, RowRole]] = []
    try:
        rows = read_rows(path, sheet)
    except SheetReadError as e:
        raise ProcessingError(str(e)) from e
    build_schedule(rows, family, on_row=lambda r, role, _b: seen.append((r, role)))
    return seen


def _record(error_log: ErrorLogBuffer, file: str, sheet: Any, error_type: str, message: str) -> None:
    error_log.append(
        ErrorRecord.create(file=file, sheet=str(sheet), row=FILE_ROW, error_type=error_type, message=message)
    )


def process_file(
    config: ImportConfig,
    input_path: Path,
    *,
    output_path: Path | None = None,
    persist: bool = False,
    cursor: Any = None,
    error_log: ErrorLogBuffer | None = None,
) -> ProcessingResult:
    """Run one import.

    Args:
        config: Import configuration (family, sheet, metadata overrides, db)
        input_path: Spreadsheet to parse
        output_path: JSON destination (file mode); defaults next to output_directory
        persist: Store into PostgreSQL instead of writing JSON
        cursor: Database cursor to use (persist mode); a connection is opened
            from ``config.database`` when omitted

    Raises:
        ProcessingError: For fatal errors that prevent the run from completing
    """
    error_log = error_log if error_log is not None else ErrorLogBuffer()
    file_name = input_path.name
    start_time = datetime.now(UTC)
    started = time.perf_counter()

    try:
        family = resolve_family(config)
        tz = resolve_timezone(config.timezone)
        logger.info("Parsing %s (family=%s sheet=%s)", input_path, family.name, config.sheet)

        try:
            outcome = parse_file(input_path, family, config.sheet)
        except SheetReadError as e:
            _record(error_log, file_name, config.sheet, "READ_ERROR", str(e))
            raise ProcessingError(str(e)) from e

        run = ImportRun.for_sections(
            outcome.sections,
            title=config.title or family.title,
            year=config.year or family.year,
            source_file=file_name,
            parsed_at=datetime.now(tz),
            family=family.name,
        )
        logger.info(
            "Found %d sections, %d rate items in %d rows",
            run.total_sections,
            run.total_items,
            outcome.rows_read,
        )

        warnings = validate_sections(outcome.sections)
        for w in warnings:
            logger.warning(w)
            _record(error_log, file_name, config.sheet, "VALIDATION_WARNING", w)

        written: Path | None = None
        import_id: int | None = None
        if persist:
            import_id = _persist(config, run, outcome, cursor, error_log)
            mode = "db"
        else:
            target = output_path or default_output_path(config, input_path)
            try:
                written = write_document(target, to_document(run, outcome.sections))
            except DocumentWriteError as e:
                _record(error_log, file_name, FILE_LEVEL, "WRITE_ERROR", str(e))
                raise ProcessingError(str(e)) from e
            logger.info("Output written: %s", written)
            mode = "json"
    except ConfigError as e:
        raise ProcessingError(str(e)) from e
    finally:
        try:
            flushed = error_log.flush()
        except OSError:
            logger.warning("could not write error log", exc_info=True)
        else:
            if flushed is not None:
                logger.info("error log: %s", flushed)

    end_time = datetime.now(UTC)
    return ProcessingResult(
        run=run,
        mode=mode,
        rows_read=outcome.rows_read,
        role_counts=outcome.role_counts,
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=time.perf_counter() - started,
        output_path=written,
        import_id=import_id,
        warnings=warnings,
    )


def _persist(
    config: ImportConfig,
    run: ImportRun,
    outcome: ParseOutcome,
    cursor: Any,
    error_log: ErrorLogBuffer,
) -> int:
    try:
        if cursor is not None:
            return store_import(cursor, run, outcome.sections)
        with db_cursor(config.database) as cur:
            return store_import(cur, run, outcome.sections)
    except (DatabaseConnectionError, StoreError) as e:
        _record(error_log, run.source_file, FILE_LEVEL, "DATABASE_ERROR", str(e))
        raise ProcessingError(str(e)) from e
