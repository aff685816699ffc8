from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import UTC, datetime
from pathlib import Path

from ..excel.reader import CSV_SHEET_NAME, is_supported_file
from ..logging.error_log import ErrorLogBuffer
from ..models.config_models import ImportConfig
from ..models.error_record import ErrorRecord
from ..models.parse_result import FILE_LEVEL_ROW, ParseResult
from ..models.processing_result import FileStat, FileStatus, ProcessingResult
from .headers import build_alias_table
from .pipeline import parse_voucher_file
from .progress import ProgressTracker

logger = logging.getLogger(__name__)

"""Multi-file orchestration.

Runs the voucher pipeline over every input file, feeds rejected files'
errors into the error log and aggregates a ProcessingResult. Files are
independent: one rejected file never affects another.
"""

__all__ = [
    "ProcessingError",
    "scan_input_files",
    "process_all",
]

FILE_LEVEL_SHEET = "<FILE_LEVEL>"


class ProcessingError(Exception):
    """Fatal error that prevents a run from starting."""


def scan_input_files(directory: Path) -> list[Path]:
    """Return supported files in ``directory`` (non-recursive), sorted by name.

    Raises:
        ProcessingError: If the directory doesn't exist or can't be read
    """
    if not directory.exists():
        raise ProcessingError(f"Directory not found: {directory}")

    if not directory.is_dir():
        raise ProcessingError(f"Path is not a directory: {directory}")

    try:
        return sorted(p for p in directory.iterdir() if p.is_file() and is_supported_file(p))
    except OSError as e:
        raise ProcessingError(f"Error reading directory {directory}: {e}") from e


def _sheet_label(path: Path, sheet_name: str | None, result: ParseResult) -> str:
    if any(e.row == FILE_LEVEL_ROW for e in result.errors):
        return FILE_LEVEL_SHEET
    if sheet_name:
        return sheet_name
    return CSV_SHEET_NAME if path.suffix.lower() == ".csv" else "<FIRST_SHEET>"


def process_all(
    paths: Iterable[Path],
    config: ImportConfig | None = None,
    error_log: ErrorLogBuffer | None = None,
) -> ProcessingResult:
    """Parse every file in ``paths`` and aggregate the outcome.

    Args:
        paths: Input files, processed in the given order
        config: Run configuration (sheet name, extra header aliases)
        error_log: Buffer receiving one ErrorRecord per error of a rejected file

    Raises:
        ProcessingError: If the configured header aliases are invalid
    """
    config = config or ImportConfig()
    try:
        aliases = build_alias_table(config.header_aliases)
    except ValueError as e:
        raise ProcessingError(f"Invalid configuration: {e}") from e

    file_paths = list(paths)
    start_time = datetime.now(UTC)
    file_stats: list[FileStat] = []
    success_count = 0
    failed_count = 0
    total_vouchers = 0
    total_errors = 0

    with ProgressTracker(len(file_paths)) as progress:
        for file_path in file_paths:
            progress.start_file(file_path)
            file_start = datetime.now(UTC)

            result = parse_voucher_file(file_path, config.sheet_name, aliases=aliases)

            file_elapsed = (datetime.now(UTC) - file_start).total_seconds()
            if result.success:
                success_count += 1
                total_vouchers += len(result.vouchers)
                status = FileStatus.SUCCESS
                for warning in result.warnings:
                    logger.info(f"{file_path.name}: {warning}")
            else:
                failed_count += 1
                total_errors += len(result.errors)
                status = FileStatus.FAILED
                logger.error(f"{file_path.name}: rejected with {len(result.errors)} errors")
                if error_log is not None:
                    sheet = _sheet_label(file_path, config.sheet_name, result)
                    error_log.extend(
                        [ErrorRecord.from_parse_error(file_path.name, sheet, e) for e in result.errors]
                    )

            progress.finish_file(result)
            file_stats.append(FileStat(
                file_name=file_path.name,
                status=status,
                result=result,
                elapsed_seconds=file_elapsed,
            ))

    end_time = datetime.now(UTC)
    return ProcessingResult(
        success_files=success_count,
        failed_files=failed_count,
        total_vouchers=total_vouchers,
        total_errors=total_errors,
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
        file_stats=file_stats,
    )
