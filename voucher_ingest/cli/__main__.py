from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from voucher_ingest.config.loader import DEFAULT_CONFIG_PATH, ConfigError, load_config
from voucher_ingest.logging.error_log import ErrorLogBuffer
from voucher_ingest.logging.init import log_summary, setup_logging
from voucher_ingest.models.config_models import ImportConfig
from voucher_ingest.services.orchestrator import ProcessingError, process_all, scan_input_files
from voucher_ingest.services.summary import render_summary_line

"""CLI entrypoint.

Validates voucher files and reports, per file, either the vouchers found or
every row-level error. Nothing is posted anywhere; the exit code tells a
calling script whether every file is ready for import.

Paths may be files or directories (scanned non-recursively). Without paths
the config's source_directory is scanned.
"""

EXIT_SUCCESS_ALL = 0
EXIT_FATAL = 1
EXIT_PARTIAL_FAILURE = 2

CONFIG_ENV_VAR = "VOUCHER_INGEST_CONFIG"


def _load_env_file(path: Path) -> None:
    """Load .env using python-dotenv; existing environment variables win."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=False)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="voucher-ingest",
        description="Validate purchase voucher spreadsheets (.xlsx, .xls, .csv)",
    )
    p.add_argument("paths", nargs="*", type=Path, help="Files or directories to parse")
    p.add_argument("--sheet", help="Sheet to read (default: first sheet)")
    p.add_argument("--config", type=Path, help=f"Config file (default: ${CONFIG_ENV_VAR} or {DEFAULT_CONFIG_PATH})")
    p.add_argument("--json", action="store_true", help="Print every parse result as JSON")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    return p.parse_args(argv)


def _resolve_config(explicit: Path | None) -> ImportConfig:
    """Load the config file; only a missing *default* config falls back to built-in defaults."""
    if explicit is not None:
        return load_config(explicit)
    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path:
        return load_config(Path(env_path))
    if DEFAULT_CONFIG_PATH.exists():
        return load_config(DEFAULT_CONFIG_PATH)
    return ImportConfig()


def _collect_paths(args_paths: list[Path], cfg: ImportConfig) -> list[Path]:
    if not args_paths:
        if cfg.source_directory is None:
            raise ProcessingError("no input paths given and no source_directory configured")
        return scan_input_files(Path(cfg.source_directory))
    paths: list[Path] = []
    for p in args_paths:
        if p.is_dir():
            paths.extend(scan_input_files(p))
        else:
            # Missing or unsupported files are reported by the pipeline itself
            paths.append(p)
    return paths


def main(argv: list[str] | None = None) -> int:
    # None only: an explicit [] must not fall back to sys.argv (pytest args)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    logger = setup_logging(debug=args.debug)
    logger.debug("debug mode enabled")

    _load_env_file(Path(".env"))
    try:
        cfg = _resolve_config(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.sheet:
        cfg = ImportConfig(
            source_directory=cfg.source_directory,
            sheet_name=args.sheet,
            header_aliases=cfg.header_aliases,
            error_log_dir=cfg.error_log_dir,
        )

    try:
        paths = _collect_paths(args.paths, cfg)
    except ProcessingError as e:
        logger.error(str(e))
        return EXIT_FATAL

    error_log = ErrorLogBuffer(cfg.error_log_dir)
    try:
        result = process_all(paths, cfg, error_log)
    except ProcessingError as e:
        logger.error(f"processing: {e}")
        return EXIT_FATAL

    for stat in result.file_stats or []:
        if args.json:
            print(json.dumps({"file": stat.file_name, **stat.result.to_dict()}, ensure_ascii=False, indent=2))
            continue
        for err in stat.result.errors:
            column = f" column={err.column}" if err.column else ""
            logger.error(f"{stat.file_name} row={err.row}{column} {err.message}")

    log_path = error_log.flush()
    if log_path is not None:
        logger.info(f"error log written to {log_path}")

    # log_summary adds the "SUMMARY " prefix itself
    log_summary(render_summary_line(result)[len("SUMMARY "):])

    if result.failed_files > 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
