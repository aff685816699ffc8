from __future__ import annotations

from dataclasses import dataclass, field

"""Config dataclasses for the voucher ingestion tool.

The loader in voucher_ingest/config/loader.py builds these from YAML; the
defaults below are what the tool runs with when no config file exists.
"""

__all__ = [
    "ImportConfig",
    "DEFAULT_ERROR_LOG_DIR",
]

DEFAULT_ERROR_LOG_DIR = "logs"


@dataclass(frozen=True)
class ImportConfig:
    """Root configuration object for an ingestion run.

    header_aliases only extends the built-in alias table; it can never
    redefine one of the built-in aliases.
    """
    source_directory: str | None = None  # Scanned when no paths are given on the command line
    sheet_name: str | None = None  # Default sheet for every file (None = first sheet)
    header_aliases: dict[str, str] = field(default_factory=dict)  # alias -> canonical field
    error_log_dir: str = DEFAULT_ERROR_LOG_DIR
