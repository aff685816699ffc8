from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

from tqdm import tqdm
from tqdm.std import tqdm as TqdmType

from ..models.parse_result import ParseResult

"""Progress display with tqdm (TTY only).

One bar over the voucher files of a run. The postfix keeps a running tally of
accepted and rejected files and of the vouchers found so far. Outside a TTY
(CI, pipes) the bar is disabled so no ANSI control sequences end up in
captured output; the tally is still kept.
"""

__all__ = [
    "ProgressTracker",
    "is_tty_enabled",
]


def is_tty_enabled() -> bool:
    """Return True if stdout is a TTY and progress should be displayed."""
    return sys.stdout.isatty()


class ProgressTracker:
    """File-level progress for a validation run."""

    def __init__(self, total_files: int, *, description: str = "Validating vouchers") -> None:
        self.description = description
        self.accepted = 0
        self.rejected = 0
        self.vouchers = 0

        self.pbar: TqdmType[Any] | None = None
        if is_tty_enabled():
            self.pbar = tqdm(
                total=total_files,
                desc=description,
                unit="file",
                leave=True,
                ncols=80,
                ascii=True,
            )

    def start_file(self, file_path: Path) -> None:
        if self.pbar is not None:
            self.pbar.set_description(f"{self.description} ({file_path.name})")

    def finish_file(self, result: ParseResult) -> None:
        """Count one parsed file and advance the bar."""
        if result.success:
            self.accepted += 1
            self.vouchers += len(result.vouchers)
        else:
            self.rejected += 1
        if self.pbar is not None:
            self.pbar.set_postfix(ok=self.accepted, rejected=self.rejected, vouchers=self.vouchers)
            self.pbar.set_description(self.description)
            self.pbar.update(1)

    def close(self) -> None:
        if self.pbar is not None:
            self.pbar.close()
            self.pbar = None

    def __enter__(self) -> ProgressTracker:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
