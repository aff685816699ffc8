from __future__ import annotations

from ..models.processing_result import ProcessingResult

"""SUMMARY line rendering.

Format:
SUMMARY files={total}/{total} success={success} failed={failed}
vouchers={vouchers} errors={errors} elapsed_sec={elapsed}
"""


def _format_seconds(seconds: float) -> str:
    if seconds == 0:
        return "0"
    if seconds == int(seconds):
        return str(int(seconds))
    if seconds < 0.01:
        # Avoid scientific notation for very small durations
        return f"{seconds:.6f}".rstrip("0").rstrip(".")
    return f"{seconds:.3f}".rstrip("0").rstrip(".")


def render_summary_line(result: ProcessingResult) -> str:
    """Render the SUMMARY line for a run.

    Examples:
        >>> from datetime import datetime, timezone
        >>> start = datetime(2024, 1, 1, 10, 0, 0, tzinfo=timezone.utc)
        >>> end = datetime(2024, 1, 1, 10, 0, 2, tzinfo=timezone.utc)
        >>> result = ProcessingResult(
        ...     success_files=1, failed_files=1, total_vouchers=12, total_errors=3,
        ...     start_time=start, end_time=end, elapsed_seconds=2.0,
        ... )
        >>> render_summary_line(result)
        'SUMMARY files=2/2 success=1 failed=1 vouchers=12 errors=3 elapsed_sec=2'
    """
    total = result.total_files
    return (
        f"SUMMARY files={total}/{total} "
        f"success={result.success_files} "
        f"failed={result.failed_files} "
        f"vouchers={result.total_vouchers} "
        f"errors={result.total_errors} "
        f"elapsed_sec={_format_seconds(result.elapsed_seconds)}"
    )
