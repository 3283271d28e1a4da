from __future__ import annotations

from ..models.import_result import ImportResult

"""Summary line rendering for the SUMMARY output of one import run."""


def _format_seconds(seconds: float) -> str:
    if seconds == 0:
        return "0"
    if seconds == int(seconds):
        return str(int(seconds))
    if seconds < 0.01:
        # avoid scientific notation for very small numbers
        return f"{seconds:.6f}".rstrip("0").rstrip(".")
    return f"{seconds:.3f}".rstrip("0").rstrip(".")


def render_summary_line(result: ImportResult) -> str:
    """Render a SUMMARY line from an ImportResult.

    Format:
    SUMMARY resource={r} file={f} rows={n} created={k} failed_row={row|-}
    status={success|partial|failed} elapsed_sec={t}

    Examples:
        >>> from datetime import datetime, timezone
        >>> start = datetime(2024, 1, 1, 10, 0, 0, tzinfo=timezone.utc)
        >>> end = datetime(2024, 1, 1, 10, 0, 2, tzinfo=timezone.utc)
        >>> result = ImportResult(
        ...     resource="anime", source="anime.csv", total_rows=3, created=1,
        ...     start_time=start, end_time=end, failed_row=2, error="row 2: duplicate key",
        ... )
        >>> render_summary_line(result)
        'SUMMARY resource=anime file=anime.csv rows=3 created=1 failed_row=2 status=partial elapsed_sec=2'
    """
    failed_row = "-" if result.failed_row is None else str(result.failed_row)
    return (
        f"SUMMARY resource={result.resource} "
        f"file={result.source} "
        f"rows={result.total_rows} "
        f"created={result.created} "
        f"failed_row={failed_row} "
        f"status={result.status.value} "
        f"elapsed_sec={_format_seconds(result.elapsed_seconds)}"
    )
