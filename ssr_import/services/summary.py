from __future__ import annotations

from ..models.processing_result import ProcessingResult

"""SUMMARY line rendering.

Format::

    SUMMARY file=<name> sections=<n> items=<n> rows=<n> ignored=<n> warnings=<n> elapsed_sec=<s> mode=<json|db>
"""


def _format_seconds(value: float) -> str:
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        # avoid scientific notation for very small numbers
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return f"{value:.3f}".rstrip("0").rstrip(".")


def render_summary_line(result: ProcessingResult) -> str:
    """Render the SUMMARY line for one run.

    Examples:
        >>> from collections import Counter
        >>> from datetime import datetime, timezone
        >>> from ssr_import.models.import_run import ImportRun
        >>> t = datetime(2024, 1, 1, tzinfo=timezone.utc)
        >>> run = ImportRun("T", "2005-06", "ph.xlsx", t, "public_health", 2, 7)
        >>> result = ProcessingResult(
        ...     run=run, mode="json", rows_read=12, role_counts=Counter(ignored=3),
        ...     start_time=t, end_time=t, elapsed_seconds=2.0,
        ... )
        >>> render_summary_line(result)
        'SUMMARY file=ph.xlsx sections=2 items=7 rows=12 ignored=3 warnings=0 elapsed_sec=2 mode=json'
    """
    return (
        f"SUMMARY file={result.run.source_file} "
        f"sections={result.total_sections} "
        f"items={result.total_items} "
        f"rows={result.rows_read} "
        f"ignored={result.ignored_rows} "
        f"warnings={len(result.warnings)} "
        f"elapsed_sec={_format_seconds(result.elapsed_seconds)} "
        f"mode={result.mode}"
    )
