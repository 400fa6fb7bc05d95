"""Text, delimited and JSON output for reports.

Renderers only read a `Report`'s column specs and row values; they never
reorder rows.
"""

from __future__ import annotations

import json
from typing import Any, Callable, Dict, List, Optional, Sequence

from seedreport.reports.base import ColSpec, Report

FORMATS = ("text", "tsv", "csv", "json")


def format_table(
    columns: Sequence[ColSpec],
    rows: List[List[Any]],
    min_width: int = 8,
    max_col_width: Optional[int] = None,
) -> str:
    """Format rows as a simple ASCII table.

    Numeric columns are right-aligned and use thousands separators.

    Args:
        columns: Column specs supplying headers and alignment.
        rows: Data rows in column order.
        min_width: Minimum column width.
        max_col_width: Clip cells longer than this, if given.

    Returns:
        Formatted table string, or an empty string when there are no rows.
    """
    if not rows:
        return ""

    def cell(val: Any, spec: ColSpec) -> str:
        if spec.kind == "num" and isinstance(val, int) and not isinstance(val, bool):
            s = f"{val:,}"
        else:
            s = str(val)
        if max_col_width is not None and len(s) > max_col_width:
            return s[: max_col_width - 3] + "..."
        return s

    headers = [c.name for c in columns]
    text_rows = [[cell(v, columns[i]) for i, v in enumerate(row)] for row in rows]

    all_data = [headers] + text_rows
    col_widths = []
    for col_idx in range(len(headers)):
        max_width = max(len(r[col_idx]) for r in all_data)
        col_widths.append(max(max_width, min_width))

    def format_row(row_data: List[str], align_numbers: bool = True) -> str:
        parts = []
        for i, item in enumerate(row_data):
            if align_numbers and columns[i].kind == "num":
                parts.append(f"{item:>{col_widths[i]}}")
            else:
                parts.append(f"{item:<{col_widths[i]}}")
        return " | ".join(parts).rstrip()

    lines = [format_row(headers, align_numbers=False)]
    lines.append("-+-".join("-" * width for width in col_widths))
    for row in text_rows:
        lines.append(format_row(row))
    return "\n".join(lines)


def render_text(report: Report, max_col_width: Optional[int] = None) -> str:
    """Return the report as a titled ASCII table."""
    parts = [report.title, "=" * len(report.title)]
    if report.legend:
        parts.append(report.legend)
    parts.append("")
    table = format_table(report.columns, report.table_rows(), max_col_width=max_col_width)
    parts.append(table if table else "No rows.")
    return "\n".join(parts) + "\n"


def render_tsv(report: Report) -> str:
    return report.to_dataframe().to_csv(sep="\t", index=False)


def render_csv(report: Report) -> str:
    return report.to_dataframe().to_csv(index=False)


def render_json(report: Report) -> str:
    return json.dumps(report.to_dict(), indent=2) + "\n"


_RENDERERS: Dict[str, Callable[[Report], str]] = {
    "text": render_text,
    "tsv": render_tsv,
    "csv": render_csv,
    "json": render_json,
}


def render(report: Report, fmt: str = "text") -> str:
    """Render a report in one of `FORMATS`.

    Raises:
        ValueError: If the format is unknown.
    """
    try:
        renderer = _RENDERERS[fmt]
    except KeyError:
        raise ValueError(
            f"Invalid output format '{fmt}'. Valid formats are: {', '.join(FORMATS)}"
        ) from None
    return renderer(report)
