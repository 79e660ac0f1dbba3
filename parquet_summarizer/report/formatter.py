"""Plain-text rendering of a summary report.

Numeric statistics are printed with 4 decimal places and percentages with
2, so the same input always renders to the same bytes.
"""

import math
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

from parquet_summarizer.data.source import SourceInfo
from parquet_summarizer.stats.classifier import ColumnKind
from parquet_summarizer.stats.collector import (
    CategoricalSummary,
    FrequencyEntry,
    HighCardinalitySummary,
    NumericSummary,
    Summary,
)

STAT_FORMAT = "{:.4f}"
PERCENT_FORMAT = "{:.2f}%"
MISSING = "N/A (no valid values)"
SINGLE_VALUE = "N/A (fewer than 2 values)"
INDENT = "   "

_FORMAT_TITLES = {
    "parquet": "Parquet",
    "ipc": "Arrow IPC",
    "csv": "CSV",
}


@dataclass(frozen=True)
class ColumnReport:
    name: str
    dtype: str
    kind: ColumnKind
    summary: Summary


@dataclass(frozen=True)
class Report:
    """Summaries of every column, in the order of the file's schema."""

    source: SourceInfo
    columns: Tuple[ColumnReport, ...]


def format_report(report: Report) -> str:
    """Render the report as text, ending with a newline."""
    lines = _header(report.source)
    lines.append("")
    lines.append("Column Analysis")
    lines.append("=" * 50)
    lines.append("")

    for index, column in enumerate(report.columns, start=1):
        lines.append(f"{index}. Column: '{column.name}' ({column.dtype})")
        lines.extend(_column_lines(column))
        lines.append("")

    lines.append("Analysis complete.")
    return "\n".join(lines) + "\n"


def format_stat(value: Optional[float], missing: str = MISSING) -> str:
    """Render a statistic with fixed precision; NaN and infinities get labels."""
    if value is None:
        return missing
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    return STAT_FORMAT.format(value)


def format_value(value: Any) -> str:
    """Render a frequency table value; strings are quoted, nulls are not."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return f"'{value}'"
    return str(value)


def _header(source: SourceInfo) -> List[str]:
    title = _FORMAT_TITLES.get(source.file_format, source.file_format)
    lines = [f"{title} File Analysis", "=" * 50]
    lines.append(f"File: {source.path}")
    lines.append(f"Shape: {source.row_count} rows x {source.column_count} columns")
    if source.row_groups is not None:
        lines.append(f"Row groups: {source.row_groups}")
    if source.created_by:
        lines.append(f"Created by: {source.created_by}")
    return lines


def _column_lines(column: ColumnReport) -> List[str]:
    summary = column.summary
    if isinstance(summary, NumericSummary):
        return _numeric_lines(summary)
    if isinstance(summary, CategoricalSummary):
        return _categorical_lines(summary)
    if isinstance(summary, HighCardinalitySummary):
        return _high_cardinality_lines(summary)
    raise TypeError(f"Unknown summary for column '{column.name}': {summary!r}")


def _numeric_lines(summary: NumericSummary) -> List[str]:
    inner = INDENT * 2
    lines = [f"{INDENT}Numeric statistics:"]
    lines.append(f"{inner}Mean: {format_stat(summary.mean)}")
    # Sample standard deviation is undefined for a single value
    std_missing = SINGLE_VALUE if summary.count == 1 else MISSING
    lines.append(f"{inner}Std Dev: {format_stat(summary.std, std_missing)}")
    if summary.q1 is None or summary.q3 is None:
        lines.append(f"{inner}Quartiles: {MISSING}")
    else:
        lines.append(f"{inner}Q1 (25%): {format_stat(summary.q1)}")
        lines.append(f"{inner}Q3 (75%): {format_stat(summary.q3)}")
        lines.append(f"{inner}IQR: {format_stat(summary.iqr)}")
    lines.append(f"{inner}Nulls: {summary.null_count}")
    return lines


def _categorical_lines(summary: CategoricalSummary) -> List[str]:
    lines = [f"{INDENT}Categorical: {summary.distinct_count} unique values:"]
    if not summary.entries:
        lines.append(f"{INDENT * 2}(no values)")
    lines.extend(_frequency_lines(summary.entries))
    return lines


def _high_cardinality_lines(summary: HighCardinalitySummary) -> List[str]:
    if not summary.top_values:
        return [
            f"{INDENT}High cardinality: {summary.distinct_count} unique values "
            "(too many to display)"
        ]
    lines = [
        f"{INDENT}High cardinality: {summary.distinct_count} unique values "
        f"(showing top {len(summary.top_values)}):"
    ]
    lines.extend(_frequency_lines(summary.top_values))
    return lines


def _frequency_lines(entries: Tuple[FrequencyEntry, ...]) -> List[str]:
    return [
        f"{INDENT * 2}{format_value(entry.value)}: {entry.count} "
        f"({PERCENT_FORMAT.format(entry.percentage)})"
        for entry in entries
    ]
