"""Per-column statistics computed through polars lazy queries.

Numeric columns get mean, sample standard deviation and linearly
interpolated quartiles. Non-numeric columns get a frequency table whose rows
are ordered by descending count, ties keeping the order in which values first
appear in the file. Nulls form their own group in frequency tables and are
left out of numeric statistics.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Sequence, Tuple, Union

import polars as pl

from parquet_summarizer.data.source import ENGINE_ERRORS, ColumnarSource
from parquet_summarizer.errors import StatsError
from parquet_summarizer.stats.classifier import ColumnKind

logger = logging.getLogger(__name__)

QUANTILE_INTERPOLATION = "linear"
STD_DDOF = 1
PERCENT_DECIMALS = 2


@dataclass(frozen=True)
class NumericSummary:
    """Statistics of a numeric column, None where there are no valid values."""

    mean: Optional[float]
    std: Optional[float]
    q1: Optional[float]
    q3: Optional[float]
    null_count: int
    count: int

    @property
    def iqr(self) -> Optional[float]:
        if self.q1 is None or self.q3 is None:
            return None
        return self.q3 - self.q1


@dataclass(frozen=True)
class FrequencyEntry:
    value: Any
    count: int
    percentage: float


@dataclass(frozen=True)
class CategoricalSummary:
    """Frequency table of a low-cardinality column."""

    entries: Tuple[FrequencyEntry, ...]
    distinct_count: int
    total_rows: int


@dataclass(frozen=True)
class HighCardinalitySummary:
    """A column with too many distinct values for a full frequency table.

    top_values is empty unless the most frequent values were requested.
    """

    distinct_count: int
    total_rows: int
    top_values: Tuple[FrequencyEntry, ...] = ()


Summary = Union[NumericSummary, CategoricalSummary, HighCardinalitySummary]


def count_distinct(source: ColumnarSource, column: str) -> int:
    """Number of distinct values in a column, null counted as one value."""
    return count_distinct_columns(source, [column])[column]


def count_distinct_columns(
    source: ColumnarSource, columns: Sequence[str]
) -> Dict[str, int]:
    """Distinct counts of several columns, evaluated in a single query."""
    if not columns:
        return {}

    query = source.frame.select(
        [
            pl.col(column).n_unique().alias(f"n_unique_{i}")
            for i, column in enumerate(columns)
        ]
    )
    row = _collect_row(
        source, query, columns, count_distinct, "Failed to count unique values"
    )
    return {column: row[f"n_unique_{i}"] for i, column in enumerate(columns)}


def numeric_summaries(
    source: ColumnarSource, columns: Sequence[str]
) -> Dict[str, NumericSummary]:
    """Numeric statistics of several columns, evaluated in a single query.

    All aggregates go into one lazy select, so polars scans the file once
    for every numeric column.
    """
    if not columns:
        return {}

    exprs = []
    for i, column in enumerate(columns):
        col = pl.col(column)
        exprs.extend(
            [
                col.mean().alias(f"mean_{i}"),
                col.std(ddof=STD_DDOF).alias(f"std_{i}"),
                col.quantile(0.25, interpolation=QUANTILE_INTERPOLATION).alias(f"q1_{i}"),
                col.quantile(0.75, interpolation=QUANTILE_INTERPOLATION).alias(f"q3_{i}"),
                col.null_count().alias(f"null_count_{i}"),
                col.count().alias(f"count_{i}"),
            ]
        )
    row = _collect_row(
        source,
        source.frame.select(exprs),
        columns,
        _numeric_summary,
        "Failed to compute numeric statistics",
    )

    return {
        column: NumericSummary(
            mean=_as_float(row[f"mean_{i}"]),
            std=_as_float(row[f"std_{i}"]),
            q1=_as_float(row[f"q1_{i}"]),
            q3=_as_float(row[f"q3_{i}"]),
            null_count=row[f"null_count_{i}"],
            count=row[f"count_{i}"],
        )
        for i, column in enumerate(columns)
    }


def collect(
    source: ColumnarSource,
    column: str,
    kind: ColumnKind,
    distinct_count: Optional[int] = None,
    top_values: int = 0,
) -> Summary:
    """Compute the summary matching the column's kind.

    Args:
        source: Lazily scanned input
        column: Column name
        kind: Result of classify() for this column
        distinct_count: Already computed distinct count, recomputed when None
            and the kind needs it
        top_values: How many of the most frequent values to keep for
            high-cardinality columns

    Returns:
        NumericSummary, CategoricalSummary or HighCardinalitySummary

    Raises:
        StatsError: If polars fails to evaluate any of the queries
    """
    if kind is ColumnKind.NUMERIC:
        return _numeric_summary(source, column)

    if distinct_count is None:
        distinct_count = count_distinct(source, column)

    if kind is ColumnKind.CATEGORICAL:
        return CategoricalSummary(
            entries=_frequencies(source, column),
            distinct_count=distinct_count,
            total_rows=source.row_count,
        )

    top = _frequencies(source, column, limit=top_values) if top_values > 0 else ()
    return HighCardinalitySummary(
        distinct_count=distinct_count,
        total_rows=source.row_count,
        top_values=top,
    )


def _numeric_summary(source: ColumnarSource, column: str) -> NumericSummary:
    return numeric_summaries(source, [column])[column]


def _collect_row(
    source: ColumnarSource,
    query: pl.LazyFrame,
    columns: Sequence[str],
    single: Callable[[ColumnarSource, str], Any],
    message: str,
) -> Dict[str, Any]:
    """Collect a one-row aggregate query covering several columns.

    When the combined query fails, each column is evaluated on its own with
    `single` so the StatsError names the column that broke it.
    """
    try:
        return source.collect(query).row(0, named=True)
    except ENGINE_ERRORS as e:
        if len(columns) == 1:
            raise StatsError(f"{message}: {e}", columns[0]) from e
        for column in columns:
            single(source, column)
        raise StatsError(f"{message}: {e}") from e


def _frequencies(
    source: ColumnarSource, column: str, limit: Optional[int] = None
) -> Tuple[FrequencyEntry, ...]:
    """Value counts in descending order, ties in first-seen order."""
    # Renaming avoids clashes between the column name and the count column
    query = (
        source.frame.select(pl.col(column).alias("value"))
        .group_by("value", maintain_order=True)
        .agg(pl.len().alias("count"))
        .sort("count", descending=True, maintain_order=True)
    )
    if limit is not None:
        query = query.head(limit)

    try:
        counts = source.collect(query)
    except ENGINE_ERRORS as e:
        raise StatsError(f"Failed to count values: {e}", column) from e

    total = source.row_count
    entries = []
    for value, count in counts.iter_rows():
        percentage = round(count / total * 100, PERCENT_DECIMALS) if total else 0.0
        entries.append(FrequencyEntry(value=value, count=count, percentage=percentage))
    return tuple(entries)


def _as_float(value) -> Optional[float]:
    return None if value is None else float(value)
