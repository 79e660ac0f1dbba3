"""parquet-summarizer: per-column statistics for columnar data files."""

import logging

from parquet_summarizer.config import SummaryConfig
from parquet_summarizer.data.source import ColumnarSource
from parquet_summarizer.report.formatter import ColumnReport, Report, format_report
from parquet_summarizer.stats import collector
from parquet_summarizer.stats.classifier import classify, is_numeric_dtype

__version__ = "0.1.0"

logger = logging.getLogger(__name__)


def build_report(config: SummaryConfig) -> Report:
    """Scan the input and summarize every column.

    This function drives one run up to the formatted report:
    1. Opens the input as a polars LazyFrame (streaming engine in low-memory mode)
    2. Counts distinct values of all non-numeric columns in one query
    3. Computes the statistics of all numeric columns in one query
    4. Classifies each column as numeric, categorical or high-cardinality
    5. Builds a frequency table per categorical column

    Columns are reported in schema order whatever order they were computed in.

    Args:
        config: Validated run configuration

    Returns:
        Report with one entry per column

    Raises:
        StatsError: If polars fails to scan or aggregate the input
    """
    source = ColumnarSource.open(config)
    logger.info(
        "Found %d rows and %d columns", source.row_count, len(source.columns)
    )

    numeric_columns = [c for c in source.columns if is_numeric_dtype(source.dtype(c))]
    other_columns = [c for c in source.columns if c not in numeric_columns]
    distinct_counts = collector.count_distinct_columns(source, other_columns)
    numeric = collector.numeric_summaries(source, numeric_columns)

    columns = []
    for name in source.columns:
        dtype = source.dtype(name)
        distinct_count = distinct_counts.get(name)
        kind = classify(dtype, distinct_count, config.categorical_threshold)
        logger.info("Column '%s' (%s) classified as %s", name, dtype, kind.value)

        if name in numeric:
            summary = numeric[name]
        else:
            summary = collector.collect(
                source,
                name,
                kind,
                distinct_count=distinct_count,
                top_values=config.top_values,
            )
        columns.append(
            ColumnReport(name=name, dtype=str(dtype), kind=kind, summary=summary)
        )

    return Report(source=source.info, columns=tuple(columns))


def summarize(config: SummaryConfig) -> str:
    """Canonical entry point: summarize the configured file as report text."""
    return format_report(build_report(config))
