"""Decides how each column is summarized."""

from enum import Enum
from typing import Optional

import polars as pl


class ColumnKind(Enum):
    """Summary kind of a column."""

    NUMERIC = "numeric"
    CATEGORICAL = "categorical"
    HIGH_CARDINALITY = "high_cardinality"


def is_numeric_dtype(dtype: pl.DataType) -> bool:
    """True for integer and floating point storage types.

    Decimal, Boolean and temporal types are not numeric.
    """
    return dtype.is_integer() or dtype.is_float()


def classify(
    dtype: pl.DataType, distinct_count: Optional[int], threshold: int
) -> ColumnKind:
    """Classify a column from its storage type and distinct-value count.

    Args:
        dtype: Declared polars type of the column
        distinct_count: Number of distinct values (nulls included), only
            required for non-numeric columns
        threshold: Maximum distinct count for a frequency table

    Returns:
        NUMERIC for integer/float columns whatever their cardinality,
        CATEGORICAL for other columns with distinct_count <= threshold,
        HIGH_CARDINALITY otherwise
    """
    if is_numeric_dtype(dtype):
        return ColumnKind.NUMERIC

    if distinct_count is None:
        raise ValueError(f"distinct_count is required for non-numeric type {dtype}")

    if distinct_count <= threshold:
        return ColumnKind.CATEGORICAL
    return ColumnKind.HIGH_CARDINALITY
