"""Shared pytest fixtures: small columnar files written with polars."""

import polars as pl
import pytest

from parquet_summarizer.config import SummaryConfig
from parquet_summarizer.data.source import ColumnarSource


@pytest.fixture
def write_parquet(tmp_path):
    """Write a DataFrame to a parquet file under tmp_path and return the path."""

    def _write(df: pl.DataFrame, name: str = "data.parquet"):
        path = tmp_path / name
        df.write_parquet(path)
        return path

    return _write


@pytest.fixture
def people_parquet(write_parquet):
    """The age/city example: one numeric and one low-cardinality string column."""
    df = pl.DataFrame(
        {
            "age": [20, 25, 30, 25],
            "city": ["NY", "LA", "NY", "NY"],
        }
    )
    return write_parquet(df, "people.parquet")


@pytest.fixture
def wide_parquet(write_parquet):
    """A file mixing numeric, categorical and high-cardinality columns."""
    df = pl.DataFrame(
        {
            "user_id": [f"user_{i:02d}" for i in range(50)],
            "score": [float(i % 7) for i in range(50)],
            "active": [i % 3 == 0 for i in range(50)],
            "plan": [["free", "pro", "team"][i % 3] for i in range(50)],
        }
    )
    return write_parquet(df, "wide.parquet")


@pytest.fixture
def empty_parquet(write_parquet):
    df = pl.DataFrame(schema={"amount": pl.Float64, "label": pl.String})
    return write_parquet(df, "empty.parquet")


@pytest.fixture
def open_source():
    """Open a path as a ColumnarSource."""

    def _open(path, low_memory: bool = False, file_format=None):
        config = SummaryConfig(
            input_path=path, low_memory=low_memory, file_format=file_format
        ).validate()
        return ColumnarSource.open(config)

    return _open
