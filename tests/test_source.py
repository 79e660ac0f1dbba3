import polars as pl
import pytest

from parquet_summarizer.errors import StatsError


def test_parquet_shape_from_footer(people_parquet, open_source):
    source = open_source(people_parquet)

    assert source.columns == ["age", "city"]
    assert source.row_count == 4
    assert source.info.column_count == 2
    assert source.info.row_groups == 1
    assert source.info.file_format == "parquet"
    assert source.dtype("age") == pl.Int64
    assert source.dtype("city") == pl.String


def test_schema_order_is_preserved(write_parquet, open_source):
    df = pl.DataFrame({"z": [1], "a": ["x"], "m": [1.5]})
    source = open_source(write_parquet(df))

    assert source.columns == ["z", "a", "m"]


def test_csv_source(tmp_path, open_source):
    path = tmp_path / "people.csv"
    path.write_text("age,city\n20,NY\n25,LA\n30,NY\n")
    source = open_source(path)

    assert source.info.file_format == "csv"
    assert source.row_count == 3
    assert source.info.row_groups is None
    assert source.dtype("age") == pl.Int64


def test_ipc_source(tmp_path, open_source):
    path = tmp_path / "people.arrow"
    pl.DataFrame({"age": [20, 25], "city": ["NY", "LA"]}).write_ipc(path)
    source = open_source(path)

    assert source.info.file_format == "ipc"
    assert source.row_count == 2


def test_low_memory_source(people_parquet, open_source):
    source = open_source(people_parquet, low_memory=True)

    assert source.low_memory is True
    assert source.collect(source.frame.select(pl.len())).item() == 4


def test_corrupt_file_raises_stats_error(tmp_path, open_source):
    path = tmp_path / "broken.parquet"
    path.write_bytes(b"this is not a parquet file")

    with pytest.raises(StatsError) as excinfo:
        open_source(path)

    assert excinfo.value.column is None
    assert "broken.parquet" in str(excinfo.value)
