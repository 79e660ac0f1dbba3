"""Lazy, schema-inspectable access to the input file."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

import polars as pl
import pyarrow as pa
import pyarrow.parquet as pq

from parquet_summarizer.config import SummaryConfig
from parquet_summarizer.errors import StatsError

logger = logging.getLogger(__name__)

# Everything polars or pyarrow may raise while reading or aggregating
ENGINE_ERRORS = (pl.exceptions.PolarsError, pa.lib.ArrowException, OSError)


@dataclass(frozen=True)
class SourceInfo:
    """Shape and provenance of the scanned file, shown in the report header."""

    path: Path
    file_format: str
    row_count: int
    column_count: int
    row_groups: Optional[int] = None
    created_by: Optional[str] = None


class ColumnarSource:
    """A lazily scanned columnar file.

    Wraps a polars LazyFrame together with its schema and row count. Every
    query against the file goes through collect(), so the execution engine
    chosen at open time applies to all of them.
    """

    def __init__(
        self,
        frame: pl.LazyFrame,
        schema: pl.Schema,
        info: SourceInfo,
        low_memory: bool = False,
    ):
        self.frame = frame
        self.schema = schema
        self.info = info
        self.low_memory = low_memory

    @classmethod
    def open(cls, config: SummaryConfig) -> "ColumnarSource":
        """Scan the configured input without loading its rows.

        Args:
            config: Validated run configuration

        Returns:
            ColumnarSource with schema and row count resolved

        Raises:
            StatsError: If the file cannot be scanned or its schema read
        """
        path = config.input_path
        file_format = config.resolved_format
        mode = "low-memory streaming" if config.low_memory else "default"
        logger.info("Scanning %s file %s (%s engine)", file_format, path, mode)

        row_count = None
        row_groups = None
        created_by = None
        if file_format == "parquet":
            row_count, row_groups, created_by = cls._read_parquet_footer(path)

        try:
            frame = cls._scan(path, file_format, config.low_memory)
            schema = frame.collect_schema()
        except ENGINE_ERRORS as e:
            raise StatsError(f"Failed to scan {file_format} file '{path}': {e}") from e

        if row_count is None:
            try:
                row_count = collect(frame.select(pl.len()), config.low_memory).item()
            except ENGINE_ERRORS as e:
                raise StatsError(f"Failed to count rows in '{path}': {e}") from e

        info = SourceInfo(
            path=path,
            file_format=file_format,
            row_count=row_count,
            column_count=len(schema),
            row_groups=row_groups,
            created_by=created_by,
        )
        return cls(frame=frame, schema=schema, info=info, low_memory=config.low_memory)

    @staticmethod
    def _scan(path: Path, file_format: str, low_memory: bool) -> pl.LazyFrame:
        if file_format == "csv":
            return pl.scan_csv(path, low_memory=low_memory)
        if file_format == "ipc":
            return pl.scan_ipc(path)
        return pl.scan_parquet(path, low_memory=low_memory)

    @staticmethod
    def _read_parquet_footer(path: Path):
        """Read row count, row group count and writer from the Parquet footer.

        Only the file metadata is touched, no column data is decoded.

        Returns:
            Tuple of (num_rows, num_row_groups, created_by)

        Raises:
            StatsError: If the footer cannot be parsed
        """
        try:
            metadata = pq.read_metadata(path)
        except ENGINE_ERRORS as e:
            raise StatsError(f"Failed to read parquet metadata from '{path}': {e}") from e
        return metadata.num_rows, metadata.num_row_groups, metadata.created_by

    @property
    def columns(self) -> List[str]:
        return self.schema.names()

    @property
    def row_count(self) -> int:
        return self.info.row_count

    def dtype(self, column: str) -> pl.DataType:
        return self.schema[column]

    def collect(self, query: pl.LazyFrame) -> pl.DataFrame:
        """Materialize a lazy query with the engine selected at open time."""
        return collect(query, self.low_memory)


def collect(query: pl.LazyFrame, low_memory: bool = False) -> pl.DataFrame:
    """Run a lazy query, on the streaming engine when low_memory is set."""
    engine = "streaming" if low_memory else "auto"
    return query.collect(engine=engine)
