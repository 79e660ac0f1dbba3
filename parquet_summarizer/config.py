"""Run configuration built from the command line."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from parquet_summarizer.errors import ConfigError

DEFAULT_CATEGORICAL_THRESHOLD = 10

FILE_FORMATS = ("parquet", "ipc", "csv")

# Suffixes that select a scanner other than parquet
_SUFFIX_FORMATS = {
    ".csv": "csv",
    ".arrow": "ipc",
    ".ipc": "ipc",
    ".feather": "ipc",
}


def infer_format(path: Path) -> str:
    """Guess the file format from the file suffix, defaulting to parquet."""
    return _SUFFIX_FORMATS.get(path.suffix.lower(), "parquet")


@dataclass(frozen=True)
class SummaryConfig:
    """Immutable settings for a single summarizer run.

    Attributes:
        input_path: File to summarize
        output_path: Report destination, stdout when None
        low_memory: Use polars' reduced-memory scan and streaming engine
        categorical_threshold: Maximum distinct values for a non-numeric
            column to get a frequency table
        top_values: Number of most frequent values to list for
            high-cardinality columns (0 omits them)
        file_format: One of FILE_FORMATS, inferred from the suffix when None
    """

    input_path: Path
    output_path: Optional[Path] = None
    low_memory: bool = False
    categorical_threshold: int = DEFAULT_CATEGORICAL_THRESHOLD
    top_values: int = 0
    file_format: Optional[str] = None

    @property
    def resolved_format(self) -> str:
        return self.file_format or infer_format(self.input_path)

    def validate(self) -> "SummaryConfig":
        """Check the settings before any I/O happens.

        Returns:
            The same config, so calls can be chained

        Raises:
            ConfigError: If an argument is missing or out of range
        """
        if not self.input_path.exists():
            raise ConfigError(
                f"Input file '{self.input_path}' does not exist", "input_file"
            )
        if not self.input_path.is_file():
            raise ConfigError(
                f"Input path '{self.input_path}' is not a file", "input_file"
            )

        for argument, value in [
            ("--categorical-threshold", self.categorical_threshold),
            ("--top-values", self.top_values),
        ]:
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigError(f"expected an integer, got {value!r}", argument)
            if value < 0:
                raise ConfigError(
                    f"must be a non-negative integer, got {value}", argument
                )

        if self.file_format is not None and self.file_format not in FILE_FORMATS:
            raise ConfigError(
                f"unsupported format '{self.file_format}', "
                f"expected one of {', '.join(FILE_FORMATS)}",
                "--format",
            )
        return self

    @classmethod
    def from_args(cls, args) -> "SummaryConfig":
        """Build and validate a config from parsed argparse arguments."""
        input_file = args.input_file or ""
        if not input_file.strip():
            raise ConfigError("input path must not be empty", "input_file")
        output = args.output
        if output is not None and not str(output).strip():
            raise ConfigError("output path must not be empty", "--output")

        config = cls(
            input_path=Path(input_file),
            output_path=Path(output) if output is not None else None,
            low_memory=args.low_memory,
            categorical_threshold=args.categorical_threshold,
            top_values=args.top_values,
            file_format=args.format,
        )
        return config.validate()
