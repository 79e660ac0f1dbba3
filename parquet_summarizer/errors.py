"""Error taxonomy for the summarizer.

Every error is terminal for the run. The CLI maps each class to its own
exit code and prints a single line to stderr.
"""

from pathlib import Path
from typing import Optional, Union


class SummarizerError(Exception):
    """Base class for all errors raised by parquet_summarizer."""

    exit_code = 1


class ConfigError(SummarizerError):
    """Invalid or missing command line arguments."""

    exit_code = 2

    def __init__(self, message: str, argument: Optional[str] = None):
        self.argument = argument
        if argument:
            message = f"{argument}: {message}"
        super().__init__(message)


class StatsError(SummarizerError):
    """polars failed to open, scan or aggregate the input."""

    exit_code = 3

    def __init__(self, message: str, column: Optional[str] = None):
        self.column = column
        if column is not None:
            message = f"column '{column}': {message}"
        super().__init__(message)


class IoError(SummarizerError):
    """The report could not be written to its destination."""

    exit_code = 4

    def __init__(self, message: str, path: Union[str, Path]):
        self.path = Path(path)
        super().__init__(f"{message} '{path}'")
