"""Writes the rendered report to stdout or a file."""

import contextlib
import logging
import os
import shutil
import stat
import sys
from pathlib import Path
from typing import Optional, TextIO
from uuid import uuid4

from parquet_summarizer.errors import IoError

logger = logging.getLogger(__name__)


def write_report(
    text: str, output_path: Optional[Path] = None, stream: Optional[TextIO] = None
) -> None:
    """Write the full report to its destination.

    A file destination is first written to a temporary file in the same
    directory and then renamed over the target, so a failed write never
    leaves a partial report behind.

    Args:
        text: Complete rendered report
        output_path: Destination file, created or truncated; stdout when None
        stream: Stream used instead of sys.stdout when output_path is None

    Raises:
        IoError: If the destination cannot be written
    """
    if output_path is None:
        stream = stream or sys.stdout
        try:
            stream.write(text)
            stream.flush()
        except OSError as e:
            raise IoError(f"Failed to write report ({e})", "<stdout>") from e
        return

    logger.info("Writing report to %s", output_path)
    if output_path.is_dir():
        raise IoError("Output path is a directory:", output_path)
    if output_path.exists() and _is_read_only(output_path):
        raise IoError("Output file is not writable:", output_path)

    tmp_path = output_path.with_name(f".{output_path.name}.{uuid4().hex}.tmp")
    try:
        # Created through open() so the process umask applies as usual
        with open(tmp_path, "x", encoding="utf-8") as handle:
            handle.write(text)
        if output_path.exists():
            shutil.copymode(output_path, tmp_path)
        os.replace(tmp_path, output_path)
    except OSError as e:
        with contextlib.suppress(FileNotFoundError):
            os.unlink(tmp_path)
        reason = e.strerror or str(e)
        raise IoError(f"Failed to write output file ({reason}):", output_path) from e


def _is_read_only(path: Path) -> bool:
    # Files without any write bit are refused even when the user could override them
    mode = stat.S_IMODE(path.stat().st_mode)
    return not os.access(path, os.W_OK) or not mode & 0o222
