"""Entry point for `python -m parquet_summarizer`."""

import sys

from parquet_summarizer.cli import main

if __name__ == "__main__":
    sys.exit(main())
