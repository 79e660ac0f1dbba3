import logging
import sys
from argparse import ArgumentParser

from parquet_summarizer import __version__, summarize
from parquet_summarizer.config import (
    DEFAULT_CATEGORICAL_THRESHOLD,
    FILE_FORMATS,
    SummaryConfig,
)
from parquet_summarizer.errors import SummarizerError
from parquet_summarizer.report.writer import write_report


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog="parquet-summarizer",
        description="Analyze and summarize Parquet files efficiently.",
        epilog="Numeric columns get mean, std dev and quartiles; other columns "
        "get a frequency table when they have few distinct values.",
    )
    parser.add_argument(
        "input_file",
        help="Path to the parquet file to analyze",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=str,
        help="Output file path (writes to stdout if not provided)",
    )
    parser.add_argument(
        "--categorical-threshold",
        type=int,
        default=DEFAULT_CATEGORICAL_THRESHOLD,
        metavar="N",
        help="Maximum number of distinct values to consider a column categorical "
        f"(default: {DEFAULT_CATEGORICAL_THRESHOLD})",
    )
    parser.add_argument(
        "--low-memory",
        action="store_true",
        help="Process file with reduced memory usage (limits parallelism)",
    )
    parser.add_argument(
        "--top-values",
        type=int,
        default=0,
        metavar="N",
        help="List the N most frequent values of high-cardinality columns (default: 0)",
    )
    parser.add_argument(
        "--format",
        choices=FILE_FORMATS,
        help="Input file format (inferred from the file suffix if not provided)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log progress to stderr",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        config = SummaryConfig.from_args(args)
        # The report is rendered in full before anything is written
        text = summarize(config)
        write_report(text, config.output_path)
    except SummarizerError as e:
        print(f"Error: {e}", file=sys.stderr)
        return e.exit_code

    if config.output_path is not None:
        print(f"Summary written to: {config.output_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
