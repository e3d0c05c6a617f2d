"""CLI entrypoint: scrape Library of America volumes into CSV."""

from __future__ import annotations

import argparse
import logging
import os
import sys

from dotenv import load_dotenv

from csv_sink import VolumeCsvSink
from pipeline import run


def _volume_number(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid volume number: {value!r}") from None
    if number < 0:
        raise argparse.ArgumentTypeError(f"volume number must not be negative: {value}")
    return number


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line flags."""
    parser = argparse.ArgumentParser(
        prog="loa-scraper",
        description="Scrape Library of America volumes and generate CSV",
    )
    parser.add_argument("-s", "--start", type=_volume_number, default=1, help="Starting volume number (default: 1)")
    parser.add_argument("-e", "--end", type=_volume_number, default=None, help="Ending volume number (default: last available)")
    parser.add_argument(
        "-o",
        "--output",
        default=os.getenv("CSV_OUTPUT_PATH"),
        help="Output CSV file path (default: CSV_OUTPUT_PATH, else stdout)",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Hide the progress bar and informational logs",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Load config, run the scrape and return the process exit status."""
    load_dotenv()
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.WARNING if args.quiet else logging.INFO,
        format="%(asctime)s %(levelname)s %(message)s",
    )

    try:
        with VolumeCsvSink(args.output) as sink:
            written = run(sink, start=args.start, end=args.end, show_progress=not args.quiet)
    except Exception as exc:  # broad so any fatal error becomes a clean exit status
        logging.error("Scrape failed: %s", exc)
        return 1

    if args.output and written:
        logging.info("CSV file created successfully: '%s'", args.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
