"""
Command-line front end: profile one data file and emit its JSON analysis.

Usage:
    data-profiler analyze <file> [options]

Examples:
    # Profile a CSV file to stdout
    data-profiler analyze customers.csv

    # Patterns + uniqueness over the first 500 rows, written to a file
    data-profiler analyze orders.xlsx -p -u -s 500 -o orders.profile.json

    # Pipe-delimited text with auto-detected delimiter
    data-profiler analyze export.txt --detect-delimiter

    # Fixed-width text
    data-profiler analyze legacy.txt -w 4,10,4,14

    # Defaults from a YAML options file, flags override
    data-profiler analyze feed.txt -c profile.yaml -s 100
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Sequence

import yaml

from data_profiler import __version__
from data_profiler.config import load_options_file
from data_profiler.domain.source import RawSource
from data_profiler.domain.types import ParseOptions
from data_profiler.exceptions import ProfilerError
from data_profiler.logging_config import configure_logging
from data_profiler.services import AnalysisService


def _widths(value: str) -> tuple[int, ...]:
    try:
        return tuple(int(part.strip()) for part in value.split(","))
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid widths {value!r}: expected comma-separated integers") from e


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="data-profiler",
        description="Analyze data files and generate structured JSON output with field metadata.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--version", action="version", version=__version__)
    sub = parser.add_subparsers(dest="command", required=True)

    analyze = sub.add_parser("analyze", help="Analyze a data file and generate metadata.")
    analyze.add_argument("file", type=Path, help="Input file to analyze.")
    analyze.add_argument(
        "-p", "--patterns", action="store_true", default=None,
        help="Detect patterns in string fields.",
    )
    analyze.add_argument(
        "-u", "--unique", action="store_true", default=None,
        help="Check for field uniqueness.",
    )
    analyze.add_argument("-s", "--sample", type=int, default=None, help="Number of records to sample.")
    analyze.add_argument("-e", "--encoding", default=None, help="File encoding (default: utf-8).")
    analyze.add_argument("-o", "--output", type=Path, default=None, help="Output file (default: stdout).")
    analyze.add_argument("-d", "--delimiter", default=None, help="Custom delimiter for TXT files.")
    analyze.add_argument(
        "-w", "--fixed-widths", type=_widths, default=None,
        help="Fixed-width column sizes for TXT files (comma-separated).",
    )
    analyze.add_argument(
        "--detect-delimiter", action="store_true", default=None,
        help="Auto-detect delimiter in TXT files.",
    )
    analyze.add_argument("-c", "--config", type=Path, default=None, help="YAML options file.")
    analyze.add_argument(
        "--log-level", default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Structured log level on stderr (default: WARNING).",
    )
    return parser


def _options_from_args(args: argparse.Namespace) -> ParseOptions:
    base = load_options_file(args.config) if args.config else ParseOptions()
    return base.merged_with({
        "detect_patterns": args.patterns,
        "check_uniqueness": args.unique,
        "sample_size": args.sample,
        "encoding": args.encoding,
        "delimiter": args.delimiter,
        "fixed_widths": args.fixed_widths,
        "detect_delimiter": args.detect_delimiter,
        "file_name": args.file.name,
    })


def run_analyze(args: argparse.Namespace) -> int:
    source_path = args.file.resolve()
    if not source_path.is_file():
        print(f"Error: File not found: {source_path}", file=sys.stderr)
        return 1

    service = AnalysisService()
    if not service.supports(source_path.name):
        print("Error: Unsupported file format", file=sys.stderr)
        return 1

    try:
        options = _options_from_args(args)
        result = service.analyze(RawSource.from_path(source_path), options)
    except (ProfilerError, KeyError, ValueError, OSError, yaml.YAMLError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    rendered = json.dumps(result.to_dict(), indent=2)
    if args.output:
        try:
            args.output.write_text(rendered + "\n")
        except OSError as e:
            print(f"Error: cannot write {args.output}: {e}", file=sys.stderr)
            return 1
        print(f"Analysis saved to {args.output}", file=sys.stderr)
    else:
        print(rendered)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    configure_logging(level=getattr(logging, args.log_level))
    if args.command == "analyze":
        return run_analyze(args)
    return 1


if __name__ == "__main__":
    sys.exit(main())
