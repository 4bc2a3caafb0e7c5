"""
Command Line Interface
======================

Ingest a single file from disk and print the IngestionResult as JSON.

Usage:
    insight-ingest sales.csv --required-field month --required-field revenue
    insight-ingest report.xlsx --sheet-index 1
    insight-ingest dashboard.png --context "Q3 revenue dashboard"
    python -m insight_ingest data.json --indent 0

Exit codes:
    0  File ingested (validation errors are reported in the output)
    1  File could not be ingested
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any

from insight_ingest import __version__
from insight_ingest.ingest.file_type_detector import detect_file_type
from insight_ingest.schemas.domain import DataSourceType, IngestionOptions
from insight_ingest.services.ingestion_service import IngestionService
from insight_ingest.utils.errors import InsightIngestError
from insight_ingest.utils.logger import configure_logging


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="insight-ingest",
        description="Parse, normalize and validate a tabular business document.",
    )
    parser.add_argument("path", type=Path, help="File to ingest")
    parser.add_argument(
        "--required-field",
        "-r",
        dest="required_fields",
        action="append",
        default=[],
        metavar="FIELD",
        help="Field every row must contain (repeatable)",
    )
    parser.add_argument("--context", default=None, help="Hint for screenshot extraction")
    parser.add_argument("--target-schema", default="standard", help="Normalization schema tag")
    parser.add_argument("--delimiter", default=None, help="CSV delimiter (default ',')")
    parser.add_argument(
        "--no-headers",
        action="store_true",
        help="Treat the first CSV row / Excel row as data",
    )
    parser.add_argument("--sheet-index", type=int, default=None, help="Excel worksheet index")
    parser.add_argument(
        "--page-boundaries",
        action="store_true",
        help="Report real PDF page numbers instead of the 50-lines-per-page estimate",
    )
    parser.add_argument("--indent", type=int, default=2, help="JSON indent (0 for compact)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def parser_options_for(file_type: DataSourceType, args: argparse.Namespace) -> dict[str, Any]:
    """Translate CLI flags into constructor options for the detected adapter."""
    options: dict[str, Any] = {}

    if file_type is DataSourceType.CSV:
        if args.delimiter is not None:
            options["delimiter"] = args.delimiter
        if args.no_headers:
            options["headers"] = False
    elif file_type is DataSourceType.EXCEL:
        if args.sheet_index is not None:
            options["sheet_index"] = args.sheet_index
        if args.no_headers:
            options["has_header"] = False
    elif file_type is DataSourceType.PDF and args.page_boundaries:
        options["use_page_boundaries"] = True

    return options


async def run(args: argparse.Namespace) -> dict[str, Any]:
    """Ingest args.path and return the serialized result."""
    buffer = args.path.read_bytes()
    filename = args.path.name

    try:
        parser_options = parser_options_for(detect_file_type(buffer, filename), args)
    except InsightIngestError:
        # The service reports the detection failure with full context
        parser_options = {}

    options = IngestionOptions(
        required_fields=args.required_fields,
        target_schema=args.target_schema,
        parser_options=parser_options,
    )
    result = await IngestionService().ingest(
        buffer, filename, context=args.context, options=options
    )
    return result.to_dict()


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    args = build_parser().parse_args(argv)
    configure_logging(stream=sys.stderr)

    try:
        output = asyncio.run(run(args))
    except (InsightIngestError, OSError) as e:
        print(getattr(e, "message", str(e)), file=sys.stderr)
        return 1

    print(json.dumps(output, indent=args.indent or None, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
