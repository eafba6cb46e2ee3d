"""
Command line entry point.

Validate a lead file into an XLSX report:
    python -m lead_validator leads.csv [output.xlsx]

Run as an API server:
    python -m lead_validator --serve
    # or: uvicorn lead_validator.main:app --reload --port 8000
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from lead_validator.core.batch import counted, empty_counts, validate_records
from lead_validator.core.config import get_settings
from lead_validator.core.logger import setup_logging
from lead_validator.core.report_writer import write_xlsx_report
from lead_validator.core.row_source import RowSourceError, iter_records

logger = logging.getLogger(__name__)

USAGE = "Usage: python -m lead_validator <input.csv|input.xlsx> [output.xlsx]"


def run(input_path: str, output_path: str = "output.xlsx") -> dict:
    """Validate every row of input_path and write the report. Returns result counts."""
    settings = get_settings()
    src = Path(input_path)

    # Rows stream from the input file into the report; counts fill in as they pass
    counts = empty_counts()
    rows = counted(validate_records(iter_records(src.name, src)), counts)
    written = write_xlsx_report(rows, output_path, sheet_name=settings.output_sheet_name)

    logger.info(f"Validated {written} rows: {counts}")
    logger.info(f"Output written to: {output_path}")
    return counts


def serve(host: str = "0.0.0.0", port: int = 8000) -> None:
    import uvicorn
    uvicorn.run("lead_validator.main:app", host=host, port=port)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="lead_validator", description="Validate lead rows against requisition rules.")
    parser.add_argument("input", nargs="?", help="Lead file (.csv or .xlsx)")
    parser.add_argument("output", nargs="?", default="output.xlsx", help="Report path (default: output.xlsx)")
    parser.add_argument("--serve", action="store_true", help="Start the HTTP API instead")
    parser.add_argument("--port", type=int, default=8000)
    args = parser.parse_args(argv)

    setup_logging(get_settings().log_level)

    if args.serve:
        serve(port=args.port)
        return 0

    if not args.input:
        print(USAGE, file=sys.stderr)
        return 1

    try:
        run(args.input, args.output)
    except (RowSourceError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0
