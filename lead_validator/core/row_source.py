"""
Lead rows from CSV / XLSX files.

Rows are yielded one at a time with normalized headers; every record carries
all lead columns, missing ones as empty strings. The source is uploaded bytes,
a filesystem path, or an open binary file. Paths and files are read as they
are iterated, never loaded whole.
"""

import csv
import io
import os
import re
from typing import Any, BinaryIO, Dict, Iterator, List, Mapping, Optional, TextIO, Union

from openpyxl import load_workbook

from lead_validator.core.schemas import LeadRecord

REQUIRED_COLUMNS: List[str] = list(LeadRecord.model_fields.keys())

CSV_CONTENT_TYPES = {"text/csv", "application/csv", "text/plain", "application/vnd.ms-excel"}
XLSX_CONTENT_TYPES = {"application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"}

HEADER_SPACE_RE = re.compile(r"\s+")

Source = Union[bytes, str, "os.PathLike[str]", BinaryIO]


class RowSourceError(ValueError):
    """The uploaded file cannot be read as a lead table."""


class EmptyFileError(RowSourceError):
    pass


class UnsupportedFileError(RowSourceError):
    pass


class MissingHeaderError(RowSourceError):
    pass


def normalize_header(h: Any) -> str:
    """'First Name ' → 'first_name'"""
    return HEADER_SPACE_RE.sub("_", str(h if h is not None else "").strip().lower())


def _cell(v: Any) -> str:
    if v is None:
        return ""
    return str(v).strip()


def ensure_record(raw: Mapping[str, Any]) -> LeadRecord:
    """Keep the lead columns of a header-normalized row."""
    return LeadRecord(**{k: _cell(raw.get(k)) for k in REQUIRED_COLUMNS})


def _is_path(source: Source) -> bool:
    return isinstance(source, (str, os.PathLike))


def _is_empty(source: Source) -> bool:
    if isinstance(source, bytes):
        return not source
    if _is_path(source):
        return os.path.getsize(source) == 0
    return False


def _open_text(source: Source) -> TextIO:
    if _is_path(source):
        return open(source, newline="", encoding="utf-8-sig", errors="replace")
    raw = io.BytesIO(source) if isinstance(source, bytes) else source
    return io.TextIOWrapper(raw, encoding="utf-8-sig", errors="replace", newline="")


def iter_csv_records(source: Source) -> Iterator[LeadRecord]:
    text = _open_text(source)
    try:
        headers: Optional[List[str]] = None
        for cells in csv.reader(text):
            if headers is None:
                if not any(_cell(c) for c in cells):
                    continue
                headers = [normalize_header(h) for h in cells]
                continue
            if not any(_cell(c) for c in cells):
                continue
            yield ensure_record(dict(zip(headers, cells)))

        if headers is None:
            raise MissingHeaderError("File has no header row.")
    finally:
        if _is_path(source):
            text.close()
        else:
            # Leave a caller's file object open
            text.detach()


def iter_xlsx_records(source: Source) -> Iterator[LeadRecord]:
    """First worksheet only; the first non-blank row holds the headers."""
    target = io.BytesIO(source) if isinstance(source, bytes) else source
    try:
        wb = load_workbook(target, read_only=True, data_only=True)
    except Exception as e:
        raise RowSourceError(f"Not a readable XLSX workbook: {e}") from e

    try:
        ws = wb.worksheets[0]
        headers: Optional[List[str]] = None
        for values in ws.iter_rows(values_only=True):
            if headers is None:
                if not any(_cell(v) for v in values):
                    continue
                headers = [normalize_header(h) for h in values]
                continue
            if not any(_cell(v) for v in values):
                continue
            rec: Dict[str, Any] = {h: v for h, v in zip(headers, values)}
            yield ensure_record(rec)

        if headers is None:
            raise MissingHeaderError("File has no header row.")
    finally:
        wb.close()


def iter_records(filename: str, source: Source, content_type: Optional[str] = None) -> Iterator[LeadRecord]:
    """
    Pick a reader by file extension, falling back to the content type.

    A missing path raises FileNotFoundError here, before any row is read.
    """
    if _is_empty(source):
        raise EmptyFileError("Empty file uploaded.")

    name = (filename or "").lower()
    ctype = (content_type or "").lower()

    if name.endswith(".xlsx") or (not name.endswith(".csv") and ctype in XLSX_CONTENT_TYPES):
        return iter_xlsx_records(source)
    if name.endswith(".csv") or ctype in CSV_CONTENT_TYPES:
        return iter_csv_records(source)

    raise UnsupportedFileError(f"Unsupported input type: {filename or content_type}")
