from io import BytesIO
from os import PathLike
from typing import BinaryIO, Iterable, Union

from openpyxl import Workbook

from lead_validator.core.row_source import REQUIRED_COLUMNS
from lead_validator.core.schemas import ValidatedRow

OUTPUT_COLUMNS = REQUIRED_COLUMNS + ["result", "comment"]

Target = Union[str, "PathLike[str]", BinaryIO]


def write_xlsx_report(rows: Iterable[ValidatedRow], target: Target, sheet_name: str = "Result") -> int:
    """
    Write validated rows to an XLSX workbook at target, one row at a time.

    rows may be a lazy iterator; it is consumed once. Returns the number of data rows written.
    """
    wb = Workbook(write_only=True)
    ws = wb.create_sheet(sheet_name)
    ws.append(OUTPUT_COLUMNS)

    written = 0
    for row in rows:
        values = [getattr(row.record, col) for col in REQUIRED_COLUMNS]
        values += [row.verdict.result, row.verdict.comment or ""]
        ws.append(values)
        written += 1

    wb.save(target)
    return written


def xlsx_report_bytes(rows: Iterable[ValidatedRow], sheet_name: str = "Result") -> bytes:
    buf = BytesIO()
    write_xlsx_report(rows, buf, sheet_name=sheet_name)
    return buf.getvalue()
