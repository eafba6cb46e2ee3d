from pathlib import Path
from typing import List

from fastapi import APIRouter, File, HTTPException, UploadFile
from fastapi.responses import Response

from lead_validator.core.batch import summarize, validate_records
from lead_validator.core.config import get_settings
from lead_validator.core.dispatcher import validate_record
from lead_validator.core.report_writer import xlsx_report_bytes
from lead_validator.core.row_source import (
    EmptyFileError,
    RowSourceError,
    UnsupportedFileError,
    iter_records,
)
from lead_validator.core.schemas import BatchResponse, LeadRecord, ValidatedRow, Verdict

router = APIRouter(tags=["validate"])

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _error_status(e: RowSourceError) -> int:
    if isinstance(e, EmptyFileError):
        return 400
    if isinstance(e, UnsupportedFileError):
        return 415
    return 422


async def _validated_rows(file: UploadFile) -> List[ValidatedRow]:
    raw = await file.read()
    try:
        records = iter_records(file.filename or "", raw, file.content_type)
        return list(validate_records(records))
    except RowSourceError as e:
        raise HTTPException(status_code=_error_status(e), detail=str(e))


@router.post(
    "/validate/row",
    response_model=Verdict,
    response_model_exclude_none=True,
    summary="Validate one lead",
    description="Apply the rule selected by sub_status to a single lead record.",
)
def validate_row(record: LeadRecord):
    return validate_record(record)


@router.post(
    "/validate",
    response_model=BatchResponse,
    summary="Validate a lead file",
    description="Validate every row of a CSV or XLSX lead file. Returns each record with its verdict and per-result counts.",
    responses={
        400: {"description": "Empty file uploaded"},
        415: {"description": "Unsupported file format"},
        422: {"description": "File has no header row"},
    },
)
async def validate_file(
    file: UploadFile = File(..., description="Lead file (CSV or XLSX)")
):
    rows = await _validated_rows(file)
    warnings = [] if rows else ["File contains no data rows."]
    return BatchResponse(rows=rows, counts=summarize(rows), warnings=warnings)


@router.post(
    "/validate/report",
    summary="Validate a lead file into an XLSX report",
    description="Same as /validate but returns the original columns plus result and comment as an XLSX workbook.",
    response_class=Response,
    responses={200: {"content": {XLSX_MEDIA_TYPE: {}}}},
)
async def validate_file_report(
    file: UploadFile = File(..., description="Lead file (CSV or XLSX)")
):
    rows = await _validated_rows(file)
    content = xlsx_report_bytes(rows, sheet_name=get_settings().output_sheet_name)
    stem = Path(file.filename or "leads").stem or "leads"
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{stem}_result.xlsx"'},
    )
