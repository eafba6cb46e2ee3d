from io import BytesIO

from openpyxl import load_workbook

from lead_validator.core.batch import counted, empty_counts, summarize, validate_records
from lead_validator.core.report_writer import OUTPUT_COLUMNS, write_xlsx_report, xlsx_report_bytes
from lead_validator.core.row_source import iter_records


def test_report_has_all_rows_with_verdicts(csv_bytes):
    rows = list(validate_records(iter_records("leads.csv", csv_bytes)))
    content = xlsx_report_bytes(rows, sheet_name="Result")

    wb = load_workbook(BytesIO(content))
    ws = wb["Result"]
    values = list(ws.iter_rows(values_only=True))

    assert list(values[0]) == OUTPUT_COLUMNS
    assert len(values) == 1 + len(rows)

    result_idx = OUTPUT_COLUMNS.index("result")
    comment_idx = OUTPUT_COLUMNS.index("comment")
    assert [v[result_idx] for v in values[1:]] == ["VALID", "RECHECK", "INVALID", "RECHECK"]
    assert values[2][comment_idx] == "status is r"
    assert values[4][comment_idx] == "Unknown sub_status: N9: Ghost"


def test_report_written_to_path_from_lazy_rows(tmp_path, csv_bytes):
    out = tmp_path / "report.xlsx"
    counts = empty_counts()
    rows = counted(validate_records(iter_records("leads.csv", csv_bytes)), counts)

    written = write_xlsx_report(rows, out, sheet_name="Leads")

    assert written == 4
    assert counts == {"VALID": 1, "INVALID": 1, "RECHECK": 2}
    ws = load_workbook(out)["Leads"]
    assert ws.max_row == 5


def test_summarize_counts_every_result(csv_bytes):
    rows = list(validate_records(iter_records("leads.csv", csv_bytes)))
    assert summarize(rows) == {"VALID": 1, "INVALID": 1, "RECHECK": 2}
    assert summarize([]) == {"VALID": 0, "INVALID": 0, "RECHECK": 0}


def test_counted_passes_rows_through_unchanged(csv_bytes):
    rows = list(validate_records(iter_records("leads.csv", csv_bytes)))
    counts = empty_counts()
    assert list(counted(rows, counts)) == rows
    assert counts == summarize(rows)
