"""Shared fixtures: lead rows as CSV and XLSX bytes."""
from io import BytesIO

import pytest
from openpyxl import Workbook


HEADERS = ["First Name", "Last Name", "Company", "Title", "Prooflink", "Location", "Status",
           "Email", "Employees", "Industry", "Req", "Sub Status"]

ROWS = [
    ["Jane", "Doe", "Acme", "Senior Product Manager", "https://linkedin.com/in/jane", "Austin, TX",
     "", "jane@acme.com", "1,000-5,000", "Software",
     "Level: Senior | comments: <p>Titles:</p><p>Job Levels: Senior, Manager</p>", "N/A: Title/PL Summary"],
    ["John", "Roe", "Beta", "Engineer", "", "Berlin", "R", "john@beta.io", "100-499", "Retail",
     "", "N1: NWC"],
    ["Ann", "Lee", "", "CTO", "", "", "", "ann@x.com", "", "", "Company Size: 500+", "N/A: Other (auto)"],
    ["Bob", "Kim", "Gamma", "VP", "", "", "", "", "", "", "", "N9: Ghost"],
]


@pytest.fixture
def csv_bytes():
    lines = [",".join(HEADERS)]
    for row in ROWS:
        lines.append(",".join(f'"{c}"' for c in row))
    # Trailing blank line must be skipped
    return ("\r\n".join(lines) + "\r\n,,,\r\n").encode("utf-8")


@pytest.fixture
def xlsx_bytes():
    wb = Workbook()
    ws = wb.active
    ws.append(HEADERS)
    for row in ROWS:
        ws.append(row)
    buf = BytesIO()
    wb.save(buf)
    return buf.getvalue()
