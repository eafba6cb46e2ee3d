import pytest
from pydantic import ValidationError
from lead_validator.core.schemas import LeadRecord
from lead_validator.core.status_rule import validate_status


@pytest.mark.parametrize("status, result, comment", [
    ("", "VALID", None),
    ("valid", "VALID", None),
    ("  VALID ", "VALID", None),
    ("a", "INVALID", "retired lead"),
    ("A", "INVALID", "retired lead"),
    ("!", "INVALID", "suspicious lead"),
    ("R", "RECHECK", "status is r"),
    ("No Info", "RECHECK", "status is no info"),
    (" no company match", "RECHECK", "status is no company match"),
    ("x", "INVALID", "line is corrupted"),
    ("validated", "INVALID", "line is corrupted"),
])
def test_status_table(status, result, comment):
    verdict = validate_status(LeadRecord(status=status))
    assert verdict.result == result
    assert verdict.comment == comment


def test_whitespace_only_status_is_empty():
    assert validate_status(LeadRecord(status="   ")).result == "VALID"


def test_returned_verdict_cannot_leak_into_later_calls():
    verdict = validate_status(LeadRecord(status="a"))
    with pytest.raises(ValidationError):
        verdict.comment = "changed by caller"
    assert validate_status(LeadRecord(status="A")).comment == "retired lead"
