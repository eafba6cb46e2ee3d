"""NWC rule: the verdict is a pure function of the lead's status column."""

from typing import Dict

from lead_validator.core.schemas import LeadRecord, Verdict

RECHECK_STATUSES = {"r", "no info", "no company match"}

STATUS_VERDICTS: Dict[str, Verdict] = {
    "": Verdict(result="VALID"),
    "valid": Verdict(result="VALID"),
    "a": Verdict(result="INVALID", comment="retired lead"),
    "!": Verdict(result="INVALID", comment="suspicious lead"),
}


def validate_status(record: LeadRecord) -> Verdict:
    status = record.status.strip().lower()

    if status in STATUS_VERDICTS:
        return STATUS_VERDICTS[status]

    if status in RECHECK_STATUSES:
        return Verdict(result="RECHECK", comment=f"status is {status}")

    return Verdict(result="INVALID", comment="line is corrupted")
