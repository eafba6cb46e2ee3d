from typing import Dict, Iterable, Iterator

from lead_validator.core.dispatcher import validate_record
from lead_validator.core.schemas import LeadRecord, ValidatedRow

RESULTS = ("VALID", "INVALID", "RECHECK")


def empty_counts() -> Dict[str, int]:
    return {r: 0 for r in RESULTS}


def validate_records(records: Iterable[LeadRecord]) -> Iterator[ValidatedRow]:
    """Validate lazily; every input record yields exactly one row."""
    for record in records:
        yield ValidatedRow(record=record, verdict=validate_record(record))


def counted(rows: Iterable[ValidatedRow], counts: Dict[str, int]) -> Iterator[ValidatedRow]:
    """Pass rows through unchanged, tallying each verdict into counts as it goes."""
    for row in rows:
        counts[row.verdict.result] += 1
        yield row


def summarize(rows: Iterable[ValidatedRow]) -> Dict[str, int]:
    counts = empty_counts()
    for _ in counted(rows, counts):
        pass
    return counts
