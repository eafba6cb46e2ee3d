"""
Rule dispatch: the lead's sub_status selects one validation rule.

validate_record() never raises. Unknown sub_status values, handler exceptions
and handlers that return no verdict all become RECHECK with a comment.
"""

import logging
from typing import Callable, Dict, Optional

from lead_validator.core.field_rule import validate_other
from lead_validator.core.prooflink_rule import validate_prooflink
from lead_validator.core.schemas import LeadRecord, SubStatus, Verdict
from lead_validator.core.status_rule import validate_status
from lead_validator.core.title_rule import validate_title

logger = logging.getLogger(__name__)

RuleHandler = Callable[[LeadRecord], Verdict]

HANDLERS: Dict[SubStatus, RuleHandler] = {
    SubStatus.TITLE_PL_SUMMARY: validate_title,
    SubStatus.PROOFLINK: validate_prooflink,
    SubStatus.NWC: validate_status,
    SubStatus.OTHER: validate_other,
}


def resolve_sub_status(raw: str) -> Optional[SubStatus]:
    try:
        return SubStatus((raw or "").strip())
    except ValueError:
        return None


def validate_record(record: LeadRecord, handlers: Optional[Dict[SubStatus, RuleHandler]] = None) -> Verdict:
    handlers = HANDLERS if handlers is None else handlers
    raw = record.sub_status

    sub_status = resolve_sub_status(raw)
    handler = handlers.get(sub_status) if sub_status is not None else None
    if handler is None:
        logger.warning(f"Unknown sub_status: {raw!r}")
        return Verdict(result="RECHECK", comment=f"Unknown sub_status: {raw}")

    logger.debug(f"sub_status {raw!r} -> {getattr(handler, '__name__', handler)}")
    try:
        res = handler(record)
    except Exception as e:
        logger.warning(f"Handler error for sub_status {raw!r}", exc_info=True)
        return Verdict(result="RECHECK", comment=f"Handler error for sub_status: {raw}: {e}")

    if not isinstance(res, Verdict):
        logger.warning(f"Handler returned no verdict for sub_status {raw!r}: {res!r}")
        return Verdict(result="RECHECK", comment=f"Handler returned empty result for sub_status: {raw}")

    return res
