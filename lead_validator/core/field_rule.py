"""
Other (auto) rule: lead data checked against the requisition meta.

Checks run in order and the first failure wins:
  company present → email present → email format → company size → industry → geo
"""

import re
from typing import List, Optional

from lead_validator.core.req_parser import parse_requisition
from lead_validator.core.schemas import LeadRecord, Verdict

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PLUS_BOUND_RE = re.compile(r"(\d[\d,]*)\s*\+")
BUCKET_RANGE_RE = re.compile(r"(\d[\d,]*)\s*-")
ONLY_WORD_RE = re.compile(r"\bonly\b", re.IGNORECASE)
GEO_SEPARATORS_RE = re.compile(r"[:&,]")

ANY = "any"
SEE_COMMENT = "see comment"


def is_valid_email(email: str) -> bool:
    return bool(EMAIL_RE.match(email or ""))


def _to_int(raw: str) -> Optional[int]:
    digits = raw.replace(",", "")
    return int(digits) if digits else None


def parse_min_company_size(value: str) -> Optional[int]:
    """
    Lower bound of a requisition company size such as '500+'.

    Thousands separators are accepted, so '1,000+' → 1000 where a bare
    digits-then-plus match would read 0. Anything without a '+' bound → None.
    """
    m = PLUS_BOUND_RE.search(value or "")
    return _to_int(m.group(1)) if m else None


def parse_employees_bucket(value: str) -> Optional[int]:
    """
    Lower bound of an employee bucket.

    Examples:
    - "1,000-5,000" → 1000
    - "10,000+" → 10000
    - "about fifty" → None
    """
    if not value:
        return None
    m = PLUS_BOUND_RE.search(value) or BUCKET_RANGE_RE.search(value)
    return _to_int(m.group(1)) if m else None


def geo_tokens(geo: str) -> List[str]:
    """'US & Canada only' → ['us', 'canada']"""
    stripped = ONLY_WORD_RE.sub("", geo or "")
    return [t.strip().lower() for t in GEO_SEPARATORS_RE.split(stripped) if t.strip()]


def _is_open(requirement: str, *wildcards: str) -> bool:
    """True when the requirement is absent or one of the wildcard values."""
    value = (requirement or "").strip().lower()
    return not value or value in wildcards


def validate_other(record: LeadRecord) -> Verdict:
    meta = parse_requisition(record.req).meta

    if not record.company.strip():
        return Verdict(result="INVALID", comment="Missing company")

    email = record.email.strip()
    if not email:
        return Verdict(result="INVALID", comment="Missing email")

    if not is_valid_email(email):
        return Verdict(result="INVALID", comment="Invalid email format")

    company_size = meta.get("company_size", "")
    if not _is_open(company_size, ANY):
        req_min = parse_min_company_size(company_size)
        emp_min = parse_employees_bucket(record.employees)
        # Unparseable values on either side are indeterminate, not a violation
        if req_min is not None and emp_min is not None and emp_min < req_min:
            return Verdict(
                result="INVALID",
                comment=f"Company size does not meet requirement ({company_size})",
            )

    industry = meta.get("industry", "")
    if not _is_open(industry, ANY, SEE_COMMENT):
        lead_industry = record.industry.strip().lower()
        if not lead_industry or industry.strip().lower() not in lead_industry:
            return Verdict(result="INVALID", comment="Industry does not match requirement")

    geo = meta.get("geo", "")
    location = record.location.strip().lower()
    if not _is_open(geo, ANY, SEE_COMMENT) and location:
        if not any(tok in location for tok in geo_tokens(geo)):
            return Verdict(result="INVALID", comment="Location does not match Geo requirement")

    return Verdict(result="VALID")
