"""
Prooflink rule tests.

The email domain used for the last check is derived from the prooflink column
itself (not from the lead's email). These tests pin that behavior down.
"""

from lead_validator.core.prooflink_rule import validate_prooflink
from lead_validator.core.schemas import LeadRecord


def test_empty_prooflink():
    verdict = validate_prooflink(LeadRecord(prooflink="   "))
    assert verdict.result == "INVALID"
    assert verdict.comment == "Prooflink is empty"


def test_linkedin_profile():
    assert validate_prooflink(LeadRecord(prooflink="https://www.LinkedIn.com/in/jane-doe")).result == "VALID"


def test_zoominfo_profile():
    assert validate_prooflink(LeadRecord(prooflink="https://zoominfo.com/p/Jane-Doe/123")).result == "VALID"


def test_domain_taken_from_prooflink_not_email():
    record = LeadRecord(prooflink="https://acme.com/team", email="jane@other.org")
    # "acme.com/team" has no "@", so the whole link is its own "domain"
    assert validate_prooflink(record).result == "VALID"


def test_email_like_prooflink():
    record = LeadRecord(prooflink="mailto:jane@acme.com", email="")
    assert validate_prooflink(record).result == "VALID"


def test_case_and_whitespace_variants_agree():
    a = validate_prooflink(LeadRecord(prooflink="https://linkedin.com/in/jane"))
    b = validate_prooflink(LeadRecord(prooflink="  HTTPS://LINKEDIN.COM/IN/JANE  "))
    assert a == b
