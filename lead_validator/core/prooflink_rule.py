"""Prooflink rule: the proof link must point to a profile page or the lead's email domain."""

from lead_validator.core.schemas import LeadRecord, Verdict

PROFILE_URL_MARKERS = ("linkedin.com/in/", "zoominfo.com/p/")


def validate_prooflink(record: LeadRecord) -> Verdict:
    link = record.prooflink.strip().lower()
    if not link:
        return Verdict(result="INVALID", comment="Prooflink is empty")

    if any(marker in link for marker in PROFILE_URL_MARKERS):
        return Verdict(result="VALID")

    # Domain comes from the prooflink column itself, not from record.email.
    domain = link.rsplit("@", 1)[-1]
    if domain in link:
        return Verdict(result="VALID")

    return Verdict(result="INVALID", comment="Prooflink is not linkedin, zoom or even email domain")
