from enum import Enum
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator


VerdictResult = Literal["VALID", "INVALID", "RECHECK"]


class SubStatus(str, Enum):
    """Closed set of sub_status values that select a validation rule."""
    TITLE_PL_SUMMARY = "N/A: Title/PL Summary"
    PROOFLINK = "N/A: Prooflink"
    NWC = "N1: NWC"
    OTHER = "N/A: Other (auto)"


class LeadRecord(BaseModel):
    """One lead row. Every field is a string; absent values are empty strings."""
    first_name: str = ""
    last_name: str = ""
    company: str = ""
    title: str = ""
    prooflink: str = ""
    location: str = ""
    status: str = ""
    email: str = ""
    employees: str = ""
    employees_prooflink: str = ""
    industry: str = ""
    req: str = Field(default="", description="Requisition text: pipe separated meta plus optional '| comments:' narrative")
    sub_status: str = Field(default="", description="Selects which validation rule applies")

    model_config = {"frozen": True, "extra": "ignore"}

    @field_validator("*", mode="before")
    @classmethod
    def _none_as_empty(cls, v: Any) -> Any:
        if v is None:
            return ""
        if not isinstance(v, str):
            return str(v)
        return v


class Verdict(BaseModel):
    result: VerdictResult
    comment: Optional[str] = None

    model_config = {"frozen": True}


class ParsedRequisition(BaseModel):
    meta: Dict[str, str] = Field(default_factory=dict, description="Normalized key -> raw value from the pipe separated part")
    comments: Dict[str, Dict[str, List[str]]] = Field(
        default_factory=dict,
        description="Section -> key -> ordered unique values from the comments part"
    )

    def section(self, name: str) -> Dict[str, List[str]]:
        return self.comments.get(name, {})

    def values(self, section: str, key: str) -> List[str]:
        return self.section(section).get(key, [])


class ValidatedRow(BaseModel):
    record: LeadRecord
    verdict: Verdict


class BatchResponse(BaseModel):
    rows: List[ValidatedRow] = Field(default_factory=list)
    counts: Dict[str, int] = Field(default_factory=dict, description="Number of rows per verdict result")
    warnings: List[str] = Field(default_factory=list)


class RequisitionRequest(BaseModel):
    req: str = ""
