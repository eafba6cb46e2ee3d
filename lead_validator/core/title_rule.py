"""
Title/PL Summary rule: the lead's title must cover the title terms of the requisition.

How it works:
- Parse the req column to get the comments structure
- Required tokens come from comments.titles.job_levels and comments.titles.keywords
- Title and required phrases are split into word tokens
- Coverage = share of required tokens present in the title tokens
- Level terms must all be present, keyword terms at least partly, and the
  combined set above a total threshold
"""

from typing import Iterable, List, Optional, Set

from pydantic import BaseModel, Field

from lead_validator.core.config import Settings, get_settings
from lead_validator.core.req_parser import parse_requisition
from lead_validator.core.schemas import LeadRecord, Verdict
from lead_validator.core.text_normalization import normalize_text, tokenize, unique

TITLES_SECTION = "titles"
LEVELS_KEY = "job_levels"
KEYWORDS_KEY = "keywords"


class TitleCoverageConfig(BaseModel):
    """Thresholds for title similarity checks."""
    min_total_coverage: float = Field(default=0.75, description="Share of all required tokens that must be in the title")
    min_level_coverage: float = Field(default=1.0, description="Share of job level tokens that must be in the title")
    min_keyword_coverage: float = Field(default=0.3, description="Share of keyword tokens that must be in the title")
    require_title: bool = Field(default=True, description="Empty title is INVALID")
    missing_limit: int = Field(default=6, description="How many missing tokens a comment lists")

    @classmethod
    def from_settings(cls, settings: Settings) -> "TitleCoverageConfig":
        return cls(
            min_total_coverage=settings.title_min_total_coverage,
            min_level_coverage=settings.title_min_level_coverage,
            min_keyword_coverage=settings.title_min_keyword_coverage,
            require_title=settings.title_require_title,
            missing_limit=settings.title_missing_limit,
        )


class Coverage(BaseModel):
    ratio: float
    matched: List[str] = Field(default_factory=list)
    missing: List[str] = Field(default_factory=list)


def tokens_from_list(values: Iterable[str]) -> List[str]:
    return unique([tok for v in values for tok in tokenize(v)])


def coverage(required: List[str], present: Set[str]) -> Coverage:
    """Share of required tokens found in present. Nothing required counts as full coverage."""
    if not required:
        return Coverage(ratio=1.0)
    matched = [tok for tok in required if tok in present]
    missing = [tok for tok in required if tok not in present]
    return Coverage(ratio=len(matched) / len(required), matched=matched, missing=missing)


def validate_title(record: LeadRecord, cfg: Optional[TitleCoverageConfig] = None) -> Verdict:
    cfg = cfg or TitleCoverageConfig.from_settings(get_settings())

    title = normalize_text(record.title)
    if cfg.require_title and not title:
        return Verdict(result="INVALID", comment="Missing title")

    parsed = parse_requisition(record.req)
    level_tokens = tokens_from_list(parsed.values(TITLES_SECTION, LEVELS_KEY))
    keyword_tokens = tokens_from_list(parsed.values(TITLES_SECTION, KEYWORDS_KEY))
    all_tokens = unique(level_tokens + keyword_tokens)

    if not all_tokens:
        return Verdict(result="VALID")

    title_tokens = set(tokenize(title))
    lvl = coverage(level_tokens, title_tokens)
    kw = coverage(keyword_tokens, title_tokens)
    total = coverage(all_tokens, title_tokens)

    def top_missing(missing: List[str]) -> str:
        return ", ".join(missing[:cfg.missing_limit])

    if level_tokens and lvl.ratio < cfg.min_level_coverage:
        return Verdict(result="INVALID", comment=f"Title missing level terms: {top_missing(lvl.missing)}")

    if keyword_tokens and kw.ratio < cfg.min_keyword_coverage:
        return Verdict(result="INVALID", comment=f"Title missing keyword terms: {top_missing(kw.missing)}")

    if total.ratio < cfg.min_total_coverage:
        return Verdict(
            result="INVALID",
            comment=f"Title similarity too low ({int(total.ratio * 100 + 0.5)}%). Missing: {top_missing(total.missing)}",
        )

    return Verdict(result="VALID")
