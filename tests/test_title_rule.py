import pytest
from lead_validator.core.schemas import LeadRecord
from lead_validator.core.title_rule import (
    TitleCoverageConfig,
    coverage,
    tokens_from_list,
    validate_title,
)


LEVELS_REQ = "Level: Senior | comments: <p>Titles:</p><p>Job Levels: Senior, Manager</p>"
KEYWORDS_REQ = "| comments: <p>Titles:</p><p>Keywords: data, analytics, engineering, platform</p>"
MIXED_REQ = "| comments: <p>Titles:</p><p>Job Levels: VP</p><p>Keywords:</p><p>data, analytics, platform</p>"


def lead(title: str, req: str) -> LeadRecord:
    return LeadRecord(title=title, req=req, sub_status="N/A: Title/PL Summary")


class TestCoverage:
    def test_empty_required_is_full(self):
        assert coverage([], {"a"}).ratio == 1.0

    def test_partial(self):
        cov = coverage(["senior", "manager"], {"product", "manager"})
        assert cov.ratio == 0.5
        assert cov.matched == ["manager"]
        assert cov.missing == ["senior"]

    def test_tokens_from_list_flattens_and_dedupes(self):
        assert tokens_from_list(["Senior Manager", "Manager, Director"]) == ["senior", "manager", "director"]


class TestValidateTitle:
    def test_level_tokens_covered(self):
        assert validate_title(lead("Senior Product Manager", LEVELS_REQ)).result == "VALID"

    def test_level_token_missing(self):
        verdict = validate_title(lead("Product Manager", LEVELS_REQ))
        assert verdict.result == "INVALID"
        assert verdict.comment == "Title missing level terms: senior"

    def test_missing_title(self):
        verdict = validate_title(lead("  ", LEVELS_REQ))
        assert (verdict.result, verdict.comment) == ("INVALID", "Missing title")

    def test_missing_title_checked_before_requirements(self):
        assert validate_title(lead("", "")).comment == "Missing title"

    def test_no_title_requirements(self):
        assert validate_title(lead("Anything", "Level: VP | comments: <p>Keywords: x</p>")).result == "VALID"

    def test_keyword_coverage_too_low(self):
        verdict = validate_title(lead("Sales Director", KEYWORDS_REQ))
        assert verdict.result == "INVALID"
        assert verdict.comment == "Title missing keyword terms: data, analytics, engineering, platform"

    def test_total_coverage_too_low(self):
        verdict = validate_title(lead("VP Data", MIXED_REQ))
        assert verdict.result == "INVALID"
        assert verdict.comment == "Title similarity too low (50%). Missing: analytics, platform"

    def test_total_coverage_enough(self):
        assert validate_title(lead("VP, Data Analytics", MIXED_REQ)).result == "VALID"

    def test_missing_list_is_capped(self):
        req = "| comments: <p>Titles:</p><p>Keywords: a1, a2, a3, a4, a5, a6, a7, a8</p>"
        verdict = validate_title(lead("Director", req))
        assert verdict.comment == "Title missing keyword terms: a1, a2, a3, a4, a5, a6"

    def test_whitespace_and_case_variants_agree(self):
        canonical = validate_title(lead("senior product manager", LEVELS_REQ))
        noisy = validate_title(lead("  SENIOR   Product   MANAGER ", LEVELS_REQ))
        assert noisy == canonical


class TestConfig:
    def test_defaults(self):
        cfg = TitleCoverageConfig()
        assert cfg.min_total_coverage == 0.75
        assert cfg.min_level_coverage == 1.0
        assert cfg.min_keyword_coverage == 0.3
        assert cfg.require_title is True

    def test_title_not_required(self):
        cfg = TitleCoverageConfig(require_title=False)
        assert validate_title(lead("", "Level: VP"), cfg).result == "VALID"

    def test_relaxed_level_coverage(self):
        cfg = TitleCoverageConfig(min_level_coverage=0.5, min_total_coverage=0.5)
        assert validate_title(lead("Product Manager", LEVELS_REQ), cfg).result == "VALID"

    def test_settings_override(self, monkeypatch):
        from lead_validator.core.config import Settings
        monkeypatch.setenv("LEAD_VALIDATOR_TITLE_MIN_TOTAL_COVERAGE", "0.5")
        cfg = TitleCoverageConfig.from_settings(Settings())
        assert cfg.min_total_coverage == 0.5
