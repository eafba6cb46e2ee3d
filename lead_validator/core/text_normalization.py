"""
Text normalization shared by the requisition parser and the validation rules.

Two flavours:
- normalize_key(): structural keys (meta keys, section names, comment keys)
- normalize_text() / tokenize(): free text compared token by token (titles)
"""

import re
from typing import List


# ============================================================================
# Patterns
# ============================================================================

NON_ALNUM_RUN_RE = re.compile(r"[^a-z0-9]+")
EDGE_UNDERSCORE_RE = re.compile(r"^_+|_+$")
NON_TEXT_CHARS_RE = re.compile(r"[^a-z0-9+\s/.\-]+")
WHITESPACE_RE = re.compile(r"\s+")

# Keys whose values are comma separated lists, e.g. "Keywords: sales, marketing"
MULTI_VALUED_KEYS = {"keywords", "job_area", "comment"}
MULTI_VALUED_KEY_FRAGMENTS = ("industr",)


def normalize_key(s: str) -> str:
    """
    Make a structural key comparable.

    Examples:
    - "  Job Levels " → "job_levels"
    - "Sales & Marketing" → "sales_and_marketing"
    - "(Custom) Industries:" → "custom_industries"
    """
    t = (s or "").strip().lower().replace("&", " and ")
    t = NON_ALNUM_RUN_RE.sub("_", t)
    return EDGE_UNDERSCORE_RE.sub("", t)


def normalize_text(s: str) -> str:
    """Lowercase free text and keep only word-ish characters, single spaced."""
    t = (s or "").strip().lower().replace("&", " and ")
    t = NON_TEXT_CHARS_RE.sub(" ", t)
    return WHITESPACE_RE.sub(" ", t).strip()


def tokenize(s: str) -> List[str]:
    t = normalize_text(s)
    if not t:
        return []
    return [tok for tok in t.split(" ") if tok]


def split_csv_like(s: str) -> List[str]:
    """Split comma separated text, trimming pieces and dropping empties."""
    return [piece.strip() for piece in (s or "").split(",") if piece.strip()]


def is_multi_valued_key(key: str) -> bool:
    """True for normalized keys whose values should be split on commas."""
    return key in MULTI_VALUED_KEYS or any(frag in key for frag in MULTI_VALUED_KEY_FRAGMENTS)


def unique(values: List[str]) -> List[str]:
    """Drop duplicates, keeping first-occurrence order."""
    return list(dict.fromkeys(values))
