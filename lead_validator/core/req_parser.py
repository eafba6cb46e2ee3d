"""
Requisition parser.

A requisition string has two parts separated by a case-insensitive "| comments:" marker:

    Level: Director | Company Size: 500+ | Geo: US only | comments: <p>Titles:</p><p>Job Levels: Director</p>

The first part is a list of pipe separated "key: value" pairs and ends up in `meta`.
The second part is pseudo-HTML narrative. Its block nodes (p/div) are classified one by
one into `comments[section][key]` lists by a small state machine.
"""

import logging
import re
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Tuple

from bs4 import BeautifulSoup
from bs4.element import NavigableString, PreformattedString, Tag

from lead_validator.core.schemas import ParsedRequisition
from lead_validator.core.text_normalization import (
    is_multi_valued_key,
    normalize_key,
    split_csv_like,
)

logger = logging.getLogger(__name__)

COMMENTS_MARKER_RE = re.compile(r"\|\s*comments\s*:", re.IGNORECASE)
NUMBERED_PREFIX_RE = re.compile(r"^\s*\d+\)\s*")

BLOCK_TAGS = ["p", "div"]

ROOT_SECTION = "root"
HEADER_SECTIONS = {"titles", "industry"}
CUSTOM_INDUSTRIES = "custom_industries"
LINES_KEY = "lines"

Dict2 = Dict[str, List[str]]


def _split_key_value(line: str) -> Optional[Tuple[str, str]]:
    """Split on the first colon. None when the line has no colon."""
    idx = line.find(":")
    if idx == -1:
        return None
    return line[:idx].strip(), line[idx + 1:].strip()


def _values_for(key: str, raw: str) -> List[str]:
    if is_multi_valued_key(key):
        return split_csv_like(raw)
    return [raw.strip()]


def _push(bucket: Dict2, key: str, values: List[str]) -> None:
    """Append values to bucket[key], skipping empties and duplicates."""
    if not values:
        return
    items = bucket.setdefault(key, [])
    for v in values:
        vv = v.strip()
        if vv and vv not in items:
            items.append(vv)


# ============================================================================
# Meta part
# ============================================================================

def parse_meta(main_part: str) -> Dict[str, str]:
    """Later segments overwrite earlier ones with the same normalized key."""
    meta: Dict[str, str] = {}
    for raw in (main_part or "").split("|"):
        seg = raw.strip()
        if not seg:
            continue
        kv = _split_key_value(seg)
        if kv is None:
            continue
        key, value = kv
        meta[normalize_key(key)] = value
    return meta


# ============================================================================
# Comments part: block nodes
# ============================================================================

def _is_text(node) -> bool:
    return isinstance(node, NavigableString) and not isinstance(node, PreformattedString)


def _contains_block(tag: Tag) -> bool:
    return tag.name in BLOCK_TAGS or tag.find(BLOCK_TAGS) is not None


def _walk(parent: Tag, is_block: bool) -> Iterator[str]:
    buf: List[str] = []
    has_block_child = False

    for child in parent.children:
        if isinstance(child, Tag) and _contains_block(child):
            text = "".join(buf)
            if text.strip():
                yield text
            buf = []
            has_block_child = True
            yield from _walk(child, child.name in BLOCK_TAGS)
        elif isinstance(child, Tag):
            buf.append(child.get_text())
        elif _is_text(child):
            buf.append(str(child))

    text = "".join(buf)
    # Innermost blocks are nodes even when blank: a blank paragraph resets a pending key.
    if is_block and not has_block_child:
        yield text
    elif text.strip():
        yield text


def comment_nodes(comment_html: str) -> List[str]:
    """
    Turn the comments part into an ordered list of node texts.

    Non-breaking spaces become regular spaces and every node is trimmed.
    Plain text without any p/div markup is split into lines instead;
    there a <br> counts as a line break.
    """
    soup = BeautifulSoup(comment_html, "html.parser")
    if soup.find(BLOCK_TAGS) is None:
        for br in soup.find_all("br"):
            br.replace_with("\n")
        raw_nodes = soup.get_text().splitlines()
    else:
        raw_nodes = list(_walk(soup, False))
    return [n.replace("\u00a0", " ").strip() for n in raw_nodes]


# ============================================================================
# Comments part: line classification
# ============================================================================

@dataclass
class ClassifierState:
    section: str = ROOT_SECTION
    pending_key: Optional[str] = None


class CommentClassifier:
    """
    Reduce comment nodes into section -> key -> values.

    State is (section, pending_key) only. Each node is exactly one of:
    a blank separator, the deferred value of a pending key, a section header,
    a key/value pair, or a plain line stored under "lines".
    """

    def __init__(self) -> None:
        self.state = ClassifierState()
        self.comments: Dict[str, Dict2] = {}

    def _ensure_section(self, name: str) -> Dict2:
        return self.comments.setdefault(normalize_key(name) or ROOT_SECTION, {})

    def _add_kv(self, key_raw: str, value_raw: str) -> None:
        key = normalize_key(key_raw)
        if not key:
            return
        bucket = self._ensure_section(self.state.section)
        if value_raw.strip():
            _push(bucket, key, _values_for(key, value_raw))
            self.state.pending_key = None
        else:
            self.state.pending_key = key
            logger.debug(f"Pending key '{key}' in section '{self.state.section}'")

    def _switch_section(self, name: str) -> None:
        self.state.section = name
        self.state.pending_key = None
        self._ensure_section(name)
        logger.debug(f"Section switched to '{name}'")

    def feed(self, text: str) -> None:
        if not text or not text.strip():
            self.state.pending_key = None
            return

        if self.state.pending_key:
            key = self.state.pending_key
            bucket = self._ensure_section(self.state.section)
            _push(bucket, key, _values_for(key, text))
            self.state.pending_key = None
            return

        line = NUMBERED_PREFIX_RE.sub("", text, count=1).strip()
        kv = _split_key_value(line)

        if kv is None:
            _push(self._ensure_section(self.state.section), LINES_KEY, [line])
            return

        key, value = kv
        k_norm = normalize_key(key)

        if not k_norm:
            # ": something" or "--: x" has no usable key, keep the text
            _push(self._ensure_section(self.state.section), LINES_KEY, [line])
            return

        if k_norm in HEADER_SECTIONS and not value:
            self._switch_section(k_norm)
            return

        if k_norm == CUSTOM_INDUSTRIES:
            self._switch_section(CUSTOM_INDUSTRIES)
            if value:
                self._add_kv(CUSTOM_INDUSTRIES, value)
            return

        self._add_kv(key, value)


def parse_comments(comment_html: str) -> Dict[str, Dict2]:
    classifier = CommentClassifier()
    for node in comment_nodes(comment_html):
        classifier.feed(node)
    return classifier.comments


def parse_requisition(req: str) -> ParsedRequisition:
    """
    Parse a requisition string into meta and comments.

    Never raises on malformed text: anything that is not a key/value pair
    lands under "lines", keys without a value are dropped.
    """
    parts = COMMENTS_MARKER_RE.split(req or "", maxsplit=1)
    main_part = parts[0].strip()
    comment_html = parts[1].strip() if len(parts) > 1 else ""

    meta = parse_meta(main_part)
    comments = parse_comments(comment_html) if comment_html else {}
    return ParsedRequisition(meta=meta, comments=comments)
