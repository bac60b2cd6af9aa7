"""
Tag-level heuristics used by the structural pairer.

These work on the joined changed-line content of a hunk, never on a parsed
tree: a "complete node" is text that looks like a whole element (or several),
and two nodes are "related" when they open with the same element name or read
alike once attribute values are masked.
"""
from __future__ import annotations

import re
from typing import List

from diffpatterns.core.config import COMPLETE_NODE_LINE_COUNT, RELATED_NODE_SIMILARITY, SUBSTANTIAL_LINE_COUNT
from diffpatterns.utils.diff.canonical import changed_content, changed_lines, count_changed_lines

_FLAGS = re.IGNORECASE | re.DOTALL

# 단일 element 의 open/close 쌍
_ELEMENT_PATTERNS: List[re.Pattern] = [
    re.compile(r"<Component\s+[^>]*>.*?</Component>", _FLAGS),
    re.compile(r"<Component\s*>.*?</Component>", _FLAGS),
    re.compile(r"<Element\s+[^>]*>.*?</Element>", _FLAGS),
    re.compile(r"<Element\s*>.*?</Element>", _FLAGS),
    re.compile(r"<[A-Za-z][A-Za-z0-9]*\s+[^>]*>.*?</[A-Za-z][A-Za-z0-9]*>", _FLAGS),
    re.compile(r"<[A-Za-z][A-Za-z0-9]*\s*>.*?</[A-Za-z][A-Za-z0-9]*>", _FLAGS),
]
_SELF_CLOSING_RE = re.compile(r"<[A-Za-z][A-Za-z0-9]*[^>]*/\s*>", re.IGNORECASE)
_FIRST_OPEN_TAG_RE = re.compile(r"<([A-Za-z][A-Za-z0-9]*)[^>]*>", re.IGNORECASE)
_OPEN_TAG_RE = re.compile(r"<[A-Za-z][A-Za-z0-9]*[^/>]*>", re.IGNORECASE)
_CLOSE_TAG_RE = re.compile(r"</[A-Za-z][A-Za-z0-9]*>", re.IGNORECASE)
_ELEMENT_NAME_RE = re.compile(r"<([A-Za-z][A-Za-z0-9]*)", re.IGNORECASE)

_ID_ATTR_RE = re.compile(r'id\s*=\s*"[^"]*"', re.IGNORECASE)
_NAME_ATTR_RE = re.compile(r'name\s*=\s*"[^"]*"', re.IGNORECASE)
_QUOTED_RE = re.compile(r'"[^"]*"')


def is_complete_element(content: str) -> bool:
    if any(p.search(content) for p in _ELEMENT_PATTERNS):
        return True

    if _SELF_CLOSING_RE.search(content):
        return True

    # 여러 줄에 걸친 element: 첫 태그 이름의 closer가 어딘가에 있는지
    compact = content.replace(" ", "")
    m = _FIRST_OPEN_TAG_RE.search(compact)
    if m:
        closing = f"</{m.group(1)}>".lower()
        if closing in compact.lower():
            return True

    return False


def is_large_block(content: str) -> bool:
    tagged_tokens = sum(1 for part in content.split(" ") if "<" in part and ">" in part)
    if tagged_tokens >= 3:
        return True

    if "<Component" in content and "</Component>" in content:
        return True

    open_tags = len(_OPEN_TAG_RE.findall(content))
    close_tags = len(_CLOSE_TAG_RE.findall(content))
    return open_tags >= 2 and close_tags >= 1


def is_complete_node(raw_text: str) -> bool:
    lines = changed_lines(raw_text)

    # 큰 변경은 그 자체로 완결된 구조로 본다
    if len(lines) >= COMPLETE_NODE_LINE_COUNT:
        return True

    content = " ".join(lines).strip()
    return is_complete_element(content) or is_large_block(content)


def is_substantial(raw_text: str) -> bool:
    if count_changed_lines(raw_text) > SUBSTANTIAL_LINE_COUNT:
        return True
    return is_complete_node(raw_text)


def element_name(raw_text: str) -> str:
    m = _ELEMENT_NAME_RE.search(changed_content(raw_text))
    return m.group(1) if m else ""


def normalize_for_comparison(raw_text: str) -> str:
    content = changed_content(raw_text)
    content = _ID_ATTR_RE.sub('id="ID"', content)
    content = _NAME_ATTR_RE.sub('name="NAME"', content)
    content = _QUOTED_RE.sub('"VALUE"', content)
    return content


def edit_distance(s1: str, s2: str) -> int:
    """Levenshtein distance, unit cost for insert/delete/substitute."""
    if not s1:
        return len(s2)
    if not s2:
        return len(s1)

    previous = list(range(len(s2) + 1))
    for i, c1 in enumerate(s1, start=1):
        current = [i]
        for j, c2 in enumerate(s2, start=1):
            cost = 0 if c1 == c2 else 1
            current.append(min(previous[j] + 1, current[j - 1] + 1, previous[j - 1] + cost))
        previous = current

    return previous[-1]


def text_similarity(s1: str, s2: str) -> float:
    if not s1 or not s2:
        return 0.0
    if s1 == s2:
        return 1.0

    max_len = max(len(s1), len(s2))
    return 1.0 - edit_distance(s1, s2) / max_len


def are_related_nodes(deleted_raw: str, added_raw: str) -> bool:
    deleted_name = element_name(deleted_raw)
    added_name = element_name(added_raw)

    if deleted_name and added_name:
        return deleted_name.lower() == added_name.lower()

    similarity = text_similarity(normalize_for_comparison(deleted_raw), normalize_for_comparison(added_raw))
    return similarity > RELATED_NODE_SIMILARITY
