from __future__ import annotations
from typing import List

from diffpatterns.analysis.rule_engine import apply_rules
from diffpatterns.analysis.rules import CATEGORY_RULES, CONTENT_RULES, RESTRUCTURE_RULES, is_markup_path
from diffpatterns.core.change_types import ChangeCategory
from diffpatterns.utils.diff.canonical import changed_lines
from diffpatterns.utils.diff.models import ChangeGroup, ChangeUnit


_KIND_CONTENT_FALLBACK = {
    "Add": "Add XML content",
    "Delete": "Remove XML content",
    "Modify": "Modify XML content",
}

_CATEGORY_PHRASES = {
    "CSharpImport": "using statements",
    "CSharpMethod": "C# methods",
    "CSharpProperty": "C# properties",
    "ConfigurationChange": "configuration values",
}


def classify_group(group: ChangeGroup) -> ChangeGroup:
    """
    그룹에 category / description을 한 번 붙인다.
    """
    group.category = determine_category(group.members[0])
    group.description = describe_group(group.members)
    return group


def determine_category(unit: ChangeUnit) -> ChangeCategory:
    path = unit.filePath.lower()
    content = unit.rawText.lower()
    return apply_rules(CATEGORY_RULES, path, content) or "Other"


def describe_group(members: List[ChangeUnit]) -> str:
    first = members[0]
    file_count = len({u.filePath for u in members})
    kinds = {u.kind for u in members}

    # 삭제 + 삽입 혼합: 노드 재구성
    if "Delete" in kinds and "Add" in kinds:
        if is_markup_path(first.filePath):
            description = _describe_restructuring(members)
        else:
            deletions = sum(1 for u in members if u.kind == "Delete")
            additions = sum(1 for u in members if u.kind == "Add")
            return f"Restructure code elements - {deletions} deletions, {additions} additions ({file_count} files)"
    elif is_markup_path(first.filePath):
        description = _describe_markup_change(first)
    else:
        phrase = _CATEGORY_PHRASES.get(determine_category(first), "code changes")
        description = f"{first.kind} {phrase}"

    if file_count > 1:
        description += f" ({file_count} files)"

    return description


def _describe_restructuring(members: List[ChangeUnit]) -> str:
    deleted = " ".join(line for u in members if u.kind == "Delete" for line in changed_lines(u.rawText, "-"))
    added = " ".join(line for u in members if u.kind == "Add" for line in changed_lines(u.rawText, "+"))

    return apply_rules(RESTRUCTURE_RULES, deleted.lower(), added.lower()) or "Restructure XML elements"


def _describe_markup_change(unit: ChangeUnit) -> str:
    lines = unit.rawText.lower().split("\n")
    added = [line for line in lines if line.startswith("+") and not line.startswith("+++")]
    removed = [line for line in lines if line.startswith("-") and not line.startswith("---")]

    description = apply_rules(CONTENT_RULES, added, removed)
    if description:
        return description

    return _KIND_CONTENT_FALLBACK.get(unit.kind, "Update XML content")
