from __future__ import annotations
from typing import Dict, List

from diffpatterns.utils.diff.models import AnalysisSummary, ChangeGroup


def rank_groups(groups: List[ChangeGroup]) -> List[ChangeGroup]:
    # sorted는 stable: 크기가 같으면 생성 순서 유지
    return sorted(groups, key=lambda g: g.size, reverse=True)


def summarize(groups: List[ChangeGroup]) -> AnalysisSummary:
    files = {u.filePath for g in groups for u in g.members}

    category_counts: Dict[str, int] = {}
    for g in groups:
        category_counts[g.category] = category_counts.get(g.category, 0) + g.size

    return AnalysisSummary(
        totalFiles=len(files),
        totalGroups=len(groups),
        uniquePatterns=sum(1 for g in groups if g.size > 1),
        totalChanges=sum(g.size for g in groups),
        categoryCounts=category_counts,
    )
