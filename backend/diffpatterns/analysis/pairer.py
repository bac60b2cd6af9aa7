from __future__ import annotations

import logging
from typing import Dict, List, Tuple

from diffpatterns.analysis.groups import make_group
from diffpatterns.analysis.markup_nodes import are_related_nodes, is_complete_node, is_substantial
from diffpatterns.utils.diff.models import ChangeGroup, ChangeUnit

logger = logging.getLogger(__name__)


def pair_structural_changes(units: List[ChangeUnit]) -> Tuple[List[ChangeGroup], List[ChangeUnit]]:
    """
    같은 파일 안에서 삭제 + 삽입이 한 노드의 재구성이면 하나의 그룹으로 묶는다.

    Returns:
      groups: 이 단계에서 만들어진 그룹 (파일 등장 순서)
      remaining: 묶이지 않은 unit (원래 순서 유지)
    """
    by_file: Dict[str, List[ChangeUnit]] = {}
    for unit in units:
        by_file.setdefault(unit.filePath, []).append(unit)

    groups: List[ChangeGroup] = []
    claimed: set[int] = set()

    for file_path, file_units in by_file.items():
        file_groups = _pair_file(file_units)

        for group in file_groups:
            claimed.update(id(u) for u in group.members)
            logger.debug("Paired %d changes in %s", group.size, file_path)

        groups.extend(file_groups)

    remaining = [u for u in units if id(u) not in claimed]
    return groups, remaining


def _pair_file(file_units: List[ChangeUnit]) -> List[ChangeGroup]:
    deletions = [u for u in file_units if u.kind == "Delete"]
    additions = [u for u in file_units if u.kind == "Add"]

    if not deletions or not additions:
        return []

    # 1) 큰 삭제 + 큰 삽입이 같이 있으면 파일 전체를 하나의 재구성으로 본다
    substantial_deletions = [d for d in deletions if is_substantial(d.rawText)]
    substantial_additions = [a for a in additions if is_substantial(a.rawText)]

    if substantial_deletions and substantial_additions:
        return [make_group(substantial_deletions + substantial_additions)]

    # 2) 아니면 완결된 노드끼리 element 이름 / 유사도로 짝을 찾는다
    complete = {id(u): is_complete_node(u.rawText) for u in deletions + additions}
    taken: set[int] = set()
    groups: List[ChangeGroup] = []

    for deletion in deletions:
        if not complete[id(deletion)]:
            continue

        related = [
            a for a in additions
            if id(a) not in taken and complete[id(a)] and are_related_nodes(deletion.rawText, a.rawText)
        ]
        if not related:
            continue

        taken.update(id(a) for a in related)
        groups.append(make_group([deletion] + related))

    return groups
