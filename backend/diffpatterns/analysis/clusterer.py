from __future__ import annotations

from typing import Dict, List, Tuple

from diffpatterns.analysis.groups import make_group
from diffpatterns.utils.diff.models import ChangeGroup, ChangeUnit


def cluster_exact_matches(units: List[ChangeUnit]) -> Tuple[List[ChangeGroup], List[ChangeUnit]]:
    """
    canonicalForm이 완전히 같은 unit끼리만 묶는다 (부분 유사도 없음).
    - 처음 나온 unit이 cluster의 seed, 이후 같은 form은 그 뒤에 붙는다
    - 2개 이상 cluster를 seed 순서로 먼저, 그 다음 단독 unit을 원래 순서로
    남는 unit은 없다.
    """
    clusters: Dict[str, List[ChangeUnit]] = {}
    for unit in units:
        clusters.setdefault(unit.canonicalForm, []).append(unit)

    multi = [make_group(members) for members in clusters.values() if len(members) > 1]
    singles = [make_group(members) for members in clusters.values() if len(members) == 1]

    return multi + singles, []
