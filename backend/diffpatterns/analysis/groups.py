import uuid
from typing import List

from diffpatterns.utils.diff.models import ChangeGroup, ChangeUnit


def new_pattern_id() -> str:
    return uuid.uuid4().hex[:8]


def make_group(members: List[ChangeUnit]) -> ChangeGroup:
    # 빈 그룹은 로직 버그
    assert members, "a change group needs at least one member"

    affected_files = list(dict.fromkeys(u.filePath for u in members))

    return ChangeGroup(
        patternId=new_pattern_id(),
        members=list(members),
        affectedFiles=affected_files,
        # 두 경로 모두 동일/인정된 변경만 묶으므로 항상 1.0
        similarityScore=1.0,
    )
