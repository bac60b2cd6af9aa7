from __future__ import annotations

import logging
from typing import Iterable, List, Sequence, Tuple, Union

from diffpatterns.analysis.classifier import classify_group
from diffpatterns.analysis.clusterer import cluster_exact_matches
from diffpatterns.analysis.pairer import pair_structural_changes
from diffpatterns.analysis.ranker import rank_groups, summarize
from diffpatterns.core.analyze_options import AnalyzeOptions
from diffpatterns.core.presets import DEFAULT_OPTIONS
from diffpatterns.utils.diff.models import AnalysisResult, ChangeGroup, ChangeUnit, FileDiff
from diffpatterns.utils.diff.parse_unified import extract_change_units

FileDiffInput = Union[FileDiff, Tuple[str, str, str]]


def as_file_diff(item: FileDiffInput) -> FileDiff:
    if isinstance(item, FileDiff):
        return item

    file_path, kind, diff_text = item
    return FileDiff(filePath=file_path, kind=kind, diffText=diff_text)


class ChangeAnalyzer:
    """
    hunk 추출 -> (markup mode) 구조 pairing -> exact match clustering -> 분류 -> 정렬

    - 입력은 이미 필터링된 파일별 diff
    - 실행 간 상태 없음 (run마다 새로 계산)
    - verbose는 로그만 바꾸고 결과에는 영향 없음
    """

    def __init__(self, options: AnalyzeOptions = DEFAULT_OPTIONS):
        self.options = options
        self._logger = logging.getLogger("ChangeAnalyzer")

    def extract(self, file_diffs: Iterable[FileDiffInput]) -> List[ChangeUnit]:
        units: List[ChangeUnit] = []
        for item in file_diffs:
            fd = as_file_diff(item)
            units.extend(
                extract_change_units(fd.filePath, fd.kind, fd.diffText, markup_aware=self.options.markup_aware)
            )

        self._progress("Parsed %d change blocks", len(units))
        return units

    def group(self, units: Sequence[ChangeUnit]) -> List[ChangeGroup]:
        """
        ChangeUnit 목록 -> 정렬된 ChangeGroup 목록 (모든 unit은 정확히 한 그룹에 속한다)
        """
        self._progress("Analyzing %d changes for similarity grouping...", len(units))

        remaining = list(units)
        groups: List[ChangeGroup] = []

        # 1. 같은 파일의 삭제 + 삽입 노드 재구성
        if self.options.markup_aware:
            paired, remaining = pair_structural_changes(remaining)
            for g in paired:
                self._progress("Created XML restructuring group with %d changes", g.size)
            groups.extend(paired)

        # 2. 나머지는 canonical form 완전 일치로
        clustered, remaining = cluster_exact_matches(remaining)
        groups.extend(clustered)

        assert not remaining, "every change unit must end up in a group"

        for g in groups:
            classify_group(g)
            if g.size > 1:
                self._progress("Created group '%s' with %d changes", g.description, g.size)

        self._progress("Created %d total groups", len(groups))
        return rank_groups(groups)

    def analyze(self, file_diffs: Iterable[FileDiffInput]) -> AnalysisResult:
        units = self.extract(file_diffs)
        groups = self.group(units)
        return AnalysisResult(groups=groups, summary=summarize(groups))

    def _progress(self, msg: str, *args) -> None:
        if self.options.verbose:
            self._logger.info(msg, *args)
