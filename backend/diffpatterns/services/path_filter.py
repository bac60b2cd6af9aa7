from __future__ import annotations

import logging
import re
from typing import Iterable, List, Optional

from diffpatterns.utils.diff.models import FileDiff


def parse_patterns(patterns: Optional[str]) -> List[str]:
    # "*.xml, *.cs" -> ["*.xml", "*.cs"]
    if not patterns:
        return []
    return [p.strip() for p in patterns.split(",") if p.strip()]


def glob_to_regex(pattern: str) -> re.Pattern:
    """
    단순 glob -> regex (앵커 없음, 대소문자 무시).
    "*.xml" 은 경로 어디든 ".xml"이 있으면 매치된다.
    """
    regex = re.escape(pattern).replace(r"\*", ".*").replace(r"\?", ".")
    return re.compile(regex, re.IGNORECASE)


class PathFilter:
    """include/exclude 패턴으로 파일 diff를 거른다. exclude가 우선."""

    def __init__(self, include: Optional[str] = None, exclude: Optional[str] = None):
        self.include_patterns = parse_patterns(include)
        self.exclude_patterns = parse_patterns(exclude)
        self._include = [glob_to_regex(p) for p in self.include_patterns]
        self._exclude = [glob_to_regex(p) for p in self.exclude_patterns]
        self._logger = logging.getLogger("PathFilter")

    def should_include(self, file_path: str) -> bool:
        if any(r.search(file_path) for r in self._exclude):
            return False

        # include가 지정됐으면 하나라도 맞아야 함
        if self._include:
            return any(r.search(file_path) for r in self._include)

        return True

    def filter(self, file_diffs: Iterable[FileDiff]) -> List[FileDiff]:
        file_diffs = list(file_diffs)
        kept = [fd for fd in file_diffs if self.should_include(fd.filePath)]

        self._logger.info("Filtered %d files to %d files", len(file_diffs), len(kept))
        if self.include_patterns:
            self._logger.info("Include patterns: %s", ", ".join(self.include_patterns))
        if self.exclude_patterns:
            self._logger.info("Exclude patterns: %s", ", ".join(self.exclude_patterns))

        return kept
