from __future__ import annotations
from dataclasses import dataclass

from diffpatterns.core.config import DEFAULT_SIMILARITY_THRESHOLD


@dataclass(frozen=True)
class AnalyzeOptions:
    # 입력만 받고 그룹핑에는 쓰이지 않음 (pairer의 0.3 기준은 고정)
    similarity_threshold: float = DEFAULT_SIMILARITY_THRESHOLD
    markup_aware: bool = False
    verbose: bool = False
