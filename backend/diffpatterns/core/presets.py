from __future__ import annotations
from typing import Optional

from diffpatterns.core.analyze_options import AnalyzeOptions
from diffpatterns.core.config import DEFAULT_SIMILARITY_THRESHOLD, REPORT_FORMATS
from diffpatterns.core.errors import InvalidOptionsError


DEFAULT_OPTIONS = AnalyzeOptions(similarity_threshold=DEFAULT_SIMILARITY_THRESHOLD, markup_aware=False, verbose=False)


def build_options(
    *,
    similarity_threshold: Optional[float] = None,
    markup_aware: bool = False,
    verbose: bool = False,
) -> AnalyzeOptions:
    """
    엔진 실행 전에 옵션을 검증한다.
    threshold는 0.0 ~ 1.0 범위만 허용.
    """
    if similarity_threshold is None:
        similarity_threshold = DEFAULT_OPTIONS.similarity_threshold

    try:
        threshold = float(similarity_threshold)
    except (TypeError, ValueError):
        raise InvalidOptionsError(f"Similarity threshold must be a number, got {similarity_threshold!r}")

    # NaN도 여기서 걸러진다
    if not 0.0 <= threshold <= 1.0:
        raise InvalidOptionsError(f"Similarity threshold must be between 0.0 and 1.0, got {threshold}")

    return AnalyzeOptions(
        similarity_threshold=threshold,
        markup_aware=bool(markup_aware),
        verbose=bool(verbose),
    )


def validate_report_format(fmt: str) -> str:
    fmt = (fmt or "").lower()
    if fmt not in REPORT_FORMATS:
        raise InvalidOptionsError(f"Unknown report format: {fmt} (choose from {', '.join(REPORT_FORMATS)})")
    return fmt
