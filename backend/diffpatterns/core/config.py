from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from diffpatterns.core.errors import InvalidOptionsError

load_dotenv()

# 프로젝트 루트 (diff-pattern-analyzer/backend)
BASE_DIR = Path(__file__).resolve().parents[2]

# 리포트 기본 출력 위치
DEFAULT_OUTPUT_DIR = Path("./output")

# 그룹핑 기본값
DEFAULT_SIMILARITY_THRESHOLD = 0.7

# 구조 pairing 시 fallback 유사도 기준 (설정값과 무관하게 고정)
RELATED_NODE_SIMILARITY = 0.3

# 이 줄 수를 넘으면 "큰 변경"으로 취급
SUBSTANTIAL_LINE_COUNT = 8
COMPLETE_NODE_LINE_COUNT = 10

# context preview 줄 수
CONTEXT_PREVIEW_LINES = 5

MARKUP_EXTENSIONS = (".xml", ".config", ".settings", ".resx", ".xaml")
SOURCE_EXTENSIONS = (".cs",)

REPORT_FORMATS = ("markdown", "json", "csv")


@dataclass
class AnalyzerConfig:
    output_dir: Path
    similarity_threshold: float = DEFAULT_SIMILARITY_THRESHOLD
    markup_aware: bool = False
    report_format: str = "markdown"


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def load_analyzer_config() -> AnalyzerConfig:
    """
    환경변수(.env 포함)에서 CLI/API 기본값을 읽는다.
    숫자 변환 실패만 여기서 막고, 범위 검증은 presets.build_options에서 한다.
    """
    output_dir = Path(os.getenv("DIFFPATTERNS_OUTPUT_DIR", str(DEFAULT_OUTPUT_DIR)))
    raw_threshold = os.getenv("DIFFPATTERNS_SIMILARITY_THRESHOLD", str(DEFAULT_SIMILARITY_THRESHOLD))
    try:
        threshold = float(raw_threshold)
    except ValueError:
        raise InvalidOptionsError(f"DIFFPATTERNS_SIMILARITY_THRESHOLD must be a number, got {raw_threshold!r}")
    report_format = os.getenv("DIFFPATTERNS_REPORT_FORMAT", "markdown").lower()

    return AnalyzerConfig(
        output_dir=output_dir,
        similarity_threshold=threshold,
        markup_aware=_env_flag("DIFFPATTERNS_MARKUP_MODE"),
        report_format=report_format,
    )
