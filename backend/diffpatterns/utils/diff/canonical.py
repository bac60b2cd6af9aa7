"""
Canonical form of a hunk: the equality key used for clustering.

Only the +/- lines survive; context lines and positions are dropped so that
the same edit made in two files (or two places) produces the same string.
"""
from __future__ import annotations

import re
from typing import Callable, Dict, List

# Rewrite = joined content -> joined content
Rewrite = Callable[[str], str]

_ID_ATTR_RE = re.compile(r'id\s*=\s*"[^"]*"', re.IGNORECASE)
_VALUE_ATTR_RE = re.compile(r'value\s*=\s*"[^"]*"', re.IGNORECASE)
_NAME_ATTR_RE = re.compile(r'name\s*=\s*"[^"]*"', re.IGNORECASE)
_CONFIG_CALL_RE = re.compile(r"CONFIG\(\{[^}]*\}\)", re.IGNORECASE)
_CONTAINER_SEQUENCE_RE = re.compile(r"<ContainerSequence>\d+</ContainerSequence>", re.IGNORECASE)
_QUOTED_NUMBER_RE = re.compile(r'"(\d+)"')
_DEVICE_ID_RE = re.compile(r"<DeviceID>-?\d+</DeviceID>", re.IGNORECASE)
_COMPONENT_NAME_RE = re.compile(r'<Component Name="[^"]*"', re.IGNORECASE)

POST301FORMAT_AUTOIME_SENTINEL = "POST301FORMAT_AUTOIME_REMOVAL_PATTERN"
DEFAULTFROM_EMPTY_SENTINEL = "DEFAULTFROM_EMPTY_REMOVAL_PATTERN"


def is_changed_line(line: str) -> bool:
    # +++ / --- 는 파일 헤더
    if line.startswith("+++") or line.startswith("---"):
        return False
    return line.startswith("+") or line.startswith("-")


def count_changed_lines(raw_text: str) -> int:
    """Number of +/- lines in the hunk, blank ones included."""
    return sum(1 for line in raw_text.split("\n") if is_changed_line(line))


def changed_lines(raw_text: str, marker: str | None = None) -> List[str]:
    """
    +/- 마커를 떼고 strip한 변경 줄 목록 (빈 줄 제외).
    marker를 주면 그 마커("+" 또는 "-")의 줄만 고른다.
    """
    out = []
    for line in raw_text.split("\n"):
        if not is_changed_line(line):
            continue
        if marker is not None and not line.startswith(marker):
            continue

        stripped = line[1:].strip()
        if stripped:
            out.append(stripped)
    return out


def changed_content(raw_text: str) -> str:
    return " ".join(changed_lines(raw_text))


def _strip_id_values(content: str) -> str:
    return _ID_ATTR_RE.sub('id=""', content)


def _strip_value_values(content: str) -> str:
    return _VALUE_ATTR_RE.sub('value=""', content)


def _strip_name_values(content: str) -> str:
    return _NAME_ATTR_RE.sub('name=""', content)


def _post301format_autoime_signature(content: str) -> str:
    lowered = content.lower()
    if "post301format" in lowered and "autoime(nocontrol)" in lowered:
        return POST301FORMAT_AUTOIME_SENTINEL
    return content


def _defaultfrom_empty_signature(content: str) -> str:
    lowered = content.lower()
    if "defaultfrom" in lowered and "()" in lowered:
        return DEFAULTFROM_EMPTY_SENTINEL
    return content


def _collapse_config_block(content: str) -> str:
    return _CONFIG_CALL_RE.sub("CONFIG({...})", content)


def _mask_container_sequence(content: str) -> str:
    return _CONTAINER_SEQUENCE_RE.sub("<ContainerSequence>N</ContainerSequence>", content)


def _mask_quoted_numbers(content: str) -> str:
    return _QUOTED_NUMBER_RE.sub('"N"', content)


def _mask_device_id(content: str) -> str:
    return _DEVICE_ID_RE.sub("<DeviceID>N</DeviceID>", content)


def _mask_component_name(content: str) -> str:
    return _COMPONENT_NAME_RE.sub('<Component Name="NAME"', content)


# 순서 중요: 속성 값 제거가 signature 검사보다 먼저 돈다
MARKUP_REWRITES: Dict[str, Rewrite] = {
    "strip_id_values": _strip_id_values,
    "strip_value_values": _strip_value_values,
    "strip_name_values": _strip_name_values,
    "post301format_autoime_signature": _post301format_autoime_signature,
    "defaultfrom_empty_signature": _defaultfrom_empty_signature,
    "collapse_config_block": _collapse_config_block,
    "mask_container_sequence": _mask_container_sequence,
    "mask_quoted_numbers": _mask_quoted_numbers,
    "mask_device_id": _mask_device_id,
    "mask_component_name": _mask_component_name,
}


def normalize_markup(content: str) -> str:
    for rewrite in MARKUP_REWRITES.values():
        content = rewrite(content)
    return content


def canonicalize(raw_text: str, markup_aware: bool = False) -> str:
    content = changed_content(raw_text)

    if markup_aware:
        content = normalize_markup(content)

    return content
