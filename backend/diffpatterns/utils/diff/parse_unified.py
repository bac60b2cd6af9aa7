import logging
import re
from typing import List, Optional

from diffpatterns.core.change_types import ChangeKind
from diffpatterns.core.config import CONTEXT_PREVIEW_LINES
from .canonical import canonicalize
from .models import ChangeUnit, FileDiff, LineRange

logger = logging.getLogger(__name__)

_HUNK_HEADER_RE = re.compile(
    r"@@\s+-([0-9]+)(?:,([0-9]+))?\s+\+([0-9]+)(?:,([0-9]+))?\s+@@"
)
_GIT_FILE_HEADER_RE = re.compile(r"^diff --git a/(.+?) b/(.+)$")
# core.quotepath 가 켜져 있으면 특수문자/비ASCII 경로는 "a/\303\251.xml" 처럼 따옴표로 감싸진다
_GIT_QUOTED_HEADER_RE = re.compile(r'^diff --git ("(?:[^"\\]|\\.)*"|\S+) ("(?:[^"\\]|\\.)*"|\S+)$')

_C_ESCAPES = {"a": "\a", "b": "\b", "f": "\f", "n": "\n", "r": "\r", "t": "\t", "v": "\v", "\\": "\\", '"': '"'}


def split_diff_lines(diff_text: str) -> List[str]:
    """
    '\\n' 기준으로만 자른다. form feed, U+2028 등은 줄 구분자가 아니다.
    CRLF의 '\\r'은 떼고, 마지막 줄바꿈 뒤의 빈 줄은 버린다.
    """
    lines = diff_text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def unquote_git_path(path: str) -> str:
    """C 스타일로 quote된 git 경로 ("\\303\\251.xml") 를 원래 문자열로 되돌린다."""
    if len(path) < 2 or not (path.startswith('"') and path.endswith('"')):
        return path

    body = path[1:-1]
    out = bytearray()
    i = 0
    while i < len(body):
        c = body[i]
        if c == "\\" and i + 1 < len(body):
            octal = body[i + 1:i + 4]
            if len(octal) == 3 and all(ch in "01234567" for ch in octal):
                out.append(int(octal, 8))
                i += 4
                continue
            out.extend(_C_ESCAPES.get(body[i + 1], body[i + 1]).encode("utf-8"))
            i += 2
            continue
        out.extend(c.encode("utf-8"))
        i += 1

    return out.decode("utf-8", errors="replace")


# core 전용: 파일 하나의 diff를 hunk 단위 ChangeUnit으로 변환
def extract_change_units(
    file_path: str,
    kind: ChangeKind,
    diff_text: str,
    *,
    markup_aware: bool = False,
) -> List[ChangeUnit]:
    """
    unified diff (파일 1개) -> List[ChangeUnit]
    - "@@"로 시작하는 줄부터 다음 "@@" 직전까지가 hunk 하나
    - 첫 "@@" 이전 줄(파일 헤더 등)은 버린다
    - header 파싱에 실패해도 전체 파싱은 계속한다
    """
    if not diff_text:
        return []

    units: List[ChangeUnit] = []
    header: Optional[str] = None
    hunk_lines: List[str] = []

    for line in split_diff_lines(diff_text):
        if line.startswith("@@"):
            if header is not None:
                units.append(_hunk_to_change_unit(file_path, kind, header, hunk_lines, len(units), markup_aware))

            header = line
            hunk_lines = [line]
            continue

        if header is not None:
            hunk_lines.append(line)

    # 마지막 hunk
    if header is not None:
        units.append(_hunk_to_change_unit(file_path, kind, header, hunk_lines, len(units), markup_aware))

    return units


def parse_line_range(header: str) -> LineRange:
    # "@@ -15,6 +15,8 @@ namespace MyApp" 형태
    m = _HUNK_HEADER_RE.search(header)
    if not m:
        return LineRange()

    old_start = int(m.group(1))
    old_len = int(m.group(2) or 1)
    new_start = int(m.group(3))
    new_len = int(m.group(4) or 1)

    return LineRange(
        startOld=old_start,
        endOld=old_start + old_len - 1,
        startNew=new_start,
        endNew=new_start + new_len - 1,
    )


def _context_preview(hunk_lines: List[str]) -> List[str]:
    preview = [line for line in hunk_lines if line and not line.startswith("@@")]
    return preview[:CONTEXT_PREVIEW_LINES]


def _hunk_to_change_unit(
    file_path: str,
    kind: ChangeKind,
    header: str,
    hunk_lines: List[str],
    hunk_index: int,
    markup_aware: bool,
) -> ChangeUnit:
    """
    Single hunk -> single ChangeUnit
    canonicalForm은 여기서 바로 계산해 두고 이후 단계는 rawText를 다시 보지 않는다.
    """
    line_range = parse_line_range(header)
    if line_range == LineRange():
        logger.debug("Malformed hunk header in %s (hunk %d): %r", file_path, hunk_index, header)

    raw_text = "\n".join(hunk_lines)

    return ChangeUnit(
        filePath=file_path,
        kind=kind,
        hunkHeader=header,
        lineRange=line_range,
        rawText=raw_text,
        contextPreview=_context_preview(hunk_lines),
        canonicalForm=canonicalize(raw_text, markup_aware=markup_aware),
        hunkIndex=hunk_index,
    )


# git service 전용: multi-file `git diff` 출력을 파일별 FileDiff로 나눈다
def split_git_diff(diff_text: str) -> List[FileDiff]:
    """
    - "diff --git a/x b/y" 줄마다 새 파일
    - new file / deleted file / rename from / copy from 으로 kind 결정
    - 삭제된 파일은 a/ 쪽 경로, 나머지는 b/ 쪽 경로
    """
    files: List[FileDiff] = []
    section: List[str] = []

    for line in split_diff_lines(diff_text):
        if line.startswith("diff --git ") and section:
            files.append(_section_to_file_diff(section))
            section = []
        section.append(line)

    if section and section[0].startswith("diff --git "):
        files.append(_section_to_file_diff(section))

    return files


def _section_to_file_diff(section: List[str]) -> FileDiff:
    old_path = new_path = None
    kind: ChangeKind = "Modify"

    m = _GIT_FILE_HEADER_RE.match(section[0])
    if m:
        old_path, new_path = m.group(1), m.group(2)
    else:
        m = _GIT_QUOTED_HEADER_RE.match(section[0])
        if m:
            old_path, new_path = _normalize_diff_path(m.group(1)), _normalize_diff_path(m.group(2))

    for line in section[1:]:
        if line.startswith("@@"):
            break

        if line.startswith("new file mode"):
            kind = "Add"
        elif line.startswith("deleted file mode"):
            kind = "Delete"
        elif line.startswith("rename from "):
            kind = "Rename"
            old_path = unquote_git_path(line[len("rename from "):].strip())
        elif line.startswith("rename to "):
            new_path = unquote_git_path(line[len("rename to "):].strip())
        elif line.startswith("copy from "):
            kind = "Copy"
            old_path = unquote_git_path(line[len("copy from "):].strip())
        elif line.startswith("copy to "):
            new_path = unquote_git_path(line[len("copy to "):].strip())
        elif line.startswith("--- ") and old_path is None:
            old_path = _normalize_diff_path(line[4:].strip())
        elif line.startswith("+++ ") and new_path is None:
            new_path = _normalize_diff_path(line[4:].strip())

    if kind == "Delete":
        path = old_path or new_path
    else:
        path = new_path or old_path

    return FileDiff(filePath=path or "unknown", kind=kind, diffText="\n".join(section))


def _normalize_diff_path(path: str) -> str:
    # --- a/x / +++ b/x 형태 처리 (quote된 경로는 먼저 풀어준다)
    path = unquote_git_path(path)
    if path.startswith("a/") or path.startswith("b/"):
        return path[2:]
    return path
