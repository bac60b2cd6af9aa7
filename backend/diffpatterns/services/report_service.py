"""
Report rendering - turn an AnalysisResult into markdown / json / csv text.

Rendering never changes the groups; it only formats what the analyzer
produced. write_report() is the only place that touches the filesystem.
"""
from __future__ import annotations

import csv
import io
import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List

from diffpatterns.core.change_types import category_label
from diffpatterns.core.presets import validate_report_format
from diffpatterns.utils.diff.models import AnalysisResult, ChangeGroup

MAX_LISTED_FILES = 20
MAX_EXPANDED_GROUP = 5

REPORT_EXTENSIONS = {"markdown": "md", "json": "json", "csv": "csv"}


def render_markdown(result: AnalysisResult) -> str:
    meta = result.metadata
    summary = result.summary
    out: List[str] = []

    out.append("# Git Changes Analysis Report")
    out.append("")
    out.append("## Summary")
    out.append(f"- **Total Files Changed**: {summary.totalFiles}")
    out.append(f"- **Total Change Groups**: {summary.totalGroups}")
    out.append(f"- **Unique Patterns Found**: {summary.uniquePatterns}")
    if meta.timestamp:
        out.append(f"- **Analysis Date**: {meta.timestamp:%Y-%m-%d %H:%M:%S}")
    if meta.repositoryPath:
        out.append(f"- **Repository**: {meta.repositoryPath}")
    if meta.commitHashes:
        out.append(f"- **Analyzed Commits**: {', '.join(meta.commitHashes)}")
    out.append("")

    if summary.categoryCounts:
        out.append("## Summary by Category")
        for category, count in sorted(summary.categoryCounts.items(), key=lambda kv: kv[1], reverse=True):
            out.append(f"- **{category_label(category)}**: {count} changes")
        out.append("")

    out.append("## Change Groups")
    out.append("")

    for number, group in enumerate(result.groups, start=1):
        out.extend(_markdown_group(number, group))

    return "\n".join(out) + "\n"


def _markdown_group(number: int, group: ChangeGroup) -> List[str]:
    out = [
        f"### Group {number}: {group.description}",
        f"**Pattern ID**: {group.patternId}",
        f"**Similarity Score**: {group.similarityScore:.1%}",
        f"**Files Affected**: {len(group.affectedFiles)}",
        f"**Category**: {category_label(group.category)}",
        "",
        "#### Representative Change Block",
        "```diff",
        group.members[0].rawText,
        "```",
        "",
        "#### Affected Files",
    ]

    for path in group.affectedFiles[:MAX_LISTED_FILES]:
        n = sum(1 for u in group.members if u.filePath == path)
        out.append(f"- {path} ({n} change{'s' if n > 1 else ''})")

    hidden = len(group.affectedFiles) - MAX_LISTED_FILES
    if hidden > 0:
        out.append(f"- ... and {hidden} more files")
    out.append("")

    # 작은 그룹은 전체 hunk를 다 보여준다
    if 1 < group.size <= MAX_EXPANDED_GROUP:
        out.append("#### All Changes in Group")
        for unit in group.members:
            out.append(f"**File**: {unit.filePath}")
            out.append("```diff")
            out.append(unit.rawText)
            out.append("```")
        out.append("")

    out.append("---")
    out.append("")
    return out


def report_payload(result: AnalysisResult) -> Dict[str, Any]:
    meta = result.metadata
    return {
        "analysis_metadata": {
            "timestamp": meta.timestamp.isoformat() if meta.timestamp else None,
            "total_files": result.summary.totalFiles,
            "total_groups": result.summary.totalGroups,
            "unique_patterns": result.summary.uniquePatterns,
            "total_changes": result.summary.totalChanges,
            "repository_path": meta.repositoryPath,
            "commit_hashes": meta.commitHashes,
            "git_range": meta.gitRange,
        },
        "category_summary": result.summary.categoryCounts,
        "change_groups": [
            {
                "group_id": g.patternId,
                "pattern_description": g.description,
                "similarity_score": g.similarityScore,
                "affected_files_count": len(g.affectedFiles),
                "affected_files": g.affectedFiles,
                "category": g.category,
                "change_blocks": [
                    {
                        "file_path": u.filePath,
                        "change_type": u.kind,
                        "hunk_header": u.hunkHeader,
                        "diff_content": u.rawText,
                        "line_numbers": {
                            "start_old": u.lineRange.startOld,
                            "end_old": u.lineRange.endOld,
                            "start_new": u.lineRange.startNew,
                            "end_new": u.lineRange.endNew,
                        },
                    }
                    for u in g.members
                ],
            }
            for g in result.groups
        ],
    }


def render_json(result: AnalysisResult) -> str:
    return json.dumps(report_payload(result), ensure_ascii=False, indent=2)


CSV_HEADER = [
    "Group_ID",
    "Pattern_Description",
    "Similarity_Score",
    "Affected_Files_Count",
    "Files_List",
    "Change_Type",
    "Category",
    "Representative_File",
]


def render_csv(result: AnalysisResult) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(CSV_HEADER)

    for g in result.groups:
        first = g.members[0]
        writer.writerow([
            g.patternId,
            g.description,
            f"{g.similarityScore:.3f}",
            len(g.affectedFiles),
            ";".join(g.affectedFiles),
            first.kind,
            g.category,
            first.filePath,
        ])

    return buf.getvalue()


RENDERERS = {
    "markdown": render_markdown,
    "json": render_json,
    "csv": render_csv,
}


def render_report(result: AnalysisResult, fmt: str = "markdown") -> str:
    return RENDERERS[validate_report_format(fmt)](result)


def report_filename(label: str, fmt: str, now: datetime | None = None) -> str:
    ts = (now or datetime.now()).strftime("%Y%m%d_%H%M%S")
    return f"diff_analysis_{label}_{ts}.{REPORT_EXTENSIONS[fmt]}"


def write_report(result: AnalysisResult, output_dir: Path, fmt: str = "markdown", label: str = "changes") -> Path:
    fmt = validate_report_format(fmt)
    content = render_report(result, fmt)

    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    path = output_dir / report_filename(label, fmt)
    path.write_text(content, encoding="utf-8")
    return path
