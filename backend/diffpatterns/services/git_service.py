from __future__ import annotations

import subprocess
from pathlib import Path
from typing import List, Optional, Tuple

from diffpatterns.core.errors import GitDiffError
from diffpatterns.utils.diff.models import FileDiff
from diffpatterns.utils.diff.parse_unified import split_git_diff

# git의 빈 tree 해시 (root commit 비교용)
EMPTY_TREE = "4b825dc642cb6eb9a060e54bf8d69288fbee4904"

# 비ASCII 경로를 그대로 받는다 (기본값은 octal escape + 따옴표)
_DIFF_ARGS = ["-c", "core.quotepath=off", "diff", "--no-color", "--no-ext-diff", "-M", "-C"]


def run_git(args: List[str], cwd: Optional[Path] = None) -> str:
    """Run a git command and return its stdout."""
    try:
        result = subprocess.run(
            ["git", *args],
            cwd=str(cwd) if cwd else None,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
        )
    except FileNotFoundError:
        raise GitDiffError("git executable not found")

    if result.returncode != 0:
        raise GitDiffError(f"git {' '.join(args)} failed: {result.stderr.strip()}")
    return result.stdout


def is_git_repository(path: Path) -> bool:
    try:
        return run_git(["rev-parse", "--is-inside-work-tree"], cwd=path).strip() == "true"
    except GitDiffError:
        return False


def parse_commit_range(commit_range: str) -> Tuple[str, str]:
    # "commit1..commit2" 형태만 허용
    parts = [p for p in commit_range.split("..") if p]
    if len(parts) != 2:
        raise GitDiffError("Commit range must be in format 'commit1..commit2'")
    return parts[0], parts[1]


def resolve_commit(repo_path: Path, rev: str) -> str:
    try:
        return run_git(["rev-parse", "--verify", "--quiet", f"{rev}^{{commit}}"], cwd=repo_path).strip()
    except GitDiffError:
        raise GitDiffError(f"Commit {rev} not found")


def commit_diff(repo_path: Path, commit: str) -> List[FileDiff]:
    """
    commit과 첫 번째 parent의 diff.
    parent가 없으면(root commit) 빈 tree와 비교한다.
    """
    sha = resolve_commit(repo_path, commit)

    try:
        parent = run_git(["rev-parse", "--verify", "--quiet", f"{sha}^1"], cwd=repo_path).strip()
    except GitDiffError:
        parent = EMPTY_TREE

    return _diff(repo_path, parent, sha)


def range_diff(repo_path: Path, start: str, end: str) -> List[FileDiff]:
    start_sha = resolve_commit(repo_path, start)
    end_sha = resolve_commit(repo_path, end)
    return _diff(repo_path, start_sha, end_sha)


def _diff(repo_path: Path, base: str, target: str) -> List[FileDiff]:
    out = run_git([*_DIFF_ARGS, base, target], cwd=repo_path)
    return split_git_diff(out)
