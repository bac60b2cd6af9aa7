"""Command line entry point: analyze a commit, a commit range, or a saved manifest."""

import argparse
import logging
import sys
import traceback
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Tuple

from diffpatterns.analysis.analyzer import ChangeAnalyzer
from diffpatterns.core.config import REPORT_FORMATS, load_analyzer_config
from diffpatterns.core.errors import AnalyzerError
from diffpatterns.core.presets import build_options, validate_report_format
from diffpatterns.services import git_service
from diffpatterns.services.path_filter import PathFilter
from diffpatterns.services.report_service import write_report
from diffpatterns.utils.diff.models import AnalysisMetadata, FileDiff
from diffpatterns.validator import load_manifest, manifest_file_diffs


def build_parser() -> argparse.ArgumentParser:
    config = load_analyzer_config()

    parser = argparse.ArgumentParser(
        prog="diffpatterns",
        description="Group repeated edit patterns in a git diff into a reviewable report.",
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument("-c", "--commit", help="Single commit hash to analyze")
    source.add_argument("-r", "--commit-range", help="Commit range to analyze (e.g. commit1..commit3)")
    source.add_argument("--input", help="JSON change manifest to analyze instead of a git repository")
    parser.add_argument("-o", "--output", default=str(config.output_dir),
                        help=f"Output directory for analysis reports (default: {config.output_dir})")
    parser.add_argument("-f", "--format", default=config.report_format, choices=REPORT_FORMATS,
                        help="Report format (default: markdown)")
    parser.add_argument("-i", "--include", help="File patterns to include (e.g. '*.xml,*.cs')")
    parser.add_argument("-e", "--exclude", help="File patterns to exclude")
    parser.add_argument("--xml-mode", action="store_true", default=config.markup_aware,
                        help="Enable XML-aware normalization and node pairing")
    parser.add_argument("--similarity-threshold", type=float, default=config.similarity_threshold,
                        help="Similarity threshold for grouping changes (0.0-1.0)")
    parser.add_argument("--repo-path", help="Path to git repository (default: current directory)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose output")
    return parser


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(message)s",
    )


def _short(rev: str) -> str:
    return rev[:8]


def collect_changes(args: argparse.Namespace) -> Tuple[List[FileDiff], AnalysisMetadata, str]:
    """
    입력 소스(commit / range / manifest)에서 파일별 diff를 모은다.
    Returns: (file diffs, metadata, 리포트 파일명 label)
    """
    if args.input:
        payload = load_manifest(Path(args.input))
        commits = payload.get("commits", [])
        meta = AnalysisMetadata(
            repositoryPath=payload.get("repository", ""),
            gitRange=payload.get("range", ""),
            commitHashes=commits,
        )
        label = "-".join(_short(c) for c in commits) or Path(args.input).stem
        return manifest_file_diffs(payload), meta, label

    repo_path = Path(args.repo_path or ".").resolve()
    if not git_service.is_git_repository(repo_path):
        raise AnalyzerError(f"'{repo_path}' is not a valid Git repository.")

    if args.commit:
        diffs = git_service.commit_diff(repo_path, args.commit)
        meta = AnalysisMetadata(repositoryPath=str(repo_path), gitRange=args.commit, commitHashes=[args.commit])
        return diffs, meta, _short(args.commit)

    start, end = git_service.parse_commit_range(args.commit_range)
    diffs = git_service.range_diff(repo_path, start, end)
    meta = AnalysisMetadata(repositoryPath=str(repo_path), gitRange=args.commit_range, commitHashes=[start, end])
    return diffs, meta, f"{_short(start)}-{_short(end)}"


def run(args: argparse.Namespace) -> int:
    if not (args.commit or args.commit_range or args.input):
        print("Error: Either --commit, --commit-range or --input must be specified.")
        return 1

    opts = build_options(
        similarity_threshold=args.similarity_threshold,
        markup_aware=args.xml_mode,
        verbose=args.verbose,
    )
    fmt = validate_report_format(args.format)

    if args.verbose:
        print(f"Output format: {fmt}")
        print(f"XML mode: {opts.markup_aware}")
        print(f"Similarity threshold: {opts.similarity_threshold}")
        print(f"Output directory: {args.output}")

    file_diffs, meta, label = collect_changes(args)
    if not file_diffs:
        print("No changes found in the specified commit(s).")
        return 0

    file_diffs = PathFilter(args.include, args.exclude).filter(file_diffs)
    if not file_diffs:
        print("No changes found after applying file filters.")
        return 0

    result = ChangeAnalyzer(opts).analyze(file_diffs)
    meta.timestamp = datetime.now()
    result.metadata = meta

    report_path = write_report(result, Path(args.output), fmt, label)

    summary = result.summary
    print("Analysis complete!")
    print(f"- Analyzed {summary.totalChanges} changes across {summary.totalFiles} files")
    print(f"- Found {summary.totalGroups} change groups")
    print(f"- Identified {summary.uniquePatterns} unique patterns")
    print(f"- Report saved to: {report_path}")

    if args.verbose:
        print("\nTop change patterns:")
        for group in result.groups[:5]:
            print(f"  - {group.description}: {group.size} changes ({len(group.affectedFiles)} files)")

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    try:
        parser = build_parser()
    except AnalyzerError as e:
        # 환경변수 기본값이 잘못된 경우
        print(f"Error during analysis: {e}")
        return 1

    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        return run(args)
    except (AnalyzerError, OSError) as e:
        print(f"Error during analysis: {e}")
        if args.verbose:
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
