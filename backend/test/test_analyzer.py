"""
End-to-end tests for ChangeAnalyzer
"""
import logging

import pytest

from diffpatterns.analysis.analyzer import ChangeAnalyzer, as_file_diff
from diffpatterns.core.presets import build_options
from diffpatterns.utils.diff.canonical import DEFAULTFROM_EMPTY_SENTINEL
from diffpatterns.utils.diff.models import FileDiff
from diff_builders import hunk


def _members(result):
    return [[(u.filePath, u.hunkIndex) for u in g.members] for g in result.groups]


@pytest.fixture
def markup_analyzer():
    return ChangeAnalyzer(build_options(markup_aware=True))


MIXED_INPUT = [
    ("A.cs", "Modify", hunk(added=["using System.Text;"])),
    ("B.cs", "Modify", hunk(added=["using System.Text;"]) + "\n" + hunk(added=["int x;"], start=30)),
    ("C.cs", "Modify", hunk(added=["using System.Text;"])),
    ("Form.xml", "Modify", hunk(removed=['<Field id="1"/>'], added=['<Field id="2"/>'])),
    ("Other.xml", "Modify", hunk(removed=['<Field id="3"/>'], added=['<Field id="4"/>'])),
    ("README.md", "Modify", hunk(added=["docs"])),
]


class TestScenarios:

    def test_empty_defaultfrom_removal_across_files(self, markup_analyzer):
        text = hunk(removed=["<DefaultFrom>()</DefaultFrom>"], context=["<Field>"])
        result = markup_analyzer.analyze([("A.xml", "Modify", text), ("B.xml", "Modify", text)])

        assert result.summary.totalGroups == 1
        group = result.groups[0]
        assert group.size == 2
        assert group.members[0].canonicalForm == DEFAULTFROM_EMPTY_SENTINEL
        assert "defaultfrom" in group.members[0].canonicalForm.lower()
        assert group.category == "XmlElement"
        assert group.description == "Remove empty DefaultFrom elements (2 files)"

    def test_attribute_values_stripped(self, markup_analyzer):
        result = markup_analyzer.analyze([
            ("A.xml", "Modify", hunk(removed=['<Field id="123" />'], added=['<Field id="456" />'])),
            ("B.xml", "Modify", hunk(removed=['<Field id="789" />'], added=['<Field id="000" />'], start=90)),
        ])

        assert _members(result) == [[("A.xml", 0), ("B.xml", 0)]]
        assert result.groups[0].description == "Modify XML attributes (2 files)"

    def test_attribute_values_kept_without_markup_mode(self):
        result = ChangeAnalyzer().analyze([
            ("A.xml", "Modify", hunk(removed=['<Field id="123" />'], added=['<Field id="456" />'])),
            ("B.xml", "Modify", hunk(removed=['<Field id="789" />'], added=['<Field id="000" />'])),
        ])
        assert result.summary.totalGroups == 2

    def test_bulk_restructure(self, markup_analyzer):
        result = markup_analyzer.analyze([
            ("Form.xml", "Delete", hunk(removed=[f"old {i}" for i in range(12)])),
            ("Form.xml", "Add", hunk(added=[f"new {i}" for i in range(9)], start=50)),
        ])

        assert result.summary.totalGroups == 1
        group = result.groups[0]
        assert [u.kind for u in group.members] == ["Delete", "Add"]
        assert group.description == "Restructure XML elements"

    def test_using_statement(self):
        result = ChangeAnalyzer().analyze([("Program.cs", "Add", hunk(added=["using System.Text;"]))])

        group = result.groups[0]
        assert group.category == "CSharpImport"
        assert group.description == "Add using statements"

    def test_no_input(self):
        result = ChangeAnalyzer().analyze([])
        assert result.groups == []
        assert result.summary.totalGroups == 0
        assert result.summary.totalChanges == 0
        assert result.summary.categoryCounts == {}


class TestGroupingProperties:

    def test_every_unit_in_exactly_one_group(self, markup_analyzer):
        result = markup_analyzer.analyze(MIXED_INPUT)
        seen = [m for g in _members(result) for m in g]

        assert len(seen) == 7
        assert len(set(seen)) == 7
        assert result.summary.totalChanges == 7

    def test_ranked_by_size(self):
        result = ChangeAnalyzer().analyze(MIXED_INPUT)

        sizes = [g.size for g in result.groups]
        assert sizes == sorted(sizes, reverse=True)
        assert _members(result)[0] == [("A.cs", 0), ("B.cs", 0), ("C.cs", 0)]

    def test_ties_keep_creation_order(self):
        result = ChangeAnalyzer().analyze(MIXED_INPUT)
        singles = [m for m in _members(result) if len(m) == 1]
        assert singles == [[("B.cs", 1)], [("Form.xml", 0)], [("Other.xml", 0)], [("README.md", 0)]]

    def test_deterministic(self, markup_analyzer):
        first = markup_analyzer.analyze(MIXED_INPUT)
        second = markup_analyzer.analyze(MIXED_INPUT)

        assert _members(first) == _members(second)
        assert [g.description for g in first.groups] == [g.description for g in second.groups]

    def test_singletons_score_one(self):
        result = ChangeAnalyzer().analyze(MIXED_INPUT)
        assert all(g.similarityScore == 1.0 for g in result.groups)

    def test_whitespace_only_hunks_group_together(self):
        result = ChangeAnalyzer().analyze([
            ("a.cs", "Modify", hunk(removed=["   "], added=["\t"])),
            ("b.cs", "Modify", hunk(removed=["x"])),
            ("c.cs", "Modify", hunk(added=["  "])),
        ])

        assert _members(result) == [[("a.cs", 0), ("c.cs", 0)], [("b.cs", 0)]]

    def test_summary(self, markup_analyzer):
        summary = markup_analyzer.analyze(MIXED_INPUT).summary

        assert summary.totalFiles == 6
        assert summary.uniquePatterns == 2
        assert summary.categoryCounts["CSharpImport"] == 3
        assert summary.categoryCounts["XmlAttribute"] == 2
        assert summary.categoryCounts["Other"] == 2

    def test_threshold_does_not_change_grouping(self):
        low = ChangeAnalyzer(build_options(similarity_threshold=0.0)).analyze(MIXED_INPUT)
        high = ChangeAnalyzer(build_options(similarity_threshold=1.0)).analyze(MIXED_INPUT)
        assert _members(low) == _members(high)


class TestVerbose:

    def test_progress_logged_only_when_verbose(self, caplog):
        with caplog.at_level(logging.INFO, logger="ChangeAnalyzer"):
            ChangeAnalyzer().analyze(MIXED_INPUT)
        assert [r for r in caplog.records if r.name == "ChangeAnalyzer"] == []

        with caplog.at_level(logging.INFO, logger="ChangeAnalyzer"):
            ChangeAnalyzer(build_options(verbose=True)).analyze(MIXED_INPUT)
        messages = [r.getMessage() for r in caplog.records if r.name == "ChangeAnalyzer"]
        assert "Parsed 7 change blocks" in messages
        assert "Created 5 total groups" in messages

    def test_verbose_does_not_change_results(self):
        quiet = ChangeAnalyzer().analyze(MIXED_INPUT)
        loud = ChangeAnalyzer(build_options(verbose=True)).analyze(MIXED_INPUT)
        assert _members(quiet) == _members(loud)


class TestInput:

    def test_tuple_and_model_inputs(self):
        fd = FileDiff(filePath="a.cs", kind="Add", diffText="@@ -0,0 +1 @@\n+x")
        assert as_file_diff(fd) is fd
        assert as_file_diff(("a.cs", "Add", "@@ -0,0 +1 @@\n+x")) == fd

    def test_extract_orders_by_file_then_hunk(self):
        units = ChangeAnalyzer().extract(MIXED_INPUT)
        assert [(u.filePath, u.hunkIndex) for u in units][:4] == [
            ("A.cs", 0), ("B.cs", 0), ("B.cs", 1), ("C.cs", 0),
        ]
