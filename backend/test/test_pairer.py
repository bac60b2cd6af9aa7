"""
Tests for structural pairing of deletions and insertions
"""
from diffpatterns.analysis.pairer import pair_structural_changes
from diff_builders import hunk


def _lines(prefix, n):
    return [f"{prefix} line {i}" for i in range(n)]


class TestStructuralPairer:
    """Tests for pair_structural_changes."""

    def test_bulk_deletion_and_insertion_merge(self, make_unit):
        """A 12-line deletion and a 9-line insertion in one file form one group."""
        deletion = make_unit("Form.xml", "Delete", hunk(removed=_lines("old", 12)))
        insertion = make_unit("Form.xml", "Add", hunk(added=_lines("new", 9), start=40))

        groups, remaining = pair_structural_changes([deletion, insertion])

        assert remaining == []
        assert len(groups) == 1
        assert groups[0].members == [deletion, insertion]
        assert groups[0].affectedFiles == ["Form.xml"]
        assert groups[0].similarityScore == 1.0

    def test_deletions_listed_before_insertions(self, make_unit):
        insertion = make_unit("Form.xml", "Add", hunk(added=['<Field id="1"/>']))
        deletion = make_unit("Form.xml", "Delete", hunk(removed=['<Field id="2"/>'], start=9))

        groups, remaining = pair_structural_changes([insertion, deletion])

        assert remaining == []
        assert [u.kind for u in groups[0].members] == ["Delete", "Add"]

    def test_small_units_stay_unclaimed(self, make_unit):
        """Only the substantial subset is merged; the rest falls through."""
        big_del = make_unit("Form.xml", "Delete", hunk(removed=_lines("old", 10)))
        small_del = make_unit("Form.xml", "Delete", hunk(removed=["plain"], start=30))
        big_add = make_unit("Form.xml", "Add", hunk(added=["<Node>", "<Sub/>", "</Node>"], start=50))

        groups, remaining = pair_structural_changes([big_del, small_del, big_add])

        assert len(groups) == 1
        assert groups[0].members == [big_del, big_add]
        assert remaining == [small_del]

    def test_no_pairing_across_files(self, make_unit):
        deletion = make_unit("A.xml", "Delete", hunk(removed=_lines("old", 12)))
        insertion = make_unit("B.xml", "Add", hunk(added=_lines("new", 12)))

        groups, remaining = pair_structural_changes([deletion, insertion])

        assert groups == []
        assert remaining == [deletion, insertion]

    def test_one_sided_file_untouched(self, make_unit):
        """A file with only deletions has nothing to pair with."""
        units = [
            make_unit("A.xml", "Delete", hunk(removed=_lines("old", 12))),
            make_unit("A.xml", "Delete", hunk(removed=["<x/>"], start=40)),
        ]
        groups, remaining = pair_structural_changes(units)
        assert groups == []
        assert remaining == units

    def test_modify_units_never_paired(self, make_unit):
        units = [
            make_unit("A.xml", "Modify", hunk(removed=_lines("old", 12))),
            make_unit("A.xml", "Modify", hunk(added=_lines("new", 12), start=40)),
        ]
        groups, remaining = pair_structural_changes(units)
        assert groups == []
        assert remaining == units

    def test_non_substantial_insertion_is_not_paired(self, make_unit):
        deletion = make_unit("A.xml", "Delete", hunk(removed=_lines("old", 12)))
        insertion = make_unit("A.xml", "Add", hunk(added=["plain text"], start=40))

        groups, remaining = pair_structural_changes([deletion, insertion])

        assert groups == []
        assert remaining == [deletion, insertion]

    def test_remaining_keeps_discovery_order(self, make_unit):
        a = make_unit("A.xml", "Modify", hunk(added=["a"]))
        deletion = make_unit("B.xml", "Delete", hunk(removed=_lines("old", 12)))
        b = make_unit("C.xml", "Modify", hunk(added=["b"]))
        insertion = make_unit("B.xml", "Add", hunk(added=_lines("new", 12), start=80))

        groups, remaining = pair_structural_changes([a, deletion, b, insertion])

        assert len(groups) == 1
        assert remaining == [a, b]

    def test_empty_input(self):
        assert pair_structural_changes([]) == ([], [])
