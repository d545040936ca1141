"""
Tests for CandidateIndex.
"""

import pytest

from random_utility_ranking import CandidateIndex, ConstructionError, UnknownCandidateError


class TestCandidateIndex:
    """Test construction and identity lookup."""

    def test_positions_follow_input_order(self):
        """Each candidate should map to its position in the input."""
        index = CandidateIndex(["a", "b", "c", "d"])
        assert [index.index(c) for c in "abcd"] == [0, 1, 2, 3]
        assert index.indices(["d", "a"]).tolist() == [3, 0]
        assert list(index) == ["a", "b", "c", "d"]
        assert index[2] == "c"
        assert len(index) == 4

    def test_arbitrary_hashable_identities(self):
        """Identities only need equality and hashing."""
        index = CandidateIndex([("x", 1), 7, frozenset({"y"})])
        assert index.index(frozenset({"y"})) == 2
        assert ("x", 1) in index

    def test_unknown_candidate(self):
        """Absent identities should raise UnknownCandidateError."""
        index = CandidateIndex(["a", "b"])
        with pytest.raises(UnknownCandidateError, match="candidate not found"):
            index.index("z")
        assert "z" not in index

    def test_unknown_candidate_is_a_key_error(self):
        """Callers catching KeyError should also catch unknown candidates."""
        with pytest.raises(KeyError):
            CandidateIndex(["a"]).index("b")

    def test_duplicates_rejected(self):
        """Repeating an identity is a construction error."""
        with pytest.raises(ConstructionError, match="duplicate"):
            CandidateIndex(["a", "b", "a"])

    def test_empty_rejected(self):
        """A model needs at least one candidate."""
        with pytest.raises(ConstructionError):
            CandidateIndex([])

    def test_equality(self):
        """Indexes over the same ordered candidates should compare equal."""
        assert CandidateIndex(["a", "b"]) == CandidateIndex(("a", "b"))
        assert CandidateIndex(["a", "b"]) != CandidateIndex(["b", "a"])
