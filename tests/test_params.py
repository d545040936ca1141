"""
Tests for the parameter text format.
"""

import numpy as np
import pytest

from random_utility_ranking import (
    NOISE_FAMILIES,
    GumbelNoiseModel,
    NormalNoiseModel,
    ParseError,
    format_params,
    parse_params,
)
from random_utility_ranking.params import split_tokens

CANDIDATES = ["a", "b", "c"]
MEANS = [1.0, 0.5, -0.3]
SPREADS = [0.707, 0.707, 0.707]


class TestTokenizer:
    """Test line splitting."""

    def test_bracketed_list(self):
        """A leading bracket yields an empty label token."""
        assert split_tokens("[a, b, c]") == ["", "a", "b", "c"]

    def test_labelled_line(self):
        """A plain first word is the label."""
        assert split_tokens("means 1.0 0.5") == ["means", "1.0", "0.5"]

    def test_mixed_delimiters(self):
        """Runs of brackets, commas and spaces collapse into one separator."""
        assert split_tokens("x [1.0,, 2.0]  ") == ["x", "1.0", "2.0"]


class TestParse:
    """Test parsing the three-line format."""

    def test_format_then_parse(self):
        """Formatted parameters should parse back to the same arrays."""
        parsed = parse_params(format_params(CANDIDATES, MEANS, SPREADS))
        assert parsed.candidates == CANDIDATES
        assert np.allclose(parsed.means, MEANS, atol=1e-9)
        assert np.allclose(parsed.spreads, SPREADS, atol=1e-9)

    def test_format_shape(self):
        """Lists should be bracketed and comma-space separated."""
        text = format_params(CANDIDATES, MEANS, SPREADS)
        assert text.splitlines() == [
            "[a, b, c]",
            "[1.0, 0.5, -0.3]",
            "[0.707, 0.707, 0.707]",
        ]

    def test_labels_are_discarded(self):
        """Any first token is ignored."""
        parsed = parse_params("items a b\nmu 1 2\nsigma 3 4\n")
        assert parsed.candidates == ["a", "b"]
        assert parsed.means.tolist() == [1.0, 2.0]
        assert parsed.spreads.tolist() == [3.0, 4.0]

    def test_wrong_line_count(self):
        """Exactly three lines are required."""
        with pytest.raises(ParseError, match="3 parameter lines"):
            parse_params("[a, b]\n[1.0, 2.0]")

    def test_mismatched_token_counts(self):
        """Every line must describe the same number of candidates."""
        with pytest.raises(ParseError, match="expected 2 spreads"):
            parse_params("[a, b]\n[1.0, 2.0]\n[1.0]")

    @pytest.mark.parametrize("text", ["[]\n[]\n[]", "items\nmu\nsigma"])
    def test_empty_candidate_list(self, text):
        """A block without candidates is malformed."""
        with pytest.raises(ParseError, match="no candidates"):
            parse_params(text)

    def test_non_numeric_token(self):
        """Numeric lines must parse as floats."""
        with pytest.raises(ParseError, match="non-numeric"):
            parse_params("[a, b]\n[1.0, two]\n[1.0, 1.0]")


class TestModelRoundTrip:
    """Test to_param_string / parse_params on models."""

    def test_normal_round_trip(self):
        """Normal models should round-trip candidates, means and sigmas."""
        model = NormalNoiseModel(CANDIDATES, MEANS, SPREADS)
        parsed = NormalNoiseModel.parse_params(model.to_param_string())

        assert parsed.candidates == tuple(CANDIDATES)
        assert np.allclose(parsed.strengths, MEANS, atol=1e-9)
        assert np.allclose(parsed.sigmas, SPREADS, atol=1e-9)

    def test_gumbel_round_trip(self):
        """Gumbel models should round-trip their strengths and scale."""
        model = GumbelNoiseModel(CANDIDATES, MEANS, scale=2.5)
        parsed = GumbelNoiseModel.parse_params(model.to_param_string())

        assert parsed.candidates == tuple(CANDIDATES)
        assert np.allclose(parsed.strengths, MEANS, atol=1e-9)
        assert parsed.scale == pytest.approx(2.5, abs=1e-9)

    def test_gumbel_requires_common_spread(self):
        """Per-candidate Gumbel spreads would break the logistic law."""
        with pytest.raises(ParseError):
            GumbelNoiseModel.parse_params("[a, b]\n[1.0, 0.0]\n[1.0, 2.0]")

    def test_empty_block_is_a_parse_error_for_every_family(self):
        """Both families should reject a block without candidates the same way."""
        for cls in NOISE_FAMILIES.values():
            with pytest.raises(ParseError, match="no candidates"):
                cls.parse_params("[]\n[]\n[]")

    def test_every_family_round_trips(self):
        """Each registered family should parse its own parameter text."""
        for family, cls in NOISE_FAMILIES.items():
            model = cls.from_adjacent_difference(CANDIDATES, 0.3)
            parsed = cls.parse_params(model.to_param_string())
            assert parsed.family == family
            assert np.allclose(parsed.pairwise_probabilities(), model.pairwise_probabilities())


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
