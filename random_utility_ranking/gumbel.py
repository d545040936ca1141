"""
Gumbel noise model, equivalent to Plackett-Luce.

Utilities are Gumbel distributed with a common dispersion ``1 / scale``. The
difference of two such utilities is logistic, so pairwise probabilities
follow the Bradley-Terry law and the probability of a full ranking factors
into Luce choices among the candidates not yet placed.
"""

import math
from collections.abc import Hashable, Sequence

import numpy as np

from . import compute
from .errors import DomainError, ParseError
from .model import RandomUtilityModel, adjacent_difference_strengths


class GumbelNoiseModel(RandomUtilityModel):
    """
    Rankings generated from independent Gumbel utilities.

    Parameters
    ----------
    candidates : sequence of hashable
        Candidate identities
    strengths : array_like
        Location of each candidate's utility
    scale : float, optional
        Steepness of the pairwise logistic law, by default 1.0. The Gumbel
        dispersion of every utility is ``1 / scale``.

    Raises
    ------
    DomainError
        If ``scale`` is not positive and finite

    Examples
    --------
    >>> model = GumbelNoiseModel.from_adjacent_difference(["a", "b", "c"], 0.2)
    >>> round(model.marginal_probability("a", "c"), 4)
    0.5987
    """

    family = "gumbel"

    def __init__(self, candidates: Sequence[Hashable], strengths, scale=1.0):
        super().__init__(candidates, strengths)
        scale = float(scale)
        if not scale > 0 or not math.isfinite(scale):
            raise DomainError(f"scale must be positive and finite, got {scale}")
        self._scale = scale

    @classmethod
    def from_adjacent_difference(cls, candidates: Sequence[Hashable], adj_str_diff, scale=1.0):
        """Equally spaced strengths, strongest candidate first."""
        strengths = adjacent_difference_strengths(len(candidates), adj_str_diff)
        return cls(candidates, strengths, scale)

    @property
    def scale(self) -> float:
        return self._scale

    @property
    def beta(self) -> float:
        """Gumbel dispersion of each utility."""
        return 1.0 / self._scale

    @property
    def spreads(self):
        return np.full(len(self), self.beta)

    def sample_utilities(self, rng: np.random.Generator, size=None):
        shape = len(self) if size is None else (size, len(self))
        return rng.gumbel(self._strengths, self.beta, size=shape)

    def _pairwise_probability(self, w, l):
        return compute.logistic_pairwise_probability(
            self._strengths[w] - self._strengths[l], self._scale
        )

    def _ordered_log_probability(self, order):
        return compute.plackett_luce_log_probability(self._strengths[order] * self._scale)

    @classmethod
    def from_params(cls, params):
        """
        Build a model from parsed parameters.

        Raises
        ------
        ParseError
            If the spreads differ between candidates or are not positive
        """
        spreads = params.spreads
        if spreads.size == 0 or not np.all(spreads == spreads[0]) or not spreads[0] > 0:
            raise ParseError(
                f"Gumbel spreads must be one positive value for all candidates, got {spreads}"
            )
        return cls(params.candidates, params.means, 1.0 / spreads[0])
