"""
Thurstone-Mosteller model: independent Gaussian utilities.
"""

import math
from collections.abc import Hashable, Sequence

import numpy as np

from . import compute
from .errors import DomainError
from .model import RandomUtilityModel, adjacent_difference_strengths, per_candidate, read_only

# With this standard deviation the difference of two utilities has unit variance.
THURSTONE_SIGMA = math.sqrt(0.5)


class NormalNoiseModel(RandomUtilityModel):
    """
    Rankings generated from independent normal utilities.

    Parameters
    ----------
    candidates : sequence of hashable
        Candidate identities
    strengths : array_like
        Mean utility of each candidate
    sigmas : float or array_like, optional
        Standard deviation, shared or one per candidate, by default THURSTONE_SIGMA
    grid_size : int, optional
        Number of ranking-probability integration points across all means and
        around each mean
    grid_width : float, optional
        Half-width of each candidate's integration window, in its standard deviations

    Raises
    ------
    ConstructionError
        If ``sigmas`` is a vector without one entry per candidate
    DomainError
        If a standard deviation is negative or not finite

    Notes
    -----
    A zero standard deviation is accepted and samples a point mass, but
    probabilities that need a positive spread raise DomainError.

    Examples
    --------
    >>> model = NormalNoiseModel(["a", "b"], [1.0, 0.0])
    >>> round(model.marginal_probability("a", "b"), 4)
    0.8413
    """

    family = "normal"

    def __init__(
        self,
        candidates: Sequence[Hashable],
        strengths,
        sigmas=THURSTONE_SIGMA,
        grid_size=compute.DEFAULT_GRID_SIZE,
        grid_width=compute.DEFAULT_GRID_WIDTH,
    ):
        super().__init__(candidates, strengths)
        sigmas = per_candidate(sigmas, len(self), "sigmas")
        if not np.all(np.isfinite(sigmas)) or np.any(sigmas < 0):
            raise DomainError(
                f"standard deviations must be non-negative and finite, got {sigmas}"
            )
        self._sigmas = read_only(sigmas)
        self.grid_size = grid_size
        self.grid_width = grid_width

    @classmethod
    def from_adjacent_difference(
        cls, candidates: Sequence[Hashable], adj_str_diff, sigma=THURSTONE_SIGMA, **kwargs
    ):
        """
        Equally spaced means, strongest candidate first.

        With the default ``sigma`` this is the Thurstone model with a constant
        difference between adjacent candidates.
        """
        strengths = adjacent_difference_strengths(len(candidates), adj_str_diff)
        return cls(candidates, strengths, sigma, **kwargs)

    @property
    def sigmas(self):
        return self._sigmas

    @property
    def spreads(self):
        return self._sigmas

    def sample_utilities(self, rng: np.random.Generator, size=None):
        shape = len(self) if size is None else (size, len(self))
        return rng.normal(self._strengths, self._sigmas, size=shape)

    def _pairwise_probability(self, w, l):
        return compute.normal_pairwise_probability(
            self._strengths[w] - self._strengths[l], self._sigmas[w], self._sigmas[l]
        )

    def _ordered_log_probability(self, order):
        return compute.normal_ranking_log_probability(
            self._strengths[order],
            self._sigmas[order],
            grid_size=self.grid_size,
            width=self.grid_width,
        )

    @classmethod
    def from_params(cls, params):
        return cls(params.candidates, params.means, params.spreads)
