"""
Abstract random-utility model.

Every candidate carries a strength, the location of its latent utility. A
noise family decides how utilities are drawn around the strengths and
supplies the matching pairwise and ranking probabilities. A ranking is the
list of candidates ordered by descending sampled utility.
"""

import logging
import numbers
from abc import ABC, abstractmethod
from collections.abc import Hashable, Sequence

import numpy as np

from . import compute
from .candidates import CandidateIndex
from .errors import ConstructionError, DomainError, ProfileError
from .params import format_params
from .params import parse_params as parse_param_text
from .profile import PreferenceProfile

logger = logging.getLogger(__name__)


def read_only(values):
    """Float copy of ``values`` that cannot be modified."""
    values = np.array(values, dtype=float)
    values.setflags(write=False)
    return values


def adjacent_difference_strengths(m, adj_str_diff):
    """Equally spaced strengths ``0, -d, -2d, ...``, strongest first."""
    return -adj_str_diff * np.arange(m, dtype=float)


def per_candidate(value, m, name, allow_scalar=True):
    """
    Broadcast a scalar to ``m`` entries, or check a vector has ``m`` entries.

    Raises
    ------
    ConstructionError
        If ``value`` is a vector whose length is not ``m``, or a scalar when
        ``allow_scalar`` is false.
    """
    values = np.asarray(value, dtype=float)
    if values.ndim == 0 and allow_scalar:
        return np.full(m, float(values))
    if values.shape != (m,):
        raise ConstructionError(
            f"{name} has shape {values.shape}, expected one entry for each of {m} candidates"
        )
    return values


class RandomUtilityModel(ABC):
    """
    Candidates with one latent utility each, ranked by sampled utility.

    Parameters
    ----------
    candidates : sequence of hashable
        Candidate identities; position is the index into every parameter array
    strengths : array_like
        One utility location per candidate

    Raises
    ------
    ConstructionError
        If the candidates are empty or repeated, or if ``strengths`` does not
        have one entry per candidate
    DomainError
        If a strength is not finite

    Notes
    -----
    Parameters are fixed at construction and stored in read-only arrays, so
    one instance can be shared between threads. Random generators are passed
    to each sampling call and never kept.
    """

    family = None

    def __init__(self, candidates: Sequence[Hashable], strengths):
        self._index = CandidateIndex(candidates)
        strengths = per_candidate(strengths, len(self._index), "strengths", allow_scalar=False)
        if not np.all(np.isfinite(strengths)):
            raise DomainError(f"strengths must be finite, got {strengths}")
        self._strengths = read_only(strengths)

    @property
    def candidates(self) -> tuple:
        return self._index.candidates

    @property
    def strengths(self):
        return self._strengths

    @property
    @abstractmethod
    def spreads(self):
        """Per-candidate spread written to the parameter text."""

    def __len__(self):
        return len(self._index)

    def __repr__(self):
        return (
            f"{type(self).__name__}(candidates={list(self.candidates)!r}, "
            f"strengths={self._strengths.tolist()!r}, spreads={np.asarray(self.spreads).tolist()!r})"
        )

    # Sampling

    @abstractmethod
    def sample_utilities(self, rng: np.random.Generator, size=None):
        """
        Draw latent utilities.

        Parameters
        ----------
        rng : numpy.random.Generator
            Random source
        size : int, optional
            Number of independent draws. If omitted a single vector is returned.

        Returns
        -------
        numpy.ndarray
            Shape (m,) or (size, m)
        """

    def sample_ranking(self, rng: np.random.Generator) -> tuple:
        """Candidates ordered by one draw of descending utility."""
        order = compute.rank_utilities(self.sample_utilities(rng))
        return tuple(self._index[i] for i in order)

    def sample_profile(self, n: numbers.Integral, rng: np.random.Generator) -> PreferenceProfile:
        """
        Aggregate ``n`` independent rankings into a profile.

        Parameters
        ----------
        n : int
            Number of rankings; numpy integers are accepted
        rng : numpy.random.Generator
            Random source

        Returns
        -------
        PreferenceProfile
        """
        if n < 0:
            raise ValueError(f"number of rankings must be non-negative, got {n}")

        profile = PreferenceProfile()
        if n == 0:
            return profile

        orders = compute.rank_utilities(self.sample_utilities(rng, size=n))
        distinct, counts = np.unique(orders, axis=0, return_counts=True)
        for order, count in zip(distinct, counts):
            profile.aggregate((self._index[i] for i in order), count=int(count))

        logger.debug(
            "Sampled %d rankings (%d distinct) over %d candidates",
            n,
            len(distinct),
            len(self),
        )
        return profile

    # Probabilities

    @abstractmethod
    def _pairwise_probability(self, w, l):
        """Closed-form probability that position ``w`` beats position ``l``."""

    @abstractmethod
    def _ordered_log_probability(self, order):
        """Log-probability of the ranking given as candidate positions."""

    def marginal_probability(self, winner, loser) -> float:
        """
        Probability that a single draw ranks ``winner`` above ``loser``.

        Raises
        ------
        UnknownCandidateError
            If either candidate is not part of the model
        """
        return self._pairwise_probability(self._index.index(winner), self._index.index(loser))

    def pairwise_probabilities(self):
        """
        Matrix of marginal probabilities.

        Returns
        -------
        numpy.ndarray
            ``P[i, j]`` is the probability that candidate ``i`` is ranked
            above candidate ``j``; the diagonal is 0.5.
        """
        m = len(self)
        probs = np.full((m, m), 0.5)
        for w in range(m):
            for l in range(w + 1, m):
                probs[w, l] = self._pairwise_probability(w, l)
                probs[l, w] = 1.0 - probs[w, l]
        return probs

    def _ranking_order(self, ranking):
        ranking = tuple(ranking)
        order = self._index.indices(ranking)
        if len(order) != len(self) or len(set(order.tolist())) != len(self):
            raise ProfileError(
                f"ranking {ranking!r} is not a total order over {list(self.candidates)!r}"
            )
        return order

    def ranking_log_probability(self, ranking) -> float:
        """
        Log-probability of one full ranking.

        Raises
        ------
        UnknownCandidateError
            If the ranking names a candidate outside the model
        ProfileError
            If the ranking does not list every candidate exactly once
        """
        return self._ordered_log_probability(self._ranking_order(ranking))

    def log_likelihood(self, profile: PreferenceProfile) -> float:
        """
        Log-probability of a profile of independent rankings.

        Each distinct ranking is evaluated once and weighted by its count.
        The result may be ``-inf``.
        """
        total = 0.0
        rankings = profile.rankings
        for ranking, count in rankings.items():
            total += count * self.ranking_log_probability(ranking)
        logger.debug(
            "Log-likelihood %s over %d rankings (%d distinct)",
            total,
            len(profile),
            len(rankings),
        )
        return float(total)

    # Parameter text

    def to_param_string(self) -> str:
        """Candidates, strengths and spreads in the three-line text format."""
        return format_params(self.candidates, self._strengths, self.spreads)

    @classmethod
    @abstractmethod
    def from_params(cls, params):
        """Build a model from parsed :class:`~.params.ModelParams`."""

    @classmethod
    def parse_params(cls, text: str):
        """
        Build a model from the three-line text format.

        Candidates are read back as text.

        Raises
        ------
        ParseError
            If the text is malformed
        """
        return cls.from_params(parse_param_text(text))
