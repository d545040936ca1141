"""
Preference profiles: multisets of full rankings and their pairwise counts.

A profile is what sampling produces and what a likelihood consumes. It can be
built ranking by ranking with :meth:`PreferenceProfile.aggregate`, or read from
a long-format polars data frame with one row per (ballot, position).
"""

import logging
import numbers
from collections import Counter

import numpy as np
import polars as po

from .errors import ProfileError

logger = logging.getLogger(__name__)


def _assert_ranking_dataframe_structure(df, id_column, rank_column, candidate_column):
    """
    Validate the structure of a long-format ranking data frame.

    Raises
    ------
    ValueError
        If the required columns are missing
    """
    required_cols = [id_column, rank_column, candidate_column]
    missing_cols = [col for col in required_cols if col not in df.columns]
    if missing_cols:
        raise ValueError(
            f"Expected ranking data frame to have columns {required_cols}, "
            f"but missing: {missing_cols}. Available columns: {df.columns}"
        )


class PreferenceProfile:
    """
    Multiset of total orders over a set of candidates.

    Rankings are stored as tuples of candidate identities, most preferred
    first, together with the number of times each was observed.

    Examples
    --------
    >>> profile = PreferenceProfile()
    >>> profile.aggregate(("a", "b", "c"))
    >>> profile.aggregate(("b", "a", "c"), count=2)
    >>> profile.count_pairwise_wins("a", "b")
    1
    >>> len(profile)
    3
    """

    def __init__(self, rankings=None):
        self._counts = Counter()
        self._total = 0
        if rankings is not None:
            for ranking in rankings:
                self.aggregate(ranking)

    def aggregate(self, ranking, count: numbers.Integral = 1) -> None:
        """
        Add ``count`` observations of ``ranking``.

        Parameters
        ----------
        ranking : sequence
            Candidates ordered from most to least preferred.
        count : int, optional
            Number of identical observations, by default 1.

        Raises
        ------
        ProfileError
            If the ranking lists a candidate more than once.
        ValueError
            If ``count`` is smaller than one.
        """
        if count < 1:
            raise ValueError(f"count must be at least 1, got {count}")
        count = int(count)
        ranking = tuple(ranking)
        if len(set(ranking)) != len(ranking):
            raise ProfileError(f"ranking lists a candidate twice: {ranking!r}")
        self._counts[ranking] += count
        self._total += count

    def count_pairwise_wins(self, a, b) -> int:
        """Number of aggregated rankings in which ``a`` precedes ``b``."""
        wins = 0
        for ranking, count in self._counts.items():
            if a in ranking and b in ranking and ranking.index(a) < ranking.index(b):
                wins += count
        return wins

    def pairwise_wins(self, candidates):
        """
        Matrix of pairwise win counts.

        Parameters
        ----------
        candidates : sequence
            Candidates defining the row and column order.

        Returns
        -------
        numpy.ndarray
            ``W[i, j]`` is the number of rankings placing ``candidates[i]``
            above ``candidates[j]``.
        """
        positions = {c: i for i, c in enumerate(candidates)}
        wins = np.zeros((len(positions), len(positions)), dtype=np.int64)
        for ranking, count in self._counts.items():
            idx = [positions[c] for c in ranking if c in positions]
            for k, winner in enumerate(idx):
                wins[winner, idx[k + 1 :]] += count
        return wins

    @property
    def rankings(self):
        """Read-only view of ranking -> count."""
        return dict(self._counts)

    @property
    def candidates(self):
        """Candidates appearing in the profile, in first-seen order."""
        seen = {}
        for ranking in self._counts:
            for candidate in ranking:
                seen.setdefault(candidate, None)
        return list(seen)

    def __iter__(self):
        return iter(self._counts)

    def __len__(self):
        return self._total

    def __repr__(self):
        return (
            f"PreferenceProfile({self._total} rankings, "
            f"{len(self._counts)} distinct)"
        )

    @classmethod
    def from_frame(
        cls,
        df: po.DataFrame,
        id_column: str = "id",
        rank_column: str = "rank",
        candidate_column: str = "candidate",
    ):
        """
        Build a profile from a long-format ranking table.

        Parameters
        ----------
        df : polars.DataFrame
            One row per (ballot, position).
        id_column : str, optional
            Column identifying the ballot, by default 'id'.
        rank_column : str, optional
            Column holding the position, 1 for the most preferred, by default 'rank'.
        candidate_column : str, optional
            Column holding the candidate identity, by default 'candidate'.

        Returns
        -------
        PreferenceProfile

        Raises
        ------
        ValueError
            If a required column is missing.
        ProfileError
            If a ballot's positions are not 1, 2, ..., k.
        """
        _assert_ranking_dataframe_structure(df, id_column, rank_column, candidate_column)

        agg = (
            df.sort([id_column, rank_column])
            .group_by(id_column, maintain_order=True)
            .agg(po.col(rank_column), po.col(candidate_column))
        )

        profile = cls()
        for ballot, ranks, candidates in zip(
            agg[id_column], agg[rank_column], agg[candidate_column]
        ):
            if list(ranks) != list(range(1, len(ranks) + 1)):
                raise ProfileError(
                    f"ballot {ballot!r} has positions {list(ranks)}, "
                    "expected consecutive positions starting at 1"
                )
            profile.aggregate(candidates)

        logger.debug("Read %d rankings from a %d-row frame", len(profile), df.height)
        return profile

    def to_frame(self) -> po.DataFrame:
        """
        Long-format table with columns ``id``, ``rank`` and ``candidate``.

        Repeated rankings get one ballot id per observation, so
        ``PreferenceProfile.from_frame(profile.to_frame())`` rebuilds the
        same multiset.
        """
        data = {"id": [], "rank": [], "candidate": []}
        ballot = 0
        for ranking, count in self._counts.items():
            for _ in range(count):
                data["id"].extend([ballot] * len(ranking))
                data["rank"].extend(range(1, len(ranking) + 1))
                data["candidate"].extend(ranking)
                ballot += 1
        return po.DataFrame(data)
