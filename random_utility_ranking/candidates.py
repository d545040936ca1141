"""
Ordered candidate collection with constant-time identity lookup.

The position of a candidate in the collection is the index used by every
parameter array of a model.
"""

from collections.abc import Hashable, Sequence

import numpy as np

from .errors import ConstructionError, UnknownCandidateError


class CandidateIndex:
    """
    Fixed, ordered collection of unique candidate identities.

    Parameters
    ----------
    candidates : sequence of hashable
        Candidate identities in canonical order.

    Raises
    ------
    ConstructionError
        If the sequence is empty or contains the same identity twice.

    Examples
    --------
    >>> index = CandidateIndex(["a", "b", "c"])
    >>> index.index("c")
    2
    """

    def __init__(self, candidates: Sequence[Hashable]):
        self._candidates = tuple(candidates)
        if not self._candidates:
            raise ConstructionError("a model needs at least one candidate")

        self._positions = {}
        for position, candidate in enumerate(self._candidates):
            if candidate in self._positions:
                raise ConstructionError(f"duplicate candidate: {candidate!r}")
            self._positions[candidate] = position

    @property
    def candidates(self) -> tuple:
        return self._candidates

    def index(self, candidate) -> int:
        """
        Position of ``candidate`` in the collection.

        Raises
        ------
        UnknownCandidateError
            If ``candidate`` is not in the collection.
        """
        try:
            return self._positions[candidate]
        except KeyError:
            raise UnknownCandidateError(candidate) from None

    def indices(self, candidates):
        """Positions of several candidates, as an integer array."""
        return np.array([self.index(c) for c in candidates], dtype=np.intp)

    def __contains__(self, candidate):
        return candidate in self._positions

    def __getitem__(self, position):
        return self._candidates[position]

    def __iter__(self):
        return iter(self._candidates)

    def __len__(self):
        return len(self._candidates)

    def __eq__(self, other):
        if not isinstance(other, CandidateIndex):
            return NotImplemented
        return self._candidates == other._candidates

    def __hash__(self):
        return hash(self._candidates)

    def __repr__(self):
        return f"CandidateIndex({list(self._candidates)!r})"
