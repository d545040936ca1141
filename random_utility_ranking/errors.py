"""
Exceptions raised by random-utility models, profiles and the parameter codec.
"""


class RankingModelError(Exception):
    """Base class for all errors raised by this package."""


class ConstructionError(RankingModelError, ValueError):
    """Candidates and parameter vectors do not describe a valid model."""


class UnknownCandidateError(RankingModelError, KeyError):
    """A candidate identity is not part of the candidate index."""

    def __init__(self, candidate):
        super().__init__(candidate)
        self.candidate = candidate

    def __str__(self):
        return f"candidate not found: {self.candidate!r}"


class ParseError(RankingModelError, ValueError):
    """Malformed parameter text."""


class DomainError(RankingModelError, ValueError):
    """Parameters for which a probability is undefined."""


class ProfileError(RankingModelError, ValueError):
    """A ranking or ranking table that is not a total order."""
