"""
Text encoding of model parameters.

The format has three lines: candidates, means and spreads. Each line is split
on runs of brackets, commas and spaces, and its first token is a label that is
discarded::

    [a, b, c]
    [1.0, 0.5, -0.3]
    [0.707, 0.707, 0.707]

The leading bracket of each line produces an empty first token, which plays
the role of the label. Lines such as ``means 1.0 0.5 -0.3`` parse the same.
Candidates are written with ``str`` and read back as text, so identities
containing brackets, commas or spaces do not survive a round trip.
"""

import logging
import re
from typing import NamedTuple

import numpy as np

from .errors import ParseError

logger = logging.getLogger(__name__)

SPLIT_PATTERN = re.compile(r"[\[\] ,]+")


class ModelParams(NamedTuple):
    candidates: list
    means: np.ndarray
    spreads: np.ndarray


def split_tokens(line: str) -> list:
    """Split ``line`` into tokens, keeping the leading label and dropping trailing blanks."""
    tokens = SPLIT_PATTERN.split(line.strip())
    while len(tokens) > 1 and tokens[-1] == "":
        tokens.pop()
    return tokens


def _format_list(values):
    return "[" + ", ".join(values) + "]"


def format_params(candidates, means, spreads) -> str:
    """
    Render candidates, means and spreads in the three-line format.

    Numbers are written with ``repr`` so that parsing recovers them exactly.
    """
    return "\n".join(
        [
            _format_list(str(c) for c in candidates),
            _format_list(repr(float(v)) for v in means),
            _format_list(repr(float(v)) for v in spreads),
        ]
    )


def _parse_numbers(tokens, m, what):
    values = tokens[1:]
    if len(values) != m:
        raise ParseError(f"expected {m} {what}, got {len(values)}: {values}")
    try:
        return np.array([float(v) for v in values])
    except ValueError as e:
        raise ParseError(f"non-numeric token among {what}: {e}") from e


def parse_params(text: str) -> ModelParams:
    """
    Parse the three-line parameter format.

    Parameters
    ----------
    text : str
        Candidates line, means line and spreads line

    Returns
    -------
    ModelParams
        Candidate identities (as text), means and spreads

    Raises
    ------
    ParseError
        If there are not exactly three non-blank lines, if no candidate is
        listed, if the lines disagree on the number of candidates, or if a
        number does not parse
    """
    lines = [line for line in text.splitlines() if line.strip()]
    if len(lines) != 3:
        raise ParseError(f"expected 3 parameter lines, got {len(lines)}")

    items, means, spreads = (split_tokens(line) for line in lines)
    m = len(items) - 1
    if m < 1:
        raise ParseError("no candidates")
    candidates = items[1:]

    params = ModelParams(
        candidates=candidates,
        means=_parse_numbers(means, m, "means"),
        spreads=_parse_numbers(spreads, m, "spreads"),
    )
    logger.debug("Parsed parameters for %d candidates", m)
    return params
