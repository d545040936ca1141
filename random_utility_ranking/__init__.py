"""
Random-Utility Ranking Models

A package for simulating rankings and scoring observed rankings under
random-utility theory. Every candidate has a latent utility perturbed by noise;
a ranking lists the candidates by descending sampled utility.

Two noise families are provided:
- Gaussian noise (Thurstone-Mosteller), with closed-form pairwise probabilities
  and a numerically integrated ranking likelihood
- Gumbel noise (Plackett-Luce), with closed-form pairwise probabilities and an
  exact ranking likelihood
"""

from beartype.claw import beartype_this_package

beartype_this_package()

from .candidates import CandidateIndex  # noqa: E402
from .errors import (  # noqa: E402
    ConstructionError,
    DomainError,
    ParseError,
    ProfileError,
    RankingModelError,
    UnknownCandidateError,
)
from .gumbel import GumbelNoiseModel  # noqa: E402
from .model import RandomUtilityModel  # noqa: E402
from .normal import THURSTONE_SIGMA, NormalNoiseModel  # noqa: E402
from .params import ModelParams, format_params, parse_params  # noqa: E402
from .profile import PreferenceProfile  # noqa: E402

__version__ = "1.0.0"

NOISE_FAMILIES = {
    NormalNoiseModel.family: NormalNoiseModel,
    GumbelNoiseModel.family: GumbelNoiseModel,
}

__all__ = [
    "CandidateIndex",
    "ConstructionError",
    "DomainError",
    "GumbelNoiseModel",
    "ModelParams",
    "NOISE_FAMILIES",
    "NormalNoiseModel",
    "ParseError",
    "PreferenceProfile",
    "ProfileError",
    "RandomUtilityModel",
    "RankingModelError",
    "THURSTONE_SIGMA",
    "UnknownCandidateError",
    "format_params",
    "parse_params",
]
