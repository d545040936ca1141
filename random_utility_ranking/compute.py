"""
Closed-form and numerical probability kernels for random-utility models.

This module provides functions for:
- Pairwise marginal probabilities under Gaussian and logistic noise
- The exact Plackett-Luce log-probability of a full ranking
- A grid-integration estimate of the log-probability of a full ranking under
  independent Gaussian utilities
- Turning sampled utilities into rankings

All functions are pure and operate on numpy arrays indexed by candidate
position; they know nothing about candidate identities.
"""

import math

import numpy as np
from scipy.integrate import cumulative_trapezoid, trapezoid
from scipy.special import expit, ndtr
from scipy.stats import norm

from .errors import DomainError

# Grid used by normal_ranking_log_probability: DEFAULT_GRID_SIZE points across
# the whole range plus DEFAULT_GRID_SIZE points within DEFAULT_GRID_WIDTH
# standard deviations of each candidate's mean.
DEFAULT_GRID_SIZE = 2049
DEFAULT_GRID_WIDTH = 8.0


def normal_pairwise_probability(mean_diff, sd_winner, sd_loser):
    """
    Probability that one Gaussian utility exceeds another.

    Parameters
    ----------
    mean_diff : float
        Mean of the winner minus mean of the loser
    sd_winner : float
        Standard deviation of the winner's utility
    sd_loser : float
        Standard deviation of the loser's utility

    Returns
    -------
    float
        ``Phi(mean_diff / sqrt(sd_winner**2 + sd_loser**2))``

    Raises
    ------
    DomainError
        If the combined spread is zero or not finite
    """
    spread = math.hypot(sd_winner, sd_loser)
    if not spread > 0 or not math.isfinite(spread):
        raise DomainError(
            f"pairwise probability undefined for spreads {sd_winner}, {sd_loser}"
        )
    return float(ndtr(mean_diff / spread))


def logistic_pairwise_probability(mean_diff, scale=1.0):
    """
    Probability that one Gumbel utility exceeds another.

    Parameters
    ----------
    mean_diff : float
        Location of the winner minus location of the loser
    scale : float, optional
        Steepness of the logistic law, by default 1.0

    Returns
    -------
    float
        ``1 / (1 + exp(-mean_diff * scale))``

    Notes
    -----
    ``scipy.special.expit`` saturates to 0 or 1 without overflowing for large
    arguments.
    """
    return float(expit(mean_diff * scale))


def plackett_luce_log_probability(utilities):
    """
    Log-probability of a full ranking under the Plackett-Luce model.

    Parameters
    ----------
    utilities : array_like
        Scaled strengths of the candidates, listed in ranked order (most
        preferred first)

    Returns
    -------
    float
        ``sum_k [u_k - log(sum_{j >= k} exp(u_j))]``

    Notes
    -----
    Each factor is the probability that the candidate placed at position k
    is chosen among those not yet placed. The suffix log-sum-exp terms come
    from a single reversed ``numpy.logaddexp.accumulate``.
    """
    u = np.asarray(utilities, dtype=float)
    tail = np.logaddexp.accumulate(u[::-1])[::-1]
    return float(np.sum(u - tail))


def _validate_normal_parameters(means, sigmas):
    if not np.all(np.isfinite(means)):
        raise DomainError(f"means must be finite, got {means}")
    if not np.all(np.isfinite(sigmas)) or np.any(sigmas <= 0):
        raise DomainError(
            f"standard deviations must be positive and finite, got {sigmas}"
        )


def _integration_grid(means, sigmas, grid_size, width):
    # Each density gets its own window, so a narrow one is never stepped over.
    reach = width * sigmas
    pieces = [np.linspace(means.min() - reach.max(), means.max() + reach.max(), grid_size)]
    pieces.extend(np.linspace(mu - r, mu + r, grid_size) for mu, r in zip(means, reach))
    return np.unique(np.concatenate(pieces))


def normal_ranking_log_probability(
    means, sigmas, grid_size=DEFAULT_GRID_SIZE, width=DEFAULT_GRID_WIDTH
):
    """
    Log-probability that independent Gaussian utilities come out in order.

    Parameters
    ----------
    means : array_like
        Means of the utilities, listed in ranked order (most preferred first)
    sigmas : array_like
        Standard deviations, in the same order
    grid_size : int, optional
        Number of integration points across the whole range and around each
        mean, by default DEFAULT_GRID_SIZE
    width : float, optional
        Number of standard deviations each candidate's window extends on
        either side of its mean, by default DEFAULT_GRID_WIDTH

    Returns
    -------
    float
        ``log P(X_1 > X_2 > ... > X_m)``, possibly ``-inf``

    Raises
    ------
    DomainError
        If a mean is not finite or a standard deviation is not positive

    Notes
    -----
    There is no closed form for three or more candidates. Starting from the
    last-ranked candidate,

        g_m(x) = phi_m(x)
        g_k(x) = phi_k(x) * integral_{-inf}^{x} g_{k+1}(y) dy
        P      = integral g_1(x) dx

    where ``phi_k`` is the density of the k-th ranked utility. The inner
    integrals are cumulative trapezoid sums on one fixed grid, so the
    estimate is deterministic and smooth in the parameters. The grid is the
    union of ``grid_size`` points spanning all means and, for each candidate
    k, ``grid_size`` points over ``mu_k +/- width * sigma_k``. Every density
    is therefore sampled at spacing ``2 * width * sigma_k / (grid_size - 1)``
    (sigma_k / 128 with the defaults) whatever the ratio between the sigmas,
    and the grid has at most ``(m + 1) * grid_size`` points. The trapezoid
    error is O(h**2) in that relative spacing; with the defaults the
    absolute error in the probability is below 1e-5 for two candidates and
    grows at most linearly with m. Mass that lies outside every window, as
    for rankings far less likely than the reverse, is only resolved by the
    spanning points, and there the log-probability is approximate
    (relative error of about 1e-3). ``g`` is carried as a log-density and shifted
    by its maximum before each integral, so rankings with vanishing
    probability stay finite in log space instead of underflowing to zero.
    """
    means = np.asarray(means, dtype=float)
    sigmas = np.asarray(sigmas, dtype=float)
    _validate_normal_parameters(means, sigmas)
    if means.size <= 1:
        return 0.0

    x = _integration_grid(means, sigmas, grid_size, width)

    log_g = norm.logpdf(x, loc=means[-1], scale=sigmas[-1])
    for mu, sigma in zip(means[-2::-1], sigmas[-2::-1]):
        log_below = _log_integral(log_g, x, cumulative=True)
        log_g = norm.logpdf(x, loc=mu, scale=sigma) + log_below
    return _log_integral(log_g, x)


def _log_integral(log_f, x, cumulative=False):
    peak = log_f.max()
    if not np.isfinite(peak):
        return np.full_like(x, -np.inf) if cumulative else -np.inf
    f = np.exp(log_f - peak)
    if not cumulative:
        return float(peak + math.log(trapezoid(f, x)))
    with np.errstate(divide="ignore"):
        return peak + np.log(cumulative_trapezoid(f, x, initial=0.0))


def rank_utilities(utilities):
    """
    Candidate positions ordered by descending utility.

    Parameters
    ----------
    utilities : numpy.ndarray
        Utility vector of shape (m,) or matrix of shape (n, m), one row per draw

    Returns
    -------
    numpy.ndarray
        Integer array of the same shape; row ``r`` lists candidate positions
        from highest to lowest utility. Equal utilities keep the original
        candidate order.
    """
    return np.argsort(-utilities, axis=-1, kind="stable")
