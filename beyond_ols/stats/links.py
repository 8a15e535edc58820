"""Translate Beta regression output from the link scale.

Beta regression (``brms::brm(family = Beta())``, ``betareg``) models the
mean through a logit link and the precision through a log link, or leaves
the precision on its natural scale.  Coefficients and linear predictors
therefore come back on those scales and have to be transformed before they
say anything about proportions.
"""

from __future__ import annotations

import math

import numpy as np
from scipy.special import expit, logit as _logit

from beyond_ols.core.errors import InvalidParameterError
from beyond_ols.stats.beta import BetaParameters, finite_real

PHI_LINKS = ("log", "identity")


def inv_logit(eta):
    """Inverse logit, 1 / (1 + exp(-eta)), stable for large |eta|."""
    return expit(eta)


def logit(p):
    """log(p / (1 - p)); ``p`` must be in (0, 1)."""
    try:
        arr = np.asarray(p, dtype=float)
    except (TypeError, ValueError) as exc:
        raise InvalidParameterError(f"p must be real, got {p!r}") from exc
    if not np.all((arr > 0) & (arr < 1)):
        raise InvalidParameterError("p must be between 0 and 1 exclusive")
    return _logit(arr) if arr.ndim else float(_logit(arr))


def from_linear_predictors(
    mu_eta: float,
    phi_eta: float,
    phi_link: str = "log",
) -> BetaParameters:
    """Build the Beta distribution implied by a pair of linear predictors.

    Parameters
    ----------
    mu_eta : float
        Linear predictor of the mean, on the logit scale.
    phi_eta : float
        Linear predictor of the precision, on the ``phi_link`` scale.
    phi_link : str
        ``"log"`` (brms default) or ``"identity"``.

    Returns
    -------
    BetaParameters
        Distribution with mean ``inv_logit(mu_eta)`` and the back-transformed
        precision.
    """
    if phi_link not in PHI_LINKS:
        raise InvalidParameterError(
            f"phi_link must be one of {', '.join(PHI_LINKS)}, got {phi_link!r}"
        )
    mu_eta = finite_real("mu_eta", mu_eta)
    phi_eta = finite_real("phi_eta", phi_eta)

    mean = float(expit(mu_eta))
    if phi_link == "log":
        try:
            precision = math.exp(phi_eta)
        except OverflowError as exc:
            raise InvalidParameterError(f"exp({phi_eta}) overflows") from exc
    else:
        precision = phi_eta
    return BetaParameters.from_mean_precision(mean, precision)


def mean_difference(mu_eta: float, coefficient: float) -> float:
    """Change in the mean when ``coefficient`` is added to the logit predictor.

    For a binary predictor this is its effect on the response scale at the
    baseline ``mu_eta``:  inv_logit(mu_eta + coefficient) - inv_logit(mu_eta).
    """
    mu_eta = finite_real("mu_eta", mu_eta)
    coefficient = finite_real("coefficient", coefficient)
    return float(expit(mu_eta + coefficient) - expit(mu_eta))
