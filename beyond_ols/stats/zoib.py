"""Zero-one-inflated Beta distribution.

Proportions that contain exact 0s and 1s are modeled as a mixture: with
probability ``zoi`` the value is exactly 0 or 1, and with probability
``coi`` such a value is a 1.  Everything else follows a Beta body.  This
matches the ``zero_one_inflated_beta()`` family in brms.
"""

from __future__ import annotations

import logging
import math
from typing import Optional

import numpy as np

from beyond_ols.core.config import settings
from beyond_ols.core.errors import InvalidParameterError
from beyond_ols.stats.beta import BetaParameters, density, finite_real, fit_moments
from beyond_ols.stats.proportions import validate_proportions

logger = logging.getLogger(__name__)


def _probability(name: str, value) -> float:
    value = finite_real(name, value)
    if not 0 <= value <= 1:
        raise InvalidParameterError(f"{name} must be between 0 and 1, got {value}")
    return value


class ZeroOneInflatedBeta:
    """Immutable ZOIB distribution.

    Parameters
    ----------
    beta : BetaParameters
        Distribution of the values strictly inside (0, 1).
    zoi : float
        Probability of an exact 0 or 1.
    coi : float
        Probability that an exact boundary value is 1 rather than 0.
    """

    __slots__ = ("_beta", "_zoi", "_coi")

    def __init__(self, beta: BetaParameters, zoi: float = 0.0, coi: float = 0.0) -> None:
        if not isinstance(beta, BetaParameters):
            raise InvalidParameterError(
                f"beta must be BetaParameters, got {type(beta).__name__}"
            )
        object.__setattr__(self, "_beta", beta)
        object.__setattr__(self, "_zoi", _probability("zoi", zoi))
        object.__setattr__(self, "_coi", _probability("coi", coi))

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self):
        return (type(self), (self._beta, self._zoi, self._coi))

    @property
    def beta(self) -> BetaParameters:
        return self._beta

    @property
    def zoi(self) -> float:
        return self._zoi

    @property
    def coi(self) -> float:
        return self._coi

    # ------------------------------------------------------------------
    # Probabilities and moments
    # ------------------------------------------------------------------

    def prob_zero(self) -> float:
        return self._zoi * (1 - self._coi)

    def prob_one(self) -> float:
        return self._zoi * self._coi

    def density(self, x):
        """Density of the continuous part: (1 - zoi) * Beta density on (0, 1).

        The point masses at 0 and 1 are not part of the density; see
        :meth:`prob_zero` and :meth:`prob_one`.
        """
        return (1 - self._zoi) * density(x, self._beta)

    def mean(self) -> float:
        return self.prob_one() + (1 - self._zoi) * self._beta.mean

    def variance(self) -> float:
        body = self._beta
        second_moment = self.prob_one() + (1 - self._zoi) * (body.variance() + body.mean ** 2)
        return second_moment - self.mean() ** 2

    def std(self) -> float:
        return math.sqrt(max(self.variance(), 0.0))

    def sample(self, n: Optional[int] = None, seed: Optional[int] = None) -> np.ndarray:
        """Draw *n* values in [0, 1], exact 0s and 1s included.

        Parameters
        ----------
        n : int | None
            Number of draws; defaults to ``settings.MC_SAMPLES``.
        seed : int | None
            Optional RNG seed for reproducibility.
        """
        if n is None:
            n = settings.MC_SAMPLES
        rng = np.random.default_rng(seed)
        draws = rng.beta(self._beta.shape1, self._beta.shape2, size=n)
        at_boundary = rng.random(n) < self._zoi
        is_one = rng.random(n) < self._coi
        draws[at_boundary] = is_one[at_boundary].astype(float)
        return draws

    # ------------------------------------------------------------------
    # Fitting
    # ------------------------------------------------------------------

    @classmethod
    def fit(cls, values) -> ZeroOneInflatedBeta:
        """Estimate a ZOIB from observed proportions.

        ``zoi`` is the share of exact 0s and 1s, ``coi`` the share of 1s
        among those (0 when there are none), and the Beta body is moment
        matched to the remaining values.

        Raises
        ------
        InvalidParameterError
            On values outside [0, 1] or fewer than two interior values.
        """
        arr = validate_proportions(values, allow_boundaries=True).ravel()
        if arr.size == 0:
            raise InvalidParameterError("Need at least one value to fit")

        boundary = (arr == 0) | (arr == 1)
        zoi = float(np.mean(boundary))
        coi = float(np.mean(arr[boundary] == 1)) if boundary.any() else 0.0
        body = fit_moments(arr[~boundary])

        logger.debug(
            "ZOIB fit on %d values: zoi=%.3f coi=%.3f body=%r", arr.size, zoi, coi, body
        )
        return cls(body, zoi=zoi, coi=coi)

    def __eq__(self, other) -> bool:
        if not isinstance(other, ZeroOneInflatedBeta):
            return NotImplemented
        return (self._beta, self._zoi, self._coi) == (other._beta, other._zoi, other._coi)

    def __hash__(self) -> int:
        return hash((self._beta, self._zoi, self._coi))

    def __repr__(self) -> str:
        return f"ZeroOneInflatedBeta({self._beta!r}, zoi={self._zoi:.3f}, coi={self._coi:.3f})"
