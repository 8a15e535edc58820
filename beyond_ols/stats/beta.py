"""Beta distribution in its two parameterizations.

The workshop writes a Beta distribution either with two shape parameters
(``shape1``, ``shape2``: pseudo-counts of successes and failures, the form
``dbeta()`` and ``scipy.stats.beta`` use) or with a mean and a precision,
which is what Beta regression estimates.  ``BetaParameters`` stores the shape
pair and derives the other form on demand.  The model is immutable: every
constructor returns a new instance and attribute assignment raises.

Densities are evaluated in log space with ``gammaln`` and exponentiated at
the end, so precisions in the hundreds (and far beyond) neither overflow the
gamma function nor underflow the normalizing constant.
"""

from __future__ import annotations

import logging
import math
from typing import Optional

import numpy as np
from scipy import stats as sp_stats
from scipy.special import gammaln

from beyond_ols.core.config import settings
from beyond_ols.core.errors import InvalidParameterError
from beyond_ols.stats.proportions import validate_proportions

logger = logging.getLogger(__name__)


def finite_real(name: str, value) -> float:
    """Coerce ``value`` to a finite float, raising InvalidParameterError otherwise."""
    try:
        value = float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidParameterError(f"{name} must be a real number, got {value!r}") from exc
    if not math.isfinite(value):
        raise InvalidParameterError(f"{name} must be finite, got {value}")
    return value


# ======================================================================
# Conversions
# ======================================================================

def shapes_to_mean_precision(shape1: float, shape2: float) -> tuple[float, float]:
    """Convert a shape pair to ``(mean, precision)``.

    mean = shape1 / (shape1 + shape2), precision = shape1 + shape2

    Raises
    ------
    InvalidParameterError
        If either shape is non-finite or not strictly positive.
    """
    shape1 = finite_real("shape1", shape1)
    shape2 = finite_real("shape2", shape2)
    if shape1 <= 0 or shape2 <= 0:
        raise InvalidParameterError(
            f"shape1 and shape2 must be positive, got ({shape1}, {shape2})"
        )
    precision = shape1 + shape2
    if not math.isfinite(precision):
        raise InvalidParameterError("shape1 + shape2 overflows")
    mean = shape1 / precision
    if not 0 < mean < 1:
        raise InvalidParameterError(
            f"shape ratio not representable: ({shape1}, {shape2}) gives mean {mean}"
        )
    return (mean, precision)


def mean_precision_to_shapes(mean: float, precision: float) -> tuple[float, float]:
    """Convert ``(mean, precision)`` to a shape pair.

    shape1 = mean * precision, shape2 = (1 - mean) * precision

    Raises
    ------
    InvalidParameterError
        If mean is outside the open interval (0, 1), precision is not
        strictly positive, or either is non-finite.
    """
    mean = finite_real("mean", mean)
    precision = finite_real("precision", precision)
    if not 0 < mean < 1:
        raise InvalidParameterError(f"mean must be between 0 and 1 exclusive, got {mean}")
    if precision <= 0:
        raise InvalidParameterError(f"precision must be positive, got {precision}")
    shape1 = mean * precision
    shape2 = (1 - mean) * precision
    if shape1 <= 0 or shape2 <= 0:
        raise InvalidParameterError(
            f"shapes underflow to zero for mean={mean}, precision={precision}"
        )
    return (shape1, shape2)


# ======================================================================
# Value type
# ======================================================================

class BetaParameters:
    """Immutable Beta distribution, stored in shape form.

    Build one with :meth:`from_shapes` or :meth:`from_mean_precision`;
    the plain constructor takes the shape pair.

    Parameters
    ----------
    shape1 : float
        First shape parameter (pseudo-successes), > 0.
    shape2 : float
        Second shape parameter (pseudo-failures), > 0.
    """

    __slots__ = ("_shape1", "_shape2")

    def __init__(self, shape1: float, shape2: float) -> None:
        shapes_to_mean_precision(shape1, shape2)
        object.__setattr__(self, "_shape1", float(shape1))
        object.__setattr__(self, "_shape2", float(shape2))

    @classmethod
    def from_shapes(cls, shape1: float, shape2: float) -> BetaParameters:
        return cls(shape1, shape2)

    @classmethod
    def from_mean_precision(cls, mean: float, precision: float) -> BetaParameters:
        shape1, shape2 = mean_precision_to_shapes(mean, precision)
        return cls(shape1, shape2)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self):
        return (type(self), (self._shape1, self._shape2))

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def shape1(self) -> float:
        return self._shape1

    @property
    def shape2(self) -> float:
        return self._shape2

    @property
    def mean(self) -> float:
        return self._shape1 / (self._shape1 + self._shape2)

    @property
    def precision(self) -> float:
        return self._shape1 + self._shape2

    def shapes(self) -> tuple[float, float]:
        return (self._shape1, self._shape2)

    def mean_precision(self) -> tuple[float, float]:
        return (self.mean, self.precision)

    # ------------------------------------------------------------------
    # Summaries
    # ------------------------------------------------------------------

    def variance(self) -> float:
        """Var = mean * (1 - mean) / (1 + precision)."""
        mean = self.mean
        return mean * (1 - mean) / (1 + self.precision)

    def std(self) -> float:
        return math.sqrt(self.variance())

    def distribution(self):
        """Frozen ``scipy.stats.beta`` with the same shapes."""
        return sp_stats.beta(self._shape1, self._shape2)

    def pdf(self, x):
        return density(x, self)

    def logpdf(self, x):
        return log_density(x, self)

    def credible_interval(self, width: float = 0.95) -> tuple[float, float]:
        """Equal-tailed interval holding ``width`` of the probability mass.

        Parameters
        ----------
        width : float
            Width of the interval, e.g. 0.95 for 95%.

        Returns
        -------
        tuple[float, float]
            (lower_bound, upper_bound)
        """
        if not 0 < width < 1:
            raise InvalidParameterError("width must be between 0 and 1 exclusive")
        lower_tail = (1 - width) / 2
        dist = self.distribution()
        return (float(dist.ppf(lower_tail)), float(dist.ppf(1 - lower_tail)))

    def hdi(self, credible_mass: float = 0.95) -> tuple[float, float]:
        """Highest Density Interval.

        Finds the narrowest interval containing ``credible_mass`` of the
        probability by minimising the interval width over the lower tail.
        Requires a unimodal density, i.e. both shapes >= 1.

        Parameters
        ----------
        credible_mass : float
            Probability mass to include (e.g. 0.95 for 95% HDI).

        Returns
        -------
        tuple[float, float]
            (lower_bound, upper_bound)
        """
        from scipy.optimize import minimize_scalar

        if not 0 < credible_mass < 1:
            raise InvalidParameterError("credible_mass must be between 0 and 1 exclusive")
        if self._shape1 < 1 or self._shape2 < 1:
            raise InvalidParameterError(
                f"hdi needs both shapes >= 1, got ({self._shape1:g}, {self._shape2:g})"
            )
        dist = self.distribution()

        def interval_width(low_tail: float) -> float:
            return float(dist.ppf(low_tail + credible_mass) - dist.ppf(low_tail))

        result = minimize_scalar(
            interval_width,
            bounds=(0.0, 1.0 - credible_mass),
            method="bounded",
        )
        return (float(dist.ppf(result.x)), float(dist.ppf(result.x + credible_mass)))

    def sample(self, n: Optional[int] = None, seed: Optional[int] = None) -> np.ndarray:
        """Draw *n* values in (0, 1).

        Parameters
        ----------
        n : int | None
            Number of draws; defaults to ``settings.MC_SAMPLES``.
        seed : int | None
            Optional RNG seed for reproducibility.
        """
        rng = np.random.default_rng(seed)
        if n is None:
            n = settings.MC_SAMPLES
        return rng.beta(self._shape1, self._shape2, size=n)

    # ------------------------------------------------------------------
    # Value semantics
    # ------------------------------------------------------------------

    def __eq__(self, other) -> bool:
        if not isinstance(other, BetaParameters):
            return NotImplemented
        return self.shapes() == other.shapes()

    def __hash__(self) -> int:
        return hash(self.shapes())

    def __repr__(self) -> str:
        return (
            f"BetaParameters(shape1={self._shape1:.4g}, shape2={self._shape2:.4g}; "
            f"mean={self.mean:.4g}, precision={self.precision:.4g})"
        )


def _resolve(
    params: Optional[BetaParameters],
    mean: Optional[float],
    precision: Optional[float],
    shape1: Optional[float],
    shape2: Optional[float],
) -> BetaParameters:
    given_mp = mean is not None or precision is not None
    given_shapes = shape1 is not None or shape2 is not None
    if params is not None:
        if given_mp or given_shapes:
            raise InvalidParameterError("pass either params or keyword parameters, not both")
        if not isinstance(params, BetaParameters):
            raise InvalidParameterError(
                f"params must be BetaParameters, got {type(params).__name__}"
            )
        return params
    if given_mp and given_shapes:
        raise InvalidParameterError("pass either mean/precision or shape1/shape2, not both")
    if given_mp:
        if mean is None or precision is None:
            raise InvalidParameterError("mean and precision must be given together")
        return BetaParameters.from_mean_precision(mean, precision)
    if given_shapes:
        if shape1 is None or shape2 is None:
            raise InvalidParameterError("shape1 and shape2 must be given together")
        return BetaParameters.from_shapes(shape1, shape2)
    raise InvalidParameterError("no Beta parameters given")


def _points(x) -> tuple[np.ndarray, bool]:
    try:
        arr = np.asarray(x, dtype=float)
    except (TypeError, ValueError) as exc:
        raise InvalidParameterError(f"x must be real, got {x!r}") from exc
    if not np.all(np.isfinite(arr)):
        raise InvalidParameterError("x must be finite")
    return np.atleast_1d(arr), arr.ndim == 0


# ======================================================================
# Density
# ======================================================================

def log_density(
    x,
    params: Optional[BetaParameters] = None,
    *,
    mean: Optional[float] = None,
    precision: Optional[float] = None,
    shape1: Optional[float] = None,
    shape2: Optional[float] = None,
):
    """Log of the Beta density at ``x``; ``-inf`` outside (0, 1).

    See :func:`density` for the accepted parameter forms.
    """
    beta = _resolve(params, mean, precision, shape1, shape2)
    arr, scalar = _points(x)
    a, b = beta.shapes()

    out = np.full(arr.shape, -np.inf)
    inside = (arr > 0) & (arr < 1)
    xi = arr[inside]
    log_norm = gammaln(a + b) - gammaln(a) - gammaln(b)
    out[inside] = (a - 1) * np.log(xi) + (b - 1) * np.log1p(-xi) + log_norm
    return float(out[0]) if scalar else out


def density(
    x,
    params: Optional[BetaParameters] = None,
    *,
    mean: Optional[float] = None,
    precision: Optional[float] = None,
    shape1: Optional[float] = None,
    shape2: Optional[float] = None,
):
    """Beta probability density at ``x``.

    f(x; a, b) = x^(a-1) * (1-x)^(b-1) / B(a, b)

    Parameters may be given as a ``BetaParameters`` or as keywords in
    either form (``mean=``/``precision=`` or ``shape1=``/``shape2=``);
    they are normalized to shape form first.  The density is 0 at and
    beyond the endpoints of (0, 1).

    Parameters
    ----------
    x : float | array_like
        Evaluation point(s); must be finite.

    Returns
    -------
    float | np.ndarray
        A float for scalar ``x``, otherwise an array of ``x``'s shape.
    """
    logs = log_density(
        x, params, mean=mean, precision=precision, shape1=shape1, shape2=shape2
    )
    if isinstance(logs, float):
        return math.exp(logs)
    return np.exp(logs)


# ======================================================================
# Sample-based helpers
# ======================================================================

def hdi_from_samples(samples, credible_mass: float = 0.95) -> tuple[float, float]:
    """Compute the Highest Density Interval from Monte Carlo samples.

    Uses the sorted-interval method: find the shortest interval containing
    ``credible_mass`` proportion of sorted samples.

    Parameters
    ----------
    samples : array_like
        1-D array of draws, e.g. posterior draws of a fitted mean.
    credible_mass : float
        Probability mass to include (e.g. 0.95 for 95% HDI).

    Returns
    -------
    tuple[float, float]
        (lower_bound, upper_bound)
    """
    if not 0 < credible_mass < 1:
        raise InvalidParameterError("credible_mass must be between 0 and 1 exclusive")
    sorted_samples = np.sort(np.asarray(samples, dtype=float).ravel())
    n = len(sorted_samples)
    if n == 0:
        raise InvalidParameterError("samples must not be empty")
    interval_size = int(np.ceil(credible_mass * n))
    if interval_size >= n:
        return (float(sorted_samples[0]), float(sorted_samples[-1]))

    # window i holds sorted_samples[i : i + interval_size]
    widths = sorted_samples[interval_size - 1:] - sorted_samples[: n - interval_size + 1]
    best_idx = int(np.argmin(widths))
    return (float(sorted_samples[best_idx]), float(sorted_samples[best_idx + interval_size - 1]))


def fit_moments(values) -> BetaParameters:
    """Fit a Beta distribution to observed proportions via moment matching.

    Given sample mean m and variance v:
        precision = m * (1 - m) / v - 1

    Parameters
    ----------
    values : array_like
        Observed proportions, all strictly between 0 and 1.

    Returns
    -------
    BetaParameters
        Fitted distribution with mean m and the matched precision.
    """
    arr = validate_proportions(values)
    if arr.size < 2:
        raise InvalidParameterError("Need at least 2 values for moment matching")

    m = float(np.mean(arr))
    v = float(np.var(arr, ddof=1))  # unbiased sample variance
    if v <= 0 or v >= m * (1 - m):
        raise InvalidParameterError(
            f"sample variance {v:.3g} is outside (0, {m * (1 - m):.3g}); no Beta matches it"
        )

    fitted = BetaParameters.from_mean_precision(m, m * (1 - m) / v - 1)
    logger.debug("Moment-matched %d values to %r", arr.size, fitted)
    return fitted

