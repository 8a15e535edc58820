"""Beta distribution toolkit for distributional regression.

Public API:
- BetaParameters: immutable Beta distribution, shape or mean/precision form
- shapes_to_mean_precision / mean_precision_to_shapes: parameter conversion
- density / log_density: Beta density, evaluated in log space
- fit_moments: method-of-moments fit to observed proportions
- hdi_from_samples: Highest Density Interval of Monte Carlo draws
- from_linear_predictors: Beta implied by logit/log-scale regression output
- ZeroOneInflatedBeta: Beta body plus point masses at 0 and 1
- validate_proportions / nudge_boundaries: preparing proportion data
"""

from beyond_ols.core.errors import InvalidParameterError
from beyond_ols.stats.beta import (
    BetaParameters,
    density,
    fit_moments,
    hdi_from_samples,
    log_density,
    mean_precision_to_shapes,
    shapes_to_mean_precision,
)
from beyond_ols.stats.links import from_linear_predictors, inv_logit, logit, mean_difference
from beyond_ols.stats.proportions import nudge_boundaries, validate_proportions
from beyond_ols.stats.zoib import ZeroOneInflatedBeta

__all__ = [
    "InvalidParameterError",
    "BetaParameters",
    "density",
    "log_density",
    "shapes_to_mean_precision",
    "mean_precision_to_shapes",
    "fit_moments",
    "hdi_from_samples",
    "from_linear_predictors",
    "inv_logit",
    "logit",
    "mean_difference",
    "ZeroOneInflatedBeta",
    "validate_proportions",
    "nudge_boundaries",
]
