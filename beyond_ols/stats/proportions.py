"""Checks and adjustments for proportion data before it meets a Beta model.

A Beta distribution lives on the open interval (0, 1), so a response that
hits exactly 0 or 1 cannot be modeled with it.  The default here is to
reject such values and let the caller pick a model that handles them (the
zero-one-inflated Beta in :mod:`beyond_ols.stats.zoib`).  ``nudge_boundaries``
reproduces the workshop's shortcut of pulling 1.0 down to 0.999, and only
runs when called explicitly.
"""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np

from beyond_ols.core.config import settings
from beyond_ols.core.errors import InvalidParameterError

logger = logging.getLogger(__name__)


def validate_proportions(values, allow_boundaries: bool = False) -> np.ndarray:
    """Return ``values`` as a float array after checking the Beta domain.

    Parameters
    ----------
    values : array_like
        Observed proportions.
    allow_boundaries : bool
        Accept exact 0 and 1 (for zero-one-inflated models).

    Raises
    ------
    InvalidParameterError
        On non-finite values, values outside [0, 1], or exact 0/1 when
        ``allow_boundaries`` is false.
    """
    try:
        arr = np.asarray(values, dtype=float)
    except (TypeError, ValueError) as exc:
        raise InvalidParameterError("proportions must be real numbers") from exc
    if not np.all(np.isfinite(arr)):
        raise InvalidParameterError("proportions must be finite")
    if np.any((arr < 0) | (arr > 1)):
        raise InvalidParameterError("proportions must lie between 0 and 1")
    if not allow_boundaries and np.any((arr == 0) | (arr == 1)):
        raise InvalidParameterError(
            "proportions must lie strictly between 0 and 1; "
            "use a zero-one-inflated model or nudge_boundaries()"
        )
    return arr


def nudge_boundaries(values, epsilon: Optional[float] = None) -> np.ndarray:
    """Move exact 0s to ``epsilon`` and exact 1s to ``1 - epsilon``.

    Parameters
    ----------
    values : array_like
        Proportions in [0, 1].
    epsilon : float | None
        Size of the nudge, in (0, 0.5).  Defaults to
        ``settings.BOUNDARY_EPSILON`` (0.001, which turns 1.0 into 0.999).

    Returns
    -------
    np.ndarray
        A new array; the input is not modified.
    """
    if epsilon is None:
        epsilon = settings.BOUNDARY_EPSILON
    if not 0 < epsilon < 0.5:
        raise InvalidParameterError("epsilon must be between 0 and 0.5 exclusive")

    arr = validate_proportions(values, allow_boundaries=True).copy()
    zeros = arr == 0
    ones = arr == 1
    n_nudged = int(zeros.sum() + ones.sum())
    if n_nudged:
        logger.warning(
            "Nudged %d boundary proportion(s) into (0, 1) by %g", n_nudged, epsilon
        )
    arr[zeros] = epsilon
    arr[ones] = 1 - epsilon
    return arr
