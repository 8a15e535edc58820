"""Density curves and shape vs. mean/precision comparison plots.

Figures are built on ``matplotlib.figure.Figure`` directly rather than
through pyplot, so nothing here touches the global figure registry or the
interactive backend.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional, Union

import numpy as np
from matplotlib.figure import Figure

from beyond_ols.core.config import settings
from beyond_ols.core.errors import InvalidParameterError
from beyond_ols.stats.beta import BetaParameters, density

logger = logging.getLogger(__name__)

COLORS = ["#E81B23", "#0015BC", "#2CA02C", "#FF7F0E", "#9467BD", "#8C564B"]


def density_curve(
    params: BetaParameters,
    n_points: Optional[int] = None,
) -> tuple[np.ndarray, np.ndarray]:
    """Evaluate the density on an evenly spaced grid strictly inside (0, 1).

    The endpoints are left out because the density is unbounded there
    whenever a shape parameter is below 1.
    """
    if n_points is None:
        n_points = settings.DENSITY_GRID_POINTS
    if n_points < 2:
        raise InvalidParameterError("n_points must be at least 2")
    x = np.linspace(0, 1, n_points + 2)[1:-1]
    return x, density(x, params)


def save_fig(fig: Figure, path: Union[str, Path], dpi: Optional[int] = None) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(path, dpi=dpi or settings.PLOT_DPI, bbox_inches="tight", facecolor="white")
    logger.info("Saved figure to %s", path)
    return path


def _draw(ax, curves: list[tuple[str, BetaParameters]], title: str) -> None:
    for i, (label, params) in enumerate(curves):
        x, y = density_curve(params)
        color = COLORS[i % len(COLORS)]
        ax.plot(x, y, color=color, linewidth=2, label=label)
        ax.fill_between(x, y, alpha=0.1, color=color)
    ax.set_title(title, fontsize=12, fontweight="bold")
    ax.set_xlabel("Proportion")
    ax.set_ylabel("Density")
    ax.spines["top"].set_visible(False)
    ax.spines["right"].set_visible(False)
    if curves:
        ax.legend(fontsize=9, loc="upper left")


def plot_density_comparison(
    shape_pairs: Iterable[tuple[float, float]] = (),
    mean_precision_pairs: Iterable[tuple[float, float]] = (),
    path: Optional[Union[str, Path]] = None,
) -> Figure:
    """Plot Beta densities side by side: shape form left, mean/precision right.

    Parameters
    ----------
    shape_pairs : iterable of (shape1, shape2)
        Curves for the left panel, labelled ``Beta(a, b)``.
    mean_precision_pairs : iterable of (mean, precision)
        Curves for the right panel, labelled ``mean = m, precision = p``.
    path : str | Path | None
        Where to save the figure; not saved when ``None``.

    Returns
    -------
    Figure
        The two-panel figure.
    """
    by_shape = [
        (f"Beta({a:g}, {b:g})", BetaParameters.from_shapes(a, b)) for a, b in shape_pairs
    ]
    by_mean = [
        (f"mean = {m:g}, precision = {p:g}", BetaParameters.from_mean_precision(m, p))
        for m, p in mean_precision_pairs
    ]
    if not by_shape and not by_mean:
        raise InvalidParameterError("Nothing to plot: no parameter sets given")

    fig = Figure(figsize=settings.PLOT_FIGSIZE)
    ax_shape, ax_mean = fig.subplots(1, 2, sharey=True)
    _draw(ax_shape, by_shape, "Shape parameters")
    _draw(ax_mean, by_mean, "Mean and precision")
    fig.tight_layout()

    if path is not None:
        save_fig(fig, path)
    return fig
