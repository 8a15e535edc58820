from beyond_ols.viz.densities import density_curve, plot_density_comparison

__all__ = ["density_curve", "plot_density_comparison"]
