"""Tests for environment-driven settings."""

from beyond_ols.core.config import Settings


def test_defaults():
    s = Settings(_env_file=None)
    assert s.DENSITY_GRID_POINTS == 500
    assert s.BOUNDARY_EPSILON == 0.001
    assert s.PLOT_DPI == 300
    assert s.PLOT_FIGSIZE == (10.0, 4.0)


def test_env_override(monkeypatch):
    monkeypatch.setenv("BEYOND_OLS_BOUNDARY_EPSILON", "0.01")
    monkeypatch.setenv("BEYOND_OLS_DENSITY_GRID_POINTS", "200")
    s = Settings(_env_file=None)
    assert s.BOUNDARY_EPSILON == 0.01
    assert s.DENSITY_GRID_POINTS == 200


def test_only_consumed_keys():
    assert set(Settings.model_fields) == {
        "DENSITY_GRID_POINTS",
        "BOUNDARY_EPSILON",
        "MC_SAMPLES",
        "PLOT_DPI",
        "PLOT_FIGSIZE",
    }
