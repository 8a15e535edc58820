"""Beta parameterizations and densities for the "Go beyond OLS!" workshop."""

__version__ = "0.1.0"
