class InvalidParameterError(ValueError):
    """Raised when a distribution parameter or input value is outside its domain.

    Subclasses ``ValueError`` so callers that already guard numeric input
    with ``except ValueError`` keep working.
    """
