"""Exceptions raised by the package."""


class FilterError(Exception):
    """Base class for all errors raised by gaussfilt."""


class DimensionMismatch(FilterError, ValueError):
    """Array dimensions are inconsistent with each other or with a model."""


class InvalidFilterComposition(FilterError, TypeError):
    """Filter built from a pair of models it is not intended for."""


class NonPositiveSemidefiniteCovariance(FilterError, ValueError):
    """Covariance matrix has a significantly negative eigenvalue."""
