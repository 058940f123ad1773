"""Package options.

Options are kept in a context variable, so changes made in one thread (or
asyncio task) are not seen by the others.
"""
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, fields, replace


@dataclass(frozen=True)
class Options:
    """Options affecting validation and numerical details.

    Parameters
    ----------
    validate_psd : bool
        Whether to check covariance matrices for positive semi-definiteness when
        models and beliefs are constructed. Default is False, i.e. the caller is
        trusted.
    psd_tolerance : float
        Eigenvalues greater than ``-psd_tolerance`` are accepted as non-negative.
    jacobian_step : float or None
        Relative step for finite difference Jacobians. None (default) selects
        the step from the machine epsilon.
    """
    validate_psd : bool = False
    psd_tolerance : float = 1e-10
    jacobian_step : float = None


_options = ContextVar("gaussfilt_options", default=Options())


def get_options():
    """Return the current `Options`."""
    return _options.get()


def set_options(**kwargs):
    """Set options by name and return the previous `Options`."""
    names = {field.name for field in fields(Options)}
    unknown = set(kwargs) - names
    if unknown:
        raise ValueError("Unknown options: {}".format(", ".join(sorted(unknown))))
    previous = _options.get()
    _options.set(replace(previous, **kwargs))
    return previous


@contextmanager
def options(**kwargs):
    """Temporarily set options within a ``with`` block."""
    previous = set_options(**kwargs)
    try:
        yield _options.get()
    finally:
        _options.set(previous)
