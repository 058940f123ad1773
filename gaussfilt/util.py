"""Utility functions."""
import numpy as np
from scipy import linalg
from .config import get_options
from .errors import NonPositiveSemidefiniteCovariance


EPS = np.finfo(float).eps


class Bunch(dict):
    def __getattr__(self, name):
        try:
            return self[name]
        except KeyError:
            raise AttributeError(name)

    __setattr__ = dict.__setitem__
    __delattr__ = dict.__delitem__

    def __repr__(self):
        if self.keys():
            m = max(map(len, list(self.keys()))) + 1
            return '\n'.join(['{}: {}'.format(k.rjust(m), type(v))
                              for k, v in self.items()])
        else:
            return self.__class__.__name__ + "()"

    def __dir__(self):
        return list(self.keys())


def compute_rms(data):
    """Compute root-mean-square of data along 0 axis."""
    return np.mean(np.square(data), axis=0) ** 0.5


def approx_jacobian(fun, x, *args, rel_step=None):
    """Approximate Jacobian of a vector function by central differences.

    Parameters
    ----------
    fun : callable
        Function called as ``fun(x, *args)`` and returning a vector.
    x : array_like, shape (n,)
        Point at which the Jacobian is computed.
    args
        Extra arguments passed to `fun`.
    rel_step : float or None, optional
        Relative step size. The absolute step for each component is
        ``rel_step * max(1, abs(x[i]))``. If None (default), the value from
        `gaussfilt.config` is used, or ``EPS ** (1/3)`` if it's not set either.

    Returns
    -------
    J : ndarray, shape (m, n)
        Jacobian matrix, m is the length of the output of `fun`.
    """
    x = np.asarray(x, dtype=float)
    if rel_step is None:
        rel_step = get_options().jacobian_step
    if rel_step is None:
        rel_step = EPS ** (1 / 3)

    step = rel_step * np.maximum(1.0, np.abs(x))
    columns = []
    for i in range(len(x)):
        dx = np.zeros_like(x)
        dx[i] = step[i]
        df = np.asarray(fun(x + dx, *args)) - np.asarray(fun(x - dx, *args))
        columns.append(df / (2 * step[i]))
    return np.column_stack(columns)


def validate_covariance(name, cov, tol=None):
    """Check that a covariance matrix is positive semi-definite.

    Parameters
    ----------
    name : str
        Name of the matrix used in the error message.
    cov : array_like or Symmetric, shape (n, n)
        Covariance matrix.
    tol : float or None, optional
        Eigenvalues greater than ``-tol`` are accepted. If None (default), the
        value from `gaussfilt.config` is used.

    Raises
    ------
    NonPositiveSemidefiniteCovariance
        If the smallest eigenvalue is less than ``-tol``.
    """
    if tol is None:
        tol = get_options().psd_tolerance
    cov = np.asarray(cov, dtype=float)
    if cov.size == 0:
        return
    min_eigenvalue = linalg.eigvalsh(cov)[0]
    if min_eigenvalue < -tol:
        raise NonPositiveSemidefiniteCovariance(
            "{} of shape {} is not positive semi-definite, minimum eigenvalue "
            "is {:.3e}".format(name, cov.shape, min_eigenvalue))


def dynamics_callable(x, u=None):
    """Dynamics callable interface.

    This function stub is included to conveniently describe the expected interface
    of transition functions (denoted as ``f``) used by `NonlinearDynamicsModel`.

    Parameters
    ----------
    x : ndarray, shape (n_states,)
        State vector.
    u : ndarray, shape (n_controls,) or None, optional
        Control vector. If None (default) must be interpreted as no control.

    Returns
    -------
    x_next : ndarray, shape (n_states,)
        Computed value of ``f(x, u)`` without the process noise.
    """
    pass


def dynamics_jacobian_callable(x, u=None):
    """Dynamics Jacobian callable interface.

    Parameters
    ----------
    x : ndarray, shape (n_states,)
        State vector.
    u : ndarray, shape (n_controls,) or None, optional
        Control vector.

    Returns
    -------
    F : ndarray, shape (n_states, n_states)
        Jacobian of ``f`` with respect to ``x``.
    """
    pass


def observation_callable(x):
    """Observation callable interface.

    This function stub is included to conveniently describe the expected interface
    of measurement functions (denoted as ``h``) used by `NonlinearObservationModel`.

    Parameters
    ----------
    x : ndarray, shape (n_states,)
        State vector.

    Returns
    -------
    z : ndarray, shape (n_meas,)
        Computed value of ``h(x)`` without the measurement noise.
    """
    pass


def observation_jacobian_callable(x):
    """Observation Jacobian callable interface.

    Parameters
    ----------
    x : ndarray, shape (n_states,)
        State vector.

    Returns
    -------
    H : ndarray, shape (n_meas, n_states)
        Jacobian of ``h`` with respect to ``x``.
    """
    pass
