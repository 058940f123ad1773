"""Unscented Kalman Filter."""
import logging
import numpy as np
from scipy import linalg
from .belief import GaussianBelief
from ._common import check_belief, check_measurement


logger = logging.getLogger(__name__)


def sigma_weights(n_states, lam, alpha=1, beta=0):
    """Compute weights of sigma-points.

    Parameters
    ----------
    n_states : int
        Number of states.
    lam : float
        Spread parameter, ``n_states + lam`` must be positive.
    alpha, beta : float, optional
        Parameters adjusting the weight of the central point in the covariance
        estimate. Default are 1 and 0 which make the mean and covariance weights
        equal.

    Returns
    -------
    w_mean : ndarray, shape (2 * n_states + 1,)
        Weights to compute the sample mean.
    w_cov : ndarray, shape (2 * n_states + 1,)
        Weights to compute the sample covariance.
    """
    c = n_states + lam
    if c <= 0:
        raise ValueError("`n_states + lam` must be positive, got {}".format(c))
    w_mean = np.full(2 * n_states + 1, 0.5 / c)
    w_mean[0] = lam / c
    w_cov = w_mean.copy()
    w_cov[0] += 1 - alpha ** 2 + beta
    return w_mean, w_cov


def generate_sigma_points(mean, cov, lam):
    """Generate sigma-points which represent a given mean and covariance.

    The points are ``mean`` and ``mean +- (n + lam)**0.5 * s``, where ``s`` is
    a column of the root-covariance matrix computed from the eigen decomposition.
    The negative eigenvalues are replaced by zeros, which makes the algorithm
    robust for marginally indefinite (due to rounding errors) matrices.

    Parameters
    ----------
    mean : ndarray, shape (n,)
        Mean vector.
    cov : array_like, shape (n, n)
        Covariance matrix.
    lam : float
        Spread parameter.

    Returns
    -------
    sigma_points : ndarray, shape (2 * n + 1, n)
        Generated sigma-points, the first one is `mean`.
    """
    n_states = len(mean)
    s, V = linalg.eigh(np.asarray(cov, dtype=float))
    negative = s < 0
    if np.any(negative):
        logger.debug("Clipped %d negative eigenvalues, minimum is %.3e",
                     np.sum(negative), s.min())
        s[negative] = 0
    root = (n_states + lam) ** 0.5 * (V * s ** 0.5).T
    return np.vstack((mean, mean + root, mean - root))


def unscented_transform(points, w_mean, w_cov, noise_cov=None):
    """Compute weighted mean and covariance of transformed sigma-points.

    Parameters
    ----------
    points : ndarray, shape (n_points, m)
        Transformed sigma-points.
    w_mean, w_cov : ndarray, shape (n_points,)
        Weights from `sigma_weights`.
    noise_cov : array_like, shape (m, m) or None, optional
        Additive noise covariance.

    Returns
    -------
    mean : ndarray, shape (m,)
    cov : ndarray, shape (m, m)
    deviations : ndarray, shape (n_points, m)
        Points minus the mean.
    """
    mean = w_mean @ points
    deviations = points - mean
    cov = (w_cov * deviations.T) @ deviations
    if noise_cov is not None:
        cov = cov + noise_cov
    return mean, cov, deviations


def predict_ukf(ukf, belief, control=None):
    """Propagate sigma-points of the belief through the dynamics model."""
    d = ukf.d
    check_belief(belief, d.n_states)
    w_mean, w_cov = sigma_weights(d.n_states, ukf.lam, ukf.alpha, ukf.beta)
    points = generate_sigma_points(belief.mean, belief.cov.full(), ukf.lam)
    X = np.asarray([d.transition(point, control) for point in points])
    x, P, _ = unscented_transform(X, w_mean, w_cov, d.W.full())
    return GaussianBelief(x, P)


def update_ukf(ukf, belief, measurement, control=None):
    """Correct the belief using sigma-points pushed through the observation model."""
    o = ukf.o
    check_belief(belief, ukf.n_states)
    z = check_measurement(measurement, o.n_measurements)
    w_mean, w_cov = sigma_weights(belief.n_states, ukf.lam, ukf.alpha, ukf.beta)
    P = belief.cov.full()
    points = generate_sigma_points(belief.mean, P, ukf.lam)
    Z = np.asarray([o.measure(point, control) for point in points])
    z_pred, S, Z_dev = unscented_transform(Z, w_mean, w_cov, o.V.full())
    X_dev = points - belief.mean
    P_xz = (w_cov * X_dev.T) @ Z_dev
    K = linalg.cho_solve(linalg.cho_factor(S), P_xz.T).T
    return GaussianBelief(belief.mean + K @ (z - z_pred), P - K @ S @ K.T)
