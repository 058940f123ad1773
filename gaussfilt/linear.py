"""Linear Kalman filter."""
import numpy as np
from scipy import linalg
from .belief import GaussianBelief
from ._common import check_belief, check_measurement


def kalman_update(x, P, e, H, R):
    """Kalman correction of the state with the innovation vector.

    The covariance is updated in the Joseph form, which keeps it symmetric and
    positive semi-definite in the presence of rounding errors.

    Parameters
    ----------
    x : ndarray, shape (n_states,)
        Prior state mean.
    P : ndarray, shape (n_states, n_states)
        Prior state covariance.
    e : ndarray, shape (n_meas,)
        Innovation, i.e. measurement minus predicted measurement.
    H : ndarray, shape (n_meas, n_states)
        Measurement matrix or measurement Jacobian.
    R : ndarray, shape (n_meas, n_meas)
        Measurement noise covariance.

    Returns
    -------
    x : ndarray, shape (n_states,)
        Posterior state mean.
    P : ndarray, shape (n_states, n_states)
        Posterior state covariance.
    """
    S = H @ P @ H.T + R
    K = linalg.cho_solve(linalg.cho_factor(S), H @ P).T
    U = np.eye(len(x)) - K @ H
    return x + K @ e, U @ P @ U.T + K @ R @ K.T


def predict_kf(kf, belief, control=None):
    d = kf.d
    check_belief(belief, d.n_states)
    x = d.transition(belief.mean, control)
    P = d.A @ belief.cov.full() @ d.A.T + d.W.full()
    return GaussianBelief(x, P)


def update_kf(kf, belief, measurement, control=None):
    o = kf.o
    check_belief(belief, o.n_states)
    z = check_measurement(measurement, o.n_measurements)
    e = z - o.measure(belief.mean, control)
    x, P = kalman_update(belief.mean, belief.cov.full(), e, o.C, o.V.full())
    return GaussianBelief(x, P)
