"""Extended Kalman Filter."""
from .belief import GaussianBelief
from .linear import kalman_update
from ._common import check_belief, check_measurement


def predict_ekf(ekf, belief, control=None):
    """Propagate the belief through the dynamics model linearized at the mean.

    For a linear dynamics model the transition matrix is used as is.
    """
    d = ekf.d
    check_belief(belief, d.n_states)
    x = d.transition(belief.mean, control)
    F = d.jacobian(belief.mean, control)
    P = F @ belief.cov.full() @ F.T + d.W.full()
    return GaussianBelief(x, P)


def update_ekf(ekf, belief, measurement, control=None):
    """Correct the belief with the observation model linearized at the mean."""
    o = ekf.o
    check_belief(belief, ekf.n_states)
    z = check_measurement(measurement, o.n_measurements)
    e = z - o.measure(belief.mean, control)
    H = o.jacobian(belief.mean)
    x, P = kalman_update(belief.mean, belief.cov.full(), e, H, o.V.full())
    return GaussianBelief(x, P)
