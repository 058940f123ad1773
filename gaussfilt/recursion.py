"""Predict and update steps of Gaussian filters."""
import logging
import numpy as np
from .belief import GaussianBelief
from .ekf import predict_ekf, update_ekf
from .filters import EKF, KF, UKF, AbstractFilter
from .linear import predict_kf, update_kf
from .ukf import predict_ukf, update_ukf
from .util import Bunch


logger = logging.getLogger(__name__)

_PREDICT = {KF: predict_kf, EKF: predict_ekf, UKF: predict_ukf}
_UPDATE = {KF: update_kf, EKF: update_ekf, UKF: update_ukf}


def _check_filter(filt):
    if not isinstance(filt, AbstractFilter) or filt.kind not in _PREDICT:
        raise TypeError("Expected KalmanFilter, ExtendedKalmanFilter or "
                        "UnscentedKalmanFilter, got {}".format(type(filt).__name__))


def predict(filt, belief, control=None):
    """Propagate the belief to the next epoch.

    Parameters
    ----------
    filt : AbstractFilter
        Filter defining the models and the algorithm.
    belief : GaussianBelief
        Belief at the current epoch.
    control : array_like, shape (n_controls,) or None, optional
        Control vector. None (default) means zero control for a linear model
        and is passed as is to a nonlinear transition function.

    Returns
    -------
    GaussianBelief
        Predicted belief at the next epoch.

    Raises
    ------
    DimensionMismatch
        If the belief or the control doesn't match the dynamics model.
    """
    _check_filter(filt)
    return _PREDICT[filt.kind](filt, belief, control)


def update(filt, belief, measurement, control=None):
    """Correct the belief with a measurement.

    Parameters
    ----------
    filt : AbstractFilter
        Filter defining the models and the algorithm.
    belief : GaussianBelief
        Prior belief.
    measurement : array_like, shape (n_meas,)
        Measurement vector.
    control : array_like, shape (n_controls,) or None, optional
        Control vector entering a linear observation model through ``D``.
        None (default) means no control.

    Returns
    -------
    GaussianBelief
        Posterior belief.

    Raises
    ------
    DimensionMismatch
        If the belief, the measurement or the control doesn't match the
        observation model.
    """
    _check_filter(filt)
    return _UPDATE[filt.kind](filt, belief, measurement, control)


def step(filt, belief, measurement=None, control=None, observation_control=None):
    """Update the belief with a measurement and predict it to the next epoch.

    The update is skipped if `measurement` is None. `control` is used for the
    prediction and `observation_control` for the update.
    """
    if measurement is not None:
        belief = update(filt, belief, measurement, observation_control)
    return predict(filt, belief, control)


def _per_epoch(values, n_epochs, name, n_required):
    if values is None:
        return [None] * n_epochs
    if len(values) < n_required:
        raise ValueError("`{}` must have at least {} elements, got {}".format(
            name, n_required, len(values)))
    return values


def run_filter(filt, belief, measurements, controls=None, observation_controls=None):
    """Run a filter over a sequence of epochs.

    At each epoch the belief is corrected with the measurement (if any) and then
    predicted to the next epoch. No prediction is done after the last epoch.

    Parameters
    ----------
    filt : AbstractFilter
        Filter to run.
    belief : GaussianBelief or tuple
        Prior belief at the first epoch, a tuple ``(mean, cov)`` is converted to
        `GaussianBelief`.
    measurements : sequence
        Measurement vector for each epoch, None elements mean no measurements.
        Its length determines the number of epochs.
    controls : sequence or None, optional
        Control vector used for the prediction from each epoch, None elements
        mean no control. Only the first ``n_epochs - 1`` elements are used, as
        there is no prediction from the last epoch. None (default) means no
        control at all epochs.
    observation_controls : sequence or None, optional
        Control vector entering the observation model at each epoch, with the
        same conventions as for `controls`.

    Returns
    -------
    Bunch object with the following fields:

        - x : ndarray, shape (n_epochs, n_states)
            Filter state estimates.
        - P : ndarray, shape (n_epochs, n_states, n_states)
            Filter error covariances.
        - beliefs : list of GaussianBelief
            Filter beliefs at each epoch.
    """
    _check_filter(filt)
    if not isinstance(belief, GaussianBelief):
        belief = GaussianBelief(*belief)
    n_epochs = len(measurements)
    controls = _per_epoch(controls, n_epochs, "controls", n_epochs - 1)
    observation_controls = _per_epoch(observation_controls, n_epochs,
                                      "observation_controls", n_epochs)

    logger.debug("Running %s for %d epochs", type(filt).__name__, n_epochs)
    beliefs = []
    for k in range(n_epochs):
        if measurements[k] is not None:
            belief = update(filt, belief, measurements[k], observation_controls[k])
        beliefs.append(belief)
        if k + 1 < n_epochs:
            belief = predict(filt, belief, controls[k])

    n_states = filt.n_states
    x = np.empty((n_epochs, n_states))
    P = np.empty((n_epochs, n_states, n_states))
    for k, b in enumerate(beliefs):
        x[k] = b.mean
        P[k] = b.cov.full()

    return Bunch(x=x, P=P, beliefs=beliefs)
