"""Gaussian filters composed of a dynamics model and an observation model."""
import logging
from .errors import DimensionMismatch, InvalidFilterComposition
from .models import (DynamicsModel, LinearDynamicsModel, LinearObservationModel,
                     ObservationModel)


logger = logging.getLogger(__name__)

KF = "kf"
EKF = "ekf"
UKF = "ukf"


def _check_models(d, o):
    if not isinstance(d, DynamicsModel):
        raise TypeError("`d` must be a DynamicsModel, got {}".format(type(d).__name__))
    if not isinstance(o, ObservationModel):
        raise TypeError("`o` must be an ObservationModel, got {}".format(
            type(o).__name__))
    if isinstance(o, LinearObservationModel) and o.n_states != d.n_states:
        raise DimensionMismatch(
            "Observation matrix C of shape {} doesn't match {} states of the "
            "dynamics model".format(o.C.shape, d.n_states))


def _reject_linear_pair(d, o, name):
    if isinstance(d, LinearDynamicsModel) and isinstance(o, LinearObservationModel):
        raise InvalidFilterComposition(
            "{} got linear models ({}, {}): use KalmanFilter instead".format(
                name, type(d).__name__, type(o).__name__))


class AbstractFilter:
    """Base class for discrete Gaussian filters.

    Filters are immutable after construction, the models can be accessed as
    `d` and `o`.
    """
    kind = None
    __slots__ = ('_d', '_o')

    def __init__(self, d, o):
        _check_models(d, o)
        self._d = d
        self._o = o
        logger.debug("Created %s with %s and %s", type(self).__name__,
                     type(d).__name__, type(o).__name__)

    @property
    def d(self):
        """Dynamics model."""
        return self._d

    @property
    def o(self):
        """Observation model."""
        return self._o

    @property
    def n_states(self):
        return self._d.n_states

    def __setattr__(self, name, value):
        if hasattr(self, '_o'):
            raise AttributeError("{} is immutable".format(type(self).__name__))
        object.__setattr__(self, name, value)

    def _params(self):
        return ()

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return (self.d == other.d and self.o == other.o and
                self._params() == other._params())

    __hash__ = None

    def __repr__(self):
        params = "".join(", {}".format(p) for p in self._params())
        return "{}({!r}, {!r}{})".format(type(self).__name__, self.d, self.o, params)


class KalmanFilter(AbstractFilter):
    """Kalman filter with linear dynamics and observation models.

    Parameters
    ----------
    d : LinearDynamicsModel
        Dynamics model.
    o : LinearObservationModel
        Observation model.
    """
    kind = KF
    __slots__ = ()

    def __init__(self, d, o):
        if not isinstance(d, LinearDynamicsModel):
            raise InvalidFilterComposition(
                "KalmanFilter requires LinearDynamicsModel, got {}".format(
                    type(d).__name__))
        if not isinstance(o, LinearObservationModel):
            raise InvalidFilterComposition(
                "KalmanFilter requires LinearObservationModel, got {}".format(
                    type(o).__name__))
        super().__init__(d, o)


class ExtendedKalmanFilter(AbstractFilter):
    """Extended Kalman filter.

    At least one of the models must be nonlinear, for a pair of linear models
    use `KalmanFilter`.

    Parameters
    ----------
    d : DynamicsModel
        Dynamics model.
    o : ObservationModel
        Observation model.
    """
    kind = EKF
    __slots__ = ()

    def __init__(self, d, o):
        _reject_linear_pair(d, o, "ExtendedKalmanFilter")
        super().__init__(d, o)


class UnscentedKalmanFilter(AbstractFilter):
    """Unscented Kalman filter.

    The sigma points are parameterized as in [1]_: `lam` controls the spread
    of the points, `alpha` and `beta` affect the weight of the central point in
    the covariance estimate. The default ``lam=2, alpha=1, beta=0`` is the
    commonly used setting. The parameters are stored as given.

    At least one of the models must be nonlinear, for a pair of linear models
    use `KalmanFilter`.

    Parameters
    ----------
    d : DynamicsModel
        Dynamics model.
    o : ObservationModel
        Observation model.
    lam : number, optional
        Spread of the sigma points. Default is 2.
    alpha : number, optional
        Scaling parameter. Default is 1.
    beta : number, optional
        Prior knowledge parameter. Default is 0.

    References
    ----------
    .. [1] S. Thrun, W. Burgard, D. Fox, "Probabilistic Robotics", section 3.4
    """
    kind = UKF
    __slots__ = ('_lam', '_alpha', '_beta')

    def __init__(self, d, o, lam=2, alpha=1, beta=0):
        _reject_linear_pair(d, o, "UnscentedKalmanFilter")
        object.__setattr__(self, '_lam', lam)
        object.__setattr__(self, '_alpha', alpha)
        object.__setattr__(self, '_beta', beta)
        super().__init__(d, o)
        if self.n_states + lam <= 0:
            raise ValueError(
                "`lam` must be greater than -n_states = {}, got {}".format(
                    -self.n_states, lam))

    @property
    def lam(self):
        return self._lam

    @property
    def alpha(self):
        return self._alpha

    @property
    def beta(self):
        return self._beta

    def _params(self):
        return self._lam, self._alpha, self._beta
