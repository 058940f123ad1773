"""gaussfilt: Gaussian filters for discrete-time dynamic systems.

The package contains models and recursive estimation algorithms for discrete-time
stochastic systems of the form::

    x_{k + 1} = f(x_k, u_k) + w_k
    z_k = h(x_k) + v_k

Where

    - k   - integer epoch index
    - x_k - state vector
    - u_k - control vector
    - w_k - process noise vector with covariance W
    - z_k - measurement vector
    - v_k - measurement noise vector with covariance V
    - f   - transition function, ``A x + B u`` for a linear system
    - h   - measurement function, ``C x + D u`` for a linear system

The system is described by a dynamics model and an observation model (see
`gaussfilt.models`), which are combined into a filter: `KalmanFilter` for linear
models, `ExtendedKalmanFilter` or `UnscentedKalmanFilter` when at least one of the
models is nonlinear. The state estimate is represented by `GaussianBelief` and
advanced with `predict` and `update` functions, each returning a new belief.

Nonlinear functions must follow `gaussfilt.util.dynamics_callable` and
`gaussfilt.util.observation_callable` signatures. Refer to `gaussfilt.examples`
for examples of correctly defined problems.

References
----------
.. [1] S. Thrun, W. Burgard, D. Fox, "Probabilistic Robotics"
.. [2] J. L. Crassidis, J. L. Junkins, "Optimal Estimation of Dynamic Systems",
   2nd edition
"""
import logging
from . import examples, util
from .belief import GaussianBelief
from .config import get_options, options, set_options
from .errors import (DimensionMismatch, FilterError, InvalidFilterComposition,
                     NonPositiveSemidefiniteCovariance)
from .filters import (AbstractFilter, ExtendedKalmanFilter, KalmanFilter,
                      UnscentedKalmanFilter)
from .models import (DynamicsModel, LinearDynamicsModel, LinearObservationModel,
                     NonlinearDynamicsModel, NonlinearObservationModel,
                     ObservationModel)
from .recursion import predict, run_filter, step, update
from .symmetric import Symmetric, symmetrize

logging.getLogger(__name__).addHandler(logging.NullHandler())
