"""Dynamics and observation models.

The models describe a discrete-time system of the form::

    x_{k + 1} = A x_k + B u_k + w_k     or     x_{k + 1} = f(x_k, u_k) + w_k
    z_k = C x_k + D u_k + v_k           or     z_k = h(x_k) + v_k

with zero-mean Gaussian noises ``w_k ~ N(0, W)`` and ``v_k ~ N(0, V)``.
Noise covariance matrices are always stored as `Symmetric`.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, fields
import logging
import numpy as np
from ._common import as_covariance, as_matrix, as_vector, check_rows, fields_equal
from .errors import DimensionMismatch
from .symmetric import Symmetric
from .util import approx_jacobian


logger = logging.getLogger(__name__)

LINEAR = "linear"
NONLINEAR = "nonlinear"


class _Model(ABC):
    kind = None

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return fields_equal(self, other, [field.name for field in fields(self)])

    def _check_output(self, value, size, name):
        value = np.asarray(value)
        if value.shape != (size,):
            raise DimensionMismatch(
                "{} returned an array of shape {}, expected ({},)".format(
                    name, value.shape, size))
        return value


class DynamicsModel(_Model):
    """Base class for linear and nonlinear dynamics models."""

    @property
    def n_states(self):
        return self.W.shape[0]

    @property
    def is_linear(self):
        return self.kind == LINEAR

    @abstractmethod
    def transition(self, x, u=None):
        """Compute the next state without process noise."""

    @abstractmethod
    def jacobian(self, x, u=None):
        """Compute the Jacobian of the transition with respect to the state."""


class ObservationModel(_Model):
    """Base class for linear and nonlinear observation models."""

    @property
    def n_measurements(self):
        return self.V.shape[0]

    @property
    def is_linear(self):
        return self.kind == LINEAR

    @abstractmethod
    def measure(self, x, u=None):
        """Compute the measurement without noise."""

    @abstractmethod
    def jacobian(self, x):
        """Compute the Jacobian of the measurement with respect to the state."""


@dataclass(frozen=True, eq=False)
class LinearDynamicsModel(DynamicsModel):
    """Linear dynamics model.

    Parameters
    ----------
    A : array_like, shape (n_states, n_states)
        Transition matrix.
    B : array_like, shape (n_states, n_controls)
        Control matrix.
    W : array_like or Symmetric, shape (n_states, n_states)
        Process noise covariance matrix. A plain matrix is wrapped into
        `Symmetric` using its upper triangle.
    """
    A : np.ndarray
    B : np.ndarray
    W : Symmetric

    kind = LINEAR

    def __post_init__(self):
        A = as_matrix(self.A, "A")
        B = as_matrix(self.B, "B")
        W = as_covariance(self.W, "W")
        check_rows(A=A, B=B, W=W)
        if A.shape[1] != A.shape[0]:
            raise DimensionMismatch(
                "A must be square, got shape {}".format(A.shape))
        object.__setattr__(self, "A", A)
        object.__setattr__(self, "B", B)
        object.__setattr__(self, "W", W)
        logger.debug("Created linear dynamics model with %d states and %d controls",
                     self.n_states, self.n_controls)

    @property
    def n_controls(self):
        return self.B.shape[1]

    def transition(self, x, u=None):
        x = as_vector(x, "State", self.n_states)
        if u is None:
            return self.A @ x
        u = as_vector(u, "Control", self.n_controls)
        return self.A @ x + self.B @ u

    def jacobian(self, x=None, u=None):
        return self.A


@dataclass(frozen=True, eq=False)
class NonlinearDynamicsModel(DynamicsModel):
    """Nonlinear dynamics model.

    Parameters
    ----------
    f : callable
        Transition function, must follow `gaussfilt.util.dynamics_callable`
        interface.
    W : array_like or Symmetric, shape (n_states, n_states)
        Process noise covariance matrix.
    jac : callable or None, optional
        Jacobian of `f` with respect to the state, must follow
        `gaussfilt.util.dynamics_jacobian_callable` interface. If None (default),
        the Jacobian is approximated by finite differences.
    """
    f : callable
    W : Symmetric
    jac : callable = None

    kind = NONLINEAR

    def __post_init__(self):
        if not callable(self.f):
            raise TypeError("`f` must be callable")
        if self.jac is not None and not callable(self.jac):
            raise TypeError("`jac` must be callable or None")
        object.__setattr__(self, "W", as_covariance(self.W, "W"))

    def transition(self, x, u=None):
        x = as_vector(x, "State", self.n_states)
        return self._check_output(self.f(x, u), self.n_states, "f")

    def jacobian(self, x, u=None):
        x = as_vector(x, "State", self.n_states)
        if self.jac is not None:
            F = np.asarray(self.jac(x, u))
        else:
            F = approx_jacobian(self.f, x, u)
        if F.shape != (self.n_states, self.n_states):
            raise DimensionMismatch(
                "Jacobian of f has shape {}, expected {}".format(
                    F.shape, (self.n_states, self.n_states)))
        return F


@dataclass(frozen=True, eq=False, init=False)
class LinearObservationModel(ObservationModel):
    """Linear observation model.

    Can be constructed as ``LinearObservationModel(C, D, V)`` or as
    ``LinearObservationModel(C, V)``. When `D` is omitted or None it is set to
    a zero matrix with shape ``(n_meas, n_meas)``, where ``n_meas`` is the
    number of rows in `C`.

    Parameters
    ----------
    C : array_like, shape (n_meas, n_states)
        Measurement matrix.
    D : array_like, shape (n_meas, n_controls) or None, optional
        Feed-forward matrix of the control.
    V : array_like or Symmetric, shape (n_meas, n_meas)
        Measurement noise covariance matrix.
    """
    C : np.ndarray
    D : np.ndarray
    V : Symmetric

    kind = LINEAR

    def __init__(self, C, D=None, V=None):
        C = as_matrix(C, "C")
        if V is None:
            D, V = None, D
        if V is None:
            raise TypeError("Measurement noise covariance `V` must be given")
        if D is None:
            D = np.zeros((C.shape[0], C.shape[0]), dtype=bool)
        D = as_matrix(D, "D")
        V = as_covariance(V, "V")
        check_rows(C=C, D=D, V=V)
        object.__setattr__(self, "C", C)
        object.__setattr__(self, "D", D)
        object.__setattr__(self, "V", V)
        logger.debug("Created linear observation model with %d measurements",
                     self.n_measurements)

    @property
    def n_states(self):
        return self.C.shape[1]

    @property
    def n_controls(self):
        return self.D.shape[1]

    def measure(self, x, u=None):
        x = as_vector(x, "State", self.n_states)
        if u is None:
            return self.C @ x
        u = as_vector(u, "Control", self.n_controls)
        return self.C @ x + self.D @ u

    def jacobian(self, x=None):
        return self.C


@dataclass(frozen=True, eq=False)
class NonlinearObservationModel(ObservationModel):
    """Nonlinear observation model.

    Parameters
    ----------
    h : callable
        Measurement function, must follow `gaussfilt.util.observation_callable`
        interface.
    V : array_like or Symmetric, shape (n_meas, n_meas)
        Measurement noise covariance matrix.
    jac : callable or None, optional
        Jacobian of `h`, must follow
        `gaussfilt.util.observation_jacobian_callable` interface. If None
        (default), the Jacobian is approximated by finite differences.
    """
    h : callable
    V : Symmetric
    jac : callable = None

    kind = NONLINEAR

    def __post_init__(self):
        if not callable(self.h):
            raise TypeError("`h` must be callable")
        if self.jac is not None and not callable(self.jac):
            raise TypeError("`jac` must be callable or None")
        object.__setattr__(self, "V", as_covariance(self.V, "V"))

    def measure(self, x, u=None):
        return self._check_output(self.h(np.asarray(x)), self.n_measurements, "h")

    def jacobian(self, x):
        x = np.asarray(x)
        if self.jac is not None:
            H = np.asarray(self.jac(x))
        else:
            H = approx_jacobian(self.h, x)
        if H.shape != (self.n_measurements, len(x)):
            raise DimensionMismatch(
                "Jacobian of h has shape {}, expected {}".format(
                    H.shape, (self.n_measurements, len(x))))
        return H
