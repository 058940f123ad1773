"""Example of estimation problems."""
from dataclasses import dataclass
import numpy as np
from .belief import GaussianBelief
from .filters import KalmanFilter
from .models import (LinearDynamicsModel, LinearObservationModel,
                     NonlinearDynamicsModel, NonlinearObservationModel)


@dataclass
class LinearProblemExample:
    """Example of a linear estimation problem.

    Parameters
    ----------
    kf : KalmanFilter
        Filter with the linear models of the problem.
    prior : GaussianBelief
        Prior belief at the first epoch.
    n_epochs : int
        Number of epochs for estimation.
    measurements : ndarray, shape (n_epochs, n_meas)
        Measurement vectors.
    controls : ndarray, shape (n_epochs, n_controls)
        Known control vectors.
    xt : ndarray, shape (n_epochs, n_states)
        True state for each epoch.
    """
    kf : KalmanFilter
    prior : GaussianBelief
    n_epochs : int
    measurements : np.ndarray
    controls : np.ndarray
    xt : np.ndarray


@dataclass
class NonlinearProblemExample:
    """Example of a nonlinear estimation problem.

    Parameters
    ----------
    d : DynamicsModel
        Dynamics model.
    o : ObservationModel
        Observation model.
    prior : GaussianBelief
        Prior belief at the first epoch.
    n_epochs : int
        Number of epochs for estimation.
    measurements : ndarray, shape (n_epochs, n_meas)
        Measurement vectors.
    controls : ndarray, shape (n_epochs, n_controls) or None
        Known control vectors, None if the problem has no controls.
    xt : ndarray, shape (n_epochs, n_states)
        True state for each epoch.
    """
    d : object
    o : object
    prior : GaussianBelief
    n_epochs : int
    measurements : np.ndarray
    controls : np.ndarray
    xt : np.ndarray


def generate_linear_pendulum(
    n_epochs=1000,
    x0=np.array([1.0, 0.0]),
    P0=np.diag([0.1**2, 0.05**2]),
    tau=0.1,
    T=10.0,
    eta=0.1,
    qf=0.03,
    force=0.1,
    sigma_angle=0.2,
    sigma_rate=0.1,
    rng=0,
):
    """Generate data for an example of a linear pendulum with friction.

    The continuous system model is::

        dx1 / dt = x2
        dx2 / dt = -omega**2 * x1 - 2 * eta * omega * x2 + u + f

    with ``u`` being a known harmonic control force and ``f`` being an external
    force. It is discretized with a time step `tau`, the external force is
    modeled as a random white sequence.

    The measurements consist of both x1 and x2 (angle and angular rate).

    Parameters
    ----------
    n_epochs : int
        Number of epochs for simulation.
    x0 : array_like, shape (2,)
        Initial state.
    P0 : array_like, shape (2, 2)
        Initial state covariance.
    tau : float
        Time step in seconds.
    T : float
        Pendulum period in seconds.
    eta : float
        Dimensionless friction coefficient.
    qf : float
        Intensity of force process in rad/s/sqrt(s)
    force : float
        Amplitude of the control force in rad/s^2.
    sigma_angle : float
        Accuracy of angle measurements in rad.
    sigma_rate : float
        Accuracy of angular rate measurements in rad/s.
    rng : None, int or `numpy.random.Generator`
        Seed to create or already created Generator. None corresponds to
        nondeterministic seeding.

    Returns
    -------
    LinearProblemExample
    """
    rng = np.random.default_rng(rng)
    n_states = 2
    n_obs = 2

    x0 = np.asarray(x0)
    P0 = np.asarray(P0)
    xt = np.empty((n_epochs, n_states))
    xt[0] = rng.multivariate_normal(x0, P0)

    omega = 2 * np.pi / T
    A = np.array([[1, tau], [-(omega ** 2) * tau, 1 - 2 * eta * omega * tau]])
    B = np.array([[0], [tau]])
    W = np.array([[0, 0], [0, tau * qf**2]])
    u = force * np.sin(0.5 * omega * tau * np.arange(n_epochs))[:, None]

    V = np.diag([sigma_angle**2, sigma_rate**2])
    C = np.identity(n_obs)
    z = np.empty((n_epochs, n_obs))

    for i in range(n_epochs):
        z[i] = C @ xt[i] + rng.multivariate_normal(np.zeros(n_obs), V)
        if i + 1 < n_epochs:
            xt[i + 1] = A @ xt[i] + B @ u[i]
            xt[i + 1, 1] += rng.normal(0, W[1, 1] ** 0.5)

    kf = KalmanFilter(LinearDynamicsModel(A, B, W), LinearObservationModel(C, V))
    return LinearProblemExample(kf, GaussianBelief(x0, P0), n_epochs, z, u, xt)


def generate_linear_pendulum_as_nl_problem(
    n_epochs=1000,
    x0=np.array([1.0, 0.0]),
    P0=np.diag([0.1**2, 0.05**2]),
    tau=0.1,
    T=10.0,
    eta=0.1,
    qf=0.03,
    force=0.1,
    sigma_angle=0.2,
    sigma_rate=0.1,
    rng=0,
):
    """Generate data for an example of a linear pendulum with friction.

    This function returns the problem defined in `generate_linear_pendulum` with
    models given as functions, which can be used for testing and verification
    purposes.

    Returns
    -------
    NonlinearProblemExample
    """
    lin_problem = generate_linear_pendulum(n_epochs, x0, P0, tau, T, eta, qf, force,
                                           sigma_angle, sigma_rate, rng)
    d = lin_problem.kf.d
    o = lin_problem.kf.o

    def f(x, u=None):
        return d.transition(x, u)

    def f_jac(x, u=None):
        return d.A

    def h(x):
        return o.C @ x

    def h_jac(x):
        return o.C

    return NonlinearProblemExample(
        NonlinearDynamicsModel(f, d.W, f_jac), NonlinearObservationModel(h, o.V, h_jac),
        lin_problem.prior, lin_problem.n_epochs, lin_problem.measurements,
        lin_problem.controls, lin_problem.xt)


def generate_nonlinear_pendulum(
    n_epochs=1000,
    x0=np.array([0.5 * np.pi, 0]),
    P0=np.diag([0.1**2, 0.05**2]),
    tau=0.1,
    T=10.0,
    eta=0.5,
    xi=1.0,
    sigma_f=0.5,
    sigma_angle=0.1,
    analytic_jacobian=True,
    rng=0
):
    """Generate data for an example of a nonlinear pendulum with friction.

    The continuous time system model is::

        dx1 / dt = x2
        dx2 / dt = -omega**2 * sin(x1) - 2 * eta * omega * x2 * (1 + xi * x2**2) + f

    with ``f`` being an external force. It is discretized with a time step `tau`,
    the external force is modeled as a random white sequence.

    The measurements of ``sin(x1)`` are available.

    Parameters
    ----------
    n_epochs : int
        Number of epochs for simulation.
    x0 : array_like, shape (2,)
        Initial state.
    P0 : array_like, shape (2, 2)
        Initial state covariance.
    tau : float
        Time step in seconds.
    T : float
        Pendulum period in seconds.
    eta : float
        Dimensionless friction coefficient.
    xi : float
        Friction nonlinearity coefficient.
    sigma_f : float
        Standard deviation of external force sequence.
    sigma_angle : float
        Accuracy of angle measurements in rad.
    analytic_jacobian : bool
        Whether to supply analytic Jacobians to the models. Otherwise they are
        computed by finite differences.
    rng : None, int or `numpy.random.Generator`
        Seed to create or already created Generator. None corresponds to
        nondeterministic seeding.

    Returns
    -------
    NonlinearProblemExample
    """
    rng = np.random.default_rng(rng)
    omega = 2 * np.pi / T
    W = np.array([[0, 0], [0, (tau * sigma_f) ** 2]])
    V = np.array([[sigma_angle ** 2]])

    def f(x, u=None):
        return np.array([
            x[0] + tau * x[1],
            x[1] + tau * (-omega ** 2 * np.sin(x[0])
                          - 2 * eta * omega * x[1] * (1 + xi * x[1] ** 2))
        ])

    def f_jac(x, u=None):
        return np.array([
            [1, tau],
            [-tau * omega ** 2 * np.cos(x[0]),
             1 - 2 * tau * eta * omega * (1 + 3 * xi * x[1] ** 2)]
        ])

    def h(x):
        return np.array([np.sin(x[0])])

    def h_jac(x):
        return np.array([[np.cos(x[0]), 0]])

    x = rng.multivariate_normal(x0, P0)
    xt = np.empty((n_epochs, 2))
    z = np.empty((n_epochs, 1))

    for k in range(n_epochs):
        xt[k] = x
        z[k] = h(x) + rng.normal(0, sigma_angle)
        if k + 1 < n_epochs:
            x = f(x)
            x[1] += rng.normal(0, tau * sigma_f)

    if analytic_jacobian:
        d = NonlinearDynamicsModel(f, W, f_jac)
        o = NonlinearObservationModel(h, V, h_jac)
    else:
        d = NonlinearDynamicsModel(f, W)
        o = NonlinearObservationModel(h, V)

    return NonlinearProblemExample(d, o, GaussianBelief(x0, P0), n_epochs, z, None, xt)
