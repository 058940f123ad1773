import numpy as np
from numpy.testing import assert_allclose, assert_array_equal
import pytest
from gaussfilt import (DimensionMismatch, LinearDynamicsModel, LinearObservationModel,
                       NonlinearDynamicsModel, NonlinearObservationModel, Symmetric)


A = np.array([[1.0, 0.1], [0.0, 1.0]])
B = np.array([[0.0], [0.1]])
W = np.array([[0.01, 0.002], [0.002, 0.02]])
C = np.array([[1.0, 0.0]])
V = np.array([[0.25]])


def test_linear_dynamics():
    d = LinearDynamicsModel(A, B, W)
    assert isinstance(d.W, Symmetric)
    assert_array_equal(d.W.full(), d.W.full().T)
    assert_array_equal(d.W.full(), W)
    assert d.n_states == 2
    assert d.n_controls == 1
    assert d.is_linear
    assert_allclose(d.transition([1.0, 2.0], [3.0]), A @ [1.0, 2.0] + B @ [3.0])
    assert_allclose(d.transition([1.0, 2.0]), A @ [1.0, 2.0])
    assert d.jacobian([1.0, 2.0]) is d.A


def test_linear_dynamics_dimension_mismatch():
    with pytest.raises(DimensionMismatch, match=r"\(3, 3\)"):
        LinearDynamicsModel(np.array([[1, 0], [0, 1]]), np.zeros((2, 1)), np.eye(3))
    with pytest.raises(DimensionMismatch):
        LinearDynamicsModel(A, np.zeros((3, 1)), W)
    with pytest.raises(DimensionMismatch):
        LinearDynamicsModel(np.ones((2, 3)), np.zeros((2, 1)), W)

    d = LinearDynamicsModel(A, B, W)
    with pytest.raises(DimensionMismatch):
        d.transition([1.0, 2.0], [1.0, 2.0])
    with pytest.raises(DimensionMismatch):
        d.transition([1.0, 2.0, 3.0])


def test_linear_observation_default_feedforward():
    for k in [1, 2, 3]:
        Ck = np.ones((k, 4))
        o = LinearObservationModel(Ck, np.eye(k))
        assert o.D.shape == (k, k)
        assert not np.any(o.D)
        assert o.n_measurements == k
        assert o.n_states == 4

        assert LinearObservationModel(Ck, V=np.eye(k)) == o
        assert LinearObservationModel(Ck, None, np.eye(k)) == o
        assert LinearObservationModel(Ck, D=None, V=np.eye(k)) == o

    with pytest.raises(TypeError):
        LinearObservationModel(C)
    with pytest.raises(TypeError):
        LinearObservationModel(C, None, None)


def test_linear_observation():
    D = np.array([[0.5]])
    o = LinearObservationModel(C, D, V)
    assert isinstance(o.V, Symmetric)
    assert_allclose(o.measure([1.0, 2.0], [2.0]), [2.0])
    assert_allclose(o.measure([1.0, 2.0]), [1.0])
    assert o.jacobian() is o.C

    with pytest.raises(DimensionMismatch):
        LinearObservationModel(C, np.zeros((2, 1)), V)
    with pytest.raises(DimensionMismatch):
        LinearObservationModel(C, np.eye(2))


def test_plain_and_symmetric_covariance_agree():
    assert LinearDynamicsModel(A, B, W) == LinearDynamicsModel(A, B, Symmetric(W))
    assert LinearObservationModel(C, V) == LinearObservationModel(C, Symmetric(V))


def test_round_trip():
    d = LinearDynamicsModel(A, B, W)
    assert LinearDynamicsModel(d.A, d.B, d.W) == d
    o = LinearObservationModel(C, V)
    assert LinearObservationModel(o.C, o.D, o.V) == o

    def f(x, u=None):
        return np.sin(x)

    def h(x):
        return x[:1]

    nd = NonlinearDynamicsModel(f, W)
    assert NonlinearDynamicsModel(nd.f, nd.W, nd.jac) == nd
    assert NonlinearDynamicsModel(lambda x, u=None: x, W) != nd
    no = NonlinearObservationModel(h, V)
    assert NonlinearObservationModel(no.h, no.V) == no


def test_models_are_immutable():
    d = LinearDynamicsModel(A, B, W)
    with pytest.raises(AttributeError):
        d.A = np.eye(2)
    with pytest.raises(ValueError):
        d.A[0, 0] = 2.0
    o = LinearObservationModel(C, V)
    with pytest.raises(AttributeError):
        o.C = C


def test_nonlinear_dynamics():
    def f(x, u=None):
        return np.array([x[0] + 0.1 * x[1], np.sin(x[0])])

    def jac(x, u=None):
        return np.array([[1.0, 0.1], [np.cos(x[0]), 0.0]])

    x = np.array([0.3, -0.2])
    d = NonlinearDynamicsModel(f, W)
    assert not d.is_linear
    assert d.n_states == 2
    assert_allclose(d.transition(x), f(x))
    assert_allclose(d.jacobian(x), jac(x), rtol=1e-8, atol=1e-10)
    d_jac = NonlinearDynamicsModel(f, W, jac)
    assert_array_equal(d_jac.jacobian(x), jac(x))

    d_bad = NonlinearDynamicsModel(lambda x, u=None: x[:1], W)
    with pytest.raises(DimensionMismatch):
        d_bad.transition(x)

    with pytest.raises(TypeError):
        NonlinearDynamicsModel(np.eye(2), W)


def test_nonlinear_observation():
    def h(x):
        return np.array([np.hypot(x[0], x[1])])

    x = np.array([3.0, 4.0])
    o = NonlinearObservationModel(h, V)
    assert o.n_measurements == 1
    assert_allclose(o.measure(x), [5.0])
    assert_allclose(o.jacobian(x), [[0.6, 0.8]], rtol=1e-8)

    o_bad = NonlinearObservationModel(lambda x: x, V)
    with pytest.raises(DimensionMismatch):
        o_bad.measure(x)
