import numpy as np
from numpy.testing import assert_allclose
import pytest
from gaussfilt import ukf
from scipy.spatial.transform import Rotation


def test_sigma_weights():
    for n_states in [1, 2, 5]:
        for lam in [-0.5, 0.5, 2, 3 - n_states + 1]:
            w_mean, w_cov = ukf.sigma_weights(n_states, lam)
            assert len(w_mean) == 2 * n_states + 1
            assert_allclose(np.sum(w_mean), 1.0, rtol=1e-14)
            assert_allclose(w_cov, w_mean)

    w_mean, w_cov = ukf.sigma_weights(3, 1, alpha=0.5, beta=2)
    assert_allclose(w_cov[0] - w_mean[0], 1 - 0.25 + 2)
    assert_allclose(w_cov[1:], w_mean[1:])

    with pytest.raises(ValueError):
        ukf.sigma_weights(2, -2)


def test_generate_sigma_points():
    R = Rotation.random().as_matrix()
    eigenvalues = np.array([0.1, 1.0, 2.0])
    P1 = R @ np.diag(eigenvalues) @ R.transpose()
    P1_expected = P1

    eigenvalues[0] = -0.01
    P2 = R @ np.diag(eigenvalues) @ R.transpose()

    eigenvalues[0] = 0.0
    P2_expected = R @ np.diag(eigenvalues) @ R.transpose()

    mean = np.array([1.0, -2.0, 0.5])
    for P, P_expected in [(P1, P1_expected), (P2, P2_expected)]:
        for lam in [0.5, 2.0, 5.0]:
            w_mean, w_cov = ukf.sigma_weights(3, lam)
            sigma_points = ukf.generate_sigma_points(mean, P, lam)
            assert sigma_points.shape == (7, 3)
            assert_allclose(sigma_points[0], mean)
            x, cov, deviations = ukf.unscented_transform(sigma_points, w_mean, w_cov)
            assert_allclose(x, mean, rtol=1e-14)
            assert_allclose(cov, P_expected, rtol=1e-12, atol=1e-14)
            assert_allclose(deviations, sigma_points - mean, atol=1e-14)


def test_unscented_transform_of_linear_function():
    A = np.array([[1.0, 2.0], [0.0, 3.0], [1.0, -1.0]])
    mean = np.array([0.5, -0.5])
    P = np.array([[2.0, 0.3], [0.3, 1.0]])
    Q = np.eye(3) * 0.1
    w_mean, w_cov = ukf.sigma_weights(2, 2)
    points = ukf.generate_sigma_points(mean, P, 2)
    x, cov, _ = ukf.unscented_transform(points @ A.T, w_mean, w_cov, Q)
    assert_allclose(x, A @ mean)
    assert_allclose(cov, A @ P @ A.T + Q)
