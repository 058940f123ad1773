"""Gaussian belief over the state."""
from dataclasses import dataclass
import numpy as np
from ._common import as_covariance, as_vector, frozen
from .errors import DimensionMismatch
from .symmetric import Symmetric


@dataclass(frozen=True, eq=False)
class GaussianBelief:
    """Gaussian belief consisting of a mean vector and a covariance matrix.

    The belief is a value: filtering operations return new instances and never
    modify existing ones.

    Parameters
    ----------
    mean : array_like, shape (n_states,)
        Mean vector.
    cov : array_like or Symmetric, shape (n_states, n_states)
        Covariance matrix. A plain matrix is wrapped into `Symmetric` using its
        upper triangle, its symmetry is not verified.
    """
    mean : np.ndarray
    cov : Symmetric

    def __post_init__(self):
        mean = frozen(as_vector(self.mean, "Mean"))
        cov = as_covariance(self.cov, "Covariance")
        if cov.shape[0] != len(mean):
            raise DimensionMismatch(
                "Mean of shape {} and covariance of shape {} are not "
                "matching".format(mean.shape, cov.shape))
        object.__setattr__(self, "mean", mean)
        object.__setattr__(self, "cov", cov)

    @property
    def n_states(self):
        return len(self.mean)

    @property
    def std(self):
        """Standard deviations of the state components."""
        return np.diag(self.cov.full()) ** 0.5

    def replace(self, mean=None, cov=None):
        """Return a new belief with `mean` and/or `cov` replaced."""
        return GaussianBelief(self.mean if mean is None else mean,
                              self.cov if cov is None else cov)

    def sample(self, size=None, rng=None):
        """Draw random states from the belief.

        Parameters
        ----------
        size : int, tuple or None, optional
            Number of samples. None (default) returns a single state vector.
        rng : None, int or `numpy.random.Generator`
            Seed or already created Generator.

        Returns
        -------
        ndarray, shape (n_states,) or (*size, n_states)
        """
        rng = np.random.default_rng(rng)
        return rng.multivariate_normal(self.mean, self.cov.full(), size=size)

    def __eq__(self, other):
        if not isinstance(other, GaussianBelief):
            return NotImplemented
        return (np.array_equal(self.mean, other.mean) and
                self.cov == other.cov)

    __hash__ = None
