"""Symmetric matrix stored as a single triangle."""
import numpy as np
from .errors import DimensionMismatch


class Symmetric:
    """Symmetric matrix defined by one of its triangles.

    Only the upper (or lower) triangle of `data` is stored, the other triangle
    is ignored. Reading the matrix returns the stored triangle mirrored across
    the diagonal, thus the result is symmetric by construction. The symmetry
    of `data` itself is not verified.

    Parameters
    ----------
    data : array_like, shape (n, n)
        Square matrix, only its `uplo` triangle is used.
    uplo : {'U', 'L'}, optional
        Which triangle to use. Default is 'U'.
    """
    __array_ufunc__ = None

    def __init__(self, data, uplo='U'):
        if isinstance(data, Symmetric):
            uplo = data.uplo
            data = data.data
        if uplo not in ('U', 'L'):
            raise ValueError("`uplo` must be 'U' or 'L'")
        data = np.asarray(data)
        if data.ndim != 2 or data.shape[0] != data.shape[1]:
            raise DimensionMismatch(
                "Symmetric matrix must be square, got shape {}".format(data.shape))
        data = np.triu(data) if uplo == 'U' else np.tril(data)
        data.flags.writeable = False
        self._data = data
        self._uplo = uplo

    @property
    def data(self):
        """Stored triangle, the other triangle is filled with zeros."""
        return self._data

    @property
    def uplo(self):
        return self._uplo

    @property
    def shape(self):
        return self._data.shape

    @property
    def dtype(self):
        return self._data.dtype

    @property
    def T(self):
        return self

    def full(self):
        """Return the full dense matrix as a new ndarray."""
        if self._uplo == 'U':
            return self._data + np.triu(self._data, 1).T
        return self._data + np.tril(self._data, -1).T

    def __array__(self, dtype=None, copy=None):
        result = self.full()
        if dtype is not None:
            result = result.astype(dtype)
        return result

    def __len__(self):
        return len(self._data)

    def __getitem__(self, index):
        return self.full()[index]

    def __eq__(self, other):
        if isinstance(other, Symmetric):
            other = other.full()
        elif not isinstance(other, np.ndarray):
            return NotImplemented
        return np.array_equal(self.full(), other)

    __hash__ = None

    def __matmul__(self, other):
        return self.full() @ np.asarray(other)

    def __rmatmul__(self, other):
        return np.asarray(other) @ self.full()

    def __add__(self, other):
        return self.full() + np.asarray(other)

    __radd__ = __add__

    def __sub__(self, other):
        return self.full() - np.asarray(other)

    def __rsub__(self, other):
        return np.asarray(other) - self.full()

    def __mul__(self, other):
        return self.full() * other

    __rmul__ = __mul__

    def __repr__(self):
        return "Symmetric({!r})".format(self.full())


def symmetrize(matrix, uplo='U'):
    """Wrap `matrix` into `Symmetric` unless it already is one."""
    if isinstance(matrix, Symmetric):
        return matrix
    return Symmetric(matrix, uplo)
