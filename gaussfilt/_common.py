import numpy as np
from .config import get_options
from .errors import DimensionMismatch
from .symmetric import symmetrize
from .util import validate_covariance


def frozen(array):
    array = np.array(array)
    array.flags.writeable = False
    return array


def as_matrix(array, name):
    array = np.asarray(array)
    if array.ndim != 2:
        raise DimensionMismatch(
            "{} must be a 2-D matrix, got shape {}".format(name, array.shape))
    return frozen(array)


def as_vector(array, name, size=None):
    array = np.asarray(array)
    if array.ndim != 1:
        raise DimensionMismatch(
            "{} must be a 1-D vector, got shape {}".format(name, array.shape))
    if size is not None and len(array) != size:
        raise DimensionMismatch(
            "{} must have length {}, got {}".format(name, size, len(array)))
    return array


def as_covariance(matrix, name):
    matrix = symmetrize(matrix)
    if get_options().validate_psd:
        validate_covariance(name, matrix)
    return matrix


def check_rows(**arrays):
    rows = {name: np.shape(array)[0] for name, array in arrays.items()}
    if len(set(rows.values())) > 1:
        raise DimensionMismatch("First dimensions not matching: {}".format(
            ", ".join("{} has shape {}".format(name, np.shape(array))
                      for name, array in arrays.items())))
    return next(iter(rows.values()))


def fields_equal(a, b, names):
    for name in names:
        x = getattr(a, name)
        y = getattr(b, name)
        if callable(x) or callable(y):
            if x is not y:
                return False
        elif x is None or y is None:
            if x is not y:
                return False
        elif not np.array_equal(np.asarray(x), np.asarray(y)):
            return False
    return True


def check_belief(belief, n_states):
    if belief.n_states != n_states:
        raise DimensionMismatch(
            "Belief has {} states, the model has {}".format(belief.n_states, n_states))


def check_measurement(measurement, n_meas):
    return as_vector(measurement, "Measurement", n_meas)
