import numpy as np

from divisible.runtime import Policy, SliceIter
from divisible.runtime.dispatch import base_length, divide_at


@base_length.register(np.ndarray)
def array_length(value):
    if value.ndim == 0:
        # Scalar: broadcast to both halves.
        return None
    return value.shape[0]


@divide_at.register(np.ndarray)
def divide_array(value, index):
    if value.ndim == 0:
        return (value.copy(), value)
    (left, right) = np.split(value, [index])
    return (left, right)


def par_iter(array, blocks=None, policy=Policy.DEFAULT):
    """ Returns a parallel iterator over the rows of an array.

    Parameters
    ----------

    array : array_like
        converted with ``np.asarray``.
    blocks : iterable of int or None
        block sizes, see ``SliceIter``.
    policy : Policy
        scheduling hint.

    """
    return SliceIter(np.asarray(array), blocks, policy)
