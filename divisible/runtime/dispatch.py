"""
Divisibility of values that do not implement the protocol themselves.

Generated code calls ``base_length`` and ``divide_at`` on every recursively
divided field, so fields may hold builtin sequences as well as divisible
records. Other libraries register their types with the ``register`` method of
these functions (see ``divisible.annotated``).
"""

from functools import singledispatch

from .protocols import Divisible


@singledispatch
def base_length(value):
    """ Returns the number of elements of a value, or ``None`` if unbounded. """
    method = getattr(value, "base_length", None)
    if method is None:
        raise TypeError("{} is not divisible".format(type(value).__name__))
    return method()


@singledispatch
def divide_at(value, index):
    """ Divides a value at the given index and returns both parts. """
    method = getattr(value, "divide_at", None)
    if method is None:
        raise TypeError("{} is not divisible".format(type(value).__name__))
    return method(index)


@singledispatch
def sequential(value):
    """ Returns a sequential iterator over a value. """
    method = getattr(value, "to_sequential", None)
    if method is None:
        return iter(value)
    return method()


def _sequence_length(value):
    # Named tuples may be derived records themselves.
    if isinstance(value, Divisible):
        return value.base_length()
    return len(value)


def _divide_sequence(value, index):
    if isinstance(value, Divisible):
        return value.divide_at(index)
    return (value[:index], value[index:])


for _ty in (list, tuple, str, bytes, bytearray, range):
    base_length.register(_ty, _sequence_length)
    divide_at.register(_ty, _divide_sequence)


def bounded_length(lengths):
    """ Length of a record as short as its shortest divisible field.

    Unbounded lengths (``None``) are ignored. Returns ``None`` if no length is
    finite.

    """
    finite = [length for length in lengths if length is not None]
    if len(finite) == 0:
        return None
    return min(finite)


def unbounded_length(lengths):
    """ Length of a record as long as its longest divisible field.

    Returns ``None`` if any length is unbounded, and 0 without lengths.

    """
    lengths = list(lengths)
    if any(length is None for length in lengths):
        return None
    return max(lengths, default=0)
