"""
Derived divide capabilities for records.

``divisible.derive`` generates ``base_length`` and ``divide_at`` (and, for
records wrapping a parallel iterator, the iterator glue) from per-field
strategies. ``divisible.runtime`` holds the protocols and helpers generated
code relies on. ``divisible.annotated`` makes NumPy arrays and pandas objects
divisible.
"""

from .derive import *
from .runtime import Divisible, ParallelIterator, Policy, Power, SliceIter, iter_blocks
