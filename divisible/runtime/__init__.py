"""
The ``divisible.runtime`` package holds what generated code calls at run
time: the ``Divisible`` and ``ParallelIterator`` protocols, divisibility of
builtin sequences, and the sequential block-by-block iteration adapter.

No parallel work is scheduled here. A scheduler divides values with
``divide_at`` and processes the parts however it likes.
"""

from .adapter import iter_blocks
from .dispatch import base_length, divide_at, sequential, bounded_length, unbounded_length
from .protocols import Divisible, ParallelIterator, Policy, Power
from .slices import SliceIter
