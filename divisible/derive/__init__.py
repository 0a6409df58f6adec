"""

The ``divisible.derive`` package generates the divisible capability of
records: composite values whose fields are each divided according to a
*strategy* when the record is divided in two.

Here is a basic example of a record holding two lists divided together, a
factor shared by both halves and a counter that only the left half keeps::

    @divisible(power=Power.INDEXED)
    @dataclass
    class Scaled:
        factor: float = field(metadata=divide_by("clone"))
        seen: int = field(metadata=divide_by("default"))
        xs: list
        ys: list

The decorator reads the fields into a ``RecordSchema`` and synthesizes two
methods from it. ``base_length`` returns the length of the shortest list.
``divide_at(index)`` divides both lists at ``index``, deep copies the factor
into the left half and gives the right half ``int()`` as its counter::

    left, right = Scaled(2.0, 5, [1, 2, 3], [4, 5, 6]).divide_at(1)
    # left  == Scaled(2.0, 5, [1], [4])
    # right == Scaled(2.0, 0, [2, 3], [5, 6])

The strategies are:

* no annotation: the field is divisible itself and divided at the same index,
* ``clone``: both halves get a copy (``copy.deepcopy``),
* ``copy``: both halves get a shallow duplicate (``copy.copy``),
* ``default``: the left half keeps the value, the right half gets a default.

Records wrapping one inner parallel iterator can also derive the parallel
iterator capability with ``parallel_iterator``, which forwards sequential
iterator extraction and scheduling hints to that inner iterator. The source
generated for a record is returned by ``expand``.
"""

from .annotation import Strategy, divide_by, iteration_target, resolve_strategy
from .config import config
from .derive import divisible, parallel_iterator, expand, DIVISIBLE, PARALLEL_ITERATOR
from .errors import *
from .schema import FieldDescriptor, RecordSchema, describe

__all__ = [
    "Strategy", "divide_by", "iteration_target", "resolve_strategy", "config",
    "divisible", "parallel_iterator", "expand", "DIVISIBLE", "PARALLEL_ITERATOR",
    "DeriveError", "DeclarationError", "MissingDeclarationError",
    "AmbiguousTargetError", "UnsupportedRecordError",
    "FieldDescriptor", "RecordSchema", "describe",
]
