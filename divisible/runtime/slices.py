import itertools

from ..derive.config import config
from .dispatch import base_length, divide_at, sequential
from .protocols import ParallelIterator, Policy, Power


class SliceIter(ParallelIterator):
    """A parallel iterator over a sliceable value.

    The value can be anything ``divide_at`` knows how to divide: builtin
    sequences, divisible records, and arrays or frames once
    ``divisible.annotated`` has been imported.

    Parameters
    ----------

    data : any
        the elements to iterate over.
    blocks : iterable of int or None
        block sizes handed out by ``blocks_sizes``. Defaults to an endless
        repetition of ``config["block_size"]``.
    policy : Policy
        scheduling hint.

    """

    __slots__ = [ "data", "blocks", "scheduling" ]

    Power = Power.INDEXED

    def __init__(self, data, blocks=None, policy=Policy.DEFAULT):
        self.data = data
        self.blocks = tuple(blocks) if blocks is not None else None
        self.scheduling = policy

    def _like(self, data):
        return type(self)(data, self.blocks, self.scheduling)

    def base_length(self):
        return base_length(self.data)

    def divide_at(self, index):
        (left, right) = divide_at(self.data, index)
        return (self._like(left), self._like(right))

    def extract_iter(self, size):
        (head, self.data) = divide_at(self.data, size)
        return sequential(head)

    def to_sequential(self):
        return sequential(self.data)

    def blocks_sizes(self):
        if self.blocks is None:
            return itertools.repeat(config["block_size"])
        return iter(self.blocks)

    def policy(self):
        return self.scheduling

    def __repr__(self):
        return "SliceIter({!r})".format(self.data)
