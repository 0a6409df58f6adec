from abc import ABC, abstractmethod
from collections import namedtuple
from enum import Enum


class Power(Enum):
    """ Kinds of division a divisible value supports. """

    # Can only be cut in two, at a position of its choosing.
    BASIC = "basic"
    # Can be cut into blocks of a requested size.
    BLOCKED = "blocked"
    # Can be cut at any index.
    INDEXED = "indexed"


class Policy(namedtuple("Policy", ["kind", "sizes"])):
    """ Scheduling hint forwarded to the runtime.

    ``kind`` is one of ``"default"``, ``"sequential"``, ``"join"``,
    ``"rayon"`` or ``"adaptive"``. ``sizes`` holds the block size (join, rayon)
    or the minimum and maximum block sizes (adaptive).

    """

    __slots__ = ()

    @classmethod
    def join(cls, block_size):
        return cls("join", (block_size,))

    @classmethod
    def rayon(cls, block_size):
        return cls("rayon", (block_size,))

    @classmethod
    def adaptive(cls, min_size, max_size):
        return cls("adaptive", (min_size, max_size))


Policy.DEFAULT = Policy("default", ())
Policy.SEQUENTIAL = Policy("sequential", ())


class Divisible(ABC):
    """A value that can be divided into two disjoint values.

    Derived records are registered as virtual subclasses.

    """

    @abstractmethod
    def base_length(self):
        """ Returns the number of elements, or ``None`` if unbounded. """
        pass

    @abstractmethod
    def divide_at(self, index):
        """Divides this value into two values at the given index.

        The value is consumed: only the two returned values should be used
        afterwards.

        Parameters
        ----------

        index : int
            position of the division, between 0 and ``base_length()``.

        Returns
        -------
        tuple
            the left and right parts.

        """
        pass

    def divide(self):
        """ Divides this value in two halves. """
        length = self.base_length()
        if length is None:
            raise ValueError("cannot divide {} of unbounded length in halves".format(
                type(self).__name__))
        return self.divide_at(length // 2)


class ParallelIterator(Divisible):
    """A divisible value whose parts can be turned into sequential iterators.

    """

    @abstractmethod
    def extract_iter(self, size):
        """ Returns a sequential iterator over the next ``size`` elements and
        keeps the remaining ones. """
        pass

    @abstractmethod
    def to_sequential(self):
        """ Returns a sequential iterator over all the elements. """
        pass

    @abstractmethod
    def blocks_sizes(self):
        """ Returns an iterable of block sizes to use when iterating. """
        pass

    def policy(self):
        return Policy.DEFAULT

    def __iter__(self):
        from .adapter import iter_blocks
        return iter_blocks(self)
