import logging

from ..runtime.protocols import Divisible, ParallelIterator
from .errors import MissingDeclarationError
from .ir import Implementation
from .schema import describe
from .synth import synthesize_iterator, synthesize_length, synthesize_split

logger = logging.getLogger(__name__)

# Attributes holding the implementations on derived records.
DIVISIBLE = "__divisible__"
PARALLEL_ITERATOR = "__parallel_iterator__"

# Declarations that change the divisible implementation.
_DIVISIBLE_DECLARATIONS = ("power", "trait_bounds", "divide_by", "length_policy")


def derive_divisible(schema):
    """ Builds the divisible implementation of a record.

    Raises
    ------
    MissingDeclarationError
        if the record does not declare its power.

    """
    if schema.power is None:
        raise MissingDeclarationError(schema.name, "power")
    impl = Implementation("Divisible", schema)
    synthesize_length(impl)
    synthesize_split(impl)
    impl.attributes["Power"] = schema.power
    return impl


def derive_parallel_iterator(schema):
    """ Builds the parallel iterator implementation of a record. """
    impl = Implementation("ParallelIterator", schema)
    synthesize_iterator(impl)
    return impl


class divisible(object):
    """ Derives the divisible capability of a record.

    The decorated class must be a dataclass or a named tuple. Its fields are
    divided recursively unless annotated otherwise, either with ``divide_by``
    field metadata or with the ``divide_by`` mapping given here::

        @divisible(power=Power.INDEXED)
        @dataclass
        class Weighted:
            weight: float = field(metadata=divide_by("clone"))
            values: list

    The record gets ``base_length``, ``divide_at`` and ``divide`` methods, a
    ``Power`` attribute, and is registered as a ``Divisible``.

    """

    def __init__(self, power=None, trait_bounds=None, divide_by=None, length_policy=None):
        """ Creates the decorator.

        Parameters
        ----------

        power : any
            the kind of division the record supports (required).
        trait_bounds : str, sequence of str or None
            bounds replacing the ones derived from the type parameters.
        divide_by : dict or None
            maps field names (or positions for named tuples) to divide_by
            tokens.
        length_policy : str or None
            ``"bounded"`` (shortest field) or ``"unbounded"`` (longest field).
            Defaults to ``config["length_policy"]``.

        """
        self.declarations = {
            "power": power,
            "trait_bounds": trait_bounds,
            "divide_by": divide_by,
            "length_policy": length_policy,
        }

    def __call__(self, cls):
        schema = describe(cls, **self.declarations)
        impl = derive_divisible(schema)
        impl.compile()
        _install(cls, DIVISIBLE, impl, Divisible)
        return cls


class parallel_iterator(object):
    """ Derives the parallel iterator capability of a record.

    The record wraps one inner parallel iterator, its iteration target, along
    with auxiliary fields. Extraction of sequential iterators, block sizes and
    the scheduling policy are forwarded to the target::

        @parallel_iterator(item=int, sequential_iterator=map,
                           iterator_extraction="map(self.op, i)")
        @divisible(power=Power.INDEXED)
        @dataclass
        class Mapped:
            op: object = field(metadata=divide_by("clone"))
            inner: SliceIter

    Declarations of an already derived divisible capability are reused. If the
    record is not divisible yet, it is derived as well, and ``power`` is
    required.

    """

    def __init__(self, item=None, sequential_iterator=None, iterator_extraction=None,
            iteration_target=None, power=None, trait_bounds=None, divide_by=None,
            length_policy=None):
        self.declarations = {
            "item": item,
            "sequential_iterator": sequential_iterator,
            "iterator_extraction": iterator_extraction,
            "iteration_target": iteration_target,
            "power": power,
            "trait_bounds": trait_bounds,
            "divide_by": divide_by,
            "length_policy": length_policy,
        }

    def __call__(self, cls):
        base = cls.__dict__.get(DIVISIBLE)
        declarations = dict(base.schema.declarations) if base is not None else {}
        for (key, value) in self.declarations.items():
            if value is not None:
                declarations[key] = value
        schema = describe(cls, **declarations)

        rederive = base is None or any(
                self.declarations[key] is not None for key in _DIVISIBLE_DECLARATIONS)
        divisible_impl = derive_divisible(schema) if rederive else None
        impl = derive_parallel_iterator(schema)

        # Compile everything before touching the class.
        if divisible_impl is not None:
            divisible_impl.compile()
        impl.compile()

        if divisible_impl is not None:
            _install(cls, DIVISIBLE, divisible_impl, Divisible)
        _install(cls, PARALLEL_ITERATOR, impl, ParallelIterator)
        return cls


def _install(cls, attribute, impl, protocol):
    impl.install(cls)
    setattr(cls, attribute, impl)
    if protocol is Divisible and "divide" not in cls.__dict__:
        cls.divide = Divisible.divide
    protocol.register(cls)
    logger.debug("derived %s for %s", impl.capability, impl.schema)


def expand(cls):
    """ Returns the generated source of every capability derived for a record.

    Raises
    ------
    TypeError
        if nothing was derived for the record.

    """
    impls = [cls.__dict__.get(attribute) for attribute in (DIVISIBLE, PARALLEL_ITERATOR)]
    impls = [impl for impl in impls if impl is not None]
    if len(impls) == 0:
        raise TypeError("nothing was derived for {}".format(getattr(cls, "__qualname__", cls)))
    return "\n\n".join(impl.render() for impl in impls)
