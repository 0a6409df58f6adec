"""
Schema of a record, built once from its class and never inspected again during
synthesis.

Two record shapes are understood: dataclasses, whose fields are accessed and
passed by name, and named tuples, whose fields are accessed and passed by
position. Anything else (enumerations, plain classes, ...) is rejected.
"""

from collections.abc import Mapping
from enum import Enum
import dataclasses
import typing

from .annotation import Strategy, resolve_strategy, DIVIDE_BY, DEFAULT_FACTORY, ITERATION_TARGET
from .config import config
from .errors import DeclarationError, AmbiguousTargetError, UnsupportedRecordError

# Record shapes.
NAMED = "named"
POSITIONAL = "positional"

# Length aggregation policies.
BOUNDED = "bounded"
UNBOUNDED = "unbounded"
LENGTH_POLICIES = (BOUNDED, UNBOUNDED)


class FieldDescriptor(object):
    """ A field of a record along with its resolved strategy.

    Fields of named records are identified by ``name``, fields of positional
    records by ``index``. The declared ``type`` is opaque: the generator only
    emits code against it.

    """

    __slots__ = [ "name", "index", "strategy", "type", "default", "target" ]

    def __init__(self, name, index, strategy, type, default=None, target=False):
        self.name = name
        self.index = index
        self.strategy = strategy
        self.type = type
        # Factory for the right half of a DEFAULT field.
        self.default = default
        # Whether the field was earmarked as the iteration target.
        self.target = target

    @property
    def identity(self):
        return self.name if self.name is not None else self.index

    def __str__(self):
        return str(self.identity)

    def __repr__(self):
        return "FieldDescriptor({!r}, {})".format(self.identity, self.strategy)


class RecordSchema(object):
    """ Ordered fields and record-level declarations of a record.

    The iteration target is located when the schema is built. When it cannot be
    located, the failure is kept and raised by ``iteration_target()`` so that
    records which never ask for iterator glue are not affected.

    """

    __slots__ = [ "name", "record", "shape", "fields", "generics", "declarations", "_target" ]

    def __init__(self, name, record, shape, fields, generics, declarations):
        self.name = name
        # The class itself. Generated code only calls it to build records.
        self.record = record
        self.shape = shape
        self.fields = tuple(fields)
        self.generics = tuple(generics)
        self.declarations = dict(declarations)
        self._target = locate_target(name, self.fields)

    @property
    def power(self):
        return self.declarations.get("power")

    @property
    def item(self):
        return self.declarations.get("item")

    @property
    def sequential_iterator(self):
        return self.declarations.get("sequential_iterator")

    @property
    def iterator_extraction(self):
        return self.declarations.get("iterator_extraction")

    @property
    def length_policy(self):
        policy = self.declarations.get("length_policy")
        return policy if policy is not None else config["length_policy"]

    def recurse_fields(self):
        """ Returns the fields divided recursively, in declaration order. """
        return [f for f in self.fields if f.strategy is Strategy.RECURSE]

    def iteration_target(self):
        """ Returns the field holding the inner sequence.

        Raises
        ------
        AmbiguousTargetError
            if zero or several fields qualify.

        """
        if isinstance(self._target, AmbiguousTargetError):
            raise self._target
        return self._target

    def bounds(self):
        """ Returns the bounds of the record's type parameters.

        An explicit ``trait_bounds`` declaration replaces the derived bounds.

        """
        override = self.declarations.get("trait_bounds")
        if override is not None:
            if isinstance(override, str):
                return (override,)
            return tuple(override)
        return tuple(_describe_parameter(p) for p in self.generics)

    def __str__(self):
        return "{}({})".format(self.name, ", ".join(
            "{}: {}".format(f, f.strategy) for f in self.fields))


def locate_target(name, fields):
    """ Finds the only field eligible as the iteration target.

    Earmarked fields are the candidates if there are any; otherwise every
    recursively divided field is. Returns the field, or an
    ``AmbiguousTargetError`` when there is not exactly one candidate.

    """
    candidates = [f for f in fields if f.target]
    if len(candidates) == 0:
        candidates = [f for f in fields if f.strategy is Strategy.RECURSE]
    if len(candidates) != 1:
        return AmbiguousTargetError(name, [f.identity for f in candidates])
    return candidates[0]


def describe(cls, power=None, item=None, sequential_iterator=None,
        iterator_extraction=None, trait_bounds=None, divide_by=None,
        iteration_target=None, length_policy=None):
    """ Builds the schema of a record class.

    Parameters
    ----------

    cls : type
        a dataclass or a named tuple.
    power, item, sequential_iterator : any
        record-level tags installed on the record as ``Power``, ``Item`` and
        ``SequentialIterator``.
    iterator_extraction : str or callable
        expression applied to the inner sequential iterator ``i``.
    trait_bounds : str, sequence of str or None
        replaces the bounds derived from the type parameters.
    divide_by : dict or None
        maps field names (or positions) to divide_by tokens. Takes precedence
        over field metadata.
    iteration_target : str, int or None
        name (or position) of the field holding the inner sequence.
    length_policy : str or None
        ``"bounded"`` or ``"unbounded"``.

    Returns
    -------
    RecordSchema

    """
    if not isinstance(cls, type):
        raise UnsupportedRecordError(repr(cls), "only classes can be derived")
    name = cls.__qualname__

    if issubclass(cls, Enum):
        raise UnsupportedRecordError(name, "enumerations are not supported")
    if length_policy is not None and length_policy not in LENGTH_POLICIES:
        raise DeclarationError(name, "unknown length policy {!r}".format(length_policy))

    overrides = dict(divide_by) if divide_by is not None else {}
    if dataclasses.is_dataclass(cls):
        shape = NAMED
        fields = _named_fields(cls, name, overrides, iteration_target)
    elif issubclass(cls, tuple) and hasattr(cls, "_fields"):
        shape = POSITIONAL
        fields = _positional_fields(cls, name, overrides, iteration_target)
    else:
        raise UnsupportedRecordError(name, "only dataclasses and named tuples are supported")

    for f in fields:
        if f.target and f.strategy is not Strategy.RECURSE:
            raise DeclarationError(name,
                    "iteration target {} is divided by {}".format(f, f.strategy))

    declarations = {
        "power": power,
        "item": item,
        "sequential_iterator": sequential_iterator,
        "iterator_extraction": iterator_extraction,
        "trait_bounds": trait_bounds,
        "divide_by": divide_by,
        "iteration_target": iteration_target,
        "length_policy": length_policy,
    }
    generics = getattr(cls, "__parameters__", ())
    return RecordSchema(name, cls, shape, fields, generics, declarations)


def _named_fields(cls, name, overrides, target):
    hints = _type_hints(cls)
    # dataclasses.fields() leaves out InitVar pseudo-fields, which the
    # constructor still requires.
    for (field_name, f) in cls.__dataclass_fields__.items():
        ty = hints.get(field_name, f.type)
        if isinstance(ty, dataclasses.InitVar) or ty is dataclasses.InitVar:
            raise UnsupportedRecordError(name,
                    "init-only variable {} cannot be rebuilt".format(field_name))

    declared = dataclasses.fields(cls)
    names = [f.name for f in declared]
    _check_identities(name, overrides, target, names)

    fields = []
    for f in declared:
        if not f.init:
            raise UnsupportedRecordError(name,
                    "field {} is not set by the constructor".format(f.name))
        (token, factory) = _unpack(overrides.get(f.name, f.metadata))
        where = "{}.{}".format(name, f.name)
        strategy = resolve_strategy(token, where)
        ty = hints.get(f.name, f.type)
        default = None
        if strategy is Strategy.DEFAULT:
            default = _default_factory(name, f.name, ty, factory)
        earmarked = bool(f.metadata.get(ITERATION_TARGET, False)) or target == f.name
        fields.append(FieldDescriptor(f.name, None, strategy, ty, default, earmarked))
    return fields


def _positional_fields(cls, name, overrides, target):
    hints = _type_hints(cls)
    names = list(cls._fields)
    _check_identities(name, overrides, target, names, positional=True)

    # Positional records are annotated by index, accept names as a convenience.
    overrides = dict((names.index(k) if isinstance(k, str) else k, v)
            for (k, v) in overrides.items())
    if isinstance(target, str):
        target = names.index(target)

    fields = []
    for (i, field_name) in enumerate(names):
        (token, factory) = _unpack(overrides.get(i))
        where = "{}[{}]".format(name, i)
        strategy = resolve_strategy(token, where)
        ty = hints.get(field_name)
        default = None
        if strategy is Strategy.DEFAULT:
            default = _default_factory(name, i, ty, factory)
        earmarked = target is not None and target == i
        fields.append(FieldDescriptor(None, i, strategy, ty, default, earmarked))
    return fields


def _unpack(annotation):
    """ Splits an annotation into its token and default factory.

    Annotations are either a bare token or a mapping as built by ``divide_by``
    (dataclass field metadata included).

    """
    if isinstance(annotation, Mapping):
        return (annotation.get(DIVIDE_BY), annotation.get(DEFAULT_FACTORY))
    return (annotation, None)


def _check_identities(name, overrides, target, names, positional=False):
    """ Rejects annotations naming fields that the record does not have. """
    identities = list(overrides)
    if target is not None:
        identities.append(target)
    for identity in identities:
        if isinstance(identity, str) and identity in names:
            continue
        if positional and isinstance(identity, int) and 0 <= identity < len(names):
            continue
        raise DeclarationError(name, "no field {!r}".format(identity))


def _default_factory(name, field, ty, factory):
    """ Returns the factory for the right half of a DEFAULT field. """
    if factory is not None:
        if not callable(factory):
            raise DeclarationError(name,
                    "default for field {} is not callable".format(field))
        return factory

    origin = typing.get_origin(ty) or ty
    if isinstance(origin, type):
        return origin
    raise DeclarationError(name,
            "field {} of type {!r} has no default value, pass divide_by('default', default=...)".format(
                field, ty))


def _type_hints(cls):
    try:
        return typing.get_type_hints(cls)
    except (NameError, TypeError):
        # Unresolvable forward references: keep the raw annotations.
        return dict(getattr(cls, "__annotations__", {}))


def _describe_parameter(param):
    """ Renders a type parameter with its bound or constraints. """
    name = getattr(param, "__name__", str(param))
    bound = getattr(param, "__bound__", None)
    constraints = getattr(param, "__constraints__", ())
    if bound is not None:
        return "{}: {}".format(name, _type_name(bound))
    if constraints:
        return "{}: ({})".format(name, ", ".join(_type_name(c) for c in constraints))
    return name


def _type_name(ty):
    if isinstance(ty, type):
        return ty.__qualname__
    return repr(ty)
