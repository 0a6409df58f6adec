import copy

from ...runtime.dispatch import divide_at
from ..annotation import Strategy
from ..ir import Assign, Call, FunctionDef, Name, Return, Subscript, Tuple, construct, field_of


def split_pair(impl, position, field, value, index):
    """ Returns the expression evaluating to the (left, right) pair of a field.

    Parameters
    ----------

    impl : Implementation
        the implementation helpers are bound in.
    position : int
        position of the field in the record.
    field : FieldDescriptor
        the field to divide.
    value : Expression
        accesses the field on the record being divided.
    index : Expression
        the index the record is divided at.

    """
    strategy = field.strategy
    if strategy is Strategy.RECURSE:
        return Call(impl.bind("_divide_at", divide_at), [value, index])
    elif strategy is Strategy.CLONE:
        return Tuple([Call(impl.bind("_clone", copy.deepcopy), [value]), value])
    elif strategy is Strategy.COPY:
        return Tuple([Call(impl.bind("_copy", copy.copy), [value]), value])
    elif strategy is Strategy.DEFAULT:
        default = impl.bind("_default_{}".format(position), field.default)
        return Tuple([value, Call(default)])
    else:
        raise ValueError("invalid strategy {}".format(strategy))


def synthesize_split(impl):
    """ Adds ``divide_at(self, index)`` to the implementation.

    Every field is divided once, in declaration order, into a tuple of
    (left, right) pairs. Both records are then built from this tuple, the left
    record from the first elements and the right record from the second ones,
    keeping the declaration order.

    """
    schema = impl.schema
    this = Name("self")
    index = Name("index")
    split_fields = Name("split_fields")

    pairs = []
    for (position, field) in enumerate(schema.fields):
        pairs.append(split_pair(impl, position, field, field_of(this, field), index))

    record = impl.bind("_record", schema.record)
    halves = []
    for side in (0, 1):
        values = [Subscript(Subscript(split_fields, i), side) for i in range(len(schema.fields))]
        halves.append(construct(record, schema.shape, schema.fields, values))

    body = [Assign(split_fields, Tuple(pairs)), Return(Tuple(halves))]
    impl.add(FunctionDef("divide_at", ["self", "index"], body,
        doc="Divides the record at index into two records."))
