from ...runtime.dispatch import base_length, bounded_length, unbounded_length
from ..ir import Call, Constant, FunctionDef, Name, Return, Tuple, field_of
from ..schema import BOUNDED, UNBOUNDED


def length_expression(impl):
    """ Returns the expression computing the length of a record.

    Only recursively divided fields have a length. Under the bounded policy a
    record is as short as its shortest field, under the unbounded policy as
    long as its longest one. ``None`` stands for an unbounded length.

    """
    schema = impl.schema
    policy = schema.length_policy

    if len(schema.fields) == 0:
        return Constant(0 if policy == UNBOUNDED else None)
    recurse = schema.recurse_fields()
    if len(recurse) == 0:
        return Constant(None)

    length = impl.bind("_base_length", base_length)
    if policy == BOUNDED:
        aggregate = impl.bind("_bounded_length", bounded_length)
    else:
        aggregate = impl.bind("_unbounded_length", unbounded_length)

    this = Name("self")
    lengths = Tuple([Call(length, [field_of(this, f)]) for f in recurse])
    return Call(aggregate, [lengths])


def synthesize_length(impl):
    """ Adds ``base_length(self)`` to the implementation. """
    body = [Return(length_expression(impl))]
    impl.add(FunctionDef("base_length", ["self"], body,
        doc="Returns the number of elements, or None if unbounded."))
