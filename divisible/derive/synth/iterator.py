import ast

from ...runtime.adapter import iter_blocks
from ..errors import DeclarationError, MissingDeclarationError
from ..ir import Assign, Attribute, Call, FunctionDef, Name, Return, Source, field_of
from ..schema import NAMED

REQUIRED = ("item", "sequential_iterator", "iterator_extraction")


def extraction_expression(impl):
    """ Returns the expression turning the inner sequential iterator ``i`` into
    the record's sequential iterator.

    The template is either source code, where ``i`` and ``self`` are in scope,
    or a callable taking the record and ``i``.

    """
    schema = impl.schema
    template = schema.iterator_extraction
    if callable(template):
        return Call(impl.bind("_extraction", template), [Name("self"), Name("i")])
    if not isinstance(template, str):
        raise DeclarationError(schema.name,
                "iterator extraction must be source or a callable, got {!r}".format(template))
    try:
        ast.parse(template.strip(), mode="eval")
    except SyntaxError as e:
        raise DeclarationError(schema.name,
                "invalid iterator extraction {!r}: {}".format(template, e.msg))
    return Source(template)


def synthesize_iterator(impl):
    """ Adds the parallel iterator methods to the implementation.

    ``extract_iter``, ``to_sequential``, ``blocks_sizes`` and ``policy`` are
    forwarded to the iteration target. ``iter_blocks`` (and ``__iter__`` for
    named records; named tuples already iterate over their fields) iterates
    over the whole record block by block.

    Raises
    ------
    MissingDeclarationError
        if the item, sequential iterator or extraction is not declared.
    AmbiguousTargetError
        if there is not exactly one iteration target.

    """
    schema = impl.schema
    for declaration in REQUIRED:
        if getattr(schema, declaration) is None:
            raise MissingDeclarationError(schema.name, declaration)

    this = Name("self")
    i = Name("i")
    inner = field_of(this, schema.iteration_target())
    extraction = extraction_expression(impl)

    impl.add(FunctionDef("extract_iter", ["self", "size"], [
        Assign(i, Call(Attribute(inner, "extract_iter"), [Name("size")])),
        Return(extraction),
    ]))
    impl.add(FunctionDef("to_sequential", ["self"], [
        Assign(i, Call(Attribute(inner, "to_sequential"))),
        Return(extraction),
    ]))
    impl.add(FunctionDef("blocks_sizes", ["self"], [
        Return(Call(Attribute(inner, "blocks_sizes"))),
    ]))
    impl.add(FunctionDef("policy", ["self"], [
        Return(Call(Attribute(inner, "policy"))),
    ]))

    adapter = impl.bind("_iter_blocks", iter_blocks)
    impl.add(FunctionDef("iter_blocks", ["self"], [Return(Call(adapter, [this]))]))
    if schema.shape == NAMED:
        impl.add(FunctionDef("__iter__", ["self"], [Return(Call(adapter, [this]))]))

    impl.attributes["Item"] = schema.item
    impl.attributes["SequentialIterator"] = schema.sequential_iterator
