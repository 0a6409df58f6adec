from abc import ABC, abstractmethod
import sys

from ..errors import DeclarationError
from .expression import Name

INDENT = "    "
# Name of the function generated code is wrapped in when compiled.
FACTORY = "__create_fns__"


class Statement(ABC):
    """ A statement in the body of a generated function. """

    @abstractmethod
    def __str__(self):
        pass


class Assign(Statement):
    """ ``target = value`` """

    def __init__(self, target, value):
        self.target = target
        self.value = value

    def __str__(self):
        return "{} = {}".format(self.target, self.value)


class Return(Statement):
    """ ``return value`` """

    def __init__(self, value):
        self.value = value

    def __str__(self):
        return "return {}".format(self.value)


class FunctionDef:
    """
    A generated function, installed as a method on the record.
    """

    __slots__ = [ "name", "params", "body", "doc" ]

    def __init__(self, name, params, body, doc=None):
        self.name = name
        self.params = list(params)
        self.body = list(body)
        self.doc = doc

    def lines(self):
        lines = ["def {}({}):".format(self.name, ", ".join(self.params))]
        if self.doc is not None:
            lines.append('{}"""{}"""'.format(INDENT, self.doc))
        for statement in self.body:
            lines.append(INDENT + str(statement))
        return lines

    def __str__(self):
        return "\n".join(self.lines())


class Implementation:
    """
    The implementation of a capability derived for a record.

    An implementation holds the generated functions along with the namespace
    they are compiled in: generated code refers to helpers, the record class
    and default factories through names bound with ``bind``.
    """

    def __init__(self, capability, schema):
        self.capability = capability
        self.schema = schema
        self.functions = []
        # Names visible to the generated code.
        self.namespace = {}
        # Class attributes installed along with the functions.
        self.attributes = {}
        # Maps function names to compiled functions.
        self.compiled = None

    @property
    def bounds(self):
        return self.schema.bounds()

    def bind(self, name, value):
        """ Makes ``value`` visible to generated code as ``name``. """
        if name in self.namespace and self.namespace[name] is not value:
            raise ValueError("name {} is already bound".format(name))
        self.namespace[name] = value
        return Name(name)

    def add(self, function):
        self.functions.append(function)

    def header(self):
        target = self.schema.name
        bounds = self.bounds
        if len(bounds) > 0:
            target = "{}[{}]".format(target, ", ".join(bounds))
        return "# {} for {}".format(self.capability, target)

    def render(self):
        """ Returns the source of every generated function. """
        chunks = [self.header()]
        for function in self.functions:
            chunks.append(str(function))
        return "\n\n".join(chunks) + "\n"

    def compile(self):
        """ Compiles the generated source and returns the functions by name.

        The functions are defined inside a factory taking the bound names as
        arguments, so they see bound names as closure variables and the
        record's module as their globals.

        """
        names = sorted(self.namespace)
        lines = ["def {}({}):".format(FACTORY, ", ".join(names))]
        for function in self.functions:
            lines.extend(INDENT + line for line in function.lines())
        lines.append("{}return {{{}}}".format(INDENT, ", ".join(
            "{!r}: {}".format(f.name, f.name) for f in self.functions)))

        module = sys.modules.get(self.schema.record.__module__)
        module_globals = vars(module) if module is not None else {}
        filename = "<{} for {}>".format(self.capability, self.schema.name)
        local = {}
        try:
            code = compile("\n".join(lines) + "\n", filename, "exec")
        except SyntaxError as e:
            raise DeclarationError(self.schema.name,
                    "generated {} does not compile: {}".format(self.capability, e.msg))
        exec(code, module_globals, local)
        functions = local[FACTORY](**self.namespace)

        compiled = {}
        for function in self.functions:
            func = functions[function.name]
            func.__qualname__ = "{}.{}".format(self.schema.name, function.name)
            func.__module__ = self.schema.record.__module__
            compiled[function.name] = func
        self.compiled = compiled
        return compiled

    def install(self, cls):
        """ Sets the compiled functions and attributes on the record class. """
        if self.compiled is None:
            self.compile()
        for (name, func) in self.compiled.items():
            setattr(cls, name, func)
        for (name, value) in self.attributes.items():
            setattr(cls, name, value)

    def __str__(self):
        return self.render()
