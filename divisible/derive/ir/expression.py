from abc import ABC, abstractmethod

from ..schema import NAMED


class Expression(ABC):
    """
    An expression in generated code. Rendering an expression with ``str``
    returns Python source.
    """

    @abstractmethod
    def __str__(self):
        pass

    def __repr__(self):
        return "<{} {}>".format(type(self).__name__, self)


class Name(Expression):
    """ A local or a name from the generated function's namespace. """

    def __init__(self, name):
        self.name = name

    def __str__(self):
        return self.name


class Source(Expression):
    """ Verbatim source, such as a user-supplied expression template. """

    def __init__(self, text):
        self.text = text

    def __str__(self):
        text = self.text.strip()
        if "#" in text or "\n" in text:
            # A trailing comment would swallow the closing parenthesis.
            return "({}\n)".format(text)
        return "({})".format(text)


class Constant(Expression):
    """ A literal value (None, numbers, strings). """

    def __init__(self, value):
        self.value = value

    def __str__(self):
        return repr(self.value)


class Attribute(Expression):
    """ ``value.attr`` """

    def __init__(self, value, attr):
        self.value = value
        self.attr = attr

    def __str__(self):
        return "{}.{}".format(self.value, self.attr)


class Subscript(Expression):
    """ ``value[index]`` with a constant index. """

    def __init__(self, value, index):
        self.value = value
        self.index = index

    def __str__(self):
        return "{}[{}]".format(self.value, self.index)


class Call(Expression):
    """ A call with positional and keyword arguments. """

    def __init__(self, func, args=(), kwargs=()):
        self.func = func
        self.args = list(args)
        # List of (name, Expression) so that argument order is kept.
        self.kwargs = list(kwargs)

    def __str__(self):
        arguments = [str(a) for a in self.args]
        arguments += ["{}={}".format(k, v) for (k, v) in self.kwargs]
        return "{}({})".format(self.func, ", ".join(arguments))


class Tuple(Expression):
    """ A tuple display. """

    def __init__(self, items):
        self.items = list(items)

    def __str__(self):
        if len(self.items) == 1:
            return "({},)".format(self.items[0])
        return "({})".format(", ".join(str(i) for i in self.items))


def field_of(value, field):
    """ Accesses a field of a record: by name for named records, by index otherwise. """
    if field.name is not None:
        return Attribute(value, field.name)
    return Subscript(value, field.index)


def construct(record, shape, fields, values):
    """ Builds a record from one value per field, in declaration order. """
    if shape == NAMED:
        return Call(record, kwargs=[(f.name, v) for (f, v) in zip(fields, values)])
    return Call(record, args=values)
