"""
The ``divisible.derive.ir`` package holds the intermediate representation of
generated code: expressions and statements that render to Python source, and
the ``Implementation`` that compiles them into methods of a record.
"""

from .expression import *
from .program import *
