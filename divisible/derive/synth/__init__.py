"""
Synthesizers turning a ``RecordSchema`` into generated functions. Each one
adds functions to an ``Implementation``.
"""

from .iterator import synthesize_iterator
from .length import synthesize_length
from .split import synthesize_split
