"""
Divisibility of NumPy arrays. Arrays are divided along their first axis.
"""

from .annotated import *
