"""
Divisibility of pandas Series and DataFrames. Both are divided by position
(``iloc``); DataFrames are iterated row by row as named tuples.
"""

from .annotated import *
