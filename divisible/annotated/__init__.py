"""
The ``divisible.annotated`` package makes the types of other libraries
divisible, so that records can hold them in recursively divided fields.

Importing a subpackage registers its types with ``base_length``,
``divide_at`` and ``sequential``. As an example, to divide records holding
NumPy arrays, import::

  import divisible.annotated.numpy

"""
