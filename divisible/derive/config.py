""" Global configuration for the generator and the runtime helpers.

Values are read when they are needed, so changing an entry affects every
record derived (or iterated) afterwards.
"""

config = {
    # Length aggregation used when a record does not choose one ("bounded" or
    # "unbounded").
    "length_policy": "bounded",
    # Block size handed out by SliceIter when no block sizes were given.
    "block_size": 1024,
    # Log a warning when a divide_by token is not part of the vocabulary.
    "warn_unknown_strategy": True,
}
