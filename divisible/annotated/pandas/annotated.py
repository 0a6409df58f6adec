import pandas as pd

from divisible.runtime import Policy, SliceIter
from divisible.runtime.dispatch import base_length, divide_at, sequential


@base_length.register(pd.Series)
@base_length.register(pd.DataFrame)
def frame_length(value):
    return len(value)


@divide_at.register(pd.Series)
@divide_at.register(pd.DataFrame)
def divide_frame(value, index):
    return (value.iloc[:index], value.iloc[index:])


@sequential.register(pd.DataFrame)
def frame_rows(value):
    return value.itertuples(index=False)


def par_iter(frame, blocks=None, policy=Policy.DEFAULT):
    """ Returns a parallel iterator over the elements of a Series or the rows
    of a DataFrame. """
    return SliceIter(frame, blocks, policy)
