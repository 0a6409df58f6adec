def iter_blocks(iterator):
    """Iterates sequentially over a parallel iterator, block by block.

    The iterator is asked for block sizes, divided into blocks of these sizes
    in order, and every block is drained into a buffer whose elements are then
    yielded. When the block sizes run out before the iterator does, new sizes
    are requested from what is left. Elements come out in the same order
    whatever the block sizes are.

    The iterator is consumed.

    Parameters
    ----------

    iterator : ParallelIterator
        a value providing ``base_length``, ``divide_at``, ``blocks_sizes`` and
        ``to_sequential``.

    Yields
    ------
    the elements of the iterator.

    """
    remaining = iterator
    length = remaining.base_length()
    while length != 0:
        produced = False
        for size in remaining.blocks_sizes():
            if size <= 0:
                raise ValueError("invalid block size {}".format(size))
            produced = True
            if length is not None:
                size = min(size, length)

            (block, remaining) = remaining.divide_at(size)
            buffer = list(block.to_sequential())
            yield from buffer

            if length is not None:
                length -= size
                if length == 0:
                    return
        if not produced:
            raise ValueError("{} produced no block sizes".format(type(remaining).__name__))
