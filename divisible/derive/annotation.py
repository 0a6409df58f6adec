from enum import Enum
import logging

from .config import config

logger = logging.getLogger(__name__)

# Metadata keys read from dataclass fields.
DIVIDE_BY = "divide_by"
DEFAULT_FACTORY = "divide_by_default"
ITERATION_TARGET = "iteration_target"


class Strategy(Enum):
    """ What each half of a split receives for a field. """

    # The field is divisible itself and is divided at the same index.
    RECURSE = "recurse"
    # Both halves get an independent deep copy.
    CLONE = "clone"
    # Both halves get a shallow duplicate (values without a deep copy).
    COPY = "copy"
    # The left half keeps the value, the right half gets the type's default.
    DEFAULT = "default"

    def __str__(self):
        return self.value


_TOKENS = {
    "clone": Strategy.CLONE,
    "copy": Strategy.COPY,
    "default": Strategy.DEFAULT,
}


def divide_by(token, default=None):
    """ Field metadata selecting how a dataclass field is divided.

    Use it as the metadata of a dataclass field::

        @divisible(power=Power.INDEXED)
        @dataclass
        class Scaled:
            factor: float = field(metadata=divide_by("clone"))
            values: list

    Parameters
    ----------

    token : str or Strategy
        one of ``"clone"``, ``"copy"`` or ``"default"``. Any other token
        divides the field recursively.

    default : callable or None
        factory for the value the right half receives when the token is
        ``"default"``. When omitted, the declared type of the field is called
        without arguments.

    Returns
    -------
    dict

    """
    metadata = {DIVIDE_BY: token}
    if default is not None:
        metadata[DEFAULT_FACTORY] = default
    return metadata


def iteration_target(metadata=None):
    """ Field metadata marking a field as the inner sequence being iterated.

    Only needed when a record has several recursively divided fields and
    iterator glue is derived for it. Can be combined with other metadata::

        items: SliceIter = field(metadata=iteration_target())

    """
    metadata = dict(metadata) if metadata is not None else {}
    metadata[ITERATION_TARGET] = True
    return metadata


def resolve_strategy(token, where=None):
    """ Resolves a divide_by token into a Strategy.

    A missing token means the field is divided recursively. Unrecognized
    tokens resolve to ``Strategy.RECURSE`` as well, and are reported with a
    warning since they are usually misspelled.

    Parameters
    ----------

    token : str, Strategy or None
        the annotation on the field.
    where : str or None
        description of the field, used in the warning.

    Returns
    -------
    Strategy

    """
    if token is None:
        return Strategy.RECURSE
    if isinstance(token, Strategy):
        return token

    text = "".join(str(token).split())
    strategy = _TOKENS.get(text)
    if strategy is not None:
        return strategy

    if config["warn_unknown_strategy"]:
        logger.warning("unrecognized divide_by(%s) on %s, dividing it recursively",
                text, where if where is not None else "field")
    return Strategy.RECURSE
