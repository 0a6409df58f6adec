""" Errors raised while deriving a capability for a record.

Every error is raised at decoration time. Nothing is installed on a record
whose derivation failed.
"""


class DeriveError(TypeError):
    """ Base error for records whose capabilities cannot be derived.

    Parameters
    ----------

    record : str
        name of the record being processed.
    message : str
        what went wrong.

    """

    def __init__(self, record, message):
        super().__init__("cannot derive for {}: {}".format(record, message))
        self.record = record
        self.message = message


class DeclarationError(DeriveError):
    """ A record or field declaration is invalid. """
    pass


class MissingDeclarationError(DeclarationError):
    """ A required record-level declaration was not given. """

    def __init__(self, record, declaration):
        super().__init__(record, "missing {} declaration".format(declaration))
        self.declaration = declaration


class AmbiguousTargetError(DeriveError):
    """ Zero or several fields qualify as the iteration target. """

    def __init__(self, record, candidates):
        if len(candidates) == 0:
            message = "no field is divided recursively, could not find the inner iterator"
        else:
            message = "could not find only one inner iterator (candidates: {})".format(
                    ", ".join(str(c) for c in candidates))
        super().__init__(record, message)
        self.candidates = tuple(candidates)


class UnsupportedRecordError(DeriveError):
    """ The record is not a plain collection of fields. """
    pass
