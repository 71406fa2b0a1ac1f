"""
Exceptions raised by lattice_rqmc.
"""


class InvalidArgumentError(ValueError):
    """
    An argument is outside the domain an operation accepts.

    Raised synchronously, before any point set is modified: invalid lattice
    parameters, out-of-range indices, a missing random source, or a point set
    lacking a capability that a randomization requires.
    """


class UnimplementedError(NotImplementedError):
    """An operation is not available for this kind of point set."""
