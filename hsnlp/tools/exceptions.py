"""hsnlp-specific exceptions."""


class ShapeError(ValueError):
    """Error that can be raised to signal a dimension mismatch."""

    pass


class DimensionMismatch(ShapeError):
    """Error raised when dimensions of functions, vectors or sequences differ.

    Raised at problem-assembly time, e.g., when a constraint's argument size
    differs from that of the objective or when the number of intervals or
    scales differs from the number of constraint components.
    """

    pass


class IndexOutOfRange(IndexError):
    """Error raised when addressing a variable, constraint or coefficient
    with an invalid index."""

    pass


class UnknownSolver(KeyError):
    """Error raised by the solver factory for an unregistered solver name."""

    pass


class BoundConstraintsError(Exception):
    """Exception that signals a problem with bound constraints."""

    pass


class GeneralConstraintsError(Exception):
    """Exception that signals a problem with general constraints."""

    pass
