"""
Exceptions raised by exactlp.

Numeric domain errors (division by zero, fixed-width overflow) and I/O
errors are not wrapped: they surface as the built-in exceptions raised by
the numeric type or the file object.
"""


class ExactLPError(Exception):
    """
    Base class for errors raised by this package.
    """
    pass


class ExpressionTypeError(ExactLPError, TypeError):
    """
    An operand cannot take part in a linear expression: a non-numeric
    scalar, a product of two expressions, or operands from two different
    numeric fields.
    """
    pass


class SolverError(ExactLPError):
    """
    The solver backend could not be run or produced no result file.
    """
    pass
