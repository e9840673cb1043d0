"""
Expression Errors.

Every evaluation failure is reported as a subclass of ExpressionError.
The first error raised aborts the whole evaluation.
"""

from __future__ import annotations


class ExpressionError(ValueError):
    """Base class for expression tree failures."""


class ArityError(ExpressionError):
    """An operator node has the wrong number of children."""


class CoercionError(ExpressionError):
    """An operand cannot be coerced to a number."""


class OperandTypeError(ExpressionError):
    """An operand has the wrong type for the operator."""


class UnsupportedOperatorError(ExpressionError):
    """The operator symbol is not recognized for the node kind."""


class UnsupportedKindError(ExpressionError):
    """The node kind is not recognized, or a literal cannot be resolved."""


class InsufficientArgumentsError(ExpressionError):
    """A placeholder references a position past the supplied arguments."""


class NestingDepthError(ExpressionError):
    """A tree is nested too deeply to evaluate or serialize."""


class DeserializationError(ExpressionError):
    """An interchange document could not be turned into a node tree."""
