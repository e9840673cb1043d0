"""
Operand Values.

Operands are limited to a closed set of scalar kinds. Coercion between
them is explicit: integers and decimals coerce to each other for numeric
comparison, and nothing crosses between strings and numbers.
"""

from __future__ import annotations

import math
import numbers
from enum import Enum
from typing import Any, Optional

from .errors import CoercionError, OperandTypeError


class ValueKind(Enum):
    """Kinds of operand value."""
    INTEGER = "integer"
    FLOAT = "float"
    STRING = "string"
    BOOLEAN = "boolean"


def classify(value: Any) -> Optional[ValueKind]:
    """
    Classify a value into its operand kind.

    Args:
        value: Any literal or argument value.

    Returns:
        The ValueKind, or None if the value is outside the operand union.
    """
    # bool is an int subclass, check it first
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, numbers.Integral):
        return ValueKind.INTEGER
    if isinstance(value, numbers.Real):
        return ValueKind.FLOAT
    if isinstance(value, str):
        return ValueKind.STRING
    return None


def to_int(value: Any) -> int:
    """
    Coerce an operand to an integer for numeric comparison.

    Decimals are truncated toward zero.

    Raises:
        CoercionError: If the value is not an integer or a finite decimal.
    """
    kind = classify(value)
    if kind is ValueKind.INTEGER:
        return int(value)
    if kind is ValueKind.FLOAT:
        if math.isnan(value) or math.isinf(value):
            raise CoercionError(f"cannot coerce to number: {value!r}")
        return int(value)
    raise CoercionError(f"cannot coerce to number: {type(value).__name__}")


def to_str(value: Any) -> str:
    """
    Require an operand to already be a string.

    Raises:
        OperandTypeError: If the value is not a string.
    """
    if classify(value) is ValueKind.STRING:
        return value
    raise OperandTypeError(
        f"wrong operand type: expected string, got {type(value).__name__} {value!r}"
    )
