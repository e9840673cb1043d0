"""
Exprtree: boolean expression trees for rule evaluation.

This package provides a tree of typed nodes encoding logic operations,
integer comparisons and string comparisons over literal or positional
operands, with an interpreter and a JSON/YAML interchange format.
"""

from .errors import (
    ExpressionError,
    ArityError,
    CoercionError,
    OperandTypeError,
    UnsupportedOperatorError,
    UnsupportedKindError,
    InsufficientArgumentsError,
    NestingDepthError,
    DeserializationError,
)
from .values import ValueKind, classify, to_int, to_str
from .node import (
    Node,
    OpKind,
    AND,
    OR,
    NUM_GTE,
    NUM_GT,
    NUM_EQ,
    NUM_LT,
    NUM_LTE,
    STR_EQ,
    STR_CONTAINS,
    LOGIC_OPERATORS,
    INT_COMPARE_OPERATORS,
    STR_COMPARE_OPERATORS,
    new_node,
    new_placeholder,
    literal,
    placeholder,
    logic,
    and_,
    or_,
    int_compare,
    str_compare,
)
from .models import NodeDocument, EvaluatorConfig
from .config import (
    DEFAULT_PLACEHOLDER_PREFIX,
    EvaluationContext,
    get_default_context,
    set_default_placeholder_prefix,
    reset_default_context,
)
from .evaluator import EvaluationResult, evaluate, try_evaluate
from .serializer import (
    MAX_DEPTH,
    to_dict,
    from_dict,
    to_json,
    from_json,
    to_yaml,
    from_yaml,
)

__version__ = "1.0.0"
__all__ = [
    # Errors
    "ExpressionError",
    "ArityError",
    "CoercionError",
    "OperandTypeError",
    "UnsupportedOperatorError",
    "UnsupportedKindError",
    "InsufficientArgumentsError",
    "NestingDepthError",
    "DeserializationError",
    # Values
    "ValueKind",
    "classify",
    "to_int",
    "to_str",
    # Nodes
    "Node",
    "OpKind",
    "AND",
    "OR",
    "NUM_GTE",
    "NUM_GT",
    "NUM_EQ",
    "NUM_LT",
    "NUM_LTE",
    "STR_EQ",
    "STR_CONTAINS",
    "LOGIC_OPERATORS",
    "INT_COMPARE_OPERATORS",
    "STR_COMPARE_OPERATORS",
    "new_node",
    "new_placeholder",
    "literal",
    "placeholder",
    "logic",
    "and_",
    "or_",
    "int_compare",
    "str_compare",
    # Models
    "NodeDocument",
    "EvaluatorConfig",
    # Configuration
    "DEFAULT_PLACEHOLDER_PREFIX",
    "EvaluationContext",
    "get_default_context",
    "set_default_placeholder_prefix",
    "reset_default_context",
    # Evaluation
    "EvaluationResult",
    "evaluate",
    "try_evaluate",
    # Serialization
    "MAX_DEPTH",
    "to_dict",
    "from_dict",
    "to_json",
    "from_json",
    "to_yaml",
    "from_yaml",
]
