"""
Expression Evaluator.

Evaluates node trees depth-first against positional arguments. The tree
is never mutated, so one tree may be evaluated repeatedly and from
several call sites at once.
"""

from __future__ import annotations

import logging
import operator
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Sequence, Tuple

from .config import EvaluationContext, get_default_context
from .errors import (
    ArityError,
    ExpressionError,
    InsufficientArgumentsError,
    NestingDepthError,
    UnsupportedKindError,
    UnsupportedOperatorError,
)
from .node import (
    LOGIC_OPERATORS,
    NUM_EQ,
    NUM_GT,
    NUM_GTE,
    NUM_LT,
    NUM_LTE,
    OR,
    STR_CONTAINS,
    STR_EQ,
    Node,
    OpKind,
)
from .values import to_int, to_str

logger = logging.getLogger(__name__)

_INT_COMPARATORS: Dict[str, Callable[[int, int], bool]] = {
    NUM_GTE: operator.ge,
    NUM_GT: operator.gt,
    NUM_EQ: operator.eq,
    NUM_LT: operator.lt,
    NUM_LTE: operator.le,
}

_STR_COMPARATORS: Dict[str, Callable[[str, str], bool]] = {
    STR_EQ: operator.eq,
    # left contains right
    STR_CONTAINS: operator.contains,
}

_PLACEHOLDER_POSITION = re.compile(r"\+?[0-9]+")


@dataclass
class EvaluationResult:
    """Outcome of an evaluation: a value on success, the error otherwise."""
    success: bool
    value: Any = None
    error: Optional[ExpressionError] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "success": self.success,
            "value": self.value,
            "error": str(self.error) if self.error else None,
        }


def evaluate(
    node: Node,
    args: Optional[Sequence[Any]] = (),
    context: Optional[EvaluationContext] = None,
) -> Any:
    """
    Evaluate a node tree.

    Args:
        node: Root of the tree.
        args: Positional values addressed by placeholders, 1-based. None means no arguments.
        context: Evaluation settings; the process default when omitted.

    Returns:
        The result value, normally a bool.

    Raises:
        ExpressionError: On the first failure along the evaluated path.
        NestingDepthError: If the tree is too deep for the interpreter stack.
    """
    if args is None:
        args = ()
    if isinstance(args, (str, bytes)):
        raise ValueError(f"Expected a sequence of arguments, got {type(args).__name__}")

    ctx = context or get_default_context()
    try:
        return _evaluate(node, tuple(args), ctx)
    except ExpressionError as e:
        logger.debug("Evaluation failed for node kind %r: %s", node.kind, e)
        raise
    except RecursionError:
        error = NestingDepthError("tree is nested too deeply to evaluate")
        logger.debug("Evaluation failed for node kind %r: %s", node.kind, error)
        raise error from None


def try_evaluate(
    node: Node,
    args: Optional[Sequence[Any]] = (),
    context: Optional[EvaluationContext] = None,
) -> EvaluationResult:
    """
    Evaluate a node tree, returning failures instead of raising them.

    Returns:
        EvaluationResult with either the value or the error.
    """
    try:
        value = evaluate(node, args, context)
    except ExpressionError as e:
        return EvaluationResult(success=False, error=e)
    return EvaluationResult(success=True, value=value)


def _evaluate(node: Node, args: Tuple[Any, ...], ctx: EvaluationContext) -> Any:
    kind = node.kind
    if isinstance(kind, bool) or not isinstance(kind, int) or kind not in _HANDLERS:
        raise UnsupportedKindError(f"unsupported node kind {kind!r}")
    return _HANDLERS[kind](node, args, ctx)


def _evaluate_literal(node: Node, args: Tuple[Any, ...], ctx: EvaluationContext) -> Any:
    value = node.value
    # Without arguments, placeholder-looking literals pass through verbatim
    if not args:
        return value

    prefix = ctx.placeholder_prefix
    if not isinstance(value, str) or not value.startswith(prefix):
        return value

    digits = value[len(prefix):]
    if not _PLACEHOLDER_POSITION.fullmatch(digits) or int(digits) < 1:
        raise UnsupportedKindError(f"unresolvable placeholder {value!r}")

    pos = int(digits)
    if pos > len(args):
        raise InsufficientArgumentsError(
            f"insufficient arguments: {value!r} needs {pos}, got {len(args)}"
        )
    return args[pos - 1]


def _evaluate_logic(node: Node, args: Tuple[Any, ...], ctx: EvaluationContext) -> bool:
    op = node.value
    if not isinstance(op, str) or op not in LOGIC_OPERATORS:
        raise UnsupportedOperatorError(f"unsupported logic operator {op!r}")
    if not node.children:
        raise ArityError(f"{op} requires at least one child")

    if op == OR:
        for child in node.children:
            # Non-boolean results count as not true
            if _evaluate(child, args, ctx) is True:
                return True
        return False

    for child in node.children:
        # Non-boolean results count as not false and are skipped
        if _evaluate(child, args, ctx) is False:
            return False
    return True


def _evaluate_operands(
    node: Node,
    args: Tuple[Any, ...],
    ctx: EvaluationContext,
    coerce: Callable[[Any], Any],
) -> Tuple[Any, Any]:
    if len(node.children) != 2:
        raise ArityError(
            f"comparison {node.value!r} requires two children, got {len(node.children)}"
        )
    left = coerce(_evaluate(node.children[0], args, ctx))
    right = coerce(_evaluate(node.children[1], args, ctx))
    return left, right


def _compare(
    op: Any,
    comparators: Dict[str, Callable[[Any, Any], bool]],
    label: str,
    left: Any,
    right: Any,
) -> bool:
    compare = comparators.get(op) if isinstance(op, str) else None
    if compare is None:
        raise UnsupportedOperatorError(
            f"unsupported comparison operator {op!r} for {label} comparison"
        )
    return compare(left, right)


def _evaluate_int_compare(node: Node, args: Tuple[Any, ...], ctx: EvaluationContext) -> bool:
    left, right = _evaluate_operands(node, args, ctx, to_int)
    return _compare(node.value, _INT_COMPARATORS, "integer", left, right)


def _evaluate_str_compare(node: Node, args: Tuple[Any, ...], ctx: EvaluationContext) -> bool:
    left, right = _evaluate_operands(node, args, ctx, to_str)
    return _compare(node.value, _STR_COMPARATORS, "string", left, right)


# One handler per OpKind
_HANDLERS: Dict[int, Callable[[Node, Tuple[Any, ...], EvaluationContext], Any]] = {
    OpKind.LITERAL: _evaluate_literal,
    OpKind.LOGIC_OP: _evaluate_logic,
    OpKind.INT_COMPARE: _evaluate_int_compare,
    OpKind.STR_COMPARE: _evaluate_str_compare,
}
