"""
Expression Node.

A node tree encodes boolean rules such as
``user_count > 100 AND version == '1.1.2'``:

    and_(
        int_compare(NUM_GT, "$1", 100),
        str_compare(STR_EQ, "$2", "1.1.2"),
    )

Nodes are built with unchecked setters; malformed trees are only
reported when evaluated.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import TYPE_CHECKING, Any, List, Optional

if TYPE_CHECKING:
    from .config import EvaluationContext


class OpKind(IntEnum):
    """Node kind codes. The values are part of the interchange format."""
    LITERAL = 0
    LOGIC_OP = 1
    INT_COMPARE = 2
    STR_COMPARE = 3


# Logic operators
AND = "AND"
OR = "OR"

# Integer comparison operators
NUM_GTE = ">=?"
NUM_GT = ">?"
NUM_EQ = "==?"
NUM_LT = "<?"
NUM_LTE = "<=?"

# String comparison operators
STR_EQ = "==?"
STR_CONTAINS = "c?"

LOGIC_OPERATORS = (AND, OR)
INT_COMPARE_OPERATORS = (NUM_GTE, NUM_GT, NUM_EQ, NUM_LT, NUM_LTE)
STR_COMPARE_OPERATORS = (STR_EQ, STR_CONTAINS)


@dataclass(eq=False)
class Node:
    """
    A tagged expression tree element.

    Attributes:
        kind: OpKind code. Stored as given, unknown codes fail at evaluation.
        value: Literal value for LITERAL nodes, operator symbol otherwise.
        children: Ordered, exclusively owned child nodes.
    """

    kind: int = OpKind.LITERAL
    value: Any = None
    children: List[Node] = field(default_factory=list)

    def add_child(self, child: Node) -> None:
        """Append a child node."""
        self.children.append(child)

    def set_kind(self, kind: int) -> None:
        """Set the node kind."""
        self.kind = kind

    def set_value(self, value: Any) -> None:
        """Set the literal value or operator symbol."""
        self.value = value

    def evaluate(self, *args: Any, context: Optional[EvaluationContext] = None) -> Any:
        """
        Evaluate this tree with positional arguments.

        See evaluator.evaluate.
        """
        from .evaluator import evaluate
        return evaluate(self, args, context=context)

    def serialize(self) -> str:
        """Serialize this tree to JSON."""
        from .serializer import to_json
        return to_json(self)

    def copy(self) -> Node:
        """Deep copy of this node and its subtree."""
        return Node(
            kind=self.kind,
            value=self.value,
            children=[c.copy() for c in self.children],
        )

    def num_nodes(self) -> int:
        """Count total nodes in this subtree."""
        return 1 + sum(c.num_nodes() for c in self.children)

    def depth(self) -> int:
        """Number of levels in this subtree; a leaf has depth 1."""
        deepest = 0
        pending = [(self, 1)]
        while pending:
            node, level = pending.pop()
            deepest = max(deepest, level)
            pending.extend((c, level + 1) for c in node.children)
        return deepest

    def __eq__(self, other: object) -> bool:
        # Values must match in type too, so 1, 1.0 and True stay distinct
        if not isinstance(other, Node):
            return NotImplemented
        return (
            self.kind == other.kind
            and type(self.value) is type(other.value)
            and self.value == other.value
            and self.children == other.children
        )

    def __repr__(self) -> str:
        try:
            kind = OpKind(self.kind).name
        except ValueError:
            kind = repr(self.kind)
        if self.children:
            children_repr = ", ".join(repr(c) for c in self.children)
            return f"Node({kind}, {self.value!r}, [{children_repr}])"
        return f"Node({kind}, {self.value!r})"


def new_node() -> Node:
    """Create an empty literal node."""
    return Node()


def literal(value: Any) -> Node:
    """Create a literal leaf."""
    return Node(kind=OpKind.LITERAL, value=value)


def placeholder(pos: int, context: Optional[EvaluationContext] = None) -> Node:
    """Create a literal leaf referencing the pos-th evaluation argument."""
    return literal(new_placeholder(pos, context))


def new_placeholder(pos: int, context: Optional[EvaluationContext] = None) -> str:
    """
    Build a placeholder string for a 1-based argument position.

    Uses the default context's prefix unless a context is given.
    """
    if context is None:
        from .config import get_default_context
        context = get_default_context()
    return context.new_placeholder(pos)


def _as_node(operand: Any) -> Node:
    if isinstance(operand, Node):
        return operand
    return literal(operand)


def logic(op: str, *children: Any) -> Node:
    """Create a logic operator node."""
    return Node(kind=OpKind.LOGIC_OP, value=op, children=[_as_node(c) for c in children])


def and_(*children: Any) -> Node:
    """Create an AND node."""
    return logic(AND, *children)


def or_(*children: Any) -> Node:
    """Create an OR node."""
    return logic(OR, *children)


def int_compare(op: str, left: Any, right: Any) -> Node:
    """Create an integer comparison node. Plain operands become literals."""
    return Node(kind=OpKind.INT_COMPARE, value=op, children=[_as_node(left), _as_node(right)])


def str_compare(op: str, left: Any, right: Any) -> Node:
    """Create a string comparison node. Plain operands become literals."""
    return Node(kind=OpKind.STR_COMPARE, value=op, children=[_as_node(left), _as_node(right)])
