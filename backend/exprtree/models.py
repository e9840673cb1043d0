"""
Pydantic models for Expression Trees.

Defines the interchange document that external rule stores exchange,
plus the evaluator configuration schema.
"""

from __future__ import annotations

from typing import Any, List, Optional, Union

from pydantic import BaseModel, Field, StrictBool, StrictFloat, StrictInt, StrictStr, field_validator

from .node import Node, OpKind

# 1, 1.0 and True must not coerce into one another
ScalarValue = Optional[Union[StrictBool, StrictInt, StrictFloat, StrictStr]]

_KNOWN_KINDS = {int(k) for k in OpKind}


class NodeDocument(BaseModel):
    """
    One node of a serialized expression tree.

    Field names and kind codes are the wire contract:
    op_type 0=Literal, 1=LogicOp, 2=IntCompare, 3=StrCompare.
    """

    op_type: int = Field(default=0, description="Node kind code")
    value: ScalarValue = Field(default=None, description="Literal value or operator symbol")
    # Raw child documents, validated one node at a time by the serializer
    child: Optional[List[Any]] = Field(
        default=None,
        description="Ordered child documents, null when the node has none",
    )

    @field_validator("op_type", mode="before")
    @classmethod
    def validate_op_type(cls, v: Any) -> int:
        """Accept an integer code or an OpKind name."""
        if isinstance(v, str):
            try:
                return int(OpKind[v])
            except KeyError:
                raise ValueError(
                    f"Unknown op_type name '{v}', expected one of "
                    f"{', '.join(k.name for k in OpKind)}"
                ) from None
        if isinstance(v, bool) or not isinstance(v, int):
            raise ValueError("op_type must be an integer code or a kind name")
        return v

    def to_node(self) -> Node:
        """Build the node for this document, without its children."""
        kind: int = self.op_type
        # Unknown codes survive loading and fail at evaluation
        if kind in _KNOWN_KINDS:
            kind = OpKind(kind)
        return Node(
            kind=kind,
            value=self.value,
        )


class EvaluatorConfig(BaseModel):
    """Evaluator configuration."""

    placeholder_prefix: StrictStr = Field(
        default="$",
        min_length=1,
        description="Marker that turns a string literal like '$2' into a positional argument",
    )
