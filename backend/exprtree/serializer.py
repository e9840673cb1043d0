"""
Node Tree Serialization.

Trees serialize to documents of the form:

    {"op_type": 2, "value": ">?", "child": [
        {"op_type": 0, "value": 3600, "child": null},
        {"op_type": 0, "value": 100, "child": null}]}

Leaves carry ``child: null``. Literal value types survive a round trip
exactly, so an integer never comes back as a float. Trees deeper than
MAX_DEPTH levels are refused both when writing and when reading.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import ValidationError

from .errors import (
    DeserializationError,
    NestingDepthError,
    OperandTypeError,
    UnsupportedKindError,
)
from .models import NodeDocument
from .node import Node
from .values import ValueKind, classify

FIELD_KIND = "op_type"
FIELD_VALUE = "value"
FIELD_CHILDREN = "child"

# Levels of nesting, counting the root as 1
MAX_DEPTH = 100


def _export_kind(kind: Any) -> int:
    if isinstance(kind, bool) or not isinstance(kind, int):
        raise UnsupportedKindError(f"cannot serialize node kind {kind!r}")
    return int(kind)


def _export_value(value: Any) -> Any:
    if value is None:
        return None
    kind = classify(value)
    if kind is ValueKind.BOOLEAN:
        return bool(value)
    if kind is ValueKind.INTEGER:
        return int(value)
    if kind is ValueKind.FLOAT:
        return float(value)
    if kind is ValueKind.STRING:
        return str(value)
    raise OperandTypeError(f"cannot serialize value of type {type(value).__name__}")


def to_dict(node: Node) -> Dict[str, Any]:
    """
    Convert a node tree to a plain document.

    Raises:
        NestingDepthError: If the tree is deeper than MAX_DEPTH.
        UnsupportedKindError: If a node kind is not an integer code.
        OperandTypeError: If a value is outside the scalar operand types.
    """
    depth = node.depth()
    if depth > MAX_DEPTH:
        raise NestingDepthError(
            f"cannot serialize a tree {depth} levels deep, the limit is {MAX_DEPTH}"
        )
    return _to_dict(node)


def _to_dict(node: Node) -> Dict[str, Any]:
    return {
        FIELD_KIND: _export_kind(node.kind),
        FIELD_VALUE: _export_value(node.value),
        FIELD_CHILDREN: [_to_dict(c) for c in node.children] or None,
    }


def _load_document(data: Any, depth: int) -> NodeDocument:
    try:
        return NodeDocument.model_validate(data)
    except ValidationError as e:
        raise DeserializationError(f"Invalid node document at depth {depth}: {e}") from e


def from_dict(data: Any) -> Node:
    """
    Build a node tree from a plain document.

    Nodes are validated one at a time, without recursion.

    Raises:
        DeserializationError: If the document is malformed or deeper than MAX_DEPTH.
    """
    document = _load_document(data, 1)
    root = document.to_node()
    pending = [(root, document.child or [], 2)]
    while pending:
        parent, children, depth = pending.pop()
        if children and depth > MAX_DEPTH:
            raise DeserializationError(
                f"Node document is deeper than the limit of {MAX_DEPTH} levels"
            )
        for child_data in children:
            child_document = _load_document(child_data, depth)
            child = child_document.to_node()
            parent.add_child(child)
            if child_document.child:
                pending.append((child, child_document.child, depth + 1))
    return root


def to_json(node: Node, indent: Optional[int] = None) -> str:
    """Serialize a node tree to JSON."""
    return json.dumps(to_dict(node), indent=indent)


def from_json(content: Union[str, bytes]) -> Node:
    """
    Deserialize a node tree from JSON.

    Raises:
        DeserializationError: If the content is not valid JSON or not a node document.
    """
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise DeserializationError(f"JSON parse error: {e}") from e
    except RecursionError as e:
        raise DeserializationError("JSON document is nested too deeply") from e
    return from_dict(data)


def to_yaml(node: Node) -> str:
    """Serialize a node tree to YAML."""
    return yaml.safe_dump(to_dict(node), sort_keys=False, allow_unicode=True)


def from_yaml(content: str) -> Node:
    """
    Deserialize a node tree from YAML.

    Raises:
        DeserializationError: If the content is not valid YAML or not a node document.
    """
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise DeserializationError(f"YAML parse error: {e}") from e
    except RecursionError as e:
        raise DeserializationError("YAML document is nested too deeply") from e
    if data is None:
        raise DeserializationError("Document is empty")
    return from_dict(data)
