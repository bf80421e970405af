#!/usr/bin/env python3
"""
Type reference resolution for the Bot API documentation.

Turns the informal type strings found in parameter/field tables and in
return-type prose ("Array of Array of PhotoSize", "Integer or String",
"True") into SchemaNode trees:

- PrimitiveNode: string / integer / number / boolean scalars
- ArrayNode: "Array of X", nested to any depth
- RefNode: a named reference to another documented type
- UnionNode: "A or B", "A and B", "A, B and C"
- ObjectNode: only produced by union merging (see union_merge)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Sequence, Tuple, Union

ARRAY_PREFIX = "Array of "
MIN_UNION_PARTS = 2


# =========================
#  Schema nodes
# =========================
@dataclass(frozen=True)
class EmptyNode:
    """Placeholder for a missing or blank type string."""


@dataclass(frozen=True)
class PrimitiveNode:
    """Scalar type with optional OpenAPI format and default."""
    kind: str  # "string" | "integer" | "number" | "boolean"
    format: Optional[str] = None
    default: Any = None


@dataclass(frozen=True)
class ArrayNode:
    items: "SchemaNode"

    def __post_init__(self):
        if self.items is None:
            raise ValueError("ArrayNode requires an item node")


@dataclass(frozen=True)
class RefNode:
    name: str

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ValueError("RefNode requires a non-empty type name")


@dataclass(frozen=True)
class UnionNode:
    """Alternative types. exclusive=True means exactly one branch applies."""
    branches: Tuple["SchemaNode", ...]
    exclusive: bool = True

    def __post_init__(self):
        if len(self.branches) < MIN_UNION_PARTS:
            raise ValueError("UnionNode requires at least two branches; use union_of()")


@dataclass(frozen=True)
class ObjectProperty:
    name: str
    schema: "SchemaNode"
    description: str = ""


@dataclass(frozen=True)
class ObjectNode:
    """Anonymous object; no properties means an untyped generic object."""
    properties: Tuple[ObjectProperty, ...] = ()


SchemaNode = Union[EmptyNode, PrimitiveNode, ArrayNode, RefNode, UnionNode, ObjectNode]


def union_of(branches: Sequence[SchemaNode], exclusive: bool = True) -> SchemaNode:
    """Build a union, collapsing a single branch to the branch itself."""
    branches = tuple(branches)
    if not branches:
        return EmptyNode()
    if len(branches) == 1:
        return branches[0]
    return UnionNode(branches=branches, exclusive=exclusive)


# Scalar keyword table, matched case-insensitively
_SCALARS = {
    "string": PrimitiveNode("string"),
    "integer": PrimitiveNode("integer"),
    "int": PrimitiveNode("integer"),
    "integer64": PrimitiveNode("integer", format="int64"),
    "int64": PrimitiveNode("integer", format="int64"),
    "float": PrimitiveNode("number"),
    "float number": PrimitiveNode("number"),
    "number": PrimitiveNode("number"),
    "boolean": PrimitiveNode("boolean"),
    "bool": PrimitiveNode("boolean"),
    # "True" documents calls that only confirm success
    "true": PrimitiveNode("boolean", default=True),
}


# =========================
#  Raw type reference
# =========================
@dataclass(frozen=True)
class TypeRef:
    """An unresolved type string exactly as it appears in the docs."""
    raw_type: str

    def union_parts(self) -> Optional[List[str]]:
        """
        Split a union type string into its parts.

        Supports "A or B", "A and B", "A, B and C" and "A, B, C".

        Returns:
            Trimmed non-empty parts when two or more are present, otherwise None
        """
        raw = (self.raw_type or "").strip()
        if not raw:
            return None

        norm = raw.replace(" or ", ", ").replace(" and ", ", ")
        if "," not in norm:
            return None

        parts = [p.strip() for p in norm.split(",")]
        parts = [p for p in parts if p]
        if len(parts) < MIN_UNION_PARTS:
            return None
        return parts

    def to_schema(self) -> SchemaNode:
        return resolve_type_ref(self)

    def contains_type(self, target: str) -> bool:
        """Whether the type (through arrays and unions) references target, case-insensitively."""
        target = (target or "").strip().lower()
        if not target:
            return False
        return self._contains(lambda raw: raw.lower() == target)

    def contains_type_with_prefix(self, prefix: str) -> bool:
        """Whether any referenced type name starts with prefix, case-insensitively."""
        prefix = (prefix or "").strip().lower()
        if not prefix:
            return False
        return self._contains(lambda raw: raw.lower().startswith(prefix))

    def _contains(self, predicate: Callable[[str], bool]) -> bool:
        raw = (self.raw_type or "").strip()
        if not raw:
            return False

        if raw.lower().startswith(ARRAY_PREFIX.lower()):
            return TypeRef(raw[len(ARRAY_PREFIX):].strip())._contains(predicate)

        parts = self.union_parts()
        if parts is not None:
            return any(TypeRef(part)._contains(predicate) for part in parts)

        return predicate(raw)


def resolve_type_ref(type_ref: Optional[TypeRef]) -> SchemaNode:
    """
    Convert a raw type reference into a SchemaNode.

    Order of checks: blank input, "Array of" prefix, union connectors,
    scalar keywords, and finally a named reference.
    """
    if type_ref is None or not (type_ref.raw_type or "").strip():
        return EmptyNode()

    raw = type_ref.raw_type.strip()

    if raw.startswith(ARRAY_PREFIX) or raw.lower().startswith("array of array of "):
        inner = raw[len(ARRAY_PREFIX):].strip()
        if inner.lower().startswith(ARRAY_PREFIX.lower()):
            inner = ARRAY_PREFIX + inner[len(ARRAY_PREFIX):].strip()
        return ArrayNode(items=resolve_type_ref(TypeRef(inner)))

    parts = type_ref.union_parts()
    if parts is not None:
        return union_of([resolve_type_ref(TypeRef(p)) for p in parts], exclusive=True)

    scalar = _SCALARS.get(raw.lower())
    if scalar is not None:
        return scalar

    return RefNode(name=raw)
