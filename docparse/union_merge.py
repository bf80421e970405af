"""
Union reconciliation across the whole extracted corpus.

The docs often list every concrete variant of a family as alternatives
("InputMediaAnimation, InputMediaDocument, InputMediaAudio, InputMediaPhoto
and InputMediaVideo"). When the variants share a name prefix that is itself
a documented type, the union collapses to a reference to that base type.
Variants sharing a naming convention without a documented base are merged
into one object carrying every field of every variant.

Needs the complete type catalog, so it runs only after all types are parsed.
"""

import logging
from typing import Iterable, List, Mapping, Optional, Sequence

from docparse.entry_parser import TypeDef
from docparse.type_refs import (
    MIN_UNION_PARTS,
    ArrayNode,
    ObjectNode,
    ObjectProperty,
    RefNode,
    SchemaNode,
    UnionNode,
    union_of,
)

logger = logging.getLogger(__name__)

# Merge targets that are valid even though the page never defines them as entries
IMPLICIT_CONTAINER_TYPES = ("ResponseParameters",)


def common_prefix(names: Sequence[str]) -> str:
    if not names:
        return ""
    prefix = names[0]
    for name in names[1:]:
        while not name.startswith(prefix):
            prefix = prefix[:-1]
            if not prefix:
                return ""
    return prefix


class UnionReconciler:
    """Collapses near-duplicate union groups using a read-only type catalog"""

    def __init__(self, catalog: Mapping[str, TypeDef],
                 implicit_types: Iterable[str] = IMPLICIT_CONTAINER_TYPES):
        self.catalog = catalog
        self.valid_targets = set(catalog) | set(implicit_types)

    def reconcile(self, node: Optional[SchemaNode]) -> Optional[SchemaNode]:
        if isinstance(node, ArrayNode):
            return ArrayNode(items=self.reconcile(node.items))
        if not isinstance(node, UnionNode):
            return node

        refs = [b for b in node.branches if isinstance(b, RefNode)]
        others = [b for b in node.branches if not isinstance(b, RefNode)]
        if len(refs) < MIN_UNION_PARTS:
            return node

        names = [r.name for r in refs]
        prefix = common_prefix(names)
        if not prefix:
            # No shared naming convention: genuine alternatives
            return node

        if prefix in self.valid_targets:
            logger.debug(f"Merged union {names} into {prefix}")
            return union_of([RefNode(prefix)] + others, exclusive=node.exclusive)

        if not others:
            logger.debug(f"Merged union {names} into an object of their properties")
            return self.merge_properties(refs)

        return node

    def merge_properties(self, refs: List[RefNode]) -> ObjectNode:
        """Object holding every field of every referenced type, last definition wins."""
        properties = {}
        for ref in refs:
            type_def = self.catalog.get(ref.name)
            if type_def is None:
                continue
            for field_def in type_def.fields:
                properties[field_def.name] = ObjectProperty(
                    name=field_def.name,
                    schema=field_def.type_ref.to_schema(),
                    description=field_def.description,
                )
        return ObjectNode(properties=tuple(properties.values()))


def reconcile(node: Optional[SchemaNode], catalog: Mapping[str, TypeDef]) -> Optional[SchemaNode]:
    return UnionReconciler(catalog).reconcile(node)
