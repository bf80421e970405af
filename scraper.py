#!/usr/bin/env python3
"""
Bot API documentation scraper.

Drives one extraction run over a parsed documentation page:
discovery -> per-entry extraction -> type catalog -> type resolution ->
union reconciliation -> SpecDocument records for the OpenAPI renderer.

All types are extracted before anything is resolved, because union
reconciliation checks merge targets against the complete catalog.
"""

import logging
from typing import Dict, List, Optional, Tuple

from config import ScraperOptions
from docparse.document import DocumentView, element_text
from docparse.entry_parser import (
    EntryNotFoundError,
    MethodDef,
    MethodParser,
    ReturnTypeNotFoundError,
    TypeDef,
    TypeParser,
)
from docparse.nav_parser import ExtractionTarget, NavParser, split_targets
from docparse.type_refs import PrimitiveNode, SchemaNode, TypeRef
from docparse.union_merge import IMPLICIT_CONTAINER_TYPES, UnionReconciler
from openapi_spec import (
    MethodParamSpec,
    MethodSpec,
    SpecDocument,
    TypeFieldSpec,
    TypeSpec,
)

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Telegram Bot API"
DEFAULT_VERSION = "0.0.0"
VERSION_PREFIX = "Bot API "

# Rendered by openapi_spec as a binary upload schema
SKIPPED_TYPES = {"InputFile"}

MULTIPART_TYPE = "InputFile"
MULTIPART_TYPE_PREFIXES = ("InputMedia", "InputSticker")

RESPONSE_PARAMETERS = TypeSpec(
    name="ResponseParameters",
    tag="Making requests",
    description=["Describes why a request was unsuccessful."],
    fields=[
        TypeFieldSpec(
            name="migrate_to_chat_id",
            description="Optional. The group has been migrated to a supergroup with the specified identifier.",
            type_schema=PrimitiveNode("integer"),
        ),
        TypeFieldSpec(
            name="retry_after",
            description="Optional. In case of exceeding flood control, the number of seconds left to wait "
                        "before the request can be repeated.",
            type_schema=PrimitiveNode("integer"),
        ),
    ],
)


def supports_multipart(method: MethodDef) -> bool:
    """Whether any parameter can carry a file upload."""
    for param in method.params.values():
        if param.type_ref.contains_type(MULTIPART_TYPE):
            return True
        if any(param.type_ref.contains_type_with_prefix(p) for p in MULTIPART_TYPE_PREFIXES):
            return True
    return False


class BotApiScraper:
    """Converts a parsed Bot API page into resolved method and type records"""

    def __init__(self, document: DocumentView, options: Optional[ScraperOptions] = None):
        self.document = document
        self.options = options or ScraperOptions()
        self.nav_parser = NavParser(section_anchors=self.options.section_anchors)
        self.method_parser = MethodParser(document)
        self.type_parser = TypeParser(document)
        self.reconciler: Optional[UnionReconciler] = None

    def extract_title(self) -> str:
        title = self.document.first_text("h1") or self.document.first_text("title")
        return title or DEFAULT_TITLE

    def extract_version(self) -> str:
        for strong in self.document.select("p strong"):
            text = element_text(strong)
            if text.startswith(VERSION_PREFIX):
                return text[len(VERSION_PREFIX):].strip() or DEFAULT_VERSION
        return DEFAULT_VERSION

    def extract_entries(self, targets: List[ExtractionTarget]) -> Tuple[List[TypeDef], List[MethodDef]]:
        """
        Extract every discovered target, skipping entries that fail.

        Args:
            targets: Discovered extraction targets

        Returns:
            (types, methods) each sorted and de-duplicated by name
        """
        type_targets, method_targets = split_targets(targets)

        types: Dict[str, TypeDef] = {}
        for target in type_targets:
            try:
                type_def = self.type_parser.parse(target.anchor)
            except EntryNotFoundError as e:
                logger.warning(f"Skipping type {target.anchor}: {e}")
                continue
            if type_def.name in SKIPPED_TYPES:
                continue
            types.setdefault(type_def.name, type_def)

        methods: Dict[str, MethodDef] = {}
        for target in method_targets:
            try:
                method = self.method_parser.parse(target.anchor)
            except (EntryNotFoundError, ReturnTypeNotFoundError) as e:
                logger.warning(f"Skipping method {target.anchor}: {e}")
                continue
            methods.setdefault(method.name, method)

        return ([types[name] for name in sorted(types)],
                [methods[name] for name in sorted(methods)])

    def resolve(self, type_ref: Optional[TypeRef]) -> Optional[SchemaNode]:
        if type_ref is None:
            return None
        node = type_ref.to_schema()
        if self.reconciler is not None:
            node = self.reconciler.reconcile(node)
        return node

    def build_type(self, type_def: TypeDef) -> TypeSpec:
        return TypeSpec(
            name=type_def.name,
            tag=type_def.tag,
            description=type_def.description,
            notes=type_def.notes,
            fields=[
                TypeFieldSpec(
                    name=f.name,
                    description=f.description,
                    required=f.required,
                    type_schema=self.resolve(f.type_ref),
                )
                for f in type_def.fields
            ],
        )

    def build_method(self, method: MethodDef) -> MethodSpec:
        params = [
            MethodParamSpec(
                name=p.name,
                description=p.description,
                required=p.required,
                type_schema=self.resolve(p.type_ref),
            )
            for p in sorted(method.params.values(), key=lambda p: p.name)
        ]
        return MethodSpec(
            name=method.name,
            tags=method.tags,
            description=method.description,
            notes=method.notes,
            params=params,
            return_schema=self.resolve(method.return_type),
            supports_multipart=supports_multipart(method),
        )

    def build(self) -> SpecDocument:
        """
        Run the full extraction pipeline.

        Returns:
            SpecDocument with methods and types sorted by name
        """
        title = self.extract_title()
        version = self.extract_version()
        logger.info(f"Document: {title} (version {version})")

        targets = self.nav_parser.discover(self.document)
        types, methods = self.extract_entries(targets)

        catalog = {t.name: t for t in types}
        if self.options.merge_union_types:
            self.reconciler = UnionReconciler(catalog, implicit_types=IMPLICIT_CONTAINER_TYPES)
        else:
            self.reconciler = None

        type_specs = [self.build_type(t) for t in types]
        if RESPONSE_PARAMETERS.name not in catalog:
            type_specs.append(RESPONSE_PARAMETERS.model_copy(deep=True))
            type_specs.sort(key=lambda t: t.name)

        method_specs = [self.build_method(m) for m in methods]

        logger.info(f"Extracted {len(method_specs)} methods and {len(type_specs)} types")
        return SpecDocument(title=title, version=version, methods=method_specs, types=type_specs)
