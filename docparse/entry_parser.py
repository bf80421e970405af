#!/usr/bin/env python3
"""
Entry extraction for Bot API methods and types.

Each entry starts at an h4 heading carrying an anchor and spans every sibling
up to the next h4. Within that span we collect:
- description paragraphs (tables are skipped but do not end the span)
- the parameter table (methods, 4 columns) or field table (types, 3 columns)
- blockquote paragraphs as notes

Methods additionally need a return type recovered from their prose; a method
without one cannot be represented and fails with ReturnTypeNotFoundError.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from bs4 import Tag

from docparse.document import DocumentView, element_text, iter_siblings_until
from docparse.nav_parser import ENTRY_HEADING, SECTION_HEADING
from docparse.return_types import infer_return_type
from docparse.type_refs import TypeRef

logger = logging.getLogger(__name__)

# Parameter tables: name | type | required | description
PARAM_NAME_COLUMN = 0
PARAM_TYPE_COLUMN = 1
PARAM_OPTIONAL_COLUMN = 2
PARAM_DESCRIPTION_COLUMN = 3

# Field tables: name | type | description
FIELD_NAME_COLUMN = 0
FIELD_TYPE_COLUMN = 1
FIELD_DESCRIPTION_COLUMN = 2

# Identifiers documented as "Integer or String" but always numeric ids in practice
METHOD_FORCED_TYPE = "Integer"
FIELD_FORCED_TYPE = "Integer64"
SIXTY_FOUR_BIT_MARKER = "64-bit integer"


class EntryNotFoundError(LookupError):
    """No single heading carries the requested anchor."""

    def __init__(self, anchor: str, matches: int = 0):
        self.anchor = anchor
        self.matches = matches
        reason = "not found" if matches == 0 else f"ambiguous ({matches} headings)"
        super().__init__(f"entry '{anchor}' {reason}")


class ReturnTypeNotFoundError(ValueError):
    """A method description names no recognisable result type."""

    def __init__(self, anchor: str, name: str):
        self.anchor = anchor
        self.name = name
        super().__init__(f"method {name} ({anchor}): return type not parsed")


@dataclass
class ParamDef:
    name: str
    type_ref: TypeRef
    required: bool
    description: str = ""


@dataclass
class FieldDef:
    name: str
    type_ref: TypeRef
    required: bool
    description: str = ""


@dataclass
class MethodDef:
    """Structured information for one API method"""
    anchor: str
    name: str
    tags: List[str] = field(default_factory=list)
    description: List[str] = field(default_factory=list)
    notes: List[str] = field(default_factory=list)
    params: Dict[str, ParamDef] = field(default_factory=dict)
    return_type: Optional[TypeRef] = None


@dataclass
class TypeDef:
    """Structured information for one API object type"""
    anchor: str
    name: str
    tag: str = ""
    description: List[str] = field(default_factory=list)
    notes: List[str] = field(default_factory=list)
    fields: List[FieldDef] = field(default_factory=list)


def is_optional_description(description: str) -> bool:
    """Descriptions starting with "Optional" (any case) mark optional fields."""
    return description.strip().lower().startswith("optional")


def is_chat_id_name(name: str) -> bool:
    return name == "chat_id" or name.endswith("_chat_id")


def is_user_id_name(name: str) -> bool:
    return name == "user_id" or name.endswith("_user_id")


def _row_cells(row: Tag) -> List[str]:
    return [element_text(td) for td in row.find_all("td", recursive=False)]


def _cell(cells: List[str], index: int) -> str:
    return cells[index] if index < len(cells) else ""


class EntryParser:
    """
    Walks one documentation entry and collects its prose, table rows and notes.

    Subclasses decide how table rows are decoded and what else an entry needs.
    """

    collect_lists = False

    def __init__(self, doc: DocumentView):
        self.doc = doc

    def find_heading(self, anchor: str) -> Tag:
        headings = self.doc.headings_with_anchor(ENTRY_HEADING, anchor)
        if len(headings) != 1:
            raise EntryNotFoundError(anchor, len(headings))
        return headings[0]

    @staticmethod
    def section_title(heading: Tag) -> str:
        """Text of the nearest preceding h3, used as the entry's grouping tag."""
        return element_text(heading.find_previous_sibling(SECTION_HEADING))

    def span(self, heading: Tag) -> List[Tag]:
        return list(iter_siblings_until(heading, [ENTRY_HEADING]))

    def collect_description(self, span: List[Tag]) -> List[str]:
        description = []
        for node in span:
            if node.name == "p":
                text = element_text(node)
                if text:
                    description.append(text)
            elif self.collect_lists and node.name in ("ul", "ol"):
                for item in node.find_all("li"):
                    text = element_text(item)
                    if text:
                        description.append(text)
        return description

    @staticmethod
    def collect_rows(span: List[Tag]) -> List[List[str]]:
        rows = []
        for node in span:
            tables = [node] if node.name == "table" else node.find_all("table")
            for table in tables:
                for row in table.find_all("tr"):
                    cells = _row_cells(row)
                    # Header rows use <th> and decorative rows leave the name blank
                    if not cells or not cells[0]:
                        continue
                    rows.append(cells)
        return rows

    @staticmethod
    def collect_notes(span: List[Tag]) -> List[str]:
        notes = []
        for node in span:
            quotes = [node] if node.name == "blockquote" else node.find_all("blockquote")
            for quote in quotes:
                for p in quote.find_all("p"):
                    text = element_text(p)
                    if text:
                        notes.append(text)
        return notes


class MethodParser(EntryParser):
    """Extracts MethodDef entries (camelCase anchors such as sendmessage)"""

    def parse(self, anchor: str) -> MethodDef:
        heading = self.find_heading(anchor)
        method = MethodDef(anchor=anchor, name=element_text(heading))

        tag = self.section_title(heading)
        if tag:
            method.tags = [tag]

        span = self.span(heading)
        method.description = self.collect_description(span)

        return_type = infer_return_type(method.description)
        if not return_type:
            raise ReturnTypeNotFoundError(anchor, method.name)
        method.return_type = TypeRef(return_type)

        for cells in self.collect_rows(span):
            param = self.decode_row(cells)
            method.params[param.name] = param

        method.notes = self.collect_notes(span)
        logger.debug(f"Parsed method {method.name}: {len(method.params)} params, returns {return_type}")
        return method

    @staticmethod
    def decode_row(cells: List[str]) -> ParamDef:
        name = cells[PARAM_NAME_COLUMN]
        description = _cell(cells, PARAM_DESCRIPTION_COLUMN)
        optional_marker = _cell(cells, PARAM_OPTIONAL_COLUMN)

        type_ref = TypeRef(_cell(cells, PARAM_TYPE_COLUMN))
        required = not is_optional_description(description) and optional_marker.lower() != "optional"

        if is_chat_id_name(name):
            type_ref = TypeRef(METHOD_FORCED_TYPE)
            required = True

        return ParamDef(name=name, type_ref=type_ref, required=required, description=description)


class TypeParser(EntryParser):
    """Extracts TypeDef entries (capitalized anchors such as message)"""

    collect_lists = True

    def parse(self, anchor: str) -> TypeDef:
        heading = self.find_heading(anchor)
        type_def = TypeDef(anchor=anchor, name=element_text(heading), tag=self.section_title(heading))

        span = self.span(heading)
        type_def.description = self.collect_description(span)
        type_def.fields = [self.decode_row(cells) for cells in self.collect_rows(span)]
        type_def.notes = self.collect_notes(span)
        logger.debug(f"Parsed type {type_def.name}: {len(type_def.fields)} fields")
        return type_def

    @staticmethod
    def decode_row(cells: List[str]) -> FieldDef:
        name = cells[FIELD_NAME_COLUMN]
        description = _cell(cells, FIELD_DESCRIPTION_COLUMN)

        type_ref = TypeRef(_cell(cells, FIELD_TYPE_COLUMN))
        required = not is_optional_description(description)

        if is_chat_id_name(name) or is_user_id_name(name):
            type_ref = TypeRef(FIELD_FORCED_TYPE)
            required = True
        elif SIXTY_FOUR_BIT_MARKER in description.lower():
            type_ref = TypeRef(FIELD_FORCED_TYPE)

        return FieldDef(name=name, type_ref=type_ref, required=required, description=description)
