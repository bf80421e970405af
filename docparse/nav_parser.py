#!/usr/bin/env python3
"""
Navigation discovery for the Bot API documentation page.

Finds the anchors that mark method and type entries and turns them into an
ordered, de-duplicated list of ExtractionTarget objects. Two strategies:

1. Section-scoped: walk the h4 sub-headings under each known h3 section.
2. Global lists: the quick-link anchors and the rendered sidebar, used when
   the section scan finds nothing.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Sequence, Set, Tuple

from docparse.document import DocumentView, element_text, heading_anchor, iter_siblings_until

logger = logging.getLogger(__name__)

SECTION_HEADING = "h3"
ENTRY_HEADING = "h4"

DEFAULT_SECTION_ANCHORS = [
    "getting-updates",
    "available-types",
    "available-methods",
    "updating-messages",
    "stickers",
    "inline-mode",
    "payments",
    "telegram-passport",
    "games",
]

QUICK_LINK_SELECTOR = "a[data-target]"
SIDEBAR_LINK_SELECTOR = "ul.nav.navbar-nav.navbar-default.affix a[href^='#']"


class EntryKind(str, Enum):
    TYPE = "type"
    METHOD = "method"


@dataclass(frozen=True)
class ExtractionTarget:
    """A discovered entry anchor waiting to be extracted"""
    anchor: str
    name: str
    kind: EntryKind


Classifier = Callable[[str], EntryKind]


def classify_by_case(name: str) -> EntryKind:
    """Types are capitalized (User, Message); methods start lowercase (getMe)."""
    if name[:1].isupper():
        return EntryKind.TYPE
    return EntryKind.METHOD


def is_single_word(text: str) -> bool:
    return len(text.split()) == 1


class NavParser:
    """Discovers extraction targets from the documentation navigation"""

    def __init__(self,
                 section_anchors: Optional[Sequence[str]] = None,
                 classifier: Classifier = classify_by_case):
        self.section_anchors = list(section_anchors or DEFAULT_SECTION_ANCHORS)
        self.classifier = classifier

    def discover(self, doc: DocumentView) -> List[ExtractionTarget]:
        """Run section-scoped discovery, falling back to the global link lists."""
        targets = self.parse_all_sections(doc)
        if targets:
            logger.info(f"Discovered {len(targets)} targets from {len(self.section_anchors)} sections")
            return targets

        targets = self.parse_nav_lists(doc)
        logger.info(f"Section scan found nothing; discovered {len(targets)} targets from navigation lists")
        return targets

    def parse_section(self, doc: DocumentView, anchor: str) -> List[ExtractionTarget]:
        """Collect the anchored single-word h4 entries directly under one h3 section"""
        targets = []

        for section in doc.headings_with_anchor(SECTION_HEADING, anchor):
            for sibling in iter_siblings_until(section, [SECTION_HEADING]):
                if sibling.name != ENTRY_HEADING:
                    continue
                link = heading_anchor(sibling)
                if link is None:
                    continue

                name = element_text(sibling)
                # Multi-word headings are decorative ("Formatting options")
                if not is_single_word(name):
                    continue

                entry_anchor = link.get("name")
                if entry_anchor:
                    targets.append(ExtractionTarget(entry_anchor, name, self.classifier(name)))

        return targets

    def parse_all_sections(self, doc: DocumentView) -> List[ExtractionTarget]:
        targets = []
        seen: Set[str] = set()
        for anchor in self.section_anchors:
            for target in self.parse_section(doc, anchor):
                if target.anchor in seen:
                    continue
                seen.add(target.anchor)
                targets.append(target)
        return targets

    def parse_nav_lists(self, doc: DocumentView) -> List[ExtractionTarget]:
        """Collect targets from quick links and the sidebar list, first occurrence wins"""
        targets = []
        seen: Set[str] = set()

        def add_target(anchor: str, name: str):
            anchor = anchor.strip()
            # Hyphenated anchors point at sub-headings, not entries
            if not anchor or "-" in anchor or anchor in seen:
                return
            name = name.strip()
            if not name:
                return
            targets.append(ExtractionTarget(anchor, name, self.classifier(name)))
            seen.add(anchor)

        for link in doc.select(QUICK_LINK_SELECTOR):
            target = (link.get("data-target") or "").strip()
            if not target.startswith("#"):
                continue
            add_target(target[1:], link.get_text())

        for link in doc.select(SIDEBAR_LINK_SELECTOR):
            href = (link.get("href") or "").strip()
            add_target(href[1:], link.get_text())

        return targets


def split_targets(targets: Sequence[ExtractionTarget]) -> Tuple[List[ExtractionTarget], List[ExtractionTarget]]:
    """Partition targets into (types, methods), keeping discovery order"""
    types = [t for t in targets if t.kind is EntryKind.TYPE]
    methods = [t for t in targets if t.kind is EntryKind.METHOD]
    return types, methods
