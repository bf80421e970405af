"""
Read-only view over a parsed documentation page.

The extraction code only needs a handful of tree operations: find by tag,
filter by attribute, read text, and walk forward through siblings until a
stopping tag. DocumentView exposes exactly those on top of BeautifulSoup and
never mutates the underlying tree.
"""

from typing import Callable, Iterator, List, Optional

from bs4 import BeautifulSoup, Tag

DEFAULT_PARSER = "html.parser"


def element_text(element: Optional[Tag]) -> str:
    """Whitespace-trimmed text content of an element ('' for None)."""
    if element is None:
        return ""
    return element.get_text().strip()


def first_child_element(element: Tag) -> Optional[Tag]:
    for child in element.children:
        if isinstance(child, Tag):
            return child
    return None


def is_anchor(element: Optional[Tag], name: Optional[str] = None) -> bool:
    """True for <a class="anchor" name=...>, optionally with an exact name."""
    if element is None or element.name != "a":
        return False
    if "anchor" not in (element.get("class") or []):
        return False
    if name is None:
        return True
    return element.get("name") == name


def heading_anchor(heading: Tag) -> Optional[Tag]:
    """The anchor element a heading starts with, if any."""
    child = first_child_element(heading)
    return child if is_anchor(child) else None


def iter_siblings_until(element: Tag, stop_tags: List[str]) -> Iterator[Tag]:
    """Yield element siblings after `element`, stopping before any of stop_tags."""
    for sibling in element.next_siblings:
        if not isinstance(sibling, Tag):
            continue
        if sibling.name in stop_tags:
            break
        yield sibling


class DocumentView:
    """Traversable, read-only wrapper around a BeautifulSoup document."""

    def __init__(self, soup: BeautifulSoup):
        self.soup = soup

    @classmethod
    def from_html(cls, html: str, parser: str = DEFAULT_PARSER) -> "DocumentView":
        return cls(BeautifulSoup(html, parser))

    def find_all(self, tag: str, predicate: Optional[Callable[[Tag], bool]] = None) -> List[Tag]:
        elements = self.soup.find_all(tag)
        if predicate is None:
            return list(elements)
        return [el for el in elements if predicate(el)]

    def select(self, selector: str) -> List[Tag]:
        return list(self.soup.select(selector))

    def first_text(self, selector: str) -> str:
        return element_text(self.soup.select_one(selector))

    def headings_with_anchor(self, tag: str, anchor: str) -> List[Tag]:
        """Headings of the given level whose first child is the named anchor."""
        return self.find_all(tag, lambda h: is_anchor(first_child_element(h), anchor))
