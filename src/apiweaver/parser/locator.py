"""Document locator — finds the documented section and its property table.

Vendor pages mark each object section with an <h2> whose id ends in a
fixed suffix (e.g. "clientObjectValues"). The property table is the first
<table> after that heading in document order, which is usually a later
sibling rather than a descendant of the heading.
"""

import logging

from bs4 import BeautifulSoup, Tag

from apiweaver.errors import ParseError

logger = logging.getLogger(__name__)


def parse_html(html: str) -> BeautifulSoup:
    """Parse raw HTML text into a navigable document."""
    if html is None or not html.strip():
        raise ParseError("HTML content cannot be empty")
    return BeautifulSoup(html, "html.parser")


def find_headings_with_id_suffix(doc: BeautifulSoup, suffix: str) -> list[Tag]:
    """Return all <h2 id="..."> elements whose id ends with suffix, in document order.

    Matching is case-sensitive. An empty list is a valid result here; the
    caller decides whether that is fatal.
    """
    if doc is None:
        raise ValueError("Document cannot be None")
    if suffix is None or not suffix.strip():
        raise ValueError("Suffix cannot be None or empty")

    headings = [h2 for h2 in doc.select("h2[id]") if h2.get("id", "").endswith(suffix)]
    logger.debug("Found %d heading(s) with id suffix %r", len(headings), suffix)
    return headings


def find_first_table_after(doc: BeautifulSoup, node: Tag) -> Tag | None:
    """Return the first <table> that follows node in document order, or None."""
    if doc is None:
        raise ValueError("Document cannot be None")
    if node is None:
        raise ValueError("Element cannot be None")

    found_start = False
    for element in doc.find_all(True):
        # identity, not ==: Tag equality compares markup
        if found_start and element.name == "table":
            return element
        if element is node:
            found_start = True
    return None
