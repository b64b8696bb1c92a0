"""Table extractor — turns a documentation <table> into PropertyDefinitions.

The first row is treated as the header. Each header cell is resolved to a
logical column role (name, type, required, writable, description) by
case-insensitive substring matching, falling back to a character-overlap
similarity test so that minor misspellings ("Descripton") still resolve.

Rows that cannot be read are skipped with a warning. Structural problems
(no rows, no header, missing name/type columns, nothing usable) raise
ExtractionError.
"""

import logging
import re

from bs4 import Tag

from apiweaver.errors import ExtractionError
from apiweaver.parser.base import PropertyDefinition

logger = logging.getLogger(__name__)

# Roles are tried in this order for every header cell. "name" comes last
# because its patterns are the most generic ("Property Type" is a type column).
COLUMN_PATTERNS: dict[str, tuple[str, ...]] = {
    "type": ("data type", "datatype", "type", "format"),
    "required": ("required", "mandatory", "req"),
    "writable": ("writable", "editable", "write"),
    "description": ("description", "details", "notes", "desc"),
    "name": ("property name", "name", "property", "field"),
}

REQUIRED_ROLES = ("name", "type")

SIMILARITY_THRESHOLD = 0.7

TRUE_VALUES = frozenset({"true", "yes", "y", "1", "required", "mandatory"})
FALSE_VALUES = frozenset({"false", "no", "n", "0", "optional", "not required"})

DEFAULT_REQUIRED = False
DEFAULT_WRITABLE = True


def extract_properties(table: Tag) -> list[PropertyDefinition]:
    """Extract all valid property definitions from a <table> element."""
    if table is None:
        raise ExtractionError("Table element cannot be None")
    if not isinstance(table, Tag):
        raise ExtractionError(f"Expected an HTML element, got {type(table).__name__}")
    if (table.name or "").lower() != "table":
        raise ExtractionError(f"Element is not a table: {table.name}")

    rows = table.find_all("tr")
    if not rows:
        raise ExtractionError("Table contains no rows")

    column_map = identify_columns(rows[0])
    _validate_required_columns(column_map, rows[0])

    properties = []
    for index, row in enumerate(rows[1:], start=1):
        prop = _parse_row(row, index, column_map)
        if prop is not None:
            properties.append(prop)

    if not properties:
        raise ExtractionError(
            "No valid properties extracted from table",
            context=f"{len(rows) - 1} data row(s) examined",
        )

    logger.debug("Extracted %d properties from %d data rows", len(properties), len(rows) - 1)
    return properties


def identify_columns(header_row: Tag) -> dict[str, int]:
    """Map column roles to cell indexes in the header row.

    Cells are scanned left to right and each cell takes at most one role.
    A role already taken by an earlier cell is not reassigned.
    """
    cells = _cells(header_row)
    if not cells:
        raise ExtractionError("Header row contains no cells")

    column_map: dict[str, int] = {}
    for index, cell in enumerate(cells):
        role = classify_header(_text(cell), exclude=column_map.keys())
        if role is not None:
            column_map[role] = index

    logger.debug("Identified columns: %s", column_map)
    return column_map


def classify_header(text: str, exclude=()) -> str | None:
    """Resolve a header cell's text to a column role, or None."""
    lowered = text.strip().lower()
    if not lowered:
        return None

    candidates = [role for role in COLUMN_PATTERNS if role not in exclude]
    for role in candidates:
        if any(pattern in lowered for pattern in COLUMN_PATTERNS[role]):
            return role

    letters = re.sub(r"[^a-z0-9]", "", lowered)
    for role in candidates:
        for pattern in COLUMN_PATTERNS[role]:
            if len(pattern) >= 4 and similarity(letters, pattern.replace(" ", "")) > SIMILARITY_THRESHOLD:
                return role
    return None


def similarity(a: str, b: str) -> float:
    """Character-set overlap ratio (Jaccard index) of two strings."""
    set_a, set_b = set(a), set(b)
    if not set_a or not set_b:
        return 0.0
    return len(set_a & set_b) / len(set_a | set_b)


def parse_boolean(text: str | None, default: bool) -> bool:
    """Interpret a flag cell, falling back to default for blank or unknown text."""
    if text is None:
        return default
    normalized = text.strip().lower()
    if normalized in TRUE_VALUES:
        return True
    if normalized in FALSE_VALUES:
        return False
    return default


def normalize_whitespace(text: str | None) -> str:
    if not text:
        return ""
    return re.sub(r"\s+", " ", text).strip()


def _validate_required_columns(column_map: dict[str, int], header_row: Tag) -> None:
    missing = [role for role in REQUIRED_ROLES if role not in column_map]
    if missing:
        headers = [_text(c) for c in _cells(header_row)]
        raise ExtractionError(
            f"Missing required columns: {', '.join(missing)}",
            context=f"header cells: {headers}",
        )


def _parse_row(row: Tag, index: int, column_map: dict[str, int]) -> PropertyDefinition | None:
    cells = _cells(row)
    name = _cell_text(cells, column_map.get("name"))
    type_ = _cell_text(cells, column_map.get("type"))

    if name is None or type_ is None:
        logger.warning(
            "Skipping malformed row %d: expected at least %d cells, found %d",
            index, max(column_map["name"], column_map["type"]) + 1, len(cells),
        )
        return None
    if not name or not type_:
        logger.debug("Skipping row %d: blank name or type", index)
        return None

    return PropertyDefinition(
        name=name,
        type=type_,
        required=parse_boolean(_cell_text(cells, column_map.get("required")), DEFAULT_REQUIRED),
        writable=parse_boolean(_cell_text(cells, column_map.get("writable")), DEFAULT_WRITABLE),
        description=normalize_whitespace(_cell_text(cells, column_map.get("description"))),
    )


def _cells(row: Tag) -> list[Tag]:
    return row.find_all(["th", "td"], recursive=False)


def _cell_text(cells: list[Tag], index: int | None) -> str | None:
    if index is None or index >= len(cells):
        return None
    return _text(cells[index])


def _text(cell: Tag) -> str:
    return cell.get_text(" ", strip=True)
