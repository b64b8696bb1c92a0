"""Type mapper — vendor type text to OpenAPI (type, format).

Documentation type strings are inconsistent: mixed case, ad hoc array
syntax, trailing nullable markers, embedded qualifiers. Lookup order:

1. exact match in TYPE_MAPPINGS
2. bracket notation ("string[]", "Array[String]") -> array
3. trailing "?" -> map the base type
4. case-insensitive substring fallback
5. string
"""

from apiweaver.generator.models import OpenApiProperty
from apiweaver.parser.base import PropertyDefinition

TypeFormat = tuple[str, str | None]

DEFAULT_MAPPING: TypeFormat = ("string", None)

TYPE_MAPPINGS: dict[str, TypeFormat] = {
    # strings
    "string": ("string", None),
    "String": ("string", None),
    "text": ("string", None),
    "Text": ("string", None),
    # integers
    "integer": ("integer", None),
    "Integer": ("integer", None),
    "int": ("integer", "int32"),
    "Int": ("integer", "int32"),
    "long": ("integer", "int64"),
    "Long": ("integer", "int64"),
    # numbers
    "number": ("number", None),
    "Number": ("number", None),
    "decimal": ("number", None),
    "Decimal": ("number", None),
    "float": ("number", "float"),
    "Float": ("number", "float"),
    "double": ("number", "double"),
    "Double": ("number", "double"),
    # booleans
    "boolean": ("boolean", None),
    "Boolean": ("boolean", None),
    "bool": ("boolean", None),
    "Bool": ("boolean", None),
    # dates and times
    "date": ("string", "date"),
    "Date": ("string", "date"),
    "datetime": ("string", "date-time"),
    "DateTime": ("string", "date-time"),
    "timestamp": ("string", "date-time"),
    "Timestamp": ("string", "date-time"),
    # collections
    "array": ("array", None),
    "Array": ("array", None),
    "list": ("array", None),
    "List": ("array", None),
    "object": ("object", None),
    "Object": ("object", None),
    # domain types
    "id": ("integer", "int64"),
    "ID": ("integer", "int64"),
    "uuid": ("string", "uuid"),
    "UUID": ("string", "uuid"),
    "email": ("string", "email"),
    "Email": ("string", "email"),
    "url": ("string", "uri"),
    "URL": ("string", "uri"),
    "uri": ("string", "uri"),
    "URI": ("string", "uri"),
}

# (substrings, openapi type); checked in order against the lowercased token
SUBSTRING_FALLBACKS: tuple[tuple[tuple[str, ...], str], ...] = (
    (("string", "text"), "string"),
    (("int", "long"), "integer"),
    (("float", "double", "decimal"), "number"),
    (("bool",), "boolean"),
    (("date", "time"), "string"),
    (("array", "list"), "array"),
    (("object",), "object"),
)


def map_type(token: str | None) -> TypeFormat:
    """Map a vendor type token to an OpenAPI (type, format) pair."""
    if token is None or not token.strip():
        return DEFAULT_MAPPING

    token = token.strip()

    mapping = TYPE_MAPPINGS.get(token)
    if mapping is not None:
        return mapping

    # also catches generic wrappers such as Optional[X]
    if "[]" in token or ("[" in token and "]" in token):
        return ("array", None)

    if token.endswith("?"):
        return map_type(token[:-1])

    lowered = token.lower()
    for needles, openapi_type in SUBSTRING_FALLBACKS:
        if any(needle in lowered for needle in needles):
            return (openapi_type, None)

    return DEFAULT_MAPPING


def to_openapi_property(definition: PropertyDefinition) -> OpenApiProperty:
    """Build an OpenApiProperty from a valid PropertyDefinition."""
    if definition is None:
        raise ValueError("Property definition cannot be None")
    if not definition.is_valid():
        raise ValueError(f"Property definition is not valid: {definition!r}")

    openapi_type, fmt = map_type(definition.type)
    return OpenApiProperty(
        name=definition.name,
        type=openapi_type,
        format=fmt,
        required=definition.required,
        read_only=not definition.writable,
        description=definition.description,
    )


def map_properties(definitions: list[PropertyDefinition]) -> list[OpenApiProperty]:
    return [to_openapi_property(d) for d in definitions]
