"""Property records extracted from vendor HTML documentation.

The table extractor produces one PropertyDefinition per usable table row.
Type and flag values are kept exactly as the documentation states them;
mapping to OpenAPI happens later in the generator package.
"""

from pydantic import BaseModel, ConfigDict


class PropertyDefinition(BaseModel):
    """A single documented property, normalized from one table row."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: str  # raw vendor text, e.g. "String", "Long", "Array[Integer]"
    required: bool = False
    writable: bool = True
    description: str = ""

    def is_valid(self) -> bool:
        """A definition is usable only when both name and type are non-blank."""
        return bool(self.name.strip()) and bool(self.type.strip())
