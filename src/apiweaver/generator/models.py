"""OpenAPI document models.

OpenApiSpec, Components and Info accept unknown keys so that an existing
document passes through amend mode without losing paths, security
schemes or vendor extensions. Loaded schemas are kept as plain YAML data;
only schemas built here are Schema models. Serialization only emits keys
that were loaded or explicitly set.
"""

from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

OPENAPI_VERSION = "3.1.1"


class OpenApiProperty(BaseModel):
    """A property mapped to OpenAPI type/format, ready for schema generation."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: str  # string / integer / number / boolean / array / object
    format: str | None = None  # int64 / date-time / email / uuid / uri ...
    required: bool = False
    read_only: bool = False
    description: str = ""

    def to_schema(self) -> dict[str, Any]:
        """Render the property descriptor placed under a schema's properties."""
        schema: dict[str, Any] = {"type": self.type}
        if self.format:
            schema["format"] = self.format
        if self.description:
            schema["description"] = self.description
        if self.read_only:
            schema["readOnly"] = True
        return schema


class Info(BaseModel):
    model_config = ConfigDict(extra="allow")

    title: str | None = None
    version: str | None = None

    @field_validator("title", "version", mode="before")
    @classmethod
    def _as_text(cls, v):
        # unquoted 1.0 loads as a float, 2024-01-01 as a date
        return str(v) if isinstance(v, (int, float, date)) else v


class Schema(BaseModel):
    """An object schema generated from a property table."""

    model_config = ConfigDict(extra="allow")

    type: str | list[str] | None = "object"
    properties: dict[str, Any] = Field(default_factory=dict)
    required: list[str] | None = None

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class Components(BaseModel):
    model_config = ConfigDict(extra="allow")

    # Schema for generated entries, raw YAML values (mappings, booleans, null) for loaded ones
    schemas: dict[str, Any] = Field(default_factory=dict)

    @field_validator("schemas", mode="before")
    @classmethod
    def _none_to_empty(cls, v):
        return {} if v is None else v

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "schemas": {
                name: schema.to_dict() if isinstance(schema, Schema) else schema
                for name, schema in self.schemas.items()
            }
        }
        data.update(self.model_extra or {})
        return data


class OpenApiSpec(BaseModel):
    """Root OpenAPI document."""

    model_config = ConfigDict(extra="allow")

    openapi: str
    info: Info = Field(default_factory=Info)
    components: Components = Field(default_factory=Components)

    @field_validator("info", "components", mode="before")
    @classmethod
    def _none_to_empty(cls, v):
        return {} if v is None else v

    @field_validator("openapi", mode="before")
    @classmethod
    def _version_as_text(cls, v):
        return str(v) if isinstance(v, (int, float)) else v

    def add_schema(self, name: str, schema: Schema) -> None:
        self.components.schemas[name] = schema

    def schema_names(self) -> list[str]:
        return list(self.components.schemas)

    def to_dict(self) -> dict[str, Any]:
        """Plain mapping in output key order: openapi, info, components, then extras."""
        data: dict[str, Any] = {
            "openapi": self.openapi,
            "info": self.info.model_dump(exclude_unset=True),
            "components": self.components.to_dict(),
        }
        data.update(self.model_extra or {})
        return data
