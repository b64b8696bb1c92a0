"""OpenAPI generator — creates or amends an OpenAPI 3.1.1 document."""

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from apiweaver.errors import GenerationError
from apiweaver.generator.models import OPENAPI_VERSION, Components, Info, OpenApiProperty, OpenApiSpec, Schema

logger = logging.getLogger(__name__)

DEFAULT_SCHEMA_NAME = "GeneratedObject"


class OpenApiGenerator:
    """Builds schemas from mapped properties and inserts them into a spec."""

    def __init__(self, schema_name: str = DEFAULT_SCHEMA_NAME):
        self.schema_name = schema_name

    def create_new_spec(self) -> OpenApiSpec:
        """Return an empty OpenAPI 3.1.1 document."""
        return OpenApiSpec(openapi=OPENAPI_VERSION, info=Info(), components=Components())

    def load_existing_spec(self, file_path: Path) -> OpenApiSpec:
        """Load an OpenAPI document from a YAML (or JSON) file."""
        try:
            text = Path(file_path).read_bytes()
        except OSError as e:
            raise GenerationError(f"Cannot read existing spec: {e}", context=str(file_path)) from e
        return self.parse_spec(text, source=str(file_path))

    def parse_spec(self, content: bytes | str, source: str = "<string>") -> OpenApiSpec:
        """Deserialize an OpenAPI document from YAML text."""
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise GenerationError(f"Malformed YAML in existing spec: {e}", context=source) from e

        if not isinstance(data, dict):
            raise GenerationError("Existing spec is not a YAML mapping", context=source)

        try:
            return OpenApiSpec.model_validate(data)
        except ValidationError as e:
            raise GenerationError(f"Existing spec is not a valid OpenAPI document: {e}", context=source) from e

    def build_schema(self, properties: list[OpenApiProperty]) -> Schema:
        """Build an object schema; required properties go to the schema's required list."""
        props = {p.name: p.to_schema() for p in properties}
        required = [p.name for p in properties if p.required]
        if required:
            return Schema(type="object", properties=props, required=required)
        return Schema(type="object", properties=props)

    def generate_or_amend_spec(
        self, properties: list[OpenApiProperty], existing: OpenApiSpec | None = None
    ) -> OpenApiSpec:
        """Insert a schema built from properties into existing, or into a new spec."""
        spec = existing if existing is not None else self.create_new_spec()

        if self.schema_name in spec.components.schemas:
            logger.warning("Replacing existing schema %r", self.schema_name)

        spec.add_schema(self.schema_name, self.build_schema(properties))
        logger.debug("Schema %r written with %d properties", self.schema_name, len(properties))
        return spec


def dump_yaml(spec: OpenApiSpec) -> str:
    """Serialize a spec to YAML, keeping document key order."""
    try:
        return yaml.safe_dump(
            spec.to_dict(),
            sort_keys=False,
            default_flow_style=False,
            allow_unicode=True,
            indent=2,
        )
    except yaml.YAMLError as e:
        raise GenerationError(f"Failed to serialize spec: {e}") from e


def write_spec(spec: OpenApiSpec, output: Path) -> Path:
    """Write a spec as YAML. Nothing is written if serialization fails."""
    content = dump_yaml(spec)
    output = Path(output)
    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(content, encoding="utf-8")
    except OSError as e:
        raise GenerationError(f"Cannot write spec: {e}", context=str(output)) from e
    return output
