"""Run configuration."""

from pathlib import Path

from pydantic import BaseModel, ValidationError, field_validator

from apiweaver.errors import ConfigurationError

DEFAULT_OUTPUT_FILE = "generated-api.yaml"
DEFAULT_TIMEOUT_MS = 30000
DEFAULT_USER_AGENT = "ApiWeaver/1.0"
DEFAULT_HEADING_SUFFIX = "ObjectValues"


class Configuration(BaseModel):
    """Options for a single extraction run."""

    url: str
    output_file: Path = Path(DEFAULT_OUTPUT_FILE)
    existing_spec_file: Path | None = None
    verbose: bool = False
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    user_agent: str = DEFAULT_USER_AGENT
    heading_suffix: str = DEFAULT_HEADING_SUFFIX
    schema_name: str | None = None
    title: str | None = None
    api_version: str | None = None

    @field_validator("url")
    @classmethod
    def _check_url(cls, v: str) -> str:
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError("URL must start with http:// or https://")
        return v

    @field_validator("output_file")
    @classmethod
    def _check_output(cls, v: Path) -> Path:
        if not str(v).strip() or str(v) == ".":
            raise ValueError("output file is required")
        return v

    @field_validator("timeout_ms")
    @classmethod
    def _check_timeout(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("Timeout must be a positive integer")
        return v

    @field_validator("schema_name", "title", "api_version")
    @classmethod
    def _blank_to_none(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        return v.strip()

    @field_validator("user_agent", "heading_suffix")
    @classmethod
    def _check_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v.strip()


def build_configuration(**options) -> Configuration:
    """Build a Configuration, turning validation failures into ConfigurationError."""
    try:
        return Configuration(**options)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise ConfigurationError(f"Invalid configuration: {problems}") from e
