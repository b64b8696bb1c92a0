"""Error taxonomy for apiweaver.

Every failure that should end a run with a pipeline error derives from
ApiWeaverError. Invalid arguments passed between components are
programming errors and raise ValueError instead.
"""


class ApiWeaverError(Exception):
    """Base class for all apiweaver errors."""

    def __init__(self, message: str, context: str | None = None):
        super().__init__(message)
        self.message = message
        self.context = context

    @property
    def detailed_message(self) -> str:
        if self.context:
            return f"{self.message} (Context: {self.context})"
        return self.message


class ConfigurationError(ApiWeaverError):
    """Invalid command-line options or configuration values."""


class FetchError(ApiWeaverError):
    """Network, protocol or timeout failure while fetching a page."""


class ParseError(ApiWeaverError):
    """The HTML could not be parsed or the target section was not found."""


class ExtractionError(ApiWeaverError):
    """A documentation table is structurally unusable."""


class GenerationError(ApiWeaverError):
    """Reading, serializing or writing an OpenAPI document failed."""
