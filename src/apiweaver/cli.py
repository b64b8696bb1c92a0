"""CLI entry point for apiweaver."""

import logging
from pathlib import Path

import click

from apiweaver.config import (
    DEFAULT_HEADING_SUFFIX,
    DEFAULT_OUTPUT_FILE,
    DEFAULT_TIMEOUT_MS,
    DEFAULT_USER_AGENT,
    build_configuration,
)
from apiweaver.errors import ApiWeaverError, ConfigurationError
from apiweaver.fetcher import HttpFetcher
from apiweaver.generator.openapi import write_spec
from apiweaver.pipeline import Pipeline

EXIT_PIPELINE_ERROR = 1
EXIT_UNEXPECTED_ERROR = 3

logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(asctime)s - %(levelname)s - %(message)s")
    logging.getLogger("apiweaver").setLevel(level)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("url")
@click.option("-o", "--output", default=DEFAULT_OUTPUT_FILE, show_default=True, type=click.Path(path_type=Path), help="Output OpenAPI file path.")
@click.option("-e", "--existing", default=None, type=click.Path(path_type=Path), help="Existing OpenAPI file to amend.")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output.")
@click.option("-t", "--timeout", "timeout_ms", default=DEFAULT_TIMEOUT_MS, show_default=True, type=click.IntRange(min=1), help="HTTP timeout in milliseconds.")
@click.option("--suffix", default=DEFAULT_HEADING_SUFFIX, show_default=True, help="Id suffix of the <h2> heading that introduces the property table.")
@click.option("--schema-name", default=None, help="Schema name to write. Derived from the heading id when omitted.")
@click.option("--title", default=None, help="info.title for a newly created spec.")
@click.option("--api-version", default=None, help="info.version for a newly created spec.")
@click.option("--user-agent", default=DEFAULT_USER_AGENT, show_default=True, help="User-Agent header sent with the request.")
@click.pass_context
def main(
    ctx: click.Context,
    url: str,
    output: Path,
    existing: Path | None,
    verbose: bool,
    timeout_ms: int,
    suffix: str,
    schema_name: str | None,
    title: str | None,
    api_version: str | None,
    user_agent: str,
):
    """ApiWeaver — extract API property definitions from HTML documentation
    and write them as an OpenAPI 3.1.1 schema.

    Example: apiweaver -o my-api.yaml -v https://example.com/api-docs
    """
    try:
        config = build_configuration(
            url=url,
            output_file=output,
            existing_spec_file=existing,
            verbose=verbose,
            timeout_ms=timeout_ms,
            user_agent=user_agent,
            heading_suffix=suffix,
            schema_name=schema_name,
            title=title,
            api_version=api_version,
        )
    except ConfigurationError as e:
        raise click.UsageError(e.message, ctx=ctx) from e

    _configure_logging(config.verbose)

    try:
        click.echo(f"Fetching {config.url}...")
        fetcher = HttpFetcher(timeout_ms=config.timeout_ms, user_agent=config.user_agent)
        spec, schema_name = Pipeline(fetcher).run(config)

        path = write_spec(spec, config.output_file)
        click.echo(f"Schema {schema_name} with {len(spec.components.schemas[schema_name].properties)} properties saved to {path}")
    except ApiWeaverError as e:
        click.echo(f"Error: {type(e).__name__}: {e.detailed_message}", err=True)
        ctx.exit(EXIT_PIPELINE_ERROR)
    except Exception as e:
        logger.debug("Unexpected failure", exc_info=True)
        click.echo(f"Unexpected error: {e}", err=True)
        ctx.exit(EXIT_UNEXPECTED_ERROR)
