"""Single-run orchestration: fetch, locate, extract, map, generate."""

import logging

from apiweaver.config import Configuration
from apiweaver.errors import ParseError
from apiweaver.fetcher import UrlFetcher
from apiweaver.generator.mapper import map_properties
from apiweaver.generator.models import OpenApiSpec
from apiweaver.generator.openapi import DEFAULT_SCHEMA_NAME, OpenApiGenerator
from apiweaver.parser.locator import find_first_table_after, find_headings_with_id_suffix, parse_html
from apiweaver.parser.table import extract_properties

logger = logging.getLogger(__name__)


def derive_schema_name(heading_id: str, suffix: str) -> str:
    """Strip the suffix from a heading id and capitalize it: userObjectValues -> User."""
    base = heading_id[: -len(suffix)] if suffix and heading_id.endswith(suffix) else heading_id
    base = base.strip()
    if not base:
        return DEFAULT_SCHEMA_NAME
    return base[0].upper() + base[1:]


class Pipeline:
    """Runs one extraction. All state lives in locals of run()."""

    def __init__(self, fetcher: UrlFetcher):
        self.fetcher = fetcher

    def run(self, config: Configuration) -> tuple[OpenApiSpec, str]:
        """Produce the amended or new spec and the name of the schema written."""
        html = self.fetcher.fetch(config.url)
        doc = parse_html(html)

        headings = find_headings_with_id_suffix(doc, config.heading_suffix)
        if not headings:
            raise ParseError(
                f"No <h2> element with an id ending in {config.heading_suffix!r} was found",
                context=config.url,
            )
        if len(headings) > 1:
            logger.warning(
                "Found %d headings ending in %r, using the first: %s",
                len(headings), config.heading_suffix, ", ".join(h["id"] for h in headings),
            )
        heading = headings[0]
        logger.info("Using section %r", heading["id"])

        table = find_first_table_after(doc, heading)
        if table is None:
            raise ParseError(f"No table found after heading {heading['id']!r}", context=config.url)

        definitions = extract_properties(table)
        logger.info("Extracted %d property definitions", len(definitions))
        properties = map_properties(definitions)

        schema_name = config.schema_name or derive_schema_name(heading["id"], config.heading_suffix)
        generator = OpenApiGenerator(schema_name=schema_name)

        existing = None
        if config.existing_spec_file is not None:
            logger.info("Amending %s", config.existing_spec_file)
            existing = generator.load_existing_spec(config.existing_spec_file)

        spec = generator.generate_or_amend_spec(properties, existing)
        if existing is None:
            if config.title:
                spec.info.title = config.title
            if config.api_version:
                spec.info.version = config.api_version
        return spec, schema_name
