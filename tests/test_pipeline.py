import logging
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from apiweaver.config import Configuration
from apiweaver.errors import ExtractionError, FetchError, GenerationError, ParseError
from apiweaver.pipeline import Pipeline, derive_schema_name

FIXTURES = Path(__file__).parent / "fixtures"
URL = "https://docs.example.com/clients"


def _pipeline(html: str) -> Pipeline:
    fetcher = MagicMock()
    fetcher.fetch.return_value = html
    return Pipeline(fetcher)


def _fixture_html() -> str:
    return (FIXTURES / "client-docs.html").read_text(encoding="utf-8")


class TestDeriveSchemaName:
    def test_strips_suffix_and_capitalizes(self):
        assert derive_schema_name("userObjectValues", "ObjectValues") == "User"
        assert derive_schema_name("serviceProviderObjectValues", "ObjectValues") == "ServiceProvider"

    def test_empty_remainder(self):
        assert derive_schema_name("ObjectValues", "ObjectValues") == "GeneratedObject"


class TestPipelineRun:
    def test_fixture_page(self, caplog):
        pipeline = _pipeline(_fixture_html())
        with caplog.at_level(logging.WARNING, logger="apiweaver"):
            spec, schema_name = pipeline.run(Configuration(url=URL))

        pipeline.fetcher.fetch.assert_called_once_with(URL)
        assert schema_name == "Client"
        schema = spec.components.schemas["Client"]
        assert list(schema.properties) == ["clientId", "firstName", "emailAddress", "createdDate", "tags"]
        assert schema.properties["clientId"] == {
            "type": "integer",
            "format": "int64",
            "description": "Unique identifier of the client.",
            "readOnly": True,
        }
        assert schema.properties["firstName"]["description"] == "The client's first name."
        assert schema.properties["emailAddress"]["format"] == "email"
        assert schema.properties["createdDate"]["format"] == "date-time"
        assert schema.properties["tags"] == {"type": "array", "description": "Free-form labels."}
        assert schema.required == ["firstName", "emailAddress"]

        assert "using the first: clientObjectValues, appointmentObjectValues" in caplog.text
        assert "malformed row 6" in caplog.text

    def test_schema_name_and_info_overrides(self):
        config = Configuration(url=URL, schema_name="Customer", title="TimeTap", api_version="2.0")
        spec, schema_name = _pipeline(_fixture_html()).run(config)
        assert schema_name == "Customer"
        assert spec.schema_names() == ["Customer"]
        assert spec.info.title == "TimeTap"
        assert spec.info.version == "2.0"

    def test_blank_schema_name_falls_back_to_heading(self):
        spec, schema_name = _pipeline(_fixture_html()).run(Configuration(url=URL, schema_name="  "))
        assert schema_name == "Client"
        assert spec.schema_names() == ["Client"]

    def test_custom_suffix(self):
        html = "<h2 id='clientProps'>C</h2><table><tr><th>Name</th><th>Type</th></tr><tr><td>id</td><td>id</td></tr></table>"
        spec, schema_name = _pipeline(html).run(Configuration(url=URL, heading_suffix="Props"))
        assert schema_name == "Client"
        assert spec.components.schemas["Client"].properties["id"]["format"] == "int64"

    def test_amend_existing(self):
        config = Configuration(url=URL, existing_spec_file=FIXTURES / "existing-spec.yaml", title="Ignored")
        spec, _ = _pipeline(_fixture_html()).run(config)
        assert spec.schema_names() == ["ExistingObject", "Client"]
        assert spec.info.title == "Existing API"

    def test_no_heading(self):
        with pytest.raises(ParseError, match="No <h2> element"):
            _pipeline("<h2 id='intro'>Intro</h2><table></table>").run(Configuration(url=URL))

    def test_no_table_after_heading(self):
        with pytest.raises(ParseError, match="No table found"):
            _pipeline("<table></table><h2 id='xObjectValues'>X</h2>").run(Configuration(url=URL))

    def test_bad_table(self):
        html = "<h2 id='xObjectValues'>X</h2><table><tr><th>Foo</th></tr></table>"
        with pytest.raises(ExtractionError, match="Missing required columns"):
            _pipeline(html).run(Configuration(url=URL))

    def test_empty_page(self):
        with pytest.raises(ParseError, match="HTML content cannot be empty"):
            _pipeline("").run(Configuration(url=URL))

    def test_fetch_error_propagates(self):
        fetcher = MagicMock()
        fetcher.fetch.side_effect = FetchError("HTTP request failed with status 500: Internal Server Error")
        with pytest.raises(FetchError):
            Pipeline(fetcher).run(Configuration(url=URL))

    def test_missing_existing_spec(self, tmp_path):
        config = Configuration(url=URL, existing_spec_file=tmp_path / "nope.yaml")
        with pytest.raises(GenerationError):
            _pipeline(_fixture_html()).run(config)
