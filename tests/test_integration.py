"""End-to-end runs against a mocked documentation server."""

from pathlib import Path

import httpx
import yaml

from apiweaver.config import Configuration
from apiweaver.fetcher import HttpFetcher
from apiweaver.generator.openapi import OpenApiGenerator, write_spec
from apiweaver.pipeline import Pipeline

FIXTURES = Path(__file__).parent / "fixtures"
URL = "https://docs.example.com/api/clients"


def _docs_server(request: httpx.Request) -> httpx.Response:
    if request.url.path == "/api/clients":
        return httpx.Response(
            200,
            text=(FIXTURES / "client-docs.html").read_text(encoding="utf-8"),
            headers={"Content-Type": "text/html; charset=utf-8"},
        )
    return httpx.Response(404)


def _pipeline() -> Pipeline:
    return Pipeline(HttpFetcher(transport=httpx.MockTransport(_docs_server)))


class TestEndToEnd:
    def test_new_spec_roundtrip(self, tmp_path):
        spec, schema_name = _pipeline().run(Configuration(url=URL))
        out = write_spec(spec, tmp_path / "generated-api.yaml")

        loaded = OpenApiGenerator().load_existing_spec(out)
        assert loaded.openapi == "3.1.1"
        assert loaded.schema_names() == [schema_name]
        assert loaded.components.schemas[schema_name]["properties"] == spec.components.schemas[schema_name].properties

    def test_amend_then_amend_again(self, tmp_path):
        out = tmp_path / "api.yaml"
        spec, _ = _pipeline().run(Configuration(url=URL, existing_spec_file=FIXTURES / "existing-spec.yaml"))
        write_spec(spec, out)

        spec, _ = _pipeline().run(Configuration(url=URL, existing_spec_file=out, schema_name="ClientV2"))
        write_spec(spec, out)

        data = yaml.safe_load(out.read_text(encoding="utf-8"))
        assert list(data["components"]["schemas"]) == ["ExistingObject", "Client", "ClientV2"]
        assert data["paths"]["/clients"]["get"]["summary"] == "List clients"
        assert data["components"]["schemas"]["ClientV2"]["required"] == ["firstName", "emailAddress"]
