"""Tests for the click CLI with a stubbed API client."""

import json
import os
import sys
import unittest
from pathlib import Path
from unittest import mock

from click.testing import CliRunner

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from AdsClient.api.export import ExportRequest
from AdsClient.api.search import SearchQuery
from AdsClient.cli.runner import create_client
from AdsClient.cli.ui import cli
from AdsClient.config import AppConfig, ApiConfig
from AdsClient.core.errors import TransportError
from AdsClient.utils.log import log


class StubClient:
    """In-memory stand-in for AdsApiClient."""

    def __init__(self, total: int = 3, *, fail: bool = False) -> None:
        self.total = total
        self.fail = fail
        self.searches = []
        self.exports = []
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.closed = True

    def search(self, query):
        return SearchQuery(client=self, query=query)

    def export(self, export_format, bibcodes):
        return ExportRequest.create(self, export_format, bibcodes)

    def get_json(self, path, params=None):
        self.searches.append(dict(params))
        if self.fail:
            raise TransportError("HTTP 503 from search/query", status_code=503)
        start, rows = params["start"], params["rows"]
        docs = [
            {"bibcode": f"2020X{i}", "title": [f"Paper {i}"], "year": "2020"}
            for i in range(start, min(start + rows, self.total))
        ]
        return {"response": {"numFound": self.total, "start": start, "docs": docs}}

    def post_json(self, path, payload=None):
        self.exports.append((path, payload))
        return {"msg": "ok", "export": "@ARTICLE{2020X0}\n"}


class CliTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.runner = CliRunner()
        self.client = StubClient()
        patcher = mock.patch("AdsClient.cli.runner.create_client", return_value=self.client)
        self.create_client = patcher.start()
        self.addCleanup(patcher.stop)
        self.addCleanup(log.handlers.clear)

    def invoke(self, *args: str, config: str | None = None):
        with self.runner.isolated_filesystem():
            if config is not None:
                Path("ads.yml").write_text(config, encoding="utf-8")
                args = ("--config", "ads.yml", *args)
            return self.runner.invoke(cli, list(args))


class TestSearchCommand(CliTestCase):
    def test_prints_json_lines(self) -> None:
        result = self.invoke("search", "supernova", "remnant", "--field", "bibcode", "--field", "title")
        self.assertEqual(result.exit_code, 0, result.output)
        lines = [json.loads(line) for line in result.stdout.splitlines()]
        self.assertEqual([line["bibcode"] for line in lines], ["2020X0", "2020X1", "2020X2"])
        self.assertEqual(self.client.searches[0]["q"], "supernova remnant")
        self.assertEqual(self.client.searches[0]["fl"], "bibcode,title")
        self.assertTrue(self.client.closed)

    def test_packaged_defaults_apply_without_config_file(self) -> None:
        result = self.invoke("search", "star")
        self.assertEqual(result.exit_code, 0, result.output)
        params = self.client.searches[0]
        self.assertEqual(params["fl"], "bibcode,title,author,year")
        self.assertEqual(params["sort"], "date desc")

    def test_config_file_is_merged_over_defaults(self) -> None:
        result = self.invoke("search", "star", config="search:\n  rows: 5\n")
        self.assertEqual(result.exit_code, 0, result.output)
        params = self.client.searches[0]
        self.assertEqual(params["rows"], 5)
        self.assertEqual(params["fl"], "bibcode,title,author,year")

    def test_configured_custom_format_with_command_line_string(self) -> None:
        result = self.invoke(
            "search", "star", "--custom-format", "%l (%Y)", config="export:\n  format: custom\n"
        )
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(self.client.searches[0]["fl"], "bibcode")
        path, payload = self.client.exports[0]
        self.assertEqual(path, "export/custom")
        self.assertEqual(payload["format"], "%l (%Y)")

    def test_options_reach_the_request(self) -> None:
        result = self.invoke(
            "search", "star", "--limit", "2", "--rows", "10", "--sort", "date asc", "--sort", "bibcode",
            "--filter", "database:astronomy", "--token", "cli-token",
        )
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(len(result.stdout.splitlines()), 2)
        params = self.client.searches[0]
        self.assertEqual(params["rows"], 2)
        self.assertEqual(params["sort"], "date asc,bibcode desc")
        self.assertEqual(params["fq"], "database:astronomy")
        self.assertEqual(self.create_client.call_args.args[1], "cli-token")

    def test_export_format_collects_bibcodes_first(self) -> None:
        result = self.invoke("search", "star", "--format", "BibTeX", "--field", "abstract")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(result.stdout, "@ARTICLE{2020X0}\n")
        self.assertEqual(self.client.searches[0]["fl"], "bibcode")
        self.assertEqual(
            self.client.exports,
            [("export/bibtex", {"bibcode": ["2020X0", "2020X1", "2020X2"], "sort": "date desc"})],
        )

    def test_custom_export_without_format_string_skips_search(self) -> None:
        result = self.invoke("search", "star", "--format", "custom")
        self.assertNotEqual(result.exit_code, 0)
        self.assertEqual(self.client.searches, [])
        self.assertEqual(self.client.exports, [])

    def test_failure_exits_non_zero(self) -> None:
        self.client.fail = True
        result = self.invoke("search", "star")
        self.assertNotEqual(result.exit_code, 0)
        self.assertTrue(self.client.closed)

    def test_bad_sort_is_usage_error(self) -> None:
        result = self.invoke("search", "star", "--sort", "date sideways")
        self.assertEqual(result.exit_code, 2)
        self.assertEqual(self.client.searches, [])

    def test_unknown_format_is_usage_error(self) -> None:
        result = self.invoke("search", "star", "--format", "pdf")
        self.assertEqual(result.exit_code, 2)


class TestExportCommand(CliTestCase):
    def test_exports_bibcodes(self) -> None:
        result = self.invoke("export", "bibtex", "2020a", "2020b", "--sort", "date asc")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(result.stdout, "@ARTICLE{2020X0}\n")
        self.assertEqual(
            self.client.exports,
            [("export/bibtex", {"bibcode": ["2020a", "2020b"], "sort": "date asc"})],
        )

    def test_custom_format_string(self) -> None:
        result = self.invoke("export", "custom", "2020a", "--custom-format", "%l (%Y)")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(self.client.exports, [("export/custom", {"bibcode": ["2020a"], "sort": "date desc", "format": "%l (%Y)"})])

    def test_custom_without_format_string_fails(self) -> None:
        result = self.invoke("export", "custom", "2020a")
        self.assertNotEqual(result.exit_code, 0)
        self.assertEqual(self.client.exports, [])

    def test_json_is_not_an_export_format(self) -> None:
        result = self.invoke("export", "json", "2020a")
        self.assertEqual(result.exit_code, 2)


class TestCreateClient(unittest.TestCase):
    def test_token_precedence(self) -> None:
        config = AppConfig(api=ApiConfig(token="config-token"))
        with create_client(config, "cli-token") as client:
            self.assertEqual(client._session.headers["Authorization"], "Bearer cli-token")
        with create_client(config) as client:
            self.assertEqual(client._session.headers["Authorization"], "Bearer config-token")
        with mock.patch.dict(os.environ, {"ADS_API_TOKEN": "env-token"}):
            with create_client(AppConfig()) as client:
                self.assertEqual(client._session.headers["Authorization"], "Bearer env-token")


if __name__ == "__main__":
    unittest.main()
