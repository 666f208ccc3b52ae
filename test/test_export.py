"""Tests for export requests and bibcode collection."""

import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from AdsClient.api.export import ExportFormat, ExportRequest, bibcodes_from_documents, collect_bibcodes
from AdsClient.api.search import SearchQuery
from AdsClient.core.errors import MissingFieldError, PreconditionError, RemoteRejectedError
from AdsClient.core.models import Document
from AdsClient.core.sort import Sort


class FakeExportBackend:
    def __init__(self, response=None) -> None:
        self.response = response if response is not None else {"msg": "Retrieved 2 abstracts", "export": "@ARTICLE{a}\n"}
        self.posts = []

    def post_json(self, path, payload=None):
        self.posts.append((path, payload))
        return self.response


class TestExportFormat(unittest.TestCase):
    def test_parse_is_case_insensitive(self) -> None:
        self.assertIs(ExportFormat.parse("BibTeX"), ExportFormat.BIBTEX)
        self.assertIs(ExportFormat.parse(" custom "), ExportFormat.CUSTOM)

    def test_parse_unknown(self) -> None:
        with self.assertRaises(ValueError) as ctx:
            ExportFormat.parse("pdf")
        self.assertIn("bibtex", str(ctx.exception))


class TestExportRequest(unittest.TestCase):
    def test_payload_and_path(self) -> None:
        request = ExportRequest.create(FakeExportBackend(), "BIBTEX", ["2020a", "2020b"])
        self.assertEqual(request.path, "export/bibtex")
        self.assertEqual(request.payload(), {"bibcode": ["2020a", "2020b"]})

    def test_sort_is_rendered(self) -> None:
        request = ExportRequest.create(FakeExportBackend(), ExportFormat.RIS, ["a"]).sort("date").sort(Sort.ascending("bibcode"))
        self.assertEqual(request.payload()["sort"], "date desc,bibcode asc")

    def test_format_string_only_sent_for_custom(self) -> None:
        plain = ExportRequest.create(FakeExportBackend(), ExportFormat.AASTEX, ["a"]).format("%l")
        self.assertNotIn("format", plain.payload())
        custom = ExportRequest.create(FakeExportBackend(), ExportFormat.CUSTOM, ["a"]).format("%l (%Y)")
        self.assertEqual(custom.payload(), {"bibcode": ["a"], "format": "%l (%Y)"})
        self.assertEqual(custom.path, "export/custom")

    def test_custom_without_format_fails_before_dispatch(self) -> None:
        backend = FakeExportBackend()
        request = ExportRequest.create(backend, ExportFormat.CUSTOM, ["a"])
        with self.assertRaises(PreconditionError):
            request.send()
        self.assertEqual(backend.posts, [])

    def test_send_returns_export_text(self) -> None:
        backend = FakeExportBackend()
        text = ExportRequest.create(backend, "bibtex", ["a", "b"]).send()
        self.assertEqual(text, "@ARTICLE{a}\n")
        self.assertEqual(backend.posts, [("export/bibtex", {"bibcode": ["a", "b"]})])

    def test_send_surfaces_server_error(self) -> None:
        backend = FakeExportBackend({"error": "no result from solr"})
        with self.assertRaises(RemoteRejectedError):
            ExportRequest.create(backend, "bibtex", ["a"]).send()


class TestBibcodes(unittest.TestCase):
    def test_missing_bibcode_is_reported_with_index(self) -> None:
        docs = [Document(bibcode="a"), Document(title=("no bibcode",))]
        with self.assertRaises(MissingFieldError) as ctx:
            bibcodes_from_documents(docs)
        self.assertEqual(ctx.exception.field, "bibcode")
        self.assertEqual(ctx.exception.index, 1)
        self.assertIsInstance(ctx.exception, PreconditionError)

    def test_collect_bibcodes_projects_to_bibcode(self) -> None:
        class Backend:
            def __init__(self) -> None:
                self.requests = []

            def get_json(self, path, params=None):
                self.requests.append(dict(params))
                start, rows = params["start"], params["rows"]
                docs = [{"bibcode": f"b{i}"} for i in range(start, min(start + rows, 5))]
                return {"response": {"numFound": 5, "start": start, "docs": docs}}

        backend = Backend()
        query = SearchQuery(client=backend, query="q").field("title").field("author")
        self.assertEqual(collect_bibcodes(query, limit=3), ["b0", "b1", "b2"])
        self.assertEqual(backend.requests[0]["fl"], "bibcode")
        self.assertEqual(query.field_list, ("title", "author"))


if __name__ == "__main__":
    unittest.main()
