"""Tests for response envelope parsing."""

import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from AdsClient.api.parser import error_message, parse_export_envelope, parse_search_envelope
from AdsClient.core.errors import DecodeError, RemoteRejectedError


class TestSearchEnvelope(unittest.TestCase):
    def test_success_envelope(self) -> None:
        payload = {
            "responseHeader": {"status": 0, "QTime": 3, "params": {"q": "star"}},
            "response": {"numFound": 42, "start": 10, "docs": [{"bibcode": "a"}, {"bibcode": "b"}]},
        }
        page = parse_search_envelope(payload)
        self.assertEqual(page.num_found, 42)
        self.assertEqual(page.start, 10)
        self.assertEqual([doc.bibcode for doc in page.docs], ["a", "b"])

    def test_error_envelope(self) -> None:
        with self.assertRaises(RemoteRejectedError) as ctx:
            parse_search_envelope({"responseHeader": {"status": 400}, "error": {"msg": "undefined field foo", "code": 400}})
        self.assertEqual(ctx.exception.message, "undefined field foo")

    def test_error_wins_over_response(self) -> None:
        payload = {"response": {"numFound": 0, "start": 0, "docs": []}, "error": {"msg": "boom"}}
        with self.assertRaises(RemoteRejectedError):
            parse_search_envelope(payload)

    def test_malformed_envelopes(self) -> None:
        cases = [
            [],
            {},
            {"response": []},
            {"response": {"start": 0, "docs": []}},
            {"response": {"numFound": "3", "start": 0, "docs": []}},
            {"response": {"numFound": -1, "start": 0, "docs": []}},
            {"response": {"numFound": 3, "start": 0}},
            {"response": {"numFound": 3, "start": 0, "docs": {}}},
            {"response": {"numFound": 1, "start": 0, "docs": [{"year": 2020}]}},
        ]
        for payload in cases:
            with self.subTest(payload=payload):
                with self.assertRaises(DecodeError):
                    parse_search_envelope(payload)


class TestExportEnvelope(unittest.TestCase):
    def test_success(self) -> None:
        text = parse_export_envelope({"msg": "Retrieved 1 abstracts, starting with number 1.", "export": "@ARTICLE{x}"})
        self.assertEqual(text, "@ARTICLE{x}")

    def test_string_error(self) -> None:
        with self.assertRaises(RemoteRejectedError):
            parse_export_envelope({"error": "no result from solr"})

    def test_missing_export(self) -> None:
        with self.assertRaises(DecodeError):
            parse_export_envelope({"msg": "ok"})


class TestErrorMessage(unittest.TestCase):
    def test_shapes(self) -> None:
        self.assertEqual(error_message({"error": {"msg": "bad"}}), "bad")
        self.assertEqual(error_message({"error": "bad"}), "bad")
        self.assertIsNone(error_message({"error": {"code": 400}}))
        self.assertIsNone(error_message({"response": {}}))
        self.assertIsNone(error_message("text"))


if __name__ == "__main__":
    unittest.main()
