"""Tests for the HTTP client, using a session with a mocked transport."""

import json
import os
import sys
import unittest
from pathlib import Path
from unittest import mock

import requests

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from AdsClient.api.client import API_BASE_URL, AdsApiClient
from AdsClient.api.search import SearchQuery
from AdsClient.core.errors import DecodeError, RemoteRejectedError, TokenNotFoundError, TransportError


def _response(status: int, body) -> requests.Response:
    response = requests.Response()
    response.status_code = status
    response.reason = "test"
    response.url = API_BASE_URL
    response.encoding = "utf-8"
    response._content = (body if isinstance(body, str) else json.dumps(body)).encode("utf-8")
    return response


def _client(*responses, **kwargs) -> tuple[AdsApiClient, mock.Mock]:
    session = requests.Session()
    session.request = mock.Mock(side_effect=list(responses))
    return AdsApiClient("secret-token", session=session, **kwargs), session.request


class TestClientSetup(unittest.TestCase):
    def test_headers(self) -> None:
        client, _ = _client(user_agent="tests/1.0")
        headers = client._session.headers
        self.assertEqual(headers["Authorization"], "Bearer secret-token")
        self.assertEqual(headers["User-Agent"], "tests/1.0")

    def test_empty_token_rejected(self) -> None:
        with self.assertRaises(TokenNotFoundError):
            AdsApiClient("  ")

    def test_from_env(self) -> None:
        with mock.patch.dict(os.environ, {"ADS_API_TOKEN": "env-token"}):
            with AdsApiClient.from_env() as client:
                self.assertEqual(client._session.headers["Authorization"], "Bearer env-token")

    def test_absolute_url_joins_onto_api_root(self) -> None:
        client = AdsApiClient("t", base_url="https://example.org/v1")
        self.assertEqual(client.absolute_url("search/query"), "https://example.org/v1/search/query")
        self.assertEqual(client.absolute_url("/export/bibtex"), "https://example.org/v1/export/bibtex")

    def test_builders(self) -> None:
        client, _ = _client()
        query = client.search("star")
        self.assertIsInstance(query, SearchQuery)
        self.assertIs(query.client, client)
        self.assertEqual(client.export("RIS", ["a"]).path, "export/ris")


class TestClientRequests(unittest.TestCase):
    def test_get_json(self) -> None:
        client, request = _client(_response(200, {"ok": True}), timeout=5.0)
        self.assertEqual(client.get_json("search/query", {"q": "star"}), {"ok": True})
        request.assert_called_once_with(
            "GET", API_BASE_URL + "search/query", timeout=5.0, params={"q": "star"}
        )

    def test_post_json(self) -> None:
        client, request = _client(_response(200, {"export": "x"}))
        client.post_json("export/bibtex", {"bibcode": ["a"]})
        request.assert_called_once_with(
            "POST", API_BASE_URL + "export/bibtex", timeout=30.0, json={"bibcode": ["a"]}
        )

    def test_network_failure(self) -> None:
        client, request = _client()
        request.side_effect = requests.ConnectionError("connection refused")
        with self.assertRaises(TransportError) as ctx:
            client.get_json("search/query")
        self.assertIsNone(ctx.exception.status_code)

    def test_http_error_without_envelope(self) -> None:
        for status, body in ((401, {"msg": "unauthorized"}), (502, "<html>Bad Gateway</html>")):
            with self.subTest(status=status):
                client, _ = _client(_response(status, body))
                with self.assertRaises(TransportError) as ctx:
                    client.get_json("search/query")
                self.assertEqual(ctx.exception.status_code, status)

    def test_http_error_with_envelope_is_returned(self) -> None:
        payload = {"responseHeader": {"status": 400}, "error": {"msg": "syntax error", "code": 400}}
        client, _ = _client(_response(400, payload))
        self.assertEqual(client.get_json("search/query"), payload)

    def test_invalid_json_on_success(self) -> None:
        client, _ = _client(_response(200, "not json"))
        with self.assertRaises(DecodeError):
            client.get_json("search/query")


class TestClientSearch(unittest.TestCase):
    def test_search_end_to_end(self) -> None:
        page = {"response": {"numFound": 2, "start": 0, "docs": [{"bibcode": "a"}, {"bibcode": "b"}]}}
        client, request = _client(_response(200, page))
        docs = list(client.search("star").field("bibcode").iter())
        self.assertEqual([doc.bibcode for doc in docs], ["a", "b"])
        params = request.call_args.kwargs["params"]
        self.assertEqual(params, {"q": "star", "rows": 2000, "start": 0, "fl": "bibcode"})

    def test_remote_error_through_search(self) -> None:
        client, _ = _client(_response(400, {"error": {"msg": "undefined field foo"}}))
        with self.assertRaises(RemoteRejectedError):
            client.search("foo:bar").send()


if __name__ == "__main__":
    unittest.main()
