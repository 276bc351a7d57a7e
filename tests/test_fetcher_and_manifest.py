"""
Tests for source fetching and the version manifest.
"""
import json
import pytest
import requests
from unittest.mock import Mock, patch

from builder_service.exceptions import FetchError, ManifestError
from builder_service.fetcher import build_session, fetch_text, is_remote, make_fetcher
from builder_service.manifest import fetch_manifest, parse_manifest, resolve_source


class TestFetchText:
    """Test retrieving sources from disk and HTTP."""

    def test_local_path(self, tmp_path):
        source = tmp_path / "umbra.js"
        source.write_text("x=1;", encoding="utf-8")

        assert fetch_text(str(source)) == "x=1;"

    def test_file_url(self, tmp_path):
        source = tmp_path / "umbra.js"
        source.write_text("y=2;", encoding="utf-8")

        assert fetch_text(source.as_uri()) == "y=2;"

    def test_missing_file_raises_fetch_error(self, tmp_path):
        with pytest.raises(FetchError) as exc_info:
            fetch_text(str(tmp_path / "missing.js"))

        assert exc_info.value.url.endswith("missing.js")

    def test_http_uses_session(self):
        session = requests.Session()
        with patch.object(session, "get") as mock_get:
            mock_response = Mock()
            mock_response.text = "remote();"
            mock_response.raise_for_status = Mock()
            mock_get.return_value = mock_response

            result = fetch_text("https://example.com/umbra.js", session=session, timeout=5)

            mock_get.assert_called_once_with("https://example.com/umbra.js", timeout=5)
            assert result == "remote();"

    def test_http_error_raises_fetch_error(self):
        session = requests.Session()
        with patch.object(session, "get") as mock_get:
            mock_response = Mock()
            mock_response.raise_for_status = Mock(
                side_effect=requests.exceptions.HTTPError("404 Client Error")
            )
            mock_get.return_value = mock_response

            with pytest.raises(FetchError) as exc_info:
                fetch_text("https://example.com/missing.js", session=session)

            assert "404" in exc_info.value.reason

    def test_connection_error_raises_fetch_error(self):
        with patch("builder_service.fetcher.requests.get") as mock_get:
            mock_get.side_effect = requests.exceptions.ConnectionError("refused")

            with pytest.raises(FetchError):
                fetch_text("http://example.com/umbra.js")

    def test_make_fetcher_binds_session(self):
        session = requests.Session()
        with patch.object(session, "get") as mock_get:
            mock_get.return_value = Mock(text="bound();", raise_for_status=Mock())

            fetch = make_fetcher(session, timeout=3)

            assert fetch("https://example.com/a.js") == "bound();"
            mock_get.assert_called_once_with("https://example.com/a.js", timeout=3)

    def test_local_reads_can_be_disabled(self, tmp_path):
        source = tmp_path / "secret.txt"
        source.write_text("API_KEY=hunter2", encoding="utf-8")
        fetch = make_fetcher(allow_local=False)

        for location in (str(source), source.as_uri()):
            with pytest.raises(FetchError) as exc_info:
                fetch(location)
            assert "local sources are disabled" in exc_info.value.reason

    def test_build_session_with_proxy(self):
        session = build_session("socks5://127.0.0.1:1081")

        assert session.proxies["https"] == "socks5://127.0.0.1:1081"

    @pytest.mark.parametrize(
        "location,expected",
        [
            ("https://example.com/a.js", True),
            ("http://example.com/a.js", True),
            ("file:///tmp/a.js", False),
            ("/tmp/a.js", False),
            ("a.js", False),
        ],
    )
    def test_is_remote(self, location, expected):
        assert is_remote(location) is expected


MANIFEST = {
    "versions": [
        {"version": "1.0.0", "source": "../s/umbra-1.0.0.js"},
        {"version": "1.1.0", "source": "https://cdn.example.com/umbra-1.1.0.js"},
    ]
}


class TestManifest:
    """Test manifest parsing and lookup."""

    def test_parse_and_resolve_relative_sources(self):
        manifest = parse_manifest(json.dumps(MANIFEST), base="https://example.com/api/api.json")

        assert [entry.version for entry in manifest.versions] == ["1.0.0", "1.1.0"]
        assert manifest.find("1.0.0").source == "https://example.com/s/umbra-1.0.0.js"
        assert manifest.find("1.1.0").source == "https://cdn.example.com/umbra-1.1.0.js"

    def test_find_unknown_version(self):
        manifest = parse_manifest(json.dumps(MANIFEST))

        assert manifest.find("9.9.9") is None
        assert manifest.latest.version == "1.1.0"

    def test_empty_manifest(self):
        manifest = parse_manifest("{}")

        assert manifest.versions == []
        assert manifest.latest is None

    def test_invalid_json(self):
        with pytest.raises(ManifestError):
            parse_manifest("{not json")

    def test_schema_mismatch(self):
        with pytest.raises(ManifestError):
            parse_manifest(json.dumps({"versions": [{"version": "1.0.0"}]}))

    def test_scalar_document(self):
        with pytest.raises(ManifestError):
            parse_manifest("42")

    def test_local_manifest_resolves_next_to_it(self, tmp_path):
        manifest_path = tmp_path / "api.json"
        manifest_path.write_text(
            json.dumps({"versions": [{"version": "1.0.0", "source": "umbra.js"}]}),
            encoding="utf-8",
        )

        manifest = fetch_manifest(str(manifest_path))

        assert manifest.find("1.0.0").source == str(tmp_path / "umbra.js")

    def test_lists_source(self):
        manifest = parse_manifest(json.dumps(MANIFEST), base="https://example.com/api/api.json")

        assert manifest.lists_source("https://example.com/s/umbra-1.0.0.js") is True
        assert manifest.lists_source("../s/umbra-1.0.0.js") is False

    def test_fetch_manifest_uses_injected_fetch(self):
        fetch = Mock(return_value=json.dumps(MANIFEST))

        manifest = fetch_manifest("https://example.com/api/api.json", fetch=fetch)

        fetch.assert_called_once_with("https://example.com/api/api.json")
        assert len(manifest.versions) == 2

    def test_resolve_source(self):
        assert resolve_source("/s/umbra.js", "https://example.com/api/api.json") == "https://example.com/s/umbra.js"
        assert resolve_source("/s/umbra.js", "/srv/api/api.json") == "/s/umbra.js"
        assert resolve_source("umbra.js", None) == "umbra.js"
