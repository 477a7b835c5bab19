"""Tests for the directory prober."""

import pytest

from common.http_client import TransportError
from registry.sbt_plugin.prober import DirectoryProber, ensure_trailing_slash

from conftest import listing

ROOT = "https://repo.example/maven2/org/example"


class TestDirectoryProber:
    """Test DirectoryProber.list."""

    def test_lists_subdirectories(self, fake_http):
        """Test that parent links and files are excluded."""
        fake_http.add(f"{ROOT}/", listing("plugin/", "plugin_2.12/", "maven-metadata.xml"))

        result = DirectoryProber(fake_http).list(ROOT)

        assert result is not None
        assert result.base_url == f"{ROOT}/"
        assert result.labels == ["plugin", "plugin_2.12"]

    def test_appends_trailing_slash_before_fetching(self, fake_http):
        """Test the request always targets the directory URL."""
        DirectoryProber(fake_http).list(ROOT)

        assert fake_http.calls == [f"{ROOT}/"]

    def test_not_found_returns_none(self, fake_http):
        """Test 404 is reported as absence, not as an empty listing."""
        assert DirectoryProber(fake_http).list(ROOT) is None

    def test_gone_returns_none(self, fake_http):
        """Test 410 is treated like 404."""
        fake_http.add(f"{ROOT}/", "gone", status_code=410)

        assert DirectoryProber(fake_http).list(ROOT) is None

    def test_page_without_links_is_empty_listing(self, fake_http):
        """Test a successful fetch with no anchors is distinct from 404."""
        fake_http.add(f"{ROOT}/", "<html><body>empty</body></html>")

        result = DirectoryProber(fake_http).list(ROOT)

        assert result is not None
        assert result.labels == []

    def test_server_error_raises_transport_error(self, fake_http):
        """Test 5xx is a transport failure."""
        fake_http.add(f"{ROOT}/", "boom", status_code=503)

        with pytest.raises(TransportError) as excinfo:
            DirectoryProber(fake_http).list(ROOT)

        assert excinfo.value.status_code == 503

    def test_network_error_propagates(self):
        """Test connection failures reach the caller."""
        from conftest import FakeHttp

        http = FakeHttp(fail_prefixes=("https://repo.example",))

        with pytest.raises(TransportError):
            DirectoryProber(http).list(ROOT)

    def test_include_files(self, fake_http):
        """Test file entries are kept on request."""
        fake_http.add(f"{ROOT}/", listing("plugin/", "maven-metadata.xml"))

        result = DirectoryProber(fake_http).list(ROOT, include_files=True)

        assert result.labels == ["plugin", "maven-metadata.xml"]

    def test_repeated_listing_is_served_from_memo(self, fake_http):
        """Test a directory visited twice is fetched once, 404s included."""
        fake_http.add(f"{ROOT}/", listing("plugin/"))
        prober = DirectoryProber(fake_http)

        first = prober.list(ROOT)
        second = prober.list(f"{ROOT}/")
        assert prober.list(f"{ROOT}/missing") is None
        assert prober.list(f"{ROOT}/missing") is None

        assert first is second
        assert fake_http.calls == [f"{ROOT}/", f"{ROOT}/missing/"]

    def test_transport_failures_are_retried_on_next_call(self, fake_http):
        """Test failures are not memoized."""
        fake_http.add(f"{ROOT}/", "boom", status_code=503)
        prober = DirectoryProber(fake_http)

        with pytest.raises(TransportError):
            prober.list(ROOT)
        fake_http.add(f"{ROOT}/", listing("plugin/"))

        assert prober.list(ROOT).labels == ["plugin"]


def test_ensure_trailing_slash():
    assert ensure_trailing_slash("https://a/b") == "https://a/b/"
    assert ensure_trailing_slash("https://a/b/") == "https://a/b/"
