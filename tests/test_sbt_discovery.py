"""Tests for POM-based homepage and source URL discovery."""

import pytest

from common.http_client import TransportError
from registry.sbt_plugin.discovery import (
    _parse_urls_from_pom,
    _pom_urls,
    fetch_descriptor,
    normalize_source_url,
)

ROOT = "https://repo.example/maven2/io/get-coursier"

POM_NAMESPACED = """<project xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance" xmlns="http://maven.apache.org/POM/4.0.0" xsi:schemaLocation="http://maven.apache.org/POM/4.0.0 http://maven.apache.org/xsd/maven-4.0.0.xsd">
  <url>https://get-coursier.io/</url>
  <scm>
    <url>https://github.com/coursier/sbt-coursier</url>
  </scm>
</project>
"""

POM_PLAIN = """<?xml version="1.0" encoding="UTF-8"?>
<project>
  <scm>
    <url>scm:git:git@github.com:x/y.git</url>
  </scm>
</project>
"""


class TestNormalizeSourceUrl:
    """Test normalize_source_url."""

    @pytest.mark.parametrize("raw,expected", [
        ("https://github.com/x/y", "https://github.com/x/y"),
        ("https://github.com/x/y.git", "https://github.com/x/y"),
        ("scm:git:https://github.com/x/y.git", "https://github.com/x/y"),
        ("git@github.com:x/y.git", "https://github.com/x/y"),
        ("scm:git:git@github.com:x/y", "https://github.com/x/y"),
        ("git://github.com/x/y.git", "git://github.com/x/y"),
        ("  https://gitlab.com/a/b.git/  ", "https://gitlab.com/a/b"),
    ])
    def test_normalizes(self, raw, expected):
        assert normalize_source_url(raw) == expected


class TestParseUrlsFromPom:
    """Test _parse_urls_from_pom."""

    def test_namespaced_pom(self):
        urls = _parse_urls_from_pom(POM_NAMESPACED)

        assert urls == {"url": "https://get-coursier.io/", "scm_url": "https://github.com/coursier/sbt-coursier"}

    def test_pom_without_namespace(self):
        urls = _parse_urls_from_pom(POM_PLAIN)

        assert urls["url"] is None
        assert urls["scm_url"] == "scm:git:git@github.com:x/y.git"

    def test_scm_url_is_not_mistaken_for_homepage(self):
        """Test only the top-level <url> is the homepage."""
        assert _parse_urls_from_pom(POM_PLAIN)["url"] is None

    def test_malformed_pom_raises(self):
        import xml.etree.ElementTree as ET

        with pytest.raises(ET.ParseError):
            _parse_urls_from_pom("<project><url>")


class TestFetchDescriptor:
    """Test fetch_descriptor end to end against a fake client."""

    def test_pom_urls_order(self):
        assert _pom_urls(ROOT, "sbt-coursier_2.12_1.0", "2.0.0") == [
            f"{ROOT}/sbt-coursier_2.12_1.0/2.0.0/sbt-coursier_2.12_1.0-2.0.0.pom",
            f"{ROOT}/sbt-coursier_2.12_1.0/2.0.0/sbt-coursier-2.0.0.pom",
        ]
        assert _pom_urls(ROOT, "plugin", "1.0") == [f"{ROOT}/plugin/1.0/plugin-1.0.pom"]

    def test_falls_back_to_plain_artifact_id(self, fake_http):
        fake_http.add(
            f"{ROOT}/sbt-coursier_2.12_1.0/2.0.0-RC6-6/sbt-coursier-2.0.0-RC6-6.pom",
            POM_NAMESPACED,
        )

        descriptor = fetch_descriptor(fake_http, ROOT, "sbt-coursier_2.12_1.0", "2.0.0-RC6-6")

        assert descriptor.homepage == "https://get-coursier.io/"
        assert descriptor.source_url == "https://github.com/coursier/sbt-coursier"

    def test_strips_vcs_suffix(self, fake_http):
        fake_http.add(f"{ROOT}/plugin_2.12_1.0/1.0/plugin_2.12_1.0-1.0.pom", POM_PLAIN)

        descriptor = fetch_descriptor(fake_http, ROOT, "plugin_2.12_1.0", "1.0")

        assert descriptor.homepage is None
        assert descriptor.source_url == "https://github.com/x/y"

    def test_missing_pom_yields_empty_descriptor(self, fake_http):
        descriptor = fetch_descriptor(fake_http, ROOT, "plugin_2.12_1.0", "1.0")

        assert descriptor.homepage is None
        assert descriptor.source_url is None

    def test_malformed_pom_is_skipped(self, fake_http):
        fake_http.add(f"{ROOT}/plugin/1.0/plugin-1.0.pom", "<project><url>")

        descriptor = fetch_descriptor(fake_http, ROOT, "plugin", "1.0")

        assert descriptor.homepage is None
        assert descriptor.source_url is None

    def test_network_error_is_skipped(self, fake_http):
        url = f"{ROOT}/plugin/1.0/plugin-1.0.pom"
        fake_http.add(url, TransportError(url, "timeout"))

        descriptor = fetch_descriptor(fake_http, ROOT, "plugin", "1.0")

        assert descriptor.homepage is None

    def test_server_error_is_skipped(self, fake_http):
        fake_http.add(f"{ROOT}/plugin/1.0/plugin-1.0.pom", POM_NAMESPACED, status_code=500)

        assert fetch_descriptor(fake_http, ROOT, "plugin", "1.0").homepage is None
