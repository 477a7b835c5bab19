"""Shared fixtures: an in-memory HTTP client serving directory trees."""

import threading

import pytest

from common.http_client import HttpResponse, TransportError

MAVEN_REPO = "https://repo.maven.apache.org/maven2"


def listing(*entries):
    """Render a minimal nginx-style directory page for ``entries``."""
    links = ['<a href="../">../</a>']
    links.extend(f'<a href="{entry}">{entry}</a>' for entry in entries)
    return "<html><body><pre>\n" + "\n".join(links) + "\n</pre></body></html>"


class FakeHttp:
    """URL-keyed stand-in for HttpClient.

    Unknown URLs answer 404. URLs under any of ``fail_prefixes`` raise
    TransportError, as do routes whose value is an exception instance.
    """

    def __init__(self, routes=None, fail_prefixes=()):
        self.routes = dict(routes or {})
        self.fail_prefixes = tuple(fail_prefixes)
        self.calls = []
        self._lock = threading.Lock()

    def add(self, url, body, status_code=200):
        if isinstance(body, Exception):
            self.routes[url] = body
        else:
            self.routes[url] = (status_code, body)

    def get(self, url):
        with self._lock:
            self.calls.append(url)
        if any(url.startswith(prefix) for prefix in self.fail_prefixes):
            raise TransportError(url, "connection refused")
        route = self.routes.get(url)
        if route is None:
            return HttpResponse(status_code=404, text="Not Found")
        if isinstance(route, Exception):
            raise route
        if isinstance(route, str):
            return HttpResponse(status_code=200, text=route)
        status_code, body = route
        return HttpResponse(status_code=status_code, text=body)

    def close(self):
        pass


@pytest.fixture
def fake_http():
    """Empty FakeHttp; tests register routes with ``add``."""
    return FakeHttp()
