"""Directory prober: fetch one listing page and extract its entries."""
from __future__ import annotations

import logging
import threading
from typing import Dict, Optional, Tuple

from common.http_client import HttpClient, TransportError
from common.logging_utils import extra_context, is_debug_enabled, safe_url

from .links import directory_label, extract_page_links, file_label
from .models import DirectoryListing

logger = logging.getLogger(__name__)

NOT_FOUND_STATUSES = (404, 410)


def ensure_trailing_slash(url: str) -> str:
    return url if url.endswith("/") else f"{url}/"


class DirectoryProber:
    """Lists subdirectories of repository paths through an injected client.

    Completed listings (including 404/410 answers) are memoized per prober,
    so a directory visited by more than one layout is fetched once. Transport
    failures are not memoized.
    """

    def __init__(self, http: HttpClient):
        self.http = http
        # Guarded by _cache_lock because sibling probes run on worker threads
        self._cache: Dict[Tuple[str, bool], Optional[DirectoryListing]] = {}
        self._cache_lock = threading.Lock()

    def list(self, url: str, include_files: bool = False) -> Optional[DirectoryListing]:
        """Fetch ``url`` as a directory listing.

        Returns:
            DirectoryListing (possibly with no labels), or None when the
            server answered 404/410.

        Raises:
            TransportError: network failure or any other non-2xx status.
        """
        base_url = ensure_trailing_slash(url)
        cache_key = (base_url, include_files)
        with self._cache_lock:
            if cache_key in self._cache:
                return self._cache[cache_key]
        listing = self._fetch(base_url, include_files)
        with self._cache_lock:
            self._cache[cache_key] = listing
        return listing

    def _fetch(self, base_url: str, include_files: bool) -> Optional[DirectoryListing]:
        res = self.http.get(base_url)
        if res.status_code in NOT_FOUND_STATUSES:
            if is_debug_enabled(logger):
                logger.debug("Directory not found", extra=extra_context(
                    event="function_exit", component="prober", action="list",
                    target=safe_url(base_url), outcome="not_found",
                    status_code=res.status_code, package_manager="sbt"
                ))
            return None
        if not res.ok:
            raise TransportError(base_url, f"unexpected status {res.status_code}", res.status_code)

        labels = extract_page_links(res.text, file_label if include_files else directory_label)
        if is_debug_enabled(logger):
            logger.debug("Directory listed", extra=extra_context(
                event="function_exit", component="prober", action="list",
                target=safe_url(base_url), outcome="success", count=len(labels),
                package_manager="sbt"
            ))
        return DirectoryListing(base_url=base_url, labels=labels)
