"""sbt plugin registry client: resolve releases across candidate registries."""
from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from common.http_client import HttpClient, TransportError
from common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer
from constants import Constants
from versioning import get_scheme
from versioning.schemes import VersioningScheme

from .collector import CollectedVersions, collect_nested_versions, collect_versions
from .discovery import fetch_descriptor
from .layout import resolve_layout
from .models import ArtifactKey, Descriptor, Release, ReleaseResult, parse_package_name
from .prober import DirectoryProber

logger = logging.getLogger(__name__)


def _search_roots(registry_url: str, key: ArtifactKey) -> List[str]:
    """Organization directories to try, Ivy-style dotted path first."""
    base = registry_url.rstrip("/")
    roots = [f"{base}/{key.organization}", f"{base}/{key.group_path}"]
    return list(dict.fromkeys(roots))


def _build_result(
    registry_url: str,
    search_root: str,
    key: ArtifactKey,
    collected: CollectedVersions,
    descriptor: Optional[Descriptor] = None,
) -> ReleaseResult:
    descriptor = descriptor or Descriptor()
    return ReleaseResult(
        dependency_url=f"{search_root}/{key.plugin_name}",
        registry_url=registry_url.rstrip("/"),
        releases=[Release(version=v) for v in collected.versions],
        homepage=descriptor.homepage,
        source_url=descriptor.source_url,
    )


def _resolve_root(  # pylint: disable=too-many-arguments
    http: HttpClient,
    prober: DirectoryProber,
    registry_url: str,
    search_root: str,
    key: ArtifactKey,
    scheme: VersioningScheme,
    max_workers: Optional[int] = None,
) -> Optional[ReleaseResult]:
    nested = collect_nested_versions(
        prober, f"{search_root}/{key.plugin_name}", scheme, key.scala_suffix, max_workers
    )
    if nested:
        if is_debug_enabled(logger):
            logger.debug("Found releases in nested sbt layout", extra=extra_context(
                event="decision", component="client", action="resolve_registry",
                target=safe_url(search_root), outcome="nested", count=len(nested.versions),
                package_manager="sbt"
            ))
        return _build_result(registry_url, search_root, key, nested)

    artifact_dirs = resolve_layout(prober, search_root, key)
    collected = collect_versions(prober, search_root, artifact_dirs, scheme, max_workers)
    if not collected:
        return None
    latest = collected.versions[-1]
    descriptor = fetch_descriptor(http, search_root, collected.sources[latest], latest)
    if is_debug_enabled(logger):
        logger.debug("Found releases in cross-built layout", extra=extra_context(
            event="decision", component="client", action="resolve_registry",
            target=safe_url(search_root), outcome="cross_built",
            count=len(collected.versions), package_manager="sbt"
        ))
    return _build_result(registry_url, search_root, key, collected, descriptor)


def resolve_registry(  # pylint: disable=too-many-arguments
    http: HttpClient,
    registry_url: str,
    key: ArtifactKey,
    scheme: VersioningScheme,
    max_workers: Optional[int] = None,
) -> Optional[ReleaseResult]:
    """Resolve ``key`` against one registry.

    Each search root is tried in turn; a root that cannot be listed is
    skipped in favour of the next one.

    Returns None when the registry has no releases for the plugin.

    Raises:
        TransportError: no search root of the registry could be listed.
    """
    prober = DirectoryProber(http)
    roots = _search_roots(registry_url, key)
    failures: List[TransportError] = []
    for search_root in roots:
        try:
            result = _resolve_root(http, prober, registry_url, search_root, key, scheme, max_workers)
        except TransportError as exc:
            logger.debug("Search root %s failed: %s", safe_url(search_root), exc.reason, extra=extra_context(
                event="http_error", component="client", action="resolve_registry",
                target=safe_url(search_root), outcome="root_skipped", package_manager="sbt"
            ))
            failures.append(exc)
            continue
        if result is not None:
            return result
    if len(failures) == len(roots):
        raise failures[-1]
    return None


def get_releases(
    package_name: str,
    registry_urls: Optional[Sequence[str]] = None,
    *,
    versioning: Optional[str] = None,
    http: Optional[HttpClient] = None,
    max_workers: Optional[int] = None,
) -> Optional[ReleaseResult]:
    """Resolve released versions of an sbt plugin.

    Registries are tried in order and the first one with releases wins. An
    empty or missing list means Constants.DEFAULT_REGISTRY_URLS.

    Args:
        package_name: ``organization:artifact[_scalaVersion]``.
        registry_urls: Candidate repository base URLs.
        versioning: Versioning scheme id used to validate and sort labels;
            None means Constants.DEFAULT_VERSIONING.
        http: Injected client; a private one is created and closed otherwise.
        max_workers: Bound for concurrent sibling probes.

    Returns:
        ReleaseResult, or None when no registry yielded releases.

    Raises:
        InvalidPackageNameError: malformed package identifier.
        UnknownVersioningError: unsupported versioning scheme.
    """
    key = parse_package_name(package_name)
    scheme = get_scheme(versioning)
    candidates = [url for url in (registry_urls or []) if url] or list(Constants.DEFAULT_REGISTRY_URLS)

    owns_client = http is None
    client = http or HttpClient()
    try:
        with Timer() as t:
            logger.info("sbt plugin lookup started: %s", package_name, extra=extra_context(
                event="start", component="client", action="get_releases", package_manager="sbt"
            ))
            for registry_url in candidates:
                try:
                    result = resolve_registry(client, registry_url, key, scheme, max_workers)
                except TransportError as exc:
                    logger.warning(
                        "Registry %s unreachable, skipping: %s",
                        safe_url(registry_url),
                        exc.reason,
                        extra=extra_context(
                            event="http_error", component="client", action="get_releases",
                            outcome="skipped", target=safe_url(registry_url), package_manager="sbt"
                        ),
                    )
                    continue
                if result is not None:
                    logger.info(
                        "Found %d releases of %s in %s",
                        len(result.releases),
                        package_name,
                        safe_url(registry_url),
                        extra=extra_context(
                            event="complete", component="client", action="get_releases",
                            outcome="found", count=len(result.releases),
                            duration_ms=t.duration_ms(), package_manager="sbt"
                        ),
                    )
                    return result
            logger.info("No releases found for %s", package_name, extra=extra_context(
                event="complete", component="client", action="get_releases",
                outcome="not_found", duration_ms=t.duration_ms(), package_manager="sbt"
            ))
            return None
    finally:
        if owns_client:
            client.close()
