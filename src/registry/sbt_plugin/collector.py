"""Version collection across artifact directories."""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from common.http_client import TransportError
from common.logging_utils import extra_context, is_debug_enabled, safe_url
from constants import Constants
from versioning.schemes import VersioningScheme

from .layout import match_scala_dirs
from .models import DirectoryListing
from .prober import DirectoryProber

logger = logging.getLogger(__name__)


@dataclass
class CollectedVersions:
    """Sorted versions plus, for each, the last directory that listed it."""
    versions: List[str] = field(default_factory=list)
    sources: Dict[str, str] = field(default_factory=dict)

    def __bool__(self) -> bool:
        return bool(self.versions)


def _probe_one(prober: DirectoryProber, url: str) -> Optional[DirectoryListing]:
    try:
        return prober.list(url)
    except TransportError as exc:
        # One unreachable subpath never aborts its siblings
        logger.warning("Skipping %s: %s", safe_url(url), exc.reason)
        return None


def probe_many(
    prober: DirectoryProber,
    urls: Sequence[str],
    max_workers: Optional[int] = None,
) -> List[Optional[DirectoryListing]]:
    """Probe sibling directories concurrently, preserving input order."""
    if not urls:
        return []
    workers = max(1, min(max_workers or Constants.PROBE_MAX_CONCURRENCY, len(urls)))
    if workers == 1:
        return [_probe_one(prober, url) for url in urls]
    with ThreadPoolExecutor(max_workers=workers) as pool:
        return list(pool.map(lambda url: _probe_one(prober, url), urls))


def _gather(
    scheme: VersioningScheme,
    listings: Sequence[Tuple[str, Optional[DirectoryListing]]],
) -> CollectedVersions:
    sources: Dict[str, str] = {}
    dropped = 0
    for source, listing in listings:
        if listing is None:
            continue
        for label in listing.labels:
            if not scheme.is_valid(label):
                dropped += 1
                continue
            sources[label] = source
    if dropped and is_debug_enabled(logger):
        logger.debug("Dropped invalid version labels", extra=extra_context(
            event="decision", component="collector", action="gather",
            outcome="dropped_invalid", count=dropped, package_manager="sbt"
        ))
    return CollectedVersions(versions=scheme.sort(sources), sources=sources)


def collect_versions(
    prober: DirectoryProber,
    search_root: str,
    artifact_dirs: Sequence[str],
    scheme: VersioningScheme,
    max_workers: Optional[int] = None,
) -> CollectedVersions:
    """Union the version directories found under each artifact directory.

    ``sources`` maps each version to the artifact directory name (relative to
    ``search_root``) that listed it last.
    """
    root = search_root.rstrip("/")
    urls = [f"{root}/{artifact_dir}" for artifact_dir in artifact_dirs]
    listings = probe_many(prober, urls, max_workers)
    return _gather(scheme, list(zip(artifact_dirs, listings)))


def collect_nested_versions(
    prober: DirectoryProber,
    artifact_root: str,
    scheme: VersioningScheme,
    scala_suffix: Optional[str] = None,
    max_workers: Optional[int] = None,
) -> CollectedVersions:
    """Walk ``scala_<v>/<sbt dir>/<version>/`` below ``artifact_root``.

    A transport failure on ``artifact_root`` itself propagates; failures
    further down only drop the affected subtree.
    """
    root = artifact_root.rstrip("/")
    listing = prober.list(root)
    if listing is None:
        return CollectedVersions()
    scala_dirs = match_scala_dirs(listing.labels, scala_suffix)
    if not scala_dirs:
        return CollectedVersions()

    scala_listings = probe_many(prober, [f"{root}/{d}" for d in scala_dirs], max_workers)
    sbt_dirs: List[str] = []
    for scala_dir, scala_listing in zip(scala_dirs, scala_listings):
        if scala_listing is None:
            continue
        sbt_dirs.extend(f"{scala_dir}/{sbt_dir}" for sbt_dir in scala_listing.labels)

    version_listings = probe_many(prober, [f"{root}/{d}" for d in sbt_dirs], max_workers)
    if is_debug_enabled(logger):
        logger.debug("Walked nested sbt layout", extra=extra_context(
            event="function_exit", component="collector", action="collect_nested_versions",
            target=safe_url(root), count=len(sbt_dirs), package_manager="sbt"
        ))
    return _gather(scheme, list(zip(sbt_dirs, version_listings)))
