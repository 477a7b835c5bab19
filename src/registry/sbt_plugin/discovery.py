"""POM discovery helpers: homepage and source repository enrichment."""
from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from typing import Dict, List, Optional

from common.http_client import HttpClient, TransportError
from common.logging_utils import extra_context, is_debug_enabled, safe_url
from constants import Constants

from .models import Descriptor

logger = logging.getLogger(__name__)

_SCM_PREFIX_RE = re.compile(r"^(scm:)?(git:(?!//))?")
_GITHUB_SSH_RE = re.compile(r"^git@github\.com:")
_VCS_SUFFIX_RE = re.compile(r"\.git/?$")


def _pom_urls(search_root: str, artifact_dir: str, version: str) -> List[str]:
    """Candidate POM URLs for a version inside ``artifact_dir``.

    Cross-built artifacts publish ``<dir>-<version>.pom``; some plugins keep
    the bare plugin name as artifact id, so that spelling is tried second.
    """
    root = search_root.rstrip("/")
    artifact = artifact_dir.split("_", 1)[0]
    names = [f"{artifact_dir}-{version}.pom"]
    if artifact != artifact_dir:
        names.append(f"{artifact}-{version}.pom")
    return [f"{root}/{artifact_dir}/{version}/{name}" for name in names]


def _fetch_pom(http: HttpClient, search_root: str, artifact_dir: str, version: str) -> Optional[str]:
    """Fetch POM content, trying each candidate file name in turn.

    Returns:
        POM XML content as string or None if every fetch failed
    """
    for pom_url in _pom_urls(search_root, artifact_dir, version):
        try:
            response = http.get(pom_url)
        except TransportError:
            # Ignore network exceptions; caller will handle absence
            if is_debug_enabled(logger):
                logger.debug("POM fetch exception", extra=extra_context(
                    event="anomaly", component="discovery", action="fetch_pom",
                    target=safe_url(pom_url), outcome="network_error", package_manager="sbt"
                ))
            continue
        if response.status_code == 200 and response.text:
            if is_debug_enabled(logger):
                logger.debug("POM fetch successful", extra=extra_context(
                    event="function_exit", component="discovery", action="fetch_pom",
                    target=safe_url(pom_url), outcome="success", package_manager="sbt"
                ))
            return response.text
        if is_debug_enabled(logger):
            logger.debug("POM fetch failed", extra=extra_context(
                event="function_exit", component="discovery", action="fetch_pom",
                target=safe_url(pom_url), outcome="fetch_failed",
                status_code=response.status_code, package_manager="sbt"
            ))
    return None


def _find_text(root: ET.Element, path: str) -> Optional[str]:
    """Find ``path`` under the project root with or without the POM namespace."""
    ns = {"pom": Constants.POM_NAMESPACE}
    namespaced = "/".join(f"pom:{part}" for part in path.split("/"))
    elem = root.find(namespaced, ns)
    if elem is None:
        elem = root.find(path)
    if elem is None or not isinstance(elem.text, str):
        return None
    value = elem.text.strip()
    return value or None


def _parse_urls_from_pom(pom_xml: str) -> Dict[str, Optional[str]]:
    """Parse project and SCM URLs from POM XML.

    Args:
        pom_xml: POM XML content as string

    Returns:
        Dict with keys 'url' and 'scm_url' (values may be None).

    Raises:
        ET.ParseError: malformed XML.
    """
    root = ET.fromstring(pom_xml)
    return {
        "url": _find_text(root, "url"),
        "scm_url": _find_text(root, "scm/url"),
    }


def normalize_source_url(url: str) -> str:
    """Turn an SCM URL into a browsable repository URL.

    Strips ``scm:`` and ``git:`` prefixes, rewrites GitHub SSH remotes to
    https and removes a trailing ``.git``.
    """
    value = _SCM_PREFIX_RE.sub("", url.strip())
    value = _GITHUB_SSH_RE.sub("https://github.com/", value)
    return _VCS_SUFFIX_RE.sub("", value)


def fetch_descriptor(
    http: HttpClient,
    search_root: str,
    artifact_dir: str,
    version: str,
) -> Descriptor:
    """Fetch and parse the POM for ``version``.

    Missing POMs, failed requests and malformed XML all yield an empty
    Descriptor; enrichment never fails a resolution.
    """
    pom_xml = _fetch_pom(http, search_root, artifact_dir, version)
    if not pom_xml:
        return Descriptor()
    try:
        urls = _parse_urls_from_pom(pom_xml)
    except ET.ParseError:
        logger.warning("Ignoring malformed POM for %s/%s", artifact_dir, version)
        return Descriptor()

    descriptor = Descriptor(homepage=urls["url"])
    if urls["scm_url"]:
        descriptor.source_url = normalize_source_url(urls["scm_url"])
    if is_debug_enabled(logger):
        logger.debug("Parsed POM descriptor", extra=extra_context(
            event="function_exit", component="discovery", action="fetch_descriptor",
            outcome="found" if (descriptor.homepage or descriptor.source_url) else "empty",
            package_manager="sbt"
        ))
    return descriptor
