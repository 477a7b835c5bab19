"""Layout resolution: find which artifact directories hold a plugin.

Two layouts are recognised under an organization directory:

* cross-built Maven directories, ``<plugin>_<scala>[_<sbt>]/<version>/``,
  plus the rare plain ``<plugin>/<version>/`` directory;
* the nested sbt layout ``<plugin>/scala_<scala>/sbt_<sbt>/<version>/``.

Matching is a pure function over directory names; probing happens afterwards
and only for the matched names.
"""
from __future__ import annotations

import logging
import re
from typing import Iterable, List, Optional

from common.logging_utils import extra_context, is_debug_enabled

from .models import ArtifactKey
from .prober import DirectoryProber

logger = logging.getLogger(__name__)

SCALA_DIR_PREFIX = "scala_"

_SCALA_VERSION_RE = re.compile(r"\d+(\.\d+)*(-[0-9A-Za-z.]+)?")


def looks_like_scala_version(token: str) -> bool:
    """Leading digit, dot-delimited (``2.12``, ``3``, ``2.13.0-M5``)."""
    return bool(_SCALA_VERSION_RE.fullmatch(token))


def is_artifact_dir(name: str, key: ArtifactKey) -> bool:
    """Whether directory ``name`` may hold releases of ``key``'s plugin.

    Without an explicit suffix the plain ``<plugin>`` directory qualifies, as
    does ``<plugin>_<scala>[_...]`` when ``<scala>`` looks like a version. With
    an explicit suffix only ``<plugin>_<suffix>[_...]`` qualifies.
    """
    segments = name.split("_")
    if segments[0] != key.plugin_name:
        return False
    if len(segments) == 1:
        return key.scala_suffix is None
    scala = segments[1]
    if key.scala_suffix is not None:
        return scala == key.scala_suffix
    return looks_like_scala_version(scala)


def _unique(items: Iterable[str]) -> List[str]:
    seen = set()
    result = []
    for item in items:
        if item not in seen:
            seen.add(item)
            result.append(item)
    return result


def match_artifact_dirs(labels: Iterable[str], key: ArtifactKey) -> List[str]:
    """Filter an organization listing down to the plugin's artifact directories."""
    return _unique(label for label in labels if is_artifact_dir(label, key))


def match_scala_dirs(labels: Iterable[str], scala_suffix: Optional[str] = None) -> List[str]:
    """Select ``scala_<version>`` entries of a nested-layout plugin directory."""
    matches = []
    for label in labels:
        if not label.startswith(SCALA_DIR_PREFIX):
            continue
        scala = label[len(SCALA_DIR_PREFIX):]
        if scala_suffix is not None and scala != scala_suffix:
            continue
        matches.append(label)
    return _unique(matches)


def resolve_layout(prober: DirectoryProber, search_root: str, key: ArtifactKey) -> List[str]:
    """List ``search_root`` and return the plugin's artifact directory names.

    A missing organization directory yields an empty list. Transport errors
    propagate to the caller.
    """
    listing = prober.list(search_root)
    if listing is None:
        return []
    artifact_dirs = match_artifact_dirs(listing.labels, key)
    if is_debug_enabled(logger):
        logger.debug("Resolved artifact directories", extra=extra_context(
            event="decision", component="layout", action="resolve_layout",
            outcome="matched" if artifact_dirs else "no_match", count=len(artifact_dirs),
            package_manager="sbt"
        ))
    return artifact_dirs
