"""Maven version ordering backed by ``univers`` (ComparableVersion semantics)."""

import re
from typing import Optional

from univers.versions import InvalidVersion, MavenVersion

from .base import VersioningScheme

# Directory labels such as "latest" or "maven-metadata.xml" are not releases
_LABEL_RE = re.compile(r"^v?\d[0-9a-z.+_-]*$", re.IGNORECASE)


def _parse(label: str) -> Optional[MavenVersion]:
    if not label or not _LABEL_RE.match(label):
        return None
    try:
        return MavenVersion(label)
    except (InvalidVersion, ValueError):
        return None


def compare(left: str, right: str) -> int:
    """Compare two Maven versions like ``cmp``; equal spellings return 0."""
    left_ver, right_ver = _parse(left), _parse(right)
    if left_ver is None or right_ver is None:
        raise ValueError(f"Invalid Maven version: {left if left_ver is None else right}")
    if left_ver < right_ver:
        return -1
    if right_ver < left_ver:
        return 1
    return 0


class MavenVersioning(VersioningScheme):
    """Maven repository version ordering."""

    id = "maven"

    def is_valid(self, label: str) -> bool:
        return _parse(label) is not None

    def compare(self, left: str, right: str) -> int:
        return compare(left, right)
