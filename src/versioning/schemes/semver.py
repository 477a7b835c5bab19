"""Semantic versioning ordering backed by ``semantic_version``."""

import re
from typing import Optional

import semantic_version

from .base import VersioningScheme

# Partial versions such as "1.0" are accepted and padded by coerce()
_PARTIAL_RE = re.compile(r"^\d+(\.\d+){0,2}([-+][0-9A-Za-z.-]+)?$")


def _parse(label: str) -> Optional[semantic_version.Version]:
    try:
        return semantic_version.Version(label)
    except ValueError:
        pass
    if not _PARTIAL_RE.match(label):
        return None
    try:
        return semantic_version.Version.coerce(label)
    except ValueError:
        return None


class SemverVersioning(VersioningScheme):
    """SemVer 2.0 versions, tolerating missing minor/patch parts."""

    id = "semver"

    def is_valid(self, label: str) -> bool:
        return _parse(label) is not None

    def compare(self, left: str, right: str) -> int:
        left_ver, right_ver = _parse(left), _parse(right)
        if left_ver is None or right_ver is None:
            raise ValueError(f"Invalid semantic version: {left if left_ver is None else right}")
        if left_ver == right_ver:
            return (left > right) - (left < right)
        return -1 if left_ver < right_ver else 1
