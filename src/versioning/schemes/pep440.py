"""PEP 440 ordering backed by ``packaging``."""

from typing import Optional

from packaging import version

from .base import VersioningScheme


def _parse(label: str) -> Optional[version.Version]:
    try:
        return version.Version(label)
    except version.InvalidVersion:
        return None


class Pep440Versioning(VersioningScheme):
    """Python-style versions (1.0, 1.0rc1, 1.0.post2)."""

    id = "pep440"

    def is_valid(self, label: str) -> bool:
        return _parse(label) is not None

    def compare(self, left: str, right: str) -> int:
        left_ver, right_ver = version.Version(left), version.Version(right)
        if left_ver == right_ver:
            # Distinct spellings of one version (1.0 vs 1.0.0) keep a stable order
            return (left > right) - (left < right)
        return -1 if left_ver < right_ver else 1
