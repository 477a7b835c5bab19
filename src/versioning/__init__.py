"""Versioning scheme lookup."""

from typing import Dict, Optional, Type

from constants import Constants, VersioningSchemes

from .schemes import MavenVersioning, Pep440Versioning, SemverVersioning, VersioningScheme


class UnknownVersioningError(ValueError):
    """Raised when a versioning scheme identifier is not supported."""


_SCHEMES: Dict[str, Type[VersioningScheme]] = {
    VersioningSchemes.MAVEN.value: MavenVersioning,
    VersioningSchemes.PEP440.value: Pep440Versioning,
    VersioningSchemes.SEMVER.value: SemverVersioning,
}


def get_scheme(scheme_id: Optional[str] = None) -> VersioningScheme:
    """Return a scheme instance for ``scheme_id`` (case-insensitive).

    None selects Constants.DEFAULT_VERSIONING as configured at call time.
    """
    key = (scheme_id or Constants.DEFAULT_VERSIONING).strip().lower()
    try:
        return _SCHEMES[key]()
    except KeyError:
        raise UnknownVersioningError(
            f"Unknown versioning scheme '{key}'. Expected one of: {', '.join(sorted(_SCHEMES))}"
        ) from None
