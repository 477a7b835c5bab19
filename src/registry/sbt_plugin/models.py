"""Data types for sbt plugin release resolution."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


class InvalidPackageNameError(ValueError):
    """Raised for identifiers that are not ``organization:artifact``."""


@dataclass(frozen=True)
class ArtifactKey:
    """Parsed ``org:name[_scalaVersion]`` identifier."""
    organization: str
    plugin_name: str
    scala_suffix: Optional[str] = None

    @property
    def group_path(self) -> str:
        return self.organization.replace(".", "/")


def parse_package_name(package_name: str) -> ArtifactKey:
    """Split a package identifier into an ArtifactKey.

    The Scala suffix is the second ``_``-delimited segment of the artifact
    part, so ``sbt-bintray_2.12`` yields plugin ``sbt-bintray`` and suffix
    ``2.12``. A name without ``_`` keeps any trailing digits as part of the
    plugin name.

    Raises:
        InvalidPackageNameError: missing ``:`` or an empty component.
    """
    if not isinstance(package_name, str) or ":" not in package_name:
        raise InvalidPackageNameError(
            f"Invalid sbt coordinate '{package_name}'. Expected 'organization:artifact'."
        )
    organization, _, artifact = package_name.strip().partition(":")
    organization, artifact = organization.strip(), artifact.strip()
    if not organization or not artifact or ":" in artifact:
        raise InvalidPackageNameError(
            f"Invalid sbt coordinate '{package_name}'. Expected 'organization:artifact'."
        )
    parts = artifact.split("_")
    plugin_name = parts[0]
    if not plugin_name:
        raise InvalidPackageNameError(f"Invalid sbt coordinate '{package_name}': empty artifact name.")
    scala_suffix = parts[1] if len(parts) > 1 and parts[1] else None
    return ArtifactKey(organization=organization, plugin_name=plugin_name, scala_suffix=scala_suffix)


@dataclass
class DirectoryListing:
    """Links found on one directory page, relative to ``base_url``."""
    base_url: str
    labels: List[str] = field(default_factory=list)


@dataclass
class Descriptor:
    """Metadata mined from a POM file."""
    homepage: Optional[str] = None
    source_url: Optional[str] = None


@dataclass(frozen=True)
class Release:
    version: str


@dataclass
class ReleaseResult:
    """Outcome of resolving one plugin against the first registry with releases."""
    dependency_url: str
    registry_url: str
    releases: List[Release]
    homepage: Optional[str] = None
    source_url: Optional[str] = None

    @property
    def versions(self) -> List[str]:
        return [release.version for release in self.releases]

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the camelCase shape used in JSON output."""
        data: Dict[str, Any] = {
            "dependencyUrl": self.dependency_url,
            "registryUrl": self.registry_url,
            "releases": [{"version": release.version} for release in self.releases],
        }
        if self.homepage:
            data["homepage"] = self.homepage
        if self.source_url:
            data["sourceUrl"] = self.source_url
        return data
