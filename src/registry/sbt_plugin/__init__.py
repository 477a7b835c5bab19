"""sbt plugin release resolution over Maven-style HTTP repositories."""

from .client import get_releases, resolve_registry
from .models import (
    ArtifactKey,
    InvalidPackageNameError,
    Release,
    ReleaseResult,
    parse_package_name,
)

__all__ = [
    "get_releases",
    "resolve_registry",
    "ArtifactKey",
    "InvalidPackageNameError",
    "Release",
    "ReleaseResult",
    "parse_package_name",
]
