"""Versioning schemes for ordering release labels."""

from .base import VersioningScheme
from .maven import MavenVersioning
from .pep440 import Pep440Versioning
from .semver import SemverVersioning

__all__ = [
    "VersioningScheme",
    "MavenVersioning",
    "Pep440Versioning",
    "SemverVersioning",
]
