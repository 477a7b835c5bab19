"""Base class shared by the versioning schemes."""

from abc import ABC, abstractmethod
from functools import cmp_to_key
from typing import Iterable, List


class VersioningScheme(ABC):
    """Validates and orders release labels for one versioning convention."""

    id: str = ""

    @abstractmethod
    def is_valid(self, label: str) -> bool:
        """Return True when ``label`` is a version under this scheme."""

    @abstractmethod
    def compare(self, left: str, right: str) -> int:
        """Return a negative, zero or positive number like ``cmp``."""

    def sort(self, labels: Iterable[str]) -> List[str]:
        """Return valid labels in ascending order; invalid ones are dropped."""
        valid = [label for label in labels if self.is_valid(label)]
        return sorted(valid, key=cmp_to_key(self.compare))
