"""Abstract key/value store capability used by the origin bridge.

The bridge only needs named string and string-list values grouped under
named sections. Getters return None for a missing section or key; any other
failure is raised as StoreAccessError.
"""

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Set


class OriginStore(ABC):
    """Grouped key/value store holding an origin record."""

    @abstractmethod
    def get_value(self, section: str, key: str) -> Optional[str]:
        """Return the raw (unescaped on disk) value, or None if absent."""

    @abstractmethod
    def get_string(self, section: str, key: str) -> Optional[str]:
        """Return the unescaped string value, or None if absent."""

    @abstractmethod
    def get_string_list(self, section: str, key: str) -> Optional[List[str]]:
        """Return the delimiter-split value, or None if absent."""

    @abstractmethod
    def get_bool(self, section: str, key: str) -> bool:
        """Return the boolean value; False if absent."""

    @abstractmethod
    def set_value(self, section: str, key: str, value: str) -> None:
        pass

    @abstractmethod
    def set_string(self, section: str, key: str, value: str) -> None:
        pass

    @abstractmethod
    def set_string_list(self, section: str, key: str, values: Iterable[str]) -> None:
        pass

    @abstractmethod
    def set_bool(self, section: str, key: str, value: bool) -> None:
        pass

    @abstractmethod
    def sections(self) -> List[str]:
        """Section names in insertion order."""

    @abstractmethod
    def keys(self, section: str) -> List[str]:
        """Key names of a section in insertion order; empty if absent."""

    @abstractmethod
    def remove_section(self, section: str) -> bool:
        """Remove a section; return whether it existed."""

    @abstractmethod
    def copy(self) -> "OriginStore":
        """Return an independent copy."""

    def has_section(self, section: str) -> bool:
        return section in self.sections()

    def has_key(self, section: str, key: str) -> bool:
        return key in self.keys(section)

    def key_paths(self) -> Set[str]:
        """All keys as "section/key" paths."""
        return {f"{section}/{key}" for section in self.sections() for key in self.keys(section)}
