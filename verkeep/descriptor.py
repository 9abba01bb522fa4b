"""
Locates and rewrites the version literal embedded in a project descriptor.

The descriptor (`project.clj`, `pyproject.toml`, ...) is never parsed as a
whole. A strategy finds a marker, then the first double-quoted literal after
it, and only that literal is read or replaced.
"""

import re
import logging
from pathlib import Path
from typing import Dict, Optional, Pattern, Union

from .semver import SemVer, format_version

# A double-quoted literal on a single line.
_LITERAL_PATTERN = re.compile(r'"([^"\n]*)"')


class MarkerDescriptor:
    """
    Finds the version literal as the first quoted string after a marker.

    Args:
        name: A short name for the descriptor format.
        marker: A regular expression matching the marker text.
    """

    def __init__(self, name: str, marker: Union[str, Pattern[str]]):
        self.name = name
        self.marker = re.compile(marker) if isinstance(marker, str) else marker

    @classmethod
    def from_substring(cls, name: str, marker: str) -> 'MarkerDescriptor':
        """Builds a strategy whose marker is a fixed piece of text."""
        return cls(name, re.escape(marker))

    def _find_literal(self, text: str) -> Optional[re.Match]:
        marker = self.marker.search(text)
        if not marker:
            return None
        return _LITERAL_PATTERN.search(text, marker.end())

    def extract(self, text: str) -> Optional[str]:
        """Returns the contents of the version literal, or None if not found."""
        literal = self._find_literal(text)
        return literal.group(1) if literal else None

    def update(self, text: str, version: SemVer) -> str:
        """
        Replaces the contents of the version literal with the canonical string.

        Returns:
            The rewritten text, or the original text unchanged if the marker
            or a quoted literal after it cannot be found.
        """
        literal = self._find_literal(text)
        if not literal:
            return text
        return text[:literal.start(1)] + format_version(version) + text[literal.end(1):]

    def __repr__(self) -> str:
        return f"MarkerDescriptor({self.name!r}, {self.marker.pattern!r})"


DEFPROJECT = MarkerDescriptor.from_substring('defproject', '(defproject ')
PYPROJECT = MarkerDescriptor('pyproject', re.compile(r'^version\s*=', re.MULTILINE))

DESCRIPTOR_FORMATS: Dict[str, MarkerDescriptor] = {
    DEFPROJECT.name: DEFPROJECT,
    PYPROJECT.name: PYPROJECT,
}


class DescriptorFile:
    """Applies a descriptor strategy to a file on disk."""

    def __init__(self, path: Path, strategy: MarkerDescriptor):
        self.path = Path(path)
        self.strategy = strategy
        self.logger = logging.getLogger(__name__)

    def exists(self) -> bool:
        return self.path.is_file()

    def read_version_literal(self) -> Optional[str]:
        """Returns the raw version literal, or None if the file or literal is missing."""
        if not self.exists():
            return None
        return self.strategy.extract(self.path.read_text(encoding='utf-8'))

    def propagate(self, version: SemVer) -> bool:
        """
        Writes the version into the descriptor's literal.

        Returns:
            True if the descriptor now carries the version, False if the file
            or its version literal could not be found.
        """
        if not self.exists():
            self.logger.warning(f"Descriptor {self.path.name} not found; skipping version update.")
            return False

        with open(self.path, 'r', encoding='utf-8', newline='') as f:
            text = f.read()
        if self.strategy.extract(text) is None:
            self.logger.warning(
                f"No version literal found in {self.path.name} for format '{self.strategy.name}'; skipping update."
            )
            return False

        updated = self.strategy.update(text, version)
        if updated != text:
            with open(self.path, 'w', encoding='utf-8', newline='') as f:
                f.write(updated)
            self.logger.info(f"Updated {self.path.name} to version {version}")
        else:
            self.logger.debug(f"{self.path.name} already at version {version}")
        return True
