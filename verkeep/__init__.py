"""
verkeep keeps a project's semantic version in sync between the
authoritative `resources/VERSION` record and the project descriptor.
"""

from ._version import __version__
from .semver import SemVer, format_version, parse_string
from .controller import VersionController

__all__ = ["__version__", "SemVer", "format_version", "parse_string", "VersionController"]
