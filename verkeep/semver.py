"""
Defines the semantic version value and its canonical string encoding.
"""

from dataclasses import dataclass
from typing import Optional

from .constants import SEMVER_PATTERN


@dataclass(frozen=True)
class SemVer:
    """
    A semantic version whose components may each be absent.

    Attributes:
        major: The major component, or None when unset.
        minor: The minor component, or None when unset.
        patch: The patch component, or None when unset.
        pre_release: Dot-separated pre-release identifiers, or None.
        build: Dot-separated build metadata identifiers, or None.
    """
    major: Optional[int] = None
    minor: Optional[int] = None
    patch: Optional[int] = None
    pre_release: Optional[str] = None
    build: Optional[str] = None

    def __str__(self) -> str:
        return format_version(self)


def format_version(version: SemVer) -> str:
    """
    Returns the canonical string form of a version.

    Only the numeric components that are set take part in the dotted join, so
    an absent component collapses instead of leaving a gap: major=1 and
    patch=2 with minor unset renders as "1.2".

    Args:
        version: The version to render.

    Returns:
        A string of the form MAJOR.MINOR.PATCH[-PRE][+BUILD].
    """
    numbers = [version.major, version.minor, version.patch]
    text = '.'.join(str(n) for n in numbers if n is not None)
    if version.pre_release is not None:
        text += f'-{version.pre_release}'
    if version.build is not None:
        text += f'+{version.build}'
    return text


def parse_string(text: Optional[str]) -> Optional[SemVer]:
    """
    Parses a MAJOR.MINOR.PATCH[-PRE][+BUILD] string.

    Args:
        text: The candidate version string.

    Returns:
        A SemVer with all three numeric components set, or None if the text
        does not match the grammar.
    """
    if text is None:
        return None
    match = SEMVER_PATTERN.fullmatch(text)
    if not match:
        return None
    major, minor, patch, pre_release, build = match.groups()
    return SemVer(int(major), int(minor), int(patch), pre_release, build)
