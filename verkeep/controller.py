"""
Defines the VersionController class, which implements verkeep's version
operations on top of the version store and the descriptor.

Every mutating operation reads the current state from the store, derives one
new SemVer, writes it to the store and then propagates the same value into
the descriptor. The store is always written first: it is the authoritative
copy and the descriptor only ever follows it.
"""
import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from .config import Settings
from .constants import COMPONENTS, NUMERIC_COMPONENTS
from .descriptor import DescriptorFile
from .exceptions import DescriptorError, MissingVersionFileError, UsageError
from .literals import ReadingKind, read_identifier, read_integer
from .semver import SemVer, format_version, parse_string
from .store import VersionStore


def normalize_component(name: str) -> str:
    """
    Maps a user-supplied component name to a SemVer field name.

    Accepts an optional leading ':' and either '-' or '_' as separator, so
    ':pre-release', 'pre-release' and 'pre_release' are the same component.

    Raises:
        UsageError: If the name is not one of the five components.
    """
    field = name.strip().lstrip(':').replace('-', '_').lower()
    if field not in COMPONENTS:
        raise UsageError(f"Unknown version component '{name}'. Must be one of: major, minor, patch, pre-release, build.")
    return field


def parse_component_args(args: Sequence[str]) -> Dict[str, str]:
    """
    Turns command arguments into a component mapping.

    Two spellings are accepted and may be mixed: 'name=value' tokens, and
    the pair form ':name value'.

    Raises:
        UsageError: On an unknown component name or a key without a value.
    """
    components: Dict[str, str] = {}
    tokens = list(args)
    index = 0
    while index < len(tokens):
        token = tokens[index]
        if '=' in token:
            name, value = token.split('=', 1)
            index += 1
        elif token.startswith(':'):
            if index + 1 >= len(tokens):
                raise UsageError(f"Missing value for component '{token}'.")
            name, value = token, tokens[index + 1]
            index += 2
        else:
            raise UsageError(f"Expected 'component=value', got '{token}'.")
        components[normalize_component(name)] = value
    return components


@dataclass(frozen=True)
class CheckResult:
    """
    Outcome of comparing the descriptor's version against the store.

    Attributes:
        matches: True if both copies are field-for-field equal.
        stored: The version held by the store.
        declared: The parsed descriptor version, or None if it did not parse.
        declared_text: The raw descriptor literal, or None if none was found.
    """
    matches: bool
    stored: SemVer
    declared: Optional[SemVer]
    declared_text: Optional[str]

    def report_lines(self, descriptor_name: str, store_name: str) -> List[str]:
        """Returns the lines shown to the user when the copies differ."""
        if self.declared is not None:
            declared = format_version(self.declared)
        else:
            declared = self.declared_text if self.declared_text is not None else ''
        width = max(len(descriptor_name), len(store_name))
        return [
            f"Versions differ between {descriptor_name} and {store_name}.",
            f"{descriptor_name:>{width}}: {declared}",
            f"{store_name:>{width}}: {format_version(self.stored)}",
        ]


class VersionController:
    """The central controller for a project's version operations."""

    def __init__(self, root: Path, settings: Optional[Settings] = None):
        """
        Initializes the VersionController.

        Args:
            root: The project root directory.
            settings: The project's settings; defaults apply when omitted.
        """
        self.root = Path(root)
        self.settings = settings or Settings()
        self.store = VersionStore(self.root, self.settings.version_file)
        self.descriptor = DescriptorFile(self.root / self.settings.descriptor_file, self.settings.descriptor)
        self.logger = logging.getLogger(__name__)

    def _require_stored(self) -> SemVer:
        version = self.store.read()
        if version is None:
            raise MissingVersionFileError(self.settings.version_file)
        return version

    def _update_versions(self, version: SemVer) -> SemVer:
        """Writes the store, then carries the same version into the descriptor."""
        self.store.write(version)
        self.descriptor.propagate(version)
        return version

    def _resolve(self, components: Dict[str, object], base: Optional[SemVer]) -> SemVer:
        """
        Reads component arguments into a new SemVer.

        With no base every unusable or missing argument becomes absent (full
        replace). With a base, only valid values and explicit 'nil' change a
        component; everything else keeps the base value.
        """
        given = {normalize_component(name): value for name, value in components.items()}
        previous = base or SemVer()
        values = {}
        for name in COMPONENTS:
            raw = given.get(name)
            text = None if raw is None else str(raw)
            if name in NUMERIC_COMPONENTS:
                reading = read_integer(text)
                if reading.kind in (ReadingKind.NOT_AN_INTEGER, ReadingKind.NEGATIVE):
                    self.logger.warning(f"Ignoring {name}={text!r}: not a non-negative integer.")
            else:
                reading = read_identifier(text)
                if reading.kind is ReadingKind.NOT_AN_IDENTIFIER:
                    self.logger.warning(f"Ignoring {name}={text!r}: not a dot-separated list of [0-9A-Za-z-] identifiers.")

            if reading.is_valid:
                values[name] = reading.value
            elif reading.kind is ReadingKind.ABSENT_MARKER or base is None:
                values[name] = None
            else:
                values[name] = getattr(previous, name)
        return SemVer(**values)

    def current(self) -> SemVer:
        """
        Returns the stored version.

        Raises:
            MissingVersionFileError: If the store does not exist.
        """
        return self._require_stored()

    def write(self, **components) -> SemVer:
        """
        Replaces the whole version with the given components.

        Components that are not given, or whose value is unusable, are absent
        in the result.
        """
        version = self._resolve(components, base=None)
        self.logger.info(f"Writing version {version}")
        return self._update_versions(version)

    def set(self, **components) -> SemVer:
        """
        Overrides only the given components of the stored version.

        A missing store counts as a version with every component absent.
        An explicit 'nil' clears any component, numeric ones included.
        """
        stored = self.store.read() or SemVer()
        version = self._resolve(components, base=stored)
        self.logger.info(f"Setting version {stored} -> {version}")
        return self._update_versions(version)

    def bump(self, component: str) -> SemVer:
        """
        Bumps the named component by 1, resetting the lower components.

        Pre-release and build are always cleared. An absent component bumps
        from 0.

        Raises:
            MissingVersionFileError: If the store does not exist.
            UsageError: If the component is not major, minor or patch.
        """
        stored = self._require_stored()
        name = component.strip().lstrip(':').lower()
        if name not in NUMERIC_COMPONENTS:
            raise UsageError(f"Not a valid component to bump: '{component}'. Use major, minor or patch.")

        version = replace(stored, pre_release=None, build=None)
        if name == 'major':
            version = replace(version, major=(stored.major or 0) + 1, minor=0, patch=0)
        elif name == 'minor':
            version = replace(version, minor=(stored.minor or 0) + 1, patch=0)
        else:
            version = replace(version, patch=(stored.patch or 0) + 1)

        self.logger.info(f"Bumping {name}: {stored} -> {version}")
        return self._update_versions(version)

    def check(self) -> CheckResult:
        """
        Compares the descriptor's version with the stored one. Nothing is written.

        Raises:
            MissingVersionFileError: If the store does not exist.
        """
        declared_text = self.descriptor.read_version_literal()
        declared = parse_string(declared_text)
        stored = self._require_stored()
        result = CheckResult(declared == stored, stored, declared, declared_text)
        if result.matches:
            self.logger.debug(f"Versions match: {stored}")
        else:
            self.logger.info(f"Version mismatch: descriptor={declared_text!r}, store={stored}")
        return result

    def init(self) -> SemVer:
        """
        Seeds the store from the version declared in the descriptor.

        The descriptor itself is left untouched.

        Raises:
            DescriptorError: If the descriptor has no parseable version.
        """
        declared_text = self.descriptor.read_version_literal()
        version = parse_string(declared_text)
        if version is None:
            if declared_text is None:
                raise DescriptorError(f"No version found in {self.settings.descriptor_file}.")
            raise DescriptorError(f"'{declared_text}' in {self.settings.descriptor_file} is not a semantic version.")
        if self.store.exists():
            self.logger.info(f"Overwriting existing {self.settings.version_file}")
        self.store.write(version)
        return version
