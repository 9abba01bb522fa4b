"""Reads and writes the authoritative version record of a project."""
import os
import logging
import tempfile
from pathlib import Path
from typing import Optional

from .exceptions import RecordSyntaxError
from .record import dump_record, load_record
from .semver import SemVer


class VersionStore:
    """Handles the version record file under a project root."""

    def __init__(self, root: Path, relative_path: str):
        """
        Initializes the VersionStore.

        Args:
            root: The project root directory.
            relative_path: The record's path relative to the root.
        """
        self.root = Path(root)
        self.relative_path = relative_path
        self.path = self.root / relative_path
        self.logger = logging.getLogger(__name__)

    def exists(self) -> bool:
        return self.path.is_file()

    def read(self) -> Optional[SemVer]:
        """
        Returns the stored version, or None if the record does not exist.

        Raises:
            RecordSyntaxError: If the record exists but cannot be parsed.
        """
        if not self.exists():
            self.logger.debug(f"No version record at {self.path}")
            return None
        try:
            text = self.path.read_text(encoding='utf-8')
        except UnicodeDecodeError as e:
            raise RecordSyntaxError(f"{self.relative_path} is not valid UTF-8: {e}") from e
        version = load_record(text)
        self.logger.debug(f"Read version {version} from {self.path}")
        return version

    def write(self, version: SemVer):
        """
        Writes the version record, replacing any previous one.

        The record is written to a temporary sibling and renamed into place so
        a failed write never leaves a truncated record behind.
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, temp_name = tempfile.mkstemp(prefix='.VERSION_', suffix='.tmp', dir=str(self.path.parent))
        temp_path = Path(temp_name)
        try:
            with os.fdopen(fd, 'w', encoding='utf-8', newline='\n') as f:
                f.write(dump_record(version))
            os.replace(temp_path, self.path)
        finally:
            temp_path.unlink(missing_ok=True)
        self.logger.info(f"Wrote version {version} to {self.relative_path}")
