"""
Manages loading, saving, and validating per-project settings using Pydantic.

This module defines the settings schema as a Pydantic model (`Settings`) and
provides a manager class (`ConfigManager`) that persists it as
`.verkeep.json` in the project root.
"""

import json
import logging
from pathlib import Path, PurePosixPath

from pydantic import BaseModel, ValidationError, field_validator

from .constants import CONFIG_FILE_NAME, DESCRIPTOR_FILE_PATH, LOG_LEVELS, VERSION_FILE_PATH
from .descriptor import DESCRIPTOR_FORMATS, MarkerDescriptor


class Settings(BaseModel):
    """
    Defines the per-project settings schema.

    All paths are relative to the project root.
    """
    version_file: str = VERSION_FILE_PATH
    descriptor_file: str = DESCRIPTOR_FILE_PATH
    descriptor_format: str = 'defproject'
    log_level: str = 'WARNING'

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Ensures log_level is a valid logging level string."""
        upper_value = value.upper()
        if upper_value not in LOG_LEVELS:
            raise ValueError(f"'{value}' is not a valid log level. Must be one of {list(LOG_LEVELS)}.")
        return upper_value

    @field_validator('descriptor_format')
    @classmethod
    def validate_descriptor_format(cls, value: str) -> str:
        if value not in DESCRIPTOR_FORMATS:
            raise ValueError(f"Unknown descriptor format '{value}'. Must be one of {sorted(DESCRIPTOR_FORMATS)}.")
        return value

    @field_validator('version_file', 'descriptor_file')
    @classmethod
    def validate_relative_path(cls, value: str) -> str:
        """
        Ensures a path stays inside the project root.

        Raises:
            ValueError: If the path is empty, absolute, or climbs out with '..'.
        """
        path = PurePosixPath(value.replace('\\', '/'))
        if not value or path.is_absolute() or Path(value).is_absolute() or '..' in path.parts:
            raise ValueError(f"'{value}' must be a path relative to the project root.")
        return value

    @property
    def descriptor(self) -> MarkerDescriptor:
        return DESCRIPTOR_FORMATS[self.descriptor_format]


class ConfigManager:
    """Handles loading and saving the settings file of a project."""
    def __init__(self, root: Path):
        """
        Initializes the ConfigManager.

        Args:
            root: The project root that holds the settings file.
        """
        self.config_path = Path(root) / CONFIG_FILE_NAME
        self.logger = logging.getLogger(__name__)

    def load(self) -> Settings:
        """
        Loads settings from file and validates them.

        If the file doesn't exist, is invalid, or cannot be read, the default
        settings are returned.

        Returns:
            A validated Settings object.
        """
        if not self.config_path.exists():
            self.logger.debug(f"No {CONFIG_FILE_NAME} found. Using default settings.")
            return Settings()

        try:
            config_data = json.loads(self.config_path.read_text(encoding='utf-8'))
            return Settings.model_validate(config_data)
        except (ValidationError, json.JSONDecodeError, OSError) as e:
            self.logger.error(f"Error loading {self.config_path}: {e}. Using default settings.")
            return Settings()

    def save(self, settings: Settings):
        """
        Saves the provided settings object to the settings file.

        Args:
            settings: The Settings object to save.
        """
        self.config_path.write_text(settings.model_dump_json(indent=4) + '\n', encoding='utf-8')
        self.logger.info(f"Saved settings to {self.config_path}")
