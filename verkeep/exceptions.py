"""
Defines custom exceptions used throughout verkeep.

Only conditions that abort a command are exceptions. A version string that
does not parse, or a malformed numeric argument, is reported as a value
(`None` or a tagged reading) instead.
"""

class VerkeepError(Exception):
    """Base class for errors reported to the user by the command surface."""
    pass

class MissingVersionFileError(VerkeepError):
    """The authoritative version record does not exist."""

    def __init__(self, version_file: str):
        self.version_file = version_file
        super().__init__(
            f"Could not read {version_file}. Please create it with 'verkeep write'."
        )

class UsageError(VerkeepError):
    """Custom exception for unrecognized components or malformed arguments."""
    pass

class RecordSyntaxError(VerkeepError):
    """The version record could not be read as a literal map."""
    pass

class DescriptorError(VerkeepError):
    """Custom exception for a descriptor that holds no usable version."""
    pass
