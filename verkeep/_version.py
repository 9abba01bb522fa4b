"""
Defines verkeep's own version string.

This is the single source of truth for the tool's version number.
It is used by `verkeep --version` and for packaging.
"""

__version__ = "0.4.0"
