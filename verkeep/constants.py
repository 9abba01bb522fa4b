"""
Defines verkeep-wide constants: file locations, component names and the
grammar shared by the parsers.
"""

import re
from pathlib import PurePosixPath

# --- Project File Layout ---
# Paths are relative to the project root.
VERSION_FILE_PATH = str(PurePosixPath('resources') / 'VERSION')
DESCRIPTOR_FILE_PATH = 'project.clj'
CONFIG_FILE_NAME = '.verkeep.json'

# --- Version Components ---
NUMERIC_COMPONENTS = ('major', 'minor', 'patch')
IDENTIFIER_COMPONENTS = ('pre_release', 'build')
COMPONENTS = NUMERIC_COMPONENTS + IDENTIFIER_COMPONENTS

# Token reserved in every textual encoding for an absent component.
ABSENT_TOKEN = 'nil'

# --- Grammar ---
IDENTIFIER = r'[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*'
SEMVER_PATTERN = re.compile(
    r'([0-9]+)\.([0-9]+)\.([0-9]+)'
    rf'(?:-({IDENTIFIER}))?'
    rf'(?:\+({IDENTIFIER}))?'
)
IDENTIFIER_PATTERN = re.compile(IDENTIFIER)

LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')

# Python's integer literal grammar in ASCII, with an optional sign.
INTEGER_LITERAL_PATTERN = re.compile(
    r'[+-]?(?:[1-9](?:_?[0-9])*|0(?:_?0)*'
    r'|0[xX](?:_?[0-9a-fA-F])+|0[oO](?:_?[0-7])+|0[bB](?:_?[01])+)'
)
