"""
Classifies textual component arguments into tagged readings.

Command arguments never fail on a malformed value. Instead each argument is
read into a reading that says what was found, and the caller decides what an
unusable reading means for its operation.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .constants import ABSENT_TOKEN, IDENTIFIER_PATTERN, INTEGER_LITERAL_PATTERN


class ReadingKind(Enum):
    """Outcome of reading one component argument."""
    VALID = 'valid'
    NOT_AN_INTEGER = 'not-an-integer'
    NOT_AN_IDENTIFIER = 'not-an-identifier'
    NEGATIVE = 'negative'
    ABSENT_MARKER = 'absent-marker'
    MISSING = 'missing'


@dataclass(frozen=True)
class IntegerReading:
    kind: ReadingKind
    raw: Optional[str] = None
    value: Optional[int] = None

    @property
    def is_valid(self) -> bool:
        return self.kind is ReadingKind.VALID


@dataclass(frozen=True)
class StringReading:
    kind: ReadingKind
    raw: Optional[str] = None
    value: Optional[str] = None

    @property
    def is_valid(self) -> bool:
        return self.kind is ReadingKind.VALID


def read_integer(text: Optional[str]) -> IntegerReading:
    """
    Reads a numeric component argument.

    A candidate is accepted only if it is an integer literal in Python's
    grammar (decimal, or 0x/0o/0b prefixed, with optional underscores),
    written in ASCII with an optional sign. Floats, words, surrounding
    whitespace and zero-padded decimals such as "007" are not integers.

    Args:
        text: The raw argument, or None if the component was not given.

    Returns:
        An IntegerReading; only a VALID reading carries a value.
    """
    if text is None:
        return IntegerReading(ReadingKind.MISSING)
    if text == ABSENT_TOKEN:
        return IntegerReading(ReadingKind.ABSENT_MARKER, text)
    if not INTEGER_LITERAL_PATTERN.fullmatch(text):
        return IntegerReading(ReadingKind.NOT_AN_INTEGER, text)
    try:
        number = int(text, 0)
    except ValueError:
        # Too many digits to convert.
        return IntegerReading(ReadingKind.NOT_AN_INTEGER, text)
    if number < 0:
        return IntegerReading(ReadingKind.NEGATIVE, text)
    return IntegerReading(ReadingKind.VALID, text, number)


def read_identifier(text: Optional[str]) -> StringReading:
    """
    Reads a pre-release or build argument; the absent token clears it.

    A value must be dot-separated [0-9A-Za-z-] identifiers, so it can never
    carry a quote or a "+" into the canonical string or the descriptor.
    """
    # An empty identifier is never a value.
    if not text:
        return StringReading(ReadingKind.MISSING)
    if text == ABSENT_TOKEN:
        return StringReading(ReadingKind.ABSENT_MARKER, text)
    if not IDENTIFIER_PATTERN.fullmatch(text):
        return StringReading(ReadingKind.NOT_AN_IDENTIFIER, text)
    return StringReading(ReadingKind.VALID, text, text)
