"""
Reads and writes the literal map stored in `resources/VERSION`.

The record is a single map of keyword keys to literal values:

    {
     :major 1
     :minor 3
     :patch 2
     :pre-release "rc.2"
     :build nil
    }

The reader is a strict tokenizer. It recognizes the five component keys and
literal values only (integers, strings, nil and bare atoms) and never
evaluates anything, so a hostile record can at worst fail to parse.
"""

import re
from dataclasses import dataclass
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple

from .constants import ABSENT_TOKEN, COMPONENTS, NUMERIC_COMPONENTS
from .exceptions import RecordSyntaxError
from .semver import SemVer

_TOKEN_PATTERN = re.compile(r'''
    (?P<space>[\s,]+|;[^\n]*)
  | (?P<open>\{)
  | (?P<close>\})
  | (?P<keyword>:[A-Za-z_][A-Za-z0-9_-]*)
  | (?P<string>"(?:[^"\\]|\\.)*")
  | (?P<atom>[^\s,{}";]+)
''', re.VERBOSE | re.DOTALL)

_INTEGER_PATTERN = re.compile(r'[+-]?[0-9]+')

_UNESCAPES = {'"': '"', '\\': '\\', 'n': '\n', 't': '\t', 'r': '\r'}
_ESCAPES = {value: f'\\{key}' for key, value in _UNESCAPES.items()}

# Record keyword -> SemVer field name.
_KEYWORDS = {f':{name}': name for name in COMPONENTS}
_KEYWORDS[':pre-release'] = 'pre_release'

_WRITE_KEYWORDS = (
    (':major', 'major'),
    (':minor', 'minor'),
    (':patch', 'patch'),
    (':pre-release', 'pre_release'),
    (':build', 'build'),
)


@dataclass(frozen=True)
class Atom:
    """A bare token that is neither an integer nor nil, e.g. `1.5` or `true`."""
    text: str

    def __str__(self) -> str:
        return self.text


def _tokenize(text: str) -> Iterator[Tuple[str, str, int]]:
    position = 0
    while position < len(text):
        match = _TOKEN_PATTERN.match(text, position)
        if not match:
            raise RecordSyntaxError(f"Unexpected character {text[position]!r} at offset {position}.")
        kind = match.lastgroup
        if kind != 'space':
            yield kind, match.group(), position
        position = match.end()


def _unescape(literal: str) -> str:
    body = literal[1:-1]
    return re.sub(r'\\(.)', lambda m: _UNESCAPES.get(m.group(1), m.group(1)), body, flags=re.DOTALL)


def _literal_value(kind: str, token: str) -> Any:
    if kind == 'string':
        return _unescape(token)
    if token == ABSENT_TOKEN:
        return None
    if _INTEGER_PATTERN.fullmatch(token):
        try:
            return int(token)
        except ValueError:
            # Past the interpreter's digit limit; never a version number.
            return Atom(token)
    return Atom(token)


def read_record(text: str) -> Dict[str, Any]:
    """
    Tokenizes a record into a mapping of SemVer field names to raw values.

    Raw values are int, str, None (for nil) or Atom. Keys that are not
    present in the record are simply missing from the result.

    Raises:
        RecordSyntaxError: If the text is not exactly one map of known
            keyword keys to literal values.
    """
    tokens = _tokenize(text)
    first = next(tokens, None)
    if first is None or first[0] != 'open':
        raise RecordSyntaxError("Version record must start with '{'.")

    record: Dict[str, Any] = {}
    for kind, token, position in tokens:
        if kind == 'close':
            break
        if kind != 'keyword':
            raise RecordSyntaxError(f"Expected a keyword at offset {position}, found {token!r}.")
        field = _KEYWORDS.get(token)
        if field is None:
            raise RecordSyntaxError(f"Unknown version record key {token}.")
        if field in record:
            raise RecordSyntaxError(f"Duplicate version record key {token}.")
        value = next(tokens, None)
        if value is None or value[0] not in ('string', 'atom'):
            raise RecordSyntaxError(f"Missing value for {token}.")
        record[field] = _literal_value(value[0], value[1])
    else:
        raise RecordSyntaxError("Version record is missing its closing '}'.")

    trailing = next(tokens, None)
    if trailing is not None:
        raise RecordSyntaxError(f"Unexpected content after the record at offset {trailing[2]}.")
    return record


def _numeric(raw: Any) -> Optional[int]:
    # bool is an int subclass but never a version number.
    if isinstance(raw, int) and not isinstance(raw, bool) and raw >= 0:
        return raw
    return None


def _identifier(raw: Any) -> Optional[str]:
    if raw is None:
        return None
    text = str(raw)
    if text == ABSENT_TOKEN or not text:
        return None
    return text


def parse_record(record: Mapping[str, Any]) -> SemVer:
    """
    Builds a SemVer from a raw record mapping.

    A numeric component is set only when its raw value is a non-negative
    integer; anything else silently reads as absent. An identifier component
    is absent when it is nil or the string "nil".
    """
    values = {}
    for name in COMPONENTS:
        raw = record.get(name)
        values[name] = _numeric(raw) if name in NUMERIC_COMPONENTS else _identifier(raw)
    return SemVer(**values)


def load_record(text: str) -> SemVer:
    """Parses the full text of a version record."""
    return parse_record(read_record(text))


def _quote(value: str) -> str:
    return '"' + ''.join(_ESCAPES.get(ch, ch) for ch in value) + '"'


def dump_record(version: SemVer) -> str:
    """Serializes a version as a record, one component per line."""
    lines = ['{']
    for keyword, field in _WRITE_KEYWORDS:
        value = getattr(version, field)
        if value is None:
            literal = ABSENT_TOKEN
        elif isinstance(value, str):
            literal = _quote(value)
        else:
            literal = str(value)
        lines.append(f' {keyword} {literal}')
    lines.append('}')
    return '\n'.join(lines) + '\n'
