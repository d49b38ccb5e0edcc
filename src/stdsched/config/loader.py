"""
Readers that turn a configuration source into a flat key/value mapping.

Three formats are understood, chosen by file extension:
- ``.properties`` (the default): ``key=value`` lines
- ``.json``: nested objects flattened to dotted keys
- ``.yaml`` / ``.yml``: same as JSON
"""
import json
import os
from typing import IO, Any, Dict, Iterator, Mapping, Optional, Tuple, Union

import yaml

from stdsched.infrastructure.logging.logger import get_logger

logger = get_logger(__name__)

PROPERTIES_FORMAT = "properties"
JSON_FORMAT = "json"
YAML_FORMAT = "yaml"

_FORMAT_BY_EXTENSION = {
    ".properties": PROPERTIES_FORMAT,
    ".json": JSON_FORMAT,
    ".yaml": YAML_FORMAT,
    ".yml": YAML_FORMAT,
}

_ESCAPES = {'t': '\t', 'n': '\n', 'r': '\r', 'f': '\f'}


class ConfigurationFormatError(ValueError):
    """Raised when configuration content is syntactically invalid."""
    pass


def detect_format(name: Optional[str]) -> str:
    """Pick a format from a file or resource name, defaulting to properties."""
    if not name:
        return PROPERTIES_FORMAT
    _, extension = os.path.splitext(str(name))
    return _FORMAT_BY_EXTENSION.get(extension.lower(), PROPERTIES_FORMAT)


def _logical_lines(text: str) -> Iterator[str]:
    """Yield logical lines, joining backslash continuations and dropping comments."""
    pending = None
    for raw in text.splitlines():
        line = raw.lstrip()
        if pending is None and (not line or line[0] in '#!'):
            continue
        # An odd number of trailing backslashes continues the line
        trailing = len(line) - len(line.rstrip('\\'))
        if trailing % 2 == 1:
            pending = (pending or '') + line[:-1]
            continue
        yield (pending or '') + line
        pending = None
    if pending is not None:
        yield pending


def _unescape(text: str) -> str:
    out = []
    i = 0
    while i < len(text):
        char = text[i]
        if char != '\\' or i + 1 >= len(text):
            out.append(char)
            i += 1
            continue
        nxt = text[i + 1]
        if nxt == 'u':
            code = text[i + 2:i + 6]
            if len(code) != 4:
                raise ConfigurationFormatError(f"Malformed \\uxxxx encoding: '{text[i:i + 6]}'")
            try:
                out.append(chr(int(code, 16)))
            except ValueError as e:
                raise ConfigurationFormatError(f"Malformed \\uxxxx encoding: '\\u{code}'") from e
            i += 6
            continue
        out.append(_ESCAPES.get(nxt, nxt))
        i += 2
    return ''.join(out)


def _split_entry(line: str) -> Tuple[str, str]:
    """Split a logical line at the first unescaped '=', ':' or whitespace."""
    i = 0
    while i < len(line):
        char = line[i]
        if char == '\\':
            i += 2
            continue
        if char in '=:' or char.isspace():
            break
        i += 1
    key = line[:i]
    rest = line[i:]
    if rest[:1] in ('=', ':'):
        rest = rest[1:]
    else:
        rest = rest.lstrip()
        if rest[:1] in ('=', ':'):
            rest = rest[1:]
    return key, rest.lstrip()


def parse_properties(text: str) -> Dict[str, str]:
    """
    Parse ``.properties`` content.

    Supports '#' and '!' comments, '=', ':' or whitespace separators,
    trailing backslash continuation and the usual escape sequences.
    """
    result: Dict[str, str] = {}
    for line in _logical_lines(text):
        key, value = _split_entry(line)
        result[_unescape(key)] = _unescape(value)
    return result


def _stringify(value: Any) -> str:
    if value is None:
        return ''
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, (list, tuple)):
        return ','.join(_stringify(item) for item in value)
    return str(value)


def flatten(data: Mapping[str, Any], prefix: str = '') -> Dict[str, str]:
    """Flatten nested mappings into dotted keys with string values."""
    flat: Dict[str, str] = {}
    for key, value in data.items():
        full_key = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, Mapping):
            flat.update(flatten(value, full_key))
        else:
            flat[full_key] = _stringify(value)
    return flat


def parse_content(text: str, fmt: str = PROPERTIES_FORMAT) -> Dict[str, str]:
    """Parse text in the given format into a flat mapping."""
    if fmt == PROPERTIES_FORMAT:
        return parse_properties(text)

    try:
        data = json.loads(text) if fmt == JSON_FORMAT else yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigurationFormatError(f"Invalid {fmt} content: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise ConfigurationFormatError(
            f"Top level of {fmt} configuration must be a mapping, got {type(data).__name__}"
        )
    return flatten(data)


class ConfigurationLoader:
    """Loads flat configuration mappings from files and streams."""

    encoding = "utf-8"

    @classmethod
    def load_stream(cls, stream: IO[Any], fmt: Optional[str] = None) -> Dict[str, str]:
        """
        Read and parse an open stream. The stream is not closed here.

        Raises:
            OSError: If reading fails
            UnicodeDecodeError: If binary content is not valid UTF-8
            ConfigurationFormatError: If the content cannot be parsed
        """
        if fmt is None:
            fmt = detect_format(getattr(stream, 'name', None))
        content: Union[str, bytes] = stream.read()
        if isinstance(content, bytes):
            content = content.decode(cls.encoding)
        return parse_content(content, fmt)

    @classmethod
    def load_file(cls, path: Union[str, 'os.PathLike[str]']) -> Dict[str, str]:
        """Read and parse a file from the filesystem."""
        logger.debug("Loading configuration file", path=str(path))
        with open(path, 'rb') as stream:
            return cls.load_stream(stream, detect_format(str(path)))
