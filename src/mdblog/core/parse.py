"""Source discovery and header/body splitting"""

import logging
import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from mdblog.core.models import FrontMatter, SourceDoc


logger = logging.getLogger(__name__)

DELIMITER_RE = re.compile(r'^---[ \t]*(?:\r?\n|\Z)', re.MULTILINE)
MD_EXTENSIONS = {'.md', '.mdx', '.markdown'}


class SourceDecodeError(ValueError):
    """Source bytes are not valid UTF-8."""

    def __init__(self, name: str, cause: Exception):
        super().__init__(f"{name}: cannot decode as UTF-8: {cause}")
        self.name = name


class HeaderParseError(ValueError):
    """Base for header problems; carries the offending source name."""

    def __init__(self, name: str, reason: str):
        super().__init__(f"{name}: {reason}")
        self.name = name
        self.reason = reason


class MissingHeaderError(HeaderParseError):
    """No ---/--- delimited header block at the top of the file."""


class MalformedHeaderError(HeaderParseError):
    """Header block present but not a valid YAML mapping of known fields."""


def discover_files(path: Path) -> list[Path]:
    """Return sorted markdown files directly inside path (no recursion).

    Regular files with other extensions are logged and left out.
    """
    if path.is_file():
        return [path] if path.suffix in MD_EXTENSIONS else []
    found = []
    for p in sorted(p for p in path.iterdir() if p.is_file()):
        if p.suffix in MD_EXTENSIONS:
            found.append(p)
        else:
            logger.info(f"skipping non-markdown file {p}")
    return found


def _parse_header(name: str, text: str) -> FrontMatter:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise MalformedHeaderError(name, f"invalid YAML header: {e}") from e
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise MalformedHeaderError(name, f"header must be a mapping, got {type(data).__name__}")
    try:
        return FrontMatter.model_validate(data)
    except ValidationError as e:
        raise MalformedHeaderError(name, f"invalid header fields: {e}") from e


def split_document(raw: bytes | str, name: str) -> SourceDoc:
    """Split raw source into (header, body).

    Expects exactly three segments around two delimiter lines: an empty
    prefix, the YAML header and the markdown body. Anything else raises
    MissingHeaderError; a header that does not parse raises
    MalformedHeaderError.
    """
    if isinstance(raw, bytes):
        try:
            raw = raw.decode('utf-8')
        except UnicodeDecodeError as e:
            raise SourceDecodeError(name, e) from e

    raw = raw.removeprefix('\ufeff')
    parts = DELIMITER_RE.split(raw, maxsplit=2)
    if len(parts) != 3:
        raise MissingHeaderError(name, "no header delimiter pair found")
    prefix, header, body = parts
    if prefix.strip():
        raise MissingHeaderError(name, "text before the header delimiter")
    return SourceDoc(name=name, header=_parse_header(name, header), body=body)


def read_document(path: Path) -> SourceDoc:
    """Read and split a single source file."""
    return split_document(path.read_bytes(), path.name)
