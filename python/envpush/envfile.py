"""
Reader for the simplified env format.

Rules:
- One KEY=VALUE per line; CRs and a leading BOM are dropped.
- Blank lines and lines starting with `#` (after whitespace) are ignored.
- A single leading `export ` or `EXPORT ` is stripped.
- Key is trimmed on both sides, value only on the left.
- One layer of matching outer quotes is removed from the value.
- No expansion, no escapes, no multi-line values.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, Iterator, List, Optional, Tuple

from .errors import ConfigFileNotFound, ConfigFileUnreadable, MalformedLineWarning


BOM = "\ufeff"
COMMENT_RE = re.compile(r"^\s*#")
EXPORT_PREFIXES = ("export ", "EXPORT ")
QUOTES = ('"', "'")

WarningHandler = Callable[[int, MalformedLineWarning], None]


@dataclass(frozen=True)
class Entry:
    key: str
    value: str


def normalize_line(raw: str) -> Optional[str]:
    line = raw.replace("\r", "")
    if line.endswith("\n"):
        line = line[:-1]
    if line.startswith(BOM):
        line = line[len(BOM) :]

    if not line or COMMENT_RE.match(line):
        return None

    for prefix in EXPORT_PREFIXES:
        if line.startswith(prefix):
            return line[len(prefix) :]
    return line


def unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in QUOTES:
        return value[1:-1]
    return value


def parse_line(line: str) -> Entry:
    """
    Split a normalized line on its first `=`.

    Trailing whitespace in the value is kept; only the key is fully trimmed.
    """
    if "=" not in line:
        raise MalformedLineWarning(f"ignoring line without '=': {line}")

    key, value = line.split("=", 1)
    key = key.strip()
    if not key:
        raise MalformedLineWarning("ignoring line with empty key")
    return Entry(key=key, value=unquote(value.lstrip()))


def iter_entries(
    lines: Iterable[str],
    on_warning: Optional[WarningHandler] = None,
) -> Iterator[Tuple[int, Entry]]:
    for lineno, raw in enumerate(lines, start=1):
        line = normalize_line(raw)
        if line is None:
            continue
        try:
            entry = parse_line(line)
        except MalformedLineWarning as w:
            if on_warning is not None:
                on_warning(lineno, w)
            continue
        yield lineno, entry


def read_lines(path: str | os.PathLike) -> List[str]:
    """
    Read and decode the whole file up front so unreadable input fails before
    any entry is processed.
    """
    p = Path(path)
    if not p.is_file():
        raise ConfigFileNotFound(os.fspath(path))
    try:
        text = p.read_bytes().decode("utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigFileUnreadable(os.fspath(path), e) from e
    # Split on LF only; a lone CR is not a line break and is dropped later.
    return text.split("\n")


def read_entries(
    path: str | os.PathLike,
    on_warning: Optional[WarningHandler] = None,
) -> Iterator[Tuple[int, Entry]]:
    return iter_entries(read_lines(path), on_warning)
