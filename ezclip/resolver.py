# File: ezclip/resolver.py
"""
ezclip.resolver

Turns command-line file arguments into absolute paths.

- A token holding '*' or '?' is a pattern: its directory part (relative to the
  working directory) is listed and the file-name part is matched against each
  regular file. No match is an empty result, never an error.
- Any other token must name an existing file or directory. Misses are reported
  as MissingSourceFile and skipped; the remaining tokens are still resolved.

Functions return plain data; callers decide how to print.
"""

from __future__ import annotations

import fnmatch
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, List, Optional

from .config import WILDCARD_CHARS
from .debug_utils import write_debug
from .errors import MissingSourceFile


@dataclass
class FsResolution:
    """Paths found for one or more tokens, plus the literal tokens that did not exist."""
    paths: List[str] = field(default_factory=list)
    missing: List[MissingSourceFile] = field(default_factory=list)

    def extend(self, other: "FsResolution") -> None:
        self.paths.extend(other.paths)
        self.missing.extend(other.missing)


def has_wildcard(token: str) -> bool:
    return any(ch in token for ch in WILDCARD_CHARS)


def expand_pattern(token: str, cwd: Path) -> List[str]:
    """
    Expand the file-name part of `token` inside its directory part.

    Matches keep the order the directory listing returns them in. A directory
    part that does not exist (or itself contains wildcards) matches nothing.
    """
    rel = Path(token)
    directory = os.path.join(str(cwd), str(rel.parent))
    # only '*' and '?' are wildcards; '[' matches itself
    pattern = rel.name.replace("[", "[[]")
    try:
        with os.scandir(directory) as it:
            entries = list(it)
    except OSError as e:
        write_debug(f"Pattern '{token}': cannot list '{directory}': {e}", channel="Debug")
        return []

    matches = []
    for entry in entries:
        try:
            is_file = entry.is_file()
        except OSError:
            continue
        if is_file and fnmatch.fnmatch(entry.name, pattern):
            matches.append(os.path.abspath(os.path.join(directory, entry.name)))
    write_debug(f"Pattern '{token}' matched {len(matches)} file(s)", channel="Debug")
    return matches


def resolve_literal(token: str, cwd: Path) -> Optional[str]:
    """Absolute path for an existing file or directory, else None."""
    candidate = os.path.join(str(cwd), token)
    if not os.path.exists(candidate):
        return None
    return os.path.abspath(candidate)


def resolve_token(token: str, cwd: Path) -> FsResolution:
    if has_wildcard(token):
        return FsResolution(paths=expand_pattern(token, cwd))
    found = resolve_literal(token, cwd)
    if found is None:
        return FsResolution(missing=[MissingSourceFile(token)])
    return FsResolution(paths=[found])


def resolve_tokens(
    tokens: Iterable[str],
    cwd: Path,
    on_missing: Optional[Callable[[MissingSourceFile], None]] = None,
) -> FsResolution:
    """
    Resolve every token in order and concatenate the results.

    `on_missing` is called once per missing literal token, as it is found.
    """
    result = FsResolution()
    for token in tokens:
        part = resolve_token(token, cwd)
        if on_missing is not None:
            for miss in part.missing:
                on_missing(miss)
        result.extend(part)
    return result
