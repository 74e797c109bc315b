# File: ezclip/filelist.py
"""
Builds the file list written to the clipboard by `copy` and `add`, and reads
it back for `list`.

New files always come first, in argument order. In append mode the files the
clipboard already held follow in their previous order. Nothing is
deduplicated: a path given twice, or already on the clipboard, appears twice.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, List, Optional, Sequence

from .backends import ClipboardService
from .debug_utils import write_debug
from .errors import (
    MissingSourceFile,
    NoFilesOnClipboardError,
    NoFilesSpecifiedError,
    NoValidFilesError,
)
from .resolver import resolve_tokens


def merge(
    tokens: Sequence[str],
    append_mode: bool,
    clipboard: ClipboardService,
    cwd: Path,
    on_missing: Optional[Callable[[MissingSourceFile], None]] = None,
) -> List[str]:
    """
    Resolve `tokens`, optionally append the current clipboard file list, and
    replace the clipboard with the result.

    Raises NoFilesSpecifiedError for an empty request and NoValidFilesError
    when nothing resolved; the clipboard is not touched in either case.
    """
    if not tokens:
        raise NoFilesSpecifiedError()

    collected = resolve_tokens(tokens, cwd, on_missing=on_missing).paths
    if not collected:
        raise NoValidFilesError()

    if append_mode:
        existing = clipboard.get_file_list()
        if existing:
            write_debug(f"Appending {len(existing)} file(s) already on the clipboard", channel="Debug")
            collected.extend(existing)
        else:
            write_debug("Append requested but the clipboard holds no file list", channel="Debug")

    clipboard.set_file_list(list(collected))
    return collected


def list_files(clipboard: ClipboardService) -> List[str]:
    files = clipboard.get_file_list()
    if not files:
        raise NoFilesOnClipboardError()
    return list(files)
