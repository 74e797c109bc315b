# File: ezclip/paste.py
"""
Copies the files referenced by the clipboard into the working directory.

The per-file choice is made by decide_action(), a pure function of whether the
destination exists, the running overwrite policy and the user's answer. The
terminal conversation lives in ConsolePrompt so tests can script the answers.

Copy failures abort the whole paste (files already copied stay in place).
"""

from __future__ import annotations

import os
import shutil
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, List, Optional

from rich.console import Console

from .backends import ClipboardService
from .config import PROMPT_CHOICES
from .debug_utils import write_debug
from .errors import NoFilesOnClipboardError, PasteCopyError


class OverwritePolicy(Enum):
    ASK = "ask"
    ALWAYS = "always"


class PasteAction(Enum):
    SKIP = "skip"
    COPY_ONCE = "copy_once"
    COPY_AND_SET_ALWAYS = "copy_and_set_always"


def needs_prompt(destination_exists: bool, policy: OverwritePolicy) -> bool:
    return destination_exists and policy is not OverwritePolicy.ALWAYS


def decide_action(destination_exists: bool, policy: OverwritePolicy, answer: Optional[str] = None) -> PasteAction:
    """
    Decide what to do with one clipboard file.

    Missing destination, or a policy already at ALWAYS, copies without asking.
    Otherwise the first letter of `answer` decides: 'y' copies this file, 'a'
    copies it and every later conflict, anything else (or no answer) skips.
    """
    if not needs_prompt(destination_exists, policy):
        return PasteAction.COPY_ONCE
    key = (answer or "").strip()[:1].lower()
    if key == "y":
        return PasteAction.COPY_ONCE
    if key == "a":
        return PasteAction.COPY_AND_SET_ALWAYS
    return PasteAction.SKIP


def overwrite_prompt(name: str) -> str:
    return f"'{name}' already exists.  Overwrite? ({PROMPT_CHOICES}) "


class ConsolePrompt:
    """Asks the overwrite question on the console and returns the raw answer."""

    def __init__(self, console: Optional[Console] = None):
        self._console = console or Console(highlight=False)

    def __call__(self, prompt: str) -> str:
        try:
            return self._console.input(prompt, markup=False)
        except EOFError:
            self._console.print("[WARNING] No input for confirmation (EOFError). Assuming 'No'.", markup=False)
            return "n"


@dataclass
class PasteResult:
    copied: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)

    @property
    def processed(self) -> int:
        return len(self.copied) + len(self.skipped)


def _copy_entry(source: str, destination: Path) -> None:
    if os.path.isdir(source):
        shutil.copytree(source, destination, dirs_exist_ok=True)
    elif destination.is_dir():
        # a file never lands inside a same-named directory
        raise IsADirectoryError(f"'{destination}' is a directory")
    else:
        shutil.copy2(source, destination)


def paste(clipboard: ClipboardService, cwd: Path, ask: Callable[[str], str]) -> PasteResult:
    """
    Copy every clipboard file into `cwd`, in clipboard order.

    Raises NoFilesOnClipboardError (before any write) when the clipboard holds
    no file list, and PasteCopyError on the first file that cannot be written.
    """
    files = clipboard.get_file_list()
    if not files:
        raise NoFilesOnClipboardError()

    policy = OverwritePolicy.ASK
    result = PasteResult()

    for source in files:
        name = os.path.basename(os.path.normpath(source))
        destination = Path(cwd) / name
        exists = destination.exists()

        answer = ask(overwrite_prompt(name)) if needs_prompt(exists, policy) else None
        action = decide_action(exists, policy, answer)
        write_debug(f"{name}: exists={exists} policy={policy.value} -> {action.value}", channel="Debug")

        if action is PasteAction.SKIP:
            result.skipped.append(source)
            continue
        if action is PasteAction.COPY_AND_SET_ALWAYS:
            policy = OverwritePolicy.ALWAYS

        try:
            _copy_entry(source, destination)
        except OSError as e:
            raise PasteCopyError(source, str(destination), str(e)) from e
        result.copied.append(source)

    return result
