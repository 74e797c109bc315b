# File: ezclip/config.py
"""
Defaults and per-invocation settings for ezclip.

Nothing here is read from disk or the environment; main() builds an
EzClipConfig for the real process and tests build their own.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Optional, TextIO

# --- Configuration ---
VERSION = "1.20.0"
PROG_NAME = "ezclip"
DEFAULT_CONSOLE_VERBOSITY = "Warning"   # write_debug below this channel is dropped
WILDCARD_CHARS = ("*", "?")
PROMPT_CHOICES = "y/n/a"

HELP_ALIASES = frozenset({"?", "-?", "/?", "/help", "help", "-help"})
PASTE_ALIASES = frozenset({"paste", "p"})
LIST_ALIASES = frozenset({"list", "l"})
ADD_ALIASES = frozenset({"add", "a"})
COPY_ALIASES = frozenset({"copy", "c"})
OUTPUT_ALIASES = frozenset({"output", "o"})


@dataclass
class EzClipConfig:
    """
    Everything one invocation needs from the outside world.

    clipboard: an ezclip.backends.ClipboardService; None means the system clipboard.
    stdin: stream probed for piped data; None means no stdin at all (treated as a console).
    ask: prompt callable used by paste for overwrite answers; None means the console prompt.
    """

    working_dir: Path = field(default_factory=Path.cwd)
    clipboard: Optional[Any] = None
    stdin: Optional[TextIO] = None
    ask: Optional[Callable[[str], str]] = None
    console_verbosity: str = DEFAULT_CONSOLE_VERBOSITY
