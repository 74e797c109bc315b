# File: ezclip/debug_utils.py
"""
Channel-filtered debug output for ezclip.

Messages go to stderr so they never mix with the diagnostics and help text the
tool prints on stdout. Nothing is shown below the configured console verbosity.
"""

import inspect
import os
import sys

from .config import DEFAULT_CONSOLE_VERBOSITY

VERBOSITY_LEVELS = ["Verbose", "Debug", "Information", "Warning", "Error", "Critical"]

# --- Global Variables ---
_console_verbosity_level = DEFAULT_CONSOLE_VERBOSITY


def set_console_verbosity(level: str = DEFAULT_CONSOLE_VERBOSITY) -> None:
    """Set the global verbosity level for console output."""
    global _console_verbosity_level
    _console_verbosity_level = _validate_verbosity_level(level)


def get_console_verbosity() -> str:
    return _console_verbosity_level


def _validate_verbosity_level(level: str) -> str:
    """Validate verbosity level and raise ValueError if invalid."""
    level_capitalized = level.capitalize()
    if level_capitalized not in VERBOSITY_LEVELS:
        raise ValueError(f"Invalid console verbosity level: '{level}'. Must be one of {VERBOSITY_LEVELS}")
    return level_capitalized


def _is_at_verbosity_level(channel: str, verbosity_level: str) -> bool:
    """Check if a channel is at or above the given verbosity level."""
    current_index = VERBOSITY_LEVELS.index(verbosity_level)
    channel_index = VERBOSITY_LEVELS.index(channel.capitalize())
    return channel_index >= current_index


def write_debug(message: str = "", channel: str = "Debug", condition: bool = True,
                show_location: bool = False) -> None:
    """
    Write a debug message to stderr.
    Parameters:
      - message: The debug message.
      - channel: One of ("Verbose", "Debug", "Information", "Warning", "Error", "Critical").
      - condition: If False, the message will not be processed.
      - show_location: Prefix the message with the caller's file and line.
    """
    if not condition:
        return

    channel_cap = _validate_verbosity_level(channel)
    if not _is_at_verbosity_level(channel_cap, _console_verbosity_level):
        return

    output_message = message
    if show_location:
        frame = inspect.stack()[1]
        output_message = f"{os.path.basename(frame.filename)}:{frame.lineno} {message}"

    try:
        sys.stderr.write(f"[{channel_cap}] {output_message}\n")
        sys.stderr.flush()
    except (OSError, ValueError):
        # stderr closed or detached
        pass
