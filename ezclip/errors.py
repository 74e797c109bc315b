# File: ezclip/errors.py
"""
Exception types raised by ezclip components.

Components raise; ezclip.cli catches EzClipError, prints the message and maps
it to an exit status. Only OutputUsageError changes the exit status.
"""

from __future__ import annotations

from dataclasses import dataclass


class EzClipError(Exception):
    """Base class for all recoverable ezclip failures."""

    exit_code = 0


class NoFilesSpecifiedError(EzClipError):
    def __init__(self, message: str = "Filename(s) to copy were not specified"):
        super().__init__(message)


class NoValidFilesError(EzClipError):
    def __init__(self, message: str = "No files were copied to the clipboard"):
        super().__init__(message)


class NoFilesOnClipboardError(EzClipError):
    def __init__(self, message: str = "No files found in clipboard"):
        super().__init__(message)


class PasteCopyError(EzClipError):
    """A file could not be written during paste; the remaining files are abandoned."""

    def __init__(self, source: str, destination: str, reason: str):
        self.source = source
        self.destination = destination
        self.reason = reason
        super().__init__(f"Cannot copy '{source}' to '{destination}': {reason}")


class OutputUsageError(EzClipError):
    exit_code = 1

    def __init__(
        self,
        message: str = "The 'output' command requires providing something to execute (app or command).",
    ):
        super().__init__(message)


class CaptureError(EzClipError):
    """Launching the child process or reading its output failed."""

    def __init__(self, command_line: str, reason: str, trace: str = ""):
        self.command_line = command_line
        self.reason = reason
        self.trace = trace
        super().__init__(f"Failed to capture output of '{command_line}': {reason}")


class ClipboardUnavailableError(EzClipError):
    """No usable clipboard tool, or the tool reported an error."""


@dataclass(frozen=True)
class MissingSourceFile:
    """A literal path argument that does not exist. Reported, never raised."""

    token: str

    def __str__(self) -> str:
        return f"'{self.token}' does not exist"


__all__ = [
    "EzClipError",
    "NoFilesSpecifiedError",
    "NoValidFilesError",
    "NoFilesOnClipboardError",
    "PasteCopyError",
    "OutputUsageError",
    "CaptureError",
    "ClipboardUnavailableError",
    "MissingSourceFile",
]
