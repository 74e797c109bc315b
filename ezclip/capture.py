# File: ezclip/capture.py
"""
Runs a command and puts everything it wrote to stdout on the clipboard.

The command line goes through the platform command interpreter (cmd.exe on
Windows, /bin/sh elsewhere) so shell builtins like `dir` and `echo` work.
stderr stays attached to the terminal and stdin is closed.
"""

from __future__ import annotations

import subprocess
import traceback
from dataclasses import dataclass

from .backends import ClipboardService
from .debug_utils import write_debug
from .errors import CaptureError


@dataclass(frozen=True)
class CaptureResult:
    command_line: str
    text: str
    returncode: int


def build_command_line(command: str, args: str = "") -> str:
    return f"{command} {args}" if args else command


def run_and_capture(command_line: str) -> CaptureResult:
    """Run `command_line` and drain its stdout until the process has exited."""
    write_debug(f"Launching: {command_line}", channel="Debug")
    try:
        with subprocess.Popen(
            command_line,
            shell=True,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            text=True,
            errors="replace",
        ) as proc:
            out, _ = proc.communicate()
    except (OSError, ValueError) as e:
        raise CaptureError(command_line, str(e), traceback.format_exc()) from e
    write_debug(f"'{command_line}' exited with {proc.returncode}, {len(out or '')} chars captured", channel="Debug")
    return CaptureResult(command_line=command_line, text=out or "", returncode=proc.returncode)


def capture_output(command: str, args: str, clipboard: ClipboardService) -> CaptureResult:
    """
    Capture the stdout of `command args` and replace the clipboard text with it.

    Raises CaptureError if the process cannot be launched or read; the
    clipboard is left untouched in that case.
    """
    result = run_and_capture(build_command_line(command, args))
    clipboard.set_text(result.text)
    return result
