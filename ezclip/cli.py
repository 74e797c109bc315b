#!/usr/bin/env python3
# File: ezclip/cli.py
"""
ezclip: clipboard copy/paste for files and command output, from the command line.

Commands (first argument, case-insensitive; single letters are short forms):
- copy   | c  <file-or-glob>...   replace the clipboard with these files
- add    | a  <file-or-glob>...   put these files in front of the ones already on the clipboard
- paste  | p                      copy the clipboard files into the current directory
- list   | l                      print the files on the clipboard
- output | o  <command> [args]    run a command and copy its stdout as text
- help   | ? | -? | /? | /help | -help

Piped stdin is copied to the clipboard as text before any argument is looked at.

Exit status is 0 for everything except `output` without a command (1); other
failures are reported on stdout only.
"""

from __future__ import annotations

import sys
from typing import Callable, Dict, List, Optional, TextIO

from rich.console import Console
from rich.markup import escape

from .backends import ClipboardService, get_clipboard_service
from .capture import capture_output
from .config import (
    ADD_ALIASES,
    COPY_ALIASES,
    HELP_ALIASES,
    LIST_ALIASES,
    OUTPUT_ALIASES,
    PASTE_ALIASES,
    PROG_NAME,
    VERSION,
    EzClipConfig,
)
from .debug_utils import set_console_verbosity, write_debug
from .errors import (
    CaptureError,
    EzClipError,
    MissingSourceFile,
    OutputUsageError,
    PasteCopyError,
)
from .filelist import list_files, merge
from .paste import ConsolePrompt, paste

console_out = Console(highlight=False, soft_wrap=True)
console_err = Console(stderr=True, highlight=False, soft_wrap=True)

HELP_TEXT = f"""\
{PROG_NAME} - version {VERSION}
Clipboard copy/paste for files and command output, from the command line.

usage: {PROG_NAME} [copy|paste|add|list|output] <arguments>

Examples:

  {PROG_NAME} copy notes.txt build.log
      puts notes.txt and build.log on the clipboard, replacing what was there.

  {PROG_NAME} paste
      copies every file on the clipboard into the current directory,
      asking before overwriting (y = yes, n = no, a = yes to all).

  {PROG_NAME} list
      prints the files that are currently on the clipboard.

  {PROG_NAME} add setup.cfg *.py
      adds setup.cfg and every .py file in front of the files already on the clipboard.

  {PROG_NAME} output ls -l
      runs the command (2nd argument) with the remaining arguments, captures
      what it prints and copies that text to the clipboard.

  <command> | {PROG_NAME}
      copies the piped data to the clipboard, e.g. 'git log -1 | {PROG_NAME}'.

Each command also accepts its first letter, e.g. '{PROG_NAME} c *.txt' copies all text files."""


# =====================================================================================
# Helpers
# =====================================================================================

def show_help() -> None:
    console_out.print(HELP_TEXT, markup=False)


def _report_missing(miss: MissingSourceFile) -> None:
    console_out.print(f"[bold red]!!! error:[/] {escape(str(miss))}")


def read_piped_stdin(stream: Optional[TextIO]) -> Optional[str]:
    """
    Return everything piped into `stream`, or None when it is a terminal.

    Bytes are decoded with the stream's encoding and newlines are kept as sent.
    """
    if stream is None:
        return None
    try:
        if stream.isatty():
            return None
    except (AttributeError, ValueError):
        return None

    buffer = getattr(stream, "buffer", None)
    if buffer is None:
        return stream.read()
    encoding = getattr(stream, "encoding", None) or "utf-8"
    return buffer.read().decode(encoding, errors="replace")


# =====================================================================================
# Command implementations
# =====================================================================================

def cmd_help(args: List[str], config: EzClipConfig, clipboard: ClipboardService) -> int:
    show_help()
    return 0


def cmd_copy(args: List[str], config: EzClipConfig, clipboard: ClipboardService, append: bool = False) -> int:
    files = merge(args, append, clipboard, config.working_dir, on_missing=_report_missing)
    console_out.print(f"[INFO] {len(files)} file(s) now on the clipboard.")
    return 0


def cmd_add(args: List[str], config: EzClipConfig, clipboard: ClipboardService) -> int:
    return cmd_copy(args, config, clipboard, append=True)


def cmd_list(args: List[str], config: EzClipConfig, clipboard: ClipboardService) -> int:
    for path in list_files(clipboard):
        console_out.print(f" {escape(path)}")
    return 0


def cmd_paste(args: List[str], config: EzClipConfig, clipboard: ClipboardService) -> int:
    ask = config.ask or ConsolePrompt(console_out)
    result = paste(clipboard, config.working_dir, ask)
    console_out.print(f"[INFO] Pasted {len(result.copied)} file(s), skipped {len(result.skipped)}.")
    return 0


def cmd_output(args: List[str], config: EzClipConfig, clipboard: ClipboardService) -> int:
    if not args:
        raise OutputUsageError()
    command, cmd_args = args[0], " ".join(args[1:])
    result = capture_output(command, cmd_args, clipboard)
    console_out.print("Copied command output to clipboard.")
    if result.returncode != 0:
        console_out.print(
            f"[yellow][WARNING] Command '{escape(result.command_line)}' exited with status {result.returncode}[/]"
        )
    return 0


_COMMANDS: Dict[frozenset, Callable[[List[str], EzClipConfig, ClipboardService], int]] = {
    HELP_ALIASES: cmd_help,
    PASTE_ALIASES: cmd_paste,
    LIST_ALIASES: cmd_list,
    ADD_ALIASES: cmd_add,
    COPY_ALIASES: cmd_copy,
    OUTPUT_ALIASES: cmd_output,
}


def resolve_command(word: str) -> Callable[[List[str], EzClipConfig, ClipboardService], int]:
    """Handler for the first argument; unknown words fall back to help."""
    key = word.lower()
    for aliases, handler in _COMMANDS.items():
        if key in aliases:
            return handler
    return cmd_help


def _report_error(e: EzClipError) -> None:
    if isinstance(e, PasteCopyError):
        console_out.print(f"[bold red]!!! error:[/] Cannot copy '{escape(e.source)}' to '{escape(e.destination)}'")
        console_out.print(escape(e.reason))
    elif isinstance(e, CaptureError):
        console_out.print("Something went wrong while capturing the command output:", markup=False)
        console_out.print(f"{e.reason}\n{e.trace}".rstrip(), markup=False)
    elif isinstance(e, OutputUsageError):
        console_out.print(str(e), markup=False)
    else:
        console_out.print(f"[bold red][ERROR][/] {escape(str(e))}")


# =====================================================================================
# Dispatch / main
# =====================================================================================

def run(argv: List[str], config: Optional[EzClipConfig] = None) -> int:
    if config is None:
        config = EzClipConfig(stdin=sys.stdin)
    set_console_verbosity(config.console_verbosity)
    clipboard = config.clipboard if config.clipboard is not None else get_clipboard_service()

    try:
        piped = read_piped_stdin(config.stdin)
        if piped is not None:
            write_debug(f"Copying {len(piped)} chars of piped input to the clipboard", channel="Information")
            clipboard.set_text(piped)
            return 0

        if not argv:
            show_help()
            return 0

        handler = resolve_command(argv[0])
        write_debug(f"Dispatching '{argv[0]}' to {handler.__name__}", channel="Debug")
        return handler(list(argv[1:]), config, clipboard)
    except EzClipError as e:
        _report_error(e)
        return e.exit_code


def main(argv: Optional[List[str]] = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    try:
        return run(argv, EzClipConfig(stdin=sys.stdin))
    except KeyboardInterrupt:
        console_err.print("\n[INFO] Cancelled.")
        return 0


if __name__ == "__main__":
    sys.exit(main())
