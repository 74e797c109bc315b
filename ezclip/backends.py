#!/usr/bin/env python3
# File: ezclip/backends.py
"""
Clipboard service used by every ezclip command.

Components never touch the OS clipboard directly; they receive an object with
the ClipboardService shape. SystemClipboard drives the platform tools:

  - Windows: PowerShell -EncodedCommand (UTF-8 payload via stdin) for text,
             System.Windows.Forms.Clipboard file drop lists for files
  - macOS  : pbcopy / pbpaste for text, NSPasteboard file URLs via osascript (JXA)
  - Linux  : wl-copy|xclip|xsel / wl-paste|xclip|xsel for text,
             text/uri-list targets through wl-clipboard or xclip for files

Every write replaces whatever the clipboard held before.
"""

from __future__ import annotations

import base64
import os
import platform
import shutil
import subprocess
from pathlib import Path
from typing import List, Optional, Protocol, Sequence
from urllib.parse import unquote, urlparse

from .debug_utils import write_debug
from .errors import ClipboardUnavailableError

URI_LIST_TARGET = "text/uri-list"
GNOME_FILES_TARGET = "x-special/gnome-copied-files"


class ClipboardService(Protocol):
    def get_file_list(self) -> Optional[List[str]]: ...

    def get_text(self) -> Optional[str]: ...

    def set_file_list(self, paths: Sequence[str]) -> None: ...

    def set_text(self, text: str) -> None: ...


# ------------------------
# file:// URI helpers
# ------------------------

def paths_to_uri_list(paths: Sequence[str]) -> str:
    """Encode absolute paths as a text/uri-list payload (CRLF separated)."""
    return "".join(Path(p).as_uri() + "\r\n" for p in paths)


def uri_list_to_paths(payload: str) -> List[str]:
    """Decode a text/uri-list (or gnome-copied-files) payload into local paths."""
    paths = []
    for line in payload.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        parsed = urlparse(line)
        if parsed.scheme != "file":
            continue
        paths.append(unquote(parsed.path))
    return paths


_MAC_SET_FILES_JXA = """
ObjC.import('AppKit');
function run(argv) {
  var pb = $.NSPasteboard.generalPasteboard;
  pb.clearContents;
  var urls = argv.map(function (p) { return $.NSURL.fileURLWithPath(p); });
  pb.writeObjects($(urls));
}
"""

_MAC_GET_FILES_JXA = """
ObjC.import('AppKit');
function run() {
  var pb = $.NSPasteboard.generalPasteboard;
  var items = pb.readObjectsForClassesOptions($([$.NSURL]), $({}));
  if (!items || items.count === 0) { return ''; }
  var out = [];
  for (var i = 0; i < items.count; i++) {
    var u = items.objectAtIndex(i);
    if (u.isFileURL) { out.push(u.path.js); }
  }
  return out.join('\\n');
}
"""

_WIN_SET_TEXT_PS = (
    "$b=[Console]::In.ReadToEnd();"
    "$str=[Text.Encoding]::UTF8.GetString([Convert]::FromBase64String($b));"
    "Set-Clipboard -Value $str"
)

_WIN_GET_TEXT_PS = (
    "[Console]::OutputEncoding=[Text.Encoding]::UTF8;"
    "Get-Clipboard -Raw"
)

_WIN_SET_FILES_PS = (
    "$b=[Console]::In.ReadToEnd();"
    "$str=[Text.Encoding]::UTF8.GetString([Convert]::FromBase64String($b));"
    "Add-Type -AssemblyName System.Windows.Forms;"
    "$c=New-Object System.Collections.Specialized.StringCollection;"
    "foreach($p in ($str -split \"`n\")){ if($p){ [void]$c.Add($p) } };"
    "[System.Windows.Forms.Clipboard]::SetFileDropList($c)"
)

_WIN_GET_FILES_PS = (
    "[Console]::OutputEncoding=[Text.Encoding]::UTF8;"
    "Add-Type -AssemblyName System.Windows.Forms;"
    "if([System.Windows.Forms.Clipboard]::ContainsFileDropList()){"
    "[System.Windows.Forms.Clipboard]::GetFileDropList() | ForEach-Object { $_ } }"
)


class SystemClipboard:
    """ClipboardService backed by the native clipboard tools of the running OS."""

    def __init__(self):
        self._os = platform.system().lower()
        write_debug(f"Initialized SystemClipboard for OS: {self._os}", channel="Debug")

    # ------------------------
    # Environment detection
    # ------------------------
    def os_name(self) -> str:
        return self._os

    def is_wayland(self) -> bool:
        return bool(os.environ.get("WAYLAND_DISPLAY"))

    def is_wsl2(self) -> bool:
        """Detect WSL (v1 or v2); both report 'Microsoft' in kernel release."""
        try:
            return "microsoft" in platform.uname().release.lower()
        except Exception:
            return False

    # ------------------------
    # Helpers
    # ------------------------
    def _run(self, args: List[str], *, input_text: Optional[str] = None) -> subprocess.CompletedProcess:
        write_debug(f"Running clipboard tool: {' '.join(args[:3])}", channel="Verbose")
        try:
            return subprocess.run(
                args,
                input=input_text,
                text=True,
                encoding="utf-8",
                errors="replace",
                capture_output=True,
                check=True,
            )
        except FileNotFoundError as e:
            raise ClipboardUnavailableError(f"Clipboard tool '{args[0]}' not found") from e
        except subprocess.CalledProcessError as e:
            detail = (e.stderr or e.stdout or "").strip()
            raise ClipboardUnavailableError(
                f"Clipboard tool '{args[0]}' failed (rc={e.returncode}){': ' + detail if detail else ''}"
            ) from e

    def _pwsh_exe(self) -> Optional[str]:
        for exe in ("powershell", "powershell.exe", "pwsh"):
            p = shutil.which(exe)
            if p:
                return p
        return None

    def _run_powershell(self, script: str, *, payload: Optional[str] = None) -> str:
        """
        Run a PowerShell script via -EncodedCommand (UTF-16LE). An optional UTF-8
        payload is sent base64-encoded on stdin to stay clear of the command-line
        length limit and console codepages.
        """
        pwsh = self._pwsh_exe()
        if not pwsh:
            raise ClipboardUnavailableError("pwsh/powershell not found for clipboard access")
        encoded = base64.b64encode(script.encode("utf-16le")).decode("ascii")
        stdin_text = None
        if payload is not None:
            stdin_text = base64.b64encode(payload.encode("utf-8")).decode("ascii")
        cp = self._run([pwsh, "-NoProfile", "-STA", "-EncodedCommand", encoded], input_text=stdin_text)
        return cp.stdout

    def _linux_text_setter(self) -> List[str]:
        candidates = []
        if self.is_wayland():
            candidates.append(["wl-copy"])
        candidates += [["xclip", "-selection", "clipboard"], ["xsel", "--clipboard", "--input"]]
        for prog in candidates:
            if shutil.which(prog[0]):
                return prog
        raise ClipboardUnavailableError("No clipboard tool found (install wl-clipboard, xclip or xsel)")

    def _linux_text_getter(self) -> List[str]:
        candidates = []
        if self.is_wayland():
            candidates.append(["wl-paste", "--no-newline"])
        candidates += [["xclip", "-selection", "clipboard", "-o"], ["xsel", "--clipboard", "--output"]]
        for prog in candidates:
            if shutil.which(prog[0]):
                return prog
        raise ClipboardUnavailableError("No clipboard tool found (install wl-clipboard, xclip or xsel)")

    # ------------------------
    # Text payload
    # ------------------------
    def set_text(self, text: str) -> None:
        osname = self.os_name()
        if osname == "windows":
            self._run_powershell(_WIN_SET_TEXT_PS, payload=text)
            return
        if osname == "darwin":
            self._run(["pbcopy"], input_text=text)
            return
        if self.is_wsl2() and shutil.which("win32yank"):
            self._run(["win32yank", "-i"], input_text=text)
            return
        self._run(self._linux_text_setter(), input_text=text)

    def get_text(self) -> Optional[str]:
        osname = self.os_name()
        try:
            if osname == "windows":
                out = self._run_powershell(_WIN_GET_TEXT_PS)
            elif osname == "darwin":
                out = self._run(["pbpaste"]).stdout
            elif self.is_wsl2() and shutil.which("win32yank"):
                out = self._run(["win32yank", "-o"]).stdout
            else:
                out = self._run(self._linux_text_getter()).stdout
        except ClipboardUnavailableError as e:
            # xclip/wl-paste exit non-zero when the clipboard holds no text
            if isinstance(e.__cause__, subprocess.CalledProcessError):
                return None
            raise
        return out or None

    # ------------------------
    # File-list payload
    # ------------------------
    def set_file_list(self, paths: Sequence[str]) -> None:
        osname = self.os_name()
        write_debug(f"Setting clipboard file list ({len(paths)} entries)", channel="Debug")
        if osname == "windows":
            self._run_powershell(_WIN_SET_FILES_PS, payload="\n".join(paths))
            return
        if osname == "darwin":
            self._run(["osascript", "-l", "JavaScript", "-e", _MAC_SET_FILES_JXA, *paths])
            return
        payload = paths_to_uri_list(paths)
        if self.is_wayland() and shutil.which("wl-copy"):
            self._run(["wl-copy", "--type", URI_LIST_TARGET], input_text=payload)
            return
        if shutil.which("xclip"):
            self._run(["xclip", "-selection", "clipboard", "-t", URI_LIST_TARGET, "-i"], input_text=payload)
            return
        raise ClipboardUnavailableError("Copying files needs wl-clipboard or xclip")

    def get_file_list(self) -> Optional[List[str]]:
        osname = self.os_name()
        if osname == "windows":
            out = self._run_powershell(_WIN_GET_FILES_PS)
            paths = [line.rstrip("\r") for line in out.splitlines() if line.strip()]
            return paths or None
        if osname == "darwin":
            out = self._run(["osascript", "-l", "JavaScript", "-e", _MAC_GET_FILES_JXA]).stdout
            paths = [line for line in out.splitlines() if line.strip()]
            return paths or None

        if self.is_wayland() and shutil.which("wl-paste"):
            list_types = ["wl-paste", "--list-types"]
            fetch = lambda target: ["wl-paste", "--no-newline", "--type", target]
        elif shutil.which("xclip"):
            list_types = ["xclip", "-selection", "clipboard", "-t", "TARGETS", "-o"]
            fetch = lambda target: ["xclip", "-selection", "clipboard", "-t", target, "-o"]
        else:
            raise ClipboardUnavailableError("Reading files needs wl-clipboard or xclip")

        try:
            targets = {t.strip() for t in self._run(list_types).stdout.splitlines()}
        except ClipboardUnavailableError as e:
            if isinstance(e.__cause__, subprocess.CalledProcessError):
                return None  # empty clipboard
            raise

        if URI_LIST_TARGET in targets:
            paths = uri_list_to_paths(self._run(fetch(URI_LIST_TARGET)).stdout)
        elif GNOME_FILES_TARGET in targets:
            # first line is the "copy"/"cut" verb
            paths = uri_list_to_paths(self._run(fetch(GNOME_FILES_TARGET)).stdout)
        else:
            return None
        return paths or None


# ------------- Module-level convenience -------------
_service_singleton: Optional[SystemClipboard] = None


def get_clipboard_service() -> SystemClipboard:
    global _service_singleton
    if _service_singleton is None:
        _service_singleton = SystemClipboard()
    return _service_singleton


__all__ = [
    "ClipboardService",
    "SystemClipboard",
    "get_clipboard_service",
    "paths_to_uri_list",
    "uri_list_to_paths",
]
