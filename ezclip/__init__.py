# __init__.py

# Clipboard service and its system implementation
from .backends import ClipboardService, SystemClipboard, get_clipboard_service

# Core operations
from .filelist import merge, list_files
from .paste import paste, decide_action, OverwritePolicy, PasteAction
from .capture import capture_output

# Error taxonomy
from .errors import EzClipError

from .config import VERSION as __version__

__all__ = [
    "ClipboardService",
    "SystemClipboard",
    "get_clipboard_service",
    "merge",
    "list_files",
    "paste",
    "decide_action",
    "OverwritePolicy",
    "PasteAction",
    "capture_output",
    "EzClipError",
]
