# File: ezclip/tests/conftest.py
import io
import sys
from pathlib import Path

import pytest

# Ensure the ezclip package is importable when running tests from a checkout
_PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from ezclip.config import EzClipConfig


class FakeClipboard:
    """
    In-memory clipboard used by tests.
    Holds one payload at a time: nothing, a file list, or text.
    """
    def __init__(self):
        self.kind = None
        self.value = None
        self.writes = 0

    def get_file_list(self):
        return list(self.value) if self.kind == "files" else None

    def get_text(self):
        return self.value if self.kind == "text" else None

    def set_file_list(self, paths):
        self.kind, self.value = "files", list(paths)
        self.writes += 1

    def set_text(self, text):
        self.kind, self.value = "text", text
        self.writes += 1


class TtyStringIO(io.StringIO):
    """StringIO that reports itself as a TTY (an interactive console with nothing piped)."""
    def isatty(self):
        return True


class ScriptedAnswers:
    """Prompt double: returns queued answers and records every prompt it was shown."""
    def __init__(self, *answers):
        self.answers = list(answers)
        self.prompts = []

    def __call__(self, prompt):
        self.prompts.append(prompt)
        return self.answers.pop(0) if self.answers else "n"


@pytest.fixture
def fake_clipboard():
    return FakeClipboard()


@pytest.fixture
def answers():
    return ScriptedAnswers


@pytest.fixture
def tty_stream():
    return TtyStringIO


@pytest.fixture
def workdir(tmp_path):
    wd = tmp_path / "work"
    wd.mkdir()
    return wd


@pytest.fixture
def make_config(workdir, fake_clipboard):
    """Build an EzClipConfig wired to the fake clipboard and an interactive stdin."""
    def _make(stdin=None, ask=None, working_dir=None):
        return EzClipConfig(
            working_dir=working_dir or workdir,
            clipboard=fake_clipboard,
            stdin=stdin if stdin is not None else TtyStringIO(),
            ask=ask,
        )
    return _make
