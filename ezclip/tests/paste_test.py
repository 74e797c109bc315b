# File: ezclip/tests/paste_test.py
import shutil
from pathlib import Path

import pytest

from ezclip.errors import NoFilesOnClipboardError, PasteCopyError
from ezclip.paste import (
    OverwritePolicy,
    PasteAction,
    decide_action,
    needs_prompt,
    overwrite_prompt,
    paste,
)


@pytest.fixture
def sources(tmp_path):
    src = tmp_path / "src"
    src.mkdir()
    files = []
    for name, body in (("a.txt", "new A"), ("b.txt", "new B"), ("c.txt", "new C")):
        p = src / name
        p.write_text(body)
        files.append(str(p))
    return files


# ------------ decide_action ------------

@pytest.mark.parametrize("answer", [None, "y", "n", "a", ""])
def test_missing_destination_always_copies(answer):
    assert decide_action(False, OverwritePolicy.ASK, answer) is PasteAction.COPY_ONCE


def test_policy_always_copies_without_answer():
    assert not needs_prompt(True, OverwritePolicy.ALWAYS)
    assert decide_action(True, OverwritePolicy.ALWAYS) is PasteAction.COPY_ONCE


@pytest.mark.parametrize(
    "answer, expected",
    [
        ("y", PasteAction.COPY_ONCE),
        ("Y", PasteAction.COPY_ONCE),
        ("yes", PasteAction.COPY_ONCE),
        ("a", PasteAction.COPY_AND_SET_ALWAYS),
        ("A", PasteAction.COPY_AND_SET_ALWAYS),
        ("n", PasteAction.SKIP),
        ("q", PasteAction.SKIP),
        ("", PasteAction.SKIP),
        (None, PasteAction.SKIP),
    ],
)
def test_conflict_answers(answer, expected):
    assert decide_action(True, OverwritePolicy.ASK, answer) is expected


def test_prompt_text_names_file():
    assert overwrite_prompt("a.txt") == "'a.txt' already exists.  Overwrite? (y/n/a) "


# ------------ paste ------------

def test_paste_without_files_makes_no_writes(workdir, fake_clipboard, answers):
    ask = answers()
    with pytest.raises(NoFilesOnClipboardError):
        paste(fake_clipboard, workdir, ask)
    fake_clipboard.set_text("just text")
    with pytest.raises(NoFilesOnClipboardError):
        paste(fake_clipboard, workdir, ask)
    assert list(workdir.iterdir()) == []
    assert ask.prompts == []


def test_paste_copies_into_empty_directory(workdir, fake_clipboard, sources, answers):
    fake_clipboard.set_file_list(sources)
    ask = answers()
    result = paste(fake_clipboard, workdir, ask)
    assert result.copied == sources
    assert result.processed == 3
    assert (workdir / "b.txt").read_text() == "new B"
    assert ask.prompts == []


def test_paste_skip_keeps_existing_and_continues(workdir, fake_clipboard, sources, answers):
    (workdir / "a.txt").write_text("old A")
    fake_clipboard.set_file_list(sources)
    ask = answers("n")
    result = paste(fake_clipboard, workdir, ask)
    assert (workdir / "a.txt").read_text() == "old A"
    assert (workdir / "c.txt").read_text() == "new C"
    assert result.skipped == [sources[0]]
    assert result.processed == 3


def test_paste_yes_overwrites_once_then_asks_again(workdir, fake_clipboard, sources, answers):
    (workdir / "a.txt").write_text("old A")
    (workdir / "b.txt").write_text("old B")
    fake_clipboard.set_file_list(sources)
    ask = answers("y", "n")
    paste(fake_clipboard, workdir, ask)
    assert (workdir / "a.txt").read_text() == "new A"
    assert (workdir / "b.txt").read_text() == "old B"
    assert len(ask.prompts) == 2


def test_paste_all_stops_prompting(workdir, fake_clipboard, sources, answers):
    for name in ("a.txt", "b.txt", "c.txt"):
        (workdir / name).write_text("old")
    fake_clipboard.set_file_list(sources)
    ask = answers("a")
    result = paste(fake_clipboard, workdir, ask)
    assert ask.prompts == [overwrite_prompt("a.txt")]
    assert [(workdir / n).read_text() for n in ("a.txt", "b.txt", "c.txt")] == ["new A", "new B", "new C"]
    assert result.copied == sources


def test_paste_copy_failure_aborts_remaining(workdir, fake_clipboard, sources, answers, monkeypatch):
    fake_clipboard.set_file_list(sources)
    real_copy2 = shutil.copy2

    def flaky_copy2(src, dst, *a, **kw):
        if Path(src).name == "b.txt":
            raise PermissionError("locked")
        return real_copy2(src, dst, *a, **kw)

    monkeypatch.setattr(shutil, "copy2", flaky_copy2)
    with pytest.raises(PasteCopyError) as excinfo:
        paste(fake_clipboard, workdir, answers())
    assert excinfo.value.source == sources[1]
    assert excinfo.value.destination == str(workdir / "b.txt")
    assert (workdir / "a.txt").exists()
    assert not (workdir / "c.txt").exists()


def test_paste_missing_source_is_fatal(workdir, fake_clipboard, tmp_path, answers):
    fake_clipboard.set_file_list([str(tmp_path / "vanished.txt")])
    with pytest.raises(PasteCopyError):
        paste(fake_clipboard, workdir, answers())


def test_paste_directory_is_copied_recursively(workdir, fake_clipboard, tmp_path, answers):
    tree = tmp_path / "tree"
    (tree / "inner").mkdir(parents=True)
    (tree / "inner" / "leaf.txt").write_text("leaf")
    fake_clipboard.set_file_list([str(tree)])
    paste(fake_clipboard, workdir, answers())
    assert (workdir / "tree" / "inner" / "leaf.txt").read_text() == "leaf"


def test_paste_file_onto_existing_directory_fails(workdir, fake_clipboard, tmp_path, answers):
    src = tmp_path / "report"
    src.write_text("file body")
    (workdir / "report").mkdir()
    later = tmp_path / "later.txt"
    later.write_text("later")
    fake_clipboard.set_file_list([str(src), str(later)])
    ask = answers("y")
    with pytest.raises(PasteCopyError) as excinfo:
        paste(fake_clipboard, workdir, ask)
    assert excinfo.value.source == str(src)
    assert excinfo.value.destination == str(workdir / "report")
    assert (workdir / "report").is_dir()
    assert ask.prompts == [overwrite_prompt("report")]
    assert not (workdir / "report" / "report").exists()
    assert not (workdir / "later.txt").exists()
