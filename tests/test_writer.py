"""Tests for atomic artifact writing."""

import stat

import pytest

from pipeline.errors import WriteFailure
from pipeline.writer import write_artifacts
from state.schemas import OutputFile


def _mode(path):
    return stat.S_IMODE(path.stat().st_mode)


def test_writes_exact_content(tmp_path):
    out = tmp_path / "security"
    written = write_artifacts(out, [
        OutputFile(path="a.md", content="# A\n\nbody"),
        OutputFile(path="b.js", content=""),
    ])

    assert written == [(out / "a.md").resolve(), (out / "b.js").resolve()]
    assert (out / "a.md").read_text(encoding="utf-8") == "# A\n\nbody"
    assert (out / "b.js").read_text(encoding="utf-8") == ""


def test_overwrites_existing_file(tmp_path):
    (tmp_path / "a.md").write_text("old content that is longer", encoding="utf-8")
    write_artifacts(tmp_path, [OutputFile(path="a.md", content="new")])
    assert (tmp_path / "a.md").read_text(encoding="utf-8") == "new"


def test_creates_nested_directories(tmp_path):
    write_artifacts(tmp_path / "testing", [OutputFile(path="__tests__/generated.test.js", content="it()")])
    assert (tmp_path / "testing" / "__tests__" / "generated.test.js").read_text(encoding="utf-8") == "it()"


def test_no_temporary_files_left_behind(tmp_path):
    write_artifacts(tmp_path, [OutputFile(path="a.md", content="x"), OutputFile(path="b.md", content="y")])
    assert sorted(p.name for p in tmp_path.iterdir()) == ["a.md", "b.md"]


def test_file_modes(tmp_path):
    write_artifacts(tmp_path, [
        OutputFile(path="deploy.sh", content="#!/usr/bin/env bash\n", executable=True),
        OutputFile(path="notes.md", content="notes"),
    ])
    assert _mode(tmp_path / "deploy.sh") == 0o755
    assert _mode(tmp_path / "notes.md") == 0o644


@pytest.mark.parametrize("path", ["../escape.md", "nested/../../escape.md", ""])
def test_paths_outside_output_dir_are_rejected(tmp_path, path):
    with pytest.raises(WriteFailure):
        write_artifacts(tmp_path / "out", [OutputFile(path=path, content="x")])
    assert not (tmp_path / "escape.md").exists()


def test_absolute_path_rejected(tmp_path):
    with pytest.raises(WriteFailure):
        write_artifacts(tmp_path, [OutputFile(path=str(tmp_path / "abs.md"), content="x")])


def test_write_failure_surfaces_and_keeps_previous_files(tmp_path):
    # A directory where a file should go cannot be replaced
    (tmp_path / "blocked.md").mkdir()

    with pytest.raises(WriteFailure) as exc_info:
        write_artifacts(tmp_path, [
            OutputFile(path="first.md", content="ok"),
            OutputFile(path="blocked.md", content="never written"),
            OutputFile(path="third.md", content="skipped"),
        ])

    assert exc_info.value.path.endswith("blocked.md")
    assert (tmp_path / "first.md").read_text(encoding="utf-8") == "ok"
    assert (tmp_path / "blocked.md").is_dir()
    assert not (tmp_path / "third.md").exists()
    assert sorted(p.name for p in tmp_path.iterdir()) == ["blocked.md", "first.md"]


def test_unusable_output_dir(tmp_path):
    (tmp_path / "file").write_text("not a directory", encoding="utf-8")
    with pytest.raises(WriteFailure):
        write_artifacts(tmp_path / "file" / "out", [OutputFile(path="a.md", content="x")])


def test_unencodable_content_raises_write_failure(tmp_path):
    with pytest.raises(WriteFailure):
        write_artifacts(tmp_path, [OutputFile(path="a.md", content="bad \ud800")])
    assert list(tmp_path.iterdir()) == []
