#!/usr/bin/env python3
"""
Tests for the git-ignore command line
"""

from pathlib import Path
import logging
import sys

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from git_ignore.cli import build_parser, main


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


@pytest.fixture
def repo(tmp_path):
    (tmp_path / ".gitignore").write_text("build/\n*.tmp\n!keep.tmp\n[bad\n")
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / ".gitignore").write_text("!notes.tmp\n")
    (tmp_path / "build").mkdir()
    (tmp_path / "keep.tmp").write_text("")
    (tmp_path / "main.txt").write_text("")
    return tmp_path


def test_check_reports_each_path(repo, capsys):
    code = main(["check", "--root", str(repo), "build", "a.tmp", "keep.tmp", "main.txt"])

    assert code == 0
    assert capsys.readouterr().out.splitlines() == [
        "File: build, Excluded: true",
        "File: a.tmp, Excluded: true",
        "File: keep.tmp, Excluded: false",
        "File: main.txt, Excluded: false",
    ]


def test_check_uses_nested_files(repo, capsys):
    main(["check", "--root", str(repo), "sub/notes.tmp"])
    assert capsys.readouterr().out.strip() == "File: sub/notes.tmp, Excluded: false"


def test_check_single_file_ignores_nested_files(repo, capsys):
    main(["check", "--root", str(repo), "--single", "sub/notes.tmp"])
    assert capsys.readouterr().out.strip() == "File: sub/notes.tmp, Excluded: true"


def test_check_verbose_shows_deciding_rule(repo, capsys):
    main(["check", "--root", str(repo), "-v", "keep.tmp", "main.txt"])

    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == f"File: keep.tmp, Excluded: false (included by '!keep.tmp' in {repo})"
    assert lines[1] == "File: main.txt, Excluded: false"


def test_tree_lists_included_paths(repo, capsys):
    code = main(["tree", "--root", str(repo)])

    assert code == 0
    listed = {Path(line).relative_to(repo).as_posix() for line in capsys.readouterr().out.splitlines()}
    assert listed == {".gitignore", "keep.tmp", "main.txt", "sub", "sub/.gitignore"}


def test_rules_lists_files_rules_and_dropped_lines(repo, capsys):
    main(["rules", "--root", str(repo)])

    out = capsys.readouterr().out
    assert f"{repo}/.gitignore  (4 patterns, 0 comments, 0 blank; 1 invalid)" in out
    assert f"{repo / 'sub'}/.gitignore  (1 patterns, 0 comments, 0 blank; ok)" in out
    assert "  build/  [dir]" in out
    assert "  !keep.tmp  [negated]" in out
    assert "! line 4: [bad" in out


def test_missing_root_is_an_error(tmp_path, capsys):
    code = main(["check", "--root", str(tmp_path / "missing"), "a"])

    assert code == 1
    assert capsys.readouterr().err.startswith("Error: Cannot read")


def test_single_without_ignore_file_is_an_error(tmp_path, capsys):
    code = main(["tree", "--root", str(tmp_path), "--single"])

    assert code == 1
    assert "Error:" in capsys.readouterr().err


def test_command_is_required():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_rules_single_file_only(repo, capsys):
    main(["rules", "--root", str(repo), "--single"])

    out = capsys.readouterr().out
    assert f"{repo}/.gitignore  (4 patterns" in out
    assert f"{repo / 'sub'}" not in out
