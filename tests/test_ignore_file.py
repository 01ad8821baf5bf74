#!/usr/bin/env python3
"""
Tests for matching against a single ignore file
"""

from pathlib import Path
import sys

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from git_ignore.errors import IgnoreFileReadError
from git_ignore.ignore_file import IgnoreFile
from git_ignore.manager import IgnoreManager
from git_ignore.rule_engine import Verdict


def test_load_from_path(tmp_path):
    (tmp_path / ".gitignore").write_text("# comment\n*.tmp\n!keep.tmp\nbuild/\n")
    ignore_file = IgnoreFile(tmp_path / ".gitignore")

    assert ignore_file.root == tmp_path
    assert ignore_file.patterns == ["*.tmp", "!keep.tmp", "build/"]
    assert ignore_file.is_excluded("notes.tmp", False)
    assert not ignore_file.is_excluded("keep.tmp", False)
    assert ignore_file.is_excluded("build", True)
    assert ignore_file.verdict("src/main.py", False) is Verdict.UNDEFINED


def test_load_from_str_path(tmp_path):
    (tmp_path / ".gitignore").write_text("*.tmp\n")
    ignore_file = IgnoreFile(str(tmp_path / ".gitignore"))

    assert ignore_file.is_excluded("a/b.tmp", False)


def test_lines_require_root():
    with pytest.raises(ValueError):
        IgnoreFile(["*.tmp"])


def test_load_from_lines():
    ignore_file = IgnoreFile(["*.log", "!keep.log"], root="/repo")

    assert ignore_file.path is None
    assert ignore_file.is_excluded("/repo/debug.log", False)
    assert not ignore_file.is_excluded("keep.log", False)
    result = ignore_file.match("keep.log", False)
    assert result.verdict is Verdict.INCLUDED
    assert result.rule.source == "!keep.log"


def test_nested_files_are_not_consulted(tmp_path):
    (tmp_path / ".gitignore").write_text("*.no\n")
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / ".gitignore").write_text("!keep.no\n")

    ignore_file = IgnoreFile(tmp_path / ".gitignore")

    assert ignore_file.is_excluded("sub/keep.no", False)


def test_explicit_root_overrides_file_directory(tmp_path):
    (tmp_path / "rules").mkdir()
    (tmp_path / "rules" / "ignore").write_text("/out\n")

    ignore_file = IgnoreFile(tmp_path / "rules" / "ignore", root=tmp_path)

    assert ignore_file.is_excluded("out", True)
    assert not ignore_file.is_excluded("rules/out", True)


def test_directory_flag_defaults_to_filesystem(tmp_path):
    (tmp_path / ".gitignore").write_text("cache/\n")
    (tmp_path / "cache").mkdir()
    (tmp_path / "data").mkdir()
    (tmp_path / "data" / "cache").write_text("")

    ignore_file = IgnoreFile(tmp_path / ".gitignore")

    assert ignore_file.is_excluded("cache")
    assert not ignore_file.is_excluded("data/cache")


def test_missing_file_raises(tmp_path):
    with pytest.raises(IgnoreFileReadError) as excinfo:
        IgnoreFile(tmp_path / ".gitignore")
    assert excinfo.value.path == tmp_path / ".gitignore"


def test_invalid_lines_are_reported(tmp_path):
    (tmp_path / ".gitignore").write_text("*.tmp\n[oops\n")
    ignore_file = IgnoreFile(tmp_path / ".gitignore")

    assert ignore_file.patterns == ["*.tmp"]
    assert [e.line for e in ignore_file.rule_set.errors] == [2]


def test_included_files(tmp_path):
    (tmp_path / ".gitignore").write_text("*.tmp\nbuild/\n")
    (tmp_path / "build").mkdir()
    (tmp_path / "build" / "out.o").write_text("")
    (tmp_path / "a.tmp").write_text("")
    (tmp_path / "main.py").write_text("")

    ignore_file = IgnoreFile(tmp_path / ".gitignore")

    assert ignore_file.included_files() == [tmp_path / ".gitignore", tmp_path / "main.py"]


def test_dot_dot_segments_agree_with_hierarchy(tmp_path):
    (tmp_path / ".gitignore").write_text("/notes.tmp\n")
    ignore_file = IgnoreFile(tmp_path / ".gitignore")

    assert ignore_file.is_excluded("sub/../notes.tmp", False)
    assert ignore_file.verdict("sub/../notes.tmp", False) is Verdict.EXCLUDED
    assert ignore_file.is_excluded("sub/../notes.tmp", False) == \
        IgnoreManager(tmp_path).is_ignored("sub/../notes.tmp", False)


def test_file_info_reports_line_statistics(tmp_path):
    (tmp_path / ".gitignore").write_text("# comment\n\n*.tmp\n[oops\n")
    ignore_file = IgnoreFile(tmp_path / ".gitignore")

    assert ignore_file.file_info.stats == {
        'total_lines': 4, 'empty_lines': 1, 'comment_lines': 1, 'pattern_lines': 2,
    }
    assert not ignore_file.file_info.is_valid
    assert IgnoreFile(["*.tmp"], root=tmp_path).file_info is None
