"""
Single ignore file: match paths against the rules of one file only
"""

import os
from pathlib import Path, PurePath
from typing import Iterable, List, Optional, Union

from git_ignore.file_loader import IgnoreFileInfo, IgnoreFileLoader
from git_ignore.rule_engine import IgnoreRuleSet, MatchResult, Verdict
from git_ignore.walker import walk_included

LineSource = Union[str, PurePath, Iterable[str]]


class IgnoreFile:
    """
    Rules loaded from one ignore file, without any hierarchy

    ``source`` is either the path of an ignore file or an iterable of raw
    lines. Rules are relative to ``root``, which defaults to the file's
    directory and must be given for line sources.
    """

    def __init__(self, source: LineSource,
                 root: Optional[Union[str, Path]] = None,
                 loader: Optional[IgnoreFileLoader] = None):
        if isinstance(source, (str, PurePath)):
            self.path: Optional[Path] = Path(os.path.abspath(source))
            root = Path(os.path.abspath(root)) if root is not None else self.path.parent
            loader = loader or IgnoreFileLoader(self.path.name)
            self.file_info: Optional[IgnoreFileInfo] = loader.load_file(self.path, root)
            self.rule_set = self.file_info.rule_set
        else:
            if root is None:
                raise ValueError("root is required when rules are given as lines")
            self.path = None
            self.file_info = None
            self.rule_set = IgnoreRuleSet.from_lines(source, os.path.abspath(root))

    @property
    def root(self) -> Path:
        return self.rule_set.root

    def is_excluded(self, path: Union[str, Path], is_directory: Optional[bool] = None) -> bool:
        """
        Check a path against this file's rules

        Args:
            path: Path to check (relative to the root, or absolute)
            is_directory: Whether the path is a directory; looked up on disk when None

        Returns:
            True if the rules exclude the path
        """
        abs_path = self.rule_set.absolute(path)
        if is_directory is None:
            is_directory = abs_path.is_dir()
        return self.rule_set.evaluate(abs_path, is_directory)

    def match(self, path: Union[str, Path], is_directory: Optional[bool] = None) -> MatchResult:
        abs_path = self.rule_set.absolute(path)
        if is_directory is None:
            is_directory = abs_path.is_dir()
        return self.rule_set.match(abs_path, is_directory)

    def verdict(self, path: Union[str, Path], is_directory: Optional[bool] = None) -> Verdict:
        return self.match(path, is_directory).verdict

    def included_files(self) -> List[Path]:
        """List every path under the root not excluded by this file"""
        return walk_included(self.root, self.is_excluded)

    @property
    def patterns(self) -> List[str]:
        return self.rule_set.patterns
