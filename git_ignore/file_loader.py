"""
File loader for reading, parsing and discovering ignore files
"""

import os
from pathlib import Path
from typing import Dict, List, Optional, Union
from dataclasses import dataclass, field

from git_ignore.constants import IGNORE_FILENAME, SKIP_DIRECTORY_NAMES
from git_ignore.errors import IgnoreFileReadError
from git_ignore.rule_engine import IgnoreRuleSet, ValidationError
from git_ignore.utils import get_logger

logger = get_logger(__name__)


@dataclass
class IgnoreFileInfo:
    """Information about a loaded ignore file"""
    path: Path
    rule_set: IgnoreRuleSet
    stats: Dict[str, int] = field(default_factory=dict)

    @property
    def root(self) -> Path:
        return self.rule_set.root

    @property
    def patterns(self) -> List[str]:
        return self.rule_set.patterns

    @property
    def errors(self) -> List[ValidationError]:
        return self.rule_set.errors

    @property
    def is_valid(self) -> bool:
        """Check if every pattern line compiled"""
        return len(self.errors) == 0


class IgnoreFileLoader:
    """
    Handles reading ignore files and locating them under a directory tree
    """

    def __init__(self, ignore_filename: str = IGNORE_FILENAME):
        """
        Initialize loader

        Args:
            ignore_filename: Name of ignore files to look for
        """
        self.ignore_filename = ignore_filename

    def read_lines(self, file_path: Union[str, Path]) -> List[str]:
        """
        Read the raw lines of an ignore file

        Args:
            file_path: Path to the ignore file

        Returns:
            Lines without their line terminators

        Raises:
            IgnoreFileReadError: The file is missing or unreadable
        """
        file_path = Path(file_path)
        try:
            with open(file_path, 'r', encoding='utf-8', errors='replace') as f:
                return [line.rstrip('\n\r') for line in f]
        except OSError as e:
            raise IgnoreFileReadError(file_path, e.strerror or str(e)) from e

    def load_file(self, file_path: Union[str, Path],
                  root: Optional[Union[str, Path]] = None) -> IgnoreFileInfo:
        """
        Load an ignore file into a rule set

        Args:
            file_path: Path to the ignore file
            root: Directory the rules are relative to (defaults to the file's directory)

        Returns:
            IgnoreFileInfo with the compiled rule set and line statistics

        Raises:
            IgnoreFileReadError: The file is missing or unreadable
        """
        file_path = Path(file_path)
        lines = self.read_lines(file_path)
        rule_set = IgnoreRuleSet.from_lines(lines, root if root is not None else file_path.parent)

        stats = {
            'total_lines': len(lines),
            'empty_lines': 0,
            'comment_lines': 0,
            'pattern_lines': 0,
        }
        for line in lines:
            stripped = line.strip()
            if not stripped:
                stats['empty_lines'] += 1
            elif stripped.startswith('#'):
                stats['comment_lines'] += 1
            else:
                stats['pattern_lines'] += 1

        logger.debug(
            f"Loaded {file_path}: {len(rule_set)} rules, {len(rule_set.errors)} dropped"
        )
        return IgnoreFileInfo(path=file_path, rule_set=rule_set, stats=stats)

    def find_ignore_files(self, root_path: Union[str, Path]) -> List[Path]:
        """
        Find all ignore files under a root path

        Args:
            root_path: Root directory to search from

        Returns:
            List of paths to ignore files, ordered from root to leaves
        """
        root_path = Path(root_path)
        ignore_files = []

        def on_error(error: OSError):
            logger.warning(f"Cannot scan {error.filename}: {error.strerror}")

        for dirpath, dirnames, filenames in os.walk(root_path, onerror=on_error):
            dirpath = Path(dirpath)

            # Never descend into version control metadata
            dirnames[:] = sorted(d for d in dirnames if d not in SKIP_DIRECTORY_NAMES)

            if self.ignore_filename in filenames:
                ignore_files.append(dirpath / self.ignore_filename)

        # Sort by path depth (root first)
        ignore_files.sort(key=lambda p: (len(p.parts), str(p)))

        return ignore_files
