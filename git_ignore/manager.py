"""
Main ignore manager API: resolves exclusion across a hierarchy of ignore files
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union
import threading

from git_ignore.cache import IgnoreCache
from git_ignore.constants import IGNORE_FILENAME, DEFAULT_CACHE_SIZE
from git_ignore.errors import IgnoreFileReadError
from git_ignore.file_loader import IgnoreFileInfo, IgnoreFileLoader
from git_ignore.registry import IgnoreFileRegistry
from git_ignore.rule_engine import IgnoreRuleSet, MatchResult, Verdict
from git_ignore.walker import walk_included
from git_ignore.utils import get_logger, log_with_context

logger = get_logger(__name__)


class IgnoreManager:
    """
    Answers exclusion queries for every ignore file under a repository root

    For a queried path, the ignore files from its containing directory up to
    the root are consulted nearest first; the first one with an opinion
    (excluded or explicitly re-included) decides. Rule order matters inside
    one file, never across files.
    """

    def __init__(self,
                 root_path: Union[str, Path],
                 ignore_filename: str = IGNORE_FILENAME,
                 cache_size: int = DEFAULT_CACHE_SIZE,
                 auto_discover: bool = True):
        """
        Initialize the ignore manager

        Args:
            root_path: Repository root directory
            ignore_filename: Name of the ignore files to discover
            cache_size: LRU cache size for path decisions (0 disables caching)
            auto_discover: Discover and load ignore files on init

        Raises:
            IgnoreFileReadError: root_path is not a readable directory
        """
        self.root_path = Path(os.path.abspath(root_path))
        if not self.root_path.is_dir():
            raise IgnoreFileReadError(self.root_path, "not a directory")

        self.ignore_filename = ignore_filename

        self._file_loader = IgnoreFileLoader(ignore_filename)
        self._registry = IgnoreFileRegistry()
        self._cache = IgnoreCache(cache_size)

        # Guards discovery against concurrent queries
        self._lock = threading.RLock()

        if auto_discover:
            self._load_ignore_files()

    def is_ignored(self, path: Union[str, Path], is_directory: Optional[bool] = None) -> bool:
        """
        Check if a path is excluded

        Args:
            path: Path to check (relative to the root, or absolute)
            is_directory: Whether the path is a directory; looked up on disk when None

        Returns:
            True if the nearest deciding ignore file excludes the path
        """
        return self.match_path(path, is_directory).should_ignore

    def match_path(self, path: Union[str, Path],
                   is_directory: Optional[bool] = None) -> MatchResult:
        """
        Resolve a path against the hierarchy, reporting the deciding rule

        Args:
            path: Path to check (relative to the root, or absolute)
            is_directory: Whether the path is a directory; looked up on disk when None

        Returns:
            MatchResult from the nearest ignore file with a definite verdict,
            or an UNDEFINED result when no file has an opinion
        """
        abs_path = self._absolute(path)
        if is_directory is None:
            is_directory = abs_path.is_dir()

        cached = self._cache.get_decision(abs_path, is_directory)
        if cached is not None:
            return cached

        with self._lock:
            result = MatchResult(verdict=Verdict.UNDEFINED)
            for directory in self._rule_directories(abs_path.parent):
                rule_set = self._registry.get_rule_set(directory)
                if rule_set is None:
                    continue
                candidate = rule_set.match(abs_path, is_directory)
                if candidate.verdict.is_definite:
                    result = candidate
                    break

            self._cache.cache_decision(abs_path, is_directory, result)

        logger.debug(
            f"Ignore check for {abs_path}: {result.verdict.value} "
            f"(rule: {result.rule} from {result.root})"
        )
        return result

    def included_paths(self) -> List[Path]:
        """
        List every path under the root that is not ignored

        Returns:
            A fresh list on every call; `.git` entries are never included
        """
        return walk_included(self.root_path, self.is_ignored)

    def load_lines(self, directory: Union[str, Path], lines: Iterable[str]) -> IgnoreRuleSet:
        """
        Register rules for a directory from an in-memory line source

        Args:
            directory: Directory the rules apply to (relative to the root, or absolute)
            lines: Raw ignore file lines

        Returns:
            The registered rule set
        """
        rule_set = IgnoreRuleSet.from_lines(lines, self._absolute(directory))
        with self._lock:
            self._registry.register_rule_set(rule_set)
            self._cache.clear()
        return rule_set

    def reload_all(self):
        """Discard every rule set and rediscover ignore files"""
        with self._lock:
            logger.info("Reloading all ignore files")
            self._load_ignore_files()

    def get_rule_set(self, directory: Union[str, Path]) -> Optional[IgnoreRuleSet]:
        return self._registry.get_rule_set(self._absolute(directory))

    def get_rule_sets(self) -> List[IgnoreRuleSet]:
        """Every registered rule set, root first"""
        return [
            rule_set for rule_set in
            (self._registry.get_rule_set(d) for d in self._registry.get_directories())
            if rule_set is not None
        ]

    def get_file_info(self, directory: Union[str, Path]) -> Optional[IgnoreFileInfo]:
        """Loaded file behind a directory's rules; None for in-memory rules"""
        return self._registry.get_file_info(self._absolute(directory))

    def get_ignore_files(self) -> List[Path]:
        """
        Get list of all loaded ignore files

        Returns:
            List of paths to ignore files, root first
        """
        return self._registry.get_all_files()

    def get_stats(self) -> Dict[str, Any]:
        """
        Get comprehensive statistics

        Returns:
            Dictionary with various statistics
        """
        return {
            'root_path': str(self.root_path),
            'ignore_filename': self.ignore_filename,
            'registry': self._registry.get_stats(),
            'cache': self._cache.get_stats(),
        }

    def _absolute(self, path: Union[str, Path]) -> Path:
        path = Path(path)
        if not path.is_absolute():
            path = self.root_path / path
        return Path(os.path.normpath(path))

    def _rule_directories(self, directory: Path) -> List[Path]:
        cached = self._cache.get_rule_directories(directory)
        if cached is not None:
            return cached
        found = self._registry.rule_directories_for(directory, self.root_path)
        self._cache.cache_rule_directories(directory, found)
        return found

    def _load_ignore_files(self):
        """Load all ignore files under root path"""
        logger.info(f"Discovering ignore files under: {self.root_path}")

        self._registry.clear()
        self._cache.clear()

        ignore_files = self._file_loader.find_ignore_files(self.root_path)
        logger.info(f"Found {len(ignore_files)} ignore files")

        for file_path in ignore_files:
            try:
                file_info = self._file_loader.load_file(file_path)
            except IgnoreFileReadError as e:
                # Unreadable files are dropped from the hierarchy
                logger.warning(f"Skipping ignore file: {e}")
                continue
            self._registry.register_file(file_info)

        stats = self._registry.get_stats()
        log_with_context(
            logger, logging.INFO,
            f"Loaded {stats['total_files']} ignore files with "
            f"{stats['total_rules']} rules ({stats['dropped_lines']} lines dropped)",
            root=str(self.root_path),
            files=stats['total_files'],
            rules=stats['total_rules'],
            dropped_lines=stats['dropped_lines'],
        )
