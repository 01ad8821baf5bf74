"""
Registry mapping directories to the rule sets of their ignore files
"""

from pathlib import Path
from typing import Dict, List, Optional
import threading

from git_ignore.file_loader import IgnoreFileInfo
from git_ignore.rule_engine import IgnoreRuleSet
from git_ignore.utils import get_logger

logger = get_logger(__name__)


class IgnoreFileRegistry:
    """
    Tracks one rule set per directory for constant-time ancestor lookup
    """

    def __init__(self):
        """Initialize registry"""
        self._rule_sets: Dict[Path, IgnoreRuleSet] = {}
        self._files: Dict[Path, IgnoreFileInfo] = {}  # directory -> loaded file
        self._lock = threading.Lock()

    def register_file(self, file_info: IgnoreFileInfo):
        """
        Register a loaded ignore file under its rule set's root

        Args:
            file_info: Information about the ignore file
        """
        with self._lock:
            directory = file_info.root
            self._rule_sets[directory] = file_info.rule_set
            self._files[directory] = file_info
            logger.debug(f"Registered ignore file: {file_info.path}")

    def register_rule_set(self, rule_set: IgnoreRuleSet):
        """
        Register a rule set that was not read from disk

        Args:
            rule_set: Rule set keyed by its root directory
        """
        with self._lock:
            self._rule_sets[rule_set.root] = rule_set
            self._files.pop(rule_set.root, None)
            logger.debug(f"Registered in-memory rules for: {rule_set.root}")

    def get_rule_set(self, directory: Path) -> Optional[IgnoreRuleSet]:
        with self._lock:
            return self._rule_sets.get(directory)

    def get_file_info(self, directory: Path) -> Optional[IgnoreFileInfo]:
        with self._lock:
            return self._files.get(directory)

    def rule_directories_for(self, directory: Path, root_path: Path) -> List[Path]:
        """
        Directories holding rules that apply to entries of ``directory``

        Args:
            directory: The containing directory of a queried path
            root_path: Root of the repository; nothing above it applies

        Returns:
            Directories from ``directory`` up to ``root_path``, nearest first
        """
        with self._lock:
            found = []
            for ancestor in (directory, *directory.parents):
                try:
                    ancestor.relative_to(root_path)
                except ValueError:
                    break
                if ancestor in self._rule_sets:
                    found.append(ancestor)
            return found

    def get_all_files(self) -> List[Path]:
        """
        Get all registered ignore files

        Returns:
            Ignore file paths ordered from root to leaves
        """
        with self._lock:
            files = [info.path for info in self._files.values()]
        return sorted(files, key=lambda p: (len(p.parts), str(p)))

    def get_directories(self) -> List[Path]:
        with self._lock:
            return sorted(self._rule_sets, key=lambda p: (len(p.parts), str(p)))

    def get_stats(self) -> Dict[str, int]:
        """
        Get registry statistics

        Returns:
            Dictionary with registry stats
        """
        with self._lock:
            return {
                'total_files': len(self._files),
                'directories_with_rules': len(self._rule_sets),
                'total_rules': sum(len(rs) for rs in self._rule_sets.values()),
                'dropped_lines': sum(len(rs.errors) for rs in self._rule_sets.values()),
            }

    def clear(self):
        """Clear the registry"""
        with self._lock:
            self._rule_sets.clear()
            self._files.clear()
