"""
Caching for ignore decisions and per-directory rule lookups
"""

from collections import OrderedDict
from pathlib import Path
from typing import Dict, List, Optional, Tuple
import threading

from git_ignore.constants import DEFAULT_CACHE_SIZE
from git_ignore.rule_engine import MatchResult

DecisionKey = Tuple[str, bool]


class IgnoreCache:
    """
    Memoizes hierarchy lookups; results are identical with or without it

    Two least-recently-used maps share one lock: decisions keyed on
    ``(absolute path, is_directory)``, and for each containing directory the
    nearest-first list of directories holding rules.
    """

    def __init__(self, max_size: int = DEFAULT_CACHE_SIZE):
        """
        Initialize cache

        Args:
            max_size: Maximum number of decisions kept (0 disables caching)
        """
        self.max_size = max_size
        # Smaller map for directory -> applicable rule directories
        self.max_dir_size = max_size // 10

        self._decisions: "OrderedDict[DecisionKey, MatchResult]" = OrderedDict()
        self._rule_dirs: "OrderedDict[str, List[Path]]" = OrderedDict()
        self._counters = {'decisions': [0, 0], 'rule_dirs': [0, 0]}  # hits, misses
        self._lock = threading.Lock()

    def get_decision(self, path: Path, is_directory: bool) -> Optional[MatchResult]:
        return self._lookup(self._decisions, 'decisions', (str(path), is_directory))

    def cache_decision(self, path: Path, is_directory: bool, result: MatchResult):
        self._store(self._decisions, self.max_size, (str(path), is_directory), result)

    def get_rule_directories(self, directory: Path) -> Optional[List[Path]]:
        """
        Get cached rule directories applying to entries of ``directory``

        Returns:
            Nearest-first list, or None if not cached
        """
        return self._lookup(self._rule_dirs, 'rule_dirs', str(directory))

    def cache_rule_directories(self, directory: Path, rule_directories: List[Path]):
        self._store(self._rule_dirs, self.max_dir_size, str(directory), list(rule_directories))

    def clear(self):
        """Forget every entry and reset hit counters"""
        with self._lock:
            self._decisions.clear()
            self._rule_dirs.clear()
            for counts in self._counters.values():
                counts[:] = [0, 0]

    def get_stats(self) -> Dict[str, Dict[str, float]]:
        with self._lock:
            return {
                'path_cache': self._stats(self._decisions, self.max_size, 'decisions'),
                'dir_cache': self._stats(self._rule_dirs, self.max_dir_size, 'rule_dirs'),
            }

    def _lookup(self, entries: OrderedDict, counter: str, key):
        with self._lock:
            counts = self._counters[counter]
            if key in entries:
                entries.move_to_end(key)
                counts[0] += 1
                return entries[key]
            counts[1] += 1
            return None

    def _store(self, entries: OrderedDict, max_size: int, key, value):
        if max_size <= 0:
            return
        with self._lock:
            entries[key] = value
            entries.move_to_end(key)
            if len(entries) > max_size:
                entries.popitem(last=False)

    def _stats(self, entries: OrderedDict, max_size: int, counter: str) -> Dict[str, float]:
        hits, misses = self._counters[counter]
        total = hits + misses
        return {
            'size': len(entries),
            'max_size': max_size,
            'hits': hits,
            'misses': misses,
            'hit_rate': (hits / total * 100) if total > 0 else 0,
        }
