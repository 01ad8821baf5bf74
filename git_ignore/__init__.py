"""
Gitignore-style exclusion rules without a dependency on git

This package provides:
- Compilation of ignore file lines into anchored, negated and directory-only rules
- Evaluation of paths against the rules of one ignore file
- Nearest-file-wins resolution across every ignore file under a repository root
- Enumeration of the paths that are not ignored
"""

from .constants import IGNORE_FILENAME
from .errors import IgnoreError, IgnoreFileReadError, PatternCompileError
from .rule_compiler import IgnoreRule, ParsedLine, compile_rule, parse_line
from .rule_engine import IgnoreRuleSet, MatchResult, ValidationError, Verdict
from .file_loader import IgnoreFileLoader, IgnoreFileInfo
from .ignore_file import IgnoreFile
from .registry import IgnoreFileRegistry
from .cache import IgnoreCache
from .manager import IgnoreManager
from .walker import walk_included

__version__ = "0.3.0"

__all__ = [
    'IGNORE_FILENAME',
    'IgnoreError',
    'IgnoreFileReadError',
    'PatternCompileError',
    'IgnoreRule',
    'ParsedLine',
    'compile_rule',
    'parse_line',
    'IgnoreRuleSet',
    'MatchResult',
    'ValidationError',
    'Verdict',
    'IgnoreFileLoader',
    'IgnoreFileInfo',
    'IgnoreFile',
    'IgnoreFileRegistry',
    'IgnoreCache',
    'IgnoreManager',
    'walk_included',
]
