"""
Error types raised while loading and compiling ignore rules
"""

from pathlib import Path
from typing import Optional


class IgnoreError(Exception):
    """Base class for all ignore rule errors"""


class IgnoreFileReadError(IgnoreError):
    """An ignore file or directory could not be read"""

    def __init__(self, path: Path, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Cannot read {self.path}: {reason}")


class PatternCompileError(IgnoreError):
    """A single ignore rule has invalid glob syntax"""

    def __init__(self, pattern: str, reason: str, position: Optional[int] = None):
        self.pattern = pattern
        self.reason = reason
        self.position = position
        message = f"Invalid pattern '{pattern}': {reason}"
        if position is not None:
            message += f" (at position {position})"
        super().__init__(message)
