"""
Tree walker listing every path not excluded by ignore rules
"""

import os
from pathlib import Path
from typing import Callable, Iterable, List, Union

from git_ignore.constants import SKIP_DIRECTORY_NAMES
from git_ignore.utils import get_logger

logger = get_logger(__name__)

IsIgnored = Callable[[Path, bool], bool]


def walk_included(root: Union[str, Path],
                  is_ignored: IsIgnored,
                  skip_names: Iterable[str] = SKIP_DIRECTORY_NAMES) -> List[Path]:
    """
    Enumerate files and directories under ``root`` that are not ignored

    Traversal uses an explicit stack and never enters an ignored directory.
    Unreadable directories are logged and skipped, so the result may be
    partial. Symlinks are reported but not followed.

    Args:
        root: Directory to walk
        is_ignored: Callback taking (path, is_directory)
        skip_names: Entry names never reported or entered

    Returns:
        Included paths; entries of one directory appear in name order
    """
    skip_names = frozenset(skip_names)
    included = []
    pending = [Path(root)]

    while pending:
        directory = pending.pop()
        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda entry: entry.name)
        except OSError as e:
            logger.warning(f"Skipping unreadable directory {directory}: {e.strerror or e}")
            continue

        subdirectories = []
        for entry in entries:
            if entry.name in skip_names:
                continue
            path = Path(entry.path)
            try:
                is_directory = entry.is_dir(follow_symlinks=False)
            except OSError as e:
                logger.warning(f"Skipping unreadable entry {path}: {e.strerror or e}")
                continue

            if is_ignored(path, is_directory):
                logger.trace(f"Ignored: {path}")
                continue

            included.append(path)
            if is_directory:
                subdirectories.append(path)

        # Reversed so the first subdirectory is walked first
        pending.extend(reversed(subdirectories))

    return included
