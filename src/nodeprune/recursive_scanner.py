"""Recursive discovery of node_modules directories.

Walks a tree with os.scandir and reports every directory whose name matches
the target pattern, without descending into the matches themselves.
"""

import logging
import os
from pathlib import Path
from typing import Generator

from nodeprune.scanner import RootAccessError

log = logging.getLogger(__name__)

TARGET_NAME = "node_modules"


def _sorted_subdirectories(directory: str) -> list[os.DirEntry]:
    with os.scandir(directory) as entries:
        subdirs = []
        for entry in entries:
            try:
                # Symlinked directories are not followed
                if entry.is_dir(follow_symlinks=False):
                    subdirs.append(entry)
            except OSError as e:
                log.debug("Skipping %s: %s", entry.path, e)
        return sorted(subdirs, key=lambda e: e.name)


def find_matching_directories(
    root: Path,
    pattern: str = TARGET_NAME,
) -> Generator[Path, None, None]:
    """
    Find directories named `pattern` anywhere under root.

    Entries are visited depth-first in name order, so the discovery order is
    stable across runs. Matches are yielded but never descended into, so a
    node_modules nested inside another one is not reported.

    Args:
        root: Root directory to start searching from
        pattern: Directory name to match exactly

    Yields:
        Absolute paths to matching directories

    Raises:
        RootAccessError: if root itself cannot be listed
    """
    root = Path(root).absolute()
    if root.name == pattern:
        yield root
        return

    try:
        top = _sorted_subdirectories(str(root))
    except OSError as e:
        raise RootAccessError(f"Error scanning directory: {e}") from e

    stack = list(reversed(top))
    while stack:
        entry = stack.pop()
        if entry.name == pattern:
            yield Path(entry.path)
            continue

        try:
            children = _sorted_subdirectories(entry.path)
        except OSError as e:
            # Skip directories we can't access
            log.debug("Cannot list %s: %s", entry.path, e)
            continue
        stack.extend(reversed(children))


def find_node_modules(root: Path) -> list[Path]:
    """Materialize every top-level node_modules directory under root."""
    found = list(find_matching_directories(root, TARGET_NAME))
    log.info("Found %d %s directories under %s", len(found), TARGET_NAME, root)
    return found
