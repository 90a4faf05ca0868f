"""Directory sizing and the parallel scan pipeline for nodeprune."""

import logging
import os
from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import datetime
from pathlib import Path
from typing import Callable, Sequence

from nodeprune.models import ScanResult

log = logging.getLogger(__name__)

# Progress is only reported for batches larger than this
PROGRESS_THRESHOLD = 10
# Report every Nth completion (and the last one)
PROGRESS_EVERY = 10


class NodePruneError(Exception):
    """Base class for nodeprune errors."""


class RootPathError(NodePruneError):
    """The scan root cannot be resolved or is not a directory."""


class RootAccessError(NodePruneError):
    """The scan root exists but cannot be traversed."""


def default_workers() -> int:
    """Worker pool size: one thread per available CPU."""
    return os.cpu_count() or 1


def expand_path(path: str) -> Path:
    """Expand ~ and environment variables in path."""
    return Path(os.path.expanduser(os.path.expandvars(path)))


def resolve_root(root: str | Path) -> Path:
    """
    Resolve the scan root to an absolute, existing directory.

    Raises:
        RootPathError: if the path cannot be made absolute, does not exist,
            or is not a directory
    """
    try:
        path = Path(os.path.abspath(expand_path(str(root))))
    except OSError as e:
        raise RootPathError(f"Error resolving path: {e}") from e

    try:
        path.stat()
    except OSError as e:
        raise RootPathError(f"Error accessing directory: {e}") from e

    if not path.is_dir():
        raise RootPathError(f"{path} is not a directory")
    log.debug("Resolved root %s", path)
    return path


def measure_directory(path: Path, read_order: int = 0) -> ScanResult:
    """
    Walk a directory once and measure it.

    Symlinks are never followed. Entries that cannot be stat-ed are left
    out of every count. If the directory itself cannot be stat-ed the
    result is zero-valued.

    Args:
        path: Directory to measure
        read_order: Submission position to record on the result

    Returns:
        ScanResult with sizes, counts and the directory's own mtime
    """
    total_size = 0
    file_count = 0
    dir_count = 0
    modified_at = None

    try:
        st = os.stat(path, follow_symlinks=False)
    except OSError as e:
        log.debug("Cannot stat %s: %s", path, e)
        return ScanResult(path=str(path), read_order=read_order)

    dir_count = 1
    modified_at = datetime.fromtimestamp(st.st_mtime).astimezone()

    stack = [str(path)]
    while stack:
        current = stack.pop()
        try:
            with os.scandir(current) as entries:
                for entry in entries:
                    try:
                        if entry.is_dir(follow_symlinks=False):
                            dir_count += 1
                            stack.append(entry.path)
                        elif entry.is_file(follow_symlinks=False):
                            total_size += entry.stat(follow_symlinks=False).st_size
                            file_count += 1
                    except OSError as e:
                        log.debug("Skipping %s: %s", entry.path, e)
                        continue
        except OSError as e:
            log.debug("Cannot list %s: %s", current, e)
            continue

    return ScanResult(
        path=str(path),
        size_bytes=total_size,
        file_count=file_count,
        dir_count=dir_count,
        read_order=read_order,
        modified_at=modified_at,
    )


def scan_directories(
    paths: Sequence[Path],
    progress_callback: Callable[[int, int], None] | None = None,
    max_workers: int | None = None,
) -> list[ScanResult]:
    """
    Measure many directories in parallel.

    Each path is submitted with read_order = index + 1. Results come back in
    completion order; sort them if order matters.

    Args:
        paths: Directories to measure
        progress_callback: Optional callback(done, total), called every
            PROGRESS_EVERY completions and at the end, for batches larger
            than PROGRESS_THRESHOLD
        max_workers: Pool size (defaults to the CPU count)

    Returns:
        One ScanResult per path
    """
    total = len(paths)
    if total == 0:
        return []

    report = progress_callback if total > PROGRESS_THRESHOLD else None
    results: list[ScanResult] = []

    with ThreadPoolExecutor(max_workers=max_workers or default_workers()) as executor:
        future_to_job = {
            executor.submit(measure_directory, Path(path), index + 1): (Path(path), index + 1)
            for index, path in enumerate(paths)
        }

        for done, future in enumerate(as_completed(future_to_job), start=1):
            path, read_order = future_to_job[future]
            try:
                results.append(future.result())
            except Exception as e:
                log.warning("Failed to measure %s: %s", path, e)
                results.append(ScanResult(path=str(path), read_order=read_order))

            if report and (done % PROGRESS_EVERY == 0 or done == total):
                report(done, total)

    return results
