"""Parallel deletion of scanned directories for nodeprune."""

import logging
import os
import shutil
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Callable

from nodeprune.models import CleanupResult, DeletionSummary, ScanResult
from nodeprune.scanner import default_workers

log = logging.getLogger(__name__)


def delete_directory(path: Path, dry_run: bool = False) -> CleanupResult:
    """
    Delete a directory tree.

    Removal is idempotent: a path that is already gone counts as deleted.
    In dry-run mode the filesystem is not touched at all.

    Args:
        path: Directory to delete
        dry_run: If True, don't actually delete

    Returns:
        CleanupResult describing the outcome
    """
    if dry_run:
        return CleanupResult(path=str(path), success=True, dry_run=True)

    try:
        if os.path.isdir(path) and not os.path.islink(path):
            shutil.rmtree(path)
        elif os.path.lexists(path):
            os.unlink(path)
    except FileNotFoundError:
        pass
    except PermissionError as e:
        return CleanupResult(path=str(path), success=False, error=f"Permission denied: {e}")
    except OSError as e:
        return CleanupResult(path=str(path), success=False, error=f"OS error: {e}")

    return CleanupResult(path=str(path), success=True)


class _Tally:
    """Deleted/failed counters shared by the worker threads."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.deleted = 0
        self.failed = 0

    def record(self, result: CleanupResult) -> None:
        with self._lock:
            if result.success:
                self.deleted += 1
            else:
                self.failed += 1


def delete_all(
    results: list[ScanResult],
    dry_run: bool = False,
    progress_callback: Callable[[CleanupResult], None] | None = None,
    max_workers: int | None = None,
) -> DeletionSummary:
    """
    Delete every directory in results in parallel.

    A failure on one path is recorded and the remaining paths are still
    processed, so deleted + failed always equals len(results). The progress
    callback runs on the calling thread; an error it raises is logged and
    does not affect the counters.

    Args:
        results: Directories to delete
        dry_run: If True, only report what would be deleted
        progress_callback: Optional callback(result), invoked as each path
            finishes
        max_workers: Pool size (defaults to the CPU count)

    Returns:
        DeletionSummary with the final counters
    """
    tally = _Tally()

    def _work(item: ScanResult) -> CleanupResult:
        try:
            outcome = delete_directory(Path(item.path), dry_run)
        except Exception as e:
            log.warning("Unexpected error deleting %s: %s", item.path, e)
            outcome = CleanupResult(path=item.path, success=False, error=str(e), dry_run=dry_run)
        if not outcome.success:
            log.debug("Failed to delete %s: %s", outcome.path, outcome.error)
        tally.record(outcome)
        return outcome

    if results:
        with ThreadPoolExecutor(max_workers=max_workers or default_workers()) as executor:
            futures = [executor.submit(_work, item) for item in results]
            for future in as_completed(futures):
                outcome = future.result()
                if progress_callback:
                    try:
                        progress_callback(outcome)
                    except Exception as e:
                        log.warning("Progress callback failed for %s: %s", outcome.path, e)

    return DeletionSummary(deleted=tally.deleted, failed=tally.failed, dry_run=dry_run)
