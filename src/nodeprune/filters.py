"""Size and age filters for scan results."""

from datetime import datetime
from typing import Optional

from nodeprune.models import ScanConfig, ScanResult


def matches_filters(result: ScanResult, config: ScanConfig, now: datetime) -> bool:
    """Check a single result against the configured size and age bounds."""
    if config.min_size > 0 and result.size_bytes < config.min_size:
        return False
    if config.max_size > 0 and result.size_bytes > config.max_size:
        return False

    if config.older_than > 0:
        days_old = result.age_days(now)
        # An unknown mtime counts as infinitely old
        if days_old is not None and days_old < config.older_than:
            return False

    return True


def filter_results(
    results: list[ScanResult],
    config: ScanConfig,
    now: Optional[datetime] = None,
) -> list[ScanResult]:
    """
    Keep only results that satisfy every configured filter.

    Size bounds are inclusive and a bound of 0 means unset. Age is measured
    in whole days against `now`, which defaults to the time of the call, not
    the time of the scan.

    Args:
        results: Results to filter (not modified)
        config: Run configuration holding the bounds
        now: Reference time for age checks

    Returns:
        New list with the matching results, in their original order
    """
    now = now or datetime.now().astimezone()
    return [r for r in results if matches_filters(r, config, now)]
