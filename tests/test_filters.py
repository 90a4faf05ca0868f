"""Tests for size and age filtering."""

from datetime import datetime, timedelta, timezone

from nodeprune.filters import filter_results, matches_filters
from nodeprune.models import ScanConfig, ScanResult

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def make_result(path: str, size: int, days_old: float | None = 0) -> ScanResult:
    modified = None if days_old is None else NOW - timedelta(days=days_old)
    return ScanResult(path=path, size_bytes=size, modified_at=modified)


RESULTS = [
    make_result("/a", 100, days_old=1),
    make_result("/b", 500, days_old=45),
    make_result("/c", 1000, days_old=400),
    make_result("/d", 0, days_old=None),
]


class TestSizeFilters:
    def test_no_filters_keeps_everything(self):
        assert filter_results(RESULTS, ScanConfig(), now=NOW) == RESULTS

    def test_min_size_is_inclusive(self):
        kept = filter_results(RESULTS, ScanConfig(min_size=500), now=NOW)
        assert [r.path for r in kept] == ["/b", "/c"]

    def test_max_size_is_inclusive(self):
        kept = filter_results(RESULTS, ScanConfig(max_size=500), now=NOW)
        assert [r.path for r in kept] == ["/a", "/b", "/d"]

    def test_size_range(self):
        kept = filter_results(RESULTS, ScanConfig(min_size=100, max_size=500), now=NOW)
        assert [r.path for r in kept] == ["/a", "/b"]

    def test_zero_bound_means_unset(self):
        kept = filter_results(RESULTS, ScanConfig(min_size=0, max_size=0), now=NOW)
        assert kept == RESULTS


class TestAgeFilter:
    def test_older_than(self):
        kept = filter_results(RESULTS, ScanConfig(older_than=30), now=NOW)
        assert [r.path for r in kept] == ["/b", "/c", "/d"]

    def test_boundary_is_whole_days(self):
        config = ScanConfig(older_than=2)
        assert matches_filters(make_result("/x", 1, days_old=2), config, NOW)
        assert not matches_filters(make_result("/x", 1, days_old=1.99), config, NOW)

    def test_unknown_age_counts_as_old(self):
        assert matches_filters(make_result("/x", 1, days_old=None), ScanConfig(older_than=9999), NOW)

    def test_defaults_to_current_time(self):
        recent = ScanResult(path="/r", modified_at=datetime.now().astimezone())
        assert filter_results([recent], ScanConfig(older_than=1)) == []


class TestFilterProperties:
    def test_is_subset_and_idempotent(self):
        config = ScanConfig(min_size=50, older_than=10)
        once = filter_results(RESULTS, config, now=NOW)
        twice = filter_results(once, config, now=NOW)
        assert twice == once
        assert all(r in RESULTS for r in once)

    def test_returns_new_list(self):
        kept = filter_results(RESULTS, ScanConfig(), now=NOW)
        assert kept is not RESULTS
