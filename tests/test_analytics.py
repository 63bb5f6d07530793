"""
Tests for visit accounting: AnalyticsTracker and the store's atomic update.
"""
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta, timezone

import pytest

from slug_app.exceptions import NotFoundError
from slug_app.services.analytics import AnalyticsTracker
from slug_app.storage.models import UrlRecord

T0 = datetime(2026, 3, 1, 8, 30, tzinfo=timezone.utc)


@pytest.fixture
def stored_slug(store):
    store.insert(UrlRecord(slug="visited", original_url="https://example.com", created_at=T0))
    return "visited"


class TestRecordVisit:

    def test_first_visit(self, store, stored_slug):
        tracker = AnalyticsTracker(store, clock=lambda: T0 + timedelta(minutes=1))

        recorded = tracker.record_visit(stored_slug)

        record = store.find_by_slug(stored_slug)
        assert record.visits == 1
        assert record.last_visit_at == recorded == T0 + timedelta(minutes=1)

    def test_repeated_visits_count_and_move_forward(self, store, stored_slug):
        tracker = AnalyticsTracker(store)
        previous = None

        for expected in range(1, 6):
            tracker.record_visit(stored_slug)
            record = store.find_by_slug(stored_slug)
            assert record.visits == expected
            if previous is not None:
                assert record.last_visit_at >= previous
            previous = record.last_visit_at

    def test_older_timestamp_does_not_move_last_visit_back(self, store, stored_slug):
        later = T0 + timedelta(hours=2)
        earlier = T0 + timedelta(hours=1)

        store.record_visit(stored_slug, later)
        store.record_visit(stored_slug, earlier)

        record = store.find_by_slug(stored_slug)
        assert record.visits == 2
        assert record.last_visit_at == later

    def test_missing_slug(self, store):
        tracker = AnalyticsTracker(store)

        with pytest.raises(NotFoundError):
            tracker.record_visit("missing")

    def test_concurrent_visits_are_all_counted(self, store, stored_slug):
        tracker = AnalyticsTracker(store)

        with ThreadPoolExecutor(max_workers=10) as pool:
            list(pool.map(lambda _: tracker.record_visit(stored_slug), range(100)))

        assert store.find_by_slug(stored_slug).visits == 100

    def test_concurrent_visits_keep_latest_timestamp(self, store, stored_slug):
        stamps = [T0 + timedelta(seconds=s) for s in range(50)]

        with ThreadPoolExecutor(max_workers=10) as pool:
            # Reverse arrival order so the newest stamp tends to land first
            list(pool.map(lambda ts: store.record_visit(stored_slug, ts), reversed(stamps)))

        record = store.find_by_slug(stored_slug)
        assert record.visits == 50
        assert record.last_visit_at == max(stamps)
