from datetime import datetime
from typing import Callable

from slug_app.storage.strategies import UrlStore
from slug_app.utils import utcnow


class AnalyticsTracker:
    """
    Records visits against the store.

    The increment and timestamp move happen in one atomic store call, so
    concurrent visits to the same slug are all counted.
    """

    def __init__(self, store: UrlStore, clock: Callable[[], datetime] = utcnow):
        self.store = store
        self.clock = clock

    def record_visit(self, slug: str) -> datetime:
        """
        Count one visit to slug at the current time.

        Returns:
            The timestamp that was recorded

        Raises:
            NotFoundError: If the slug was deleted in the meantime
        """
        visited_at = self.clock()
        self.store.record_visit(slug, visited_at)
        return visited_at
