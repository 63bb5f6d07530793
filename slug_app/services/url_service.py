import logging
from typing import List, Optional, Tuple

from slug_app.cache.strategies import CacheStrategy
from slug_app.config import settings
from slug_app.exceptions import NotFoundError, ValidationError
from slug_app.schemas.url import PaginationMeta
from slug_app.services.analytics import AnalyticsTracker
from slug_app.services.slug_generator import SlugGenerator
from slug_app.services.validator import UrlValidator
from slug_app.storage.models import UrlRecord
from slug_app.storage.strategies import UrlStore
from slug_app.utils import utcnow

logger = logging.getLogger(__name__)


class URLService:
    """
    Slug lifecycle orchestration: create, resolve, show, list and delete.

    Collaborators are injected and the service keeps no per-call state, so
    one instance may serve any number of concurrent requests. The store is
    synchronous; the cache is async because redis is network I/O.
    """

    def __init__(
        self,
        store: UrlStore,
        slug_generator: SlugGenerator,
        cache: Optional[CacheStrategy] = None,
        validator: Optional[UrlValidator] = None,
        tracker: Optional[AnalyticsTracker] = None,
        cache_ttl: Optional[int] = None
    ):
        self.store = store
        self.slug_generator = slug_generator
        self.cache = cache
        self.validator = validator or UrlValidator()
        self.tracker = tracker or AnalyticsTracker(store)
        self.cache_ttl = cache_ttl or settings.cache_ttl

    @staticmethod
    def _cache_key(slug: str) -> str:
        return f"url:{slug}"

    async def create(self, original_url: Optional[str]) -> UrlRecord:
        """
        Shorten original_url under a freshly allocated slug.

        The URL is stored exactly as submitted.

        Raises:
            ValidationError: If the URL is empty or not an absolute URL
            ExhaustedError: If no free slug could be found
        """
        is_valid, reason = self.validator.validate(original_url)
        if not is_valid:
            raise ValidationError(reason)

        def insert(slug: str) -> UrlRecord:
            return self.store.insert(
                UrlRecord(slug=slug, original_url=original_url, created_at=utcnow())
            )

        record = self.slug_generator.assign(insert)
        logger.info("Created slug %s", record.slug)

        if self.cache:
            await self.cache.set(self._cache_key(record.slug), record.original_url, ttl=self.cache_ttl)

        return record

    async def resolve(self, slug: str) -> str:
        """
        Get the URL to redirect to and count the visit.

        Cache-Aside: the cache is tried first and filled from the store on a
        miss. Recording the visit is best-effort once the store lookup in
        this call succeeded: a failure there is logged and the URL is still
        returned. A cached mapping whose record is gone is evicted and the
        slug is reported as missing.

        Raises:
            NotFoundError: If the slug does not exist
        """
        original_url = None
        if self.cache:
            original_url = await self.cache.get(self._cache_key(slug))
        from_cache = bool(original_url)

        if not from_cache:
            try:
                record = self.store.find_by_slug(slug)
            except NotFoundError:
                raise NotFoundError(slug, message="Not found")
            original_url = record.original_url
            if self.cache:
                await self.cache.set(self._cache_key(slug), original_url, ttl=self.cache_ttl)

        try:
            self.tracker.record_visit(slug)
        except NotFoundError:
            if self.cache:
                await self.cache.delete(self._cache_key(slug))
            if from_cache:
                logger.info("Evicted stale cache entry for deleted slug %s", slug)
                raise NotFoundError(slug, message="Not found")
            # Deleted between lookup and update
            logger.warning("Visit to %s not recorded: slug no longer exists", slug)
        except Exception:
            logger.exception("Visit to %s not recorded: analytics update failed", slug)

        return original_url

    async def show(self, slug: str) -> UrlRecord:
        """
        Get a record with its analytics without counting a visit.

        Raises:
            NotFoundError: If the slug does not exist
        """
        try:
            return self.store.find_by_slug(slug)
        except NotFoundError:
            raise NotFoundError(slug, message="Not found")

    async def list(
        self,
        page: Optional[int] = 1,
        per_page: Optional[int] = None
    ) -> Tuple[List[UrlRecord], PaginationMeta]:
        """Get one page of records, newest first, with pagination metadata"""
        page, per_page = self.store.paginate(page, per_page)
        records, total_count = self.store.list(page, per_page)
        return records, PaginationMeta.build(page, per_page, total_count)

    async def delete(self, slug: str) -> None:
        """
        Delete a slug together with its analytics.
        Also invalidates cache (async I/O).

        Raises:
            NotFoundError: If the slug does not exist
        """
        try:
            self.store.delete(slug)
        except NotFoundError:
            raise NotFoundError(slug, message="URL not found")

        if self.cache:
            await self.cache.delete(self._cache_key(slug))

        logger.info("Deleted slug %s", slug)
