"""
URL store strategies using Strategy Pattern.

Every backend upholds the same guarantees:
- insert is atomic with its uniqueness check
- a URL and its analytics are created and deleted as one unit
- record_visit never loses an increment and keeps the latest timestamp
"""

import threading
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from sqlalchemy import DateTime, case, delete, func, literal, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker

from slug_app.exceptions import DuplicateSlugError, NotFoundError
from slug_app.models import ShortenedUrl, VisitAnalytics
from slug_app.storage.models import UrlRecord
from slug_app.utils import as_utc

DEFAULT_PER_PAGE = 20


def normalize_pagination(
    page: Optional[int],
    per_page: Optional[int],
    default_per_page: int = DEFAULT_PER_PAGE,
) -> Tuple[int, int]:
    """
    Clamp raw paging input to usable values.

    Pages are 1-indexed; anything below 1 means the first page.
    A missing or non-positive per_page falls back to the default.
    """
    if page is None or page < 1:
        page = 1
    if per_page is None or per_page <= 0:
        per_page = default_per_page
    return page, per_page


class UrlStore(ABC):
    """
    Abstract base class for URL stores.

    Operations are synchronous: SQL round trips are short and callers run
    them on request worker threads.
    """

    def __init__(
        self,
        default_per_page: int = DEFAULT_PER_PAGE,
    ):
        self.default_per_page = default_per_page

    def paginate(self, page: Optional[int], per_page: Optional[int]) -> Tuple[int, int]:
        return normalize_pagination(page, per_page, self.default_per_page)

    @abstractmethod
    def insert(self, record: UrlRecord) -> UrlRecord:
        """
        Persist a new record with zeroed analytics.

        Raises:
            DuplicateSlugError: If the slug is already taken
        """
        pass

    @abstractmethod
    def find_by_slug(self, slug: str) -> UrlRecord:
        """
        Raises:
            NotFoundError: If no record has this slug
        """
        pass

    @abstractmethod
    def delete(self, slug: str) -> None:
        """
        Remove the record and its analytics together.

        Raises:
            NotFoundError: If no record has this slug
        """
        pass

    @abstractmethod
    def list(
        self,
        page: Optional[int] = 1,
        per_page: Optional[int] = None
    ) -> Tuple[List[UrlRecord], int]:
        """
        Get one page of records, newest first.

        Returns:
            (records on the page, total number of records)
        """
        pass

    @abstractmethod
    def record_visit(self, slug: str, visited_at: datetime) -> None:
        """
        Add one visit and move last_visit_at forward to visited_at.

        An older visited_at than the stored one keeps the stored value.

        Raises:
            NotFoundError: If no record has this slug
        """
        pass

    @abstractmethod
    def count(self) -> int:
        """Total number of live records"""
        pass


class SQLAlchemyUrlStore(UrlStore):
    """
    Relational store backed by SQLAlchemy.

    Each operation runs in its own short session. Uniqueness comes from the
    unique constraint on urls.slug, and visit accounting is a single UPDATE
    so the database serializes concurrent increments.
    """

    def __init__(self, session_factory: sessionmaker, **kwargs):
        super().__init__(**kwargs)
        self.session_factory = session_factory

    def insert(self, record: UrlRecord) -> UrlRecord:
        url = ShortenedUrl(
            slug=record.slug,
            original_url=record.original_url,
            created_at=record.created_at,
            analytic=VisitAnalytics(visits=0, last_visit_at=None),
        )
        with self.session_factory() as session:
            session.add(url)
            try:
                session.commit()
            except IntegrityError as exc:
                session.rollback()
                raise DuplicateSlugError(record.slug) from exc

        return record.model_copy(update={"visits": 0, "last_visit_at": None})

    def find_by_slug(self, slug: str) -> UrlRecord:
        stmt = (
            select(ShortenedUrl, VisitAnalytics)
            .join(VisitAnalytics, VisitAnalytics.url_id == ShortenedUrl.id)
            .where(ShortenedUrl.slug == slug)
        )
        with self.session_factory() as session:
            row = session.execute(stmt).first()

        if row is None:
            raise NotFoundError(slug)
        return self._to_record(*row)

    def delete(self, slug: str) -> None:
        url_id = select(ShortenedUrl.id).where(ShortenedUrl.slug == slug).scalar_subquery()

        # Both statements write, so SQLite takes its write lock up front
        with self.session_factory() as session:
            session.execute(
                delete(VisitAnalytics)
                .where(VisitAnalytics.url_id == url_id)
                .execution_options(synchronize_session=False)
            )
            result = session.execute(
                delete(ShortenedUrl)
                .where(ShortenedUrl.slug == slug)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                session.rollback()
                raise NotFoundError(slug)
            session.commit()

    def list(
        self,
        page: Optional[int] = 1,
        per_page: Optional[int] = None
    ) -> Tuple[List[UrlRecord], int]:
        page, per_page = self.paginate(page, per_page)
        offset = (page - 1) * per_page
        with self.session_factory() as session:
            total = session.scalar(select(func.count()).select_from(ShortenedUrl))
            # Past the end; also keeps OFFSET/LIMIT within the database's integer range
            if offset >= total:
                return [], total
            stmt = (
                select(ShortenedUrl, VisitAnalytics)
                .join(VisitAnalytics, VisitAnalytics.url_id == ShortenedUrl.id)
                .order_by(ShortenedUrl.created_at.desc(), ShortenedUrl.id.desc())
                .offset(offset)
                .limit(min(per_page, total - offset))
            )
            rows = session.execute(stmt).all()

        return [self._to_record(url, analytic) for url, analytic in rows], total

    def record_visit(self, slug: str, visited_at: datetime) -> None:
        url_id = select(ShortenedUrl.id).where(ShortenedUrl.slug == slug).scalar_subquery()
        visited = literal(visited_at, type_=DateTime(timezone=True))
        stmt = (
            update(VisitAnalytics)
            .where(VisitAnalytics.url_id == url_id)
            .values(
                visits=VisitAnalytics.visits + 1,
                last_visit_at=case(
                    (
                        or_(
                            VisitAnalytics.last_visit_at.is_(None),
                            VisitAnalytics.last_visit_at < visited,
                        ),
                        visited,
                    ),
                    else_=VisitAnalytics.last_visit_at,
                ),
            )
            .execution_options(synchronize_session=False)
        )
        with self.session_factory() as session:
            result = session.execute(stmt)
            if result.rowcount == 0:
                session.rollback()
                raise NotFoundError(slug)
            session.commit()

    def count(self) -> int:
        with self.session_factory() as session:
            return session.scalar(select(func.count()).select_from(ShortenedUrl))

    @staticmethod
    def _to_record(url: ShortenedUrl, analytic: VisitAnalytics) -> UrlRecord:
        return UrlRecord(
            slug=url.slug,
            original_url=url.original_url,
            created_at=as_utc(url.created_at),
            visits=analytic.visits,
            last_visit_at=as_utc(analytic.last_visit_at),
        )


class InMemoryUrlStore(UrlStore):
    """
    Dict-backed store for development and tests.

    One lock guards every read and write, which serializes all mutations
    (and therefore every slug's analytics). Lost on restart.
    """

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self._records: Dict[str, UrlRecord] = {}
        self._sequence: Dict[str, int] = {}  # insertion order, breaks created_at ties
        self._counter = 0
        self._lock = threading.Lock()

    def insert(self, record: UrlRecord) -> UrlRecord:
        stored = record.model_copy(update={"visits": 0, "last_visit_at": None})
        with self._lock:
            if record.slug in self._records:
                raise DuplicateSlugError(record.slug)
            self._counter += 1
            self._records[record.slug] = stored
            self._sequence[record.slug] = self._counter
        return stored.model_copy()

    def find_by_slug(self, slug: str) -> UrlRecord:
        with self._lock:
            record = self._records.get(slug)
        if record is None:
            raise NotFoundError(slug)
        return record.model_copy()

    def delete(self, slug: str) -> None:
        with self._lock:
            if slug not in self._records:
                raise NotFoundError(slug)
            del self._records[slug]
            del self._sequence[slug]

    def list(
        self,
        page: Optional[int] = 1,
        per_page: Optional[int] = None
    ) -> Tuple[List[UrlRecord], int]:
        page, per_page = self.paginate(page, per_page)
        with self._lock:
            ordered = sorted(
                self._records.values(),
                key=lambda r: (r.created_at, self._sequence[r.slug]),
                reverse=True,
            )
        start = (page - 1) * per_page
        window = ordered[start:start + per_page]
        return [record.model_copy() for record in window], len(ordered)

    def record_visit(self, slug: str, visited_at: datetime) -> None:
        with self._lock:
            record = self._records.get(slug)
            if record is None:
                raise NotFoundError(slug)
            last_visit_at = record.last_visit_at
            if last_visit_at is None or last_visit_at < visited_at:
                last_visit_at = visited_at
            self._records[slug] = record.model_copy(
                update={"visits": record.visits + 1, "last_visit_at": last_visit_at}
            )

    def count(self) -> int:
        with self._lock:
            return len(self._records)
