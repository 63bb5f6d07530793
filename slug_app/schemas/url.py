from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from slug_app.config import settings
from slug_app.storage.models import UrlRecord


def build_shortened_link(slug: str, base_url: Optional[str] = None) -> str:
    """Public link for a slug; derived on output, never stored"""
    base = (base_url or settings.base_url).rstrip("/")
    return f"{base}/{slug}"


class URLCreate(BaseModel):
    """Create payload; original_url is checked by UrlValidator, not by the schema"""
    original_url: Any = Field(None, description="The original URL to be shortened")

    @classmethod
    def from_payload(cls, payload: Any) -> "URLCreate":
        """Read a raw request body; anything but a JSON object has no original_url"""
        if not isinstance(payload, dict):
            return cls()
        return cls(original_url=payload.get("original_url"))


class URLCreated(BaseModel):
    slug: str


class URLResponse(BaseModel):
    """A shortened URL with its analytics, as returned by the API"""
    slug: str
    original_url: str
    shortened_link: str
    visits: int
    last_visit_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_record(cls, record: UrlRecord, base_url: Optional[str] = None) -> "URLResponse":
        return cls(
            slug=record.slug,
            original_url=record.original_url,
            shortened_link=build_shortened_link(record.slug, base_url),
            visits=record.visits,
            last_visit_at=record.last_visit_at,
        )


class PaginationMeta(BaseModel):
    current_page: int
    total_pages: int
    total_count: int
    per_page: int

    @classmethod
    def build(cls, page: int, per_page: int, total_count: int) -> "PaginationMeta":
        # Ceiling division without floats
        total_pages = -(-total_count // per_page)
        return cls(
            current_page=page,
            total_pages=total_pages,
            total_count=total_count,
            per_page=per_page,
        )


class URLListResponse(BaseModel):
    data: List[URLResponse]
    meta: PaginationMeta


class DeleteResponse(BaseModel):
    success: bool = True
