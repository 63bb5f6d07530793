from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Query, status
from slug_app.schemas.url import (
    DeleteResponse,
    URLCreate,
    URLCreated,
    URLListResponse,
    URLResponse,
)
from slug_app.services.url_service import URLService
from slug_app.dependencies import get_url_service

router = APIRouter(prefix="/urls", tags=["urls"])


@router.get("/", response_model=URLListResponse)
async def list_urls(
    page: int = Query(1, description="1-indexed page number"),
    per_page: Optional[int] = Query(None, description="Page size; defaults to the configured size"),
    url_service: URLService = Depends(get_url_service)
):
    """List shortened URLs with their analytics, newest first"""
    records, meta = await url_service.list(page=page, per_page=per_page)
    return URLListResponse(
        data=[URLResponse.from_record(record) for record in records],
        meta=meta,
    )


@router.post("/", response_model=URLCreated, status_code=status.HTTP_201_CREATED)
async def create_short_url(
    payload: Any = Body(None, description='JSON object: {"original_url": "..."}'),
    url_service: URLService = Depends(get_url_service)
):
    """
    Create a new slug.

    A missing or non-object body counts as a missing original_url, so every
    bad input gets the same 422 payload from UrlValidator.
    """
    url_data = URLCreate.from_payload(payload)
    record = await url_service.create(url_data.original_url)
    return URLCreated(slug=record.slug)


@router.get("/{slug}", response_model=URLResponse)
async def get_url_info(
    slug: str,
    url_service: URLService = Depends(get_url_service)
):
    """Get a shortened URL and its analytics without counting a visit"""
    record = await url_service.show(slug)
    return URLResponse.from_record(record)


@router.delete("/{slug}", response_model=DeleteResponse)
async def delete_url(
    slug: str,
    url_service: URLService = Depends(get_url_service)
):
    """Delete a shortened URL and its analytics"""
    await url_service.delete(slug)
    return DeleteResponse(success=True)
