from fastapi import APIRouter, Depends, status
from fastapi.responses import RedirectResponse
from slug_app.services.url_service import URLService
from slug_app.dependencies import get_url_service

router = APIRouter(tags=["redirect"])


@router.get("/{slug}")
async def redirect_to_original_url(
    slug: str,
    url_service: URLService = Depends(get_url_service)
):
    """
    Redirect to the original URL.

    The visit is counted before responding; an unknown slug is a 404
    handled by the NotFoundError handler.
    """
    original_url = await url_service.resolve(slug)
    return RedirectResponse(url=original_url, status_code=status.HTTP_302_FOUND)
