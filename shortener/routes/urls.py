from http import HTTPStatus
from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse, RedirectResponse
from shortener.core.config import settings
from shortener.core.exceptions import NotFoundError, PersistenceError
from shortener.models.schemas import ShortenRequest, ShortenResponse
from shortener.services.url_store import URLStore
import logging

logger = logging.getLogger(__name__)

url_router = APIRouter()

def get_url_store(request: Request) -> URLStore:
    """Dependency for FastAPI routes - the store built during application startup."""
    return request.app.state.url_store

def status_text(status_code: int) -> PlainTextResponse:
    status = HTTPStatus(status_code)
    return PlainTextResponse(f"{status.value} {status.phrase}", status_code=status_code)

@url_router.post("/", status_code=201, response_model=ShortenResponse)
async def create_url(payload: ShortenRequest, store: URLStore = Depends(get_url_store)):
    try:
        short_id = await store.shorten(payload.url)
    except PersistenceError as e:
        logger.error(f"Error creating short URL: {e}")
        return status_text(422)

    logger.info(f"Short URL created: {short_id}")
    return ShortenResponse(url=f"{settings.base_url.rstrip('/')}/{short_id}")

# Registered last in main.py so fixed paths win over the catch-all id
@url_router.get("/{short_id}")
async def redirect_url(short_id: str, store: URLStore = Depends(get_url_store)):
    try:
        long_url = await store.resolve(short_id)
    except NotFoundError:
        logger.warning(f"URL not found for id: {short_id}")
        return status_text(404)
    except PersistenceError as e:
        logger.error(f"Error resolving {short_id}: {e}")
        return status_text(404)

    return RedirectResponse(url=long_url, status_code=302)
