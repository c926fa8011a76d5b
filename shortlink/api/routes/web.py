"""Form endpoint used by the browser client.

The client posts ``url=<percent-encoded URL>`` and either replaces its
document with the returned HTML or shows the plain-text error body verbatim.
"""

from fastapi import APIRouter, Depends, Form, status
from fastapi.responses import HTMLResponse, PlainTextResponse
from loguru import logger

from shortlink.api.dependencies import get_base_url, get_shortening_service
from shortlink.api.html import render_shortened_page
from shortlink.services.exceptions import InvalidURLError, LinkCreationError
from shortlink.services.shortener import ShorteningService

router = APIRouter(tags=["web"])


@router.post(
    "/shorten",
    response_class=HTMLResponse,
    responses={
        400: {"content": {"text/plain": {}}, "description": "Missing or invalid URL"},
        500: {"content": {"text/plain": {}}, "description": "Short code could not be issued"},
    }
)
async def shorten_form(
    url: str = Form(""),
    shortening_service: ShorteningService = Depends(get_shortening_service),
    base_url: str = Depends(get_base_url)
):
    if not url.strip():
        return PlainTextResponse("URL is required", status_code=status.HTTP_400_BAD_REQUEST)

    try:
        link = await shortening_service.create_link(url)
    except InvalidURLError as e:
        logger.info(f"Rejected URL submission: {url!r}")
        return PlainTextResponse(str(e), status_code=status.HTTP_400_BAD_REQUEST)
    except LinkCreationError as e:
        logger.error(f"Failed to issue short code: {e}")
        return PlainTextResponse(str(e), status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    return HTMLResponse(render_shortened_page(link, f"{base_url}/{link.code}"))
