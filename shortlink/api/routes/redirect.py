"""Short code redirection endpoint."""

from fastapi import APIRouter, Depends, HTTPException, Request
from starlette.responses import RedirectResponse

from shortlink.api.dependencies import get_redirect_service, get_settings
from shortlink.core.config import Settings
from shortlink.core.logging import log_link_access
from shortlink.services.exceptions import LinkLookupError, LinkNotFoundError
from shortlink.services.redirect import RedirectService

router = APIRouter(tags=["redirect"])


@router.get(
    "/{code}",
    response_class=RedirectResponse,
    responses={404: {"description": "Unknown short code"}}
)
async def redirect_to_target_url(
    request: Request,
    code: str,
    redirect_service: RedirectService = Depends(get_redirect_service),
    settings: Settings = Depends(get_settings)
):
    """Redirect to the URL registered under ``code``."""
    try:
        target_url = await redirect_service.resolve(code)
    except LinkNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except LinkLookupError as e:
        raise HTTPException(status_code=500, detail=str(e))

    log_link_access(
        code=code,
        ip_address=request.client.host if request.client else "unknown",
        user_agent=request.headers.get("user-agent", ""),
    )
    return RedirectResponse(url=target_url, status_code=settings.REDIRECT_STATUS_CODE)
