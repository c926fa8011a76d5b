from fastapi import APIRouter, Depends, HTTPException, Path, status

from shortlink.api import schemas
from shortlink.api.dependencies import get_base_url, get_redirect_service, get_shortening_service
from shortlink.models.link import Link
from shortlink.services.exceptions import (
    InvalidURLError,
    LinkCreationError,
    LinkLookupError,
    LinkNotFoundError,
)
from shortlink.services.redirect import RedirectService
from shortlink.services.shortener import ShorteningService

router = APIRouter(tags=["shortener"])


def _link_response(link: Link, base_url: str) -> schemas.LinkResponse:
    return schemas.LinkResponse(
        code=link.code,
        target_url=link.target_url,
        short_url=f"{base_url}/{link.code}",
        created_at=link.created_at,
    )


@router.post(
    "/shorten",
    response_model=schemas.LinkResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": schemas.ErrorResponse, "description": "Invalid URL"},
        500: {"model": schemas.ErrorResponse, "description": "Short code could not be issued"}
    }
)
async def create_link(
    link_data: schemas.ShortenRequest,
    shortening_service: ShorteningService = Depends(get_shortening_service),
    base_url: str = Depends(get_base_url)
):
    try:
        link = await shortening_service.create_link(link_data.url)
    except InvalidURLError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except LinkCreationError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return _link_response(link, base_url)


@router.get(
    "/links/{code}",
    response_model=schemas.LinkResponse,
    responses={
        404: {"model": schemas.ErrorResponse, "description": "Link not found"}
    }
)
async def get_link_info(
    code: str = Path(..., description="The short code of the link"),
    redirect_service: RedirectService = Depends(get_redirect_service),
    base_url: str = Depends(get_base_url)
):
    try:
        link = await redirect_service.get_link(code)
    except LinkNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except LinkLookupError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return _link_response(link, base_url)
