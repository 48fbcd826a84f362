"""Paste API endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Path, status

from app.api import schemas
from app.api.dependencies import get_current_time_ms, get_paste_service
from app.services.exceptions import (
    PasteCreationError,
    PasteNotFoundError,
    PasteValidationError,
)
from app.services.paste import PasteService

router = APIRouter(tags=["pastes"])


@router.post(
    "/pastes",
    response_model=schemas.PasteCreateResponse,
    status_code=status.HTTP_200_OK,
    responses={
        400: {"model": schemas.ErrorResponse, "description": "Invalid paste content or limits"}
    }
)
async def create_paste(
    paste_data: schemas.PasteCreateRequest,
    paste_service: PasteService = Depends(get_paste_service),
):
    try:
        paste = await paste_service.create_paste(
            content=paste_data.content,
            ttl_seconds=paste_data.ttl_seconds,
            max_views=paste_data.max_views,
        )
    except PasteValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PasteCreationError as e:
        raise HTTPException(status_code=500, detail=str(e))

    return schemas.PasteCreateResponse(id=paste.id, url=paste_service.build_url(paste.id))


@router.get(
    "/pastes/{paste_id}",
    response_model=schemas.PasteViewResponse,
    responses={
        404: {"model": schemas.ErrorResponse, "description": "Paste not found or expired"}
    }
)
async def fetch_paste(
    paste_id: str = Path(..., description="The paste id"),
    current_time_ms: int = Depends(get_current_time_ms),
    paste_service: PasteService = Depends(get_paste_service),
):
    """
    Fetch a paste. Each successful fetch counts as one view.
    """
    try:
        view = await paste_service.view_paste(paste_id, current_time_ms)
    except PasteNotFoundError:
        raise HTTPException(status_code=404, detail="Paste not found")

    return schemas.PasteViewResponse(
        content=view.content,
        remaining_views=view.remaining_views,
        expires_at=view.expires_at,
    )
