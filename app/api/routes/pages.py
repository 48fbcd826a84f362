"""Browser-facing HTML routes."""

from fastapi import APIRouter, Depends, Path
from fastapi.responses import HTMLResponse

from app.api.dependencies import get_current_time_ms, get_paste_service
from app.api.pages import render_create_page, render_not_found_page, render_paste_page
from app.services.exceptions import PasteNotFoundError
from app.services.paste import PasteService

router = APIRouter(tags=["pages"])


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def create_page():
    return HTMLResponse(content=render_create_page())


@router.get("/p/{paste_id}", response_class=HTMLResponse, include_in_schema=False)
async def paste_page(
    paste_id: str = Path(..., description="The paste id"),
    current_time_ms: int = Depends(get_current_time_ms),
    paste_service: PasteService = Depends(get_paste_service),
):
    """
    View a paste as HTML.

    Each view counts against the paste's view limit, exactly like the API fetch.
    """
    try:
        view = await paste_service.view_paste(paste_id, current_time_ms)
    except PasteNotFoundError:
        return HTMLResponse(content=render_not_found_page(), status_code=404)

    return HTMLResponse(
        content=render_paste_page(
            paste_id=view.id,
            content=view.content,
            remaining_views=view.remaining_views,
            expires_at=view.expires_at,
        )
    )
