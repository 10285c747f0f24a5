"""Dashboard pages.

The pages are shells: the browser fetches catalog and row data from the
/api routes after load, so a slow database never blocks the initial render.
"""

from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from app.core.config import settings

router = APIRouter()
templates = Jinja2Templates(directory=str(Path(__file__).resolve().parents[2] / "templates"))


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def index(request: Request):
    """Collection list page."""
    return templates.TemplateResponse(
        request,
        "index.html",
        {"weaviate_url": settings.weaviate.weaviate_url},
    )


@router.get("/collections/{name}", response_class=HTMLResponse, include_in_schema=False)
async def collection_page(request: Request, name: str):
    """Table view of one collection's objects."""
    return templates.TemplateResponse(
        request,
        "collection.html",
        {"collection_name": name, "weaviate_url": settings.weaviate.weaviate_url},
    )
