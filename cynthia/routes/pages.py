"""
Page Routes

Serves assembled pages. Handlers are plain functions so FastAPI runs each
render on its worker thread pool; plugin scripts block only the request
that started them.
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, PlainTextResponse

from cynthia import __version__
from cynthia.plugins.hooks import CONTENT_LOCATION_ERROR, CONTENT_TYPE_ERROR, NOT_FOUND_ERROR
from cynthia.services.site import Site

router = APIRouter(tags=["Pages"])

ROOT_PAGE_ID = "root"

MARKER_STATUS = {
    NOT_FOUND_ERROR: 404,
    CONTENT_LOCATION_ERROR: 502,
    CONTENT_TYPE_ERROR: 415,
}


def get_site(request: Request) -> Site:
    """Return the site the application was created for."""
    return request.app.state.site


def page_response(site: Site, page_id: str):
    page = site.render(page_id)
    if page in MARKER_STATUS:
        return PlainTextResponse(page, status_code=MARKER_STATUS[page])
    return HTMLResponse(page)


@router.get("/health")
def health():
    return {"status": "ok", "version": __version__}


@router.get("/", response_class=HTMLResponse)
def root_page(site: Site = Depends(get_site)):
    """Serve the site's root page."""
    return page_response(site, ROOT_PAGE_ID)


@router.get("/p/{page_id}", response_class=HTMLResponse)
def page(page_id: str, site: Site = Depends(get_site)):
    """Serve a published page or post by id."""
    return page_response(site, page_id)
