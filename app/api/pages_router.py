from fastapi import APIRouter
from fastapi.responses import HTMLResponse

from app.services.page_service import PageService

page_service = PageService()
router = APIRouter(default_response_class=HTMLResponse, tags=["pages"])


@router.get("/")
async def home() -> HTMLResponse:
    page = await page_service.render_home()
    return HTMLResponse(page.html, status_code=page.status_code)


@router.get("/post/{uid}")
async def post(uid: str) -> HTMLResponse:
    page = await page_service.render_post(uid)
    return HTMLResponse(page.html, status_code=page.status_code)
