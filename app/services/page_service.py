from pathlib import Path

from aws_lambda_powertools import Logger
from fastapi import status
from starlette.templating import Jinja2Templates

from app.exceptions import PostNotFoundException
from app.services.page_store import PageStore, RenderedPage
from app.services.post_service import PostListing, PostService
from app.settings import Settings

templates = Jinja2Templates(directory=Path(__file__).resolve().parent.parent / "templates")


class PageService:
    HOME_PATH = "/"

    def __init__(
        self,
        post_service: PostService | None = None,
        page_store: PageStore | None = None,
        settings: Settings | None = None,
    ):
        self._logger = Logger(utc=True)
        self._settings = settings or Settings()
        self._post_service = post_service or PostService(settings=self._settings)
        self._store = page_store if page_store is not None else PageStore()

    @property
    def store(self) -> PageStore:
        return self._store

    @staticmethod
    def post_path(uid: str) -> str:
        return f"/post/{uid}"

    async def render_home(self) -> RenderedPage:
        return await self._store.get_or_render(
            self.HOME_PATH, self._build_home, self._settings.list_revalidate_seconds
        )

    async def render_post(self, uid: str) -> RenderedPage:
        async def build() -> tuple[str, int]:
            return await self._build_post(uid)

        return await self._store.get_or_render(
            self.post_path(uid), build, self._settings.post_revalidate_seconds
        )

    async def prebuild(self) -> list[str]:
        """Renders the list page and every known post ahead of requests."""
        await self.render_home()
        uids = await self._post_service.get_static_paths()
        for uid in uids:
            await self.render_post(uid)
        paths = [self.HOME_PATH, *(self.post_path(uid) for uid in uids)]
        self._logger.info(f"Pre-rendered {len(paths)} pages")
        return paths

    def render_error(self, status_code: int, message: str) -> str:
        return self._render("error.html", status_code=status_code, message=message)

    async def _build_home(self) -> tuple[str, int]:
        listing = PostListing(await self._post_service.get_posts_pagination())
        return self._render("home.html", listing=listing), status.HTTP_200_OK

    async def _build_post(self, uid: str) -> tuple[str, int]:
        try:
            post = await self._post_service.get_post(uid)
        except PostNotFoundException:
            return self._render("post_fallback.html"), status.HTTP_404_NOT_FOUND
        return self._render("post.html", post=post), status.HTTP_200_OK

    def _render(self, name: str, **context) -> str:
        return templates.get_template(name).render(
            site_name=self._settings.app_name, **context
        )
