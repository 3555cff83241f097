from typing import Awaitable, Callable

import pendulum
from aws_lambda_powertools import Logger
from fastapi import HTTPException, status
from pydantic import BaseModel

PageRenderer = Callable[[], Awaitable[tuple[str, int]]]


class RenderedPage(BaseModel):
    path: str
    html: str
    status_code: int = status.HTTP_200_OK
    generated_at: int
    revalidate: int

    @property
    def is_stale(self) -> bool:
        return pendulum.now().int_timestamp - self.generated_at >= self.revalidate


class PageStore:
    """Pre-rendered pages, each rebuilt once its revalidation interval has passed.

    Only successful renders are stored. When rebuilding a stale page fails,
    the stale page keeps being served.
    """

    def __init__(self):
        self._logger = Logger(utc=True)
        self._pages: dict[str, RenderedPage] = {}

    def __contains__(self, path: str) -> bool:
        return path in self._pages

    def get(self, path: str) -> RenderedPage | None:
        return self._pages.get(path)

    def pages(self) -> list[RenderedPage]:
        return list(self._pages.values())

    def clear(self):
        self._pages.clear()

    async def get_or_render(
        self, path: str, render: PageRenderer, revalidate: int
    ) -> RenderedPage:
        page = self._pages.get(path)
        if page and not page.is_stale:
            self._logger.debug(f"Serving pre-rendered page {path=}")
            return page
        try:
            html, status_code = await render()
        except HTTPException:
            if page is None:
                raise
            self._logger.exception(f"Revalidation failed, serving stale page {path=}")
            return page
        rendered = RenderedPage(
            path=path,
            html=html,
            status_code=status_code,
            generated_at=pendulum.now().int_timestamp,
            revalidate=revalidate,
        )
        if status_code == status.HTTP_200_OK:
            self._logger.info(f"Page rendered {path=} {revalidate=}")
            self._pages[path] = rendered
        return rendered
