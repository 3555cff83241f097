import math
from typing import Any

import pendulum
from aws_lambda_powertools import Logger
from pydantic import ValidationError

from app.exceptions import MalformedPaginationException, PostNotFoundException
from app.models.post import ContentSection, Post, PostDetail, PostPagination
from app.models.response import FormattedPost, PostsPage, PostView
from app.services.content_service import ContentService, Predicates
from app.services.rich_text import as_html, as_text
from app.settings import Settings


class PostService:
    ERROR_POST_NOT_FOUND = "The requested post was not found"
    ERROR_MALFORMED = "The content source returned a malformed response"
    SUMMARY_FIELDS = ("title", "subtitle", "author")
    WORDS_PER_MINUTE = 200

    def __init__(
        self,
        content_service: ContentService | None = None,
        settings: Settings | None = None,
    ):
        self._logger = Logger(utc=True)
        self._settings = settings or Settings()
        self._content = content_service or ContentService(self._settings)

    @property
    def _document_type(self) -> str:
        return self._settings.posts_document_type

    async def get_posts_pagination(self) -> PostsPage:
        return self._to_page(await self._query_posts(self._settings.posts_page_size))

    async def load_more(self, next_page: str) -> PostsPage:
        self._logger.info(f"Loading more posts {next_page=}")
        return self._to_page(await self._content.get_page(next_page))

    async def get_static_paths(self) -> list[str]:
        pagination = self._parse_pagination(
            await self._query_posts(self._settings.static_paths_page_size)
        )
        return [post.uid for post in pagination.results if post.uid]

    async def get_post(self, uid: str) -> PostView:
        document = await self._content.get_by_uid(self._document_type, uid)
        if document is None:
            self._logger.warning(f"Post not found: {uid=}")
            raise PostNotFoundException(self.ERROR_POST_NOT_FOUND)
        try:
            post = PostDetail.model_validate(document)
        except ValidationError as exc:
            self._logger.error(f"Invalid post document {uid=} {exc=}")
            raise MalformedPaginationException(self.ERROR_MALFORMED)
        return PostView(
            uid=post.uid or uid,
            first_publication_date=self.format_date(post.first_publication_date),
            reading_time=self.reading_time(post.data.content),
            data=post.data,
            sections_html=[as_html(section.body) for section in post.data.content],
        )

    def format_posts(self, posts: list[Post]) -> list[FormattedPost]:
        return [
            FormattedPost(
                uid=post.uid,
                data=post.data,
                first_publication_date=self.format_date(post.first_publication_date),
            )
            for post in posts
        ]

    def format_date(self, value: str | None) -> str | None:
        """Formats a publication timestamp as ``DD MMM YYYY``, e.g. ``01 jan 2021``."""
        if not value:
            return None
        try:
            date = pendulum.parse(value)
        except ValueError:
            date = None
        if not isinstance(date, pendulum.DateTime):
            self._logger.warning(f"Unparsable publication date {value=}")
            return None
        date = date.in_timezone(self._settings.default_timezone)
        month = date.format("MMM", locale=self._settings.date_locale).rstrip(".")
        return f"{date.format('DD')} {month} {date.format('YYYY')}"

    @classmethod
    def reading_time(cls, content: list[ContentSection]) -> int:
        words = sum(len(as_text(section.body).split()) for section in content)
        return math.ceil(words / cls.WORDS_PER_MINUTE)

    async def _query_posts(self, page_size: int) -> dict[str, Any]:
        return await self._content.query(
            [Predicates.at("document.type", self._document_type)],
            fetch=[f"{self._document_type}.{field}" for field in self.SUMMARY_FIELDS],
            page_size=page_size,
        )

    def _parse_pagination(self, response: dict[str, Any]) -> PostPagination:
        try:
            return PostPagination.model_validate(response)
        except ValidationError as exc:
            self._logger.error(f"Malformed pagination response {exc=}")
            raise MalformedPaginationException(self.ERROR_MALFORMED)

    def _to_page(self, response: dict[str, Any]) -> PostsPage:
        pagination = self._parse_pagination(response)
        return PostsPage(
            next_page=pagination.next_page,
            results=self.format_posts(pagination.results),
        )


class PostListing:
    """Posts displayed on the list page together with the cursor to the next page.

    Further pages are appended in the browser by `/js/load_more.js`, which
    keeps a single request in flight and skips posts already displayed.
    """

    def __init__(self, page: PostsPage):
        self.posts: list[FormattedPost] = list(page.results)
        self.next_page: str | None = page.next_page

    @property
    def has_more(self) -> bool:
        return bool(self.next_page)
