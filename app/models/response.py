import uuid
from typing import Any, Sequence

from humps import camelize
from pydantic import BaseModel, ConfigDict

from app.models.post import Post, PostDetailData


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=camelize, populate_by_name=True)


class ErrorResponse(CamelModel):
    status: int
    id: uuid.UUID
    message: Any


class ValidationErrorResponse(ErrorResponse):
    errors: Sequence[Any]


class FormattedPost(Post):
    """A post summary whose publication date is a display string."""


class PostsPage(BaseModel):
    next_page: str | None = None
    results: list[FormattedPost]


class PostView(BaseModel):
    uid: str | None = None
    first_publication_date: str | None = None
    reading_time: int
    data: PostDetailData
    sections_html: list[str]
