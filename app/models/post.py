from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Span(BaseModel):
    start: int
    end: int
    type: str
    data: dict[str, Any] | None = None


class RichTextBlock(BaseModel):
    model_config = ConfigDict(extra="allow")

    type: str
    text: str = ""
    spans: list[Span] = Field(default_factory=list)
    url: str | None = None
    alt: str | None = None
    dimensions: dict[str, int] | None = None
    oembed: dict[str, Any] | None = None


class ContentSection(BaseModel):
    heading: str | None = None
    body: list[RichTextBlock] = Field(default_factory=list)


class Banner(BaseModel):
    url: str | None = None
    alt: str | None = None


class PostSummaryData(BaseModel):
    title: str | None = None
    subtitle: str | None = None
    author: str | None = None


class PostDetailData(BaseModel):
    title: str | None = None
    banner: Banner = Field(default_factory=Banner)
    author: str | None = None
    content: list[ContentSection] = Field(default_factory=list)


class Post(BaseModel):
    """A post summary as listed on the home page."""

    uid: str | None = None
    first_publication_date: str | None = None
    data: PostSummaryData


class PostDetail(BaseModel):
    uid: str | None = None
    first_publication_date: str | None = None
    data: PostDetailData


class PostPagination(BaseModel):
    next_page: str | None
    results: list[Post]
