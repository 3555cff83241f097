import pytest

from app.services.content_service import ContentService
from app.services.page_service import PageService
from app.services.page_store import PageStore
from app.services.post_service import PostService
from app.settings import Settings


@pytest.fixture
def content_service(settings: Settings) -> ContentService:
    return ContentService(settings)


@pytest.fixture
def post_service(content_service: ContentService, settings: Settings) -> PostService:
    return PostService(content_service, settings)


@pytest.fixture
def page_store() -> PageStore:
    return PageStore()


@pytest.fixture
def page_service(
    post_service: PostService, page_store: PageStore, settings: Settings
) -> PageService:
    return PageService(post_service, page_store, settings)
