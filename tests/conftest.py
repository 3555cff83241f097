import os

import pytest
import respx
from httpx import Response
from starlette import status

from app.settings import Settings
from tests.helpers.utils import (
    API_ENDPOINT,
    API_HOST,
    MASTER_REF,
    SEARCH_PATH,
    paragraph,
    search_response,
)


def pytest_configure():
    os.environ["PRISMIC_API_ENDPOINT"] = API_ENDPOINT
    os.environ["DEFAULT_TIMEZONE"] = "UTC"
    os.environ["DATE_LOCALE"] = "pt_br"


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def make_document(faker):
    def make(
        uid: str | None = None,
        content: list[dict] | None = None,
        first_publication_date: str | None = "2021-03-25T19:25:28+0000",
    ) -> dict:
        uid = uid or faker.slug()
        return {
            "id": faker.uuid4(),
            "uid": uid,
            "type": "posts",
            "href": f"{API_ENDPOINT}/documents/search?ref={MASTER_REF}",
            "tags": [],
            "first_publication_date": first_publication_date,
            "last_publication_date": first_publication_date,
            "lang": "pt-br",
            "data": {
                "title": faker.sentence(),
                "subtitle": faker.sentence(),
                "author": faker.name(),
                "banner": {"url": faker.image_url(), "alt": None},
                "content": content
                if content is not None
                else [
                    {
                        "heading": faker.sentence(),
                        "body": [paragraph(faker.paragraph()) for _ in range(3)],
                    }
                ],
            },
        }

    return make


@pytest.fixture
def documents(make_document) -> list[dict]:
    return [make_document() for _ in range(3)]


@pytest.fixture
def prismic_mock():
    with respx.mock(assert_all_called=False) as router:
        router.get(host=API_HOST, path="/api/v2", name="api").mock(
            return_value=Response(
                status_code=status.HTTP_200_OK,
                json={
                    "refs": [
                        {
                            "id": "master",
                            "ref": MASTER_REF,
                            "label": "Master",
                            "isMasterRef": True,
                        }
                    ],
                    "types": {"posts": "Posts"},
                },
            )
        )
        router.get(host=API_HOST, path=SEARCH_PATH, name="search")
        yield router


@pytest.fixture
def mock_search_pages(prismic_mock, documents):
    """Serves one document per page, following the ``page`` query parameter."""

    def search(request):
        page = int(request.url.params.get("page", "1"))
        return Response(
            status_code=status.HTTP_200_OK,
            json=search_response(
                [documents[page - 1]], page=page, total_pages=len(documents)
            ),
        )

    prismic_mock.routes["search"].side_effect = search
    return prismic_mock
