import json
from typing import Any
from urllib.parse import urlsplit

import httpx
from aws_lambda_powertools import Logger
from httpx import HTTPError
from starlette import status

from app.exceptions import (
    ContentSourceUnavailableException,
    InvalidCursorException,
    MalformedPaginationException,
)
from app.middlewares import X_CORRELATION_ID, correlation_id
from app.settings import Settings


class Predicates:
    @staticmethod
    def at(path: str, value: str) -> str:
        return f"[at({path}, {json.dumps(value, ensure_ascii=False)})]"

    @staticmethod
    def query(predicates: list[str]) -> str:
        return f"[{''.join(predicates)}]"


class ContentService:
    """Client for the Prismic REST API v2.

    Every call opens its own ``httpx.AsyncClient``: documents are looked up
    against the repository's master ref, which is resolved first.
    """

    ERROR_UNAVAILABLE = "The content source is unavailable"
    ERROR_MALFORMED = "The content source returned a malformed response"
    ERROR_INVALID_CURSOR = "The pagination cursor does not belong to the content source"

    def __init__(self, settings: Settings | None = None):
        self._logger = Logger(utc=True)
        self._settings = settings or Settings()

    @property
    def api_endpoint(self) -> str:
        return self._settings.prismic_api_endpoint.rstrip("/")

    async def query(
        self,
        predicates: list[str],
        fetch: list[str] | None = None,
        page_size: int = 20,
        page: int = 1,
    ) -> dict[str, Any]:
        async with self._client() as client:
            params = {
                "ref": await self._get_master_ref(client),
                "q": Predicates.query(predicates),
                "pageSize": page_size,
                "page": page,
            }
            if fetch:
                params["fetch"] = ",".join(fetch)
            if self._settings.prismic_access_token:
                params["access_token"] = self._settings.prismic_access_token
            self._logger.debug(f"Querying documents {params=}")
            response = await self._get_json(
                client, f"{self.api_endpoint}/documents/search", params
            )
        if not isinstance(response.get("results"), list):
            self._logger.error(f"Search response without results {response=}")
            raise MalformedPaginationException(self.ERROR_MALFORMED)
        return response

    async def get_by_uid(self, document_type: str, uid: str) -> dict[str, Any] | None:
        response = await self.query(
            [Predicates.at(f"my.{document_type}.uid", uid)], page_size=1
        )
        if not response["results"]:
            self._logger.debug(f"Document not found {document_type=} {uid=}")
            return None
        return response["results"][0]

    async def get_page(self, next_page: str) -> dict[str, Any]:
        self.validate_cursor(next_page)
        async with self._client() as client:
            return await self._get_json(client, next_page)

    def validate_cursor(self, next_page: str) -> None:
        cursor = urlsplit(next_page)
        endpoint = urlsplit(self.api_endpoint)
        if cursor.scheme not in ("http", "https") or cursor.netloc != endpoint.netloc:
            self._logger.warning(f"Rejected pagination cursor {next_page=}")
            raise InvalidCursorException(self.ERROR_INVALID_CURSOR)

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self._settings.http_timeout,
            headers={X_CORRELATION_ID: correlation_id.get()},
        )

    async def _get_master_ref(self, client: httpx.AsyncClient) -> str:
        params = {}
        if self._settings.prismic_access_token:
            params["access_token"] = self._settings.prismic_access_token
        api = await self._get_json(client, self.api_endpoint, params)
        for ref in api.get("refs") or []:
            if ref.get("isMasterRef"):
                return ref["ref"]
        self._logger.error(f"Master ref is missing from {api=}")
        raise MalformedPaginationException(self.ERROR_MALFORMED)

    async def _get_json(
        self,
        client: httpx.AsyncClient,
        url: str,
        params: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        try:
            response = await client.get(url, params=params)
        except HTTPError as exc:
            self._logger.exception("Unexpected error occurred", exc_info=exc)
            raise ContentSourceUnavailableException(self.ERROR_UNAVAILABLE)
        match response.status_code:
            case status.HTTP_200_OK:
                try:
                    body = response.json()
                except ValueError:
                    self._logger.error(f"Invalid JSON from {url=}")
                    raise MalformedPaginationException(self.ERROR_MALFORMED)
                if not isinstance(body, dict):
                    raise MalformedPaginationException(self.ERROR_MALFORMED)
                return body
            case _:
                self._logger.error(f"Unexpected response {response=} {url=}")
                raise ContentSourceUnavailableException(self.ERROR_UNAVAILABLE)
