from typing import Any

from fastapi import HTTPException, status


class ContentSourceUnavailableException(HTTPException):
    def __init__(self, detail: Any = None) -> None:
        super().__init__(status.HTTP_502_BAD_GATEWAY, detail=detail)


class InvalidCursorException(HTTPException):
    def __init__(self, detail: Any = None) -> None:
        super().__init__(status.HTTP_400_BAD_REQUEST, detail=detail)


class MalformedPaginationException(HTTPException):
    def __init__(self, detail: Any = None) -> None:
        super().__init__(status.HTTP_502_BAD_GATEWAY, detail=detail)


class PostNotFoundException(HTTPException):
    def __init__(self, detail: Any = None) -> None:
        super().__init__(status.HTTP_404_NOT_FOUND, detail=detail)
