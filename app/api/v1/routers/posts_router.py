from aws_lambda_powertools import Logger
from fastapi import APIRouter, Query, status

from app.models.response import PostsPage, PostView
from app.services.post_service import PostService

logger = Logger(utc=True)

post_service = PostService()
router = APIRouter()


@router.get(
    "",
    response_model=PostsPage,
    status_code=status.HTTP_200_OK,
)
async def get_posts(next_page: str | None = Query(default=None)) -> PostsPage:
    if next_page:
        return await post_service.load_more(next_page)
    return await post_service.get_posts_pagination()


@router.get(
    "/{uid}",
    status_code=status.HTTP_200_OK,
    response_model_exclude_none=True,
)
async def get_post(uid: str) -> PostView:
    return await post_service.get_post(uid)
