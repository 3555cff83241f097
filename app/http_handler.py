import uuid
from contextlib import asynccontextmanager
from pathlib import Path

import uvicorn
from aws_lambda_powertools import Logger
from aws_lambda_powertools.logging.logger import set_package_logger
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import HTMLResponse, Response, UJSONResponse
from fastapi.staticfiles import StaticFiles
from mangum import Mangum
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api import pages_router
from app.api.v1.api import router as api_v1_router
from app.middlewares import CorrelationIdMiddleware
from app.models.response import ErrorResponse, ValidationErrorResponse
from app.settings import Settings

settings = Settings()

if settings.debug:
    set_package_logger()

logger = Logger(utc=True)

STATIC_DIR = Path(__file__).resolve().parent / "static"


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        await pages_router.page_service.prebuild()
    except HTTPException:
        logger.exception("Pre-rendering failed, pages will be rendered on demand")
    yield


app = FastAPI(
    debug=settings.debug, title=settings.app_name, version="1.0.0", lifespan=lifespan
)
app.add_middleware(CorrelationIdMiddleware)
app.add_middleware(GZipMiddleware)
app.include_router(api_v1_router)
app.include_router(pages_router.router)
app.mount("/images", StaticFiles(directory=STATIC_DIR / "images"), name="images")
app.mount("/js", StaticFiles(directory=STATIC_DIR / "js"), name="js")

handler = Mangum(app)
handler = logger.inject_lambda_context(handler, clear_state=True, log_event=True)


def _is_api_request(request: Request) -> bool:
    return request.url.path.startswith(api_v1_router.prefix)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(
    request: Request, error: StarletteHTTPException
) -> Response:
    error_id = uuid.uuid4()
    logger.exception(f"Received http exception {error_id=}")
    if not _is_api_request(request):
        return HTMLResponse(
            pages_router.page_service.render_error(error.status_code, error.detail),
            status_code=error.status_code,
        )
    return UJSONResponse(
        content=jsonable_encoder(
            ErrorResponse(status=error.status_code, id=error_id, message=error.detail)
        ),
        status_code=error.status_code,
    )


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(
    request: Request, error: RequestValidationError
) -> UJSONResponse:
    error_id = uuid.uuid4()
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    logger.exception(f"Received request validation error {error_id=}")
    return UJSONResponse(
        content=jsonable_encoder(
            ValidationErrorResponse(
                status=status_code,
                id=error_id,
                message=str(error),
                errors=error.errors(),
            )
        ),
        status_code=status_code,
    )


if __name__ == "__main__":
    uvicorn.run("app.http_handler:app", host="localhost", port=8080, reload=True)
