import logging
from contextlib import AsyncExitStack

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.connections import mongo_lifespan
from app.connections.redis import redis_lifespan
from app.api.auth import router as auth_router
from app.api.user import router as user_router
from app.api.favorite import router as favorite_router
from app.api.movie import router as movie_router
from app.services.errors import AppError
from app.utils.config import settings
from app.utils.log import setup_logging
from app.utils.response import error_response


setup_logging()
logger = logging.getLogger(__name__)


async def combined_lifespan(app: FastAPI):
    async with AsyncExitStack() as stack:
        await stack.enter_async_context(mongo_lifespan(app))
        await stack.enter_async_context(redis_lifespan(app))

        yield


app = FastAPI(title="Streaming Catalog API", version="0.1.0", lifespan=combined_lifespan)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.details)
    return error_response(exc.status_code, **exc.to_dict())


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception("%s %s crashed", request.method, request.url.path)
    return error_response(500, "SERVER_ERROR", "Server error", {"reason": str(exc)})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = [
        {"field": ".".join(str(part) for part in err["loc"][1:]), "message": err["msg"]}
        for err in exc.errors()
    ]
    return error_response(400, "VALIDATION_ERROR", "Invalid request data", {"errors": errors})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    code = "RATE_LIMITED" if exc.status_code == 429 else f"HTTP_{exc.status_code}"
    return error_response(exc.status_code, code, str(exc.detail))


@app.get("/health")
def health() -> dict:
    return {"status": "ok", "app": settings.app_name}


app.include_router(auth_router, prefix="/api/auth")
app.include_router(user_router, prefix="/api/users")
app.include_router(favorite_router, prefix="/api/favorites")
app.include_router(movie_router, prefix="/api/movies")
