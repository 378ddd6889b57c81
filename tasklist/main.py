import logging
from contextlib import asynccontextmanager
from typing import Optional

import redis
import uvicorn
from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from tasklist.config import Settings
from tasklist.errors import ConflictError, NotFoundError, ValidationError
from tasklist.logging_setup import setup_logging
from tasklist.routes import router
from tasklist.seed import seed
from tasklist.store import RedisTaskStore

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None,
               store: Optional[RedisTaskStore] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    owned_client = None
    if store is None:
        owned_client = settings.redis_client()
        store = RedisTaskStore(owned_client)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if settings.seed_on_startup:
            await run_in_threadpool(seed, store)
        yield
        # a store handed in by the caller is the caller's to close
        if owned_client is not None:
            owned_client.close()

    app = FastAPI(title="tasklist", lifespan=lifespan)
    app.state.settings = settings
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.cors_origin],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ValidationError)
    async def validation_error(request: Request, exc: ValidationError):
        logger.info("Rejected %s %s: %s", request.method, request.url.path, exc.detail)
        return PlainTextResponse(exc.detail, status_code=400)

    @app.exception_handler(RequestValidationError)
    async def malformed_request(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        if any(e.get("type") == "json_invalid" for e in errors):
            detail = "Malformed JSON body"
        else:
            detail = "Invalid request body"
        logger.info("Rejected %s %s: %s", request.method, request.url.path, errors)
        return PlainTextResponse(detail, status_code=400)

    @app.exception_handler(NotFoundError)
    async def not_found(request: Request, exc: NotFoundError):
        return PlainTextResponse(exc.detail, status_code=404)

    @app.exception_handler(ConflictError)
    async def conflict(request: Request, exc: ConflictError):
        return PlainTextResponse(exc.detail, status_code=409)

    @app.exception_handler(redis.RedisError)
    async def store_failure(request: Request, exc: redis.RedisError):
        logger.exception("Task store failure on %s %s", request.method, request.url.path,
                         exc_info=exc)
        return PlainTextResponse("Task store unavailable", status_code=500)

    @app.get("/health-check", response_class=PlainTextResponse)
    async def health():
        return "OK"

    app.include_router(router)
    return app


def run() -> None:
    settings = Settings.from_env()
    setup_logging(settings.log_level)
    uvicorn.run("tasklist.main:create_app", factory=True, host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    run()
