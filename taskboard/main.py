import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from taskboard.api.http import (
    health_router, auth_router, canvases_router, shares_router, shared_router
)
from taskboard.config import settings
from taskboard.core.db import create_tables
from taskboard.core.errors import TaskboardError
from taskboard.core.logging import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.log_level)
    if settings.auto_create_tables:
        await create_tables()
        logger.info("Database tables are ready")
    yield


app = FastAPI(
    title="Taskboard",
    description="Визуальная доска задач с совместным доступом по ссылкам",
    version="1.0.0",
    lifespan=lifespan
)

# Настройка CORS для работы с frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"

    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid value")
    return f"{location}: {message}" if location else message


@app.exception_handler(TaskboardError)
async def taskboard_error_handler(request: Request, exc: TaskboardError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return error_response(exc.status_code, exc.message)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return error_response(status.HTTP_400_BAD_REQUEST, validation_message(exc))


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return error_response(exc.status_code, str(exc.detail))


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


# Ссылки подключаются первыми, чтобы /shared/{token} не совпадал с /{canvas_id}
app.include_router(health_router)
app.include_router(auth_router)
app.include_router(shared_router)
app.include_router(canvases_router)
app.include_router(shares_router)


@app.get("/")
async def root():
    """Корневой эндпоинт"""
    return {
        "message": "Taskboard API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health"
    }
