from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import uvicorn
from loguru import logger

from app.core.config import AppSettings, get_app_settings, get_telegram_settings
from app.core.telegram import create_bot
from app.db.registry import create_registry
from app.api import api_router


def setup_logging(settings: AppSettings):
    logger.add(
        settings.log_file,
        rotation=settings.log_rotation,
        compression=settings.log_compression.value,
        format=settings.log_format,
        level=settings.app_log_level.value.upper(),
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = app.state.settings
    app.state.registry = create_registry(settings)
    app.state.bot = create_bot(get_telegram_settings())
    logger.info(f"{settings.app_name} started, {len(app.state.registry)} videos loaded")
    yield
    logger.info("Shutting down...")
    await app.state.bot.session.close()


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"status": "error", "message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid request")
    logger.warning(f"Rejected {request.method} {request.url.path}: {message} ({location or 'body'})")
    return JSONResponse(
        status_code=400,
        content={"status": "error", "message": f"{location}: {message}" if location else message},
    )


def create_app(settings: Optional[AppSettings] = None):
    settings = settings or get_app_settings()
    app = FastAPI(
        title=settings.app_name,
        description="API for the clip review tool",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    setup_logging(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info(f"[Request] {request.method} {request.url.path}")
        return await call_next(request)

    @app.get("/")
    def read_root():
        return {"message": "Welcome to Clip Review"}
    @app.get("/health")
    async def health_check():
        return {"status": "ok"}
    app.include_router(api_router)
    
    return app

app = create_app()

if __name__ == "__main__":
    settings = get_app_settings()
    uvicorn.run(
        "app.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=settings.app_reload,
    )
