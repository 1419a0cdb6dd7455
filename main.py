"""
main.py
-------
FastAPI application factory and entry point.

Application lifecycle:
  1. App is created by create_application(registry).
  2. lifespan context manager runs on startup / shutdown.
  3. One CRUD router per registered entity, plus the tenants router, is
     mounted under settings.API_PREFIX.
  4. Global exception handlers map domain errors to HTTP responses.

Run with:
    uvicorn main:app --reload              # development
    uvicorn main:app --workers 4           # production (no --reload)
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from backoffice.api.routes import tenants
from backoffice.api.routes.records import build_crud_router
from backoffice.core.config import settings
from backoffice.core.exceptions import AppError, UnscopedQueryError, field_errors_from_pydantic
from backoffice.core.logging import (
    bind_request_context,
    clear_request_context,
    configure_logging,
    get_logger,
)
from backoffice.db.session import database
from backoffice.registry import EntityRegistry, build_default_registry

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Startup / shutdown lifecycle hook.

    Startup:
      - Configure structured logging
      - Create the engine and connection pool
      - Create tables when DB_CREATE_ALL is set (local runs, tests)

    Shutdown:
      - Dispose the async engine (graceful connection pool drain)
    """
    configure_logging()
    logger.info(
        "Starting up",
        app=settings.APP_NAME,
        env=settings.APP_ENV,
        debug=settings.DEBUG,
        entities=[e.name for e in app.state.registry],
    )
    database.init()
    if settings.DB_CREATE_ALL:
        await database.create_all()
    yield
    logger.info("Shutting down, disposing DB engine")
    await database.close()


def create_application(registry: Optional[EntityRegistry] = None) -> FastAPI:
    app = FastAPI(
        title=settings.APP_NAME,
        description=(
            "Multi-tenant back-office API: GST, CFO and accounting records "
            "with tenant isolation enforced at the data layer."
        ),
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.registry = registry if registry is not None else build_default_registry()

    # ── CORS ─────────────────────────────────────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Total-Count"],
    )

    # ── Request log context ───────────────────────────────────────────────────

    @app.middleware("http")
    async def request_log_context(request: Request, call_next):
        clear_request_context()
        bind_request_context(method=request.method, path=request.url.path)
        return await call_next(request)

    # ── Routers ───────────────────────────────────────────────────────────────
    app.include_router(tenants.router, prefix=settings.API_PREFIX)
    for entity in app.state.registry:
        app.include_router(build_crud_router(entity), prefix=settings.API_PREFIX)

    # ── Global Exception Handlers ─────────────────────────────────────────────

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        if isinstance(exc, UnscopedQueryError):
            return await unhandled_exception_handler(request, exc)
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={
                "message": "Request failed validation",
                "errors": field_errors_from_pydantic(exc.errors()),
            },
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        logger.error(
            "Unhandled exception",
            path=request.url.path,
            method=request.method,
            error=str(exc),
            exc_info=exc,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Internal server error"},
        )

    # ── Health Check ──────────────────────────────────────────────────────────

    @app.get("/health", tags=["Health"], summary="Service health check")
    async def health() -> dict:
        return {"status": "ok", "app": settings.APP_NAME, "env": settings.APP_ENV}

    return app


app = create_application()
