"""ASGI application for the portfolio dashboard."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from portfolio_dashboard import __version__
from portfolio_dashboard.api.routers import dashboard_router, holdings_router, quotes_router
from portfolio_dashboard.app_context import get_app_context
from portfolio_dashboard.config.logging_config import setup_logging
from portfolio_dashboard.config.settings import get_settings
from portfolio_dashboard.core.exceptions import AppError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    context = get_app_context()
    await context.start(app)
    # The first snapshot loads in the background so startup never waits on quotes
    context.begin_initial_load()
    if context.settings.auto_refresh_enabled:
        context.scheduler.start()
    try:
        yield
    finally:
        await context.close()


settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    description="Live portfolio dashboard for NSE/BSE holdings",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(quotes_router)
app.include_router(holdings_router)
app.include_router(dashboard_router)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Render domain errors as ``{"error", "message"}`` with the error's status."""
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.code, "message": exc.message},
    )


@app.get("/health")
def health_check() -> dict[str, str]:
    return {"status": "healthy"}


@app.get("/")
def root() -> dict[str, str]:
    return {
        "app": settings.app_name,
        "version": __version__,
        "docs": "/docs",
    }
