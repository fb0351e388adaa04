"""
main.py
-------
FastAPI application factory and entry point.

Application lifecycle:
  1. Settings are loaded at import; invalid sprint configuration raises
     ConfigError and the process exits before serving.
  2. create_application() builds the app and its SettingsStore.
  3. lifespan context manager runs on startup / shutdown.
  4. Board errors are mapped to structured JSON failures.

Run with:
    uvicorn main:app --reload              # development
    uvicorn main:app --workers 4           # production (no --reload)
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse

from pippin.api.routes import board, export, projects, settings as settings_routes, tickets
from pippin.core.board_settings import SettingsStore
from pippin.core.config import Settings, settings
from pippin.core.exceptions import BoardError
from pippin.core.logging import configure_logging, get_logger
from pippin.db.session import engine

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Startup / shutdown lifecycle hook.

    Startup:
      - Configure structured logging

    Shutdown:
      - Dispose the async engine (graceful connection pool drain)
    """
    configure_logging()
    board_settings = app.state.settings_store.get()
    logger.info(
        "Starting up",
        app=settings.APP_NAME,
        env=settings.APP_ENV,
        account=settings.ACCOUNT_ID,
        theme=board_settings.theme.value,
        sprint_length_days=board_settings.sprint_length_days,
    )
    yield
    logger.info("Shutting down, disposing DB engine")
    await engine.dispose()


def create_application(config: Optional[Settings] = None) -> FastAPI:
    config = config or settings
    app = FastAPI(
        title=config.APP_NAME,
        description="Multi-tenant kanban board: projects, tickets, sprints and blockers.",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings_store = SettingsStore.from_config(config)

    # ── CORS ─────────────────────────────────────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Routers ───────────────────────────────────────────────────────────────
    app.include_router(board.router)
    app.include_router(projects.router)
    app.include_router(tickets.router)
    app.include_router(settings_routes.router)
    app.include_router(export.router)

    # ── Exception Handlers ────────────────────────────────────────────────────

    @app.exception_handler(BoardError)
    async def board_error_handler(request: Request, exc: BoardError) -> JSONResponse:
        logger.info(
            "Request rejected",
            path=request.url.path,
            method=request.method,
            error=exc.code,
            detail=exc.message,
        )
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        logger.error(
            "Unhandled exception",
            path=request.url.path,
            method=request.method,
            error=str(exc),
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "INTERNAL", "detail": "Internal server error"},
        )

    # ── Health Check ──────────────────────────────────────────────────────────

    @app.get("/", include_in_schema=False)
    async def root() -> RedirectResponse:
        return RedirectResponse(url="/board", status_code=status.HTTP_302_FOUND)

    @app.get("/health", tags=["Health"], summary="Service health check")
    async def health() -> dict:
        return {"status": "ok", "app": config.APP_NAME, "env": config.APP_ENV}

    return app


app = create_application()
