"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from pocketledger.app_context import get_app_context
from pocketledger.config.settings import get_settings
from pocketledger.config.logging_config import setup_logging
from pocketledger.repositories.sqlalchemy.database import init_db
from pocketledger.api.routers import (
    accounts_router,
    categories_router,
    transactions_router,
    ledger_router,
    sync_router,
)
from pocketledger.core.exceptions import AppError, PersistenceError

logger = logging.getLogger(__name__)

ERROR_STATUS = {
    "VALIDATION_ERROR": 400,
    "NOT_FOUND": 404,
    "PERSISTENCE_ERROR": 503,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Prepare logging and the server store; release the ledger backend on shutdown."""
    setup_logging()
    init_db()
    logger.info("Serving with %s backend", get_settings().effective_backend())
    yield
    get_app_context().close()


settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    description="Personal finance ledger with synchronised account balances",
    version=settings.app_version,
    lifespan=lifespan,
)

# Include routers
app.include_router(accounts_router)
app.include_router(categories_router)
app.include_router(transactions_router)
app.include_router(ledger_router)
app.include_router(sync_router)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Map application errors to HTTP statuses."""
    if isinstance(exc, PersistenceError):
        logger.warning("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=ERROR_STATUS.get(exc.code, 400),
        content={"error": exc.code, "message": exc.message},
    )


@app.get("/health")
def health_check() -> dict[str, str]:
    """Health check endpoint, naming the active persistence backend."""
    return {"status": "healthy", "backend": get_settings().effective_backend()}


@app.get("/")
def root() -> dict[str, str]:
    """Root endpoint with API info."""
    return {
        "app": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }
