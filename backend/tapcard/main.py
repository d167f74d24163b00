# backend/tapcard/main.py
from __future__ import annotations

from contextlib import asynccontextmanager
import logging
from typing import AsyncGenerator

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .core.config import settings
from .core.constants import API_VERSION, BRAND_NAME
from .database import init_db
from .errors import register_error_handlers
from .routes import analytics, auth, connections, health, metrics, profiles, scan

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def app_lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Create missing tables on startup."""
    logger.info(f"{BRAND_NAME} API starting up...")
    logger.info(f"Environment: {settings.environment}")
    init_db()
    yield
    logger.info(f"{BRAND_NAME} API shutting down...")


def create_app() -> FastAPI:
    """Build the application with routers and error handlers registered."""
    application = FastAPI(
        title=settings.app_name,
        description="Digital business cards shared by NFC tag, QR code or link",
        version=API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=app_lifespan,
    )
    register_error_handlers(application)

    application.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.public_base_url],
        allow_credentials=True,
        allow_methods=["GET", "HEAD", "OPTIONS", "POST", "PATCH"],
        allow_headers=["*"],
    )

    api = APIRouter(prefix="/api")
    api.include_router(health.router)
    api.include_router(auth.router, prefix="/auth")
    api.include_router(profiles.router, prefix="/profile")
    api.include_router(scan.router, prefix="/scan")
    api.include_router(connections.router, prefix="/connections")
    api.include_router(analytics.router, prefix="/analytics")
    application.include_router(api)

    # Prometheus scrapes the bare path
    application.include_router(metrics.router)
    return application


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "tapcard.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.environment == "development",
    )
