"""FastAPI application entrypoint with Lambda handler."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from mangum import Mangum

from .config import settings
from .routes import exports, health, videos, view
from .services.workspace import get_workspace

# Configure logging
logging.basicConfig(
    level=logging.INFO if not settings.debug else logging.DEBUG,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown events."""
    logger.info(f"Starting {settings.service_name} in {settings.environment} mode")
    if not settings.gemini_api_key:
        logger.warning("VIRALITY_GEMINI_API_KEY is not set; analyses will fail")
    yield
    if get_workspace.cache_info().currsize:
        await get_workspace().close()
    logger.info(f"Shutting down {settings.service_name}")


app = FastAPI(
    title="Virality Service",
    description="Video caption analysis queue with PDF/DOCX reports",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router)
app.include_router(videos.router)
app.include_router(view.router)
app.include_router(exports.router)

# Lambda handler via Mangum. The queue lives in this process and analyses run
# after the response is sent, so deploy with reserved concurrency of 1 and
# expect queued work to pause while the container is frozen.
handler = Mangum(app, lifespan="off")
