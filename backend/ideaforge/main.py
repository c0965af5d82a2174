"""
IdeaForge API Server
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ideaforge.adapters.gemini import clear_genai_client_cache
from ideaforge.api import router
from ideaforge.api.health import router as health_router
from ideaforge.config import settings
from ideaforge.db import dispose_engine
from ideaforge.services.http_client import close_http_client

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
# httpx logs full request URLs at INFO, and Gemini model listing carries the key in the query
logging.getLogger("httpx").setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan manager."""
    logger.info(f"Starting ideaforge on port {settings.port}")
    if not settings.gemini_api_key:
        logger.warning("GEMINI_API_KEY not set; Gemini calls need a per-user key")
    yield
    await close_http_client()
    clear_genai_client_cache()
    await dispose_engine()
    logger.info("Shutting down ideaforge")


app = FastAPI(
    title="ideaforge",
    description="Document, idea and UI mockup generation over pluggable AI providers",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {"message": "Welcome to ideaforge", "docs": "/docs"}


app.include_router(health_router)
app.include_router(router, prefix="/api")
