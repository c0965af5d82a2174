"""API routers for IdeaForge."""

from fastapi import APIRouter

from ideaforge.api.documents import router as documents_router
from ideaforge.api.generate import router as generate_router
from ideaforge.api.image import router as image_router
from ideaforge.api.models import router as models_router
from ideaforge.api.settings import router as settings_router

router = APIRouter()
router.include_router(settings_router, tags=["settings"])
router.include_router(documents_router, tags=["documents"])
router.include_router(generate_router, tags=["generation"])
router.include_router(image_router, tags=["image"])
router.include_router(models_router, tags=["models"])

__all__ = ["router"]
