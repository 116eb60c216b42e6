# FILE: snapcode/routes/health.py
"""
Health check endpoint
"""
import logging
from fastapi import APIRouter, Depends

from snapcode import __version__
from snapcode.config import Settings, get_settings
from snapcode.services.image_store import ImageStore, get_image_store

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("")
async def health_check(
    settings: Settings = Depends(get_settings),
    image_store: ImageStore = Depends(get_image_store)
):
    """
    Health check endpoint
    Returns model_configured=true if a Gemini API key is present
    """
    return {
        "status": "healthy",
        "version": __version__,
        "environment": settings.environment,
        "model_configured": bool(settings.gemini_api_key),
        "default_model": settings.gemini_model,
        "stored_images": len(image_store)
    }
