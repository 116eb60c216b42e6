# FILE: snapcode/routes/models.py
"""
Gemini model listing (diagnostics)
"""
import logging
from fastapi import APIRouter, Depends

from snapcode.config import Settings, get_settings
from snapcode.errors import ModelConfigurationError
from snapcode.providers import gemini

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/gemini-models")
async def list_gemini_models(settings: Settings = Depends(get_settings)):
    """Return the raw Gemini models list"""
    if not settings.gemini_api_key:
        raise ModelConfigurationError("GEMINI_API_KEY not configured")

    listing = await gemini.list_available_models(
        api_key=settings.gemini_api_key,
        base_url=settings.gemini_api_base_url
    )
    logger.info(f"Listed {len(listing.get('models', []))} Gemini models")
    return listing
