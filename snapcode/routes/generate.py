# FILE: snapcode/routes/generate.py
"""
Code generation endpoint
"""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, Header
from fastapi.responses import StreamingResponse

from snapcode.config import Settings, get_settings
from snapcode.models.generation import GenerateCodeRequest
from snapcode.providers.registry import ProviderRegistry, get_provider_registry
from snapcode.services.correlation import CORRELATION_HEADER, resolve_correlation_id
from snapcode.services.generation import generate_code
from snapcode.services.image_store import ImageStore, get_image_store

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/generate-code")
async def generate_code_endpoint(
    request: GenerateCodeRequest,
    registry: ProviderRegistry = Depends(get_provider_registry),
    image_store: ImageStore = Depends(get_image_store),
    settings: Settings = Depends(get_settings),
    x_correlation_id: Optional[str] = Header(None)
):
    """
    Generate a React component for the image.

    The sanitized (and possibly repaired) code is streamed back as a
    single text/plain chunk.
    """
    correlation_id = resolve_correlation_id(x_correlation_id)

    code = await generate_code(
        request,
        registry,
        image_store,
        settings,
        correlation_id=correlation_id
    )

    return StreamingResponse(
        iter([code.encode("utf-8")]),
        media_type="text/plain",
        headers={"Cache-Control": "no-cache", CORRELATION_HEADER: correlation_id}
    )
