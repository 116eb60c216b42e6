# FILE: snapcode/routes/upload.py
"""
Image upload endpoint
"""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Request
from starlette.datastructures import UploadFile

from snapcode.config import Settings, get_settings
from snapcode.models.generation import ImageRecord, InlineImage, UploadResponse
from snapcode.providers.registry import ProviderRegistry, get_optional_provider_registry
from snapcode.services.generation import describe_image, to_data_url
from snapcode.services.image_store import ImageStore, get_image_store

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/upload")
async def upload_image(
    request: Request,
    registry: Optional[ProviderRegistry] = Depends(get_optional_provider_registry),
    image_store: ImageStore = Depends(get_image_store),
    settings: Settings = Depends(get_settings)
):
    """
    Accept a multipart image upload (field "file").

    Returns the image as a data URL plus an imageId that the generate
    endpoint can use to find the stored description.
    """
    content_type = request.headers.get("content-type", "")
    if "multipart/form-data" not in content_type:
        raise HTTPException(status_code=400, detail="Expected multipart/form-data")

    form = await request.form()
    upload = form.get("file")
    if not isinstance(upload, UploadFile):
        raise HTTPException(status_code=400, detail="No file provided")

    try:
        data = await upload.read()
        mime_type = upload.content_type or "application/octet-stream"
        data_url = to_data_url(data, mime_type)
        logger.info(f"[UPLOAD] {upload.filename}: {len(data):,} bytes ({mime_type})")

        description = None
        if registry is not None and settings.describe_on_upload:
            image = InlineImage(data=data_url.split(",", 1)[1], mime_type=mime_type)
            description = await describe_image(registry, image, settings.gemini_describe_model)

        image_id = image_store.put(ImageRecord(data_url=data_url, description=description, name=upload.filename))
    except Exception as e:
        logger.error(f"[UPLOAD] Failed to process file: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to process file")

    return UploadResponse(
        url=data_url,
        name=upload.filename,
        image_id=image_id,
        description=description
    ).model_dump(by_alias=True)
