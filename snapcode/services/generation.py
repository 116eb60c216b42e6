# FILE: snapcode/services/generation.py
"""
Screenshot-to-component generation

Flow per request:
1. Resolve the image (request URL, else the stored upload) and description
2. Build the prompt parts and call the model once
3. Sanitize the output
4. Repair once if it still looks broken
"""
import base64
import logging
import re
from typing import List, Optional, Union

from snapcode.config import Settings
from snapcode.models.generation import (
    GenerateCodeRequest, ImageRecord, InlineImage, PromptPart, RemoteImage
)
from snapcode.providers.gemini import normalize_model_name
from snapcode.services.code_sanitizer import sanitize_generated_code
from snapcode.services.image_store import ImageStore
from snapcode.services.prompts import DESCRIBE_PROMPT, build_user_prompt, get_coding_prompt
from snapcode.services.repair import maybe_repair

logger = logging.getLogger(__name__)

_DATA_URL_RE = re.compile(r"^data:([^;,]+);base64,(.*)$", re.DOTALL)
_REMOTE_URL_RE = re.compile(r"^https?://", re.IGNORECASE)


def parse_image_reference(url: Optional[str]) -> Optional[Union[InlineImage, RemoteImage]]:
    """
    data:<mime>;base64,<payload> -> InlineImage
    http(s)://...                -> RemoteImage (media type unknown)
    anything else                -> None
    """
    if not url:
        return None

    match = _DATA_URL_RE.match(url)
    if match:
        return InlineImage(data=match.group(2), mime_type=match.group(1))

    if _REMOTE_URL_RE.match(url):
        return RemoteImage(uri=url)

    return None


def to_data_url(data: bytes, mime_type: str) -> str:
    """Encode raw bytes as a data URI"""
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


def build_prompt_parts(
    request: GenerateCodeRequest,
    record: Optional[ImageRecord] = None
) -> List[PromptPart]:
    """
    Assemble the generation prompt.

    The stored description wins over the one the client forwarded. With an
    image the parts are [system, user, image]; without one the prompt is a
    single text part.
    """
    system = get_coding_prompt(request.shadcn)
    description = (record.description if record else None) or request.image_description

    image_url = request.image_url or (record.data_url if record else None)
    image = parse_image_reference(image_url)

    user = build_user_prompt(has_image=image is not None, description=description, image_url=image_url)

    if image is not None:
        return [system, user, image]
    return [f"{system}\n\n{user}"]


async def generate_code(
    request: GenerateCodeRequest,
    model_client,
    image_store: ImageStore,
    settings: Settings,
    correlation_id: Optional[str] = None
) -> str:
    """
    Generate component source for the request.

    Model errors on the first call propagate to the caller; the repair
    step never raises.
    """
    model = normalize_model_name(request.model, default=settings.gemini_model)

    record = image_store.get(request.image_id)
    if request.image_id and record is None:
        logger.info(f"[GENERATE] [{correlation_id}] Unknown or expired image id {request.image_id}")

    parts = build_prompt_parts(request, record)
    logger.info(
        f"[GENERATE] [{correlation_id}] model={model}, image={len(parts) > 1}, "
        f"shadcn={request.shadcn}"
    )

    raw = await model_client.generate(model, parts, correlation_id=correlation_id)

    sanitized = sanitize_generated_code(raw)
    result = await maybe_repair(
        sanitized,
        model_client,
        model,
        attempts=settings.repair_attempts,
        correlation_id=correlation_id
    )

    logger.info(f"[GENERATE] [{correlation_id}] Done: {len(result):,} chars")
    return result


async def describe_image(model_client, image: InlineImage, model: str) -> Optional[str]:
    """Best-effort textual description of an uploaded image (None on failure)"""
    try:
        text = await model_client.generate(normalize_model_name(model), [DESCRIBE_PROMPT, image])
    except Exception as e:
        logger.warning(f"[UPLOAD] Image description failed: {e}")
        return None

    text = (text or "").strip()
    return text or None
