# FILE: snapcode/providers/gemini.py
"""
Gemini (Google) provider adapter
"""
import base64
import logging
from typing import Any, Dict, Optional, Sequence

import httpx
from google import genai
from google.genai import types

from snapcode.errors import ModelServiceError
from snapcode.models.generation import InlineImage, PromptPart, RemoteImage
from snapcode.providers.base import ModelProvider

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"


def normalize_model_name(model: Optional[str], default: str = DEFAULT_MODEL) -> str:
    """gemini-2.5-flash -> models/gemini-2.5-flash (empty falls back to default)"""
    name = (model or "").strip() or default
    return name if name.startswith("models/") else f"models/{name}"


def to_part(part: PromptPart) -> types.Part:
    """Convert a prompt part into a Gemini SDK part"""
    if isinstance(part, InlineImage):
        return types.Part(
            inline_data=types.Blob(
                data=base64.b64decode(part.data),
                mime_type=part.mime_type,
            )
        )
    if isinstance(part, RemoteImage):
        return types.Part(file_data=types.FileData(file_uri=part.uri, mime_type=part.mime_type))
    return types.Part(text=str(part))


def response_text(response: Any) -> str:
    """
    Pull the completion text out of a generate_content response.

    Unexpected shapes are coerced to a string instead of raising.
    """
    if response is None:
        return ""

    try:
        text = response.text
    except Exception as e:
        logger.debug(f"Gemini response has no text accessor: {e}")
        text = None
    if text:
        return str(text)

    candidates = getattr(response, "candidates", None) or []
    if candidates:
        content = getattr(candidates[0], "content", None)
        parts = getattr(content, "parts", None) or []
        texts = [p.text for p in parts if getattr(p, "text", None)]
        if texts:
            return "".join(texts)
        if content is not None:
            return str(content)

    return str(response)


class GeminiProvider(ModelProvider):
    """Gemini provider (Google)"""

    def __init__(self, api_key: str, timeout_seconds: int = 120):
        self.client = genai.Client(
            api_key=api_key,
            http_options=types.HttpOptions(timeout=timeout_seconds * 1000),
        )
        logger.info(f"Gemini provider: timeout={timeout_seconds}s")

    async def generate(self, model: str, parts: Sequence[PromptPart]) -> str:
        """Generate text from mixed text/image parts in a single call"""
        contents = [to_part(p) for p in parts]

        try:
            response = await self.client.aio.models.generate_content(
                model=normalize_model_name(model),
                contents=contents,
            )
        except Exception as e:
            raise ModelServiceError(f"Gemini request failed: {e}") from e

        return response_text(response)


async def list_available_models(
    api_key: str,
    base_url: str,
    timeout: float = 30,
    transport: Optional[httpx.AsyncBaseTransport] = None
) -> Dict[str, Any]:
    """Fetch the raw model list from the Gemini REST API"""
    url = f"{base_url.rstrip('/')}/models"

    try:
        async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
            response = await client.get(url, params={"key": api_key})
    except httpx.HTTPError as e:
        raise ModelServiceError(f"Models list request failed: {e}") from e

    if response.is_error:
        raise ModelServiceError(
            f"Models list request failed: {response.status_code} {response.text}",
            upstream_status=response.status_code
        )

    return response.json()

