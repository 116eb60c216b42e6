# FILE: snapcode/providers/registry.py
"""
Provider registry with I/O capture for debugging and transparency
"""
import logging
from collections import deque
from datetime import datetime
from typing import Any, Deque, Dict, List, Optional, Sequence

from snapcode.config import get_settings
from snapcode.errors import ModelConfigurationError
from snapcode.models.generation import InlineImage, PromptPart, RemoteImage
from snapcode.providers.base import ModelProvider
from snapcode.providers.gemini import GeminiProvider

logger = logging.getLogger(__name__)


def describe_parts(parts: Sequence[PromptPart], max_length: int = 2000) -> str:
    """Readable preview of a prompt; image payloads are summarized, long text truncated"""
    chunks = []
    for part in parts:
        if isinstance(part, InlineImage):
            chunks.append(f"[inline image {part.mime_type or 'unknown'}, {len(part.data)} base64 chars]")
        elif isinstance(part, RemoteImage):
            chunks.append(f"[remote image {part.uri}]")
        else:
            text = str(part)
            if len(text) > max_length:
                text = text[:max_length] + f"\n[... truncated {len(text) - max_length} chars]"
            chunks.append(text)
    return "\n\n".join(chunks)


class ProviderRegistry:
    """Model client used by the services: one provider plus an I/O ring buffer"""

    def __init__(self, provider: ModelProvider, max_io_log_size: int = 100):
        self.provider = provider
        self.io_log: Deque[Dict[str, Any]] = deque(maxlen=max_io_log_size)

    def _log_io(
        self,
        model: str,
        parts: Sequence[PromptPart],
        output: str,
        correlation_id: Optional[str],
        duration_ms: int,
        error: Optional[str] = None
    ):
        """Log provider I/O for debugging"""
        self.io_log.append({
            "timestamp": datetime.utcnow().isoformat(),
            "correlation_id": correlation_id,
            "provider": type(self.provider).__name__,
            "model": model,
            "prompt": describe_parts(parts),
            "output_length": len(output) if output else 0,
            "output": output,
            "duration_ms": duration_ms,
            "error": error
        })

    async def generate(
        self,
        model: str,
        parts: Sequence[PromptPart],
        correlation_id: Optional[str] = None
    ) -> str:
        """Generate text with the configured provider, recording the call"""
        start = datetime.utcnow()

        try:
            logger.info(f"[{correlation_id}] Calling model {model} with {len(parts)} parts")
            text = await self.provider.generate(model, parts)
        except Exception as e:
            duration_ms = int((datetime.utcnow() - start).total_seconds() * 1000)
            logger.warning(f"[{correlation_id}] Model {model} failed after {duration_ms}ms: {e}")
            self._log_io(model, parts, "", correlation_id, duration_ms, error=str(e))
            raise

        duration_ms = int((datetime.utcnow() - start).total_seconds() * 1000)
        self._log_io(model, parts, text, correlation_id, duration_ms)
        return text

    def get_recent_io(self, limit: int = 20) -> List[Dict[str, Any]]:
        """Get recent I/O entries"""
        return list(self.io_log)[-limit:]

    def clear_io_log(self):
        """Clear in-memory I/O log"""
        self.io_log.clear()


_registry: Optional[ProviderRegistry] = None


def get_provider_registry() -> ProviderRegistry:
    """
    Get or create the global provider registry.

    Raises ModelConfigurationError when GEMINI_API_KEY is not set, before
    any model call is attempted.
    """
    global _registry
    if _registry is None:
        settings = get_settings()
        if not settings.gemini_api_key:
            raise ModelConfigurationError("GEMINI_API_KEY not set")
        _registry = ProviderRegistry(
            GeminiProvider(api_key=settings.gemini_api_key, timeout_seconds=settings.model_timeout_seconds),
            max_io_log_size=settings.provider_io_log_size
        )
    return _registry


def reset_provider_registry():
    """Drop the global registry (settings reloads, tests)"""
    global _registry
    _registry = None


def get_optional_provider_registry() -> Optional[ProviderRegistry]:
    """Registry, or None when no model is configured (best-effort callers)"""
    try:
        return get_provider_registry()
    except ModelConfigurationError:
        return None
