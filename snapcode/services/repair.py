# FILE: snapcode/services/repair.py
"""
Single-shot model repair of generated code that looks syntactically broken
"""
import logging
from typing import Callable, Optional

from snapcode.config import MAX_REPAIR_ATTEMPTS
from snapcode.services.code_sanitizer import sanitize_generated_code
from snapcode.services.prompts import REPAIR_PROMPT
from snapcode.services.syntax_check import is_likely_broken

logger = logging.getLogger(__name__)


async def maybe_repair(
    text: str,
    model_client,
    model_id: str,
    detector: Callable[[str], bool] = is_likely_broken,
    attempts: int = MAX_REPAIR_ATTEMPTS,
    correlation_id: Optional[str] = None
) -> str:
    """
    Ask the model to fix text once if the detector flags it.

    The repaired text is sanitized and returned as-is, without being
    checked again. Any failure (model error, empty answer) returns the
    input unchanged; nothing is raised to the caller.

    Args:
        text: Sanitized generated code
        model_client: Object with async generate(model, parts, **kwargs) -> str
        model_id: Model used for the original generation
        detector: Brokenness check
        attempts: 0 disables repair; capped at MAX_REPAIR_ATTEMPTS

    Returns:
        Repaired and sanitized text, or the original text
    """
    if min(attempts, MAX_REPAIR_ATTEMPTS) < 1:
        return text

    if not detector(text):
        return text

    logger.info(f"[REPAIR] [{correlation_id}] Generated code looks broken, requesting one repair")

    try:
        repaired = await model_client.generate(
            model_id,
            [REPAIR_PROMPT, text],
            correlation_id=correlation_id
        )
    except Exception as e:
        logger.warning(f"[REPAIR] [{correlation_id}] Auto-repair attempt failed: {e}")
        return text

    if not repaired or not str(repaired).strip():
        logger.warning(f"[REPAIR] [{correlation_id}] Model returned no usable text, keeping original")
        return text

    logger.info(f"[REPAIR] [{correlation_id}] Repair applied ({len(text)} -> {len(str(repaired))} chars)")
    return sanitize_generated_code(str(repaired))
