# FILE: snapcode/providers/base.py
"""
Base class for model providers
"""
import logging
from typing import Sequence

from snapcode.models.generation import PromptPart

logger = logging.getLogger(__name__)


class ModelProvider:
    """Base class for multimodal text generation providers"""

    async def generate(self, model: str, parts: Sequence[PromptPart]) -> str:
        raise NotImplementedError
