# FILE: snapcode/services/correlation.py
"""
Correlation ID utilities
"""
import uuid
from typing import Optional

CORRELATION_HEADER = "X-Correlation-ID"


def generate_correlation_id() -> str:
    """Generate unique correlation ID"""
    return str(uuid.uuid4())


def resolve_correlation_id(header_value: Optional[str]) -> str:
    """Reuse the caller's correlation ID when one was sent, else mint a new one"""
    value = (header_value or "").strip()
    return value[:64] if value else generate_correlation_id()
