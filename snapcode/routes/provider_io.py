# FILE: snapcode/routes/provider_io.py
"""
Provider I/O endpoints for debugging and transparency
"""
import logging
from fastapi import APIRouter, Depends, Query

from snapcode.providers.registry import ProviderRegistry, get_provider_registry

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/recent")
async def get_recent_io(
    limit: int = Query(default=20, ge=1, le=100),
    registry: ProviderRegistry = Depends(get_provider_registry)
):
    """Recent model calls, newest last"""
    entries = registry.get_recent_io(limit=limit)
    return {
        "status": "success",
        "count": len(entries),
        "entries": entries
    }


@router.post("/clear")
async def clear_io_log(registry: ProviderRegistry = Depends(get_provider_registry)):
    """Clear in-memory I/O log"""
    registry.clear_io_log()
    logger.info("[PROVIDER_IO] Log cleared")
    return {
        "status": "success",
        "message": "I/O log cleared"
    }


@router.get("/stats")
async def get_io_stats(registry: ProviderRegistry = Depends(get_provider_registry)):
    """Call counts, error rate and mean latency over the retained log"""
    entries = registry.get_recent_io(limit=len(registry.io_log) or 1)

    model_counts = {}
    error_count = 0
    total_duration = 0

    for entry in entries:
        model = entry.get("model", "unknown")
        model_counts[model] = model_counts.get(model, 0) + 1
        if entry.get("error"):
            error_count += 1
        total_duration += entry.get("duration_ms", 0)

    return {
        "status": "success",
        "total_calls": len(entries),
        "error_count": error_count,
        "success_rate": (len(entries) - error_count) / max(1, len(entries)),
        "avg_duration_ms": total_duration / max(1, len(entries)),
        "model_counts": model_counts
    }
