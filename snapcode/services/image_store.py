# FILE: snapcode/services/image_store.py
"""
Ephemeral in-memory store correlating an upload with its description

Records are immutable and each insert uses a fresh random id, so
concurrent requests never write the same entry. Capacity and age are
bounded by a TTL cache; nothing survives a process restart.
"""
import logging
import uuid
from typing import Optional

from cachetools import TTLCache

from snapcode.config import get_settings
from snapcode.models.generation import ImageRecord

logger = logging.getLogger(__name__)


class ImageStore:
    """Image id -> ImageRecord, bounded by entry count and age"""

    def __init__(self, max_entries: int = 256, ttl_seconds: float = 3600, timer=None):
        if timer is None:
            self._records = TTLCache(maxsize=max_entries, ttl=ttl_seconds)
        else:
            self._records = TTLCache(maxsize=max_entries, ttl=ttl_seconds, timer=timer)

    def put(self, record: ImageRecord) -> str:
        """Store record under a newly generated id and return the id"""
        image_id = str(uuid.uuid4())
        self._records[image_id] = record
        logger.debug(f"Image stored: {image_id} ({record.name or 'unnamed'})")
        return image_id

    def get(self, image_id: Optional[str]) -> Optional[ImageRecord]:
        """Return the stored record, or None if unknown or expired"""
        if not image_id:
            return None
        return self._records.get(image_id)

    def __contains__(self, image_id: str) -> bool:
        return image_id in self._records

    def __len__(self) -> int:
        return len(self._records)


_store: Optional[ImageStore] = None


def get_image_store() -> ImageStore:
    """Get or create the process-wide image store"""
    global _store
    if _store is None:
        settings = get_settings()
        _store = ImageStore(
            max_entries=settings.image_store_max_entries,
            ttl_seconds=settings.image_store_ttl_seconds
        )
        logger.info(
            f"Image store: max_entries={settings.image_store_max_entries}, "
            f"ttl={settings.image_store_ttl_seconds}s"
        )
    return _store
