"""
Filesystem-backed content cache: one JSON file per key.
"""
import json
from pathlib import Path
from typing import Optional, Union

import aiofiles
import aiofiles.os
from pydantic import ValidationError as PydanticValidationError

from app.core.exceptions import StorageError
from app.core.logging import get_logger
from app.domain.schemas.presentation import PresentationData
from app.infrastructure.cache.base import CacheStore

logger = get_logger(__name__)


class FileCacheStore(CacheStore):
    """
    Durable cache stored as ``<cache_dir>/<key>.json``.

    Unreadable or corrupt entries are reported as misses.
    """

    def __init__(self, cache_dir: Union[str, Path]):
        self.cache_dir = Path(cache_dir)
        self.cache_dir.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        return self.cache_dir / f"{key}.json"

    async def get(self, key: str) -> Optional[PresentationData]:
        path = self._path(key)
        if not await aiofiles.os.path.exists(path):
            return None

        try:
            async with aiofiles.open(path, "r", encoding="utf-8") as f:
                payload = json.loads(await f.read())
            return PresentationData.model_validate(payload)
        except (OSError, json.JSONDecodeError, PydanticValidationError) as e:
            logger.error("cache_read_error", key=key, path=str(path), error=str(e))
            return None

    async def put(self, key: str, data: PresentationData) -> None:
        path = self._path(key)
        serialized = json.dumps(data.to_cache_payload(), ensure_ascii=False, indent=2)

        try:
            async with aiofiles.open(path, "w", encoding="utf-8") as f:
                await f.write(serialized)
        except OSError as e:
            raise StorageError(f"Failed to write cache entry {key}: {e}", operation="put") from e

        logger.debug("cache_entry_written", key=key, path=str(path))
