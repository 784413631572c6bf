"""
Content-addressed cache interface for generated presentation content.
"""
import re
from abc import ABC, abstractmethod
from typing import Dict, Optional

from app.domain.schemas.presentation import PresentationData, PresentationRequest

_NON_ALPHANUMERIC = re.compile(r'[^a-zA-Z0-9]')


def derive_cache_key(request: PresentationRequest) -> str:
    """
    Derive the cache key for a request.

    Only theme, slide count and audience take part in the key, so requests
    that differ solely in additional info or style share a cached result.
    """
    raw = f"{request.theme}_{request.slide_count}_{request.audience}"
    return _NON_ALPHANUMERIC.sub("_", raw).lower()


class CacheStore(ABC):
    """Key-value store of PresentationData. Entries never expire."""

    @abstractmethod
    async def get(self, key: str) -> Optional[PresentationData]:
        """Return the cached data for key, or None on a miss."""
        pass

    @abstractmethod
    async def put(self, key: str, data: PresentationData) -> None:
        """Store data under key, replacing any previous entry."""
        pass

    async def close(self) -> None:
        pass


class InMemoryCacheStore(CacheStore):
    """Process-local cache, used in tests and with CACHE_BACKEND=memory."""

    def __init__(self):
        self._entries: Dict[str, dict] = {}

    async def get(self, key: str) -> Optional[PresentationData]:
        payload = self._entries.get(key)
        if payload is None:
            return None
        return PresentationData.model_validate(payload)

    async def put(self, key: str, data: PresentationData) -> None:
        self._entries[key] = data.to_cache_payload()

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)
