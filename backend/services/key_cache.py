"""
API Key Validation Cache

Process-local, time-bounded cache from plaintext API key to application id.
Sits in front of the api_keys table on the event collection path.

Staleness:
    Revoking a key does NOT evict it here. A key that was resolved before
    revocation keeps authenticating until its entry expires (at most
    API_KEY_CACHE_TTL seconds). Keys never seen by this process fail as
    soon as they are revoked.

Concurrency:
    Entries live in a plain dict guarded by a lock. The lock only covers
    dict access; the database lookup on a miss runs outside it, so two
    concurrent misses for the same key may both query the store. The
    last writer wins and both write the same value.
"""

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from backend.config import settings
from backend.core.exceptions import AuthenticationError
from backend.core.security import hash_api_key
from backend.services.key_service import KeyService
from backend.utils.sanitize import get_safe_api_key_display

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CachedKey:
    """Resolved application id and its monotonic expiry"""
    application_id: UUID
    expires_at: float


class KeyValidationCache:
    """
    Resolve plaintext API keys to application ids with a TTL cache

    Expired entries are evicted lazily when read; there is no sweeper.
    """

    def __init__(
        self,
        ttl: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic
    ):
        """
        Args:
            ttl: Entry lifetime in seconds (default: API_KEY_CACHE_TTL)
            clock: Monotonic time source, injectable for tests
        """
        self.ttl = ttl if ttl is not None else settings.API_KEY_CACHE_TTL
        self._clock = clock
        self._entries: Dict[str, CachedKey] = {}
        self._lock = threading.Lock()

    def resolve(self, db: Session, api_key: Optional[str]) -> UUID:
        """
        Resolve an API key to the application it authenticates

        Args:
            db: Database session used on cache miss
            api_key: Plaintext key from the request header

        Returns:
            UUID of the owning application

        Raises:
            AuthenticationError: key missing, unknown or revoked
        """
        if not api_key:
            raise AuthenticationError("Access denied. No API Key provided.")

        cached = self._get(api_key)
        if cached is not None:
            return cached

        application_id = KeyService(db).find_active_application_id(hash_api_key(api_key))

        if application_id is None:
            logger.info(f"Rejected API key {get_safe_api_key_display(api_key)}")
            raise AuthenticationError("Invalid API Key.")

        with self._lock:
            self._entries[api_key] = CachedKey(
                application_id=application_id,
                expires_at=self._clock() + self.ttl
            )

        logger.debug(f"Key cache MISS, stored {get_safe_api_key_display(api_key)}")
        return application_id

    def invalidate(self, api_key: str) -> bool:
        """Drop one entry. Returns True if it was present."""
        with self._lock:
            return self._entries.pop(api_key, None) is not None

    def clear(self):
        """Drop every entry"""
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _get(self, api_key: str) -> Optional[UUID]:
        """Return a live cached application id, evicting it if expired"""
        with self._lock:
            entry = self._entries.get(api_key)
            if entry is None:
                return None

            if self._clock() < entry.expires_at:
                return entry.application_id

            # Passive expiry
            del self._entries[api_key]

        logger.debug(f"Key cache entry expired for {get_safe_api_key_display(api_key)}")
        return None
