"""
Redis Caching Service for event summaries

Cache-aside store for aggregate report payloads. Entries expire by TTL only;
new events never invalidate a summary, so a cached summary may lag the
event table by up to CACHE_SUMMARY_TTL seconds.

Redis is optional. When it is disabled, unreachable at startup or failing
mid-request, every read is a miss and every write is a no-op. No Redis
error ever reaches the caller.
"""

from typing import Dict, Optional, Any
import json
from urllib.parse import quote
import logging

import redis

from backend.config import settings
from backend.core.exceptions import CacheUnavailableError

logger = logging.getLogger(__name__)

# Sentinels for omitted filters. Real event names are written as "=<quoted name>"
# so that an event literally named "all" never shares a key with "any event".
ALL = "all"
NONE = "none"


class CacheService:
    """
    Redis caching for event summaries

    Cache Keys:
    - summary:{owner}:{app|all}:{=event|all}:{start|none}:{end|none} -> JSON payload
    """

    def __init__(
        self,
        client: Optional[redis.Redis] = None,
        enabled: Optional[bool] = None
    ):
        """
        Initialize Redis connection

        Args:
            client: Pre-built Redis client; built from REDIS_URL if omitted
            enabled: Override CACHE_ENABLED
        """
        self.redis = client
        self.enabled = settings.CACHE_ENABLED if enabled is None else enabled

        if self.enabled and self.redis is None:
            try:
                self.redis = redis.from_url(settings.REDIS_URL, **self._connection_options())
            except Exception as e:
                logger.warning(f"Invalid Redis configuration: {e}. Summary caching disabled.")
                self.enabled = False
                return

            # The client reconnects on each command, so an outage here is not final
            if self.ping():
                logger.info("Summary cache connected to Redis")
            else:
                logger.warning("Redis unreachable at startup; summaries computed until it recovers")

    def get_summary(self, key: str) -> Optional[Dict[str, Any]]:
        """
        Get a cached summary payload

        Args:
            key: Composite key from make_summary_key

        Returns:
            Decoded payload, or None on miss or when Redis is unavailable
        """
        try:
            data = self._client().get(key)
        except CacheUnavailableError:
            return None
        except Exception as e:
            logger.error(f"Redis cache read error: {e}")
            return None

        if data is None:
            logger.debug(f"Summary cache MISS for {key}")
            return None

        try:
            payload = json.loads(data)
        except ValueError as e:
            logger.error(f"Discarding undecodable summary cache entry {key}: {e}")
            return None

        logger.debug(f"Summary cache HIT for {key}")
        return payload

    def set_summary(
        self,
        key: str,
        payload: Dict[str, Any],
        ttl: Optional[int] = None
    ) -> bool:
        """
        Cache a summary payload

        Best effort: failures are logged and reported through the return value.

        Args:
            key: Composite key from make_summary_key
            payload: JSON-serializable summary
            ttl: Time to live in seconds (default: CACHE_SUMMARY_TTL)

        Returns:
            True if cached successfully
        """
        ttl = ttl or settings.CACHE_SUMMARY_TTL

        try:
            # SETEX replaces the whole value, never a partial write
            self._client().setex(key, ttl, self.serialize(payload))
        except CacheUnavailableError:
            return False
        except Exception as e:
            logger.error(f"Redis cache write error: {e}")
            return False

        logger.debug(f"Cached summary {key} for {ttl}s")
        return True

    def is_available(self) -> bool:
        """Check if a Redis client is configured (it may still be unreachable)"""
        return self.enabled and self.redis is not None

    def ping(self) -> bool:
        """Round-trip readiness check for health endpoints"""
        if not self.is_available():
            return False
        try:
            return bool(self.redis.ping())
        except Exception as e:
            logger.warning(f"Redis ping failed: {e}")
            return False

    @staticmethod
    def make_summary_key(summary_filter) -> str:
        """
        Build the composite key for a SummaryFilter

        Omitted fields use fixed sentinels so equal filters map to one key.
        """
        start = summary_filter.start_date.isoformat() if summary_filter.start_date else NONE
        end = summary_filter.end_date.isoformat() if summary_filter.end_date else NONE

        return ":".join([
            "summary",
            str(summary_filter.owner_id),
            str(summary_filter.application_id) if summary_filter.application_id else ALL,
            _event_key(summary_filter.event_name),
            start,
            end,
        ])

    @staticmethod
    def serialize(payload: Dict[str, Any]) -> str:
        """Stable JSON encoding used for every cached payload"""
        return json.dumps(payload, sort_keys=True, separators=(",", ":"))

    # Private helper methods

    def _client(self) -> redis.Redis:
        if not self.is_available():
            raise CacheUnavailableError("Summary cache is not available")
        return self.redis

    @staticmethod
    def _connection_options() -> Dict[str, Any]:
        options: Dict[str, Any] = {
            "decode_responses": True,
            "socket_connect_timeout": settings.CACHE_SOCKET_TIMEOUT,
            "socket_timeout": settings.CACHE_SOCKET_TIMEOUT,
        }
        # Managed Redis providers commonly present certificates we cannot verify
        if settings.REDIS_URL.startswith("rediss://"):
            options["ssl_cert_reqs"] = None
        return options


def _event_key(event_name: Optional[str]) -> str:
    if not event_name:
        return ALL
    return "=" + quote(event_name, safe="")
