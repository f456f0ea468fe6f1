"""
Event Summary Service

Answers reporting requests cache-aside: read the summary cache, and on a
miss (or when Redis is down) compute the summary from the event table and
write it back.

Concurrent misses for the same filter each run the queries; there is no
in-flight deduplication.
"""

from typing import Dict, Any
import logging

from sqlalchemy.orm import Session

from backend.services.cache_service import CacheService
from backend.services.filter_builder import SummaryFilter, build_summary_queries

logger = logging.getLogger(__name__)

ALL_EVENTS = "all_events"


class SummaryService:
    """
    Aggregate event counts for an owner, fronted by the summary cache

    Payload:
        event: filtered event name, or "all_events"
        count: matching events
        uniqueUsers: distinct non-null user ids among them
        deviceData: device -> event count ("unknown" for missing device)
    """

    def __init__(self, cache: CacheService):
        self.cache = cache

    def summarize(self, db: Session, summary_filter: SummaryFilter) -> Dict[str, Any]:
        """
        Return the summary for a filter, from cache when possible

        Args:
            db: Database session, only used on a cache miss
            summary_filter: Owner plus optional filters

        Returns:
            Summary payload dict
        """
        cache_key = self.cache.make_summary_key(summary_filter)

        cached = self.cache.get_summary(cache_key)
        if cached is not None:
            return cached

        payload = self.compute(db, summary_filter)

        if not self.cache.set_summary(cache_key, payload):
            logger.debug(f"Summary not cached: {cache_key}")

        return payload

    def compute(self, db: Session, summary_filter: SummaryFilter) -> Dict[str, Any]:
        """Run both aggregate queries directly against the event table"""
        queries = build_summary_queries(summary_filter)

        totals = db.execute(queries.count_query).mappings().one()
        devices = db.execute(queries.device_query).all()

        return {
            "event": summary_filter.event_name or ALL_EVENTS,
            "count": int(totals["total_events"]),
            "uniqueUsers": int(totals["unique_users"]),
            "deviceData": {row.device: int(row.device_count) for row in devices},
        }
