"""
Business Logic Services

Includes:
- KeyService: API key issuance, listing and revocation
- KeyValidationCache: In-process TTL cache for API key lookups
- CacheService: Redis cache for event summaries
- SummaryService: Cache-aside event summaries
- EventService: Event collection and per-user statistics
- filter_builder: Ownership-scoped summary queries
"""
