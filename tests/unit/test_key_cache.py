"""
Unit tests for KeyValidationCache

Tests:
- Missing and invalid keys
- Cache hits skip the key store
- Passive expiry
- Revocation staleness window
- Concurrent resolution
"""

import threading
import pytest
from unittest.mock import MagicMock, patch
from uuid import uuid4

from backend.core.exceptions import AuthenticationError
from backend.core.security import hash_api_key
from backend.services.key_cache import KeyValidationCache
from backend.services.key_service import KeyService


@pytest.fixture
def key_store():
    """Patch the key store lookup used by the cache"""
    with patch("backend.services.key_cache.KeyService") as mock_service_cls:
        store = mock_service_cls.return_value
        store.find_active_application_id.return_value = uuid4()
        yield store


@pytest.mark.unit
class TestResolve:
    """Test suite for KeyValidationCache.resolve with a mocked store"""

    @pytest.mark.parametrize("api_key", [None, ""])
    def test_missing_key(self, key_store, clock, api_key):
        cache = KeyValidationCache(ttl=300, clock=clock)

        with pytest.raises(AuthenticationError) as exc_info:
            cache.resolve(MagicMock(), api_key)

        assert "No API Key provided" in exc_info.value.message
        key_store.find_active_application_id.assert_not_called()

    def test_invalid_key(self, key_store, clock):
        key_store.find_active_application_id.return_value = None
        cache = KeyValidationCache(ttl=300, clock=clock)

        with pytest.raises(AuthenticationError) as exc_info:
            cache.resolve(MagicMock(), "key_live_unknown")

        assert exc_info.value.message == "Invalid API Key."
        assert len(cache) == 0

    def test_store_is_queried_by_hash(self, key_store, clock):
        cache = KeyValidationCache(ttl=300, clock=clock)

        cache.resolve(MagicMock(), "key_live_abc")

        key_store.find_active_application_id.assert_called_once_with(hash_api_key("key_live_abc"))

    def test_repeat_lookups_within_ttl_hit_cache(self, key_store, clock):
        cache = KeyValidationCache(ttl=300, clock=clock)

        first = cache.resolve(MagicMock(), "key_live_abc")
        clock.advance(299)
        second = cache.resolve(MagicMock(), "key_live_abc")

        assert first == second == key_store.find_active_application_id.return_value
        assert key_store.find_active_application_id.call_count == 1

    def test_expired_entry_is_evicted_and_refetched(self, key_store, clock):
        cache = KeyValidationCache(ttl=300, clock=clock)
        cache.resolve(MagicMock(), "key_live_abc")

        clock.advance(300)
        cache.resolve(MagicMock(), "key_live_abc")

        assert key_store.find_active_application_id.call_count == 2

    def test_expired_entry_removed_when_key_now_invalid(self, key_store, clock):
        cache = KeyValidationCache(ttl=300, clock=clock)
        cache.resolve(MagicMock(), "key_live_abc")

        key_store.find_active_application_id.return_value = None
        clock.advance(301)

        with pytest.raises(AuthenticationError):
            cache.resolve(MagicMock(), "key_live_abc")
        assert len(cache) == 0

    def test_invalidate_and_clear(self, key_store, clock):
        cache = KeyValidationCache(ttl=300, clock=clock)
        cache.resolve(MagicMock(), "key_live_a")
        cache.resolve(MagicMock(), "key_live_b")

        assert cache.invalidate("key_live_a") is True
        assert cache.invalidate("key_live_a") is False
        assert len(cache) == 1

        cache.clear()
        assert len(cache) == 0

    def test_concurrent_resolution(self, key_store, clock):
        """Many threads resolving the same key all get the same application"""
        cache = KeyValidationCache(ttl=300, clock=clock)
        results = []
        errors = []

        def worker():
            try:
                for _ in range(50):
                    results.append(cache.resolve(MagicMock(), "key_live_abc"))
            except Exception as e:  # pragma: no cover - surfaced by assertion below
                errors.append(e)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert errors == []
        assert len(results) == 400
        assert set(results) == {key_store.find_active_application_id.return_value}
        assert len(cache) == 1


@pytest.mark.unit
class TestRevocationStaleness:
    """Revocation does not evict cached keys; expiry does"""

    def test_cached_key_survives_revocation_until_ttl(self, db_session, test_owner, issued_key, clock):
        cache = KeyValidationCache(ttl=300, clock=clock)
        assert cache.resolve(db_session, issued_key.api_key) == issued_key.application_id

        KeyService(db_session).revoke(test_owner.id, issued_key.api_key_id)

        # Still inside the TTL window: served from cache
        clock.advance(120)
        assert cache.resolve(db_session, issued_key.api_key) == issued_key.application_id

        # Past the TTL: the store is consulted and rejects the key
        clock.advance(180)
        with pytest.raises(AuthenticationError):
            cache.resolve(db_session, issued_key.api_key)

    def test_revoked_key_never_cached_fails_immediately(self, db_session, test_owner, issued_key, clock):
        KeyService(db_session).revoke(test_owner.id, issued_key.api_key_id)
        cache = KeyValidationCache(ttl=300, clock=clock)

        with pytest.raises(AuthenticationError):
            cache.resolve(db_session, issued_key.api_key)

    def test_issue_revoke_resolve_cold(self, db_session, test_owner, clock):
        service = KeyService(db_session)
        issued = service.issue(test_owner.id, "Shop")
        service.revoke(test_owner.id, issued.api_key_id)

        with pytest.raises(AuthenticationError):
            KeyValidationCache(ttl=300, clock=clock).resolve(db_session, issued.api_key)
