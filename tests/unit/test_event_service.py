"""
Unit tests for EventService

Tests:
- Event recording with optional fields
- Per end-user statistics scoped to the owner
"""

import pytest
from datetime import datetime

from backend.core.exceptions import NotFoundError
from backend.models.event import Event
from backend.services.event_service import EventService
from backend.services.key_service import KeyService


@pytest.mark.unit
class TestRecordEvent:
    """Test suite for EventService.record_event"""

    def test_record_minimal_event(self, db_session, issued_key):
        event = EventService(db_session).record_event(issued_key.application_id, "page_view")

        stored = db_session.get(Event, event.id)
        assert stored.app_id == issued_key.application_id
        assert stored.event_name == "page_view"
        assert stored.user_id is None
        assert stored.device is None
        assert stored.metadata_ is None
        assert stored.timestamp is not None

    def test_record_full_event(self, db_session, issued_key):
        event = EventService(db_session).record_event(
            issued_key.application_id,
            "purchase",
            user_id="u1",
            url="https://shop.example.com/checkout",
            referrer="https://search.example.com",
            device="mobile",
            ip_address="203.0.113.7",
            metadata={"browser": "Firefox", "os": "Android", "amount": 12.5},
        )

        stored = db_session.get(Event, event.id)
        assert stored.user_id == "u1"
        assert stored.device == "mobile"
        assert stored.ip_address == "203.0.113.7"
        assert stored.metadata_ == {"browser": "Firefox", "os": "Android", "amount": 12.5}

    def test_empty_strings_stored_as_null(self, db_session, issued_key):
        event = EventService(db_session).record_event(
            issued_key.application_id, "page_view", user_id="", device="", metadata={}
        )

        stored = db_session.get(Event, event.id)
        assert stored.user_id is None
        assert stored.device is None
        assert stored.metadata_ is None


@pytest.mark.unit
class TestUserStats:
    """Test suite for EventService.user_stats"""

    def _add(self, db, application_id, user_id, timestamp, metadata=None, ip_address=None):
        db.add(Event(
            app_id=application_id,
            event_name="page_view",
            user_id=user_id,
            ip_address=ip_address,
            metadata_=metadata,
            timestamp=timestamp,
        ))
        db.commit()

    def test_latest_event_supplies_details(self, db_session, test_owner, issued_key):
        app_id = issued_key.application_id
        self._add(db_session, app_id, "u1", datetime(2026, 3, 1, 9, 0),
                  {"browser": "Safari", "os": "iOS"}, "198.51.100.1")
        self._add(db_session, app_id, "u1", datetime(2026, 3, 2, 9, 0),
                  {"browser": "Chrome", "os": "Linux"}, "198.51.100.2")
        self._add(db_session, app_id, "u2", datetime(2026, 3, 3, 9, 0))

        stats = EventService(db_session).user_stats(test_owner.id, "u1")

        assert stats["userId"] == "u1"
        assert stats["totalEvents"] == 2
        assert stats["deviceDetails"] == {"browser": "Chrome", "os": "Linux"}
        assert stats["ipAddress"] == "198.51.100.2"
        assert stats["lastSeen"].replace(tzinfo=None) == datetime(2026, 3, 2, 9, 0)

    def test_counts_across_owner_applications(self, db_session, test_owner, issued_key):
        second = KeyService(db_session).issue(test_owner.id, "Blog")
        self._add(db_session, issued_key.application_id, "u1", datetime(2026, 3, 1))
        self._add(db_session, second.application_id, "u1", datetime(2026, 3, 2))

        stats = EventService(db_session).user_stats(test_owner.id, "u1")

        assert stats["totalEvents"] == 2

    def test_missing_metadata_gives_null_details(self, db_session, test_owner, issued_key):
        self._add(db_session, issued_key.application_id, "u1", datetime(2026, 3, 1))

        stats = EventService(db_session).user_stats(test_owner.id, "u1")

        assert stats["deviceDetails"] == {"browser": None, "os": None}
        assert stats["ipAddress"] is None

    def test_unknown_user(self, db_session, test_owner, issued_key):
        with pytest.raises(NotFoundError) as exc_info:
            EventService(db_session).user_stats(test_owner.id, "nobody")

        assert exc_info.value.message == "User not found for this developer."

    def test_user_of_another_owner_is_not_found(self, db_session, other_owner, issued_key):
        self._add(db_session, issued_key.application_id, "u1", datetime(2026, 3, 1))

        with pytest.raises(NotFoundError):
            EventService(db_session).user_stats(other_owner.id, "u1")

    def test_other_owners_events_not_counted(self, db_session, test_owner, other_owner, issued_key):
        foreign = KeyService(db_session).issue(other_owner.id, "Elsewhere")
        self._add(db_session, issued_key.application_id, "u1", datetime(2026, 3, 1))
        self._add(db_session, foreign.application_id, "u1", datetime(2026, 3, 5),
                  {"browser": "Edge", "os": "Windows"})

        stats = EventService(db_session).user_stats(test_owner.id, "u1")

        assert stats["totalEvents"] == 1
        assert stats["deviceDetails"]["browser"] is None
