"""
Summary Filter Builder

Turns optional report filters into ownership-scoped aggregate queries.

Every statement joins events to applications and filters on the
application owner, so events are only ever visible to the developer who
registered the emitting application. Optional filters add predicates
only when present. All values are bound parameters.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import Select, and_, distinct, func, literal_column, select

from backend.core.exceptions import ValidationError
from backend.models.application import Application
from backend.models.event import Event

UNKNOWN_DEVICE = "unknown"


@dataclass(frozen=True)
class SummaryFilter:
    """
    Filters for one event summary request

    None means "any" for every optional field.
    """
    owner_id: UUID
    application_id: Optional[UUID] = None
    event_name: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None

    @classmethod
    def from_query(
        cls,
        owner_id: UUID,
        event: Optional[str] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        application_id: Optional[str] = None
    ) -> "SummaryFilter":
        """
        Build a filter from raw query string values

        Empty strings are treated as omitted so that "?event=" and no
        event parameter address the same summary.

        Raises:
            ValidationError: malformed date or application id
        """
        return cls(
            owner_id=owner_id,
            application_id=_parse_uuid(application_id, "applicationId"),
            event_name=event or None,
            start_date=_parse_datetime(start_date, "startDate"),
            end_date=_parse_datetime(end_date, "endDate"),
        )


@dataclass(frozen=True)
class SummaryQueries:
    """The two statements that make up an event summary"""
    count_query: Select
    device_query: Select


def build_summary_queries(summary_filter: SummaryFilter) -> SummaryQueries:
    """
    Build the totals and device breakdown statements for a filter

    Both statements carry the same predicates.

    Returns:
        SummaryQueries:
            count_query -> one row (total_events, unique_users)
            device_query -> rows (device, device_count), NULL device as "unknown"
    """
    conditions = _build_conditions(summary_filter)

    count_query = (
        select(
            func.count().label("total_events"),
            func.count(distinct(Event.user_id)).label("unique_users")
        )
        .select_from(Event)
        .join(Application, Event.app_id == Application.id)
        .where(and_(*conditions))
    )

    # Constant rendered inline so SELECT and GROUP BY compile to the same expression
    device = func.coalesce(Event.device, literal_column(f"'{UNKNOWN_DEVICE}'"))
    device_query = (
        select(device.label("device"), func.count().label("device_count"))
        .select_from(Event)
        .join(Application, Event.app_id == Application.id)
        .where(and_(*conditions))
        .group_by(device)
        .order_by(device)
    )

    return SummaryQueries(count_query=count_query, device_query=device_query)


def _build_conditions(summary_filter: SummaryFilter) -> List:
    """Ownership predicate first, then each present optional filter"""
    conditions = [Application.user_id == summary_filter.owner_id]

    if summary_filter.application_id is not None:
        conditions.append(Application.id == summary_filter.application_id)
    if summary_filter.event_name is not None:
        conditions.append(Event.event_name == summary_filter.event_name)
    if summary_filter.start_date is not None:
        conditions.append(Event.timestamp >= summary_filter.start_date)
    if summary_filter.end_date is not None:
        conditions.append(Event.timestamp <= summary_filter.end_date)

    return conditions


def _parse_uuid(value: Optional[str], field: str) -> Optional[UUID]:
    if not value:
        return None
    try:
        return UUID(value)
    except ValueError:
        raise ValidationError(f"{field} must be a valid UUID.")


def _parse_datetime(value: Optional[str], field: str) -> Optional[datetime]:
    if not value:
        return None
    try:
        # Accept a trailing "Z" as UTC
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        raise ValidationError(f"{field} must be an ISO-8601 date or datetime.")
