"""
API Key Lifecycle Service

Issues, lists and revokes application API keys.

Issuance writes the Application row and its APIKey row in one
transaction; revocation is a single ownership-scoped UPDATE so that
checking the owner and flipping the status cannot interleave with
another write.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Dict, Any, Optional
from uuid import UUID
import logging

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from backend.database import transaction
from backend.models.application import Application
from backend.models.api_key import APIKey, KEY_STATUS_ACTIVE, KEY_STATUS_REVOKED
from backend.core.security import generate_api_key, key_prefix
from backend.core.exceptions import NotFoundError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IssuedKey:
    """Result of registering an application. api_key is never retrievable again."""
    application_id: UUID
    api_key_id: UUID
    api_key: str


class KeyService:
    """
    Manage application API keys

    Only the SHA-256 hash of a key is persisted. Keys are never deleted;
    revocation moves a key from active to revoked and cannot be undone.
    """

    def __init__(self, db: Session):
        """Initialize key service with database session"""
        self.db = db

    def issue(self, owner_id: UUID, name: str, domain: Optional[str] = None) -> IssuedKey:
        """
        Register an application and issue its first API key

        Args:
            owner_id: Developer registering the application
            name: Application name
            domain: Optional site domain

        Returns:
            IssuedKey with the plaintext key (shown once)
        """
        api_key, key_hash = generate_api_key()

        with transaction(self.db) as tx:
            application = Application(user_id=owner_id, name=name, domain=domain)
            tx.add(application)
            # Populate application.id before the key row references it
            tx.flush()

            api_key_obj = APIKey(
                app_id=application.id,
                key_hash=key_hash,
                key_prefix=key_prefix(api_key),
                status=KEY_STATUS_ACTIVE
            )
            tx.add(api_key_obj)
            tx.flush()

            issued = IssuedKey(
                application_id=application.id,
                api_key_id=api_key_obj.id,
                api_key=api_key
            )

        logger.info(
            f"Registered application {issued.application_id} for owner {owner_id} "
            f"(key {issued.api_key_id})"
        )
        return issued

    def list_for_owner(self, owner_id: UUID) -> List[Dict[str, Any]]:
        """
        List an owner's applications with their key status

        Read straight from the database, never cached.

        Args:
            owner_id: Developer whose applications to list

        Returns:
            List of dicts: application_id, name, domain, key_id, status
        """
        stmt = (
            select(
                Application.id.label("application_id"),
                Application.name,
                Application.domain,
                APIKey.id.label("key_id"),
                APIKey.status
            )
            .join(APIKey, APIKey.app_id == Application.id)
            .where(Application.user_id == owner_id)
            .order_by(Application.created_at, Application.id)
        )

        return [dict(row) for row in self.db.execute(stmt).mappings()]

    def revoke(self, owner_id: UUID, api_key_id: UUID) -> None:
        """
        Revoke an API key owned by the caller

        The ownership check is part of the UPDATE itself. Revoking a key
        that is already revoked succeeds.

        Args:
            owner_id: Developer making the request
            api_key_id: Key to revoke

        Raises:
            NotFoundError: key does not exist or belongs to another owner
        """
        owned_apps = select(Application.id).where(Application.user_id == owner_id)

        stmt = (
            update(APIKey)
            .where(APIKey.id == api_key_id)
            .where(APIKey.app_id.in_(owned_apps))
            .values(status=KEY_STATUS_REVOKED, revoked_at=datetime.now(timezone.utc))
            .execution_options(synchronize_session=False)
        )

        with transaction(self.db) as tx:
            result = tx.execute(stmt)

        if result.rowcount == 0:
            raise NotFoundError("API key not found or user not authorized.")

        logger.info(f"Revoked API key {api_key_id} for owner {owner_id}")

    def find_active_application_id(self, key_hash: str) -> Optional[UUID]:
        """
        Look up the application for an active key hash

        Args:
            key_hash: SHA-256 hex digest of the plaintext key

        Returns:
            Application id, or None if no active key has this hash
        """
        stmt = (
            select(APIKey.app_id)
            .where(APIKey.key_hash == key_hash)
            .where(APIKey.status == KEY_STATUS_ACTIVE)
        )
        return self.db.execute(stmt).scalars().first()
