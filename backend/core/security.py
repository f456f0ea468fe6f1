"""
Security utilities for authentication
API key generation and hashing
"""

import secrets
import hashlib
from backend.config import settings


def generate_api_key() -> tuple[str, str]:
    """
    Generate a new API key and its hash

    Returns:
        tuple: (api_key, key_hash)
            - api_key: Full key to show user (only once)
            - key_hash: SHA-256 hash to store in database

    Example:
        >>> key, hash = generate_api_key()
        >>> key
        'key_live_3f9a1c...'
    """
    # 24 random bytes, hex encoded
    random_token = secrets.token_hex(24)

    # Prefix is for operator triage only, it carries no secret
    api_key = f"{settings.API_KEY_PREFIX}{random_token}"

    return api_key, hash_api_key(api_key)


def hash_api_key(api_key: str) -> str:
    """
    Hash an API key using SHA-256

    Unsalted on purpose: the hash is the lookup key in api_keys.

    Args:
        api_key: The API key to hash

    Returns:
        str: SHA-256 hex digest of the key (64 chars)
    """
    return hashlib.sha256(api_key.encode()).hexdigest()


def key_prefix(api_key: str, length: int = 15) -> str:
    """Leading characters of a key, stored for identification"""
    return api_key[:length]
