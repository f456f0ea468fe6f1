"""
Log redaction for application API keys and owner session cookies
"""

from typing import Dict, Any
import re

REDACTED = "***REDACTED***"

# Request headers that carry a credential on this API
CREDENTIAL_HEADERS = frozenset({"x-api-key", "cookie", "set-cookie", "authorization"})

# Plaintext keys as issued by generate_api_key, plus bearer tokens from proxies
KEY_PATTERN = re.compile(r'key_(?:live|test)_[a-fA-F0-9]{16,}')
BEARER_PATTERN = re.compile(r'Bearer\s+[\w\-.]+')


def sanitize_headers(headers: Dict[str, Any]) -> Dict[str, Any]:
    """Copy of headers with credential values replaced"""
    return {
        name: REDACTED if name.lower() in CREDENTIAL_HEADERS else value
        for name, value in headers.items()
    }


def sanitize_string(text: str) -> str:
    """Redact any plaintext API key or bearer token found in free text"""
    text = KEY_PATTERN.sub(f"key_{REDACTED}", text)
    return BEARER_PATTERN.sub(f"Bearer {REDACTED}", text)


def get_safe_api_key_display(api_key: str) -> str:
    """
    Loggable form of an API key

    Keeps the first 12 characters (prefix plus three random ones); short
    or malformed values are not shown at all.

    Returns:
        e.g. "key_live_3f9...***"
    """
    if not api_key or not isinstance(api_key, str):
        return "***INVALID***"

    if len(api_key) < 16:
        return REDACTED

    return f"{api_key[:12]}...***"
