"""Admin access-token helpers."""

import hashlib
import hmac
import secrets


def generate_secure_key(length: int = 32) -> str:
    """Generate a cryptographically secure, URL-safe random token."""
    return secrets.token_urlsafe(length)


def hash_token(token: str) -> str:
    """SHA-256 hex digest of an admin access token (what the DB stores)."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def verify_token(token: str, token_hash: str) -> bool:
    """Constant-time comparison of a presented token with its stored hash."""
    return hmac.compare_digest(hash_token(token), token_hash)

