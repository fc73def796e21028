"""Password hashing and token helpers."""

import base64
import hashlib
import secrets

import bcrypt


def generate_secure_token(length: int = 32) -> str:
    """Generate a cryptographically secure random token.

    Args:
        length: Number of random bytes to generate (default 32)

    Returns:
        URL-safe base64 encoded token
    """
    return (
        base64.urlsafe_b64encode(secrets.token_bytes(length))
        .decode("utf-8")
        .rstrip("=")
    )


def hash_token(token: str) -> str:
    """SHA-256 hex digest used to store single-use tokens at rest."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def _bcrypt_input(password: str) -> bytes:
    """Fixed-length digest of the password.

    bcrypt only accepts 72 bytes of input, so every password is reduced to a
    base64 SHA-256 digest (44 bytes) before hashing.
    """
    return base64.b64encode(hashlib.sha256(password.encode("utf-8")).digest())


def hash_password(password: str) -> str:
    """Hash a password with bcrypt and a fresh salt."""
    return bcrypt.hashpw(_bcrypt_input(password), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a stored bcrypt hash.

    Malformed hashes never match.
    """
    if not password_hash:
        return False
    try:
        return bcrypt.checkpw(_bcrypt_input(password), password_hash.encode("utf-8"))
    except ValueError:
        return False
