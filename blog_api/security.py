"""
Password digests.

Passwords are stored as ``pbkdf2_sha256$<iterations>$<salt hex>$<hash hex>``
so the iteration count can be raised later without invalidating
existing rows.
"""
import hashlib
import hmac
import os

from blog_api.config import settings

_ALGORITHM = "pbkdf2_sha256"
_SALT_BYTES = 16


def hash_password(password: str, iterations: int | None = None) -> str:
    """Return a salted PBKDF2-SHA256 digest string for *password*."""
    iterations = iterations or settings.PASSWORD_HASH_ITERATIONS
    salt = os.urandom(_SALT_BYTES)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)
    return f"{_ALGORITHM}${iterations}${salt.hex()}${digest.hex()}"


def verify_password(password: str, stored: str) -> bool:
    """Check *password* against a digest produced by ``hash_password``."""
    try:
        algorithm, iterations, salt_hex, digest_hex = stored.split("$")
        salt = bytes.fromhex(salt_hex)
        rounds = int(iterations)
    except ValueError:
        return False
    if algorithm != _ALGORITHM or rounds < 1:
        return False

    candidate = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, rounds)
    return hmac.compare_digest(candidate.hex().encode(), digest_hex.encode("utf-8"))
