"""Password digests and salts.

``encrypted_password`` is the SHA-256 hex digest of ``salt--password``. The
digest is deterministic so a submitted password is checked by recomputing it.
"""

from datetime import UTC, datetime

from passlib.context import CryptContext

# Unsalted SHA-256 hex digest; the per-user salt is mixed in by encrypt()
pwd_context = CryptContext(schemes=["hex_sha256"])


def secure_hash(value: str) -> str:
    """Return the hex digest of a string."""
    return pwd_context.hash(value)


def make_salt(password: str) -> str:
    """Derive a salt from the current UTC time and the password.

    The timestamp is not a strong entropy source; the salt only needs to
    differ between users to defeat precomputed digest tables.
    """
    return secure_hash(f"{datetime.now(UTC).isoformat()}--{password}")


def encrypt(salt: str, password: str) -> str:
    """Digest a password with a salt."""
    return secure_hash(f"{salt}--{password}")


def matches(salt: str, password: str, encrypted_password: str) -> bool:
    """Check a submitted password against a stored digest."""
    if not salt or not encrypted_password or password is None:
        return False
    return pwd_context.verify(f"{salt}--{password}", encrypted_password)
