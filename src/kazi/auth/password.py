"""Password hashing utilities.

Learn: Uses bcrypt for password hashing. bcrypt generates a random salt
per hash and embeds it, together with the work factor, in the digest
("$2b$10$<salt><hash>"), so verification needs nothing but the digest.
Work factor 10 keeps sign-in latency low while still being slow to
brute-force.
"""

import bcrypt

BCRYPT_ROUNDS = 10

# bcrypt only looks at the first 72 bytes of input.
_MAX_PASSWORD_BYTES = 72


def hash_password(password: str) -> str:
    """Hash a password with bcrypt and a fresh salt.

    Raises ValueError for an empty password.
    """
    if not password:
        raise ValueError("password must not be empty")
    pw_bytes = password.encode("utf-8")[:_MAX_PASSWORD_BYTES]
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    return bcrypt.hashpw(pw_bytes, salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a stored digest.

    Returns False on mismatch, on empty input and on a malformed digest.
    bcrypt.checkpw does the constant-time comparison.
    """
    if not password or not password_hash:
        return False
    try:
        pw_bytes = password.encode("utf-8")[:_MAX_PASSWORD_BYTES]
        return bcrypt.checkpw(pw_bytes, password_hash.encode("utf-8"))
    except (ValueError, TypeError):
        return False
