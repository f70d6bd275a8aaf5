"""Password hashing with bcrypt.

bcrypt only looks at the first 72 bytes of its input, and recent releases of
the library refuse longer inputs outright, so the encoded password is cut
to 72 bytes before hashing and checking.
"""

import bcrypt

MIN_PASSWORD_LENGTH = 6
_BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    return bcrypt.hashpw(_encode(password), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str | None) -> bool:
    if not password or not password_hash:
        return False
    try:
        return bcrypt.checkpw(_encode(password), password_hash.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False
