import bcrypt

from vacay.core.config import settings

# bcrypt only looks at the first 72 bytes of a secret; newer releases raise instead of truncating
_BCRYPT_MAX_BYTES = 72


def _secret(password: str) -> bytes:
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


def get_password_hash(password: str) -> str:
    """Hash a password with bcrypt using the configured cost factor."""
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(_secret(password), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash. A malformed hash never verifies."""
    try:
        return bcrypt.checkpw(_secret(plain_password), hashed_password.encode("utf-8"))
    except ValueError:
        return False
