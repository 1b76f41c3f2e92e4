"""Password hashing for admin and user accounts."""

from passlib.context import CryptContext

# pbkdf2_sha256 ships with passlib and needs no native backend
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    """Hash a password for storage.

    Args:
        password: Plain text password.

    Returns:
        Salted hash string including the scheme identifier.
    """
    return pwd_context.hash(password)

