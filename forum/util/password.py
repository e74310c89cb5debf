"""Password hashing utilities."""

import bcrypt


def hash_password(password: str, rounds: int = 10) -> str:
    """Hash a password using bcrypt.

    Args:
        password: Plain-text password
        rounds: bcrypt cost factor

    Returns:
        Encoded hash, safe to store
    """
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    """Verify a password against its hash."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # Malformed stored hash
        return False
