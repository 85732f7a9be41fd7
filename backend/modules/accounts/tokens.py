"""Reset token generation."""

import secrets
import string

RESET_TOKEN_ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits


def generate_reset_token(length: int = 5) -> str:
    """Return a random alphanumeric token of the given length."""
    if length < 1:
        raise ValueError("Reset token length must be positive")
    return "".join(secrets.choice(RESET_TOKEN_ALPHABET) for _ in range(length))
