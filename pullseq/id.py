import secrets
import string

B36_ALPHABET = string.ascii_lowercase + string.digits


def random_id(length: int = 10, *, prefix: str = "") -> str:
    """Return a random base36 identifier, optionally prefixed."""
    return prefix + "".join(secrets.choice(B36_ALPHABET) for _ in range(length))
