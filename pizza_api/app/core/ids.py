"""Short random identifiers for stored records."""

import secrets

ID_LENGTH = 8


def generate_id(length: int = ID_LENGTH) -> str:
    """Return a URL‑safe random id of ``length`` characters.

    Each character carries 6 bits of entropy, so the default length
    gives 48 random bits; collisions are negligible at storefront scale.
    """
    # token_urlsafe(n) yields about 1.3 characters per byte; trim to length.
    return secrets.token_urlsafe(length)[:length]
