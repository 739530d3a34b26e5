"""
Link identifier generation and format checks.

Identifiers are random (version 4) UUIDs in canonical 36-character text
form. ``uuid.uuid4`` draws from ``os.urandom``, the OS CSPRNG.
"""

import re
import uuid

# 8-4-4-4-12 hex groups, version nibble 4, RFC 4122 variant (8, 9, a or b).
_LINK_ID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$",
    re.IGNORECASE,
)

LINK_PATH = "pagamento"


def generate_link_id() -> str:
    """Return a new random link identifier."""
    return str(uuid.uuid4())


def is_valid_link_id(value) -> bool:
    """
    Return True if value is a canonical version-4 UUID string.

    Braced, URN-prefixed and un-hyphenated spellings are rejected even though
    ``uuid.UUID`` would accept them.
    """
    if not isinstance(value, str):
        return False
    return bool(_LINK_ID_PATTERN.fullmatch(value))


def build_link_url(base_url: str, link_id: str) -> str:
    """
    Join the public frontend URL and a link identifier.

    Example: ``https://pay.example.com`` → ``https://pay.example.com/pagamento/<id>``
    """
    return f"{base_url.rstrip('/')}/{LINK_PATH}/{link_id}"
