"""
Registry of issued link identifiers.

Links are not persisted anywhere. ``NullLinkRegistry`` (the default) records
nothing and reports every identifier as existing, so submissions are only
checked for identifier *format*. ``InMemoryLinkRegistry`` keeps issued
identifiers for the life of the process and can be enabled with
LINK_REGISTRY=memory. A durable store only needs to implement the same two
methods.
"""

import logging
import threading
from abc import ABC, abstractmethod
from datetime import datetime, timezone

logger = logging.getLogger(__name__)


class LinkRegistry(ABC):

    @abstractmethod
    def record(self, link_id: str) -> None:
        """Remember that link_id was issued."""

    @abstractmethod
    def exists(self, link_id: str) -> bool:
        """Return True if link_id may receive a submission."""


class NullLinkRegistry(LinkRegistry):

    def record(self, link_id: str) -> None:
        return None

    def exists(self, link_id: str) -> bool:
        return True


class InMemoryLinkRegistry(LinkRegistry):
    """Process-lifetime registry. Everything is lost on restart."""

    def __init__(self):
        self._issued: dict[str, datetime] = {}
        self._lock = threading.Lock()

    def record(self, link_id: str) -> None:
        with self._lock:
            self._issued.setdefault(link_id, datetime.now(timezone.utc))

    def exists(self, link_id: str) -> bool:
        with self._lock:
            return link_id in self._issued

    def issued_at(self, link_id: str):
        with self._lock:
            return self._issued.get(link_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._issued)


_REGISTRIES = {
    "none": NullLinkRegistry,
    "memory": InMemoryLinkRegistry,
}


def create_link_registry(kind: str) -> LinkRegistry:
    """
    Build the registry named by LINK_REGISTRY.

    Raises ValueError for unknown kinds.
    """
    resolved = (kind or "none").lower().strip()
    factory = _REGISTRIES.get(resolved)
    if factory is None:
        raise ValueError(
            f"Unknown link registry {resolved!r}. "
            f"Supported registries: {sorted(_REGISTRIES)}"
        )
    logger.info(f"Using {factory.__name__} for issued links")
    return factory()
