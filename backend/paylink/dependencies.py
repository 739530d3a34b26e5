"""
Process-wide collaborators, exposed as FastAPI dependencies.

Each factory is cached so the notifier, registry and cleanup scheduler are
built once per process. Tests replace them through
``app.dependency_overrides``.
"""

from functools import lru_cache

from paylink.config import get_settings
from paylink.services.cleanup import BufferReleaseScheduler
from paylink.services.link_registry import LinkRegistry, create_link_registry
from paylink.services.notifier import Notifier, SmtpNotifier


@lru_cache()
def get_notifier() -> Notifier:
    settings = get_settings()
    return SmtpNotifier(
        host=settings.smtp_host,
        port=settings.smtp_port,
        username=settings.email_user,
        password=settings.email_pass,
        sender_name=settings.mail_sender_name,
    )


@lru_cache()
def get_link_registry() -> LinkRegistry:
    return create_link_registry(get_settings().link_registry)


@lru_cache()
def get_cleanup_scheduler() -> BufferReleaseScheduler:
    return BufferReleaseScheduler(delay_seconds=get_settings().image_retention_seconds)
