"""
Concurrent delivery of the customer and reviewer notifications.

Both sends start together and both are awaited; one failing never cancels
or hides the other. No retries happen here.
"""

import asyncio
import logging

from paylink.models.submission import DispatchOutcome, NotificationPayload
from paylink.services.notifier import Notifier, NotifierError

logger = logging.getLogger(__name__)


class DispatchFailed(Exception):
    """Raised by the submission boundary when at least one notification failed."""
    def __init__(self, outcome: DispatchOutcome):
        failed = ", ".join(sorted(outcome.per_recipient_errors))
        roles = ", ".join(sorted(outcome.per_role_errors))
        message = f"Notification dispatch failed for: {failed}"
        if roles:
            message += f" ({roles})"
        super().__init__(message)
        self.outcome = outcome


async def dispatch_notifications(
    customer_payload: NotificationPayload,
    reviewer_payload: NotificationPayload,
    notifier: Notifier,
) -> DispatchOutcome:
    """
    Send both payloads concurrently and report per-recipient failures.

    Any exception from the notifier is captured against its recipient and its role.
    Cancellation is re-raised.
    """
    deliveries = [("customer", customer_payload), ("reviewer", reviewer_payload)]
    results = await asyncio.gather(
        *(notifier.send(payload) for _, payload in deliveries),
        return_exceptions=True,
    )

    outcome = DispatchOutcome()
    for (role, payload), result in zip(deliveries, results):
        if isinstance(result, BaseException) and not isinstance(result, Exception):
            raise result
        if isinstance(result, Exception):
            kind = result.kind if isinstance(result, NotifierError) else type(result).__name__
            logger.error(
                f"Failed to send {role} notification to {payload.recipient}: "
                f"[{kind}] {result}"
            )
            outcome.per_role_errors[role] = result
            outcome.per_recipient_errors.setdefault(payload.recipient, result)
        else:
            logger.info(f"Sent {role} notification to {payload.recipient}")
            outcome.sent_roles.append(role)
            outcome.sent.append(payload.recipient)

    return outcome
