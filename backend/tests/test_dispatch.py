"""
Dispatch tests.

Uses an in-memory notifier; covers concurrency, per-recipient failure
reporting and the no-short-circuit guarantee.
"""

import asyncio

import pytest

from paylink.models.submission import Attachment, DispatchOutcome, NotificationPayload
from paylink.services.dispatch import DispatchFailed, dispatch_notifications
from paylink.services.notifier import Notifier, RecipientRejected, TransportUnavailable

CUSTOMER = "maria@example.com"
REVIEWER = "revisor@guaraci.com"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

class RecordingNotifier(Notifier):
    """Records every payload; raises the configured error for a recipient."""

    def __init__(self, failures=None, delays=None):
        self.failures = failures or {}
        self.delays = delays or {}
        self.sent = []
        self.attempted = []

    async def send(self, payload):
        self.attempted.append(payload.recipient)
        await asyncio.sleep(self.delays.get(payload.recipient, 0))
        error = self.failures.get(payload.recipient)
        if error is not None:
            raise error
        self.sent.append(payload)


def _payload(recipient, attachments=None):
    return NotificationPayload(
        recipient=recipient,
        subject="s",
        html_body="<p>h</p>",
        text_body="t",
        attachments=attachments or [],
    )


def _pair():
    reviewer = _payload(REVIEWER, [Attachment("card_photo.jpg", b"1"), Attachment("selfie_with_document.jpg", b"2")])
    return _payload(CUSTOMER), reviewer


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------

class TestDispatchSuccess:

    @pytest.mark.asyncio
    async def test_both_sent(self):
        notifier = RecordingNotifier()
        customer, reviewer = _pair()

        outcome = await dispatch_notifications(customer, reviewer, notifier)

        assert outcome.all_succeeded is True
        assert outcome.per_recipient_errors == {}
        assert sorted(outcome.sent) == sorted([CUSTOMER, REVIEWER])
        assert len(notifier.sent) == 2

    @pytest.mark.asyncio
    async def test_sends_run_concurrently(self):
        """Each send waits for the other to start; sequential sends would time out."""
        started = {CUSTOMER: asyncio.Event(), REVIEWER: asyncio.Event()}

        class RendezvousNotifier(Notifier):
            async def send(self, payload):
                started[payload.recipient].set()
                other = REVIEWER if payload.recipient == CUSTOMER else CUSTOMER
                await started[other].wait()

        customer, reviewer = _pair()
        outcome = await asyncio.wait_for(
            dispatch_notifications(customer, reviewer, RendezvousNotifier()),
            timeout=2,
        )
        assert outcome.all_succeeded


class TestDispatchPartialFailure:

    @pytest.mark.asyncio
    async def test_customer_failure_reported_against_customer_only(self):
        error = TransportUnavailable("smtp down", recipient=CUSTOMER)
        notifier = RecordingNotifier(failures={CUSTOMER: error})
        customer, reviewer = _pair()

        outcome = await dispatch_notifications(customer, reviewer, notifier)

        assert outcome.all_succeeded is False
        assert list(outcome.per_recipient_errors) == [CUSTOMER]
        assert outcome.error_for(CUSTOMER) is error
        assert outcome.sent == [REVIEWER]
        assert outcome.error_for_role("customer") is error
        assert outcome.sent_roles == ["reviewer"]

    @pytest.mark.asyncio
    async def test_fast_failure_does_not_drop_slow_send(self):
        notifier = RecordingNotifier(
            failures={CUSTOMER: RecipientRejected("rejected", recipient=CUSTOMER)},
            delays={REVIEWER: 0.05},
        )
        customer, reviewer = _pair()

        outcome = await dispatch_notifications(customer, reviewer, notifier)

        assert [p.recipient for p in notifier.sent] == [REVIEWER]
        assert outcome.sent == [REVIEWER]

    @pytest.mark.asyncio
    async def test_both_fail(self):
        notifier = RecordingNotifier(failures={
            CUSTOMER: RecipientRejected("no such user"),
            REVIEWER: TransportUnavailable("smtp down"),
        })
        customer, reviewer = _pair()

        outcome = await dispatch_notifications(customer, reviewer, notifier)

        assert set(outcome.per_recipient_errors) == {CUSTOMER, REVIEWER}
        assert isinstance(outcome.error_for(REVIEWER), TransportUnavailable)
        assert outcome.sent == []

    @pytest.mark.asyncio
    async def test_unexpected_exception_is_captured(self):
        notifier = RecordingNotifier(failures={REVIEWER: RuntimeError("boom")})
        customer, reviewer = _pair()

        outcome = await dispatch_notifications(customer, reviewer, notifier)

        assert isinstance(outcome.error_for(REVIEWER), RuntimeError)
        assert outcome.sent == [CUSTOMER]


class TestDispatchSharedAddress:
    """Customer and reviewer addresses are the same mailbox."""

    class CustomerOnlyFailure(Notifier):
        """Fails the attachment-less (customer) payload, whatever its address."""

        def __init__(self, error):
            self.error = error

        async def send(self, payload):
            if not payload.attachments:
                raise self.error

    @pytest.mark.asyncio
    async def test_role_identifies_which_send_failed(self):
        error = TransportUnavailable("smtp down", recipient=REVIEWER)
        customer = _payload(REVIEWER)
        _, reviewer = _pair()

        outcome = await dispatch_notifications(customer, reviewer, self.CustomerOnlyFailure(error))

        assert outcome.all_succeeded is False
        assert outcome.per_role_errors == {"customer": error}
        assert outcome.error_for_role("reviewer") is None
        assert outcome.sent_roles == ["reviewer"]
        assert outcome.error_for(REVIEWER) is error

    @pytest.mark.asyncio
    async def test_both_failures_kept_by_role(self):
        first = RecipientRejected("no such user")
        second = TransportUnavailable("smtp down")

        class FailEach(Notifier):
            async def send(self, payload):
                raise second if payload.attachments else first

        customer = _payload(REVIEWER)
        _, reviewer = _pair()

        outcome = await dispatch_notifications(customer, reviewer, FailEach())

        assert outcome.per_role_errors == {"customer": first, "reviewer": second}
        assert outcome.per_recipient_errors == {REVIEWER: first}
        assert outcome.sent_roles == []

    def test_failed_message_names_roles(self):
        outcome = DispatchOutcome(
            per_recipient_errors={REVIEWER: TransportUnavailable("x")},
            per_role_errors={"customer": TransportUnavailable("x")},
        )
        assert "customer" in str(DispatchFailed(outcome))


class TestDispatchFailed:

    def test_message_names_failed_recipients(self):
        outcome = DispatchOutcome(per_recipient_errors={CUSTOMER: TransportUnavailable("x")})
        exc = DispatchFailed(outcome)

        assert exc.outcome is outcome
        assert CUSTOMER in str(exc)
