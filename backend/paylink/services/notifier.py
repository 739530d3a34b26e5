"""
Outbound e-mail transport.

``Notifier`` is the capability the dispatch step depends on: one async
``send(payload)`` that returns on success and raises a ``NotifierError`` on
failure. ``SmtpNotifier`` is the production implementation (implicit-TLS
SMTP, Gmail by default). It is constructed once per process and injected
into the routes; nothing reads it as a global.
"""

import asyncio
import logging
import smtplib
import ssl
from abc import ABC, abstractmethod
from email.message import EmailMessage
from email.utils import formataddr, getaddresses
from typing import Optional

from paylink.models.submission import NotificationPayload

logger = logging.getLogger(__name__)

# Gmail rejects messages above 25 MB
DEFAULT_MAX_ATTACHMENT_BYTES = 25 * 1024 * 1024

# "Requested mail action aborted: exceeded storage allocation"
_SMTP_MESSAGE_TOO_LARGE = 552


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class NotifierError(Exception):
    """Base class for a failed send. ``kind`` is a stable label for logs."""
    kind = "notifier_error"

    def __init__(self, message: str, recipient: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.recipient = recipient


class TransportUnavailable(NotifierError):
    kind = "transport_unavailable"


class RecipientRejected(NotifierError):
    kind = "recipient_rejected"


class AttachmentTooLarge(NotifierError):
    kind = "attachment_too_large"


# ---------------------------------------------------------------------------
# Interface
# ---------------------------------------------------------------------------

class Notifier(ABC):

    @abstractmethod
    async def send(self, payload: NotificationPayload) -> None:
        """Deliver payload, raising NotifierError if it could not be sent."""


# ---------------------------------------------------------------------------
# SMTP implementation
# ---------------------------------------------------------------------------

class SmtpNotifier(Notifier):

    def __init__(
        self,
        host: str,
        port: int,
        username: str,
        password: str,
        sender_name: str = "",
        timeout: float = 30,
        max_attachment_bytes: Optional[int] = DEFAULT_MAX_ATTACHMENT_BYTES,
    ):
        self.host = host
        self.port = port
        self.username = username
        self._password = password
        self.sender_name = sender_name
        self.timeout = timeout
        self.max_attachment_bytes = max_attachment_bytes

    def __repr__(self) -> str:
        return f"SmtpNotifier(host={self.host!r}, port={self.port}, username={self.username!r})"

    @property
    def from_address(self) -> str:
        if self.sender_name:
            return formataddr((self.sender_name, self.username))
        return self.username

    def build_message(self, payload: NotificationPayload) -> EmailMessage:
        """Turn a payload into a multipart message: text + HTML alternatives, then attachments."""
        message = EmailMessage()
        message["From"] = self.from_address
        message["To"] = payload.recipient
        message["Subject"] = payload.subject
        message.set_content(payload.text_body)
        message.add_alternative(payload.html_body, subtype="html")

        for attachment in payload.attachments:
            maintype, _, subtype = (attachment.content_type or "").partition("/")
            if not maintype or not subtype:
                maintype, subtype = "application", "octet-stream"
            message.add_attachment(
                attachment.content,
                maintype=maintype,
                subtype=subtype,
                filename=attachment.filename,
            )
        return message

    def _send_sync(self, message: EmailMessage) -> None:
        context = ssl.create_default_context()
        with smtplib.SMTP_SSL(self.host, self.port, context=context, timeout=self.timeout) as server:
            if self.username and self._password:
                server.login(self.username, self._password)
            server.send_message(message)

    async def send(self, payload: NotificationPayload) -> None:
        recipient = payload.recipient
        # Exactly one address per message; a comma list in To reaches every entry
        if len([addr for _, addr in getaddresses([recipient]) if addr]) != 1:
            raise RecipientRejected(
                f"Expected a single recipient address, got {recipient!r}", recipient=recipient
            )
        if self.max_attachment_bytes is not None and payload.attachment_bytes > self.max_attachment_bytes:
            raise AttachmentTooLarge(
                f"Attachments total {payload.attachment_bytes} bytes, "
                f"limit is {self.max_attachment_bytes}",
                recipient=recipient,
            )

        message = self.build_message(payload)
        try:
            await asyncio.to_thread(self._send_sync, message)
        except smtplib.SMTPRecipientsRefused as exc:
            raise RecipientRejected(f"Recipient refused: {recipient}", recipient=recipient) from exc
        except smtplib.SMTPResponseException as exc:
            if exc.smtp_code == _SMTP_MESSAGE_TOO_LARGE:
                raise AttachmentTooLarge(
                    "Message rejected by server as too large", recipient=recipient
                ) from exc
            raise TransportUnavailable(
                f"SMTP server replied {exc.smtp_code}", recipient=recipient
            ) from exc
        except (smtplib.SMTPException, OSError) as exc:
            raise TransportUnavailable(
                f"SMTP transport failed: {exc.__class__.__name__}", recipient=recipient
            ) from exc

        logger.debug(f"E-mail sent to {recipient} via {self.host}")
