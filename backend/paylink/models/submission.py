"""
Value objects for the submission pipeline.

These hold raw bytes, so they are plain dataclasses rather than pydantic
models. Nothing here is persisted; every instance lives for one request.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass
class UploadedImage:
    """A single uploaded file, already buffered in memory by the HTTP layer."""
    filename: str
    content_type: str
    content: bytes = b""

    @property
    def size(self) -> int:
        return len(self.content)

    def release(self) -> None:
        """Drop the buffered bytes so they can be garbage-collected."""
        self.content = b""


@dataclass
class ValidatedFiles:
    """The two verification images, one per required form field."""
    card_photo: UploadedImage
    selfie_with_document: UploadedImage

    @property
    def size(self) -> int:
        return self.card_photo.size + self.selfie_with_document.size

    def release(self) -> None:
        self.card_photo.release()
        self.selfie_with_document.release()


@dataclass
class ValidatedSubmission:
    """Text fields of a submission, trimmed and checked non-empty."""
    customer_name: str
    email: str
    phone: str
    card_digits: str
    link_id: str


@dataclass
class PaymentSubmission:
    """A fully validated submission: text fields plus both images."""
    details: ValidatedSubmission
    files: ValidatedFiles


@dataclass(frozen=True)
class Attachment:
    filename: str
    content: bytes
    content_type: str = "image/jpeg"


@dataclass(frozen=True)
class NotificationPayload:
    """One rendered e-mail, ready to hand to a Notifier."""
    recipient: str
    subject: str
    html_body: str
    text_body: str
    attachments: List[Attachment] = field(default_factory=list)

    @property
    def attachment_bytes(self) -> int:
        return sum(len(a.content) for a in self.attachments)


@dataclass
class DispatchOutcome:
    """
    Aggregated result of sending both notifications for one submission.

    per_recipient_errors maps each recipient whose send failed to the
    exception raised for it. per_role_errors holds the same failures keyed
    by "customer" / "reviewer", which stays unambiguous when both payloads
    share an address. Empty mappings mean every send succeeded.
    """
    per_recipient_errors: Dict[str, Exception] = field(default_factory=dict)
    sent: List[str] = field(default_factory=list)
    per_role_errors: Dict[str, Exception] = field(default_factory=dict)
    sent_roles: List[str] = field(default_factory=list)

    @property
    def all_succeeded(self) -> bool:
        return not (self.per_recipient_errors or self.per_role_errors)

    def error_for(self, recipient: str) -> Optional[Exception]:
        return self.per_recipient_errors.get(recipient)

    def error_for_role(self, role: str) -> Optional[Exception]:
        return self.per_role_errors.get(role)
