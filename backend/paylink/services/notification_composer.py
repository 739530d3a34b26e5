"""
Rendering of the customer and reviewer notifications.

Composition is pure: the timestamp is passed in by the caller, so the same
input always renders the same payload. User-supplied values only reach the
HTML through Jinja2 autoescaping (& < > " ' become entities).

Public API:
  compose_customer_notification(name, email, link_id, timestamp) -> NotificationPayload
  compose_reviewer_notification(submission, recipient, timestamp) -> NotificationPayload
"""

import re
from datetime import datetime

from jinja2 import DictLoader, Environment, StrictUndefined

from paylink.models.submission import Attachment, NotificationPayload, PaymentSubmission
from paylink.services.email_templates import BASE_STYLE, HTML_TEMPLATES, TEXT_TEMPLATES

BRAND = "Guaraci"

CUSTOMER_SUBJECT = "Seu pagamento está em processamento"
REVIEWER_SUBJECT = "Novo pagamento de {name}"

CARD_PHOTO_FILENAME = "card_photo.jpg"
SELFIE_FILENAME = "selfie_with_document.jpg"

_TIMESTAMP_FORMAT = "%d/%m/%Y %H:%M:%S"

_html_env = Environment(
    loader=DictLoader(HTML_TEMPLATES),
    autoescape=True,
    undefined=StrictUndefined,
)

_text_env = Environment(
    loader=DictLoader(TEXT_TEMPLATES),
    autoescape=False,
    undefined=StrictUndefined,
    keep_trailing_newline=True,
)


def format_timestamp(timestamp: datetime) -> str:
    return timestamp.strftime(_TIMESTAMP_FORMAT)


def _header_safe(value: str) -> str:
    """Collapse all whitespace (including CR/LF) so the value fits on one header line."""
    return re.sub(r"\s+", " ", value).strip()


def _render(template_name: str, **context) -> tuple[str, str]:
    """Render the .html and .txt variants of template_name."""
    context.setdefault("brand", BRAND)
    html_body = _html_env.get_template(f"{template_name}.html").render(
        style=BASE_STYLE, **context
    )
    text_body = _text_env.get_template(f"{template_name}.txt").render(**context)
    return html_body, text_body


def compose_customer_notification(
    name: str,
    email: str,
    link_id: str,
    timestamp: datetime,
) -> NotificationPayload:
    """
    Build the "payment in processing" e-mail for the customer.

    Carries only the greeting name, identifier and timestamp; no card,
    phone or e-mail details, and no attachments.
    """
    html_body, text_body = _render(
        "customer",
        name=name,
        link_id=link_id,
        timestamp=format_timestamp(timestamp),
        year=timestamp.year,
    )
    return NotificationPayload(
        recipient=email,
        subject=CUSTOMER_SUBJECT,
        html_body=html_body,
        text_body=text_body,
        attachments=[],
    )


def compose_reviewer_notification(
    submission: PaymentSubmission,
    recipient: str,
    timestamp: datetime,
) -> NotificationPayload:
    """
    Build the internal review e-mail.

    Lists every submitted field in a table and attaches both verification
    images, card photo first, under fixed filenames.
    """
    details = submission.details
    rows = [
        ("Nome", details.customer_name),
        ("E-mail", details.email),
        ("Telefone", details.phone),
        ("Cartão", details.card_digits),
        ("ID do Link", details.link_id),
        ("Data/Hora", format_timestamp(timestamp)),
    ]
    attachments = [
        Attachment(
            filename=CARD_PHOTO_FILENAME,
            content=submission.files.card_photo.content,
            content_type=submission.files.card_photo.content_type,
        ),
        Attachment(
            filename=SELFIE_FILENAME,
            content=submission.files.selfie_with_document.content,
            content_type=submission.files.selfie_with_document.content_type,
        ),
    ]
    html_body, text_body = _render(
        "reviewer",
        rows=rows,
        attachment_names=[
            f"Foto do cartão ({CARD_PHOTO_FILENAME})",
            f"Selfie com documento ({SELFIE_FILENAME})",
        ],
        year=timestamp.year,
    )
    return NotificationPayload(
        recipient=recipient,
        subject=REVIEWER_SUBJECT.format(name=_header_safe(details.customer_name)),
        html_body=html_body,
        text_body=text_body,
        attachments=attachments,
    )
