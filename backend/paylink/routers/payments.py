"""
Payment link API endpoints.

Endpoints:
  POST /generate-link  - mint a link identifier and its public URL
  POST /submit-payment - accept payment data + two images for a link
  GET  /status         - liveness check

Client errors are returned as {"error": message} with status 400; any
delivery or unexpected failure is returned as a generic 500 without
internal details.
"""

import logging
from datetime import datetime, timezone
from typing import Dict, List

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from starlette.datastructures import UploadFile
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.types import Message

from paylink.config import Settings, get_settings
from paylink.dependencies import get_cleanup_scheduler, get_link_registry, get_notifier
from paylink.models.payment import ApiStatus, ErrorResponse, IssuedLink, SubmissionAccepted
from paylink.models.submission import PaymentSubmission, UploadedImage
from paylink.services.cleanup import BufferReleaseScheduler
from paylink.services.dispatch import DispatchFailed, dispatch_notifications
from paylink.services.errors import SubmissionError
from paylink.services.identifiers import build_link_url, generate_link_id
from paylink.services.link_registry import LinkRegistry
from paylink.services.notification_composer import (
    compose_customer_notification,
    compose_reviewer_notification,
)
from paylink.services.notifier import Notifier
from paylink.services.submission_validator import REQUIRED_TEXT_FIELDS, validate_submission
from paylink.services.upload_guard import MAX_IMAGE_BYTES, validate_uploads

logger = logging.getLogger(__name__)

router = APIRouter()

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

GENERIC_SERVER_ERROR = "Erro no servidor."
REQUEST_TOO_LARGE = "Requisição muito grande."

# Two images plus room for the text fields and multipart framing
MAX_REQUEST_BYTES = 2 * MAX_IMAGE_BYTES + 1024 * 1024
_MAX_FORM_FILES = 4
_MAX_FORM_FIELDS = 16


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


# ---------------------------------------------------------------------------
# Exception handlers (registered on the app in paylink.main)
# ---------------------------------------------------------------------------

async def submission_error_handler(request: Request, exc: SubmissionError) -> JSONResponse:
    logger.warning(f"Submission rejected: {exc.error_code}")
    return _error(400, exc.message)


async def dispatch_failed_handler(request: Request, exc: DispatchFailed) -> JSONResponse:
    logger.error(f"Submission failed: {exc}")
    return _error(500, GENERIC_SERVER_ERROR)


# ---------------------------------------------------------------------------
# Multipart helpers
# ---------------------------------------------------------------------------

class RequestTooLarge(Exception):
    """Raised while reading a request body once it exceeds MAX_REQUEST_BYTES."""


def _declared_length_too_large(request: Request) -> bool:
    declared = request.headers.get("content-length")
    if not declared:
        return False
    try:
        return int(declared) > MAX_REQUEST_BYTES
    except ValueError:
        return False


def _limit_body(request: Request, limit: int = MAX_REQUEST_BYTES) -> Request:
    """
    Return a view of the request whose body fails with RequestTooLarge as
    soon as more than ``limit`` bytes have been received.

    Counts what actually arrives, so chunked bodies without a Content-Length
    are capped too.
    """
    received = 0

    async def receive() -> Message:
        nonlocal received
        message = await request.receive()
        if message["type"] == "http.request":
            received += len(message.get("body", b""))
            if received > limit:
                raise RequestTooLarge(f"Request body exceeded {limit} bytes")
        return message

    return Request(request.scope, receive)


async def _split_form(form) -> tuple[Dict[str, str], Dict[str, List[UploadedImage]]]:
    """Separate text fields from files, reading every file into memory."""
    fields: Dict[str, str] = {}
    files: Dict[str, List[UploadedImage]] = {}
    for name, value in form.multi_items():
        if isinstance(value, UploadFile):
            content = await value.read()
            files.setdefault(name, []).append(
                UploadedImage(
                    filename=value.filename or name,
                    content_type=value.content_type or "",
                    content=content,
                )
            )
        elif name in REQUIRED_TEXT_FIELDS or name == "linkId":
            fields.setdefault(name, value)
    return fields, files


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.post("/generate-link", response_model=IssuedLink)
async def generate_link(
    settings: Settings = Depends(get_settings),
    registry: LinkRegistry = Depends(get_link_registry),
) -> IssuedLink:
    """Issue a new single-use payment link."""
    link_id = generate_link_id()
    registry.record(link_id)
    logger.info(f"Issued payment link {link_id}")
    return IssuedLink(
        identifier=link_id,
        link=link_id,
        full_url=build_link_url(settings.frontend_url, link_id),
    )


@router.post(
    "/submit-payment",
    response_model=SubmissionAccepted,
    responses={400: {"model": ErrorResponse}, 413: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def submit_payment(
    request: Request,
    settings: Settings = Depends(get_settings),
    notifier: Notifier = Depends(get_notifier),
    registry: LinkRegistry = Depends(get_link_registry),
    scheduler: BufferReleaseScheduler = Depends(get_cleanup_scheduler),
):
    """
    Accept a payment submission for a previously issued link.

    Expects multipart fields nome, email, telefone, cartao, linkId and
    exactly one image under each of fotoCartao and selfieDocumento.
    On success both the customer and the reviewer are e-mailed.
    """
    if _declared_length_too_large(request):
        return _error(413, REQUEST_TOO_LARGE)

    try:
        form = await _limit_body(request).form(
            max_files=_MAX_FORM_FILES, max_fields=_MAX_FORM_FIELDS
        )
    except RequestTooLarge as exc:
        logger.warning(f"Rejected oversized submission: {exc}")
        return _error(413, REQUEST_TOO_LARGE)
    except StarletteHTTPException as exc:
        logger.warning(f"Malformed multipart body: {exc.detail}")
        return _error(400, "Requisição inválida.")

    try:
        fields, files = await _split_form(form)
        details = validate_submission(fields, fields.get("linkId"), registry=registry)
        validated_files = validate_uploads(files)

        if not settings.responsible_email:
            logger.error("RESPONSIBLE_EMAIL is not configured; cannot notify reviewer")
            return _error(500, GENERIC_SERVER_ERROR)

        submission = PaymentSubmission(details=details, files=validated_files)
        timestamp = datetime.now()
        customer_payload = compose_customer_notification(
            details.customer_name, details.email, details.link_id, timestamp
        )
        reviewer_payload = compose_reviewer_notification(
            submission, settings.responsible_email, timestamp
        )

        try:
            outcome = await dispatch_notifications(customer_payload, reviewer_payload, notifier)
        finally:
            scheduler.schedule(validated_files)

        if not outcome.all_succeeded:
            raise DispatchFailed(outcome)

        logger.info(f"Payment submission accepted for link {details.link_id}")
        return SubmissionAccepted(success=True)

    except (SubmissionError, DispatchFailed):
        raise
    except Exception:
        logger.exception("Unexpected error while handling payment submission")
        return _error(500, GENERIC_SERVER_ERROR)
    finally:
        await form.close()


@router.get("/status", response_model=ApiStatus)
async def api_status() -> ApiStatus:
    return ApiStatus(timestamp=datetime.now(timezone.utc).isoformat())
