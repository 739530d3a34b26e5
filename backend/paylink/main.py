"""
Guaraci payment-link backend.
FastAPI application that issues payment links and forwards submissions by e-mail.
"""

import logging

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from paylink.config import get_settings
from paylink.dependencies import get_cleanup_scheduler
from paylink.models.payment import RootStatus
from paylink.routers import payments
from paylink.services.dispatch import DispatchFailed
from paylink.services.errors import SubmissionError

# Configure logging to output to console
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"

app = FastAPI(
    title="Guaraci Payments API",
    description="Single-use payment links with e-mailed identity verification",
    version=API_VERSION,
)

# Defaults to any origin; CORS_ORIGINS narrows it.
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(SubmissionError, payments.submission_error_handler)
app.add_exception_handler(DispatchFailed, payments.dispatch_failed_handler)

app.include_router(payments.router, prefix="/api", tags=["payments"])


@app.on_event("startup")
async def log_startup() -> None:
    settings = get_settings()
    if not settings.email_user or not settings.email_pass:
        logger.warning("EMAIL_USER / EMAIL_PASS not set; notifications will fail")
    if not settings.responsible_email:
        logger.warning("RESPONSIBLE_EMAIL not set; submissions will be rejected with 500")
    logger.info(
        "Guaraci payments API ready (port %s, links under %s)",
        settings.port,
        settings.frontend_url,
    )


@app.on_event("shutdown")
async def drop_pending_cleanups() -> None:
    get_cleanup_scheduler().cancel_all()


@app.get("/", response_model=RootStatus)
async def root():
    return RootStatus(version=API_VERSION)


def serve() -> None:
    """Run the API with uvicorn on the configured PORT."""
    settings = get_settings()
    uvicorn.run(app, host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    serve()
