"""
Pydantic models for the payment-link API responses.
"""

from pydantic import BaseModel, Field


class IssuedLink(BaseModel):
    """Response body for POST /api/generate-link."""
    model_config = {"populate_by_name": True}

    identifier: str
    # Same value as identifier; kept for clients built against the older shape.
    link: str
    full_url: str = Field(alias="fullUrl")


class SubmissionAccepted(BaseModel):
    success: bool = True


class ErrorResponse(BaseModel):
    error: str


class RootStatus(BaseModel):
    status: str = "API operacional"
    version: str = "1.0.0"


class ApiStatus(BaseModel):
    success: bool = True
    message: str = "API está funcionando corretamente"
    timestamp: str
