"""Pydantic schemas for API request/response validation."""

from datetime import date

from pydantic import BaseModel, Field, field_validator


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    service: str


class CertificateRenderRequest(BaseModel):
    """Request to render a certificate of completion as PDF."""

    recipient_name: str | None = Field(default=None, max_length=100)
    recipient_email: str = Field(min_length=3, max_length=254)
    course_title: str = Field(min_length=1, max_length=200)
    completion_date: date
    certificate_id: str = Field(min_length=1, max_length=64)
    # Path appended to the public base URL for the verification link.
    # Defaults to /enrollments/{certificate_id}/certificate.pdf
    verification_path: str | None = Field(default=None, max_length=512)

    @field_validator("recipient_name")
    @classmethod
    def validate_recipient_name(cls, v: str | None) -> str | None:
        """Collapse whitespace; a blank name means "no name"."""
        if v is None:
            return None
        cleaned = " ".join(v.strip().split())
        return cleaned or None

    @field_validator("recipient_email", "course_title", "certificate_id")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return v.strip()

    @field_validator("verification_path")
    @classmethod
    def validate_verification_path(cls, v: str | None) -> str | None:
        if v is None:
            return None
        if not v.startswith("/"):
            raise ValueError("verification_path must start with '/'")
        return v
