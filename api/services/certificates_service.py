"""Certificate business logic.

This module handles the glue between enrollment data and the renderer:
- Verification URL building
- CertificateRequest assembly (branding from settings)
- Download filename generation
- PDF generation off the event loop (delegating to rendering module)

Routes should delegate all certificate logic to this module. Whether an
enrollment is actually complete is decided by the caller.
"""

import asyncio
import logging
import re
from dataclasses import dataclass
from datetime import date, datetime
from functools import partial

from core.config import Settings, get_settings
from rendering.certificates import generate_certificate_pdf
from rendering.models import CertificateRequest

logger = logging.getLogger(__name__)

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9 ,.@+_-]+")


@dataclass(frozen=True)
class EnrollmentRecord:
    """The slice of an enrollment the certificate needs."""

    slug: str
    user_email: str
    course_title: str
    completed_at: date | datetime
    user_name: str | None = None


def certificate_path(slug: str) -> str:
    """Public path of an enrollment's certificate."""
    return f"/enrollments/{slug}/certificate.pdf"


def build_verification_url(base_url: str, full_path: str) -> str:
    """Join a base URL and a request path without doubling the slash."""
    return f"{base_url.rstrip('/')}/{full_path.lstrip('/')}"


def build_certificate_request(
    enrollment: EnrollmentRecord,
    *,
    base_url: str,
    full_path: str | None = None,
    settings: Settings | None = None,
) -> CertificateRequest:
    """Assemble the renderer input for an enrollment.

    Args:
        enrollment: Enrollment data supplied by the caller
        base_url: Scheme and host the certificate is served from
        full_path: Request path; defaults to the enrollment's certificate path
        settings: Branding source; defaults to application settings

    Returns:
        CertificateRequest ready for rendering
    """
    settings = settings or get_settings()
    completed_at = enrollment.completed_at
    if isinstance(completed_at, datetime):
        completed_at = completed_at.date()

    return CertificateRequest(
        recipient_name=enrollment.user_name,
        recipient_email=enrollment.user_email,
        course_title=enrollment.course_title,
        completion_date=completed_at,
        verification_url=build_verification_url(
            base_url, full_path or certificate_path(enrollment.slug)
        ),
        certificate_id=enrollment.slug,
        platform_name=settings.platform_name,
        director_name=settings.director_name,
    )


def certificate_filename(request: CertificateRequest) -> str:
    """Download filename: "{course title}, {email}.pdf"."""
    stem = f"{request.course_title}, {request.recipient_email}"
    return f"{_UNSAFE_FILENAME_CHARS.sub('_', stem).strip()}.pdf"


async def render_certificate_pdf(
    request: CertificateRequest, *, settings: Settings | None = None
) -> bytes:
    """Render the certificate PDF in a worker thread.

    Runs in a thread pool to avoid blocking the async event loop since
    PDF rendering is CPU-bound.

    Raises:
        InvalidInputError: If a required field is missing
        QrEncodingError: If the verification URL can't be encoded
        RenderBackendError: If the PDF backend fails
    """
    settings = settings or get_settings()
    loop = asyncio.get_running_loop()
    pdf_content = await loop.run_in_executor(
        None,
        partial(generate_certificate_pdf, request, invariant=settings.pdf_invariant),
    )

    logger.info(
        "certificate.generated",
        extra={
            "certificate_id": request.certificate_id,
            "size_bytes": len(pdf_content),
        },
    )
    return pdf_content
