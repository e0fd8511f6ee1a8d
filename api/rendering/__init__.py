"""Rendering module for certificate documents.

This module handles all presentation/rendering logic:
- Page geometry for the ornaments
- The backend-agnostic PageCanvas
- QR verification code rendering
- The certificate layout and PDF serialization

Business logic (building requests from enrollments) stays in services.
"""

from rendering.certificates import (
    PDF_MEDIA_TYPE,
    generate_certificate_pdf,
    validate_certificate_request,
)
from rendering.errors import (
    CertificateRenderError,
    InvalidInputError,
    QrEncodingError,
    RenderBackendError,
)
from rendering.models import CertificateRequest

__all__ = [
    "PDF_MEDIA_TYPE",
    "CertificateRenderError",
    "CertificateRequest",
    "InvalidInputError",
    "QrEncodingError",
    "RenderBackendError",
    "generate_certificate_pdf",
    "validate_certificate_request",
]
