"""Certificate of completion rendering - request validation and PDF output.

This is the entry point the service layer calls. It fails fast: input and
QR problems are raised before a single drawing call is made, and backend
failures never return a partial document.
"""

import logging
from collections.abc import Sequence
from datetime import date

from rendering.document import serialize_pdf
from rendering.errors import InvalidInputError
from rendering.layout import CERTIFICATE_TITLE, compose_certificate
from rendering.models import CertificateRequest
from rendering.qr import ErrorCorrectionLevel, encode_qr_matrix, validate_qr_matrix

logger = logging.getLogger(__name__)

PDF_MEDIA_TYPE = "application/pdf"

_REQUIRED_TEXT_FIELDS = (
    "recipient_email",
    "course_title",
    "verification_url",
    "certificate_id",
)


def validate_certificate_request(request: CertificateRequest) -> None:
    """Check that every required field is present and usable.

    `recipient_name` is optional but must be a string when given.

    Raises:
        InvalidInputError: Listing each missing or unusable field
    """
    missing = [
        name
        for name in _REQUIRED_TEXT_FIELDS
        if not isinstance(getattr(request, name), str)
        or not getattr(request, name).strip()
    ]
    if not isinstance(request.completion_date, date):
        missing.append("completion_date")
    if request.recipient_name is not None and not isinstance(
        request.recipient_name, str
    ):
        missing.append("recipient_name")

    if missing:
        raise InvalidInputError(missing_fields=missing)


def generate_certificate_pdf(
    request: CertificateRequest,
    qr_matrix: Sequence[Sequence[bool]] | None = None,
    *,
    invariant: bool = False,
) -> bytes:
    """Render a certificate of completion as a single-page PDF.

    Args:
        request: Certificate content
        qr_matrix: Precomputed QR matrix; encoded from the verification URL
            at level M when omitted
        invariant: Produce byte-identical output for identical input by
            pinning the document timestamp and id

    Returns:
        PDF content as bytes

    Raises:
        InvalidInputError: If a required field is missing
        QrEncodingError: If the URL can't be encoded or the matrix is invalid
        RenderBackendError: If ReportLab fails while producing the document
    """
    validate_certificate_request(request)

    if qr_matrix is None:
        qr_matrix = encode_qr_matrix(request.verification_url, ErrorCorrectionLevel.M)
    dimension = validate_qr_matrix(qr_matrix)

    pdf_content = serialize_pdf(
        lambda canvas: compose_certificate(request, canvas, qr_matrix),
        title=f"{CERTIFICATE_TITLE} - {request.course_title}",
        author=request.platform_name,
        subject=f"Certificate {request.certificate_id}",
        invariant=invariant,
    )

    logger.debug(
        "certificate.rendered",
        extra={
            "certificate_id": request.certificate_id,
            "qr_dimension": dimension,
            "size_bytes": len(pdf_content),
        },
    )
    return pdf_content
