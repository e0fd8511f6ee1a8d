"""Certificate rendering endpoints."""

import logging

from fastapi import APIRouter, HTTPException, Request, Response

from core.config import get_settings
from core.ratelimit import RENDER_LIMIT, limiter
from rendering.certificates import PDF_MEDIA_TYPE
from rendering.errors import InvalidInputError, QrEncodingError, RenderBackendError
from rendering.models import CertificateRequest
from schemas import CertificateRenderRequest
from services.certificates_service import (
    EnrollmentRecord,
    build_certificate_request,
    certificate_filename,
    render_certificate_pdf,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/certificates", tags=["certificates"])


def _get_cache_control() -> str:
    """Get appropriate Cache-Control header value based on environment."""
    if get_settings().is_development:
        return "no-store"
    return "private, max-age=3600"


def _to_certificate_request(
    body: CertificateRenderRequest, request: Request
) -> CertificateRequest:
    settings = get_settings()
    enrollment = EnrollmentRecord(
        slug=body.certificate_id,
        user_email=body.recipient_email,
        course_title=body.course_title,
        completed_at=body.completion_date,
        user_name=body.recipient_name,
    )
    return build_certificate_request(
        enrollment,
        base_url=settings.public_base_url or str(request.base_url),
        full_path=body.verification_path,
        settings=settings,
    )


@router.post(
    "/render",
    responses={
        200: {"content": {PDF_MEDIA_TYPE: {}}, "description": "PDF certificate"},
        422: {"description": "Invalid certificate data or unencodable URL"},
        500: {"description": "PDF generation failed"},
    },
)
@limiter.limit(RENDER_LIMIT)
async def render_certificate_endpoint(
    request: Request,
    body: CertificateRenderRequest,
) -> Response:
    """Render a certificate of completion and return it as a PDF download."""
    certificate = _to_certificate_request(body, request)

    try:
        pdf_content = await render_certificate_pdf(certificate)
    except InvalidInputError as e:
        logger.warning(
            "certificate.invalid_input",
            extra={
                "certificate_id": certificate.certificate_id,
                "missing_fields": e.missing_fields,
            },
        )
        raise HTTPException(status_code=422, detail=str(e)) from e
    except QrEncodingError as e:
        logger.warning(
            "certificate.qr_encoding_failed",
            extra={"certificate_id": certificate.certificate_id},
        )
        raise HTTPException(status_code=422, detail=str(e)) from e
    except RenderBackendError as e:
        logger.exception(
            "certificate.render_failed",
            extra={"certificate_id": certificate.certificate_id},
        )
        raise HTTPException(
            status_code=500,
            detail="Certificate generation failed. Please try again.",
        ) from e

    return Response(
        content=pdf_content,
        media_type=PDF_MEDIA_TYPE,
        headers={
            "Content-Disposition": (
                f'attachment; filename="{certificate_filename(certificate)}"'
            ),
            "Cache-Control": _get_cache_control(),
        },
    )
