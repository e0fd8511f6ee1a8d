"""Errors raised while rendering a certificate.

InvalidInputError and QrEncodingError are raised before anything is drawn.
RenderBackendError can surface mid-pipeline; any partial output is discarded.
"""


class CertificateRenderError(Exception):
    """Base class for certificate rendering failures."""

    pass


class InvalidInputError(CertificateRenderError):
    """Raised when a required certificate field is missing or unusable."""

    def __init__(self, missing_fields: list[str], message: str | None = None):
        self.missing_fields = missing_fields
        super().__init__(
            message
            or f"Invalid certificate request: missing {', '.join(missing_fields)}"
        )


class QrEncodingError(CertificateRenderError):
    """Raised when the verification URL can't be turned into a QR matrix."""

    pass


class RenderBackendError(CertificateRenderError):
    """Raised when the PDF backend fails while producing the document."""

    pass
