"""Input record for one certificate render."""

from dataclasses import dataclass
from datetime import date

DEFAULT_PLATFORM_NAME = "Corsego.com"
DEFAULT_DIRECTOR_NAME = "Course Director"


@dataclass(frozen=True)
class CertificateRequest:
    """Everything the renderer needs to draw one certificate.

    Built once per render by the caller and discarded afterwards.
    """

    recipient_email: str
    course_title: str
    completion_date: date
    verification_url: str
    certificate_id: str
    recipient_name: str | None = None
    platform_name: str = DEFAULT_PLATFORM_NAME
    director_name: str = DEFAULT_DIRECTOR_NAME

    @property
    def has_recipient_name(self) -> bool:
        return bool(self.recipient_name and self.recipient_name.strip())


def format_completion_date(value: date) -> str:
    return value.strftime("%B %d, %Y")
