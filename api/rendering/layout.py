"""Certificate layout - the nine paint stages.

Stages run in a fixed order against one PageCanvas. Paint order is z-order,
so the background must come first and nothing may be reordered.

Each stage is a function of (CertificateRequest, PageCanvas). The QR stage
is bound to a matrix computed before drawing starts.
"""

from collections.abc import Callable, Sequence
from functools import partial

from rendering.canvas import Alignment, Color, Font, PageCanvas, stroke_nested
from rendering.geometry import (
    Point,
    corner_anchor,
    corner_flourish_points,
    decorative_divider_geometry,
    seal_ring_geometry,
    star_points,
)
from rendering.models import CertificateRequest, format_completion_date
from rendering.qr import draw_qr_modules, validate_qr_matrix

Stage = Callable[[CertificateRequest, PageCanvas], None]

CERTIFICATE_TITLE = "Certificate of Completion"
LEGAL_DISCLAIMER = (
    "This certificate confirms completion of an online course. It does not "
    "represent an academic degree or professional accreditation."
)

# Palette
PURPLE = Color("563d7c")
GOLD = Color("b8962e")
IVORY = Color("fdfbf5")
INK = Color("1f1a2e")
MUTED = Color("6b6480")

# Border: (inset from page edge, stroke weight), outermost first
BORDER_LAYERS: tuple[tuple[float, float], ...] = ((25.0, 4.0), (30.0, 1.0), (35.0, 2.0))

CORNER_INSET = 45.0
CORNER_SIZE = 36.0
CORNER_DOT_RADIUS = 2.5

HEADER_OFFSET = 115.0
DIVIDER_OFFSET = 138.0

# Body lines, measured down from BODY_TOP_OFFSET below the page top
BODY_TOP_OFFSET = 180.0
BODY_INTRO_DY = 0.0
BODY_NAME_DY = 40.0
BODY_EMAIL_DY = 62.0
BODY_ACHIEVEMENT_DY = 95.0
BODY_COURSE_DY = 128.0
BODY_PLATFORM_DY = 156.0
# Lines are shrunk to stay this far inside the page edges
BODY_SIDE_MARGIN = 60.0

SEAL_CENTER_Y = 150.0
SEAL_OUTER_RADIUS = 50.0
SEAL_INNER_RADIUS = 38.0
SEAL_RING_WEIGHTS = (2.0, 0.75, 1.5, 0.5)
SEAL_DOT_RADIUS = 1.2
SEAL_STAR_RADIUS = 7.0

QR_SIZE = 55.0
QR_PADDING = 4.0
QR_LEFT_OFFSET = 84.0  # from the page center to the code's left edge
QR_TOP_Y = 182.0
QR_LABEL = "SCAN TO VERIFY"

SIGNATURE_CENTER_INSET = 185.0
SIGNATURE_HALF_WIDTH = 90.0
SIGNATURE_TEXT_Y = 128.0
SIGNATURE_LINE_Y = 120.0
SIGNATURE_CAPTION_Y = 108.0

FOOTER_ID_Y = 80.0
FOOTER_URL_Y = 69.0
FOOTER_DISCLAIMER_Y = 56.0
FOOTER_SIDE_MARGIN = CORNER_INSET + CORNER_SIZE + 10.0


def draw_background(request: CertificateRequest, canvas: PageCanvas) -> None:
    canvas.set_fill_color(IVORY)
    canvas.fill_rect(Point(0, 0), canvas.width, canvas.height)


def draw_border(request: CertificateRequest, canvas: PageCanvas) -> None:
    """Three nested rectangles stepping inward with distinct weights."""
    canvas.set_stroke_color(PURPLE)

    def inset_rect(offset: float) -> None:
        canvas.stroke_rect(
            Point(offset, offset),
            canvas.width - 2 * offset,
            canvas.height - 2 * offset,
        )

    stroke_nested(canvas, BORDER_LAYERS, inset_rect)


def draw_corner_ornaments(request: CertificateRequest, canvas: PageCanvas) -> None:
    canvas.set_stroke_color(GOLD)
    canvas.set_fill_color(GOLD)
    canvas.set_line_width(1.5)
    for corner in range(4):
        anchor = corner_anchor(corner, canvas.width, canvas.height, CORNER_INSET)
        flourish = corner_flourish_points(corner, anchor, CORNER_SIZE)
        for segment in flourish.segments:
            canvas.stroke_line(segment.start, segment.end)
        canvas.fill_circle(flourish.dot, CORNER_DOT_RADIUS)


def draw_header(request: CertificateRequest, canvas: PageCanvas) -> None:
    center_x = canvas.width / 2
    canvas.set_fill_color(PURPLE)
    canvas.draw_text(
        CERTIFICATE_TITLE,
        Font.SERIF_BOLD,
        40,
        Point(center_x, canvas.height - HEADER_OFFSET),
        Alignment.CENTER,
    )

    divider = decorative_divider_geometry(
        Point(center_x, canvas.height - DIVIDER_OFFSET)
    )
    canvas.set_stroke_color(GOLD)
    canvas.set_line_width(1.0)
    canvas.stroke_line(divider.left.start, divider.left.end)
    canvas.stroke_line(divider.right.start, divider.right.end)
    canvas.set_fill_color(GOLD)
    canvas.fill_polygon(divider.diamond)


def draw_body(request: CertificateRequest, canvas: PageCanvas) -> None:
    """Recipient block, achievement sentence, course title and platform.

    The name line only appears when a name is present; the email is always
    shown, either beneath the name or alone in the name slot.
    """
    center_x = canvas.width / 2
    top = canvas.height - BODY_TOP_OFFSET

    max_width = canvas.width - 2 * BODY_SIDE_MARGIN

    def line(text: str, font: Font, size: float, dy: float) -> None:
        canvas.draw_text(
            text,
            font,
            size,
            Point(center_x, top - dy),
            Alignment.CENTER,
            max_width=max_width,
        )

    canvas.set_fill_color(INK)
    if request.has_recipient_name:
        line("This is to certify that", Font.SERIF_ITALIC, 16, BODY_INTRO_DY)
        canvas.set_fill_color(PURPLE)
        line(request.recipient_name.strip(), Font.SERIF_BOLD, 30, BODY_NAME_DY)
        canvas.set_fill_color(MUTED)
        line(request.recipient_email, Font.SANS, 12, BODY_EMAIL_DY)
    else:
        line(
            "This is to certify that the owner of the email address",
            Font.SERIF_ITALIC,
            16,
            BODY_INTRO_DY,
        )
        canvas.set_fill_color(PURPLE)
        line(request.recipient_email, Font.SERIF_BOLD_ITALIC, 22, BODY_NAME_DY)

    canvas.set_fill_color(INK)
    line("has successfully completed the course", Font.SERIF, 16, BODY_ACHIEVEMENT_DY)
    canvas.set_fill_color(PURPLE)
    line(request.course_title, Font.SERIF_BOLD_ITALIC, 24, BODY_COURSE_DY)
    canvas.set_fill_color(INK)
    line(f"on the {request.platform_name} platform", Font.SERIF, 14, BODY_PLATFORM_DY)


def draw_seal(request: CertificateRequest, canvas: PageCanvas) -> None:
    center = Point(canvas.width / 2, SEAL_CENTER_Y)
    seal = seal_ring_geometry(center, SEAL_OUTER_RADIUS, SEAL_INNER_RADIUS)

    canvas.set_fill_color(PURPLE)
    canvas.fill_circle(center, SEAL_OUTER_RADIUS)

    canvas.set_stroke_color(GOLD)
    stroke_nested(
        canvas,
        zip(seal.ring_radii, SEAL_RING_WEIGHTS, strict=True),
        lambda radius: canvas.stroke_circle(center, radius),
    )

    canvas.set_line_width(1.0)
    for serration in seal.serrations:
        canvas.stroke_line(serration.start, serration.end)

    canvas.set_fill_color(GOLD)
    for dot in seal.dots:
        canvas.fill_circle(dot, SEAL_DOT_RADIUS)

    with canvas.scoped_transform(seal.rotation_deg, center):
        canvas.set_fill_color(IVORY)
        canvas.draw_text(
            "CERTIFIED",
            Font.SANS_BOLD,
            9,
            Point(center.x, center.y + 8),
            Alignment.CENTER,
        )
        canvas.draw_text(
            "COMPLETION",
            Font.SANS_BOLD,
            7,
            Point(center.x, center.y - 2),
            Alignment.CENTER,
        )
        canvas.set_fill_color(GOLD)
        canvas.fill_polygon(
            star_points(Point(center.x, center.y - 16), SEAL_STAR_RADIUS)
        )


def draw_qr_block(
    request: CertificateRequest,
    canvas: PageCanvas,
    qr_matrix: Sequence[Sequence[bool]],
) -> None:
    origin = Point(canvas.width / 2 + QR_LEFT_OFFSET, QR_TOP_Y)

    canvas.set_fill_color(INK)
    canvas.set_stroke_color(GOLD)
    canvas.set_line_width(0.75)
    draw_qr_modules(canvas, qr_matrix, origin, QR_SIZE, padding=QR_PADDING)

    canvas.set_fill_color(MUTED)
    canvas.draw_text(
        QR_LABEL,
        Font.SANS_BOLD,
        6,
        Point(origin.x + QR_SIZE / 2, origin.y - QR_SIZE - QR_PADDING - 9),
        Alignment.CENTER,
    )


def _signature_block(
    canvas: PageCanvas,
    center_x: float,
    text: str,
    font: Font,
    size: float,
    caption: str,
) -> None:
    canvas.set_fill_color(INK)
    canvas.draw_text(
        text,
        font,
        size,
        Point(center_x, SIGNATURE_TEXT_Y),
        Alignment.CENTER,
        max_width=2 * SIGNATURE_HALF_WIDTH,
    )
    canvas.set_stroke_color(INK)
    canvas.set_line_width(0.75)
    canvas.stroke_line(
        Point(center_x - SIGNATURE_HALF_WIDTH, SIGNATURE_LINE_Y),
        Point(center_x + SIGNATURE_HALF_WIDTH, SIGNATURE_LINE_Y),
    )
    canvas.set_fill_color(MUTED)
    canvas.draw_text(
        caption, Font.SANS, 9, Point(center_x, SIGNATURE_CAPTION_Y), Alignment.CENTER
    )


def draw_signatures(request: CertificateRequest, canvas: PageCanvas) -> None:
    _signature_block(
        canvas,
        SIGNATURE_CENTER_INSET,
        format_completion_date(request.completion_date),
        Font.SERIF,
        14,
        "Date of Completion",
    )
    _signature_block(
        canvas,
        canvas.width - SIGNATURE_CENTER_INSET,
        request.director_name,
        Font.SERIF_ITALIC,
        20,
        "Course Director",
    )


def draw_footer(request: CertificateRequest, canvas: PageCanvas) -> None:
    center_x = canvas.width / 2
    max_width = canvas.width - 2 * FOOTER_SIDE_MARGIN
    lines = (
        (f"Certificate ID: {request.certificate_id}", 8, FOOTER_ID_Y),
        (f"Verify at {request.verification_url}", 8, FOOTER_URL_Y),
        (LEGAL_DISCLAIMER, 6.5, FOOTER_DISCLAIMER_Y),
    )

    canvas.set_fill_color(MUTED)
    for text, size, y in lines:
        canvas.draw_text(
            text,
            Font.SANS,
            size,
            Point(center_x, y),
            Alignment.CENTER,
            max_width=max_width,
        )


def certificate_stages(qr_matrix: Sequence[Sequence[bool]]) -> tuple[Stage, ...]:
    """All nine stages in paint order, with the QR stage bound to `qr_matrix`."""
    return (
        draw_background,
        draw_border,
        draw_corner_ornaments,
        draw_header,
        draw_body,
        draw_seal,
        partial(draw_qr_block, qr_matrix=qr_matrix),
        draw_signatures,
        draw_footer,
    )


def compose_certificate(
    request: CertificateRequest,
    canvas: PageCanvas,
    qr_matrix: Sequence[Sequence[bool]],
) -> None:
    """Paint the whole certificate onto `canvas`.

    Raises:
        QrEncodingError: If `qr_matrix` is empty or not square; raised
            before any stage runs
    """
    validate_qr_matrix(qr_matrix)
    for stage in certificate_stages(qr_matrix):
        stage(request, canvas)
