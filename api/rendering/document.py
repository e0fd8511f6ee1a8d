"""PDF serialization via ReportLab.

ReportLabCanvas maps PageCanvas primitives onto a ReportLab canvas;
serialize_pdf owns the document lifecycle and turns backend failures into
RenderBackendError.
"""

from collections.abc import Callable, Sequence
from io import BytesIO

from reportlab.lib.colors import HexColor
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas as rl_canvas

from rendering.canvas import (
    PAGE_HEIGHT,
    PAGE_WIDTH,
    Alignment,
    Color,
    Font,
    Matrix,
    PageCanvas,
)
from rendering.errors import CertificateRenderError, RenderBackendError
from rendering.geometry import Point

PDF_CREATOR = "Corsego certificate renderer"

# Failures the ReportLab backend raises for bad state or exhausted resources
_BACKEND_ERRORS = (MemoryError, OSError, ValueError, TypeError, KeyError)


def _hex_color(color: Color) -> HexColor:
    return HexColor(f"#{color.hex}")


class ReportLabCanvas(PageCanvas):
    """PageCanvas backed by `reportlab.pdfgen.canvas.Canvas`."""

    def __init__(self, pdf: rl_canvas.Canvas, width: float, height: float):
        super().__init__(width, height)
        self._pdf = pdf

    def stroke_line(self, p1: Point, p2: Point) -> None:
        self._pdf.line(p1.x, p1.y, p2.x, p2.y)

    def stroke_rect(self, origin: Point, width: float, height: float) -> None:
        self._pdf.rect(origin.x, origin.y, width, height, stroke=1, fill=0)

    def fill_rect(self, origin: Point, width: float, height: float) -> None:
        self._pdf.rect(origin.x, origin.y, width, height, stroke=0, fill=1)

    def stroke_circle(self, center: Point, radius: float) -> None:
        self._pdf.circle(center.x, center.y, radius, stroke=1, fill=0)

    def fill_circle(self, center: Point, radius: float) -> None:
        self._pdf.circle(center.x, center.y, radius, stroke=0, fill=1)

    def fill_polygon(self, points: Sequence[Point]) -> None:
        if len(points) < 3:
            return
        path = self._pdf.beginPath()
        first, *rest = points
        path.moveTo(first.x, first.y)
        for point in rest:
            path.lineTo(point.x, point.y)
        path.close()
        self._pdf.drawPath(path, stroke=0, fill=1)

    def text_width(self, text: str, font: Font, size: float) -> float:
        return stringWidth(text, font.value, size)

    def _apply_fill_color(self, color: Color) -> None:
        self._pdf.setFillColor(_hex_color(color))

    def _apply_stroke_color(self, color: Color) -> None:
        self._pdf.setStrokeColor(_hex_color(color))

    def _apply_line_width(self, width: float) -> None:
        self._pdf.setLineWidth(width)

    def _apply_font(self, font: Font, size: float) -> None:
        self._pdf.setFont(font.value, size)

    def _draw_text(self, text: str, position: Point, alignment: Alignment) -> None:
        if alignment is Alignment.CENTER:
            self._pdf.drawCentredString(position.x, position.y, text)
        elif alignment is Alignment.RIGHT:
            self._pdf.drawRightString(position.x, position.y, text)
        else:
            self._pdf.drawString(position.x, position.y, text)

    def _push_transform(self, matrix: Matrix) -> None:
        self._pdf.saveState()
        self._pdf.transform(*matrix)

    def _pop_transform(self) -> None:
        self._pdf.restoreState()


def serialize_pdf(
    draw: Callable[[PageCanvas], None],
    *,
    title: str,
    author: str,
    subject: str,
    invariant: bool = False,
) -> bytes:
    """Run `draw` against a fresh single-page PDF and return its bytes.

    Args:
        draw: Callback that paints the page
        title: Document title metadata
        author: Document author metadata
        subject: Document subject metadata
        invariant: Use ReportLab's invariant mode (fixed timestamp and
            document id) so identical input gives identical bytes

    Returns:
        Complete PDF document as bytes

    Raises:
        RenderBackendError: If ReportLab fails while drawing or saving
    """
    buffer = BytesIO()
    try:
        pdf = rl_canvas.Canvas(
            buffer,
            pagesize=(PAGE_WIDTH, PAGE_HEIGHT),
            invariant=1 if invariant else 0,
            pageCompression=0,
        )
        pdf.setTitle(title)
        pdf.setAuthor(author)
        pdf.setSubject(subject)
        pdf.setCreator(PDF_CREATOR)

        draw(ReportLabCanvas(pdf, PAGE_WIDTH, PAGE_HEIGHT))

        pdf.showPage()
        pdf.save()
    except CertificateRenderError:
        raise
    except _BACKEND_ERRORS as e:
        raise RenderBackendError(f"PDF backend failed: {e}") from e

    return buffer.getvalue()
