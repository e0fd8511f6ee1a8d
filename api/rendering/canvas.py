"""Backend-agnostic drawing surface for a single certificate page.

PageCanvas owns the page bounds and the "current style" (fill, stroke, line
width, font). Concrete backends implement the drawing primitives; the base
class keeps track of style so a scoped transform can always put it back.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass, field, replace
from enum import Enum

from rendering.geometry import Point, rotation_about

_MM = 72 / 25.4

# A4 landscape in points (297mm x 210mm)
PAGE_WIDTH = 297 * _MM
PAGE_HEIGHT = 210 * _MM

Matrix = tuple[float, float, float, float, float, float]


@dataclass(frozen=True)
class Color:
    """RGB color stored as a lowercase 6-digit hex triplet."""

    hex: str

    def __post_init__(self) -> None:
        value = self.hex.lstrip("#").lower()
        if len(value) != 6 or any(ch not in "0123456789abcdef" for ch in value):
            raise ValueError(f"Invalid hex color: {self.hex!r}")
        object.__setattr__(self, "hex", value)

    @classmethod
    def from_hex(cls, value: str) -> "Color":
        return cls(value)

    @property
    def rgb(self) -> tuple[float, float, float]:
        return (
            int(self.hex[0:2], 16) / 255,
            int(self.hex[2:4], 16) / 255,
            int(self.hex[4:6], 16) / 255,
        )


BLACK = Color("000000")


class Font(Enum):
    """Fixed font catalog, mapped to PDF base-14 names (never embedded)."""

    SERIF = "Times-Roman"
    SERIF_ITALIC = "Times-Italic"
    SERIF_BOLD = "Times-Bold"
    SERIF_BOLD_ITALIC = "Times-BoldItalic"
    SANS = "Helvetica"
    SANS_BOLD = "Helvetica-Bold"


class Alignment(Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


@dataclass(frozen=True)
class CanvasStyle:
    fill_color: Color = field(default=BLACK)
    stroke_color: Color = field(default=BLACK)
    line_width: float = 1.0
    font: Font = Font.SANS
    font_size: float = 12.0


class PageCanvas(ABC):
    """Stateful drawing surface bound to one fixed-size page."""

    def __init__(self, width: float = PAGE_WIDTH, height: float = PAGE_HEIGHT):
        self.width = width
        self.height = height
        self._style = CanvasStyle()
        self._saved_styles: list[CanvasStyle] = []

    @property
    def fill_color(self) -> Color:
        return self._style.fill_color

    @property
    def stroke_color(self) -> Color:
        return self._style.stroke_color

    @property
    def line_width(self) -> float:
        return self._style.line_width

    @property
    def font(self) -> Font:
        return self._style.font

    @property
    def font_size(self) -> float:
        return self._style.font_size

    @property
    def depth(self) -> int:
        """Number of scoped transforms currently open."""
        return len(self._saved_styles)

    @property
    def center(self) -> Point:
        return Point(self.width / 2, self.height / 2)

    # --- Style ---

    def set_fill_color(self, color: Color) -> None:
        self._style = replace(self._style, fill_color=color)
        self._apply_fill_color(color)

    def set_stroke_color(self, color: Color) -> None:
        self._style = replace(self._style, stroke_color=color)
        self._apply_stroke_color(color)

    def set_line_width(self, width: float) -> None:
        self._style = replace(self._style, line_width=width)
        self._apply_line_width(width)

    # --- Text ---

    def fitted_font_size(
        self, text: str, font: Font, size: float, max_width: float
    ) -> float:
        """Largest size up to `size` at which `text` is at most `max_width` wide."""
        width = self.text_width(text, font, size)
        if width <= max_width:
            return size
        return size * max_width / width

    def draw_text(
        self,
        text: str,
        font: Font,
        size: float,
        position: Point,
        alignment: Alignment = Alignment.LEFT,
        max_width: float | None = None,
    ) -> None:
        """Draw one line of text with its baseline at `position`.

        `alignment` decides whether `position` is the left edge, the center
        or the right edge of the line. With `max_width`, the size is scaled
        down until the line fits.
        """
        if max_width is not None:
            size = self.fitted_font_size(text, font, size, max_width)
        if (font, size) != (self._style.font, self._style.font_size):
            self._style = replace(self._style, font=font, font_size=size)
            self._apply_font(font, size)
        self._draw_text(text, position, alignment)

    # --- Transforms ---

    @contextmanager
    def scoped_transform(
        self, rotation_degrees: float, pivot: Point
    ) -> Iterator["PageCanvas"]:
        """Rotate around `pivot` for the duration of the `with` block.

        The prior transform and style are restored on every exit path,
        including when the block raises.
        """
        matrix = rotation_about(rotation_degrees, pivot)
        self._push_transform(matrix)
        self._saved_styles.append(self._style)
        try:
            yield self
        finally:
            self._style = self._saved_styles.pop()
            self._pop_transform()

    # --- Backend primitives ---

    @abstractmethod
    def text_width(self, text: str, font: Font, size: float) -> float:
        """Advance width of `text` in points."""

    @abstractmethod
    def stroke_line(self, p1: Point, p2: Point) -> None: ...

    @abstractmethod
    def stroke_rect(self, origin: Point, width: float, height: float) -> None:
        """Outline a rectangle whose bottom-left corner is `origin`."""

    @abstractmethod
    def fill_rect(self, origin: Point, width: float, height: float) -> None:
        """Fill a rectangle whose bottom-left corner is `origin`."""

    @abstractmethod
    def stroke_circle(self, center: Point, radius: float) -> None: ...

    @abstractmethod
    def fill_circle(self, center: Point, radius: float) -> None: ...

    @abstractmethod
    def fill_polygon(self, points: Sequence[Point]) -> None:
        """Fill a closed polygon; fewer than three points draws nothing."""

    @abstractmethod
    def _apply_fill_color(self, color: Color) -> None: ...

    @abstractmethod
    def _apply_stroke_color(self, color: Color) -> None: ...

    @abstractmethod
    def _apply_line_width(self, width: float) -> None: ...

    @abstractmethod
    def _apply_font(self, font: Font, size: float) -> None: ...

    @abstractmethod
    def _draw_text(self, text: str, position: Point, alignment: Alignment) -> None: ...

    @abstractmethod
    def _push_transform(self, matrix: Matrix) -> None:
        """Save backend graphics state and concatenate `matrix`."""

    @abstractmethod
    def _pop_transform(self) -> None:
        """Restore the backend graphics state saved by `_push_transform`."""


def stroke_nested(
    canvas: PageCanvas,
    layers: Iterable[tuple[float, float]],
    shape: Callable[[float], None],
) -> None:
    """Stroke one shape per (offset, line_width) layer.

    `shape` receives the offset and issues the stroke call; the border uses
    it for inset rectangles and the seal for concentric rings.
    """
    for offset, line_width in layers:
        canvas.set_line_width(line_width)
        shape(offset)
