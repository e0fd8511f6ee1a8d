"""Pure geometry for the certificate ornaments.

Everything here returns plain points and segments in page-space (origin
bottom-left, y up) and has no knowledge of any drawing backend, so the
motifs can be unit tested on their own.

Angles are accepted in degrees and converted to radians internally.
"""

import math
from typing import NamedTuple


class Point(NamedTuple):
    x: float
    y: float


class Segment(NamedTuple):
    start: Point
    end: Point


class CornerFlourish(NamedTuple):
    """Two arms meeting at the corner anchor plus a dot between them."""

    segments: tuple[Segment, Segment]
    dot: Point


class Divider(NamedTuple):
    left: Segment
    right: Segment
    diamond: list[Point]


class SealGeometry(NamedTuple):
    serrations: list[Segment]
    dots: list[Point]
    ring_radii: tuple[float, float, float, float]
    rotation_deg: float


# (x sign, y sign) pointing from each corner toward the page interior.
# 0 top-left, 1 top-right, 2 bottom-right, 3 bottom-left
_CORNER_DIRECTIONS: dict[int, tuple[int, int]] = {
    0: (1, -1),
    1: (-1, -1),
    2: (-1, 1),
    3: (1, 1),
}

SERRATION_INNER_OFFSET = 3.0
SERRATION_OUTER_OFFSET = 2.0
SECOND_RING_OFFSET = 6.0
INNERMOST_RING_OFFSET = 4.0


def polar_point(center: Point, radius: float, angle_deg: float) -> Point:
    """Point at `radius` from `center`, measured counter-clockwise from +x."""
    theta = math.radians(angle_deg)
    return Point(
        center.x + radius * math.cos(theta), center.y + radius * math.sin(theta)
    )


def rotation_about(
    degrees: float, pivot: Point
) -> tuple[float, float, float, float, float, float]:
    """Affine matrix rotating by `degrees` (counter-clockwise) around `pivot`.

    Composes translate(pivot) * rotate(degrees) * translate(-pivot) and
    returns the (a, b, c, d, e, f) form used by the PDF `cm` operator.
    """
    theta = math.radians(degrees)
    cos_t = math.cos(theta)
    sin_t = math.sin(theta)
    e = pivot.x - cos_t * pivot.x + sin_t * pivot.y
    f = pivot.y - sin_t * pivot.x - cos_t * pivot.y
    return (cos_t, sin_t, -sin_t, cos_t, e, f)


def corner_anchor(
    corner_index: int, width: float, height: float, inset: float
) -> Point:
    """Anchor of a page corner moved `inset` points toward the interior."""
    if corner_index not in _CORNER_DIRECTIONS:
        raise ValueError(f"corner_index must be 0..3, got {corner_index}")
    sx, sy = _CORNER_DIRECTIONS[corner_index]
    x = inset if sx > 0 else width - inset
    y = inset if sy > 0 else height - inset
    return Point(x, y)


def corner_flourish_points(
    corner_index: int, origin: Point, size: float
) -> CornerFlourish:
    """Corner ornament: a horizontal and a vertical arm plus an inner dot.

    The arms start at `origin` and run `size` points toward the page
    interior, so the four corners mirror each other about the page center.
    """
    if corner_index not in _CORNER_DIRECTIONS:
        raise ValueError(f"corner_index must be 0..3, got {corner_index}")
    sx, sy = _CORNER_DIRECTIONS[corner_index]

    horizontal = Segment(origin, Point(origin.x + sx * size, origin.y))
    vertical = Segment(origin, Point(origin.x, origin.y + sy * size))
    dot = Point(origin.x + sx * size * 0.25, origin.y + sy * size * 0.25)
    return CornerFlourish(segments=(horizontal, vertical), dot=dot)


def star_points(
    center: Point,
    outer_radius: float,
    point_count: int = 5,
    inner_ratio: float = 0.4,
) -> list[Point]:
    """Vertices of a star polygon, alternating outer and inner radius.

    Outer vertex i sits at i * (360 / point_count) - 90 degrees, measured
    clockwise, which puts the first tip straight up. Inner vertices are
    offset by half a step.
    """
    if point_count <= 0:
        return []

    step = 360.0 / point_count
    inner_radius = outer_radius * inner_ratio
    points: list[Point] = []
    for i in range(point_count):
        outer_angle = i * step - 90.0
        inner_angle = outer_angle + step / 2
        points.append(polar_point(center, outer_radius, -outer_angle))
        points.append(polar_point(center, inner_radius, -inner_angle))
    return points


def decorative_divider_geometry(
    center: Point, half_width: float = 180.0, gap: float = 20.0
) -> Divider:
    """Two rules flanking a small diamond centered on `center`."""
    left = Segment(
        Point(center.x - half_width, center.y), Point(center.x - gap, center.y)
    )
    right = Segment(
        Point(center.x + gap, center.y), Point(center.x + half_width, center.y)
    )

    r = gap / 4
    diamond = [
        Point(center.x, center.y + r),
        Point(center.x + r, center.y),
        Point(center.x, center.y - r),
        Point(center.x - r, center.y),
    ]
    return Divider(left=left, right=right, diamond=diamond)


def seal_ring_geometry(
    center: Point,
    outer_radius: float,
    inner_radius: float,
    serration_count: int = 24,
    dot_count: int = 16,
    rotation_deg: float = -12.0,
) -> SealGeometry:
    """Serrations, dots and ring radii for the round seal."""
    serrations: list[Segment] = []
    if serration_count > 0:
        step = 360.0 / serration_count
        for i in range(serration_count):
            angle = rotation_deg + i * step
            serrations.append(
                Segment(
                    polar_point(center, outer_radius - SERRATION_INNER_OFFSET, angle),
                    polar_point(center, outer_radius + SERRATION_OUTER_OFFSET, angle),
                )
            )

    dots: list[Point] = []
    if dot_count > 0:
        step = 360.0 / dot_count
        dot_radius = (outer_radius - SECOND_RING_OFFSET + inner_radius) / 2
        for i in range(dot_count):
            dots.append(polar_point(center, dot_radius, rotation_deg + i * step))

    ring_radii = (
        outer_radius,
        outer_radius - SECOND_RING_OFFSET,
        inner_radius,
        inner_radius - INNERMOST_RING_OFFSET,
    )
    return SealGeometry(
        serrations=serrations,
        dots=dots,
        ring_radii=ring_radii,
        rotation_deg=rotation_deg,
    )
