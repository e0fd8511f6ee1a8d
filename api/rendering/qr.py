"""QR verification code: encoding and vector module rendering.

The matrix comes from the `qrcode` library and is drawn as one filled square
per dark module, so the code stays sharp at any zoom level.
"""

from collections.abc import Sequence
from enum import Enum

import qrcode
from qrcode.exceptions import DataOverflowError

from rendering.canvas import PageCanvas
from rendering.errors import QrEncodingError
from rendering.geometry import Point

QRMatrix = tuple[tuple[bool, ...], ...]


class ErrorCorrectionLevel(Enum):
    L = qrcode.constants.ERROR_CORRECT_L
    M = qrcode.constants.ERROR_CORRECT_M
    Q = qrcode.constants.ERROR_CORRECT_Q
    H = qrcode.constants.ERROR_CORRECT_H


def encode_qr_matrix(
    data: str, level: ErrorCorrectionLevel = ErrorCorrectionLevel.M
) -> QRMatrix:
    """Encode `data` into a square module matrix without a quiet zone.

    Raises:
        QrEncodingError: If the data exceeds the capacity for `level`
    """
    qr = qrcode.QRCode(version=None, error_correction=level.value, border=0)
    qr.add_data(data)
    try:
        qr.make(fit=True)
    except (DataOverflowError, ValueError) as e:
        # Newer qrcode releases report overflow as an invalid version 41
        raise QrEncodingError(
            f"Verification URL too long for QR level {level.name} "
            f"({len(data)} characters)"
        ) from e

    return tuple(tuple(bool(cell) for cell in row) for row in qr.get_matrix())


def validate_qr_matrix(matrix: Sequence[Sequence[bool]]) -> int:
    """Return the matrix dimension, or raise if it is empty or not square."""
    dimension = len(matrix)
    if dimension == 0:
        raise QrEncodingError("QR matrix is empty")
    for row in matrix:
        if len(row) != dimension:
            raise QrEncodingError(
                f"QR matrix is not square: {dimension} rows, row of {len(row)}"
            )
    return dimension


def module_size(matrix: Sequence[Sequence[bool]], size: float) -> float:
    """Side of one module when the whole code spans `size` points."""
    return size / validate_qr_matrix(matrix)


def module_anchor(origin: Point, row: int, col: int, module: float) -> Point:
    """Top-left corner of module (row, col).

    Encoder rows grow downward while page-space y grows upward, hence the
    subtraction on the row axis.
    """
    return Point(origin.x + col * module, origin.y - row * module)


def draw_qr_modules(
    canvas: PageCanvas,
    matrix: Sequence[Sequence[bool]],
    origin: Point,
    size: float,
    padding: float | None = None,
) -> int:
    """Fill every dark module of `matrix` inside the square at `origin`.

    Args:
        canvas: Surface to draw on, using its current fill/stroke style
        matrix: Square boolean matrix, True for dark modules
        origin: Top-left corner of the code area in page-space
        size: Side length of the code area in points
        padding: When set, stroke a frame this far outside the code area

    Returns:
        Number of filled modules

    Raises:
        QrEncodingError: If the matrix is empty or not square (nothing drawn)
    """
    module = module_size(matrix, size)

    filled = 0
    for row_index, row in enumerate(matrix):
        for col_index, dark in enumerate(row):
            if not dark:
                continue
            anchor = module_anchor(origin, row_index, col_index, module)
            canvas.fill_rect(Point(anchor.x, anchor.y - module), module, module)
            filled += 1

    if padding is not None:
        canvas.stroke_rect(
            Point(origin.x - padding, origin.y - size - padding),
            size + 2 * padding,
            size + 2 * padding,
        )

    return filled
