"""Drawing primitives for numpy frame buffers (height, width, 3)."""

from typing import Tuple
import numpy as np
from numpy.typing import NDArray

# Type aliases
Color = Tuple[int, int, int]
Buffer = NDArray[np.uint8]


def new_buffer(width: int, height: int, color: Color = (0, 0, 0)) -> Buffer:
    """Allocate a frame buffer filled with color."""
    buffer = np.zeros((max(1, int(height)), max(1, int(width)), 3), dtype=np.uint8)
    buffer[:, :] = color
    return buffer


def fill(buffer: Buffer, color: Color) -> None:
    """Fill entire buffer with color."""
    buffer[:, :] = color


def draw_rect(
    buffer: Buffer,
    x: float,
    y: float,
    width: float,
    height: float,
    color: Color,
    filled: bool = True,
) -> None:
    """Draw a rectangle, clipped to the buffer.

    Args:
        buffer: Target numpy array (height, width, 3)
        x: Left edge x coordinate
        y: Top edge y coordinate
        width: Rectangle width
        height: Rectangle height
        color: RGB color tuple
        filled: If False, draw a one pixel outline only
    """
    h, w = buffer.shape[:2]

    x1 = max(0, min(int(x), w))
    y1 = max(0, min(int(y), h))
    x2 = max(0, min(int(x + width), w))
    y2 = max(0, min(int(y + height), h))
    if x1 >= x2 or y1 >= y2:
        return

    if filled:
        buffer[y1:y2, x1:x2] = color
    else:
        buffer[y1, x1:x2] = color
        buffer[y2 - 1, x1:x2] = color
        buffer[y1:y2, x1] = color
        buffer[y1:y2, x2 - 1] = color


def draw_circle(
    buffer: Buffer,
    cx: float,
    cy: float,
    radius: float,
    color: Color,
    filled: bool = True,
) -> None:
    """Draw a circle using a distance mask over its bounding box."""
    h, w = buffer.shape[:2]
    x1 = max(0, int(cx - radius))
    y1 = max(0, int(cy - radius))
    x2 = min(w, int(cx + radius) + 1)
    y2 = min(h, int(cy + radius) + 1)
    if x1 >= x2 or y1 >= y2:
        return

    y_indices, x_indices = np.ogrid[y1:y2, x1:x2]
    dist_sq = (x_indices - cx) ** 2 + (y_indices - cy) ** 2
    if filled:
        mask = dist_sq <= radius ** 2
    else:
        mask = (dist_sq <= radius ** 2) & (dist_sq >= (radius - 1.5) ** 2)
    buffer[y1:y2, x1:x2][mask] = color


def draw_hline(buffer: Buffer, y: float, color: Color, thickness: int = 1) -> None:
    """Draw a full-width horizontal line."""
    h = buffer.shape[0]
    y1 = max(0, min(int(y), h))
    y2 = max(0, min(int(y) + thickness, h))
    buffer[y1:y2, :] = color


def dim(color: Color, factor: float) -> Color:
    """Scale a color towards black."""
    factor = max(0.0, min(1.0, factor))
    return (int(color[0] * factor), int(color[1] * factor), int(color[2] * factor))
