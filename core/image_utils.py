"""Low-level image operations for assembled canvases and marker bitmaps."""

import cv2
import numpy as np
from pathlib import Path
from PIL import Image
from typing import Iterable, Tuple

from .grid import Grid


ON_COLOR = (235, 235, 235)
OFF_COLOR = (60, 40, 20)
MARKER_COLOR = (0, 200, 255)


def canvas_to_image(canvas: Grid, scale: int = 4,
                    on_color: Tuple[int, int, int] = ON_COLOR,
                    off_color: Tuple[int, int, int] = OFF_COLOR) -> np.ndarray:
    """
    Render a boolean grid as a BGR image.

    Args:
        canvas: Boolean grid
        scale: Output pixels per grid cell
        on_color: BGR colour for set cells
        off_color: BGR colour for clear cells

    Returns:
        uint8 array of shape (height * scale, width * scale, 3)
    """
    if scale < 1:
        raise ValueError(f"Scale must be >= 1, got {scale}")

    cells = canvas.values.astype(bool)
    image = np.empty(cells.shape + (3,), dtype=np.uint8)
    image[cells] = on_color
    image[~cells] = off_color

    if scale == 1:
        return image
    return cv2.resize(image, (canvas.width * scale, canvas.height * scale),
                      interpolation=cv2.INTER_NEAREST)


def highlight_matches(image: np.ndarray, pattern: Grid, offsets: Iterable[Tuple[int, int]],
                      scale: int = 4, color: Tuple[int, int, int] = MARKER_COLOR) -> np.ndarray:
    """Paint the on-cells of pattern at each (x, y) offset, in place."""
    for ox, oy in offsets:
        for px, py in pattern.enumerate():
            if not pattern.get(px, py):
                continue
            x1, y1 = (ox + px) * scale, (oy + py) * scale
            image[y1:y1 + scale, x1:x1 + scale] = color
    return image


def save_image(image: np.ndarray, output_path: str) -> None:
    """Write image to disk, creating the parent directory if needed."""
    output_dir = Path(output_path).parent
    if output_dir and str(output_dir) != '.':
        output_dir.mkdir(parents=True, exist_ok=True)
    if not cv2.imwrite(str(output_path), image):
        raise ValueError(f"Could not write image: {output_path}")


def load_pattern_image(file_path: str, threshold: int = 128) -> Grid:
    """
    Load a marker pattern from a bitmap. Dark pixels become on cells.

    Raises:
        ValueError: If the file cannot be read or has no dark pixels
    """
    try:
        pic = Image.open(file_path).convert('L')
    except OSError as e:
        raise ValueError(f"Could not load pattern image {file_path}: {e}") from e

    cells = np.array(pic) < threshold
    if not cells.any():
        raise ValueError(f"Pattern image {file_path} has no dark pixels")
    return Grid.from_array(cells)
