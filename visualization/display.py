"""Display utilities for assembled tile images."""

import cv2
import numpy as np
import matplotlib.pyplot as plt
from pathlib import Path
from typing import List, Optional

from core.image_utils import canvas_to_image
from features.tiles import Tile
from pipeline.solver_pipeline import reconstruct_image, render_markers


def _assembly_figure(assembly, scan_result=None, pattern=None, figsize: tuple = (12, 6)):
    panels = [("Assembled", reconstruct_image(assembly, scale=4, show_ids=True))]
    if scan_result is not None and pattern is not None:
        title = (f"Markers: {scan_result.matches} "
                 f"(rotation {scan_result.transform.rotation}, "
                 f"reflected {scan_result.transform.reflection})")
        panels.append((title, render_markers(assembly, scan_result, pattern, scale=4)))

    fig, axes = plt.subplots(1, len(panels), figsize=figsize)
    axes = np.atleast_1d(axes)
    for ax, (title, image) in zip(axes, panels):
        ax.imshow(cv2.cvtColor(image, cv2.COLOR_BGR2RGB))
        ax.set_title(title)
        ax.axis('off')

    plt.tight_layout()
    return fig


def display_assembly(assembly, scan_result=None, pattern=None, figsize: tuple = (12, 6)):
    """
    Display the assembled canvas with tile ids, and the marker view if available.

    Args:
        assembly: Assembly from solvers.assemble
        scan_result: Optional ScanResult from solvers.scan
        pattern: Marker pattern used for the scan
        figsize: Figure size
    """
    _assembly_figure(assembly, scan_result, pattern, figsize)
    plt.show()


def save_assembly_figure(assembly, output_path: str, scan_result=None, pattern=None,
                         dpi: int = 150):
    """Save the display_assembly figure to a file."""
    fig = _assembly_figure(assembly, scan_result, pattern)

    output_dir = Path(output_path).parent
    if output_dir and str(output_dir) != '.':
        output_dir.mkdir(parents=True, exist_ok=True)

    fig.savefig(output_path, dpi=dpi, bbox_inches='tight')
    plt.close(fig)


def display_tiles(tiles: List[Tile], columns: Optional[int] = None,
                  figsize_per_tile: tuple = (2, 2)):
    """
    Display raw tiles (with borders) in a grid, titled by id.

    Args:
        tiles: Tiles to display
        columns: Tiles per row (square-ish layout if None)
        figsize_per_tile: Figure size per tile
    """
    if columns is None:
        columns = int(np.ceil(np.sqrt(len(tiles))))
    rows = int(np.ceil(len(tiles) / columns))

    fig, axes = plt.subplots(rows, columns, figsize=(figsize_per_tile[0] * columns,
                                                     figsize_per_tile[1] * rows))
    axes = np.atleast_1d(axes).reshape(rows, columns)

    for idx, ax in enumerate(axes.flat):
        ax.axis('off')
        if idx >= len(tiles):
            continue
        image = canvas_to_image(tiles[idx].pixels, scale=8)
        ax.imshow(cv2.cvtColor(image, cv2.COLOR_BGR2RGB))
        ax.set_title(f"Tile {tiles[idx].id}", fontsize=8)

    plt.tight_layout()
    plt.show()
