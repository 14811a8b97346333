"""
Tile Loading Pipeline

Reads the inputs the solver needs:
- tiles: parsed from "Tile <id>:" blocks, with edge codes precomputed
- pattern: the marker to scan for, from text rows or a bitmap
"""

from pathlib import Path
from typing import List, Optional

from core.grid import Grid
from core.image_utils import load_pattern_image
from core.parsing import parse_pattern, parse_tile_blocks
from features.edges import SIDE_NAMES
from features.tiles import Tile, create_tiles


IMAGE_SUFFIXES = {'.png', '.bmp', '.jpg', '.jpeg', '.gif', '.tif', '.tiff'}


def produce_tiles(text: str) -> List[Tile]:
    """Parse tile text into tiles. Raises ParseError on malformed input."""
    return create_tiles(parse_tile_blocks(text))


def load_tiles(input_path: str, verbose: bool = True) -> List[Tile]:
    """
    Load and parse a tile file.

    Args:
        input_path: Path to the tile text file
        verbose: Print progress info

    Returns:
        tiles: Parsed tiles in file order

    Raises:
        ValueError: If the file cannot be read (ParseError if malformed)
    """
    path = Path(input_path)
    try:
        text = path.read_text()
    except OSError as e:
        raise ValueError(f"Could not read tiles: {input_path}: {e}") from e

    tiles = produce_tiles(text)

    if verbose:
        size = tiles[0].border_size
        print(f"Loaded: {input_path}")
        print(f"Tiles: {len(tiles)} ({size}x{size}, interior {tiles[0].inner_size}x{tiles[0].inner_size})")
        sample = tiles[0]
        codes = ', '.join(f"{name}={code}" for name, code in zip(SIDE_NAMES, sample.sides))
        print(f"  - tile {sample.id} edge codes: {codes}")

    return tiles


def load_pattern(pattern_path: Optional[str] = None, pattern_lines=None) -> Grid:
    """
    Load the marker pattern from a file, or parse the given rows.

    Bitmap files are thresholded (dark = on); anything else is read as text.
    """
    if pattern_path is None:
        if pattern_lines is None:
            raise ValueError("Either pattern_path or pattern_lines is required")
        return parse_pattern(pattern_lines)

    path = Path(pattern_path)
    if path.suffix.lower() in IMAGE_SUFFIXES:
        return load_pattern_image(str(path))
    try:
        text = path.read_text()
    except OSError as e:
        raise ValueError(f"Could not read pattern: {pattern_path}: {e}") from e
    return parse_pattern(text)
