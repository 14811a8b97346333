"""
Solver Pipeline

Orchestrates the two answers for a tile set:
1. Build neighbor graph -> assemble -> product of the four corner ids
2. Scan the assembled canvas for the marker -> adjusted active-pixel count

Each part is timed separately. A missing marker leaves part 2 unavailable
(None) instead of aborting the run.
"""

import time
import cv2
import numpy as np
from typing import Dict, List, Optional, Tuple

from core.grid import Grid
from core.image_utils import canvas_to_image, highlight_matches, save_image
from features.tiles import Tile
from solvers.assembler import Assembly, assemble
from solvers.errors import PatternNotFoundError
from solvers.neighbors import NeighborGraph
from solvers.pattern_scan import ScanResult, scan
from solvers.transform import apply_to_grid
from .config import SolverConfig
from .tile_pipeline import load_pattern, load_tiles


def solve_part_1(tiles: List[Tile], config: SolverConfig) -> Tuple[int, Assembly]:
    """Assemble the tiles and multiply the ids at the four corners."""
    graph = NeighborGraph(tiles, verbose=config.verbose)
    assembly = assemble(tiles, graph=graph, traversal=config.traversal,
                        seed=config.seed, verbose=config.verbose)
    return assembly.corner_product(), assembly


def solve_part_2(assembly: Assembly, pattern: Grid,
                 config: SolverConfig) -> Tuple[Optional[int], Optional[ScanResult]]:
    """Scan for the marker. Returns (None, None) when it is not found."""
    try:
        result = scan(assembly.canvas, pattern, verbose=config.verbose)
    except PatternNotFoundError as e:
        if config.verbose:
            print(f"  {e}")
        return None, None

    if config.verbose:
        print(f"  Found {result.matches} marker(s) at rotation={result.transform.rotation} "
              f"reflection={result.transform.reflection}")
    return result.roughness, result


def reconstruct_image(assembly: Assembly, scale: int = 4, show_ids: bool = False) -> np.ndarray:
    """
    Render the assembled canvas in assembly orientation.

    Args:
        assembly: Assembled tile set
        scale: Output pixels per canvas cell
        show_ids: Overlay each tile's id at its centre

    Returns:
        BGR image
    """
    output = canvas_to_image(assembly.canvas, scale=scale)
    if not show_ids:
        return output

    tile_px = assembly.inner_size * scale
    font = cv2.FONT_HERSHEY_SIMPLEX
    font_scale = tile_px / 80.0
    thickness = max(1, int(font_scale * 2))

    for x, y in assembly.ids.enumerate():
        text = str(int(assembly.ids.get(x, y)))
        (text_w, text_h), _ = cv2.getTextSize(text, font, font_scale, thickness)
        text_x = x * tile_px + (tile_px - text_w) // 2
        text_y = y * tile_px + (tile_px + text_h) // 2

        cv2.putText(output, text, (text_x, text_y), font, font_scale, (0, 0, 0), thickness + 2)
        cv2.putText(output, text, (text_x, text_y), font, font_scale, (255, 255, 255), thickness)

    return output


def render_markers(assembly: Assembly, scan_result: ScanResult, pattern: Grid,
                   scale: int = 4) -> np.ndarray:
    """Render the canvas in the orientation the marker was found, markers highlighted."""
    oriented = apply_to_grid(scan_result.transform, assembly.canvas.copy())
    image = canvas_to_image(oriented, scale=scale)
    return highlight_matches(image, pattern, scan_result.offsets, scale=scale)


def solve_tiles(tiles: List[Tile], pattern: Grid, config: Optional[SolverConfig] = None) -> Dict:
    """
    Solve both parts for an already parsed tile set.

    Returns:
        Dict with 'part_1', 'part_2' (None if the marker is missing),
        'elapsed_1', 'elapsed_2', 'assembly' and 'scan'

    Raises:
        AssemblyError: If the tiles cannot be assembled
    """
    if config is None:
        config = SolverConfig()

    if config.verbose:
        print("\n" + "=" * 60)
        print("PART 1: Assembly")
        print("=" * 60)

    start = time.time()
    part_1, assembly = solve_part_1(tiles, config)
    elapsed_1 = time.time() - start

    if config.verbose:
        print("\n" + "=" * 60)
        print("PART 2: Marker Scan")
        print("=" * 60)

    start = time.time()
    part_2, scan_result = solve_part_2(assembly, pattern, config)
    elapsed_2 = time.time() - start

    if config.output_path:
        if scan_result is not None and not config.show_ids:
            image = render_markers(assembly, scan_result, pattern, scale=config.pixel_scale)
        else:
            image = reconstruct_image(assembly, scale=config.pixel_scale, show_ids=config.show_ids)
        save_image(image, config.output_path)
        if config.verbose:
            print(f"\nSaved: {config.output_path}")

    return {
        'part_1': part_1,
        'part_2': part_2,
        'elapsed_1': elapsed_1,
        'elapsed_2': elapsed_2,
        'assembly': assembly,
        'scan': scan_result,
    }


def solve_file(input_path: str, config: Optional[SolverConfig] = None) -> Dict:
    """Complete pipeline: load tiles and pattern -> assemble -> scan."""
    if config is None:
        config = SolverConfig()

    tiles = load_tiles(input_path, verbose=config.verbose)
    pattern = load_pattern(config.pattern_path, config.pattern_lines)
    return solve_tiles(tiles, pattern, config)


def format_part(number: int, solution, elapsed: float) -> str:
    """Two-line report of one answer and the time it took."""
    if solution is None:
        solution = "unavailable"
    return f"Part {number}:\n  Solution: {solution}\n  Elapsed:  {elapsed:.6f} seconds"
