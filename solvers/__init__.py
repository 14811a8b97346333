"""
Tile assembly and marker scan.

Usage:
    from pipeline import produce_tiles
    from solvers import NeighborGraph, assemble, scan, default_pattern

    tiles = produce_tiles(text)
    assembly = assemble(tiles, NeighborGraph(tiles))
    result = scan(assembly.canvas, default_pattern())
"""
from .transform import Transform, compose, inverse, apply, apply_to_grid
from .neighbors import NeighborGraph
from .assembler import Assembly, Placement, assemble
from .pattern_scan import ScanResult, scan, find_matches, default_pattern, SEA_MONSTER
from .errors import (
    AssemblyError,
    NoCornerError,
    InconsistentError,
    AmbiguousBorderError,
    PatternNotFoundError
)
