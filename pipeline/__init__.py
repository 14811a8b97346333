"""
Pipeline orchestration modules.

1. load_tiles() / load_pattern() - read and parse inputs
2. solve_tiles() - assemble (part 1) and scan for the marker (part 2)
3. reconstruct_image() - render the assembled canvas
"""
from .config import SolverConfig
from .tile_pipeline import (
    produce_tiles,
    load_tiles,
    load_pattern
)
from .solver_pipeline import (
    solve_tiles,
    solve_file,
    reconstruct_image,
    render_markers,
    format_part
)
